"""
Unit tests for NSIDs in social.graze.atsyntax.syntax.nsid

Tests cover parsing, construction from authority and name, the derived
accessors and the validation rules.
"""

from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from social.graze.atsyntax.errors import Grammar, InvalidNsidError
from social.graze.atsyntax.syntax.nsid import (
    NSID,
    ensure_valid_nsid,
    is_valid_nsid,
)

NSID_317 = ".".join(["a" * 63, "b" * 63, "c" * 63, "d" * 63, "e" * 61])
NSID_318 = ".".join(["a" * 63, "b" * 63, "c" * 63, "d" * 63, "e" * 62])

VALID_NSIDS = [
    "com.example.foo",
    "com.example.fooBar",
    "net.users.bob.ping",
    "a.b.c",
    "m.xn--masekowski-d0b.pl",
    "one.two.three",
    "one.two.three.four-and.FiVe",
    "one.2.three",
    "a-0.b-1.c",
    "a0.b1.cc",
    "cn.8.lex.stuff",
    "test.12345.record",
    "a01.thing.record",
    "a.0.c",
    "xn--fiqa61au8b7zsevnm8ak20mc4a87e.record.two",
    "com.atproto.repo.createRecord",
    "app.bsky.feed.post",
    NSID_317,
]

INVALID_NSIDS = [
    "com.example.foo.*",
    "com.example.foo.blah*",
    "com.exa💩ple.thing",
    "com.example",
    "com",
    "com.example.3",
    "com.example.foo-bar",
    "com.example.",
    ".com.example.foo",
    "com..example.foo",
    "com.-example.foo",
    "com.example-.foo",
    "1com.example.foo",
    "com.example.foo_bar",
    "com.example.foo bar",
    "com.example.foo/bar",
    "a" * 64 + ".example.foo",
    NSID_318,
]


class TestEnsureValidNsid:
    """Test suite for ensure_valid_nsid."""

    @pytest.mark.parametrize("nsid", VALID_NSIDS)
    def test_valid_nsids(self, nsid):
        """Test syntactically valid NSIDs are accepted."""
        ensure_valid_nsid(nsid)

    @pytest.mark.parametrize("nsid", INVALID_NSIDS)
    def test_invalid_nsids(self, nsid):
        """Test syntactically invalid NSIDs are rejected."""
        with pytest.raises(InvalidNsidError):
            ensure_valid_nsid(nsid)

    def test_length_boundary(self):
        """Test 317 characters pass and 318 fail on length."""
        assert len(NSID_317) == 317
        assert len(NSID_318) == 318
        ensure_valid_nsid(NSID_317)
        with pytest.raises(InvalidNsidError, match="too long"):
            ensure_valid_nsid(NSID_318)

    @pytest.mark.parametrize(
        "nsid,reason",
        [
            ("com.example.foo_bar", "Disallowed characters"),
            ("com.example", "at least three parts"),
            ("com..example.foo", "cannot be empty"),
            ("a" * 64 + ".example.foo", "part too long"),
            ("com.-example.foo", "start or end with a hyphen"),
            ("1com.example.foo", "first part may not start with a digit"),
            ("com.example.3foo", "name part must be only letters and digits"),
            ("com.example.foo-bar", "name part must be only letters and digits"),
        ],
    )
    def test_failure_reasons(self, nsid, reason):
        """Test each rule reports its own reason."""
        with pytest.raises(InvalidNsidError, match=reason):
            ensure_valid_nsid(nsid)


class TestNsidParse:
    """Test suite for NSID.parse and the derived accessors."""

    def test_parse_segments(self):
        """Test parsing splits the NSID into segments."""
        nsid = NSID.parse("com.example.foo")
        assert nsid.segments == ("com", "example", "foo")

    def test_authority_and_name(self):
        """Test the authority is returned in domain order."""
        nsid = NSID.parse("app.bsky.feed.post")
        assert nsid.authority == "feed.bsky.app"
        assert nsid.name == "post"

    @pytest.mark.parametrize("value", VALID_NSIDS)
    def test_round_trip(self, value):
        """Test str() of a parsed NSID reproduces the input."""
        assert str(NSID.parse(value)) == value

    def test_parse_invalid(self):
        """Test parsing an invalid NSID raises InvalidNsidError."""
        with pytest.raises(InvalidNsidError) as exc_info:
            NSID.parse("com.example")
        assert exc_info.value.grammar == Grammar.nsid

    def test_empty_segments(self):
        """Test the accessors tolerate an NSID with no segments."""
        nsid = NSID()
        assert nsid.name is None
        assert nsid.authority == ""
        assert str(nsid) == ""

    def test_immutable(self):
        """Test NSID values cannot be mutated."""
        nsid = NSID.parse("com.example.foo")
        with pytest.raises(FrozenInstanceError):
            nsid.segments = ("a", "b", "c")

    def test_equality(self):
        """Test NSIDs compare by segments."""
        assert NSID.parse("com.example.foo") == NSID.parse("com.example.foo")
        assert NSID.parse("com.example.foo") != NSID.parse("com.example.bar")


class TestNsidCreate:
    """Test suite for NSID.create."""

    @pytest.mark.parametrize(
        "authority,name,expected",
        [
            ("example.com", "foo", "com.example.foo"),
            ("bsky.app", "getProfile", "app.bsky.getProfile"),
            ("feed.bsky.app", "post", "app.bsky.feed.post"),
            ("bob.users.net", "ping2", "net.users.bob.ping2"),
        ],
    )
    def test_create(self, authority, name, expected):
        """Test create reverses the authority and appends the name."""
        nsid = NSID.create(authority, name)
        assert str(nsid) == expected
        assert nsid.authority == authority
        assert nsid.name == name

    @pytest.mark.parametrize(
        "authority,name",
        [
            ("example.com", "3foo"),
            ("example.com", "foo-bar"),
            ("com", "foo"),
            ("example.1com", "foo"),
            ("example.com", ""),
        ],
    )
    def test_create_invalid(self, authority, name):
        """Test create fails when the joined string is not a valid NSID."""
        with pytest.raises(InvalidNsidError):
            NSID.create(authority, name)


class TestIsValidNsid:
    """Test suite for NSID.is_valid and is_valid_nsid."""

    def test_true_and_false(self):
        """Test the boolean wrappers agree with parsing."""
        assert NSID.is_valid("com.example.foo") is True
        assert NSID.is_valid("com.example") is False
        assert is_valid_nsid("com.example.foo") is True
        assert is_valid_nsid("com.example.3") is False

    def test_unexpected_error_propagates(self, explode, capture_exception):
        """Test errors other than InvalidNsidError are not treated as invalid."""
        with patch(
            "social.graze.atsyntax.syntax.nsid.ensure_valid_nsid", new=explode
        ):
            with pytest.raises(RuntimeError):
                NSID.is_valid("com.example.foo")
        capture_exception.assert_called_once()
