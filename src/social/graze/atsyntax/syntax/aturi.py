"""AT-URI value type.

``AtUri`` splits an AT-URI into host, path, query and fragment so callers can
read or swap the collection and record key and render the result again. It
is a loose structural parser: the host, collection and record key are not
checked against their grammars, neither on parse nor on mutation. Use
``social.graze.atsyntax.syntax.aturi_validation`` to accept or reject input.
"""

import re
from typing import List, Optional, Tuple
from urllib.parse import quote_plus, unquote_plus, urlencode

from social.graze.atsyntax.errors import InvalidUriError

ATP_URI_REGEX = re.compile(
    r"^(at://)?((?:did:[a-z0-9:%-]+)|(?:[a-z0-9][a-z0-9.:-]*))"
    r"(/[^?#\s]*)?(\?[^#\s]+)?(#[^\s]+)?$",
    re.IGNORECASE,
)
RELATIVE_REGEX = re.compile(r"^(/[^?#\s]*)?(\?[^#\s]+)?(#[^\s]+)?$")

SearchParams = List[Tuple[str, Optional[str]]]
"""Query items in order; the value is None for an item written without ``=``."""

RKEY_PLACEHOLDER = "undefined"
"""Collection segment inserted when a record key is set on a URI without one."""


def _parse_query(query: str) -> SearchParams:
    params: SearchParams = []
    for item in query.split("&"):
        if not item:
            continue
        name, sep, value = item.partition("=")
        params.append((unquote_plus(name), unquote_plus(value) if sep else None))
    return params


def _render_query(params: SearchParams) -> str:
    return "&".join(
        quote_plus(name) if value is None else urlencode([(name, value)])
        for name, value in params
    )


class AtUri:
    """A mutable, parsed AT-URI.

    >>> uri = AtUri("at://alice.test/app.bsky.feed.post/3jwdwj2ctlk26")
    >>> uri.collection, uri.rkey
    ('app.bsky.feed.post', '3jwdwj2ctlk26')

    Args:
        uri: an absolute AT-URI (the ``at://`` scheme is optional), or a
            relative ``/path?query#fragment`` when ``base`` is given
        base: absolute AT-URI supplying the host for a relative ``uri``

    Raises:
        InvalidUriError: if the input matches neither grammar
    """

    def __init__(self, uri: str, base: Optional[str] = None):
        if base is not None:
            parsed_base = ATP_URI_REGEX.fullmatch(base)
            if parsed_base is None:
                raise InvalidUriError(f"Invalid at uri: {base}")
            parsed_relative = RELATIVE_REGEX.fullmatch(uri)
            if parsed_relative is None:
                raise InvalidUriError(f"Invalid path: {uri}")
            self.host: str = parsed_base.group(2)
            pathname, query, fragment = parsed_relative.groups()
        else:
            parsed = ATP_URI_REGEX.fullmatch(uri)
            if parsed is None:
                raise InvalidUriError(f"Invalid at uri: {uri}")
            self.host = parsed.group(2)
            pathname, query, fragment = parsed.group(3, 4, 5)

        self.pathname: str = pathname or ""
        self.search_params: SearchParams = _parse_query(query[1:]) if query else []
        self.hash: str = fragment[1:] if fragment else ""

    @classmethod
    def make(
        cls,
        handle_or_did: str,
        collection: Optional[str] = None,
        rkey: Optional[str] = None,
    ) -> "AtUri":
        """Join the given parts with ``/`` and parse the result.

        The parts are not validated individually.
        """
        uri = handle_or_did
        if collection is not None:
            uri += f"/{collection}"
        if rkey is not None:
            uri += f"/{rkey}"
        return cls(uri)

    @property
    def protocol(self) -> str:
        return "at:"

    @property
    def origin(self) -> str:
        return f"at://{self.host}"

    @property
    def hostname(self) -> str:
        return self.host

    @hostname.setter
    def hostname(self, value: str) -> None:
        self.host = value

    @property
    def search(self) -> str:
        return _render_query(self.search_params)

    @search.setter
    def search(self, value: str) -> None:
        self.search_params = _parse_query(value)

    def _path_segments(self) -> List[str]:
        return [part for part in self.pathname.split("/") if part]

    @property
    def collection(self) -> str:
        parts = self._path_segments()
        return parts[0] if parts else ""

    @collection.setter
    def collection(self, value: str) -> None:
        parts = self._path_segments()
        if parts:
            parts[0] = value
        else:
            parts.append(value)
        self.pathname = "/".join(parts)

    @property
    def rkey(self) -> str:
        parts = self._path_segments()
        return parts[1] if len(parts) > 1 else ""

    @rkey.setter
    def rkey(self, value: str) -> None:
        # TODO: decide whether setting an rkey without a collection should raise
        # instead of inserting RKEY_PLACEHOLDER as the collection.
        parts = self._path_segments()
        if not parts:
            parts.append(RKEY_PLACEHOLDER)
        if len(parts) == 1:
            parts.append(value)
        else:
            parts[1] = value
        self.pathname = "/".join(parts)

    @property
    def href(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        path = self.pathname or "/"
        if not path.startswith("/"):
            path = f"/{path}"
        search = self.search
        query = f"?{search}" if search else ""
        fragment = f"#{self.hash}" if self.hash else ""
        return f"at://{self.host}{path}{query}{fragment}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"AtUri({self.to_string()!r})"
