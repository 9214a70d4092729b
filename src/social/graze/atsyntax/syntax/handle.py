"""AT Protocol handle syntax.

Handles are DNS hostnames used as human-readable account names, e.g.
``alice.bsky.social``. Validation is purely syntactic; nothing here touches
DNS.
"""

import re
from typing import Final, Tuple

from social.graze.atsyntax.errors import InvalidHandleError, check_valid

MAX_HANDLE_LENGTH: Final = 253
MAX_LABEL_LENGTH: Final = 63

DISALLOWED_TLDS: Final[Tuple[str, ...]] = (
    ".local",
    ".arpa",
    ".invalid",
    ".localhost",
    ".internal",
    ".example",
    ".alt",
    ".onion",
)
"""Reserved-use TLDs that may not be used for handles.

``.test`` is deliberately absent so handles like ``alice.test`` keep working
in development environments.
"""

_HANDLE_CHARS = re.compile(r"[a-zA-Z0-9.-]*")
_TLD_START = re.compile(r"[a-zA-Z]")
_HANDLE_REGEX = re.compile(
    r"([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+"
    r"[a-zA-Z]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
)


def ensure_valid_handle(handle: str) -> None:
    """Raise ``InvalidHandleError`` unless ``handle`` is a syntactically valid handle.

    Checks run in a fixed order and the first failure wins:

    1. ASCII letters, digits, hyphens and periods only
    2. at most 253 characters
    3. at least two labels
    4. every label is 1-63 characters and does not start or end with a hyphen
    5. the last label (TLD) starts with a letter

    Upper-case letters are accepted; use ``normalize_handle`` to lower-case.
    The reserved TLD check is separate, see ``is_valid_tld``.
    """
    if _HANDLE_CHARS.fullmatch(handle) is None:
        raise InvalidHandleError(
            "Disallowed characters in handle (ASCII letters, digits, dashes, periods only)"
        )

    if len(handle) > MAX_HANDLE_LENGTH:
        raise InvalidHandleError(
            f"Handle is too long ({MAX_HANDLE_LENGTH} chars max)"
        )

    labels = handle.split(".")
    if len(labels) < 2:
        raise InvalidHandleError("Handle domain needs at least two parts")

    for index, label in enumerate(labels):
        if len(label) < 1:
            raise InvalidHandleError("Handle parts cannot be empty")
        if len(label) > MAX_LABEL_LENGTH:
            raise InvalidHandleError(
                f"Handle part too long (max {MAX_LABEL_LENGTH} chars)"
            )
        if label.startswith("-") or label.endswith("-"):
            raise InvalidHandleError("Handle parts cannot start or end with hyphens")
        if index == len(labels) - 1 and _TLD_START.match(label) is None:
            raise InvalidHandleError(
                "Handle final component (TLD) must start with an ASCII letter"
            )


def ensure_valid_handle_regex(handle: str) -> None:
    """Single-regex alternative to ``ensure_valid_handle``.

    Faster, and only reports a generic reason. Kept as a separate entry point;
    the two are expected to agree on ordinary input but are not merged.
    """
    if _HANDLE_REGEX.fullmatch(handle) is None:
        raise InvalidHandleError("Handle didn't validate via regex")
    if len(handle) > MAX_HANDLE_LENGTH:
        raise InvalidHandleError(
            f"Handle is too long ({MAX_HANDLE_LENGTH} chars max)"
        )


def normalize_handle(handle: str) -> str:
    """Lower-case a handle. Does not validate."""
    return handle.lower()


def normalize_and_ensure_valid_handle(handle: str) -> str:
    normalized = normalize_handle(handle)
    ensure_valid_handle(normalized)
    return normalized


def is_valid_handle(handle: str) -> bool:
    return check_valid(ensure_valid_handle, handle, InvalidHandleError)


def is_valid_tld(handle: str) -> bool:
    """Return False if the handle ends in one of ``DISALLOWED_TLDS``.

    The comparison is case-sensitive: normalize first if the input may contain
    upper-case letters.
    """
    return not handle.endswith(DISALLOWED_TLDS)
