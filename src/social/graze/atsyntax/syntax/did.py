"""DID syntax.

Only the generic ``did:method:identifier`` shape is enforced. Method specific
rules (``did:plc``, ``did:web``) and resolution are out of scope.
"""

import re
from typing import Final

from social.graze.atsyntax.errors import InvalidDidError, check_valid

MAX_DID_LENGTH: Final = 2048

_DID_CHARS = re.compile(r"[a-zA-Z0-9._:%-]*")
_DID_METHOD = re.compile(r"[a-z]+")
_DID_REGEX = re.compile(r"did:[a-z]+:[a-zA-Z0-9._:%-]*[a-zA-Z0-9._-]")


def ensure_valid_did(did: str) -> None:
    """Raise ``InvalidDidError`` unless ``did`` is a syntactically valid DID.

    Args:
        did: Candidate DID, e.g. ``did:plc:z72i7hdynmk6r22z27h6tvur``

    Raises:
        InvalidDidError: On the first violated rule, in this order: ``did:``
            prefix, character set, at least three colon separated parts,
            lower-case method, no trailing ``:`` or ``%``, length.
    """
    if not did.startswith("did:"):
        raise InvalidDidError('DID requires "did:" prefix')

    if _DID_CHARS.fullmatch(did) is None:
        raise InvalidDidError(
            "Disallowed characters in DID (ASCII letters, digits, and a couple other characters only)"
        )

    parts = did.split(":")
    if len(parts) < 3:
        raise InvalidDidError(
            "DID requires prefix, method, and method-specific content"
        )

    if _DID_METHOD.fullmatch(parts[1]) is None:
        raise InvalidDidError("DID method must be lower-case letters")

    if did.endswith(":") or did.endswith("%"):
        raise InvalidDidError('DID cannot end with ":" or "%"')

    if len(did) > MAX_DID_LENGTH:
        raise InvalidDidError(f"DID is too long ({MAX_DID_LENGTH} chars max)")


def ensure_valid_did_regex(did: str) -> None:
    """Single-regex alternative to ``ensure_valid_did`` with the same length cap."""
    if _DID_REGEX.fullmatch(did) is None:
        raise InvalidDidError("DID didn't validate via regex")
    if len(did) > MAX_DID_LENGTH:
        raise InvalidDidError(f"DID is too long ({MAX_DID_LENGTH} chars max)")


def is_valid_did(did: str) -> bool:
    return check_valid(ensure_valid_did, did, InvalidDidError)
