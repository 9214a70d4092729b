"""Timestamp Identifier (TID) syntax.

A TID is 13 characters of base32-sortable text (``234567a-z``). The first
character is limited to ``234567abcdefghij`` so the top bit of the encoded
64-bit integer stays zero.
"""

import re
from typing import Final

from social.graze.atsyntax.errors import InvalidTidError, check_valid

TID_LENGTH: Final = 13
BASE32_SORTABLE: Final = "234567abcdefghijklmnopqrstuvwxyz"
TID_FIRST_CHARS: Final = BASE32_SORTABLE[:16]

_TID_REGEX = re.compile(f"[{TID_FIRST_CHARS}][{BASE32_SORTABLE}]{{{TID_LENGTH - 1}}}")


def ensure_valid_tid(tid: str) -> None:
    if len(tid) != TID_LENGTH:
        raise InvalidTidError(f"TID must be {TID_LENGTH} characters")
    if _TID_REGEX.fullmatch(tid) is None:
        raise InvalidTidError("TID syntax not valid (regex)")


def is_valid_tid(tid: str) -> bool:
    return check_valid(ensure_valid_tid, tid, InvalidTidError)
