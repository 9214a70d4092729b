"""Record key syntax.

Record keys name a record within a collection. Any collection may use its
own key scheme (TIDs, ``self``, literal values), so only the common charset
and length rules apply here.
"""

import re
from typing import Final

from social.graze.atsyntax.errors import InvalidRecordKeyError, check_valid

MAX_RECORD_KEY_LENGTH: Final = 512

_RECORD_KEY_REGEX = re.compile(r"[a-zA-Z0-9_~.:-]{1,512}")


def ensure_valid_record_key(rkey: str) -> None:
    """Raise ``InvalidRecordKeyError`` unless ``rkey`` is a valid record key.

    ``.`` and ``..`` match the charset but are rejected: they would be
    ambiguous as path segments.
    """
    if len(rkey) < 1 or len(rkey) > MAX_RECORD_KEY_LENGTH:
        raise InvalidRecordKeyError(
            f"record key must be 1 to {MAX_RECORD_KEY_LENGTH} characters"
        )
    if _RECORD_KEY_REGEX.fullmatch(rkey) is None:
        raise InvalidRecordKeyError("record key syntax not valid (regex)")
    if rkey in (".", ".."):
        raise InvalidRecordKeyError('record key can not be "." or ".."')


def is_valid_record_key(rkey: str) -> bool:
    return check_valid(ensure_valid_record_key, rkey, InvalidRecordKeyError)
