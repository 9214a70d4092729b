"""Namespaced Identifiers (NSIDs).

An NSID names a lexicon schema or record type in reverse-DNS order, e.g.
``app.bsky.feed.post``: the authority is ``feed.bsky.app`` and the name is
``post``.
"""

import re
from dataclasses import dataclass
from typing import Final, Optional, Tuple

from social.graze.atsyntax.errors import InvalidNsidError, check_valid

MAX_NSID_LENGTH: Final = 317
MAX_SEGMENT_LENGTH: Final = 63

_NSID_CHARS = re.compile(r"[a-zA-Z0-9.-]*")
_NSID_NAME = re.compile(r"[a-zA-Z][a-zA-Z0-9]*")


@dataclass(frozen=True)
class NSID:
    """A parsed NSID. Build one with ``NSID.parse`` or ``NSID.create``."""

    segments: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, nsid: str) -> "NSID":
        ensure_valid_nsid(nsid)
        return cls(segments=tuple(nsid.split(".")))

    @classmethod
    def create(cls, authority: str, name: str) -> "NSID":
        """Build an NSID from a domain-order authority and a name.

        ``NSID.create("bsky.app", "getProfile")`` is ``app.bsky.getProfile``.
        The joined string is validated like any other, so this raises
        ``InvalidNsidError`` whenever the result is not a valid NSID.
        """
        segments = list(reversed(authority.split(".")))
        segments.append(name)
        return cls.parse(".".join(segments))

    @staticmethod
    def is_valid(nsid: str) -> bool:
        return check_valid(NSID.parse, nsid, InvalidNsidError)

    @property
    def authority(self) -> str:
        return ".".join(reversed(self.segments[:-1]))

    @property
    def name(self) -> Optional[str]:
        if not self.segments:
            return None
        return self.segments[-1]

    def __str__(self) -> str:
        return ".".join(self.segments)


def ensure_valid_nsid(nsid: str) -> None:
    """Raise ``InvalidNsidError`` unless ``nsid`` is a syntactically valid NSID.

    The name (last segment) is stricter than the other segments: letters and
    digits only, starting with a letter.
    """
    if _NSID_CHARS.fullmatch(nsid) is None:
        raise InvalidNsidError(
            "Disallowed characters in NSID (ASCII letters, digits, dashes, periods only)"
        )

    if len(nsid) > MAX_NSID_LENGTH:
        raise InvalidNsidError(f"NSID is too long ({MAX_NSID_LENGTH} chars max)")

    labels = nsid.split(".")
    if len(labels) < 3:
        raise InvalidNsidError("NSID needs at least three parts")

    for index, label in enumerate(labels):
        if len(label) < 1:
            raise InvalidNsidError("NSID parts cannot be empty")
        if len(label) > MAX_SEGMENT_LENGTH:
            raise InvalidNsidError(
                f"NSID part too long (max {MAX_SEGMENT_LENGTH} chars)"
            )
        if label.startswith("-") or label.endswith("-"):
            raise InvalidNsidError("NSID parts cannot start or end with a hyphen")
        if index == 0 and label[0].isdigit():
            raise InvalidNsidError("NSID first part may not start with a digit")
        if index == len(labels) - 1 and _NSID_NAME.fullmatch(label) is None:
            raise InvalidNsidError(
                "NSID name part must be only letters and digits (and no leading digit)"
            )


def is_valid_nsid(nsid: str) -> bool:
    return NSID.is_valid(nsid)
