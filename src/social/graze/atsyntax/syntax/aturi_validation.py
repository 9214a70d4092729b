"""Strict AT-URI validation.

Accepts only the restricted form ``at://<authority>[/<collection>[/<rkey>]][#<fragment>]``
where the authority is a handle or DID and the collection is an NSID. For
taking AT-URIs apart and rebuilding them see ``social.graze.atsyntax.syntax.aturi``.
"""

import logging
import re
from typing import Final

from social.graze.atsyntax.errors import (
    InvalidAtUriError,
    InvalidDidError,
    InvalidHandleError,
    InvalidNsidError,
    check_valid,
)
from social.graze.atsyntax.syntax.did import ensure_valid_did
from social.graze.atsyntax.syntax.handle import ensure_valid_handle
from social.graze.atsyntax.syntax.nsid import ensure_valid_nsid

logger = logging.getLogger(__name__)

MAX_AT_URI_LENGTH: Final = 8 * 1024

_AT_URI_CHARS = re.compile(r"[a-zA-Z0-9._~:@!$&')(*+,;=%/-]*")
_FRAGMENT_CHARS = re.compile(r"/[a-zA-Z0-9._~:@!$&')(*+,;=%\[\]/-]*")
_AT_URI_REGEX = re.compile(
    r"at://(?P<authority>[a-zA-Z0-9._:%-]+)"
    r"(/(?P<collection>[a-zA-Z0-9-.]+)"
    r"(/(?P<rkey>[a-zA-Z0-9._~:@!$&%')(*+,;=-]+))?)?"
    r"(#(?P<fragment>/[a-zA-Z0-9._~:@!$&%')(*+,;=\-\[\]/\\]*))?"
)


def ensure_valid_at_uri(uri: str) -> None:
    """Raise ``InvalidAtUriError`` unless ``uri`` is a valid AT-URI.

    Authority and collection are checked by the handle, DID and NSID
    validators. Their errors are re-raised with a generic message; the
    original error stays available as ``__cause__`` (and ``.cause``).

    The record key only has to be non-empty here. It is intentionally looser
    than ``ensure_valid_record_key``.
    """
    uri_parts = uri.split("#")
    if len(uri_parts) > 2:
        raise InvalidAtUriError(
            'ATURI can have at most one "#", separating fragment out'
        )
    uri_without_fragment = uri_parts[0]
    fragment_part = uri_parts[1] if len(uri_parts) == 2 else None

    if _AT_URI_CHARS.fullmatch(uri_without_fragment) is None:
        raise InvalidAtUriError("Disallowed characters in ATURI (ASCII)")

    parts = uri_without_fragment.split("/")
    if len(parts) < 3 or parts[0] != "at:" or parts[1] != "":
        raise InvalidAtUriError('ATURI must start with "at://"')

    authority = parts[2]
    try:
        if authority.startswith("did:"):
            ensure_valid_did(authority)
        else:
            ensure_valid_handle(authority)
    except (InvalidDidError, InvalidHandleError) as e:
        logger.debug("Rejected ATURI authority %r: %s", authority, e)
        raise InvalidAtUriError("ATURI authority must be a valid handle or DID") from e

    if len(parts) >= 4:
        if parts[3] == "":
            raise InvalidAtUriError(
                "ATURI can not have a slash after authority without a path segment"
            )
        try:
            ensure_valid_nsid(parts[3])
        except InvalidNsidError as e:
            logger.debug("Rejected ATURI collection %r: %s", parts[3], e)
            raise InvalidAtUriError(
                "ATURI requires first path segment (if supplied) to be valid NSID"
            ) from e

    if len(parts) >= 5 and parts[4] == "":
        raise InvalidAtUriError(
            "ATURI can not have a slash after collection, unless record key is provided"
        )

    if len(parts) >= 6:
        raise InvalidAtUriError(
            "ATURI path can have at most two parts, and no trailing slash"
        )

    if fragment_part is not None:
        if len(fragment_part) == 0 or fragment_part[0] != "/":
            raise InvalidAtUriError(
                "ATURI fragment must be non-empty and start with slash"
            )
        if _FRAGMENT_CHARS.fullmatch(fragment_part) is None:
            raise InvalidAtUriError("Disallowed characters in ATURI fragment (ASCII)")

    if len(uri) > MAX_AT_URI_LENGTH:
        raise InvalidAtUriError("ATURI is far too long")


def ensure_valid_at_uri_regex(uri: str) -> None:
    """Fast-path alternative to ``ensure_valid_at_uri``.

    Only checks the overall shape; authority and collection are not run
    through their own validators and the reason is always the same.
    """
    if _AT_URI_REGEX.fullmatch(uri) is None:
        raise InvalidAtUriError("ATURI didn't validate via regex")
    if len(uri) > MAX_AT_URI_LENGTH:
        raise InvalidAtUriError("ATURI is far too long")


def is_valid_at_uri(uri: str) -> bool:
    return check_valid(ensure_valid_at_uri, uri, InvalidAtUriError)
