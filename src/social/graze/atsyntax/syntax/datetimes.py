"""RFC 3339 datetime syntax.

AT Protocol datetimes are a strict profile of RFC 3339: four digit year, fixed
width fields, optional fractional seconds and a mandatory ``Z`` or ``+HH:MM``
offset. Normalised datetimes are rendered in UTC with millisecond precision,
e.g. ``1985-04-12T23:20:50.123Z``.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Final, Optional

from social.graze.atsyntax.errors import InvalidDatetimeError, check_valid

logger = logging.getLogger(__name__)

MAX_DATETIME_LENGTH: Final = 64

UNIX_EPOCH: Final = "1970-01-01T00:00:00.000Z"
"""Canonical rendering of the UNIX epoch, the ``normalize_datetime_always`` fallback."""

_RFC3339_REGEX = re.compile(
    r"[0-9]{4}-[01][0-9]-[0-3][0-9]T[0-2][0-9]:[0-6][0-9]:[0-6][0-9]"
    r"(\.[0-9]{1,20})?(Z|([+-][0-2][0-9]:[0-5][0-9]))"
)

_ISO8601_REGEX = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"(?:[Tt](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:[.,](?P<fraction>[0-9]+))?)?)?"
    r"(?P<tz>[Zz]|[+-][0-9]{2}:?[0-9]{2})"
)

_TIMEZONE_SUFFIX = re.compile(r".*(([+-][0-9]{2}:?[0-9]{2})|[a-zA-Z])")


def _parse(dt_str: str) -> Optional[datetime]:
    """Parse an ISO 8601 datetime that carries a zone designator.

    Returns None for anything that does not parse, including out of range
    fields and zone-less (naive) strings.
    """
    match = _ISO8601_REGEX.fullmatch(dt_str)
    if match is None:
        return None

    tz = match.group("tz")
    if tz in ("Z", "z"):
        tzinfo = timezone.utc
    else:
        sign = -1 if tz[0] == "-" else 1
        digits = tz[1:].replace(":", "")
        hours, minutes = int(digits[:2]), int(digits[2:])
        if hours > 23 or minutes > 59:
            return None
        tzinfo = timezone(sign * timedelta(hours=hours, minutes=minutes))

    fraction = match.group("fraction") or "0"
    try:
        return datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour") or 0),
            int(match.group("minute") or 0),
            int(match.group("second") or 0),
            int(fraction[:6].ljust(6, "0")),
            tzinfo=tzinfo,
        )
    except ValueError:
        return None


def _format(dt: datetime) -> str:
    """Render ``dt`` in UTC as ``YYYY-MM-DDTHH:MM:SS.sssZ``.

    Raises:
        OverflowError: if the instant falls outside years 1 to 9999 once
            shifted to UTC
    """
    utc = dt.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def _format_or_none(dt: datetime) -> Optional[str]:
    try:
        return _format(dt)
    except OverflowError:
        return None


def ensure_valid_datetime(dt_str: str) -> None:
    """Raise ``InvalidDatetimeError`` unless ``dt_str`` is a valid AT Protocol datetime.

    The string has to both parse as ISO 8601 and match the stricter RFC 3339
    profile; neither check is skipped because the other passed.
    """
    date = _parse(dt_str)
    if date is None:
        raise InvalidDatetimeError("Datetime did not parse as ISO 8601")

    # Overflow past 9999-12-31 UTC is still a valid instant; only underflow
    # below year 1 is negative.
    if _format_or_none(date) is None and date.year <= 1:
        raise InvalidDatetimeError("Datetime normalized to a negative time")

    if _RFC3339_REGEX.fullmatch(dt_str) is None:
        raise InvalidDatetimeError("Datetime didn't validate via regex")

    if len(dt_str) > MAX_DATETIME_LENGTH:
        raise InvalidDatetimeError(
            f"Datetime is too long ({MAX_DATETIME_LENGTH} chars max)"
        )

    if dt_str.endswith("-00:00"):
        raise InvalidDatetimeError('Datetime can not use "-00:00" for UTC timezone')

    if dt_str.startswith("000"):
        raise InvalidDatetimeError("Datetime so close to year zero not allowed")


def is_valid_datetime(dt_str: str) -> bool:
    return check_valid(ensure_valid_datetime, dt_str, InvalidDatetimeError)


def normalize_datetime(dt_str: str) -> str:
    """Coerce a valid or nearly valid datetime into canonical form.

    Tried in order:

    1. the string as given
    2. the string with ``Z`` appended, if it has no zone designator
    3. any other ISO 8601 parse of the string

    Raises:
        InvalidDatetimeError: if no stage produces a valid datetime
    """
    if is_valid_datetime(dt_str):
        iso_str = _format_or_none(_parse(dt_str))
        if iso_str is not None and is_valid_datetime(iso_str):
            return iso_str

    if _TIMEZONE_SUFFIX.fullmatch(dt_str) is None:
        date = _parse(dt_str + "Z")
        if date is not None:
            tz_str = _format_or_none(date)
            if tz_str is not None and is_valid_datetime(tz_str):
                return tz_str

    date = _parse(dt_str)
    if date is not None:
        iso_str = _format_or_none(date)
        if iso_str is not None and is_valid_datetime(iso_str):
            return iso_str
        raise InvalidDatetimeError("datetime normalized to invalid timestamp string")

    raise InvalidDatetimeError("datetime did not parse as any timestamp format")


def normalize_datetime_always(dt_str: str) -> str:
    """Like ``normalize_datetime`` but falls back to the UNIX epoch instead of raising."""
    try:
        return normalize_datetime(dt_str)
    except InvalidDatetimeError as e:
        logger.debug("Falling back to epoch for datetime %r: %s", dt_str, e)
        return UNIX_EPOCH
