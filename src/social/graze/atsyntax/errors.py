"""Syntax validation errors.

Every grammar has exactly one error class. They share ``InvalidSyntaxError`` so
callers can catch all rejections at once and still tell which grammar failed
through the ``grammar`` tag.
"""

import logging
from enum import IntEnum
from typing import Callable, Optional, Type

import sentry_sdk

logger = logging.getLogger(__name__)


class Grammar(IntEnum):
    """Identifier grammar that rejected a value."""

    handle = 1
    did = 2
    nsid = 3
    at_uri = 4
    datetime = 5
    tid = 6
    record_key = 7
    uri = 8


class InvalidSyntaxError(ValueError):
    """A string was rejected by one of the identifier grammars.

    The reason is free text meant for humans; there are no error codes.
    """

    grammar: Grammar

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    @property
    def cause(self) -> Optional[BaseException]:
        """Leaf error this one was re-raised from, if any."""
        return self.__cause__


class InvalidHandleError(InvalidSyntaxError):
    grammar = Grammar.handle


class InvalidDidError(InvalidSyntaxError):
    grammar = Grammar.did


class InvalidNsidError(InvalidSyntaxError):
    grammar = Grammar.nsid


class InvalidAtUriError(InvalidSyntaxError):
    grammar = Grammar.at_uri


class InvalidDatetimeError(InvalidSyntaxError):
    grammar = Grammar.datetime


class InvalidTidError(InvalidSyntaxError):
    grammar = Grammar.tid


class InvalidRecordKeyError(InvalidSyntaxError):
    grammar = Grammar.record_key


class InvalidUriError(InvalidSyntaxError):
    """Raised by the structural ``AtUri`` parser, not the strict validator."""

    grammar = Grammar.uri


def check_valid(
    ensure: Callable[[str], object],
    value: str,
    error_type: Type[InvalidSyntaxError],
) -> bool:
    """Run an ``ensure_valid_*`` function as a boolean predicate.

    Only ``error_type`` means "invalid input". Anything else escaping the
    validator is a bug: it is logged, reported to Sentry and re-raised.
    """
    try:
        ensure(value)
    except error_type:
        return False
    except Exception as e:
        logger.exception("Unexpected error validating %r", value)
        sentry_sdk.capture_exception(e)
        raise
    return True
