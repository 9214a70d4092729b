"""
AT Protocol identifier syntax

This package validates the identifier grammars of the AT Protocol and, for
handles and datetimes, normalises them to canonical form. It does no network
I/O: handles are not resolved and DIDs are not fetched.

Key Components:
- syntax: one module per grammar (handle, did, nsid, aturi_validation,
  datetimes, tid, recordkey) plus the ``AtUri`` value type in aturi
- lexicon: the lexicon document envelope, which relies on NSID validation
- errors: one error class per grammar, sharing ``InvalidSyntaxError``
- config: logging and Sentry setup for embedding applications

Each grammar offers the same trio of entry points:
1. ``ensure_valid_*`` raises the grammar's error with a readable reason
2. ``is_valid_*`` returns a bool and treats only that error as "invalid"
3. where it exists, ``ensure_valid_*_regex`` is a faster single-regex check
   with a generic reason, kept separate from the full check

AT-URI validation composes the others: the authority must be a valid handle
or DID and the first path segment a valid NSID.
"""
