"""
Identifier grammars

- handle.py: DNS-like account handles, normalisation and reserved TLDs
- did.py: generic ``did:method:identifier`` syntax
- nsid.py: Namespaced Identifiers and the ``NSID`` value type
- aturi_validation.py: strict AT-URI validation built on the three above
- aturi.py: the ``AtUri`` value type for taking AT-URIs apart
- datetimes.py: RFC 3339 datetime profile and normalisation
- tid.py: Timestamp Identifiers
- recordkey.py: record keys
"""
