"""
Lexicon documents

- doc.py: ``LexiconDoc`` Pydantic model checking the version, the NSID ``id``
  and the placement of primary definitions
"""
