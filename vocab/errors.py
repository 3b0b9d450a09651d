"""
Error types raised by the vocab package.

None of these are fatal to a review session: the controller reports a
StoreError as a warning and keeps the in-memory session moving.
"""


class VocabError(Exception):
    """Base class for vocab errors."""


class StoreError(VocabError):
    """The word store failed to read or persist data."""


class ImportFormatError(VocabError):
    """An export file could not be parsed."""
