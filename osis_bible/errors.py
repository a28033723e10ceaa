"""Exceptions raised by osis-bible."""

from typing import List, Optional, Tuple


class BibleError(Exception):
    """Base class for all osis-bible errors."""


class OsisDecodeError(BibleError):
    """Raised when a source is not well-formed XML."""


class OsisStructureError(BibleError):
    """Raised when decoded XML holds no book or chapter division."""


class SourceMissingError(BibleError):
    """Raised by a source that has no entry for a book id."""

    def __init__(self, book_id: str):
        super().__init__(f"No source for book {book_id!r}")
        self.book_id = book_id


class BibleLoadError(BibleError):
    """Raised when neither per-book sources nor the fallback produced a book."""

    def __init__(
        self,
        message: str,
        failures: Optional[List[Tuple[str, BaseException]]] = None,
    ):
        super().__init__(message)
        self.failures = failures or []


class LoadSupersededError(BibleError):
    """Raised to the caller of a load that a newer load replaced."""
