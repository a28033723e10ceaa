"""Data types for osis-bible."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Verse:
    """A single verse of plain text."""

    id: str  # "{BookId}.{Chapter}.{Verse}", e.g. "Gen.1.1"
    number: int
    text: str


@dataclass(frozen=True)
class Chapter:
    """A chapter and its verses in document order."""

    number: int
    verses: Tuple[Verse, ...] = ()

    def get_verse(self, number: int) -> Optional[Verse]:
        """Return the first verse with the given number."""
        for verse in self.verses:
            if verse.number == number:
                return verse
        return None


@dataclass(frozen=True)
class Book:
    """A parsed book.

    ``total_chapters`` and ``total_verses`` are derived from ``chapters``
    when the book is constructed.
    """

    id: str
    name: str
    chapters: Tuple[Chapter, ...] = ()
    title: Optional[str] = None  # explicit title from the source XML
    total_chapters: int = field(init=False, default=0)
    total_verses: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_chapters", len(self.chapters))
        object.__setattr__(
            self, "total_verses", sum(len(ch.verses) for ch in self.chapters)
        )

    def get_chapter(self, number: int) -> Optional[Chapter]:
        """Return the first chapter with the given number."""
        for chapter in self.chapters:
            if chapter.number == number:
                return chapter
        return None


@dataclass(frozen=True)
class SearchHit:
    """A verse matching a search, with its location."""

    id: str
    number: int
    text: str
    book_id: str
    book_name: str
    chapter_number: int

    @property
    def reference(self) -> str:
        """Return formatted reference string."""
        return f"{self.book_name} {self.chapter_number}:{self.number}"


@dataclass(frozen=True)
class BibleStats:
    """Aggregate counts over a loaded document."""

    total_books: int
    total_chapters: int
    total_verses: int = 0


class LoadState(Enum):
    """Lifecycle of a (version, language) load request."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
