"""Data types and Bible metadata."""

from osis_bible.data.types import Verse, Chapter, Book, SearchHit, BibleStats, LoadState
from osis_bible.data.canon import (
    CanonBook,
    BOOK_NAMES,
    OSIS_ORDER,
    book_chapters,
    book_index,
    book_name,
    osis_id_for_number,
    resolve_book_id,
)

__all__ = [
    "Verse",
    "Chapter",
    "Book",
    "SearchHit",
    "BibleStats",
    "LoadState",
    "CanonBook",
    "BOOK_NAMES",
    "OSIS_ORDER",
    "book_chapters",
    "book_index",
    "book_name",
    "osis_id_for_number",
    "resolve_book_id",
]
