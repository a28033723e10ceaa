"""OSIS XML Bible parsing, loading and querying."""

from osis_bible.backend import BibleLoader, DirectorySource, FileFallback, LoadResult, MappingSource, TextFallback
from osis_bible.config import Config, VersionInfo
from osis_bible.data import Book, Chapter, LoadState, SearchHit, Verse, BibleStats, OSIS_ORDER
from osis_bible.document import BibleDocument
from osis_bible.errors import (
    BibleError,
    BibleLoadError,
    LoadSupersededError,
    OsisDecodeError,
    OsisStructureError,
    SourceMissingError,
)
from osis_bible.parser import parse_book_div, parse_osis_book, parse_osis_document
from osis_bible.session import BibleSession

__version__ = "0.1.0"

__all__ = [
    "BibleLoader",
    "DirectorySource",
    "FileFallback",
    "LoadResult",
    "MappingSource",
    "TextFallback",
    "Config",
    "VersionInfo",
    "Book",
    "Chapter",
    "LoadState",
    "SearchHit",
    "Verse",
    "BibleStats",
    "OSIS_ORDER",
    "BibleDocument",
    "BibleError",
    "BibleLoadError",
    "LoadSupersededError",
    "OsisDecodeError",
    "OsisStructureError",
    "SourceMissingError",
    "parse_book_div",
    "parse_osis_book",
    "parse_osis_document",
    "BibleSession",
]
