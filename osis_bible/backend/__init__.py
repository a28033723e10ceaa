"""Book sources and the ingestion loader."""

from osis_bible.backend.loader import BibleLoader, LoadResult
from osis_bible.backend.sources import (
    BookSource,
    DirectorySource,
    FallbackSource,
    FileFallback,
    MappingSource,
    TextFallback,
)

__all__ = [
    "BibleLoader",
    "LoadResult",
    "BookSource",
    "DirectorySource",
    "FallbackSource",
    "FileFallback",
    "MappingSource",
    "TextFallback",
]
