"""XML source resolvers for per-book files and whole-Bible fallbacks."""

import asyncio
from pathlib import Path
from typing import Mapping, Optional, Protocol, Union

from osis_bible.errors import SourceMissingError

XmlText = Union[str, bytes]


class BookSource(Protocol):
    """Resolves a book id to raw XML."""

    async def fetch(self, book_id: str) -> XmlText:
        """Return the XML for ``book_id`` or raise SourceMissingError."""
        ...


class FallbackSource(Protocol):
    """Resolves the monolithic whole-Bible document."""

    async def fetch_all(self) -> XmlText:
        ...


class DirectorySource:
    """Per-book XML files in one directory, e.g. ``books/Gen.xml``."""

    def __init__(self, directory: Union[str, Path], pattern: str = "{book_id}.xml"):
        self.directory = Path(directory).expanduser()
        self.pattern = pattern

    def path_for(self, book_id: str) -> Path:
        """Return the file path for a book id."""
        return self.directory / self.pattern.format(book_id=book_id)

    async def fetch(self, book_id: str) -> XmlText:
        path = self.path_for(book_id)
        if not path.is_file():
            raise SourceMissingError(book_id)
        # Raw bytes so the XML encoding declaration is honoured
        return await asyncio.to_thread(path.read_bytes)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.directory)!r})"


class MappingSource:
    """In-memory book sources keyed by id."""

    def __init__(self, texts: Mapping[str, Optional[XmlText]]):
        self._texts = dict(texts)

    async def fetch(self, book_id: str) -> XmlText:
        text = self._texts.get(book_id)
        if text is None:
            raise SourceMissingError(book_id)
        return text


class FileFallback:
    """A whole-Bible OSIS file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    async def fetch_all(self) -> XmlText:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"FileFallback({str(self.path)!r})"


class TextFallback:
    """A whole-Bible OSIS document held in memory."""

    def __init__(self, text: XmlText):
        self.text = text

    async def fetch_all(self) -> XmlText:
        return self.text
