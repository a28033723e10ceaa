"""Read-only queries over a loaded Bible version."""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from osis_bible.data.canon import book_name
from osis_bible.data.types import BibleStats, Book, Chapter, SearchHit


class BibleDocument:
    """An immutable, canonically ordered set of books.

    Built once per (version, language); a reload produces a new document
    instead of editing this one.
    """

    def __init__(self, books: Iterable[Book], version: str = "", language: str = "en"):
        self._books: Tuple[Book, ...] = tuple(books)
        self._by_id: Dict[str, Book] = {}
        for book in self._books:
            self._by_id.setdefault(book.id, book)
        self.version = version
        self.language = language

    @property
    def books(self) -> Tuple[Book, ...]:
        return self._books

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self):
        return iter(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._by_id

    def get_book(self, book_id: str) -> Optional[Book]:
        """Return the book with the given id, or None."""
        return self._by_id.get(book_id)

    def get_chapter(self, book_id: str, chapter_number: int) -> Optional[Chapter]:
        """Return a chapter by book id and number, or None."""
        book = self._by_id.get(book_id)
        if book is None:
            return None
        return book.get_chapter(chapter_number)

    def book_names(self) -> Dict[str, str]:
        """Map each loaded book id to its display name."""
        return {book.id: book.name for book in self._books}

    def search_verses(self, query: str, book_id: Optional[str] = None) -> List[SearchHit]:
        """Find verses containing ``query``, case-insensitively.

        The match is a literal substring test after lowercasing; no
        diacritic folding or tokenization is applied.

        Args:
            query: Text to look for
            book_id: Restrict the search to one book

        Returns:
            Every matching verse in canonical book, chapter, verse order
        """
        if not query:
            return []
        needle = query.lower()
        if book_id is not None:
            book = self._by_id.get(book_id)
            books: Tuple[Book, ...] = (book,) if book is not None else ()
        else:
            books = self._books

        hits: List[SearchHit] = []
        for book in books:
            for chapter in book.chapters:
                for verse in chapter.verses:
                    if needle in verse.text.lower():
                        hits.append(SearchHit(
                            id=verse.id,
                            number=verse.number,
                            text=verse.text,
                            book_id=book.id,
                            book_name=book.name,
                            chapter_number=chapter.number,
                        ))
        return hits

    def get_stats(self) -> BibleStats:
        """Return book, chapter and verse totals."""
        return BibleStats(
            total_books=len(self._books),
            total_chapters=sum(book.total_chapters for book in self._books),
            total_verses=sum(book.total_verses for book in self._books),
        )

    def relabel(self, language: str) -> "BibleDocument":
        """Return a new document with book names resolved for ``language``.

        Explicit source titles keep precedence over the lookup table.
        """
        books = [
            replace(book, name=book.title or book_name(book.id, language) or book.id)
            for book in self._books
        ]
        return BibleDocument(books, version=self.version, language=language)

    def __repr__(self) -> str:
        return f"BibleDocument(version={self.version!r}, language={self.language!r}, books={len(self._books)})"
