"""Ingestion of a Bible version from per-book sources with a fallback document."""

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from osis_bible.backend.sources import BookSource, FallbackSource
from osis_bible.data.types import Book
from osis_bible.errors import BibleLoadError, SourceMissingError
from osis_bible.parser.normalizer import parse_osis_book, parse_osis_document

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_MAX_CONCURRENCY = 8

# (book_id, book or None, error or None)
_Outcome = Tuple[str, Optional[Book], Optional[BaseException]]


@dataclass
class LoadResult:
    """Books of one load in canonical order, plus what went wrong."""

    books: List[Book]
    failures: List[Tuple[str, BaseException]] = field(default_factory=list)
    filled_from_fallback: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def book_ids(self) -> List[str]:
        return [book.id for book in self.books]


class BibleLoader:
    """Loads the books of one Bible version.

    Every expected book is fetched and parsed from its own source,
    concurrently and independently; a broken book is logged and skipped.
    A monolithic fallback document then fills the gaps. Only a load that
    ends with zero books raises.
    """

    def __init__(
        self,
        fetch_timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        yield_every: int = 1,
    ):
        """Initialize the loader.

        Args:
            fetch_timeout: Seconds allowed per fetch, None for no limit
            max_concurrency: Maximum number of books fetched at once
            yield_every: Yield to the event loop after every N parsed books
        """
        self.fetch_timeout = fetch_timeout
        self.max_concurrency = max(1, max_concurrency)
        self.yield_every = max(1, yield_every)

    async def load(
        self,
        order: Iterable[str],
        source: BookSource,
        fallback: Optional[FallbackSource] = None,
        language: str = "en",
    ) -> LoadResult:
        """Load every book in ``order``.

        Args:
            order: Expected book ids in canonical order
            source: Per-book XML source
            fallback: Whole-Bible document used to fill missing books
            language: Display language for book names

        Returns:
            LoadResult with books sorted by their index in ``order``

        Raises:
            BibleLoadError: If neither pass produced a single book
        """
        expected = list(order)
        semaphore = asyncio.Semaphore(self.max_concurrency)
        parsed = itertools.count(1)
        outcomes = await asyncio.gather(
            *(
                self._load_one(book_id, source, language, semaphore, parsed)
                for book_id in expected
            )
        )

        books: Dict[str, Book] = {}
        failures: List[Tuple[str, BaseException]] = []
        for book_id, book, error in outcomes:
            if error is not None:
                failures.append((book_id, error))
            elif book is not None:
                if book.id in books:
                    logger.warning("Source for %s holds duplicate book %s; skipped", book_id, book.id)
                    continue
                books[book.id] = book

        missing = [book_id for book_id in expected if book_id not in books]
        filled: List[str] = []
        if fallback is not None and (not books or missing):
            filled = await self._fill_from_fallback(books, missing, fallback, language, failures)
        if not books:
            raise BibleLoadError("No books could be loaded", failures)

        rank = {book_id: i for i, book_id in enumerate(expected)}
        ordered = sorted(books.values(), key=lambda b: rank.get(b.id, len(rank)))
        still_missing = [book_id for book_id in expected if book_id not in books]

        logger.info(
            "Loaded %d books (%d failed, %d from fallback, %d missing)",
            len(ordered), len(failures), len(filled), len(still_missing),
        )
        return LoadResult(
            books=ordered,
            failures=failures,
            filled_from_fallback=filled,
            missing=still_missing,
        )

    async def _fetch(self, awaitable):
        if self.fetch_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, self.fetch_timeout)

    async def _load_one(
        self,
        book_id: str,
        source: BookSource,
        language: str,
        semaphore: asyncio.Semaphore,
        parsed: Iterator[int],
    ) -> _Outcome:
        """Fetch and parse one book; never raises except on cancellation."""
        async with semaphore:
            try:
                text = await self._fetch(source.fetch(book_id))
                book = parse_osis_book(text, language)
            except SourceMissingError:
                logger.debug("No source for %s", book_id)
                return book_id, None, None
            except asyncio.TimeoutError as exc:
                logger.warning("Failed to load %s: timed out after %ss", book_id, self.fetch_timeout)
                return book_id, None, exc
            except Exception as exc:
                logger.warning("Failed to load %s: %s", book_id, exc)
                return book_id, None, exc
        # Counts successful parses only
        if next(parsed) % self.yield_every == 0:
            await asyncio.sleep(0)
        return book_id, book, None

    async def _fill_from_fallback(
        self,
        books: Dict[str, Book],
        missing: List[str],
        fallback: FallbackSource,
        language: str,
        failures: List[Tuple[str, BaseException]],
    ) -> List[str]:
        """Add fallback books to ``books``; return the ids added."""
        try:
            text = await self._fetch(fallback.fetch_all())
            parsed = parse_osis_document(text, language)
        except Exception as exc:
            if not books:
                raise BibleLoadError(
                    f"No books loaded and fallback {fallback!r} failed: {exc}", failures
                ) from exc
            logger.error("Fallback %r failed, %d books stay missing: %s", fallback, len(missing), exc)
            return []

        filled: List[str] = []
        if not books:
            for book in parsed:
                if book.id not in books:
                    books[book.id] = book
                    filled.append(book.id)
        else:
            by_id: Dict[str, Book] = {}
            for book in parsed:
                by_id.setdefault(book.id, book)
            for book_id in missing:
                if book_id in by_id:
                    books[book_id] = by_id[book_id]
                    filled.append(book_id)
        if filled:
            logger.info("Filled %d books from fallback %r", len(filled), fallback)
        return filled
