"""Ownership of the loaded Bible: load state, supersession, change listeners."""

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from osis_bible.backend.loader import BibleLoader, LoadResult
from osis_bible.backend.sources import BookSource, DirectorySource, FallbackSource, FileFallback
from osis_bible.config import Config, VersionInfo
from osis_bible.data.canon import OSIS_ORDER
from osis_bible.data.types import LoadState
from osis_bible.document import BibleDocument
from osis_bible.errors import BibleLoadError, LoadSupersededError

logger = logging.getLogger(__name__)

Listener = Callable[[LoadState, Optional[BibleDocument]], None]
SourceResolver = Callable[[VersionInfo], Tuple[BookSource, Optional[FallbackSource]]]


def directory_sources(config: Config) -> SourceResolver:
    """Resolve versions to book directories and fallback files under ``bibles_dir``."""

    def resolve(info: VersionInfo) -> Tuple[BookSource, Optional[FallbackSource]]:
        source = DirectorySource(info.books_path(config.bibles_dir))
        fallback_path = info.fallback_path(config.bibles_dir)
        fallback = FileFallback(fallback_path) if fallback_path and fallback_path.is_file() else None
        return source, fallback

    return resolve


class BibleSession:
    """Holds the current BibleDocument and loads replacements.

    A newer ``load`` cancels the one in flight; the superseded caller
    receives LoadSupersededError and its late results are dropped.
    Documents are only ever swapped whole.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        loader: Optional[BibleLoader] = None,
        resolver: Optional[SourceResolver] = None,
    ):
        self.config = config or Config()
        self.loader = loader or BibleLoader(
            fetch_timeout=self.config.fetch_timeout,
            max_concurrency=self.config.max_concurrency,
            yield_every=self.config.yield_every,
        )
        self._resolver = resolver or directory_sources(self.config)
        self._state = LoadState.IDLE
        self._document: Optional[BibleDocument] = None
        self._error: Optional[BibleLoadError] = None
        self._listeners: List[Listener] = []
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.last_result: Optional[LoadResult] = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def document(self) -> Optional[BibleDocument]:
        """The current document, or None before the first successful load."""
        return self._document

    @property
    def error(self) -> Optional[BibleLoadError]:
        """The error of the last load if it failed."""
        return self._error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: LoadState, document: Optional[BibleDocument]) -> None:
        self._state = state
        self._document = document
        for listener in list(self._listeners):
            try:
                listener(state, document)
            except Exception:
                logger.exception("Session listener %r failed", listener)

    def _cancel_inflight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def cancel(self) -> None:
        """Abandon any load in flight and keep the current document."""
        if self._task is None or self._task.done():
            return
        self._generation += 1
        self._cancel_inflight()
        self._restore()

    def _restore(self) -> None:
        if self._document is not None:
            self._publish(LoadState.LOADED, self._document)
        else:
            self._publish(LoadState.IDLE, None)

    async def load(self, version: Optional[str] = None, language: Optional[str] = None) -> BibleDocument:
        """Load a (version, language) pair and make it the current document.

        Args:
            version: Version name; defaults to the one matching ``language``
            language: Display language; defaults to the configured language

        Returns:
            The new current document

        Raises:
            KeyError: If the version is not configured
            BibleLoadError: If no book could be loaded
            LoadSupersededError: If a newer load replaced this one
        """
        language = language or self.config.language
        version = version or self.config.resolve_version(language)
        info = self.config.version_info(version)

        self._generation += 1
        generation = self._generation
        self._cancel_inflight()

        current = self._document
        if self._state is LoadState.LOADED and current is not None and current.version == version:
            if current.language != language:
                logger.info("Relabeling %s for language %s", version, language)
                current = current.relabel(language)
                self._publish(LoadState.LOADED, current)
            return current

        self._publish(LoadState.LOADING, self._document)
        try:
            source, fallback = self._resolver(info)
        except Exception:
            self._restore()
            raise
        order = info.books or OSIS_ORDER
        logger.info("Loading %s (%s) from %r", version, language, source)

        task = asyncio.ensure_future(self.loader.load(order, source, fallback, language))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                raise LoadSupersededError(f"Load of {version!r} was superseded") from None
            self._restore()
            raise
        except BibleLoadError as exc:
            if generation != self._generation:
                raise LoadSupersededError(f"Load of {version!r} was superseded") from exc
            logger.error("Loading %s failed: %s", version, exc)
            self._error = exc
            self._publish(LoadState.FAILED, None)
            raise
        finally:
            if self._task is task:
                self._task = None

        if generation != self._generation:
            raise LoadSupersededError(f"Load of {version!r} was superseded")

        document = BibleDocument(result.books, version=version, language=language)
        self.last_result = result
        self._error = None
        self._publish(LoadState.LOADED, document)
        return document
