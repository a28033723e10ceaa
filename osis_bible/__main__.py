"""Entry point for osis-bible."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from osis_bible.backend.sources import BookSource, DirectorySource, FallbackSource, FileFallback
from osis_bible.config import Config, VersionInfo
from osis_bible.data.canon import book_chapters, resolve_book_id
from osis_bible.document import BibleDocument
from osis_bible.errors import BibleError
from osis_bible.session import BibleSession, directory_sources
from osis_bible.tools.split import convert_numbered, split_osis, write_books

logger = logging.getLogger("osis_bible")

console = Console()
err_console = Console(stderr=True)


def _add_load_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--version", dest="bible_version", help="Bible version to load (e.g. kjv, aravd)")
    parser.add_argument("--language", help="Display language for book names (en, ar)")
    parser.add_argument("--bibles-dir", type=Path, help="Root directory holding version folders")
    parser.add_argument("--books-dir", type=Path, help="Directory of per-book XML files")
    parser.add_argument("--fallback", type=Path, help="Whole-Bible OSIS file used to fill gaps")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="osis-bible", description="Load and query OSIS XML Bibles")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    sub = parser.add_subparsers(dest="command", required=True)

    stats = sub.add_parser("stats", help="List loaded books with chapter and verse counts")
    _add_load_options(stats)

    show = sub.add_parser("show", help="Print one chapter")
    show.add_argument("book", help="Book id or name (e.g. Gen, genesis)")
    show.add_argument("chapter", type=int)
    show.add_argument("verse", type=int, nargs="?", help="Print only this verse")
    _add_load_options(show)

    search = sub.add_parser("search", help="Case-insensitive text search")
    search.add_argument("query")
    search.add_argument("--book", help="Restrict to one book")
    search.add_argument("--limit", type=int, default=50, help="Rows to print (0 for all)")
    _add_load_options(search)

    split = sub.add_parser("split", help="Split a whole-Bible file into per-book OSIS files")
    split.add_argument("input", type=Path)
    split.add_argument("out_dir", type=Path)
    split.add_argument("--numbered", action="store_true", help="Input uses <book number> layout")
    split.add_argument("--no-overwrite", action="store_true", help="Keep existing book files")
    return parser


def _session_for(args: argparse.Namespace, config: Config) -> BibleSession:
    if args.bibles_dir:
        config.bibles_dir = args.bibles_dir
    if args.language:
        config.language = args.language
    if args.books_dir is None and args.fallback is None:
        return BibleSession(config)

    configured = directory_sources(config)

    def resolve(info: VersionInfo) -> Tuple[BookSource, Optional[FallbackSource]]:
        source, fallback = configured(info)
        if args.books_dir is not None:
            source = DirectorySource(args.books_dir)
        if args.fallback is not None:
            fallback = FileFallback(args.fallback)
        return source, fallback

    return BibleSession(config, resolver=resolve)


def _load(args: argparse.Namespace, config: Config) -> BibleDocument:
    session = _session_for(args, config)
    return asyncio.run(session.load(args.bible_version, args.language))


def _resolve_book(document: BibleDocument, token: str) -> Optional[str]:
    if token in document:
        return token
    book_id = resolve_book_id(token)
    return book_id if book_id in document else None


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    document = _load(args, config)
    table = Table(title=f"{document.version} ({document.language})")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Chapters", justify="right")
    table.add_column("Verses", justify="right")
    incomplete = []
    for book in document:
        chapters = str(book.total_chapters)
        # Canon count is 0 for ids outside the 66-book canon
        expected = book_chapters(book.id)
        if expected and book.total_chapters != expected:
            incomplete.append(book.id)
            chapters = f"[yellow]{book.total_chapters}/{expected}[/yellow]"
        table.add_row(book.id, book.name, chapters, str(book.total_verses))
    console.print(table)
    if incomplete:
        console.print(f"[yellow]Chapter count differs from the canon:[/yellow] {', '.join(incomplete)}")
    stats = document.get_stats()
    console.print(
        f"[bold]{stats.total_books}[/bold] books, "
        f"[bold]{stats.total_chapters}[/bold] chapters, "
        f"[bold]{stats.total_verses}[/bold] verses"
    )
    return 0


def cmd_show(args: argparse.Namespace, config: Config) -> int:
    document = _load(args, config)
    book_id = _resolve_book(document, args.book)
    chapter = document.get_chapter(book_id, args.chapter) if book_id else None
    if chapter is None:
        err_console.print(f"[red]Not found:[/red] {args.book} {args.chapter}")
        return 1
    book = document.get_book(book_id)
    verses = chapter.verses
    if args.verse is not None:
        verse = chapter.get_verse(args.verse)
        if verse is None:
            err_console.print(f"[red]Not found:[/red] {args.book} {args.chapter}:{args.verse}")
            return 1
        verses = (verse,)
    console.print(f"[bold]{book.name} {chapter.number}[/bold]")
    for verse in verses:
        console.print(f"[dim]{verse.number}[/dim] {verse.text}")
    return 0


def cmd_search(args: argparse.Namespace, config: Config) -> int:
    document = _load(args, config)
    book_id = None
    if args.book:
        book_id = _resolve_book(document, args.book)
        if book_id is None:
            err_console.print(f"[red]Unknown book:[/red] {args.book}")
            return 1
    hits = document.search_verses(args.query, book_id)
    shown = hits if args.limit <= 0 else hits[: args.limit]
    for hit in shown:
        console.print(f"[cyan]{hit.reference}[/cyan] {hit.text}", highlight=False)
    console.print(f"{len(hits)} match(es)")
    return 0


def cmd_split(args: argparse.Namespace, config: Config) -> int:
    data = args.input.read_bytes()
    books = convert_numbered(data) if args.numbered else split_osis(data)
    written = write_books(books, args.out_dir, overwrite=not args.no_overwrite)
    console.print(f"Split completed: {len(written)} book file(s) written to {args.out_dir}")
    return 0


COMMANDS = {
    "stats": cmd_stats,
    "show": cmd_show,
    "search": cmd_search,
    "split": cmd_split,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the osis-bible command line."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    config = Config.load()
    try:
        return COMMANDS[args.command](args, config)
    except (BibleError, KeyError, OSError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
