"""OSIS book/chapter/verse normalization into the Book model."""

import logging
import re
from typing import List, Optional, Union

from osis_bible.data.canon import book_name
from osis_bible.data.types import Book, Chapter, Verse
from osis_bible.errors import OsisStructureError
from osis_bible.parser.decoder import XmlNode, decode
from osis_bible.parser.numbering import CHAPTER, VERSE, resolve_number

logger = logging.getLogger(__name__)

UNKNOWN_BOOK_ID = "Unknown"

_WHITESPACE = re.compile(r"\s+")
_BOOK_ID_PREFIX = re.compile(r"^([^.]+)")

# Attribute names carrying an OSIS reference, in lookup order
_ID_ATTRS = ("osisID", "ID", "id")


def normalize_text(raw: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", raw).strip()


def derive_book_id(div: XmlNode) -> str:
    """Return the book id of a division.

    Uses the division's own osisID, then the prefix of its first
    chapter's osisID, then UNKNOWN_BOOK_ID.
    """
    own = div.attrs.get("osisID", "").strip()
    if own:
        return own
    chapters = div.children("chapter")
    if chapters:
        match = _BOOK_ID_PREFIX.match((chapters[0].attr(*_ID_ATTRS) or "").strip())
        if match:
            return match.group(1)
    return UNKNOWN_BOOK_ID


def _book_title(div: XmlNode) -> Optional[str]:
    """The ``<title>`` child's text, else the division's ``title`` attribute."""
    title = div.child("title")
    if title is not None:
        text = normalize_text(title.collect_text())
        if text:
            return text
    return normalize_text(div.attrs.get("title", "")) or None


def _parse_verse(node: XmlNode, book_id: str, chapter_number: int, position: int) -> Verse:
    number = resolve_number(node.attr(*_ID_ATTRS), node.attrs.get("n"), position, VERSE)
    return Verse(
        id=f"{book_id}.{chapter_number}.{number.value}",
        number=number.value,
        text=normalize_text(node.collect_text()),
    )


def _parse_chapter(node: XmlNode, book_id: str, position: int) -> Chapter:
    number = resolve_number(node.attr(*_ID_ATTRS), node.attrs.get("n"), position, CHAPTER)
    verses = tuple(
        _parse_verse(v, book_id, number.value, i)
        for i, v in enumerate(node.children("verse"), start=1)
    )
    return Chapter(number=number.value, verses=verses)


def parse_book_div(div: XmlNode, language: str = "en") -> Book:
    """Convert one book division into a Book.

    Never raises: missing ids and numbers fall back to document position.

    Args:
        div: Decoded book division (or any node holding ``chapter`` children)
        language: Display language for the name lookup table

    Returns:
        Book with chapters and verses in document order
    """
    book_id = derive_book_id(div)
    title = _book_title(div)
    chapters = tuple(
        _parse_chapter(ch, book_id, i)
        for i, ch in enumerate(div.children("chapter"), start=1)
    )
    return Book(
        id=book_id,
        name=title or book_name(book_id, language) or book_id,
        chapters=chapters,
        title=title,
    )


def _is_type(div: XmlNode, kind: str) -> bool:
    return div.attrs.get("type", "").lower() == kind.lower()


def _top_divs(document: XmlNode) -> List[XmlNode]:
    """Return the divisions under osis/osisText, osisText, or a root div."""
    osis = document.child("osis")
    osis_text = osis.child("osisText") if osis is not None else document.child("osisText")
    if osis_text is not None:
        return osis_text.children("div")
    return document.children("div")


def _book_divs(divs: List[XmlNode]) -> List[XmlNode]:
    """Keep book divisions, descending into OT/NT book groups."""
    books: List[XmlNode] = []
    for div in divs:
        if _is_type(div, "bookGroup"):
            books.extend(_book_divs(div.children("div")))
        elif "type" not in div.attrs or _is_type(div, "book"):
            books.append(div)
    return books


def parse_osis_document(source: Union[str, bytes, XmlNode], language: str = "en") -> List[Book]:
    """Parse a whole-Bible OSIS document into books in document order.

    Raises:
        OsisDecodeError: If the XML is malformed
        OsisStructureError: If no book division is present
    """
    document = source if isinstance(source, XmlNode) else decode(source)
    divs = _book_divs(_top_divs(document))
    if not divs:
        raise OsisStructureError("Invalid OSIS XML: no book divisions found")
    books = [parse_book_div(div, language) for div in divs]
    logger.debug("Parsed %d books from OSIS document", len(books))
    return books


def parse_osis_book(source: Union[str, bytes, XmlNode], language: str = "en") -> Book:
    """Parse a single-book OSIS document.

    Accepts a full osis/osisText wrapper, a bare book div, or a bare
    chapter as the root element.

    Raises:
        OsisDecodeError: If the XML is malformed
        OsisStructureError: If no book or chapter is present
    """
    document = source if isinstance(source, XmlNode) else decode(source)
    divs = _top_divs(document)
    book_div: Optional[XmlNode] = None
    if divs:
        books = _book_divs(divs)
        typed = [d for d in books if _is_type(d, "book")]
        book_div = typed[0] if typed else (books[0] if books else divs[0])
    if book_div is None:
        chapters = document.children("chapter")
        if chapters:
            book_div = XmlNode(tag="div", content=list(chapters))
    if book_div is None:
        raise OsisStructureError("Invalid OSIS book XML: no book or chapters found")
    return parse_book_div(book_div, language)
