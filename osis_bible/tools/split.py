"""Split whole-Bible XML into per-book OSIS files.

Two inputs are understood: a regular OSIS document with
``<div type="book">`` divisions, and the numbered
``<book number><chapter number><verse number>`` layout, which is
converted to OSIS ids using the canonical book order.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from osis_bible.data.canon import osis_id_for_number
from osis_bible.errors import OsisDecodeError, OsisStructureError

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

_BOOK_ID_PREFIX = re.compile(r"^([^.]+)")


def _local(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _parse(source: Union[str, bytes]) -> ET.Element:
    try:
        root = ET.fromstring(source)
    except ET.ParseError as exc:
        raise OsisDecodeError(f"Malformed XML: {exc}") from exc
    # Drop namespaces so written files carry plain OSIS tags
    for element in root.iter():
        if isinstance(element.tag, str):
            element.tag = _local(element.tag)
    return root


def _serialize(element: ET.Element) -> str:
    element.tail = None
    return XML_DECLARATION + ET.tostring(element, encoding="unicode") + "\n"


def _book_divs(parent: ET.Element) -> Iterator[ET.Element]:
    for div in parent.iter("div"):
        if div.get("type", "").lower() == "book":
            yield div


def _element_book_id(div: ET.Element) -> Optional[str]:
    if div.get("osisID"):
        return div.get("osisID")
    chapter = div.find("chapter")
    if chapter is not None:
        match = _BOOK_ID_PREFIX.match(chapter.get("osisID", ""))
        if match:
            return match.group(1)
    return None


def split_osis(source: Union[str, bytes]) -> Dict[str, str]:
    """Split an OSIS document into one XML document per book.

    Args:
        source: Whole-Bible OSIS XML

    Returns:
        Mapping of book id to a standalone ``<div type="book">`` document,
        in document order

    Raises:
        OsisDecodeError: If the XML is malformed
        OsisStructureError: If no book division is present
    """
    root = _parse(source)
    books: Dict[str, str] = {}
    for div in _book_divs(root):
        book_id = _element_book_id(div)
        if not book_id:
            logger.warning("Skipping book division without osisID")
            continue
        if book_id in books:
            logger.warning("Skipping duplicate book %s", book_id)
            continue
        books[book_id] = _serialize(div)
    if not books:
        raise OsisStructureError("No book divisions found")
    return books


def _convert_book(book: ET.Element, book_id: str) -> ET.Element:
    div = ET.Element("div", {"type": "book", "osisID": book_id})
    for chapter in book:
        if chapter.tag.lower() != "chapter":
            continue
        ch_num = chapter.get("number", "").strip()
        ch_id = f"{book_id}.{ch_num}" if ch_num else book_id
        new_chapter = ET.SubElement(div, "chapter", {"osisID": ch_id})
        for verse in chapter:
            if verse.tag.lower() != "verse":
                continue
            v_num = verse.get("number", "").strip()
            attrs = {"osisID": f"{ch_id}.{v_num}"} if ch_num and v_num else {}
            new_verse = ET.SubElement(new_chapter, "verse", attrs)
            new_verse.text = verse.text
            for child in list(verse):
                new_verse.append(child)
    return div


def convert_numbered(source: Union[str, bytes]) -> Dict[str, str]:
    """Convert numbered ``<book number="N">`` XML into per-book OSIS documents.

    Book numbers 1..66 map to OSIS ids in canonical order; chapter and
    verse numbers become osisID components.

    Raises:
        OsisDecodeError: If the XML is malformed
        OsisStructureError: If no numbered book is present
    """
    root = _parse(source)
    books: Dict[str, str] = {}
    for book in root.iter():
        if not isinstance(book.tag, str) or book.tag.lower() != "book":
            continue
        raw = book.get("number", "").strip()
        book_id = osis_id_for_number(int(raw)) if raw.isdigit() else None
        if book_id is None:
            logger.warning("Skipping book with number %r: no OSIS abbreviation", raw)
            continue
        books[book_id] = _serialize(_convert_book(book, book_id))
    if not books:
        raise OsisStructureError("No numbered books found")
    return books


def write_books(books: Dict[str, str], out_dir: Union[str, Path], overwrite: bool = True) -> List[Path]:
    """Write ``{book_id}.xml`` files and return the paths written."""
    out = Path(out_dir).expanduser()
    out.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for book_id, text in books.items():
        path = out / f"{book_id}.xml"
        if path.exists() and not overwrite:
            logger.info("Keeping existing %s", path.name)
            continue
        path.write_text(text, encoding="utf-8")
        written.append(path)
    logger.info("Wrote %d book file(s) to %s", len(written), out)
    return written
