"""OSIS XML decoding and normalization."""

from osis_bible.parser.decoder import XmlNode, decode
from osis_bible.parser.numbering import NumberSource, ResolvedNumber, resolve_number
from osis_bible.parser.normalizer import (
    UNKNOWN_BOOK_ID,
    derive_book_id,
    normalize_text,
    parse_book_div,
    parse_osis_book,
    parse_osis_document,
)

__all__ = [
    "XmlNode",
    "decode",
    "NumberSource",
    "ResolvedNumber",
    "resolve_number",
    "UNKNOWN_BOOK_ID",
    "derive_book_id",
    "normalize_text",
    "parse_book_div",
    "parse_osis_book",
    "parse_osis_document",
]
