"""Bible canon metadata - OSIS book ids, localized names, chapters."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class CanonBook:
    """Metadata for a Bible book."""

    id: str
    name_en: str
    name_ar: str
    chapters: int


# Protestant canon in OSIS order with English and Arabic display names
_CANON_TABLE: Sequence[CanonBook] = (
    # Old Testament
    CanonBook("Gen", "Genesis", "التكوين", 50),
    CanonBook("Exod", "Exodus", "الخروج", 40),
    CanonBook("Lev", "Leviticus", "اللاويين", 27),
    CanonBook("Num", "Numbers", "العدد", 36),
    CanonBook("Deut", "Deuteronomy", "التثنية", 34),
    CanonBook("Josh", "Joshua", "يشوع", 24),
    CanonBook("Judg", "Judges", "القضاة", 21),
    CanonBook("Ruth", "Ruth", "راعوث", 4),
    CanonBook("1Sam", "1 Samuel", "صموئيل الأول", 31),
    CanonBook("2Sam", "2 Samuel", "صموئيل الثاني", 24),
    CanonBook("1Kgs", "1 Kings", "الملوك الأول", 22),
    CanonBook("2Kgs", "2 Kings", "الملوك الثاني", 25),
    CanonBook("1Chr", "1 Chronicles", "أخبار الأيام الأول", 29),
    CanonBook("2Chr", "2 Chronicles", "أخبار الأيام الثاني", 36),
    CanonBook("Ezra", "Ezra", "عزرا", 10),
    CanonBook("Neh", "Nehemiah", "نحميا", 13),
    CanonBook("Esth", "Esther", "أستير", 10),
    CanonBook("Job", "Job", "أيوب", 42),
    CanonBook("Ps", "Psalms", "المزامير", 150),
    CanonBook("Prov", "Proverbs", "الأمثال", 31),
    CanonBook("Eccl", "Ecclesiastes", "الجامعة", 12),
    CanonBook("Song", "Song of Solomon", "نشيد الأنشاد", 8),
    CanonBook("Isa", "Isaiah", "إشعياء", 66),
    CanonBook("Jer", "Jeremiah", "إرميا", 52),
    CanonBook("Lam", "Lamentations", "مراثي إرميا", 5),
    CanonBook("Ezek", "Ezekiel", "حزقيال", 48),
    CanonBook("Dan", "Daniel", "دانيال", 12),
    CanonBook("Hos", "Hosea", "هوشع", 14),
    CanonBook("Joel", "Joel", "يوئيل", 3),
    CanonBook("Amos", "Amos", "عاموس", 9),
    CanonBook("Obad", "Obadiah", "عوبديا", 1),
    CanonBook("Jonah", "Jonah", "يونان", 4),
    CanonBook("Mic", "Micah", "ميخا", 7),
    CanonBook("Nah", "Nahum", "ناحوم", 3),
    CanonBook("Hab", "Habakkuk", "حبقوق", 3),
    CanonBook("Zeph", "Zephaniah", "صفنيا", 3),
    CanonBook("Hag", "Haggai", "حجاي", 2),
    CanonBook("Zech", "Zechariah", "زكريا", 14),
    CanonBook("Mal", "Malachi", "ملاخي", 4),
    # New Testament
    CanonBook("Matt", "Matthew", "متى", 28),
    CanonBook("Mark", "Mark", "مرقس", 16),
    CanonBook("Luke", "Luke", "لوقا", 24),
    CanonBook("John", "John", "يوحنا", 21),
    CanonBook("Acts", "Acts", "أعمال الرسل", 28),
    CanonBook("Rom", "Romans", "رومية", 16),
    CanonBook("1Cor", "1 Corinthians", "كورنثوس الأولى", 16),
    CanonBook("2Cor", "2 Corinthians", "كورنثوس الثانية", 13),
    CanonBook("Gal", "Galatians", "غلاطية", 6),
    CanonBook("Eph", "Ephesians", "أفسس", 6),
    CanonBook("Phil", "Philippians", "فيلبي", 4),
    CanonBook("Col", "Colossians", "كولوسي", 4),
    CanonBook("1Thess", "1 Thessalonians", "تسالونيكي الأولى", 5),
    CanonBook("2Thess", "2 Thessalonians", "تسالونيكي الثانية", 3),
    CanonBook("1Tim", "1 Timothy", "تيموثاوس الأول", 6),
    CanonBook("2Tim", "2 Timothy", "تيموثاوس الثاني", 4),
    CanonBook("Titus", "Titus", "تيطس", 3),
    CanonBook("Phlm", "Philemon", "فليمون", 1),
    CanonBook("Heb", "Hebrews", "عبرانيين", 13),
    CanonBook("Jas", "James", "يعقوب", 5),
    CanonBook("1Pet", "1 Peter", "بطرس الأولى", 5),
    CanonBook("2Pet", "2 Peter", "بطرس الثانية", 3),
    CanonBook("1John", "1 John", "يوحنا الأولى", 5),
    CanonBook("2John", "2 John", "يوحنا الثانية", 1),
    CanonBook("3John", "3 John", "يوحنا الثالثة", 1),
    CanonBook("Jude", "Jude", "يهودا", 1),
    CanonBook("Rev", "Revelation", "سفر الرؤيا", 22),
)

# Canonical book order
OSIS_ORDER: List[str] = [book.id for book in _CANON_TABLE]

# Lookup tables
_BOOK_BY_ID: Dict[str, CanonBook] = {book.id: book for book in _CANON_TABLE}
_INDEX_BY_ID: Dict[str, int] = {book_id: i for i, book_id in enumerate(OSIS_ORDER)}

BOOK_NAMES: Dict[str, Dict[str, str]] = {
    "en": {book.id: book.name_en for book in _CANON_TABLE},
    "ar": {book.id: book.name_ar for book in _CANON_TABLE},
}

# Build alias map: ids and both languages' names
_ALIAS_MAP: Dict[str, str] = {}
for book in _CANON_TABLE:
    _ALIAS_MAP[book.id.lower()] = book.id
    _ALIAS_MAP[book.name_en.lower()] = book.id
    _ALIAS_MAP[book.name_en.lower().replace(" ", "")] = book.id
    _ALIAS_MAP[book.name_ar] = book.id


def book_index(book_id: str) -> int:
    """Return the index of a book in the canon (0-based), -1 if unknown."""
    return _INDEX_BY_ID.get(book_id, -1)


def book_chapters(book_id: str) -> int:
    """Return the number of chapters in a book."""
    book = _BOOK_BY_ID.get(book_id)
    return book.chapters if book else 0


def book_name(book_id: str, language: str = "en") -> Optional[str]:
    """Return the localized display name for a book id.

    Args:
        book_id: OSIS book id (e.g. "Gen", "1Cor")
        language: Display language code ("en" or "ar")

    Returns:
        Localized name, or None if the id or language is unknown
    """
    return BOOK_NAMES.get(language, {}).get(book_id)


def osis_id_for_number(number: int) -> Optional[str]:
    """Return the OSIS id of the book at 1-based canonical position."""
    if 1 <= number <= len(OSIS_ORDER):
        return OSIS_ORDER[number - 1]
    return None


def resolve_book_id(token: str, fuzzy: bool = True) -> Optional[str]:
    """Resolve an id, English or Arabic name to the OSIS id."""
    if not token:
        return None
    needle = token.strip().lower()
    if needle in _ALIAS_MAP:
        return _ALIAS_MAP[needle]
    normalized = needle.replace(" ", "").replace(".", "")
    if normalized in _ALIAS_MAP:
        return _ALIAS_MAP[normalized]

    # Fuzzy prefix matching, earliest book wins
    if fuzzy and normalized:
        candidates = sorted(
            {book_index(book_id) for key, book_id in _ALIAS_MAP.items() if key.startswith(normalized)}
        )
        if candidates:
            return OSIS_ORDER[candidates[0]]

    return None
