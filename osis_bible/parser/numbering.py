"""Chapter and verse number derivation from OSIS attributes."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# "Gen.3" -> 3, "Gen.3.16" -> 3
_CHAPTER_ID = re.compile(r"^[^.]+\.(\d+)")
# "Gen.3.16" -> 16
_VERSE_ID = re.compile(r"^[^.]+\.\d+\.(\d+)")
# "3", " 3 ", "3a" -> 3
_LEADING_INT = re.compile(r"^\s*(\d+)")

CHAPTER = 1
VERSE = 2


class NumberSource(Enum):
    """Where a resolved number came from."""

    OSIS_ID = "osisID"
    N_ATTRIBUTE = "n"
    POSITION = "position"


@dataclass(frozen=True)
class ResolvedNumber:
    """A positive number and the attribute it was derived from."""

    value: int
    source: NumberSource

    @property
    def is_fallback(self) -> bool:
        """True when the number was taken from document position."""
        return self.source is NumberSource.POSITION


def number_from_osis_id(osis_id: Optional[str], depth: int) -> Optional[int]:
    """Extract the chapter (depth 1) or verse (depth 2) component of an osisID."""
    if not osis_id:
        return None
    pattern = _CHAPTER_ID if depth == CHAPTER else _VERSE_ID
    match = pattern.match(osis_id.strip())
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def number_from_n(n_attr: Optional[str]) -> Optional[int]:
    """Parse the leading integer of an ``n`` attribute."""
    if not n_attr:
        return None
    match = _LEADING_INT.match(n_attr)
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def resolve_number(
    osis_id: Optional[str],
    n_attr: Optional[str],
    position: int,
    depth: int,
) -> ResolvedNumber:
    """Resolve a chapter or verse number.

    Tries the osisID component, then the ``n`` attribute, then the
    1-based position in the parent sequence.

    Args:
        osis_id: Raw osisID attribute, e.g. "Gen.1.5"
        n_attr: Raw ``n`` attribute
        position: 1-based position in document order
        depth: CHAPTER or VERSE

    Returns:
        ResolvedNumber with a value >= 1
    """
    value = number_from_osis_id(osis_id, depth)
    if value is not None:
        return ResolvedNumber(value, NumberSource.OSIS_ID)
    value = number_from_n(n_attr)
    if value is not None:
        return ResolvedNumber(value, NumberSource.N_ATTRIBUTE)
    return ResolvedNumber(max(position, 1), NumberSource.POSITION)
