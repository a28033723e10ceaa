"""Shared builders for OSIS test documents."""

from typing import Iterable

import pytest

OSIS_NS = "http://www.bibletechnologies.net/2003/OSIS/namespace"


def build_book_div(book_id: str, chapters: int = 2, verses: int = 3) -> str:
    parts = [f'<div type="book" osisID="{book_id}">']
    for c in range(1, chapters + 1):
        parts.append(f'<chapter osisID="{book_id}.{c}">')
        for v in range(1, verses + 1):
            parts.append(f'<verse osisID="{book_id}.{c}.{v}">{book_id} {c}:{v} text</verse>')
        parts.append("</chapter>")
    parts.append("</div>")
    return "".join(parts)


def build_osis(divs: Iterable[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<osis xmlns="{OSIS_NS}"><osisText osisIDWork="Test">'
        + "".join(divs)
        + "</osisText></osis>"
    )


@pytest.fixture
def book_div():
    """Builder for a single book division."""
    return build_book_div


@pytest.fixture
def osis_document():
    """Builder for a whole-Bible OSIS document from book ids."""

    def build(book_ids: Iterable[str], chapters: int = 2, verses: int = 3) -> str:
        return build_osis(build_book_div(b, chapters, verses) for b in book_ids)

    return build


@pytest.fixture
def genesis_xml() -> str:
    """Genesis 1:1-3 with inline markup."""
    return build_osis([
        '<div type="book" osisID="Gen">'
        "<title>Genesis</title>"
        '<chapter osisID="Gen.1">'
        '<verse osisID="Gen.1.1">In the <w lemma="strong:H7225">beginning</w> God created '
        "the heavens and the earth</verse>"
        '<verse osisID="Gen.1.2">And the earth was\n   without form</verse>'
        '<verse osisID="Gen.1.3">And God said, Let there be light</verse>'
        "</chapter>"
        "</div>"
    ])
