"""Tests for BibleDocument queries."""

import pytest

from osis_bible.data.types import Book, Chapter, SearchHit, Verse
from osis_bible.document import BibleDocument
from osis_bible.parser.normalizer import parse_osis_book, parse_osis_document

from conftest import build_book_div


@pytest.fixture
def document(genesis_xml):
    books = parse_osis_document(genesis_xml) + [parse_osis_book(build_book_div("Exod"))]
    return BibleDocument(books, version="kjv", language="en")


class TestLookup:
    """Test book and chapter lookup."""

    def test_get_book(self, document):
        assert document.get_book("Gen").name == "Genesis"
        assert document.get_book("Rev") is None

    def test_get_chapter(self, document):
        chapter = document.get_chapter("Exod", 2)
        assert chapter.number == 2
        assert len(chapter.verses) == 3
        assert document.get_chapter("Exod", 9) is None
        assert document.get_chapter("Rev", 1) is None

    def test_membership(self, document):
        assert "Gen" in document
        assert "Rev" not in document
        assert len(document) == 2

    def test_books_immutable(self, document):
        assert isinstance(document.books, tuple)
        with pytest.raises(AttributeError):
            document.books[0].name = "Other"

    def test_book_names(self, document):
        assert document.book_names() == {"Gen": "Genesis", "Exod": "Exodus"}


class TestSearch:
    """Test verse search."""

    def test_single_hit(self, document):
        hits = document.search_verses("beginning")
        assert len(hits) == 1
        hit = hits[0]
        assert hit.book_id == "Gen"
        assert hit.chapter_number == 1
        assert hit.number == 1
        assert hit.id == "Gen.1.1"
        assert hit.book_name == "Genesis"

    def test_case_insensitive(self, document):
        assert document.search_verses("BEGINNING") == document.search_verses("beginning")

    def test_no_hits(self, document):
        assert document.search_verses("xyzzy") == []

    def test_empty_query(self, document):
        assert document.search_verses("") == []

    def test_canonical_order(self, document):
        hits = document.search_verses("text")
        assert [h.id for h in hits][:4] == ["Exod.1.1", "Exod.1.2", "Exod.1.3", "Exod.2.1"]

    def test_book_filter(self, document):
        assert len(document.search_verses("and", "Gen")) == 3
        assert document.search_verses("and", "Exod") == []
        assert document.search_verses("and", "Rev") == []

    def test_literal_substring(self):
        """Diacritics are not folded."""
        book = Book("Gen", "Genesis", (Chapter(1, (Verse("Gen.1.1", 1, "فِي الْبَدْءِ"),)),))
        doc = BibleDocument([book], language="ar")
        assert doc.search_verses("في") == []
        assert len(doc.search_verses("فِي")) == 1

    def test_reference(self):
        hit = SearchHit("Gen.1.1", 1, "x", "Gen", "Genesis", 1)
        assert hit.reference == "Genesis 1:1"


class TestStats:
    """Test aggregate counts."""

    def test_stats(self, document):
        stats = document.get_stats()
        assert stats.total_books == 2
        assert stats.total_chapters == 3
        assert stats.total_verses == 9

    def test_empty_document(self):
        stats = BibleDocument([]).get_stats()
        assert stats.total_books == 0
        assert stats.total_chapters == 0


class TestRelabel:
    """Test language relabeling."""

    def test_relabel(self, document):
        arabic = document.relabel("ar")
        assert arabic is not document
        assert arabic.language == "ar"
        assert arabic.get_book("Exod").name == "الخروج"
        # Source titles win over the table
        assert arabic.get_book("Gen").name == "Genesis"
        # The source document is untouched
        assert document.get_book("Exod").name == "Exodus"

    def test_relabel_keeps_totals(self, document):
        arabic = document.relabel("ar")
        assert arabic.get_book("Exod").total_verses == 6
        assert arabic.get_stats() == document.get_stats()
