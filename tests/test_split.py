"""Tests for splitting whole-Bible files into per-book files."""

import pytest

from osis_bible.errors import OsisDecodeError, OsisStructureError
from osis_bible.parser.normalizer import parse_osis_book
from osis_bible.tools.split import convert_numbered, split_osis, write_books

from conftest import build_book_div, build_osis

NUMBERED = """<?xml version="1.0" encoding="UTF-8"?>
<bible>
  <book number="1">
    <chapter number="1">
      <verse number="1">In the beginning</verse>
      <verse number="2">And the earth</verse>
    </chapter>
  </book>
  <book number="31">
    <chapter number="1"><verse number="1">The vision of Obadiah</verse></chapter>
  </book>
  <book number="99"><chapter number="1"><verse number="1">x</verse></chapter></book>
</bible>
"""


class TestSplitOsis:
    """Test OSIS splitting."""

    def test_split(self):
        books = split_osis(build_osis([build_book_div("Gen"), build_book_div("Exod")]))
        assert list(books) == ["Gen", "Exod"]
        book = parse_osis_book(books["Exod"])
        assert book.id == "Exod"
        assert book.total_verses == 6

    def test_namespace_removed(self):
        text = split_osis(build_osis([build_book_div("Gen")]))["Gen"]
        assert "xmlns" not in text
        assert text.startswith("<?xml")

    def test_split_round_trips_text(self, genesis_xml):
        book = parse_osis_book(split_osis(genesis_xml)["Gen"])
        assert book.chapters[0].verses[0].text.startswith("In the beginning God")

    def test_no_books(self):
        with pytest.raises(OsisStructureError):
            split_osis("<osis><osisText/></osis>")

    def test_malformed(self):
        with pytest.raises(OsisDecodeError):
            split_osis("<osis>")


class TestConvertNumbered:
    """Test numbered-layout conversion."""

    def test_convert(self):
        books = convert_numbered(NUMBERED)
        assert list(books) == ["Gen", "Obad"]
        assert 'osisID="Gen.1.2"' in books["Gen"]
        gen = parse_osis_book(books["Gen"])
        assert [v.id for v in gen.chapters[0].verses] == ["Gen.1.1", "Gen.1.2"]
        assert parse_osis_book(books["Obad"]).name == "Obadiah"

    def test_no_numbered_books(self):
        with pytest.raises(OsisStructureError):
            convert_numbered("<bible/>")


class TestWriteBooks:
    """Test writing book files."""

    def test_write(self, tmp_path):
        written = write_books({"Gen": "<div/>", "Exod": "<div/>"}, tmp_path / "out")
        assert sorted(p.name for p in written) == ["Exod.xml", "Gen.xml"]

    def test_no_overwrite(self, tmp_path):
        (tmp_path / "Gen.xml").write_text("keep", encoding="utf-8")
        written = write_books({"Gen": "<div/>"}, tmp_path, overwrite=False)
        assert written == []
        assert (tmp_path / "Gen.xml").read_text(encoding="utf-8") == "keep"
