"""Maintenance tools for Bible source files."""

from osis_bible.tools.split import convert_numbered, split_osis, write_books

__all__ = ["convert_numbered", "split_osis", "write_books"]
