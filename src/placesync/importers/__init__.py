"""Importers turning external lists into candidate place records."""

from .text import TextEntry, entry_to_record, load_text_file, parse_line, parse_text

__all__ = ["TextEntry", "parse_line", "parse_text", "load_text_file", "entry_to_record"]
