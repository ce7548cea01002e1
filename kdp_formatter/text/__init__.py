"""Manuscript text handling: extraction, heading detection and chapter splitting"""

from kdp_formatter.text.chapter_splitter import (
    chapters_to_text,
    extract_title_from_text,
    merge_with_previous,
    rename_chapter,
    split_into_chapters,
)
from kdp_formatter.text.extractor import ExtractionError, extract_text
from kdp_formatter.text.headings import is_heading, sanitize_title

__all__ = [
    "ExtractionError",
    "chapters_to_text",
    "extract_text",
    "extract_title_from_text",
    "is_heading",
    "merge_with_previous",
    "rename_chapter",
    "sanitize_title",
    "split_into_chapters",
]
