"""
Chapter heading detection

Regex signatures for chapter/section headings and a sanitizer that trims
runaway titles when a long line of prose is mistaken for a heading.
"""

import re
from typing import List, NamedTuple, Pattern

# Case-insensitive signatures; a line is a heading if any of them matches
HEADING_PATTERNS: List[Pattern[str]] = [
    re.compile(r"^chapter\s+\d+", re.IGNORECASE),
    re.compile(r"^chapter\s+[ivxlcdm]+", re.IGNORECASE),  # roman numerals
    re.compile(r"^ch\.\s*\d+", re.IGNORECASE),
    re.compile(r"^part\s+\d+", re.IGNORECASE),
    re.compile(r"^part\s+[ivxlcdm]+", re.IGNORECASE),
    re.compile(r"^section\s+\d+", re.IGNORECASE),
    re.compile(r"^prologue$", re.IGNORECASE),
    re.compile(r"^epilogue$", re.IGNORECASE),
    re.compile(r"^introduction$", re.IGNORECASE),
    re.compile(r"^foreword$", re.IGNORECASE),
    re.compile(r"^preface$", re.IGNORECASE),
    re.compile(r"^afterword$", re.IGNORECASE),
    re.compile(r"^appendix", re.IGNORECASE),
    re.compile(r"^acknowledgments?$", re.IGNORECASE),
    re.compile(r"^dedication$", re.IGNORECASE),
    re.compile(r"^\d+\.\s+\S"),  # "1. Title"
    re.compile(r"^#\s+"),  # markdown heading
    re.compile(r"^##\s+"),  # markdown heading level 2
]

MAX_TITLE_WORDS = 10

# Structured "<indicator>: Short Title." prefixes, tried first
SEPARATOR_PATTERNS: List[Pattern[str]] = [
    re.compile(r"^(chapter\s+\d+[.:]\s*[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
    re.compile(r"^(chapter\s+[ivxlcdm]+[.:]\s*[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
    re.compile(r"^(part\s+\d+[.:]\s*[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
    re.compile(r"^(prologue[.:]\s*[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
    re.compile(r"^(epilogue[.:]\s*[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
    re.compile(r"^(\d+\.\s+[^.!?\n]{0,50})[.!?\n]", re.IGNORECASE),
]

COLON_PATTERN = re.compile(r"^([^:]{5,60}):\s*(.+)$")
DASH_PATTERN = re.compile(r"^([^—–-]{5,60})[—–]\s*(.+)$")
SENTENCE_PATTERN = re.compile(r"^([^.]{10,80}\.)\s+(.+)$")
INDICATOR_PATTERN = re.compile(
    r"^(chapter\s+\d+|chapter\s+[ivxlcdm]+|part\s+\d+|prologue|epilogue|\d+\.)",
    re.IGNORECASE,
)
MARKDOWN_MARKER = re.compile(r"^#+\s*")


class SanitizedTitle(NamedTuple):
    title: str
    overflow: str


def is_heading(line: str) -> bool:
    trimmed = line.strip()
    if not trimmed:
        return False
    return any(pattern.search(trimmed) for pattern in HEADING_PATTERNS)


def strip_markdown_marker(line: str) -> str:
    return MARKDOWN_MARKER.sub("", line.strip())


def _word_count(text: str) -> int:
    return len(text.split())


def sanitize_title(raw_title: str) -> SanitizedTitle:
    """
    Bound an over-long detected title.

    Titles of up to ten words are returned untouched. Longer ones are cut at
    the first break point found, trying in order: a structured
    "Chapter N: Title." prefix, a colon, an em/en dash, the first sentence,
    a chapter indicator plus four words, and finally the first six words.
    Everything after the cut comes back as ``overflow`` so the caller can put
    it back into the chapter body.
    """
    trimmed = raw_title.strip()
    words = trimmed.split()

    if len(words) <= MAX_TITLE_WORDS:
        return SanitizedTitle(trimmed, "")

    for pattern in SEPARATOR_PATTERNS:
        match = pattern.match(trimmed)
        if match:
            title = match.group(1).strip()
            # terminator stays at the head of the overflow
            overflow = trimmed[match.end() - 1:].strip()
            if _word_count(title) <= MAX_TITLE_WORDS:
                return SanitizedTitle(title, overflow)

    for pattern in (COLON_PATTERN, DASH_PATTERN, SENTENCE_PATTERN):
        match = pattern.match(trimmed)
        if match:
            title = match.group(1).strip()
            if _word_count(title) <= MAX_TITLE_WORDS:
                return SanitizedTitle(title, match.group(2).strip())

    match = INDICATOR_PATTERN.match(trimmed)
    if match:
        indicator = match.group(0)
        rest_words = trimmed[len(indicator):].split()
        title = f"{indicator} {' '.join(rest_words[:4])}".strip()
        return SanitizedTitle(title, " ".join(rest_words[4:]))

    return SanitizedTitle(" ".join(words[:6]), " ".join(words[6:]))
