"""
Chapter segmentation

Splits raw manuscript text into chapters on detected headings, recombines
chapters into text, and implements the chapter edits offered after
detection (title trimming and merging false positives into the previous
chapter).
"""

import html
import logging
import uuid
from typing import List, Optional

from kdp_formatter.models.book import Chapter
from kdp_formatter.text.headings import is_heading, sanitize_title, strip_markdown_marker

logger = logging.getLogger(__name__)

CHAPTER_SEPARATOR = "\n\n\n"


def new_chapter_id() -> str:
    return f"ch_{uuid.uuid4().hex[:12]}"


def _make_chapter(title: str, content: str) -> Chapter:
    return Chapter(id=new_chapter_id(), title=title, content=content)


def split_into_chapters(text: str) -> List[Chapter]:
    """
    Split manuscript text into chapters.

    Each heading line closes the chapter before it. A heading directly
    followed by another heading still produces an (empty) chapter. Text
    before the first heading becomes its own numbered chapter, and text with
    no headings at all becomes a single "Chapter 1".
    """
    if not text.strip():
        return []

    lines = text.replace("\r\n", "\n").split("\n")
    chapters: List[Chapter] = []
    current_title = ""
    current_lines: List[str] = []
    found_heading = False

    for line in lines:
        if not is_heading(line):
            current_lines.append(line)
            continue

        if current_lines or found_heading:
            content = "\n".join(current_lines).strip()
            if content or found_heading:
                chapters.append(_make_chapter(current_title or f"Chapter {len(chapters) + 1}", content))
        found_heading = True

        title, overflow = sanitize_title(strip_markdown_marker(line))
        if overflow:
            logger.debug("Heading %r trimmed to %r", line.strip()[:60], title)
        current_title = title
        current_lines = [overflow] if overflow else []

    last_content = "\n".join(current_lines).strip()
    if found_heading:
        chapters.append(_make_chapter(current_title or f"Chapter {len(chapters) + 1}", last_content))
    elif last_content:
        chapters.append(_make_chapter("Chapter 1", last_content))

    logger.debug("Detected %d chapter(s)", len(chapters))
    return chapters


def chapters_to_text(chapters: List[Chapter]) -> str:
    return CHAPTER_SEPARATOR.join(f"{ch.title}\n\n{ch.content}" for ch in chapters)


def rename_chapter(chapters: List[Chapter], chapter_id: str, new_title: str) -> List[Chapter]:
    """
    Change a chapter title.

    When the new title is a prefix of the old one, the cut-off tail is moved
    to the start of the chapter body instead of being discarded.
    """
    result: List[Chapter] = []
    for ch in chapters:
        if ch.id != chapter_id:
            result.append(ch)
            continue

        old_title = ch.title
        removed = ""
        if len(old_title) > len(new_title) and old_title.startswith(new_title):
            removed = old_title[len(new_title):].strip()

        if removed:
            result.append(ch.model_copy(update={
                "title": new_title,
                "content": f"{removed}\n\n{ch.content}",
                "html_content": f"<p>{html.escape(removed)}</p>{ch.html_content}" if ch.html_content else None,
            }))
        else:
            result.append(ch.model_copy(update={"title": new_title}))
    return result


def _paragraphs_to_html(content: str) -> str:
    return "<p>" + "</p><p>".join(html.escape(p) for p in content.split("\n\n")) + "</p>"


def merge_with_previous(chapters: List[Chapter], chapter_id: str) -> List[Chapter]:
    """
    Fold a chapter into its predecessor.

    The chapter's title becomes a paragraph of the previous chapter's body,
    followed by its content. The first chapter cannot be merged.
    """
    index = next((i for i, ch in enumerate(chapters) if ch.id == chapter_id), -1)
    if index <= 0:
        return list(chapters)

    current = chapters[index]
    previous = chapters[index - 1]

    merged_html: Optional[str] = None
    if previous.html_content:
        merged_html = (
            previous.html_content
            + f"<p><strong>{html.escape(current.title)}</strong></p>"
            + (current.html_content or _paragraphs_to_html(current.content))
        )

    merged = previous.model_copy(update={
        "content": f"{previous.content}\n\n{current.title}\n\n{current.content}",
        "html_content": merged_html,
    })
    logger.debug("Merged chapter %r into %r", current.title, previous.title)
    return chapters[:index - 1] + [merged] + chapters[index + 1:]


def extract_title_from_text(text: str) -> str:
    """Guess the book title from the first line of the manuscript, or ''."""
    stripped = text.strip()
    if not stripped:
        return ""

    first_line = stripped.split("\n")[0].strip()
    if (
        len(first_line) < 100
        and not first_line.endswith(".")
        and not first_line.startswith("Chapter")
        and not first_line.startswith("CHAPTER")
    ):
        return strip_markdown_marker(first_line)
    return ""
