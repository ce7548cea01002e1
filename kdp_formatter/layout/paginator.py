"""
Pagination engine

Lays renderable sections out into fixed-size pages of wrapped lines. This
is the only place line breaks and page breaks are decided: the PDF writer
and the preview renderer both draw the pages returned by render_pages().
"""

import logging
from typing import AbstractSet, List, Optional, Union

from kdp_formatter.layout.geometry import LayoutMetrics, layout_metrics
from kdp_formatter.models.book import (
    FRONT_MATTER_KINDS,
    ChapterStartSide,
    KDPSettings,
    Margins,
    RenderableSection,
    RenderedLine,
    RenderedPage,
    SectionKind,
)

logger = logging.getLogger(__name__)

BLANK_BEFORE_PREFIX = "before-"


def wrap_paragraph(paragraph: str, chars_per_line: int) -> List[str]:
    """
    Greedy word wrap.

    A word moves to the next line only when adding it would make the line
    longer than ``chars_per_line``; a line of exactly that length fits. A
    single word longer than the limit gets a line of its own.
    """
    lines: List[str] = []
    current = ""
    for word in paragraph.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > chars_per_line and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _wants_blank_before(section: RenderableSection, blank_before: AbstractSet[str]) -> bool:
    return section.id in blank_before or f"{BLANK_BEFORE_PREFIX}{section.id}" in blank_before


def _misses_start_side(next_page_number: int, start_side: ChapterStartSide) -> bool:
    is_recto = next_page_number % 2 == 1
    if start_side == ChapterStartSide.RIGHT:
        return not is_recto
    if start_side == ChapterStartSide.LEFT:
        return is_recto
    return False


def _blank_page(page_number: int, section_id: str) -> RenderedPage:
    return RenderedPage(
        lines=[],
        page_number=page_number,
        section_id=section_id,
        section_kind=SectionKind.BLANK_PAGE,
        show_page_number=False,
        is_blank_page=True,
    )


class _Pager:
    """Running page counter and output list for one render_pages() call."""

    def __init__(self, metrics: LayoutMetrics):
        self.metrics = metrics
        self.pages: List[RenderedPage] = []
        self.page_number = 0

    def single_page(self, section: RenderableSection, texts: List[str], title_index: Optional[int] = None):
        self.page_number += 1
        lines = [
            RenderedLine(text=text, is_title=(i == title_index), line_index=i)
            for i, text in enumerate(texts)
        ]
        self.pages.append(RenderedPage(
            lines=lines,
            page_number=self.page_number,
            section_id=section.id,
            section_kind=section.kind,
            show_page_number=False,
        ))

    def blank(self, section_id: str):
        self.page_number += 1
        self.pages.append(_blank_page(self.page_number, section_id))

    def title_page(self, section: RenderableSection):
        texts = [""] * (self.metrics.lines_per_page // 3)
        title_index = len(texts)
        texts += [section.title, ""]
        if section.content:
            texts.append(section.content)
        self.single_page(section, texts, title_index)

    def copyright_page(self, section: RenderableSection):
        texts = [""] * (self.metrics.lines_per_page // 2)
        for paragraph in section.content.split("\n"):
            if not paragraph.strip():
                texts.append("")
            else:
                texts.extend(wrap_paragraph(paragraph, self.metrics.chars_per_line))
        self.single_page(section, texts)

    def dedication(self, section: RenderableSection):
        content_lines = section.content.split("\n")
        pad = max(0, (self.metrics.lines_per_page - len(content_lines)) // 2)
        self.single_page(section, [""] * pad + content_lines)

    def flow(self, section: RenderableSection):
        """Multi-page layout for chapters and back matter."""
        heading_alignment = section.style.heading_alignment if section.style else None
        lines_per_page = self.metrics.lines_per_page
        current: List[RenderedLine] = []
        line_index = 0

        def flush():
            nonlocal current
            self.pages.append(RenderedPage(
                lines=current,
                page_number=self.page_number,
                section_id=section.id,
                section_kind=section.kind,
                show_page_number=section.show_page_number,
                html_content=section.html_content,
                heading_alignment=heading_alignment,
                title=section.title,
            ))
            current = []

        def append(text: str, is_title: bool = False):
            nonlocal line_index
            # a page is full only once it already holds lines_per_page lines
            if len(current) >= lines_per_page:
                flush()
                self.page_number += 1
            current.append(RenderedLine(text=text, is_title=is_title, line_index=line_index))
            line_index += 1

        self.page_number += 1
        append("")
        append(section.title, is_title=True)
        append("")

        for paragraph in section.content.split("\n"):
            if not paragraph.strip():
                append("")
                continue
            for text in wrap_paragraph(paragraph, self.metrics.chars_per_line):
                append(text)

        if current:
            flush()


def render_pages(
    sections: List[RenderableSection],
    settings: KDPSettings,
    margins: Margins,
    chapter_start_side: Union[ChapterStartSide, str] = ChapterStartSide.ANY,
    blank_before: AbstractSet[str] = frozenset(),
) -> List[RenderedPage]:
    """
    Paginate ``sections`` into pages.

    Title, copyright and dedication sections always take exactly one page.
    Chapters and back matter flow over as many pages as needed, each page
    holding at most ``lines_per_page`` lines. At most one blank page is
    inserted before a chapter or back matter section when its id is in
    ``blank_before`` or, for chapters, when it would otherwise open on the
    wrong side for ``chapter_start_side``.

    Returns an empty list when the text block cannot hold a single line or
    character; that condition is reported by the validator, not raised here.
    """
    start_side = ChapterStartSide(chapter_start_side)
    metrics = layout_metrics(settings, margins)
    if not metrics.can_typeset:
        logger.warning(
            "Cannot typeset: %d line(s) per page, %d char(s) per line",
            metrics.lines_per_page,
            metrics.chars_per_line,
        )
        return []

    pager = _Pager(metrics)
    for section in sections:
        if section.kind == SectionKind.TITLE_PAGE:
            pager.title_page(section)
            continue
        if section.kind == SectionKind.COPYRIGHT_PAGE:
            pager.copyright_page(section)
            continue
        if section.kind == SectionKind.DEDICATION:
            pager.dedication(section)
            continue

        needs_blank = _wants_blank_before(section, blank_before)
        if section.kind == SectionKind.CHAPTER and _misses_start_side(pager.page_number + 1, start_side):
            needs_blank = True
        if needs_blank:
            pager.blank(f"blank-before-{section.id}")

        pager.flow(section)

    logger.debug(
        "Paginated %d section(s) into %d page(s) (%d lines x %d chars)",
        len(sections),
        len(pager.pages),
        metrics.lines_per_page,
        metrics.chars_per_line,
    )
    return pager.pages


def pad_to_even(pages: List[RenderedPage]) -> List[RenderedPage]:
    """Append one blank page when the page count is odd."""
    if len(pages) % 2 == 0:
        return list(pages)
    last_number = pages[-1].page_number
    return list(pages) + [_blank_page(last_number + 1, "blank-end")]


def is_front_matter(page: RenderedPage) -> bool:
    return page.section_kind in FRONT_MATTER_KINDS
