"""
End-to-end book layout

Runs the pure pipeline for one project: assemble sections, pick margins,
paginate, validate. Callers re-run it on every change.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Union

from kdp_formatter.config.defaults import default_settings
from kdp_formatter.layout.geometry import bootstrap_margins
from kdp_formatter.layout.matter import assemble_sections, default_back_matter, default_front_matter
from kdp_formatter.layout.paginator import render_pages
from kdp_formatter.models.book import (
    BookProject,
    ChapterStartSide,
    KDPSettings,
    Margins,
    RenderableSection,
    RenderedPage,
)
from kdp_formatter.text.chapter_splitter import chapters_to_text, split_into_chapters
from kdp_formatter.validator.kdp_validator import ValidationIssue, validate_layout

logger = logging.getLogger(__name__)


@dataclass
class BookLayout:
    sections: List[RenderableSection]
    margins: Margins
    estimated_page_count: int
    pages: List[RenderedPage]
    issues: List[ValidationIssue]


def new_project(
    raw_text: str,
    title: str = "Untitled Book",
    author: str = "",
    settings: Optional[KDPSettings] = None,
) -> BookProject:
    """Create a project from manuscript text with default matter."""
    return BookProject(
        id=f"bk_{uuid.uuid4().hex[:12]}",
        title=title,
        author_name=author,
        raw_text=raw_text,
        chapters=split_into_chapters(raw_text),
        settings=settings or default_settings(),
        front_matter=default_front_matter(author),
        back_matter=default_back_matter(author),
        updated_at=time.time(),
    )


def build_book(
    project: BookProject,
    chapter_start_side: Union[ChapterStartSide, str] = ChapterStartSide.ANY,
    blank_before: AbstractSet[str] = frozenset(),
) -> BookLayout:
    """
    Lay out a project.

    Margins come from the page count estimate of the chapter text; the
    validator checks that estimate, while pagination produces the actual
    pages from the assembled sections.
    """
    settings = project.settings
    sections = assemble_sections(
        project.front_matter,
        project.chapters,
        project.back_matter,
        project.title,
        project.author_name,
    )
    margins, page_count = bootstrap_margins(chapters_to_text(project.chapters), settings)
    pages = render_pages(sections, settings, margins, chapter_start_side, blank_before)
    issues = validate_layout(settings, page_count, margins)
    logger.info(
        "Laid out %r: %d section(s), %d page(s), estimate %d, %d issue(s)",
        project.title,
        len(sections),
        len(pages),
        page_count,
        len(issues),
    )
    return BookLayout(
        sections=sections,
        margins=margins,
        estimated_page_count=page_count,
        pages=pages,
        issues=issues,
    )
