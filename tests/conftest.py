from typing import Callable, List

import pytest

from kdp_formatter.config.defaults import default_settings
from kdp_formatter.layout.geometry import PLACEHOLDER_MARGINS
from kdp_formatter.layout.paginator import render_pages
from kdp_formatter.models.book import KDPSettings, Margins, RenderableSection, RenderedPage, SectionKind


@pytest.fixture
def settings() -> KDPSettings:
    return default_settings()


@pytest.fixture
def margins() -> Margins:
    return PLACEHOLDER_MARGINS


@pytest.fixture
def short_manuscript() -> str:
    return (
        "Chapter 1\n"
        "It was a bright cold day in April.\n\n"
        "The clocks were striking thirteen.\n"
        "Chapter 2\n"
        "Nobody noticed.\n"
    )


@pytest.fixture
def long_manuscript() -> str:
    """Ten chapters, comfortably above the minimum page count."""
    paragraph = " ".join(["word"] * 120)
    chapters = []
    for i in range(1, 11):
        body = "\n\n".join([paragraph] * 40)
        chapters.append(f"Chapter {i}\n{body}")
    return "\n".join(chapters)


@pytest.fixture
def one_page_chapters(settings: KDPSettings, margins: Margins) -> Callable[[int], List[RenderedPage]]:
    """Paginate ``n`` single-page chapters."""

    def build(n: int) -> List[RenderedPage]:
        sections = [
            RenderableSection(
                id=f"c{i}",
                kind=SectionKind.CHAPTER,
                title=f"Title c{i}",
                content="Body.",
                show_page_number=True,
            )
            for i in range(n)
        ]
        return render_pages(sections, settings, margins)

    return build
