"""
Page geometry for KDP interiors

Minimum and recommended margins, text block size, the line/character
capacity shared by the estimator and the pagination engine, and the page
count estimate used before real pagination.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from kdp_formatter.config.sizes import BLEED_IN, INCH
from kdp_formatter.models.book import KDPSettings, Margins, TrimSize

logger = logging.getLogger(__name__)

# Average glyph width as a fraction of the point size. Both the estimator and
# the paginator use it, so page counts agree even though it is approximate.
AVG_CHAR_WIDTH_RATIO = 0.48

# KDP gutter steps: (max page count, gutter in inches)
GUTTER_STEPS = (
    (150, 0.375),
    (300, 0.5),
    (500, 0.625),
    (700, 0.75),
)
MAX_GUTTER = 0.875  # 701-828 pages

MIN_EDGE_MARGIN = 0.25
MIN_EDGE_MARGIN_BLEED = 0.375
RECOMMENDED_EDGE_MARGIN = 0.5
RECOMMENDED_EXTRA_GUTTER = 0.125

# Neutral margins for the first estimation pass, before the gutter is known
PLACEHOLDER_MARGINS = Margins(top=0.5, bottom=0.5, inside=0.5, outside=0.5)
MIN_PAGES = 24


@dataclass(frozen=True)
class LayoutMetrics:
    text_width_pt: float
    text_height_pt: float
    line_height_pt: float
    lines_per_page: int
    chars_per_line: int

    @property
    def can_typeset(self) -> bool:
        return self.lines_per_page > 0 and self.chars_per_line > 0


def min_gutter(page_count: int) -> float:
    for max_pages, gutter in GUTTER_STEPS:
        if page_count <= max_pages:
            return gutter
    return MAX_GUTTER


def min_margins(page_count: int, bleed: bool) -> Margins:
    edge = MIN_EDGE_MARGIN_BLEED if bleed else MIN_EDGE_MARGIN
    return Margins(top=edge, bottom=edge, inside=min_gutter(page_count), outside=edge)


def recommended_margins(page_count: int, bleed: bool) -> Margins:
    m = min_margins(page_count, bleed)
    return Margins(
        top=max(m.top, RECOMMENDED_EDGE_MARGIN),
        bottom=max(m.bottom, RECOMMENDED_EDGE_MARGIN),
        inside=m.inside + RECOMMENDED_EXTRA_GUTTER,
        outside=max(m.outside, RECOMMENDED_EDGE_MARGIN),
    )


def text_block_size(trim_size: TrimSize, margins: Margins) -> Tuple[float, float]:
    """(width, height) of the printable text area in inches."""
    return (
        trim_size.width - margins.inside - margins.outside,
        trim_size.height - margins.top - margins.bottom,
    )


def bleed_dimensions(trim_size: TrimSize) -> Tuple[float, float]:
    """Page size with bleed: outside edge once, top and bottom both."""
    return trim_size.width + BLEED_IN, trim_size.height + 2 * BLEED_IN


def layout_metrics(settings: KDPSettings, margins: Margins) -> LayoutMetrics:
    width_in, height_in = text_block_size(settings.trim_size, margins)
    text_width_pt = width_in * INCH
    text_height_pt = height_in * INCH
    line_height_pt = settings.font_size * settings.line_height
    avg_char_width = settings.font_size * AVG_CHAR_WIDTH_RATIO
    return LayoutMetrics(
        text_width_pt=text_width_pt,
        text_height_pt=text_height_pt,
        line_height_pt=line_height_pt,
        lines_per_page=math.floor(text_height_pt / line_height_pt),
        chars_per_line=math.floor(text_width_pt / avg_char_width),
    )


def estimate_page_count(text: str, settings: KDPSettings, margins: Margins) -> int:
    """
    Estimate the printed page count of ``text``.

    Blank lines cost one line; other lines cost one line per ``chars_per_line``
    characters. The result is rounded up to an even number. Returns 0 for
    empty text and 1 when the geometry cannot hold any text.
    """
    if not text.strip():
        return 0

    metrics = layout_metrics(settings, margins)
    if not metrics.can_typeset:
        logger.warning("Text block holds no lines with current margins and font size")
        return 1

    total_lines = 0
    for line in text.split("\n"):
        if not line.strip():
            total_lines += 1
        else:
            total_lines += max(1, math.ceil(len(line) / metrics.chars_per_line))

    pages = max(1, math.ceil(total_lines / metrics.lines_per_page))
    return pages if pages % 2 == 0 else pages + 1


def bootstrap_margins(text: str, settings: KDPSettings) -> Tuple[Margins, int]:
    """
    Pick recommended margins for ``text`` before its page count is known.

    Pass one estimates with placeholder margins, the estimate (at least the
    KDP minimum) selects the recommended margins, and pass two re-estimates
    with them. Exactly two passes; the result is not iterated further.
    """
    first_pass = estimate_page_count(text, settings, PLACEHOLDER_MARGINS)
    margins = recommended_margins(max(first_pass, MIN_PAGES), settings.bleed)
    page_count = estimate_page_count(text, settings, margins)
    logger.debug("Margins bootstrap: %d pages -> %s -> %d pages", first_pass, margins, page_count)
    return margins, page_count
