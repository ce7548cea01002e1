"""Tests for margins, text block geometry and page count estimation."""

import pytest

from kdp_formatter.config.defaults import default_settings
from kdp_formatter.config.sizes import get_trim_size
from kdp_formatter.layout.geometry import (
    PLACEHOLDER_MARGINS,
    bleed_dimensions,
    bootstrap_margins,
    estimate_page_count,
    layout_metrics,
    min_gutter,
    min_margins,
    recommended_margins,
    text_block_size,
)
from kdp_formatter.models.book import Margins


@pytest.mark.parametrize(
    ("page_count", "gutter"),
    [
        (0, 0.375),
        (24, 0.375),
        (150, 0.375),
        (151, 0.5),
        (300, 0.5),
        (301, 0.625),
        (500, 0.625),
        (501, 0.75),
        (700, 0.75),
        (701, 0.875),
        (828, 0.875),
        (2000, 0.875),
    ],
)
def test_min_gutter_steps(page_count: int, gutter: float) -> None:
    assert min_gutter(page_count) == gutter


def test_min_gutter_never_decreases() -> None:
    gutters = [min_gutter(n) for n in range(0, 900)]
    assert gutters == sorted(gutters)


@pytest.mark.parametrize(("bleed", "edge"), [(False, 0.25), (True, 0.375)])
def test_min_margins_edges(bleed: bool, edge: float) -> None:
    m = min_margins(100, bleed)
    assert (m.top, m.bottom, m.outside) == (edge, edge, edge)
    assert m.inside == 0.375


def test_recommended_margins() -> None:
    assert recommended_margins(24, False) == Margins(top=0.5, bottom=0.5, inside=0.5, outside=0.5)
    assert recommended_margins(400, True) == Margins(top=0.5, bottom=0.5, inside=0.75, outside=0.5)


@pytest.mark.parametrize("page_count", [24, 151, 301, 501, 701])
@pytest.mark.parametrize("bleed", [False, True])
def test_recommended_never_below_minimum(page_count: int, bleed: bool) -> None:
    rec = recommended_margins(page_count, bleed)
    low = min_margins(page_count, bleed)
    assert rec.top >= low.top
    assert rec.bottom >= low.bottom
    assert rec.inside > low.inside
    assert rec.outside >= low.outside


def test_text_block_and_bleed_dimensions() -> None:
    trim = get_trim_size("6x9")
    assert text_block_size(trim, PLACEHOLDER_MARGINS) == (5.0, 8.0)
    assert bleed_dimensions(trim) == (6.125, 9.25)


def test_layout_metrics_default_book() -> None:
    metrics = layout_metrics(default_settings(), PLACEHOLDER_MARGINS)
    assert metrics.line_height_pt == 16.5
    assert metrics.lines_per_page == 34
    assert metrics.chars_per_line == 68
    assert metrics.can_typeset


def test_estimate_empty_text_is_zero() -> None:
    assert estimate_page_count("  \n ", default_settings(), PLACEHOLDER_MARGINS) == 0


def test_estimate_rounds_up_to_even() -> None:
    assert estimate_page_count("hello", default_settings(), PLACEHOLDER_MARGINS) == 2


def test_estimate_counts_wrapped_lines() -> None:
    settings = default_settings()
    # 68 characters fit one line, 69 need two
    fits = "\n".join(["x" * 68] * 100)
    spills = "\n".join(["x" * 69] * 100)
    assert estimate_page_count(fits, settings, PLACEHOLDER_MARGINS) == 4  # 100 / 34 -> 3 -> 4
    assert estimate_page_count(spills, settings, PLACEHOLDER_MARGINS) == 6  # 200 / 34 -> 6


def test_estimate_degenerate_geometry_is_one() -> None:
    margins = Margins(top=4.5, bottom=4.5, inside=0.5, outside=0.5)
    assert estimate_page_count("some text", default_settings(), margins) == 1


def test_estimate_is_plausible_for_a_novel_chapter() -> None:
    paragraph = " ".join(["word"] * 120)
    text = "\n\n".join([paragraph] * 200)
    pages = estimate_page_count(text, default_settings(), PLACEHOLDER_MARGINS)
    assert pages % 2 == 0
    assert 30 < pages < 80


def test_bootstrap_short_text_uses_minimum_page_margins() -> None:
    margins, page_count = bootstrap_margins("A very short book.", default_settings())
    assert margins == recommended_margins(24, False)
    assert page_count == 2


def test_bootstrap_long_text_widens_gutter() -> None:
    text = "\n".join(["x" * 60] * 12000)
    margins, page_count = bootstrap_margins(text, default_settings())
    assert margins.inside > recommended_margins(24, False).inside
    assert page_count > 150
