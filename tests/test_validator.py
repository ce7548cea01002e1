"""Tests for KDP layout rules and the interior PDF check."""

from pathlib import Path

import pytest

from kdp_formatter.layout.geometry import recommended_margins
from kdp_formatter.models.book import Margins
from kdp_formatter.renderer.pdf_renderer import generate_interior_pdf
from kdp_formatter.validator.kdp_validator import has_errors, validate_interior_pdf, validate_layout


def _categories(issues):
    return [(i.type, i.category) for i in issues]


def test_clean_layout_has_no_issues(settings) -> None:
    assert validate_layout(settings, 100, recommended_margins(100, False)) == []


@pytest.mark.parametrize(("page_count", "flagged"), [(23, True), (24, False), (828, False), (830, True)])
def test_page_count_bounds(settings, page_count: int, flagged: bool) -> None:
    issues = validate_layout(settings, page_count, recommended_margins(page_count, False))
    assert (("error", "page-count") in _categories(issues)) is flagged


def test_page_count_messages(settings) -> None:
    low = validate_layout(settings, 22, recommended_margins(22, False))
    assert low[0].message == "Page count is 22. KDP requires a minimum of 24 pages."
    high = validate_layout(settings, 900, recommended_margins(900, False))
    assert high[0].message == "Page count is 900. KDP allows a maximum of 828 pages."


def test_odd_page_count_is_a_warning(settings) -> None:
    issues = validate_layout(settings, 25, recommended_margins(25, False))
    assert _categories(issues) == [("warning", "page-count")]
    assert not has_errors(issues)


def test_margins_below_minimum(settings) -> None:
    margins = Margins(top=0.1, bottom=0.2, inside=0.3, outside=0.1)
    issues = validate_layout(settings, 100, margins)
    messages = [i.message for i in issues if i.category == "margins"]
    assert messages == [
        'Top margin (0.1") is below KDP minimum (0.25").',
        'Bottom margin (0.2") is below KDP minimum (0.25").',
        'Inside margin/gutter (0.3") is below KDP minimum (0.375") for 100 pages.',
        'Outside margin (0.1") is below KDP minimum (0.25").',
    ]
    assert has_errors(issues)


def test_gutter_minimum_follows_page_count(settings) -> None:
    margins = recommended_margins(100, False)  # 0.5" gutter
    issues = validate_layout(settings, 600, margins)
    assert ("error", "margins") in _categories(issues)


def test_bleed_always_warns(settings) -> None:
    bleed = settings.model_copy(update={"bleed": True})
    issues = validate_layout(bleed, 100, recommended_margins(100, True))
    assert _categories(issues) == [("warning", "bleed")]


def test_bleed_with_tiny_text_area(settings) -> None:
    bleed = settings.model_copy(update={"bleed": True})
    margins = Margins(top=4.2, bottom=4.2, inside=0.5, outside=0.5)
    issues = validate_layout(bleed, 100, margins)
    assert ("error", "bleed") in _categories(issues)


def test_empty_book(settings) -> None:
    issues = validate_layout(settings, 0, recommended_margins(24, False))
    assert ("error", "page-count") in _categories(issues)
    assert ("warning", "content") in _categories(issues)


def test_narrow_text_area(settings) -> None:
    margins = Margins(top=0.5, bottom=0.5, inside=2.5, outside=2.0)
    issues = validate_layout(settings, 100, margins)
    assert ("warning", "margins") in _categories(issues)
    assert not has_errors(issues)


def test_interior_pdf_passes(tmp_path: Path, settings, margins, one_page_chapters) -> None:
    out = tmp_path / "interior.pdf"
    generate_interior_pdf(one_page_chapters(24), settings, margins, str(out))
    report = validate_interior_pdf(str(out), settings)
    assert report.ok
    assert report.page_count == 24
    assert report.page_size_pt == pytest.approx((432.0, 648.0))
    assert report.trim_label == '6" × 9"'
    # standard PDF fonts are referenced, not embedded
    assert [i.level for i in report.issues] == ["warning"]


def test_interior_pdf_short_and_odd(tmp_path: Path, settings, margins, one_page_chapters) -> None:
    out = tmp_path / "interior.pdf"
    generate_interior_pdf(one_page_chapters(5), settings, margins, str(out))
    report = validate_interior_pdf(str(out), settings)
    assert not report.ok
    levels = [i.level for i in report.issues]
    assert "error" in levels
    assert any("odd" in i.message for i in report.issues)


def test_interior_pdf_wrong_page_size(tmp_path: Path, settings, margins, one_page_chapters) -> None:
    out = tmp_path / "interior.pdf"
    generate_interior_pdf(one_page_chapters(24), settings, margins, str(out))
    report = validate_interior_pdf(str(out), settings.model_copy(update={"bleed": True}))
    assert not report.ok
    assert any("does not match expected bleed size" in i.message for i in report.issues)
