"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from pypdf import PdfReader

from main import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def long_file(tmp_path: Path, long_manuscript: str) -> Path:
    path = tmp_path / "words.txt"
    path.write_text(long_manuscript, encoding="utf-8")
    return path


@pytest.fixture
def short_file(tmp_path: Path, short_manuscript: str) -> Path:
    path = tmp_path / "short.md"
    path.write_text(short_manuscript, encoding="utf-8")
    return path


def test_generates_even_pdf(runner: CliRunner, tmp_path: Path, long_file: Path) -> None:
    out = tmp_path / "out" / "interior.pdf"
    result = runner.invoke(main, [str(long_file), "--title", "Words", "--author", "Ann", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "✅ No issues found." in result.output
    assert "✅ Generated" in result.output
    reader = PdfReader(str(out))
    assert len(reader.pages) % 2 == 0
    assert reader.metadata.title == "Words"


def test_short_book_still_renders_but_reports(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    out = tmp_path / "short.pdf"
    result = runner.invoke(main, [str(short_file), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "ERROR [page-count]" in result.output
    assert out.exists()


def test_validate_only_exit_codes(runner: CliRunner, short_file: Path, long_file: Path) -> None:
    bad = runner.invoke(main, [str(short_file), "--validate-only"])
    assert bad.exit_code == 1
    good = runner.invoke(main, [str(long_file), "--validate-only"])
    assert good.exit_code == 0, good.output


def test_requires_manuscript_or_project(runner: CliRunner) -> None:
    result = runner.invoke(main, [])
    assert result.exit_code == 2
    assert "Provide a MANUSCRIPT" in result.output


def test_unsupported_file(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "book.rtf"
    path.write_text("hello", encoding="utf-8")
    result = runner.invoke(main, [str(path)])
    assert result.exit_code == 1
    assert "❌ Unsupported file type" in result.output


def test_settings_overrides(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    out = tmp_path / "bleed.pdf"
    result = runner.invoke(main, [
        str(short_file), "--trim", "5x8", "--bleed", "--font", "sans-serif", "--font-size", "10", "--out", str(out),
    ])
    assert result.exit_code == 0, result.output
    assert 'Trim: 5" × 8", bleed on, sans-serif 10pt' in result.output
    page = PdfReader(str(out)).pages[0]
    assert float(page.mediabox.width) == pytest.approx(5.125 * 72)


def test_font_size_range(runner: CliRunner, short_file: Path) -> None:
    result = runner.invoke(main, [str(short_file), "--font-size", "30", "--validate-only"])
    assert result.exit_code == 2


def test_save_and_load_project(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    project_path = tmp_path / "projects" / "book.json"
    first = runner.invoke(main, [
        str(short_file), "--title", "Saved", "--dedication", "For Mom", "--save-project", str(project_path), "--validate-only",
    ])
    assert first.exit_code == 1
    data = json.loads(project_path.read_text(encoding="utf-8"))
    assert data["title"] == "Saved"
    assert data["front_matter"]["dedication"] == {"kind": "dedication", "enabled": True, "content": "For Mom"}

    out = tmp_path / "loaded.pdf"
    second = runner.invoke(main, ["--project", str(project_path), "--out", str(out), "--show-pages", "3"])
    assert second.exit_code == 0, second.output
    assert "Book: 'Saved'" in second.output
    assert "For Mom" in second.output
    assert out.exists()


def test_invalid_project_file(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"title": "no settings"}', encoding="utf-8")
    result = runner.invoke(main, ["--project", str(path)])
    assert result.exit_code == 1
    assert "❌ Invalid project file" in result.output


def test_blank_before_by_chapter_number(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    out = tmp_path / "blank.pdf"
    plain = runner.invoke(main, [str(short_file), "--out", str(out), "--no-title-page", "--no-copyright"])
    assert "laid out pages: 2" in plain.output

    blank = runner.invoke(main, [str(short_file), "--out", str(out), "--no-title-page", "--no-copyright", "--blank-before", "2"])
    assert blank.exit_code == 0, blank.output
    assert "laid out pages: 3" in blank.output

    missing = runner.invoke(main, [str(short_file), "--blank-before", "9"])
    assert missing.exit_code == 2


def test_chapter_start_right_and_back_matter(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    out = tmp_path / "right.pdf"
    result = runner.invoke(main, [
        str(short_file), "--out", str(out), "--chapter-start", "right", "--about-author", "Ann writes.", "--show-pages", "10",
    ])
    assert result.exit_code == 0, result.output
    # title 1, copyright 2, chapter 1 on 3, blank 4, chapter 2 on 5, about the author on 6
    assert "laid out pages: 6" in result.output
    assert "Page 4 (verso) · blank-page" in result.output
    assert "ABOUT THE AUTHOR" in result.output


def test_preview_images(runner: CliRunner, tmp_path: Path, short_file: Path) -> None:
    preview_dir = tmp_path / "preview"
    result = runner.invoke(main, [
        str(short_file), "--out", str(tmp_path / "p.pdf"), "--preview-dir", str(preview_dir), "--preview-pages", "2",
    ])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in preview_dir.iterdir()) == ["page_0001.png", "page_0002.png"]


def test_validate_existing_pdf(runner: CliRunner, tmp_path: Path, long_file: Path, short_file: Path) -> None:
    good_pdf = tmp_path / "good.pdf"
    runner.invoke(main, [str(long_file), "--out", str(good_pdf)])
    good = runner.invoke(main, ["--validate-pdf", str(good_pdf)])
    assert good.exit_code == 0, good.output
    assert "First page size: 432.00 x 648.00 pt" in good.output

    short_pdf = tmp_path / "short.pdf"
    runner.invoke(main, [str(short_file), "--out", str(short_pdf)])
    bad = runner.invoke(main, ["--validate-pdf", str(short_pdf)])
    assert bad.exit_code == 1
    assert "ERROR: Page count 4 is below KDP minimum (24)." in bad.output
