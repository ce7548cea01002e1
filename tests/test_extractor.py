"""Tests for manuscript text extraction."""

from pathlib import Path

import pytest
from docx import Document
from reportlab.pdfgen import canvas

from kdp_formatter.text.extractor import ExtractionError, extract_text


@pytest.mark.parametrize("suffix", [".txt", ".md", ".markdown", ".TXT"])
def test_plain_text(tmp_path: Path, suffix: str) -> None:
    path = tmp_path / f"book{suffix}"
    path.write_text("Chapter 1\nHello — world.\n", encoding="utf-8")
    assert extract_text(str(path)) == "Chapter 1\nHello — world.\n"


def test_docx_paragraphs_become_lines(tmp_path: Path) -> None:
    path = tmp_path / "book.docx"
    doc = Document()
    doc.add_paragraph("Chapter 1")
    doc.add_paragraph("First paragraph.")
    doc.add_paragraph("")
    doc.add_paragraph("Second paragraph.")
    doc.save(str(path))

    assert extract_text(str(path)) == "Chapter 1\nFirst paragraph.\n\nSecond paragraph."


def test_pdf_text_layer(tmp_path: Path) -> None:
    path = tmp_path / "book.pdf"
    c = canvas.Canvas(str(path))
    c.drawString(72, 720, "Chapter 1")
    c.showPage()
    c.drawString(72, 720, "Chapter 2")
    c.showPage()
    c.save()

    text = extract_text(str(path))
    assert "Chapter 1" in text
    assert "Chapter 2" in text
    assert text.index("Chapter 1") < text.index("Chapter 2")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ExtractionError, match="File not found"):
        extract_text(str(tmp_path / "nope.txt"))


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "book.rtf"
    path.write_text("{\\rtf1 hello}", encoding="utf-8")
    with pytest.raises(ExtractionError, match="Unsupported file type"):
        extract_text(str(path))


def test_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "book.txt"
    path.write_bytes(b"caf\xe9 latin-1")
    with pytest.raises(ExtractionError, match="not valid UTF-8"):
        extract_text(str(path))


@pytest.mark.parametrize("suffix", [".docx", ".pdf"])
def test_corrupt_binary_files(tmp_path: Path, suffix: str) -> None:
    path = tmp_path / f"book{suffix}"
    path.write_bytes(b"this is not a real document")
    with pytest.raises(ExtractionError):
        extract_text(str(path))
