"""
Manuscript text extraction

Turns .txt/.md, .docx and .pdf manuscripts into one plain-text string.
Failures raise ExtractionError so callers can tell a broken file apart
from an empty one.
"""

import logging
from pathlib import Path
from typing import List

from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md", ".markdown")
SUPPORTED_SUFFIXES = TEXT_SUFFIXES + (".docx", ".pdf")


class ExtractionError(Exception):
    """Raised when a manuscript file cannot be read."""


def extract_text_from_docx(path: Path) -> str:
    """One line per Word paragraph; empty paragraphs become blank lines."""
    try:
        doc = Document(str(path))
    except Exception as e:
        raise ExtractionError(f"Could not read Word document {path.name}: {e}") from e
    return "\n".join(p.text for p in doc.paragraphs)


def extract_text_from_pdf(path: Path) -> str:
    """Text of every page, pages separated by a blank line."""
    try:
        reader = PdfReader(str(path))
        if reader.is_encrypted:
            raise ExtractionError(f"{path.name} is encrypted. Remove the password and try again.")
        page_texts: List[str] = []
        for page in reader.pages:
            page_texts.append((page.extract_text() or "").rstrip("\n"))
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"Could not read PDF {path.name}: {e}") from e

    if not any(t.strip() for t in page_texts):
        logger.warning("No text layer found in %s; scanned PDFs need OCR first", path.name)
    return "\n\n".join(page_texts)


def extract_text(path: str) -> str:
    """Extract manuscript text from a supported file."""
    p = Path(path)
    suffix = p.suffix.lower()
    if not p.exists():
        raise ExtractionError(f"File not found: {path}")
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError(f"Unsupported file type '{suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}")

    logger.debug("Extracting text from %s", p)
    if suffix == ".docx":
        return extract_text_from_docx(p)
    if suffix == ".pdf":
        return extract_text_from_pdf(p)

    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"{p.name} is not valid UTF-8 text: {e}") from e
