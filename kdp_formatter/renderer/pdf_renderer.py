import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from reportlab.lib.colors import black
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from pypdf import PdfReader, PdfWriter
from pypdf.generic import RectangleObject

from kdp_formatter.config.sizes import BLEED_IN, INCH
from kdp_formatter.layout.geometry import bleed_dimensions
from kdp_formatter.models.book import (
    FontFamily,
    HeadingAlignment,
    KDPSettings,
    Margins,
    RenderedPage,
    SectionKind,
)

logger = logging.getLogger(__name__)

# Standard PDF fonts per family: regular, bold, italic
PDF_FONTS: Dict[FontFamily, Dict[str, str]] = {
    FontFamily.SERIF: {"regular": "Times-Roman", "bold": "Times-Bold", "italic": "Times-Italic"},
    FontFamily.SANS_SERIF: {"regular": "Helvetica", "bold": "Helvetica-Bold", "italic": "Helvetica-Oblique"},
    FontFamily.MONOSPACE: {"regular": "Courier", "bold": "Courier-Bold", "italic": "Courier-Oblique"},
}

PAGE_NUMBER_FONT_SIZE = 9.0


class PageFrame:
    """
    Physical placement of the text block on one page, in points.

    Recto (odd) pages bind on the left, so the inside margin is on the left;
    verso (even) pages bind on the right. With bleed the page grows on the
    outside edge and on top and bottom.
    """

    def __init__(self, page_number: int, settings: KDPSettings, margins: Margins):
        trim = settings.trim_size
        if settings.bleed:
            width_in, height_in = bleed_dimensions(trim)
            bleed = BLEED_IN * INCH
        else:
            width_in, height_in = trim.width, trim.height
            bleed = 0.0

        self.width = width_in * INCH
        self.height = height_in * INCH
        self.is_recto = page_number % 2 == 1

        inner = margins.inside * INCH
        outer = margins.outside * INCH
        if self.is_recto:
            self.left = inner
            self.right = trim.width * INCH - outer
        else:
            # outside edge is on the left, where the bleed stock is added
            self.left = bleed + outer
            self.right = bleed + trim.width * INCH - inner
        self.top = self.height - bleed - margins.top * INCH
        self.bottom = bleed + margins.bottom * INCH
        self.trim_rect = (
            (0.0 if self.is_recto else bleed),
            bleed,
            (0.0 if self.is_recto else bleed) + trim.width * INCH,
            bleed + trim.height * INCH,
        )

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def text_width(self) -> float:
        return self.right - self.left


@dataclass
class PlacedText:
    """One string at its final position: left end of the baseline, in points."""

    text: str
    font: str
    size: float
    x: float
    y: float
    alignment: HeadingAlignment = HeadingAlignment.LEFT

    @property
    def width(self) -> float:
        return stringWidth(self.text, self.font, self.size)


def fit_font_size(text: str, font: str, size: float, max_width: float) -> float:
    """
    Largest size up to ``size`` at which ``text`` fits in ``max_width``.

    Pagination wraps with an average glyph width, so a line may still be wider
    than the text block in the real font (Courier, bold titles). Such a line
    is drawn smaller rather than re-wrapped.
    """
    width = stringWidth(text, font, size)
    if width <= max_width or width == 0:
        return size
    return size * max_width / width


def _fonts(settings: KDPSettings) -> Dict[str, str]:
    if settings.font_family not in PDF_FONTS:
        raise ValueError(f"Unknown font family '{settings.font_family}'. Available: {[f.value for f in PDF_FONTS]}")
    return PDF_FONTS[settings.font_family]


def _baseline(frame: PageFrame, line_index: int, line_height: float, font_size: float) -> float:
    """Baseline of the given line slot, counted from the top of the text block."""
    return frame.top - line_index * line_height - font_size


def _place(frame: PageFrame, text: str, font: str, size: float, y: float, alignment: HeadingAlignment) -> PlacedText:
    size = fit_font_size(text, font, size, frame.text_width)
    width = stringWidth(text, font, size)
    if alignment == HeadingAlignment.CENTER:
        x = frame.center_x - width / 2.0
    elif alignment == HeadingAlignment.RIGHT:
        x = frame.right - width
    else:
        x = frame.left
    return PlacedText(text=text, font=font, size=size, x=x, y=y, alignment=alignment)


def _title_page_layout(page: RenderedPage, frame: PageFrame, settings: KDPSettings, fonts: Dict[str, str]) -> List[PlacedText]:
    line_height = settings.font_size * settings.line_height
    title_size = settings.font_size + 14
    title_step = title_size * settings.line_height
    author_size = settings.font_size + 2

    placed: List[PlacedText] = []
    # next free baseline below the wrapped title
    cursor: Optional[float] = None
    for slot, line in enumerate(page.lines):
        y = _baseline(frame, slot, line_height, settings.font_size)
        if line.is_title:
            # long titles wrap downwards from their slot
            wrapped = simpleSplit(line.text, fonts["bold"], title_size, frame.text_width)
            for i, part in enumerate(wrapped):
                placed.append(_place(frame, part, fonts["bold"], title_size, y - i * title_step, HeadingAlignment.CENTER))
            # one empty title line between the title and the author
            cursor = y - (len(wrapped) + 1) * title_step
            continue
        if not line.text:
            continue
        if cursor is not None:
            y = min(y, cursor)
            cursor = y - author_size * settings.line_height
        placed.append(_place(frame, line.text, fonts["regular"], author_size, y, HeadingAlignment.CENTER))
    return placed


def _lines_layout(page: RenderedPage, frame: PageFrame, settings: KDPSettings, fonts: Dict[str, str]) -> List[PlacedText]:
    line_height = settings.font_size * settings.line_height
    kind = page.section_kind

    body_font = fonts["regular"]
    body_size = settings.font_size
    body_alignment = HeadingAlignment.LEFT
    if kind == SectionKind.COPYRIGHT_PAGE:
        body_size = settings.font_size - 2
    elif kind == SectionKind.DEDICATION:
        body_font = fonts["italic"]
        body_alignment = HeadingAlignment.CENTER

    placed: List[PlacedText] = []
    for slot, line in enumerate(page.lines):
        if not line.text:
            continue
        y = _baseline(frame, slot, line_height, settings.font_size)
        if line.is_title:
            alignment = page.heading_alignment or HeadingAlignment.LEFT
            placed.append(_place(frame, line.text, fonts["bold"], settings.font_size + 4, y, alignment))
        else:
            placed.append(_place(frame, line.text, body_font, body_size, y, body_alignment))
    return placed


def layout_page(page: RenderedPage, settings: KDPSettings, margins: Margins) -> Tuple[PageFrame, List[PlacedText]]:
    """
    Position every string of a paginated page inside its frame.

    Line breaks and slots come from ``page``; only font, size and x/y are
    decided here. The PDF writer and the PNG preview both draw this.
    """
    fonts = _fonts(settings)
    frame = PageFrame(page.page_number, settings, margins)

    if page.section_kind == SectionKind.TITLE_PAGE:
        placed = _title_page_layout(page, frame, settings, fonts)
    elif page.is_blank_page:
        placed = []
    else:
        placed = _lines_layout(page, frame, settings, fonts)

    if page.show_page_number:
        y = frame.bottom - margins.bottom * INCH / 2.0
        placed.append(_place(frame, str(page.page_number), fonts["regular"], PAGE_NUMBER_FONT_SIZE, y, HeadingAlignment.CENTER))
    return frame, placed


def generate_interior_pdf(
    pages: List[RenderedPage],
    settings: KDPSettings,
    margins: Margins,
    out_path: str,
    book_title: str = "",
    author: str = "",
    set_trimbox: bool = False,
):
    """
    Draw already-paginated pages into a print-ready interior PDF.

    Line positions come straight from ``pages``; nothing is re-wrapped here.
    """
    _fonts(settings)

    first = PageFrame(1, settings, margins)
    c = canvas.Canvas(out_path, pagesize=(first.width, first.height))
    c.setTitle(book_title)
    c.setAuthor(author)
    c.setCreator("KDP Formatter")

    for page in pages:
        _, placed = layout_page(page, settings, margins)
        c.setFillColor(black)
        for item in placed:
            c.setFont(item.font, item.size)
            c.drawString(item.x, item.y, item.text)
        c.showPage()

    c.save()
    logger.debug("Wrote %d page(s) to %s", len(pages), out_path)

    if set_trimbox:
        _write_page_boxes(out_path, pages, settings, margins)


def _write_page_boxes(out_path: str, pages: List[RenderedPage], settings: KDPSettings, margins: Margins):
    """Record TrimBox (and BleedBox when bleed is on) on every page for prepress QA."""
    reader = PdfReader(out_path)
    writer = PdfWriter()

    for page, rendered in zip(reader.pages, pages):
        frame = PageFrame(rendered.page_number, settings, margins)
        page.trimbox = RectangleObject(list(frame.trim_rect))
        if settings.bleed:
            page.bleedbox = RectangleObject([0, 0, frame.width, frame.height])
        writer.add_page(page)
    if reader.metadata:
        writer.add_metadata(reader.metadata)

    with open(out_path, "wb") as f:
        writer.write(f)
