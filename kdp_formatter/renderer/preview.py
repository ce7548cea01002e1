"""
Page previews

Paints paginated pages as PNG images or plain text so a book can be checked
before generating the PDF. Uses the same RenderedPage sequence as the PDF
writer, so what the preview shows is what gets printed.
"""

import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from kdp_formatter.config.sizes import INCH
from kdp_formatter.models.book import (
    HeadingAlignment,
    KDPSettings,
    Margins,
    PaperColor,
    RenderedPage,
    SectionKind,
)
from kdp_formatter.renderer.pdf_renderer import layout_page

logger = logging.getLogger(__name__)

PREVIEW_DPI = 96

PAPER_COLORS = {
    PaperColor.WHITE: (255, 255, 255),
    PaperColor.CREAM: (245, 240, 230),  # #f5f0e6
}
INK = (26, 26, 26)
MUTED = (150, 150, 150)


def _text_x(draw: ImageDraw.ImageDraw, text: str, font, left: float, right: float, alignment: HeadingAlignment) -> float:
    width = draw.textlength(text, font=font)
    if alignment == HeadingAlignment.CENTER:
        return (left + right - width) / 2.0
    if alignment == HeadingAlignment.RIGHT:
        return right - width
    return left


def render_page_png(
    page: RenderedPage,
    settings: KDPSettings,
    margins: Margins,
    dpi: int = PREVIEW_DPI,
) -> bytes:
    """
    Render one page at its printed size, bleed included.

    Args:
        page: Page from render_pages()
        settings: Book settings (trim, bleed, paper color, fonts)
        margins: Margins the page was paginated with
        dpi: Preview resolution

    Returns:
        PNG image bytes
    """
    frame, placed = layout_page(page, settings, margins)
    scale = dpi / INCH
    size = (round(frame.width * scale), round(frame.height * scale))
    img = Image.new("RGB", size, PAPER_COLORS[settings.paper_color])
    draw = ImageDraw.Draw(img)

    left = frame.left * scale
    right = frame.right * scale

    if page.is_blank_page or page.section_kind == SectionKind.BLANK_PAGE:
        label = "Intentionally blank"
        font = ImageFont.load_default(size=settings.font_size * scale)
        x = _text_x(draw, label, font, left, right, HeadingAlignment.CENTER)
        draw.text((x, size[1] / 2.0), label, fill=MUTED, font=font, anchor="ls")

    for item in placed:
        font = ImageFont.load_default(size=item.size * scale)
        x = _text_x(draw, item.text, font, left, right, item.alignment)
        y = (frame.height - item.y) * scale
        draw.text((x, y), item.text, fill=INK, font=font, anchor="ls")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf.getvalue()


def write_preview(
    pages: List[RenderedPage],
    settings: KDPSettings,
    margins: Margins,
    out_dir: str,
    dpi: int = PREVIEW_DPI,
    limit: Optional[int] = None,
) -> List[Path]:
    """Write page_0001.png, page_0002.png, ... for the first ``limit`` pages."""
    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for page in pages[:limit]:
        path = target / f"page_{page.page_number:04d}.png"
        path.write_bytes(render_page_png(page, settings, margins, dpi=dpi))
        written.append(path)
    logger.debug("Wrote %d preview image(s) to %s", len(written), target)
    return written


def page_side(page: RenderedPage) -> str:
    return "recto" if page.is_recto else "verso"


def render_text_preview(page: RenderedPage, width: int = 60) -> str:
    """Plain-text rendering of one page for terminal output."""
    header = f" Page {page.page_number} ({page_side(page)}) · {page.section_kind.value} "
    out: List[str] = [header.center(width, "─")]
    if page.is_blank_page:
        out.append("(intentionally blank)".center(width))
    for line in page.lines:
        text = line.text.upper() if line.is_title else line.text
        if page.section_kind in (SectionKind.TITLE_PAGE, SectionKind.DEDICATION):
            text = text.center(width).rstrip()
        out.append(text)
    if page.show_page_number:
        out.append(str(page.page_number).center(width).rstrip())
    return "\n".join(out)


def spreads(pages: List[RenderedPage]) -> List[Tuple[Optional[RenderedPage], Optional[RenderedPage]]]:
    """
    Pair pages the way a bound book opens: page 1 alone on the right, then
    (2, 3), (4, 5), ...
    """
    result: List[Tuple[Optional[RenderedPage], Optional[RenderedPage]]] = []
    if not pages:
        return result
    result.append((None, pages[0]))
    for i in range(1, len(pages), 2):
        left = pages[i]
        right = pages[i + 1] if i + 1 < len(pages) else None
        result.append((left, right))
    return result
