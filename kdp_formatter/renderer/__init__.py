"""Output renderers: print PDF and previews, both drawing paginated pages"""

from kdp_formatter.renderer.pdf_renderer import generate_interior_pdf
from kdp_formatter.renderer.preview import render_page_png, render_text_preview, spreads, write_preview

__all__ = [
    "generate_interior_pdf",
    "render_page_png",
    "render_text_preview",
    "spreads",
    "write_preview",
]
