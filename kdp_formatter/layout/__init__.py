"""Page geometry, section assembly and pagination"""

from kdp_formatter.layout.geometry import (
    bootstrap_margins,
    estimate_page_count,
    min_gutter,
    min_margins,
    recommended_margins,
    text_block_size,
)
from kdp_formatter.layout.matter import assemble_sections, default_back_matter, default_front_matter
from kdp_formatter.layout.paginator import pad_to_even, render_pages

__all__ = [
    "assemble_sections",
    "bootstrap_margins",
    "default_back_matter",
    "default_front_matter",
    "estimate_page_count",
    "min_gutter",
    "min_margins",
    "pad_to_even",
    "recommended_margins",
    "render_pages",
    "text_block_size",
]
