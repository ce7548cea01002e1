# KDP approved trim sizes (in inches). 72 points = 1 inch
# Keys follow the "<width>x<height>" convention used on the command line.

from typing import Dict, List

from kdp_formatter.models.book import TrimSize

INCH = 72.0

# Extra stock KDP adds around a bleed interior: outside edge, top and bottom
BLEED_IN = 0.125

TRIM_SIZES: List[TrimSize] = [
    TrimSize(label='5" × 8"', width=5, height=8),
    TrimSize(label='5.25" × 8"', width=5.25, height=8),
    TrimSize(label='5.5" × 8.5"', width=5.5, height=8.5),
    TrimSize(label='6" × 9"', width=6, height=9),
    TrimSize(label='6.14" × 9.21"', width=6.14, height=9.21),
    TrimSize(label='6.69" × 9.61"', width=6.69, height=9.61),
    TrimSize(label='7" × 10"', width=7, height=10),
    TrimSize(label='7.44" × 9.69"', width=7.44, height=9.69),
    TrimSize(label='7.5" × 9.25"', width=7.5, height=9.25),
    TrimSize(label='8" × 10"', width=8, height=10),
    TrimSize(label='8.25" × 6"', width=8.25, height=6),
    TrimSize(label='8.25" × 8.25"', width=8.25, height=8.25),
    TrimSize(label='8.5" × 8.5"', width=8.5, height=8.5),
    TrimSize(label='8.5" × 11"', width=8.5, height=11),
]


def trim_key(trim: TrimSize) -> str:
    """6.0 x 9.0 -> '6x9', 6.14 x 9.21 -> '6.14x9.21'"""
    return f"{trim.width:g}x{trim.height:g}"


SIZES: Dict[str, TrimSize] = {trim_key(t): t for t in TRIM_SIZES}

DEFAULT_TRIM_KEY = "6x9"


def get_trim_size(key: str) -> TrimSize:
    if key not in SIZES:
        raise ValueError(f"Unknown trim key '{key}'. Available: {list(SIZES.keys())}")
    return SIZES[key]
