from dataclasses import dataclass, field
from typing import List, Tuple

from pypdf import PdfReader

from kdp_formatter.config.sizes import INCH
from kdp_formatter.layout.geometry import bleed_dimensions, min_margins, text_block_size
from kdp_formatter.models.book import KDPSettings, Margins

MIN_PAGE_COUNT = 24
MAX_PAGE_COUNT = 828


@dataclass
class ValidationIssue:
    type: str  # "error" | "warning"
    category: str  # "margins" | "page-count" | "bleed" | "content" | "trim"
    message: str


def _inches(value: float) -> str:
    return f'{value:g}"'


def validate_layout(settings: KDPSettings, page_count: int, margins: Margins) -> List[ValidationIssue]:
    """Check settings, margins and page count against KDP print rules."""
    issues: List[ValidationIssue] = []
    minimum = min_margins(page_count, settings.bleed)

    if page_count < MIN_PAGE_COUNT:
        issues.append(ValidationIssue(
            "error", "page-count",
            f"Page count is {page_count}. KDP requires a minimum of {MIN_PAGE_COUNT} pages.",
        ))
    if page_count > MAX_PAGE_COUNT:
        issues.append(ValidationIssue(
            "error", "page-count",
            f"Page count is {page_count}. KDP allows a maximum of {MAX_PAGE_COUNT} pages.",
        ))
    if page_count % 2 != 0:
        issues.append(ValidationIssue(
            "warning", "page-count",
            "Page count should be even for a properly bound book.",
        ))

    if margins.top < minimum.top:
        issues.append(ValidationIssue(
            "error", "margins",
            f"Top margin ({_inches(margins.top)}) is below KDP minimum ({_inches(minimum.top)}).",
        ))
    if margins.bottom < minimum.bottom:
        issues.append(ValidationIssue(
            "error", "margins",
            f"Bottom margin ({_inches(margins.bottom)}) is below KDP minimum ({_inches(minimum.bottom)}).",
        ))
    if margins.inside < minimum.inside:
        issues.append(ValidationIssue(
            "error", "margins",
            f"Inside margin/gutter ({_inches(margins.inside)}) is below KDP minimum "
            f"({_inches(minimum.inside)}) for {page_count} pages.",
        ))
    if margins.outside < minimum.outside:
        issues.append(ValidationIssue(
            "error", "margins",
            f"Outside margin ({_inches(margins.outside)}) is below KDP minimum ({_inches(minimum.outside)}).",
        ))

    text_w, text_h = text_block_size(settings.trim_size, margins)

    if settings.bleed:
        if text_w < 1 or text_h < 1:
            issues.append(ValidationIssue(
                "error", "bleed",
                "Text area is too small with current bleed margins.",
            ))
        issues.append(ValidationIssue(
            "warning", "bleed",
            'Bleed is enabled. Ensure any images or backgrounds extend 0.125" beyond trim edges.',
        ))

    if page_count == 0:
        issues.append(ValidationIssue(
            "warning", "content",
            "No content detected. Paste your book text to begin.",
        ))

    if text_w < 2:
        issues.append(ValidationIssue(
            "warning", "margins",
            "Text area width is very narrow. Consider reducing margins or choosing a wider trim size.",
        ))

    return issues


def has_errors(issues: List[ValidationIssue]) -> bool:
    return any(i.type == "error" for i in issues)


@dataclass
class InteriorIssue:
    level: str  # "error" | "warning" | "info"
    message: str


@dataclass
class InteriorReport:
    ok: bool
    trim_label: str
    page_count: int
    page_size_pt: Tuple[float, float]
    issues: List[InteriorIssue] = field(default_factory=list)


def _almost_equal(a: float, b: float, tol: float = 0.5) -> bool:
    return abs(a - b) <= tol


def validate_interior_pdf(pdf_path: str, settings: KDPSettings) -> InteriorReport:
    """
    Check a generated interior PDF against the trim size it was built for.

    Expects bleed page dimensions when ``settings.bleed`` is on, otherwise
    the bare trim size.
    """
    trim = settings.trim_size
    if settings.bleed:
        width_in, height_in = bleed_dimensions(trim)
    else:
        width_in, height_in = trim.width, trim.height
    expected_w = width_in * INCH
    expected_h = height_in * INCH

    issues: List[InteriorIssue] = []
    reader = PdfReader(pdf_path)

    if reader.is_encrypted:
        issues.append(InteriorIssue("error", "PDF is encrypted. KDP requires unencrypted, printable PDFs."))

    num_pages = len(reader.pages)
    if num_pages < MIN_PAGE_COUNT:
        issues.append(InteriorIssue("error", f"Page count {num_pages} is below KDP minimum ({MIN_PAGE_COUNT})."))
    if num_pages > MAX_PAGE_COUNT:
        issues.append(InteriorIssue("error", f"Page count {num_pages} exceeds KDP maximum ({MAX_PAGE_COUNT})."))
    if num_pages % 2 != 0:
        issues.append(InteriorIssue("warning", f"Page count {num_pages} is odd; KDP will append a blank page."))

    first_size = None
    fonts_seen = set()
    fonts_not_embedded = set()

    for i, page in enumerate(reader.pages, start=1):
        w = float(page.mediabox.width)
        h = float(page.mediabox.height)
        if not (_almost_equal(w, expected_w) and _almost_equal(h, expected_h)):
            issues.append(InteriorIssue(
                "error",
                f"Page {i} size {w:.2f}x{h:.2f} pt does not match expected "
                f"{'bleed' if settings.bleed else 'trim'} size ({expected_w:.2f}x{expected_h:.2f} pt).",
            ))
        if first_size is None:
            first_size = (w, h)
        elif not (_almost_equal(w, first_size[0]) and _almost_equal(h, first_size[1])):
            issues.append(InteriorIssue(
                "error", f"Page {i} size differs from first page ({first_size[0]:.2f}x{first_size[1]:.2f} pt).",
            ))

        if "/Resources" not in page or "/Font" not in page["/Resources"]:
            continue
        font_dict = page["/Resources"]["/Font"]
        for font_name, font_ref in font_dict.items():
            font_obj = font_ref.get_object()
            base_name = str(font_obj.get("/BaseFont", font_name))
            fonts_seen.add(base_name)
            descriptor = font_obj.get("/FontDescriptor")
            embedded = False
            if descriptor is not None:
                descriptor = descriptor.get_object()
                embedded = any(descriptor.get(k) for k in ("/FontFile", "/FontFile2", "/FontFile3"))
            if not embedded:
                fonts_not_embedded.add(base_name)

    if fonts_not_embedded:
        issues.append(InteriorIssue(
            "warning",
            f"Non-embedded font(s): {sorted(fonts_not_embedded)}. KDP prefers all fonts embedded for print.",
        ))
    elif fonts_seen:
        issues.append(InteriorIssue("info", f"All {len(fonts_seen)} font(s) embedded."))

    ok = not any(iss.level == "error" for iss in issues)
    return InteriorReport(
        ok=ok,
        trim_label=trim.label,
        page_count=num_pages,
        page_size_pt=first_size or (0.0, 0.0),
        issues=issues,
    )
