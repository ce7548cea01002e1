"""KDP layout rules and generated-PDF checks"""

from kdp_formatter.validator.kdp_validator import (
    InteriorIssue,
    InteriorReport,
    ValidationIssue,
    has_errors,
    validate_interior_pdf,
    validate_layout,
)

__all__ = [
    "InteriorIssue",
    "InteriorReport",
    "ValidationIssue",
    "has_errors",
    "validate_interior_pdf",
    "validate_layout",
]
