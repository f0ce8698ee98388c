"""Validation of mapping results and generated theme documents."""

from pastelize.validation.validator import (
    ValidationError,
    ValidationReport,
    format_report,
    validate_mappings,
    validate_or_raise,
    validate_output,
    validate_syntax,
)

__all__ = [
    "ValidationError",
    "ValidationReport",
    "format_report",
    "validate_mappings",
    "validate_or_raise",
    "validate_output",
    "validate_syntax",
]
