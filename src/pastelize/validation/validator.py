"""Mapping and output validators: run the rule sets and report diagnostics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from pastelize.model.diagnostic import Diagnostic
from pastelize.model.mapping import MappingResult
from pastelize.model.theme import GeneratedTheme
from pastelize.validation.mapping_rules import MAPPING_RULES
from pastelize.validation.output_rules import OUTPUT_RULES, OutputDocument, check_brace_balance, parse_document

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )


MappingRule = Callable[[MappingResult], list[Diagnostic]]
OutputRule = Callable[[OutputDocument], list[Diagnostic]]


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of one validator run. ``is_valid`` is False iff any error exists."""

    is_valid: bool
    issues: tuple[Diagnostic, ...] = ()
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.issues if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.issues if d.is_warning]


def _report(diagnostics: list[Diagnostic], stats: dict[str, int]) -> ValidationReport:
    return ValidationReport(
        is_valid=not any(d.is_error for d in diagnostics),
        issues=tuple(diagnostics),
        stats=stats,
    )


def validate_mappings(
    result: MappingResult, extra_rules: list[MappingRule] | None = None
) -> ValidationReport:
    """Check every mapping in *result* against the closed token set."""
    rules: list[MappingRule] = list(MAPPING_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(result))
    report = _report(
        diagnostics,
        {
            "variables": len(result.variables),
            "svgs": len(result.svgs),
            "selectors": len(result.selectors),
            "processed_svgs": len(result.processed_svgs),
        },
    )
    logger.debug("Mapping validation: %d error(s), %d warning(s)", len(report.errors), len(report.warnings))
    return report


def validate_output(
    theme: GeneratedTheme | str, extra_rules: list[OutputRule] | None = None
) -> ValidationReport:
    """Check a generated theme, or raw theme text, for structural problems.

    Zero coverage can only be detected when a :class:`GeneratedTheme` is given.
    """
    if isinstance(theme, GeneratedTheme):
        doc = parse_document(theme.text, theme.coverage)
    else:
        doc = parse_document(theme)
    rules: list[OutputRule] = list(OUTPUT_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(doc))
    report = _report(
        diagnostics,
        {
            "lines": doc.text.count("\n") + 1 if doc.text else 0,
            "blocks": len(doc.blocks),
            "declarations": len(doc.declarations),
        },
    )
    logger.debug("Output validation: %d error(s), %d warning(s)", len(report.errors), len(report.warnings))
    return report


def validate_syntax(text: str) -> ValidationReport:
    """Brace balance only."""
    doc = parse_document(text)
    return _report(check_brace_balance(doc), {"blocks": len(doc.blocks)})


def validate_or_raise(report: ValidationReport) -> list[Diagnostic]:
    """Raise :class:`ValidationError` if *report* holds errors.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    errors = report.errors
    if errors:
        raise ValidationError(errors)
    return list(report.issues)


def format_report(report: ValidationReport, title: str = "Validation") -> str:
    lines = [f"{title}: {'valid' if report.is_valid else 'INVALID'}"]
    if report.stats:
        lines.append("  " + ", ".join(f"{k}={v}" for k, v in report.stats.items()))
    for d in report.issues:
        lines.append(f"  {d}")
        if d.fix:
            lines.append(f"    fix: {d.fix}")
    return "\n".join(lines)
