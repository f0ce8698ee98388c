"""Validation rules for mapping results.

Each rule is a function taking a MappingResult and returning a list of
Diagnostic objects describing any issues found.
"""

from __future__ import annotations

import re
from collections import Counter

from pastelize.model.diagnostic import Diagnostic, Severity
from pastelize.model.mapping import MappingResult
from pastelize.palette.tokens import is_palette_token

_PLACEHOLDER_RE = re.compile(r"@\{([^}]*)\}")


def _unknown_token(rule: str, kind: str, subject: str, token: object) -> Diagnostic:
    return Diagnostic(
        rule=rule,
        severity=Severity.ERROR,
        message=f"{kind} mapping uses '{token}', which is not a palette token.",
        subject=subject,
        fix="Map the fact to one of the 26 palette tokens.",
    )


# ---------------------------------------------------------------------------
# Token membership (ERROR severity)
# ---------------------------------------------------------------------------


def check_variable_tokens(result: MappingResult) -> list[Diagnostic]:
    """Every variable mapping must resolve to a palette token."""
    return [
        _unknown_token("check_variable_tokens", "Variable", m.name, m.token)
        for m in result.variables
        if not is_palette_token(m.token)
    ]


def check_svg_tokens(result: MappingResult) -> list[Diagnostic]:
    """Every SVG color mapping must resolve to a palette token."""
    return [
        _unknown_token("check_svg_tokens", "SVG color", m.original, m.token)
        for m in result.svgs
        if not is_palette_token(m.token)
    ]


def check_selector_tokens(result: MappingResult) -> list[Diagnostic]:
    """Every populated selector property must resolve to a palette token."""
    diagnostics: list[Diagnostic] = []
    for m in result.selectors:
        for name, token in m.properties.css_items():
            if not is_palette_token(token):
                diagnostics.append(
                    _unknown_token("check_selector_tokens", "Selector", f"{m.selector} {name}", token)
                )
    return diagnostics


def check_gradient_tokens(result: MappingResult) -> list[Diagnostic]:
    """Hover gradients may only blend palette tokens."""
    diagnostics: list[Diagnostic] = []
    for m in result.selectors:
        gradient = m.hover_gradient
        if gradient is None:
            continue
        for token in (gradient.main, gradient.secondary):
            if not is_palette_token(token):
                diagnostics.append(
                    _unknown_token("check_gradient_tokens", "Hover gradient", m.selector, token)
                )
    return diagnostics


def check_processed_svg_tokens(result: MappingResult) -> list[Diagnostic]:
    """Placeholders left in re-colored SVG markup must name palette tokens."""
    diagnostics: list[Diagnostic] = []
    for svg in result.processed_svgs:
        for name in sorted(set(_PLACEHOLDER_RE.findall(svg.processed))):
            if not is_palette_token(name):
                diagnostics.append(
                    _unknown_token("check_processed_svg_tokens", "Processed SVG", svg.selector, name)
                )
    return diagnostics


# ---------------------------------------------------------------------------
# Semantic rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_duplicate_selectors(result: MappingResult) -> list[Diagnostic]:
    """A selector mapped more than once lets the later rule silently win."""
    counts = Counter(m.selector for m in result.selectors)
    return [
        Diagnostic(
            rule="check_duplicate_selectors",
            severity=Severity.WARNING,
            message=f"Selector is mapped {count} times; the last mapping wins in the output.",
            subject=selector,
            fix="Merge the mappings into one.",
        )
        for selector, count in counts.items()
        if count > 1
    ]


def check_stats_consistent(result: MappingResult) -> list[Diagnostic]:
    """Mapped counts can never exceed totals."""
    diagnostics: list[Diagnostic] = []
    for kind in ("variables", "svgs", "selectors"):
        stats = getattr(result.stats, kind)
        if stats.mapped > stats.total:
            diagnostics.append(
                Diagnostic(
                    rule="check_stats_consistent",
                    severity=Severity.WARNING,
                    message=f"{stats.mapped} {kind} mapped out of only {stats.total}.",
                    subject=kind,
                )
            )
    return diagnostics


MAPPING_RULES = [
    check_variable_tokens,
    check_svg_tokens,
    check_selector_tokens,
    check_gradient_tokens,
    check_processed_svg_tokens,
    check_duplicate_selectors,
    check_stats_consistent,
]
