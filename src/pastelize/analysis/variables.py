"""Custom-property extraction: declarations, inline styles and var() usage."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from pastelize.analysis.css import (
    inline_styles,
    iter_rule_blocks,
    parse_declarations,
    strip_comments,
    style_blocks,
)
from pastelize.model.facts import VariableFact, VariableScope
from pastelize.palette.color import is_color_value, normalize_color

__all__ = [
    "extract_variables",
    "filter_color_variables",
    "group_variables",
    "detect_mode_variables",
    "variable_stats",
    "resolve_value",
    "variable_scope",
]

# Every var( opening, fallbacks included: var(--a, var(--b)) references both.
_USAGE_RE = re.compile(r"var\(\s*(--[\w-]+)")
# Innermost open block before a var() reference.
_ENCLOSING_RE = re.compile(r"([^{};]+)\{[^{}]*$")
# One var() reference; deeper nesting is removed innermost first.
_VAR_REF_RE = re.compile(r"var\((?:[^()]|\([^()]*\))*\)")
_PREFIX_RE = re.compile(r"^(--[\w-]+?-)")
_LOOKBACK = 200


@dataclass
class _Draft:
    """Mutable accumulator; frozen into a VariableFact at the end."""

    name: str
    value: str
    scope: VariableScope
    selector: str
    usage: list[str] = field(default_factory=list)
    frequency: int = 0

    def add_usage(self, selectors: Iterable[str]) -> None:
        for selector in selectors:
            if selector not in self.usage:
                self.usage.append(selector)

    def freeze(self) -> VariableFact:
        return VariableFact(
            name=self.name,
            value=self.value,
            computed_value=resolve_value(self.value),
            scope=self.scope,
            selector=self.selector,
            usage=tuple(self.usage),
            frequency=self.frequency,
        )


def variable_scope(selector: str) -> VariableScope:
    normalized = selector.strip().lower()
    if normalized in (":root", "html"):
        return VariableScope.ROOT
    if normalized.startswith(".") or "[class" in normalized:
        return VariableScope.CLASS
    return VariableScope.ELEMENT


def resolve_value(value: str) -> str:
    """Resolve a declared value to a canonical color where possible.

    ``var()`` references are removed; rgb()/rgba()/hsl() and short hex are
    converted to ``#RRGGBB``. Non-color values are returned cleaned.
    """
    cleaned, removed = _VAR_REF_RE.subn("", value)
    while removed:
        cleaned, removed = _VAR_REF_RE.subn("", cleaned)
    cleaned = cleaned.strip()
    return normalize_color(cleaned) or cleaned


def _declared(css: str) -> list[_Draft]:
    drafts: list[_Draft] = []
    for block in iter_rule_blocks(css):
        scope = variable_scope(block.prelude)
        for key, value in parse_declarations(block.body):
            if key.startswith("--"):
                drafts.append(_Draft(key, value, scope, block.prelude))
    return drafts


def _inline(html: str) -> list[_Draft]:
    drafts: list[_Draft] = []
    for style in inline_styles(html):
        for key, value in parse_declarations(style):
            if key.startswith("--"):
                drafts.append(_Draft(key, value, VariableScope.ELEMENT, "[style]", frequency=1))
    return drafts


def _usage_sites(content: str) -> dict[str, list[str]]:
    """Map each referenced variable to the selectors of every var() occurrence."""
    sites: dict[str, list[str]] = {}
    for match in _USAGE_RE.finditer(content):
        name = match.group(1)
        before = content[max(0, match.start() - _LOOKBACK):match.start()]
        enclosing = _ENCLOSING_RE.search(before)
        selector = enclosing.group(1).strip() if enclosing else ""
        sites.setdefault(name, []).append(selector)
    return sites


def extract_variables(html: str, css: str = "") -> list[VariableFact]:
    """Extract custom properties from *css* and *html*.

    Declarations come from CSS rule blocks, ``<style>`` elements and inline
    ``style`` attributes. Each ``var()`` reference adds one to the variable's
    frequency and records its enclosing selector. Results are merged by name
    and sorted by descending frequency; unused declarations are kept.
    """
    css = strip_comments(css)
    embedded = strip_comments("\n".join(style_blocks(html)))

    merged: dict[str, _Draft] = {}
    for draft in _declared(css) + _declared(embedded) + _inline(html):
        existing = merged.get(draft.name)
        if existing is None:
            merged[draft.name] = draft
        else:
            existing.add_usage(draft.usage)
            existing.frequency += draft.frequency

    for name, selectors in _usage_sites(css + html).items():
        draft = merged.get(name)
        if draft is None:
            continue
        draft.frequency += len(selectors)
        draft.add_usage(s for s in selectors if s)

    facts = [draft.freeze() for draft in merged.values()]
    facts.sort(key=lambda f: f.frequency, reverse=True)
    return facts


def filter_color_variables(facts: Iterable[VariableFact]) -> list[VariableFact]:
    return [f for f in facts if is_color_value(f.computed_value)]


def group_variables(facts: Iterable[VariableFact]) -> dict[str, list[VariableFact]]:
    """Group variables by their first name segment, e.g. ``--bs-``."""
    groups: dict[str, list[VariableFact]] = {}
    for fact in facts:
        m = _PREFIX_RE.match(fact.name)
        groups.setdefault(m.group(1) if m else "--other-", []).append(fact)
    return groups


def detect_mode_variables(facts: Iterable[VariableFact]) -> dict[str, list[VariableFact]]:
    """Split variables into dark, light and neutral by their defining selector."""
    modes: dict[str, list[VariableFact]] = {"dark": [], "light": [], "neutral": []}
    for fact in facts:
        selector = fact.selector.lower()
        if "dark" in selector:
            modes["dark"].append(fact)
        elif "light" in selector:
            modes["light"].append(fact)
        else:
            modes["neutral"].append(fact)
    return modes


def variable_stats(facts: list[VariableFact]) -> dict[str, object]:
    groups = group_variables(facts)
    modes = detect_mode_variables(facts)
    scopes = Counter(f.scope.value for f in facts)
    most_used = sorted(facts, key=lambda f: f.frequency, reverse=True)[:10]
    return {
        "total": len(facts),
        "color_variables": len(filter_color_variables(facts)),
        "groups": len(groups),
        "prefixes": list(groups),
        "scopes": {scope.value: scopes.get(scope.value, 0) for scope in VariableScope},
        "dark_mode": len(modes["dark"]),
        "light_mode": len(modes["light"]),
        "neutral": len(modes["neutral"]),
        "most_used": [{"name": f.name, "usage": f.frequency} for f in most_used],
    }
