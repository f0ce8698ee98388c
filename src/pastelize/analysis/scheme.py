"""Page-level color signals: light/dark scheme, dominant and accent colors."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence

from pastelize.model.facts import SelectorFact, VariableFact
from pastelize.model.snapshot import ColorScheme
from pastelize.palette.color import find_color, is_dark_color, normalize_color

__all__ = [
    "ACCENT_NAME_KEYWORDS",
    "accent_colors",
    "detect_color_scheme",
    "dominant_colors",
    "merge_branding",
]

ACCENT_NAME_KEYWORDS = ("primary", "accent", "link", "button", "active", "hover", "focus", "highlight")

_DARK_HTML_RE = re.compile(r"""class=["'](?:[^"']*\s)?dark(?:\s[^"']*)?["']|data-theme=["']dark["']""")
_DARK_CSS_RE = re.compile(r"""\.dark(?![\w-])|\[data-theme=["']?dark["']?\]""")


def detect_color_scheme(html: str, css: str, variables: Sequence[VariableFact]) -> ColorScheme:
    """Explicit dark markers win; otherwise vote with background variables."""
    if _DARK_HTML_RE.search(html) or _DARK_CSS_RE.search(css):
        return ColorScheme.DARK
    backgrounds = [
        v.computed_value
        for v in variables
        if ("bg" in v.name or "background" in v.name) and normalize_color(v.computed_value)
    ]
    if backgrounds:
        dark = sum(1 for value in backgrounds if is_dark_color(value))
        if dark > len(backgrounds) / 2:
            return ColorScheme.DARK
    return ColorScheme.LIGHT


def dominant_colors(
    variables: Iterable[VariableFact],
    selectors: Iterable[SelectorFact] = (),
    limit: int = 10,
) -> list[str]:
    """Most used colors, weighted by variable and selector frequency."""
    weights: Counter[str] = Counter()
    for v in variables:
        color = normalize_color(v.computed_value)
        if color:
            weights[color] += max(v.frequency, 1)
    for s in selectors:
        for _, value in s.styles.items():
            color = find_color(value)
            if color:
                weights[color] += max(s.frequency, 1)
    return [color for color, _ in weights.most_common(limit)]


def accent_colors(variables: Iterable[VariableFact], limit: int = 5) -> list[str]:
    """Colors of variables whose names suggest an accent role."""
    weights: Counter[str] = Counter()
    for v in variables:
        name = v.name.lower()
        color = normalize_color(v.computed_value)
        if color and any(keyword in name for keyword in ACCENT_NAME_KEYWORDS):
            weights[color] += max(v.frequency, 1)
    return [color for color, _ in weights.most_common(limit)]


def merge_branding(branding: Iterable[str], colors: Iterable[str]) -> tuple[str, ...]:
    """Prepend normalized branding hints, dropping duplicates and malformed values."""
    merged: dict[str, None] = {}
    for value in (*branding, *colors):
        color = normalize_color(value)
        if color:
            merged[color] = None
    return tuple(merged)
