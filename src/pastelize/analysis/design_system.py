"""Design-system fingerprinting.

Five framework detectors each score the page from weighted signals; the best
score wins unless it stays under ``MIN_CONFIDENCE``, in which case the page is
described by its own most common custom-property prefixes.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Callable, Sequence

from pastelize.model.design_system import DesignSystemProfile, Framework, ThemeToggle
from pastelize.model.facts import VariableFact
from pastelize.palette.color import is_color_value

__all__ = ["DETECTORS", "MIN_CONFIDENCE", "detect_design_system", "design_system_stats"]

MIN_CONFIDENCE = 0.3
CUSTOM_CONFIDENCE = 0.5

Detector = Callable[[str, str, Sequence[VariableFact]], DesignSystemProfile]

_PREFIX_RE = re.compile(r"^(--[\w-]+?-)")


def _with_prefix(variables: Sequence[VariableFact], prefixes: Sequence[str]) -> list[VariableFact]:
    return [v for v in variables if v.name.startswith(tuple(prefixes))]


def _color_tokens(variables: Sequence[VariableFact]) -> dict[str, str]:
    return {v.name: v.computed_value for v in variables if is_color_value(v.computed_value)}


def _class_patterns(html: str, pattern: str) -> tuple[str, ...]:
    found = re.findall(rf'class="[^"]*\b({pattern})', html)
    return tuple(dict.fromkeys(found))


def _profile(
    framework: Framework,
    score: float,
    prefixes: Sequence[str],
    variables: Sequence[VariableFact],
    patterns: tuple[str, ...],
    toggle: ThemeToggle | None,
) -> DesignSystemProfile:
    return DesignSystemProfile(
        framework=framework,
        confidence=min(round(score, 2), 1.0),
        variable_prefixes=tuple(prefixes),
        color_tokens=_color_tokens(variables),
        theme_toggle=toggle,
        component_patterns=patterns,
    )


# ---------------------------------------------------------------------------
# Framework detectors
# ---------------------------------------------------------------------------


def detect_material(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    prefixes = ("--mdc-", "--mat-", "--md-")
    own = _with_prefix(variables, prefixes)
    score = 0.0
    if re.search(r'class="[^"]*mdc-', html):
        score += 0.3
    if len(own) > 5:
        score += 0.4
    if re.search(r"\.mdc-typography|\.mat-typography", css):
        score += 0.2
    if re.search(r"--mdc-theme-primary|--mdc-theme-secondary", css):
        score += 0.1
    toggle = None
    if re.search(r'\.mdc-theme--dark|data-mdc-theme="dark"', css):
        toggle = ThemeToggle("class", "mdc-theme--dark")
    return _profile(
        Framework.MATERIAL, score, prefixes, own, _class_patterns(html, r"mdc-[\w-]+"), toggle
    )


def detect_bootstrap(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    prefixes = ("--bs-",)
    own = _with_prefix(variables, prefixes)
    score = 0.0
    if re.search(r'class="[^"]*(btn-|col-|row|container)', html):
        score += 0.3
    if len(own) > 5:
        score += 0.4
    if re.search(r"\.container|\.row|\.col-", css):
        score += 0.2
    if re.search(r'class="[^"]*(text-|bg-|border-)', html):
        score += 0.1
    toggle = None
    if re.search(r'data-bs-theme="(dark|light)"', html):
        toggle = ThemeToggle("attribute", "data-bs-theme", "dark")
    patterns = _class_patterns(html, r"(?:btn|col|card|nav|navbar|alert|badge)-")
    return _profile(Framework.BOOTSTRAP, score, prefixes, own, patterns, toggle)


def detect_tailwind(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    prefixes = ("--tw-",)
    own = _with_prefix(variables, prefixes)
    score = 0.0
    if re.search(r'class="[^"]*(flex|grid|p-\d+|m-\d+|text-\w+|bg-\w+)', html):
        score += 0.4
    if re.search(r'class="[^"]*(bg-red-|text-blue-|border-green-)', html):
        score += 0.3
    if re.search(r'class="[^"]*(sm:|md:|lg:|xl:)', html):
        score += 0.2
    if own:
        score += 0.1
    toggle = None
    if re.search(r'class="[^"]*\bdark\b', html) or re.search(r"\.dark\s", css):
        toggle = ThemeToggle("class", "dark")
    utilities: list[str] = []
    for classes in re.findall(r'class="([^"]*)"', html):
        utilities.extend(c for c in classes.split() if re.match(r"(bg-|text-|border-|p-|m-|flex|grid)", c))
    patterns = tuple(dict.fromkeys(utilities))[:50]
    return _profile(Framework.TAILWIND, score, prefixes, own, patterns, toggle)


def detect_antd(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    prefixes = ("--ant-",)
    own = _with_prefix(variables, prefixes)
    score = 0.0
    if re.search(r'class="[^"]*ant-', html):
        score += 0.4
    if len(own) > 5:
        score += 0.4
    if re.search(r"\.ant-btn|\.ant-card|\.ant-table", css):
        score += 0.2
    toggle = None
    if ".ant-theme-dark" in css:
        toggle = ThemeToggle("class", "ant-theme-dark")
    elif 'data-theme="dark"' in css:
        toggle = ThemeToggle("attribute", "data-theme", "dark")
    return _profile(
        Framework.ANTD, score, prefixes, own, _class_patterns(html, r"ant-[\w-]+"), toggle
    )


def detect_chakra(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    prefixes = ("--chakra-",)
    own = _with_prefix(variables, prefixes)
    score = 0.0
    if re.search(r'class="[^"]*chakra-', html):
        score += 0.4
    if len(own) > 5:
        score += 0.4
    if re.search(r"var\(--chakra-colors|var\(--chakra-space", css):
        score += 0.2
    toggle = None
    if re.search(r'class="[^"]*chakra-ui-dark', html):
        toggle = ThemeToggle("class", "chakra-ui-dark")
    elif 'data-theme="dark"' in html:
        toggle = ThemeToggle("attribute", "data-theme", "dark")
    return _profile(
        Framework.CHAKRA, score, prefixes, own, _class_patterns(html, r"chakra-[\w-]+"), toggle
    )


DETECTORS: list[Detector] = [
    detect_material,
    detect_bootstrap,
    detect_tailwind,
    detect_antd,
    detect_chakra,
]


# ---------------------------------------------------------------------------
# Custom fallback
# ---------------------------------------------------------------------------

_GENERIC_TOGGLES: tuple[ThemeToggle, ...] = (
    ThemeToggle("class", "dark"),
    ThemeToggle("class", "dark-theme"),
    ThemeToggle("class", "dark-mode"),
    ThemeToggle("attribute", "data-theme", "dark"),
    ThemeToggle("attribute", "data-color-scheme", "dark"),
)


def _generic_toggle(html: str, css: str) -> ThemeToggle | None:
    for toggle in _GENERIC_TOGGLES:
        if toggle.kind == "class" and re.search(rf"\.{re.escape(toggle.name)}(?![\w-])", css):
            return toggle
        if toggle.kind == "attribute" and toggle.name in html:
            return toggle
    return None


def detect_custom(html: str, css: str, variables: Sequence[VariableFact]) -> DesignSystemProfile:
    counts: Counter[str] = Counter()
    for v in variables:
        m = _PREFIX_RE.match(v.name)
        if m:
            counts[m.group(1)] += 1
    prefixes = tuple(prefix for prefix, _ in counts.most_common(3))
    return DesignSystemProfile(
        framework=Framework.CUSTOM if prefixes else Framework.UNKNOWN,
        confidence=CUSTOM_CONFIDENCE if prefixes else 0.0,
        variable_prefixes=prefixes,
        color_tokens=_color_tokens(variables),
        theme_toggle=_generic_toggle(html, css),
    )


def detect_design_system(
    html: str, css: str, variables: Sequence[VariableFact]
) -> DesignSystemProfile:
    """Return the best-scoring framework profile, or the custom profile."""
    best: DesignSystemProfile | None = None
    for detector in DETECTORS:
        profile = detector(html, css, variables)
        if best is None or profile.confidence > best.confidence:
            best = profile
    if best is None or best.confidence < MIN_CONFIDENCE:
        return detect_custom(html, css, variables)
    return best


def design_system_stats(profile: DesignSystemProfile) -> dict[str, object]:
    return {
        "framework": profile.framework.value,
        "confidence": round(profile.confidence * 100),
        "prefixes": list(profile.variable_prefixes),
        "color_tokens": len(profile.color_tokens),
        "patterns": len(profile.component_patterns),
        "theme_toggle": str(profile.theme_toggle) if profile.theme_toggle else None,
    }
