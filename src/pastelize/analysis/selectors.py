"""Selector discovery: specificity, color styles and semantic categories."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace

from pastelize.analysis.css import iter_rule_blocks, split_selector_list, strip_comments
from pastelize.model.facts import ColorProperties, SelectorCategory, SelectorFact, SelectorGroup
from pastelize.palette.color import find_color

__all__ = [
    "CATEGORY_RULES",
    "categorize",
    "discover_selectors",
    "dom_occurrences",
    "extract_styles",
    "filter_by_frequency",
    "filter_color_selectors",
    "find_selector_patterns",
    "selector_stats",
    "specificity",
    "top_selectors_per_category",
]

C = SelectorCategory

_STYLE_RES: dict[str, re.Pattern[str]] = {
    "color": re.compile(r"(?:^|;)\s*color\s*:\s*([^;]+)", re.IGNORECASE),
    "background_color": re.compile(r"(?:^|;)\s*background(?:-color)?\s*:\s*([^;]+)", re.IGNORECASE),
    "border_color": re.compile(r"(?:^|;)\s*border(?:-color)?\s*:\s*([^;]+)", re.IGNORECASE),
    "fill": re.compile(r"(?:^|;)\s*fill\s*:\s*([^;]+)", re.IGNORECASE),
    "stroke": re.compile(r"(?:^|;)\s*stroke\s*:\s*([^;]+)", re.IGNORECASE),
}
_INTERACTIVE_MARKERS = (":hover", ":focus", ":active", "cursor: pointer", "cursor:pointer")
_STATE_PSEUDO_RE = re.compile(r":(?:hover|focus(?:-visible|-within)?|active)\b")
_GRADIENT_ANGLE_RE = re.compile(
    r"linear-gradient\(\s*(?:(-?\d+(?:\.\d+)?)deg|to\s+(top|right|bottom|left))", re.IGNORECASE
)
_SIDE_ANGLES = {"top": 0, "right": 90, "bottom": 180, "left": 270}
_HIDDEN_BACKGROUNDS = frozenset({"transparent", "none", "inherit"})
_SPLIT_RE = re.compile(r"[.:#\s\[>+~]")
# @keyframes steps: the scanner sees them as flat blocks.
_KEYFRAME_STEP_RE = re.compile(r"^(from|to|\d+(\.\d+)?%)$", re.IGNORECASE)

# Ordered category cascade: the first matching rule wins.
CATEGORY_RULES: tuple[tuple[SelectorCategory, tuple[str, ...], re.Pattern[str] | None], ...] = (
    (C.BUTTON, ("button", "btn"), re.compile(r"\b(submit|reset|primary|secondary|cta)\b")),
    (C.LINK, ("link", "anchor"), re.compile(r"^a$")),
    (C.CARD, ("card", "panel", "box", "tile"), None),
    (C.SIDEBAR, ("sidebar", "aside", "drawer", "sidenav"), None),
    (C.HEADER, ("header", "masthead", "topbar"), None),
    (C.FOOTER, ("footer", "bottombar"), None),
    (C.NAVIGATION, ("nav", "menu", "breadcrumb", "pagination"), None),
    (C.INPUT, ("input", "textarea", "select", "field", "form"), None),
    (C.MODAL, ("modal", "dialog", "popup", "overlay", "lightbox"), None),
    (C.ALERT, ("alert", "toast", "notification", "message", "banner"), None),
    (C.BADGE, ("badge", "tag", "chip", "label", "pill"), None),
    (C.TAB, ("tab", "pill-group"), None),
    (C.SWITCH, ("switch", "toggle", "checkbox", "radio"), None),
    (C.DROPDOWN, ("dropdown", "select", "popover"), None),
    (C.CODE, ("code", "pre", "syntax", "highlight"), None),
    (C.TABLE, ("table", "grid", "row", "cell"), None),
    (C.BACKGROUND, ("background", "bg-", "container", "wrapper"), None),
    (C.BORDER, ("border", "divider", "separator"), None),
    (C.ICON, ("icon", "ico", "svg", "glyph"), None),
    (C.TEXT, (), re.compile(r"^(h[1-6]|p|span|div|text|title|heading|desc)")),
)


def categorize(selector: str) -> SelectorCategory:
    """Assign exactly one category using the ordered keyword cascade."""
    lower = selector.lower()
    for category, keywords, pattern in CATEGORY_RULES:
        if any(keyword in lower for keyword in keywords):
            return category
        if pattern is not None and pattern.search(lower):
            return category
    return C.OTHER


def specificity(selector: str) -> int:
    """IDs x100, classes/attributes/pseudo-classes x10, element tokens x1."""
    ids = selector.count("#")
    classes = len(re.findall(r"\.|\[|:", selector))
    elements = sum(
        1
        for part in re.split(r"[\s>+~]", selector)
        if part.strip() and not part.strip().startswith((".", "#"))
    )
    return ids * 100 + classes * 10 + elements


def extract_styles(body: str) -> dict[str, str]:
    """Raw values of the five color-bearing properties found in *body*."""
    styles: dict[str, str] = {}
    for name, pattern in _STYLE_RES.items():
        m = pattern.search(body)
        if not m:
            continue
        value = m.group(1).strip()
        if name == "background_color" and ("gradient" in value or "url(" in value):
            continue
        styles[name] = value
    return styles


def _has_visible_background(raw: dict[str, str]) -> bool:
    bg = raw.get("background_color")
    return bool(bg) and bg.lower() not in _HIDDEN_BACKGROUNDS


def _has_border(raw: dict[str, str]) -> bool:
    border = raw.get("border_color")
    return bool(border) and border.lower() != "transparent"


def _gradient_angle(body: str) -> int | None:
    m = _GRADIENT_ANGLE_RE.search(body)
    if not m:
        return None
    if m.group(1) is not None:
        return round(float(m.group(1))) % 360
    return _SIDE_ANGLES[m.group(2).lower()]


@dataclass
class _Draft:
    selector: str
    raw: dict[str, str]
    interactive: bool
    occurrences: int = 1
    gradient_angle: int | None = None


def _collect(css: str) -> dict[str, _Draft]:
    drafts: dict[str, _Draft] = {}
    for block in iter_rule_blocks(strip_comments(css)):
        raw = extract_styles(block.body)
        block_text = f"{block.prelude}{{{block.body}"
        interactive = any(marker in block_text for marker in _INTERACTIVE_MARKERS)
        angle = _gradient_angle(block.body)
        for selector in split_selector_list(block.prelude):
            if selector.startswith("@") or "::" in selector or _KEYFRAME_STEP_RE.match(selector):
                continue
            existing = drafts.get(selector)
            if existing is None:
                drafts[selector] = _Draft(selector, dict(raw), interactive, 1, angle)
            else:
                existing.raw.update(raw)
                existing.interactive = existing.interactive or interactive
                existing.occurrences += 1
                if angle is not None:
                    existing.gradient_angle = angle
    # A selector with a :hover/:focus/:active variant is interactive itself.
    for selector in list(drafts):
        base = _STATE_PSEUDO_RE.sub("", selector).strip()
        if base != selector and base in drafts:
            drafts[base].interactive = True
    return drafts


def dom_occurrences(selector: str, html: str) -> int:
    """Estimate how often *selector* occurs in *html* from its leading token."""
    if selector.startswith("."):
        name = _SPLIT_RE.split(selector[1:])[0]
        if not name:
            return 0
        return len(re.findall(rf'class="[^"]*\b{re.escape(name)}\b', html))
    if selector.startswith("#"):
        ident = _SPLIT_RE.split(selector[1:])[0]
        return len(re.findall(rf'id="{re.escape(ident)}"', html))
    element = _SPLIT_RE.split(selector)[0]
    if element and re.fullmatch(r"[a-z]+", element, re.IGNORECASE):
        return len(re.findall(rf"<{element}\b", html, re.IGNORECASE))
    return 1


def _freeze(draft: _Draft, html: str) -> SelectorFact:
    raw = draft.raw
    styles = ColorProperties(
        **{name: value for name, value in raw.items() if find_color(value) is not None}
    )
    has_background = _has_visible_background(raw)
    has_border = _has_border(raw)
    return SelectorFact(
        selector=draft.selector,
        specificity=specificity(draft.selector),
        category=categorize(draft.selector),
        frequency=max(draft.occurrences, dom_occurrences(draft.selector, html)),
        is_interactive=draft.interactive,
        has_visible_background=has_background,
        has_border=has_border,
        is_text_only=bool(raw.get("color")) and not has_background and not has_border,
        styles=styles,
        source_gradient_angle=draft.gradient_angle,
    )


def discover_selectors(css: str, html: str = "") -> list[SelectorGroup]:
    """Parse every rule block into categorized, frequency-sorted selector groups."""
    facts = [_freeze(draft, html) for draft in _collect(css).values()]
    groups: list[SelectorGroup] = []
    for category in SelectorCategory:
        members = [f for f in facts if f.category is category]
        if members:
            members.sort(key=lambda f: f.frequency, reverse=True)
            groups.append(SelectorGroup(category, tuple(members)))
    return groups


def filter_color_selectors(groups: Iterable[SelectorGroup]) -> list[SelectorGroup]:
    """Drop selectors without any color-bearing property, then empty groups."""
    filtered = []
    for group in groups:
        colored = tuple(s for s in group.selectors if s.has_color)
        if colored:
            filtered.append(replace(group, selectors=colored))
    return filtered


def filter_by_frequency(groups: Iterable[SelectorGroup], minimum: int) -> list[SelectorGroup]:
    filtered = []
    for group in groups:
        kept = tuple(s for s in group.selectors if s.frequency >= minimum)
        if kept:
            filtered.append(replace(group, selectors=kept))
    return filtered


def top_selectors_per_category(groups: Iterable[SelectorGroup], limit: int = 10) -> list[SelectorGroup]:
    return [replace(group, selectors=group.selectors[:limit]) for group in groups]


def selector_stats(groups: list[SelectorGroup]) -> dict[str, object]:
    facts = [s for g in groups for s in g.selectors]
    return {
        "total": len(facts),
        "by_category": {
            g.category.value: {"count": len(g.selectors), "top": g.selectors[0].selector}
            for g in groups
        },
        "interactive": sum(1 for s in facts if s.is_interactive),
        "with_background": sum(1 for s in facts if s.has_visible_background),
        "text_only": sum(1 for s in facts if s.is_text_only),
        "avg_specificity": sum(s.specificity for s in facts) / len(facts) if facts else 0,
    }


def find_selector_patterns(groups: Iterable[SelectorGroup]) -> list[str]:
    """Name the class-naming conventions visible in the selectors."""
    found: dict[str, None] = {}
    for group in groups:
        for fact in group.selectors:
            sel = fact.selector
            if re.search(r"[a-z]+-[a-z]+__[a-z]+", sel, re.IGNORECASE):
                found["BEM"] = None
            if re.search(r"[a-z]+_[a-z]+__[a-zA-Z0-9]{5,}", sel):
                found["CSS Modules"] = None
            if "sc-" in sel:
                found["Styled Components"] = None
            if "css-" in sel:
                found["Emotion"] = None
            if re.search(r"\b(flex|grid|p-\d+|m-\d+|text-|bg-)", sel):
                found["Utility-first"] = None
    return list(found)
