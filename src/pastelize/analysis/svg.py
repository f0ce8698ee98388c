"""SVG color analysis for inline icons and CSS data-URI backgrounds."""

from __future__ import annotations

import base64
import binascii
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from urllib.parse import unquote

from pastelize.analysis.css import iter_rule_blocks, strip_comments, style_blocks
from pastelize.model.facts import SVGColorFact, SVGColorType, SVGInfo, SVGLocation, SVGPurpose
from pastelize.palette.color import NON_COLOR_KEYWORDS, normalize_color
from pastelize.palette.tokens import PaletteToken

__all__ = [
    "analyze_svgs",
    "classify_purpose",
    "colors_in_markup",
    "group_svgs_by_purpose",
    "recolor_svg",
    "svg_fingerprint",
    "svg_stats",
]

_INLINE_SVG_RE = re.compile(r"<svg\b[^>]*>.*?</svg>", re.IGNORECASE | re.DOTALL)
_OWNER_CLASS_RE = re.compile(r"""class=["']([^"']+)["'][^<]*$""", re.IGNORECASE)
_WIDTH_RE = re.compile(r"""\bwidth=["']?(\d+)""", re.IGNORECASE)
_HEIGHT_RE = re.compile(r"""\bheight=["']?(\d+)""", re.IGNORECASE)
_BACKGROUND_SVG_RE = re.compile(
    r"""
    background(?:-image)?\s*:\s*[^;]*?url\(\s*
    (?:
        "data:image/svg\+xml(?P<dq_head>[^,"]*),(?P<dq>[^"]*)"
      | 'data:image/svg\+xml(?P<sq_head>[^,']*),(?P<sq>[^']*)'
      | data:image/svg\+xml(?P<uq_head>[^,)]*),(?P<uq>[^)]*)
    )
    \s*\)
    """,
    re.IGNORECASE | re.VERBOSE,
)
_ATTRIBUTE_RES: dict[SVGColorType, re.Pattern[str]] = {
    kind: re.compile(rf"""(?<![\w-]){kind.value}\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
    for kind in SVGColorType
}
_LOOKBACK = 500

_PURPOSE_KEYWORDS: tuple[tuple[SVGPurpose, tuple[str, ...]], ...] = (
    (SVGPurpose.LOGO, ("logo", "brand")),
    (SVGPurpose.ICON, ("icon", "ico", "svg")),
    (SVGPurpose.BUTTON, ("btn", "button")),
    (SVGPurpose.NAVIGATION, ("nav", "menu", "header")),
    (SVGPurpose.SOCIAL, ("social", "share", "facebook", "twitter", "linkedin")),
    (SVGPurpose.ARROW, ("arrow", "chevron", "caret")),
)


def classify_purpose(selector: str) -> SVGPurpose:
    lower = selector.lower()
    for purpose, keywords in _PURPOSE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return purpose
    return SVGPurpose.OTHER


def colors_in_markup(markup: str) -> list[tuple[SVGColorType, str, str]]:
    """Return ``(kind, raw, normalized)`` for every usable color attribute."""
    found: list[tuple[SVGColorType, str, str]] = []
    for kind, pattern in _ATTRIBUTE_RES.items():
        for m in pattern.finditer(markup):
            raw = m.group(1).strip()
            if raw.lower() in NON_COLOR_KEYWORDS:
                continue
            normalized = normalize_color(raw)
            if normalized is not None:
                found.append((kind, raw, normalized))
    return found


def _build(
    location: SVGLocation,
    selector: str,
    markup: str,
    width: str | None = None,
    height: str | None = None,
) -> SVGInfo:
    purpose = classify_purpose(selector)
    colors = tuple(
        SVGColorFact(
            color=normalized,
            color_type=kind,
            location=location,
            selector=selector,
            purpose=purpose,
            raw=raw,
        )
        for kind, raw, normalized in colors_in_markup(markup)
    )
    return SVGInfo(
        location=location,
        selector=selector,
        markup=markup,
        colors=colors,
        purpose=purpose,
        width=width,
        height=height,
    )


def _inline_svgs(html: str) -> list[SVGInfo]:
    svgs: list[SVGInfo] = []
    for match in _INLINE_SVG_RE.finditer(html):
        markup = match.group(0)
        before = html[max(0, match.start() - _LOOKBACK):match.start()]
        owner = _OWNER_CLASS_RE.search(before)
        selector = f".{owner.group(1).split()[0]}" if owner else "svg"
        width = _WIDTH_RE.search(markup)
        height = _HEIGHT_RE.search(markup)
        svgs.append(
            _build(
                SVGLocation.INLINE,
                selector,
                markup,
                width.group(1) if width else None,
                height.group(1) if height else None,
            )
        )
    return svgs


def _decode_payload(head: str, payload: str) -> str | None:
    if "base64" in head.lower():
        try:
            return base64.b64decode(unquote(payload)).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None
    data = unquote(payload)
    return data.replace('\\"', '"').replace("\\\\", "\\")


def _background_svgs(css: str) -> list[SVGInfo]:
    svgs: list[SVGInfo] = []
    for block in iter_rule_blocks(css):
        for m in _BACKGROUND_SVG_RE.finditer(block.body):
            for quote in ("dq", "sq", "uq"):
                if m.group(quote) is not None:
                    markup = _decode_payload(m.group(f"{quote}_head"), m.group(quote))
                    break
            else:
                continue
            if markup:
                svgs.append(_build(SVGLocation.BACKGROUND, block.prelude, markup))
    return svgs


def svg_fingerprint(svg: SVGInfo) -> str:
    """Sorted colors plus a number-insensitive, whitespace-collapsed markup prefix."""
    colors = ",".join(sorted(fact.color for fact in svg.colors))
    structure = " ".join(re.sub(r"[0-9.]+", "N", svg.markup).split())[:100]
    return f"{colors}|{structure}"


def analyze_svgs(html: str, css: str = "") -> list[SVGInfo]:
    """Find inline and background SVGs, deduplicated by fingerprint."""
    sheet = strip_comments(css + "\n" + "\n".join(style_blocks(html)))
    seen: set[str] = set()
    unique: list[SVGInfo] = []
    for svg in _inline_svgs(html) + _background_svgs(sheet):
        key = svg_fingerprint(svg)
        if key in seen:
            continue
        seen.add(key)
        unique.append(svg)
    return unique


def recolor_svg(
    svg: SVGInfo, tokens: Mapping[str, PaletteToken]
) -> tuple[str, tuple[PaletteToken, ...]]:
    """Replace mapped color literals with ``@{token}`` placeholders.

    *tokens* maps normalized colors to palette tokens. Returns the new markup
    and the tokens actually substituted, in first-use order.
    """
    markup = svg.markup
    used: list[PaletteToken] = []
    for fact in svg.colors:
        token = tokens.get(fact.color)
        if token is None:
            continue
        pattern = re.compile(
            rf"""((?<![\w-]){fact.color_type.value}\s*=\s*["'])\s*{re.escape(fact.raw)}\s*(["'])""",
            re.IGNORECASE,
        )
        markup, count = pattern.subn(rf"\g<1>@{{{token.value}}}\g<2>", markup)
        if count and token not in used:
            used.append(token)
    return markup, tuple(used)


def group_svgs_by_purpose(svgs: Iterable[SVGInfo]) -> dict[SVGPurpose, list[SVGInfo]]:
    groups: dict[SVGPurpose, list[SVGInfo]] = {}
    for svg in svgs:
        groups.setdefault(svg.purpose, []).append(svg)
    return groups


def svg_stats(svgs: list[SVGInfo]) -> dict[str, object]:
    facts = [fact for svg in svgs for fact in svg.colors]
    by_type = Counter(fact.color_type.value for fact in facts)
    return {
        "total": len(svgs),
        "inline": sum(1 for s in svgs if s.location is SVGLocation.INLINE),
        "background": sum(1 for s in svgs if s.location is SVGLocation.BACKGROUND),
        "unique_colors": len({fact.color for fact in facts}),
        "total_colors": len(facts),
        "colors_by_type": {kind.value: by_type.get(kind.value, 0) for kind in SVGColorType},
        "purposes": {p.value: len(g) for p, g in group_svgs_by_purpose(svgs).items()},
    }
