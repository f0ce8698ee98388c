"""Deterministic fallback rules used whenever the classifier is off or fails.

Every function here returns a palette token for any input, so a fact with
mapping enabled always ends up mapped.
"""

from __future__ import annotations

from dataclasses import dataclass

from pastelize.analysis.scheme import ACCENT_NAME_KEYWORDS
from pastelize.model.facts import SelectorCategory, SelectorFact, VariableFact, VariableScope
from pastelize.model.mapping import HoverGradient, Priority, TokenProperties
from pastelize.model.snapshot import ColorScheme
from pastelize.palette.accents import AccentCascade, AccentRole, nearest_accent
from pastelize.palette.color import find_color, is_chromatic, lightness
from pastelize.palette.tokens import Flavor, PaletteToken

P = PaletteToken
C = SelectorCategory

DEFAULT_GRADIENT_ANGLE = 135
GRADIENT_OPACITY_SOLID = 0.18
GRADIENT_OPACITY_TEXT = 0.12

# Checked in order; the first purpose whose keywords appear in the name wins.
VARIABLE_PURPOSES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("background", ("bg", "background", "surface", "base")),
    ("text", ("text", "font", "fg")),
    ("accent", ("accent", "primary", "link", "button")),
    ("border", ("border", "outline", "divider")),
    ("hover", ("hover", "focus", "active")),
)

# (minimum distance from mid-lightness, token), most extreme first.
BACKGROUND_TIERS: tuple[tuple[float, PaletteToken], ...] = (
    (0.85, P.BASE),
    (0.7, P.MANTLE),
    (0.55, P.SURFACE0),
    (0.4, P.SURFACE1),
    (0.0, P.SURFACE2),
)
FOREGROUND_TIERS: tuple[tuple[float, PaletteToken], ...] = (
    (0.7, P.TEXT),
    (0.5, P.SUBTEXT1),
    (0.3, P.SUBTEXT0),
    (0.15, P.OVERLAY2),
    (0.0, P.OVERLAY1),
)

_BUTTON_LIKE = frozenset({C.BUTTON, C.BADGE, C.TAB})
_SURFACES = frozenset({C.CARD, C.MODAL, C.DROPDOWN})


@dataclass(frozen=True)
class HeuristicContext:
    """Everything the fallback rules need besides the fact itself."""

    flavor: Flavor
    scheme: ColorScheme
    cascade: AccentCascade
    accent_bias: bool = True

    @property
    def surface(self) -> PaletteToken:
        return P.SURFACE0 if self.flavor.is_dark else P.SURFACE2


def has_accent_keyword(name: str) -> bool:
    lower = name.lower()
    return any(keyword in lower for keyword in ACCENT_NAME_KEYWORDS)


def infer_variable_purpose(name: str) -> str:
    lower = name.lower()
    for purpose, keywords in VARIABLE_PURPOSES:
        if any(keyword in lower for keyword in keywords):
            return purpose
    return "other"


def variable_priority(fact: VariableFact) -> Priority:
    if fact.scope is VariableScope.ROOT:
        return Priority.CRITICAL if fact.frequency > 10 else Priority.HIGH
    if fact.frequency > 5:
        return Priority.MEDIUM
    return Priority.LOW


def _tier(extremeness: float, tiers: tuple[tuple[float, PaletteToken], ...]) -> PaletteToken:
    for threshold, token in tiers:
        if extremeness >= threshold:
            return token
    return tiers[-1][1]


def neutral_token(color: str, scheme: ColorScheme, side: str | None = None) -> PaletteToken:
    """Map an achromatic color onto the neutral ramp.

    Colors on the page-background side of mid-lightness become base/surface
    tones; the rest become text/overlay tones. The further from
    mid-lightness, the more extreme the tier. *side* forces
    ``"background"`` or ``"foreground"``.
    """
    l = lightness(color)
    if l is None:
        return P.TEXT if side == "foreground" else P.BASE
    if side is None:
        on_light_side = l >= 0.5
        side = "background" if on_light_side == (scheme is ColorScheme.LIGHT) else "foreground"
    extremeness = abs(l - 0.5) * 2
    tiers = BACKGROUND_TIERS if side == "background" else FOREGROUND_TIERS
    return _tier(extremeness, tiers)


def accent_for_color(color: str, ctx: HeuristicContext) -> PaletteToken:
    """Nearest accent in the target flavor, or the main accent as a last resort."""
    return nearest_accent(color, ctx.flavor) or ctx.cascade.main


def family_role(color: str, ctx: HeuristicContext) -> AccentRole | None:
    """The accent role *color* matches, if its nearest accent is in the family."""
    if not is_chromatic(color):
        return None
    return ctx.cascade.role_of(accent_for_color(color, ctx))


# ---------------------------------------------------------------------------
# Variables and SVG colors
# ---------------------------------------------------------------------------


def fallback_variable(fact: VariableFact, ctx: HeuristicContext) -> tuple[PaletteToken, str]:
    color = fact.computed_value
    purpose = infer_variable_purpose(fact.name)
    keyword = has_accent_keyword(fact.name)

    if purpose in ("accent", "hover") or (keyword and ctx.accent_bias):
        if ctx.accent_bias:
            return ctx.cascade.main, f"{purpose} variable follows the main accent"
        if is_chromatic(color):
            token = accent_for_color(color, ctx)
            return token, f"{purpose} variable takes the nearest accent"
    if is_chromatic(color) and purpose != "border":
        token = accent_for_color(color, ctx)
        return token, f"chromatic {purpose} variable takes the nearest accent"
    if purpose == "background":
        if fact.frequency > 5:
            return P.BASE, "frequently used background"
        return neutral_token(color, ctx.scheme, "background"), "background tier by lightness"
    if purpose == "text":
        if fact.frequency > 5:
            return P.TEXT, "frequently used text color"
        return neutral_token(color, ctx.scheme, "foreground"), "text tier by lightness"
    if purpose == "border":
        return P.OVERLAY0, "border color"
    return neutral_token(color, ctx.scheme), "neutral tier by lightness"


def fallback_svg_color(color: str, ctx: HeuristicContext) -> tuple[PaletteToken, str]:
    if is_chromatic(color):
        return accent_for_color(color, ctx), "nearest accent to the icon color"
    return neutral_token(color, ctx.scheme), "neutral tier by lightness"


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


def accent_bearing(fact: SelectorFact, ctx: HeuristicContext) -> tuple[bool, AccentRole | None]:
    """Whether *fact* carries an accent, and the role its own colors pin it to.

    A selector is accent-bearing when its name or category flags it, or when
    one of its colors matches the main accent or a bi-accent.
    """
    pinned: AccentRole | None = None
    for _, value in fact.styles.items():
        color = find_color(value)
        if color:
            pinned = family_role(color, ctx)
            if pinned is not None:
                break
    flagged = ctx.accent_bias and (
        fact.category in (C.BUTTON, C.LINK) or has_accent_keyword(fact.selector)
    )
    return flagged or pinned is not None, pinned


def fallback_selector(
    fact: SelectorFact,
    ctx: HeuristicContext,
    role: AccentRole | None,
) -> tuple[TokenProperties, str]:
    """Pick a token for each populated color property of *fact*.

    *role* is the accent role for accent-bearing selectors, else None.
    """
    accent = ctx.cascade.for_role(role) if role is not None else None
    tokens: dict[str, PaletteToken] = {}
    reasons: list[str] = []

    for name, value in fact.styles.items():
        color = find_color(value)
        if color is None:
            continue
        chromatic = is_chromatic(color)
        if name == "color":
            if accent is not None and fact.has_visible_background:
                tokens[name] = P.BASE
                reasons.append("text on accent background")
            elif accent is not None and (fact.is_text_only or chromatic):
                tokens[name] = accent
                reasons.append(f"{role} accent text")
            elif chromatic:
                tokens[name] = accent_for_color(color, ctx)
            elif fact.category is C.TEXT:
                tokens[name] = P.TEXT
            else:
                tokens[name] = neutral_token(color, ctx.scheme, "foreground")
        elif name == "background_color":
            if accent is not None and (fact.is_interactive or fact.category in _BUTTON_LIKE or chromatic):
                tokens[name] = accent
                reasons.append(f"{role} accent background")
            elif fact.category in _SURFACES:
                tokens[name] = ctx.surface
                reasons.append("raised surface")
            elif chromatic:
                tokens[name] = accent_for_color(color, ctx)
            else:
                tokens[name] = neutral_token(color, ctx.scheme, "background")
        elif name == "border_color":
            if accent is not None and (fact.is_interactive or chromatic):
                tokens[name] = accent
            else:
                tokens[name] = P.OVERLAY0
        else:
            if accent is not None and chromatic:
                tokens[name] = accent
            elif chromatic:
                tokens[name] = accent_for_color(color, ctx)
            else:
                tokens[name] = neutral_token(color, ctx.scheme, "foreground")

    justification = f"{fact.category.value} selector"
    if reasons:
        justification += ": " + ", ".join(dict.fromkeys(reasons))
    return TokenProperties(**tokens), justification


def hover_gradient(
    fact: SelectorFact,
    role: AccentRole,
    ctx: HeuristicContext,
) -> HoverGradient:
    start, end = ctx.cascade.gradient_for_role(role)
    angle = fact.source_gradient_angle
    return HoverGradient(
        angle=DEFAULT_GRADIENT_ANGLE if angle is None else angle,
        main=start,
        secondary=end,
        opacity=GRADIENT_OPACITY_SOLID if fact.has_visible_background else GRADIENT_OPACITY_TEXT,
    )
