"""Accent wheel, bi-accent cascade and accent-role distribution."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from pastelize.palette.color import rgb_distance
from pastelize.palette.tokens import ACCENTS, PALETTES, Flavor, PaletteToken

P = PaletteToken

ACCENT_WHEEL: tuple[PaletteToken, ...] = (
    P.RED,
    P.MAROON,
    P.PEACH,
    P.YELLOW,
    P.GREEN,
    P.TEAL,
    P.SKY,
    P.SAPPHIRE,
    P.BLUE,
    P.LAVENDER,
    P.MAUVE,
    P.PINK,
    P.FLAMINGO,
    P.ROSEWATER,
)
WHEEL_STEP = 3


class AccentRole(StrEnum):
    MAIN = "main"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"


# Target share of accent-bearing selectors per role. Reported, never enforced.
ACCENT_DISTRIBUTION: dict[AccentRole, float] = {
    AccentRole.MAIN: 0.6,
    AccentRole.SECONDARY: 0.2,
    AccentRole.TERTIARY: 0.2,
}

# Five slots realizing the 60/20/20 split when cycled.
ROLE_CYCLE: tuple[AccentRole, ...] = (
    AccentRole.MAIN,
    AccentRole.MAIN,
    AccentRole.SECONDARY,
    AccentRole.MAIN,
    AccentRole.TERTIARY,
)


def _accent(value: PaletteToken | str) -> PaletteToken:
    token = PaletteToken(value)
    if token not in ACCENT_WHEEL:
        raise ValueError(f"{value!r} is not an accent color")
    return token


def bi_accents(main: PaletteToken | str) -> tuple[PaletteToken, PaletteToken]:
    """Return the two companions three steps either side of *main*."""
    index = ACCENT_WHEEL.index(_accent(main))
    size = len(ACCENT_WHEEL)
    return (
        ACCENT_WHEEL[(index + WHEEL_STEP) % size],
        ACCENT_WHEEL[(index - WHEEL_STEP) % size],
    )


@dataclass(frozen=True)
class AccentCascade:
    """A main accent, its bi-accents and one further level of sub-bi-accents."""

    main: PaletteToken
    bi1: PaletteToken
    bi2: PaletteToken
    bi1_subs: tuple[PaletteToken, PaletteToken]
    bi2_subs: tuple[PaletteToken, PaletteToken]

    def for_role(self, role: AccentRole) -> PaletteToken:
        if role is AccentRole.SECONDARY:
            return self.bi1
        if role is AccentRole.TERTIARY:
            return self.bi2
        return self.main

    def gradient_for_role(self, role: AccentRole) -> tuple[PaletteToken, PaletteToken]:
        if role is AccentRole.SECONDARY:
            return self.bi1, self.bi1_subs[0]
        if role is AccentRole.TERTIARY:
            return self.bi2, self.bi2_subs[0]
        return self.main, self.bi1

    def role_of(self, token: PaletteToken) -> AccentRole | None:
        if token == self.main:
            return AccentRole.MAIN
        if token == self.bi1:
            return AccentRole.SECONDARY
        if token == self.bi2:
            return AccentRole.TERTIARY
        return None

    @property
    def family(self) -> tuple[PaletteToken, PaletteToken, PaletteToken]:
        return self.main, self.bi1, self.bi2


def cascading_accents(main: PaletteToken | str) -> AccentCascade:
    main = _accent(main)
    bi1, bi2 = bi_accents(main)
    return AccentCascade(
        main=main,
        bi1=bi1,
        bi2=bi2,
        bi1_subs=bi_accents(bi1),
        bi2_subs=bi_accents(bi2),
    )


def hover_gradient_tokens(main: PaletteToken | str) -> tuple[PaletteToken, PaletteToken]:
    """Default hover gradient: main accent into its first bi-accent."""
    cascade = cascading_accents(main)
    return cascade.main, cascade.bi1


def nearest_accent(
    color: str,
    flavor: Flavor | str,
    candidates: Iterable[PaletteToken] | None = None,
) -> PaletteToken | None:
    """Return the accent in *flavor* closest to *color* by RGB distance."""
    palette = PALETTES[Flavor(flavor)]
    best: PaletteToken | None = None
    best_distance = float("inf")
    for token in candidates if candidates is not None else ACCENTS:
        distance = rgb_distance(color, palette[token])
        if distance < best_distance:
            best, best_distance = token, distance
    return best
