"""The closed Catppuccin token vocabulary and per-flavor hex tables."""
from __future__ import annotations

from enum import StrEnum


class Flavor(StrEnum):
    LATTE = "latte"
    FRAPPE = "frappe"
    MACCHIATO = "macchiato"
    MOCHA = "mocha"

    @property
    def is_dark(self) -> bool:
        return self is not Flavor.LATTE


class PaletteToken(StrEnum):
    """The 26 names any mapping may resolve to."""

    ROSEWATER = "rosewater"
    FLAMINGO = "flamingo"
    PINK = "pink"
    MAUVE = "mauve"
    RED = "red"
    MAROON = "maroon"
    PEACH = "peach"
    YELLOW = "yellow"
    GREEN = "green"
    TEAL = "teal"
    SKY = "sky"
    SAPPHIRE = "sapphire"
    BLUE = "blue"
    LAVENDER = "lavender"
    TEXT = "text"
    SUBTEXT1 = "subtext1"
    SUBTEXT0 = "subtext0"
    OVERLAY2 = "overlay2"
    OVERLAY1 = "overlay1"
    OVERLAY0 = "overlay0"
    SURFACE2 = "surface2"
    SURFACE1 = "surface1"
    SURFACE0 = "surface0"
    BASE = "base"
    MANTLE = "mantle"
    CRUST = "crust"

    @property
    def is_accent(self) -> bool:
        return self in ACCENTS


ACCENTS: tuple[PaletteToken, ...] = tuple(PaletteToken)[:14]
NEUTRALS: tuple[PaletteToken, ...] = tuple(PaletteToken)[14:]

# LESS variables owned by the generator rather than the palette library.
ACCENT_ALIASES: tuple[str, ...] = (
    "accent",
    "bi-accent-1",
    "bi-accent-2",
    "bi1-sub-1",
    "bi1-sub-2",
    "bi2-sub-1",
    "bi2-sub-2",
)
USER_VARIABLES: tuple[str, ...] = ("darkFlavor", "lightFlavor", "accentColor")
GENERATOR_VARIABLES: frozenset[str] = frozenset(
    ACCENT_ALIASES + USER_VARIABLES + ("flavor", "accentName", "svg")
)


def _table(values: str) -> dict[PaletteToken, str]:
    hexes = values.split()
    if len(hexes) != len(PaletteToken):
        raise ValueError(f"Expected {len(PaletteToken)} palette colors, got {len(hexes)}")
    return {token: f"#{value}" for token, value in zip(PaletteToken, hexes)}


PALETTES: dict[Flavor, dict[PaletteToken, str]] = {
    Flavor.LATTE: _table(
        "dc8a78 dd7878 ea76cb 8839ef d20f39 e64553 fe640b df8e1d 40a02b 179299 "
        "04a5e5 209fb5 1e66f5 7287fd 4c4f69 5c5f77 6c6f85 7c7f93 8c8fa1 9ca0b0 "
        "acb0be bcc0cc ccd0da eff1f5 e6e9ef dce0e8"
    ),
    Flavor.FRAPPE: _table(
        "f2d5cf eebebe f4b8e4 ca9ee6 e78284 ea999c ef9f76 e5c890 a6d189 81c8be "
        "99d1db 85c1dc 8caaee babbf1 c6d0f5 b5bfe2 a5adce 949cbb 838ba7 737994 "
        "626880 51576d 414559 303446 292c3c 232634"
    ),
    Flavor.MACCHIATO: _table(
        "f4dbd6 f0c6c6 f5bde6 c6a0f6 ed8796 ee99a0 f5a97f eed49f a6da95 8bd5ca "
        "91d7e3 7dc4e4 8aadf4 b7bdf8 cad3f5 b8c0e0 a5adcb 939ab7 8087a2 6e738d "
        "5b6078 494d64 363a4f 24273a 1e2030 181926"
    ),
    Flavor.MOCHA: _table(
        "f5e0dc f2cdcd f5c2e7 cba6f7 f38ba8 eba0ac fab387 f9e2af a6e3a1 94e2d5 "
        "89dceb 74c7ec 89b4fa b4befe cdd6f4 bac2de a6adc8 9399b2 7f849c 6c7086 "
        "585b70 45475a 313244 1e1e2e 181825 11111b"
    ),
}


def is_palette_token(name: object) -> bool:
    """Return True if *name* is one of the 26 palette token names."""
    return isinstance(name, str) and name in PaletteToken._value2member_map_


def resolve_hex(flavor: Flavor | str, token: PaletteToken | str) -> str:
    return PALETTES[Flavor(flavor)][PaletteToken(token)]
