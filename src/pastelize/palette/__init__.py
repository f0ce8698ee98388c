"""Catppuccin palette: tokens, flavors, accents and color helpers."""

from pastelize.palette.accents import (
    ACCENT_DISTRIBUTION,
    ACCENT_WHEEL,
    AccentCascade,
    AccentRole,
    bi_accents,
    cascading_accents,
    hover_gradient_tokens,
    nearest_accent,
)
from pastelize.palette.color import (
    find_color,
    is_chromatic,
    is_color_value,
    is_dark_color,
    lightness,
    normalize_color,
)
from pastelize.palette.tokens import (
    ACCENTS,
    NEUTRALS,
    PALETTES,
    Flavor,
    PaletteToken,
    is_palette_token,
    resolve_hex,
)

__all__ = [
    "ACCENTS",
    "ACCENT_DISTRIBUTION",
    "ACCENT_WHEEL",
    "AccentCascade",
    "AccentRole",
    "Flavor",
    "NEUTRALS",
    "PALETTES",
    "PaletteToken",
    "bi_accents",
    "cascading_accents",
    "find_color",
    "hover_gradient_tokens",
    "is_chromatic",
    "is_color_value",
    "is_dark_color",
    "is_palette_token",
    "lightness",
    "nearest_accent",
    "normalize_color",
    "resolve_hex",
]
