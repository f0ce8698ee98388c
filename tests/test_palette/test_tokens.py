"""Tests for the palette token vocabulary and flavor tables."""

import pytest

from pastelize.palette.tokens import (
    ACCENTS,
    GENERATOR_VARIABLES,
    NEUTRALS,
    PALETTES,
    Flavor,
    PaletteToken,
    is_palette_token,
    _table,
    resolve_hex,
)


class TestVocabulary:
    def test_exactly_26_tokens(self):
        assert len(PaletteToken) == 26

    def test_accents_and_neutrals_partition_the_tokens(self):
        assert len(ACCENTS) == 14
        assert len(NEUTRALS) == 12
        assert set(ACCENTS) | set(NEUTRALS) == set(PaletteToken)
        assert not set(ACCENTS) & set(NEUTRALS)

    def test_is_accent(self):
        assert PaletteToken.MAUVE.is_accent
        assert PaletteToken.ROSEWATER.is_accent
        assert not PaletteToken.TEXT.is_accent
        assert not PaletteToken.CRUST.is_accent

    def test_is_palette_token(self):
        assert is_palette_token("mauve")
        assert is_palette_token(PaletteToken.BASE)
        assert not is_palette_token("purple")
        assert not is_palette_token("Mauve")
        assert not is_palette_token(None)
        assert not is_palette_token(3)

    def test_generator_variables_never_shadow_tokens(self):
        assert not any(is_palette_token(name) for name in GENERATOR_VARIABLES)
        assert "accent" in GENERATOR_VARIABLES
        assert "bi-accent-1" in GENERATOR_VARIABLES


class TestFlavors:
    def test_only_latte_is_light(self):
        assert not Flavor.LATTE.is_dark
        assert Flavor.FRAPPE.is_dark
        assert Flavor.MACCHIATO.is_dark
        assert Flavor.MOCHA.is_dark

    @pytest.mark.parametrize("flavor", list(Flavor))
    def test_every_flavor_defines_every_token(self, flavor):
        table = PALETTES[flavor]
        assert set(table) == set(PaletteToken)
        assert all(value.startswith("#") and len(value) == 7 for value in table.values())

    def test_known_values(self):
        assert resolve_hex(Flavor.MOCHA, PaletteToken.BASE) == "#1e1e2e"
        assert resolve_hex("mocha", "mauve") == "#cba6f7"
        assert resolve_hex("latte", "text") == "#4c4f69"

    def test_resolve_hex_rejects_unknown_names(self):
        with pytest.raises(ValueError):
            resolve_hex("midnight", "base")
        with pytest.raises(ValueError):
            resolve_hex("mocha", "purple")

    def test_short_color_table_is_rejected(self):
        with pytest.raises(ValueError, match="Expected 26 palette colors, got 2"):
            _table("ffffff 000000")
