"""Tests for the baked, dynamic and refined theme generators."""

import pytest

from pastelize import __version__
from pastelize.errors import UnknownVariantError
from pastelize.generator import (
    GENERATORS,
    GeneratorConfig,
    generate_theme,
    get_generator,
)
from pastelize.generator.base import LIB_IMPORT
from pastelize.model.facts import SelectorCategory, SVGLocation
from pastelize.model.mapping import (
    HoverGradient,
    KindStats,
    MappingResult,
    MappingStats,
    ProcessedSVG,
    SelectorMapping,
    TokenProperties,
    VariableMapping,
)
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.model.theme import ThemeCoverage
from pastelize.palette.accents import AccentRole
from pastelize.palette.tokens import PaletteToken
from pastelize.validation.validator import validate_output

P = PaletteToken
C = SelectorCategory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

URL = "https://www.example.com/"
SNAPSHOT = AnalysisSnapshot(url=URL)

MAPPINGS = MappingResult(
    flavor="mocha",
    main_accent=P.MAUVE,
    variables=(
        VariableMapping("--brand", "#1A73E8", P.MAUVE, "Brand accent"),
        VariableMapping("--page-bg", "#FFFFFF", P.BASE, "Page background"),
    ),
    selectors=(
        SelectorMapping(
            ".btn",
            C.BUTTON,
            TokenProperties(color=P.BASE, background_color=P.MAUVE),
            "Primary button",
            is_accent=True,
            accent_role=AccentRole.MAIN,
            hover_gradient=HoverGradient(135, P.MAUVE, P.ROSEWATER, 0.18),
        ),
        SelectorMapping("div:not(.valid", C.OTHER, TokenProperties(color=P.TEXT), "Broken"),
        SelectorMapping("html", C.BACKGROUND, TokenProperties(background_color=P.BASE), "Page"),
        SelectorMapping(
            "a",
            C.LINK,
            TokenProperties(color=P.SAPPHIRE),
            "Link",
            is_accent=True,
            accent_role=AccentRole.TERTIARY,
        ),
        SelectorMapping(
            ".chip-x",
            C.BADGE,
            TokenProperties(background_color=P.MAUVE),
            "Chip",
            is_accent=True,
            accent_role=AccentRole.SECONDARY,
        ),
    ),
    processed_svgs=(
        ProcessedSVG(
            ".logo",
            SVGLocation.BACKGROUND,
            "<svg/>",
            "<svg><path fill='@{mauve}'/></svg>",
            (P.MAUVE,),
        ),
    ),
    stats=MappingStats(variables=KindStats(2, 2), selectors=KindStats(5, 5)),
)


def _generate(variant: str, **config):
    config.setdefault("version", "2026.10.17")
    return generate_theme(SNAPSHOT, MAPPINGS, GeneratorConfig(url=URL, variant=variant, **config))


def _block(text: str, prelude: str) -> list[str]:
    """Declarations of the first block opened by exactly *prelude*."""
    lines = [line.strip() for line in text.splitlines()]
    start = lines.index(f"{prelude} {{") + 1
    end = lines.index("}", start)
    return lines[start:end]


# ---------------------------------------------------------------------------
# Shared document structure
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("variant", sorted(GENERATORS))
class TestDocument:
    def test_header_and_scope(self, variant):
        text = _generate(variant).text
        assert text.startswith("/* ==UserStyle==\n@name Example Catppuccin\n")
        assert "@version 2026.10.17" in text
        assert "@namespace github.com/catppuccin/userstyles/styles/www-example-com" in text
        assert "==/UserStyle== */" in text
        assert LIB_IMPORT in text
        assert '@-moz-document domain("www.example.com") {' in text
        assert text.endswith("}\n")

    def test_output_validates(self, variant):
        report = validate_output(_generate(variant))
        assert report.errors == []
        assert report.is_valid

    def test_unbalanced_selector_is_dropped(self, variant):
        text = _generate(variant).text
        assert "div:not(.valid" not in text

    def test_variables_are_always_important(self, variant):
        section = _generate(variant).sections.variables
        lines = section.splitlines()
        assert len(lines) == 2
        assert all("!important;" in line for line in lines)

    def test_svg_replacement(self, variant):
        text = _generate(variant).text
        assert _block(text, ".logo") == [
            "@svg: escape('<svg><path fill=\\'@{mauve}\\'/></svg>');",
            'background-image: url("data:image/svg+xml,@{svg}") !important;',
        ]

    def test_html_is_emitted_as_ampersand(self, variant):
        text = _generate(variant).text
        assert "& {" in text
        assert "html {" not in text

    def test_mapped_selectors_skip_fallback_defaults(self, variant):
        text = _generate(variant).text
        assert 'h1:not([class*="bg-clip-text"])' in text
        assert 'a:not([class*="bg-clip-text"])' not in text

    def test_metadata_and_coverage(self, variant):
        theme = _generate(variant)
        assert theme.metadata.host == "www.example.com"
        assert theme.metadata.variant == variant
        assert theme.metadata.accent == "mauve"
        assert theme.metadata.flavor == "mocha"
        assert theme.metadata.generator_version == __version__
        assert theme.coverage == ThemeCoverage(variables=100, svgs=0, selectors=100)

    def test_comments_can_be_left_out(self, variant):
        text = _generate(variant, include_comments=False).text
        assert text.count("/*") == 1
        assert "Primary button" not in text


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TestBaked:
    def test_palette_is_written_inline(self):
        text = _generate("baked").text
        assert "@base: #1e1e2e;" in text
        assert "@mauve: #cba6f7;" in text
        assert "color-scheme: dark;" in text

    def test_light_flavor_palette(self):
        text = _generate("baked", flavor="latte").text
        assert "@base: #eff1f5;" in text
        assert "color-scheme: light;" in text

    def test_tokens_are_referenced_directly(self):
        text = _generate("baked").text
        assert "--brand: @mauve !important; /* Brand accent */" in text
        assert _block(text, ".btn") == ["color: @base;", "background-color: @mauve;"]
        assert _block(text, "&") == ["background-color: @base;"]

    def test_hover_gradient(self):
        text = _generate("baked").text
        assert _block(text, ".btn:hover") == [
            "background: linear-gradient(135deg, @mauve, fade(@rosewater, 18%));",
            "color: @text;",
        ]

    def test_classifier_important_is_honored(self):
        important = MappingResult(
            flavor="mocha",
            main_accent=P.MAUVE,
            selectors=(SelectorMapping(".x", C.OTHER, TokenProperties(color=P.TEXT), "", important=True),),
        )
        theme = generate_theme(SNAPSHOT, important, GeneratorConfig(url=URL, variant="baked"))
        assert _block(theme.text, ".x") == ["color: @text !important;"]


class TestDynamic:
    def test_user_options(self):
        text = _generate("dynamic").text
        assert '@var select lightFlavor "Light Flavor" ["latte:Latte*"' in text
        assert '"mocha:Mocha*"' in text
        assert '"mauve:Mauve*"' in text

    def test_palette_procedure(self):
        text = _generate("dynamic").text
        assert "#catppuccin(@flavor) {" in text
        assert "@accent: @@accentColor;" in text
        assert "#catppuccin(@lightFlavor);" in text
        assert _block(text, "#bi-accents(@accentName) when (@accentName = mauve)") == [
            "@bi-accent-1: @rosewater;",
            "@bi-accent-2: @sapphire;",
            "@bi1-sub-1: @peach;",
            "@bi1-sub-2: @mauve;",
            "@bi2-sub-1: @mauve;",
            "@bi2-sub-2: @green;",
        ]

    def test_accent_tokens_become_aliases(self):
        text = _generate("dynamic").text
        assert "--brand: @accent !important; /* Brand accent */" in text
        assert _block(text, ".btn") == ["color: @base !important;", "background-color: @accent !important;"]
        assert _block(text, "a") == ["color: @bi-accent-2 !important;"]
        assert _block(text, ".chip-x") == ["background-color: @accent !important;"]

    def test_hover_gradient(self):
        text = _generate("dynamic").text
        assert _block(text, ".btn:hover") == [
            "background: linear-gradient(135deg, @accent, fade(@bi-accent-1, 18%)) !important;",
            "color: @text !important;",
        ]
        assert '.badge:not([class*="gradient"]):hover,' in text


class TestRefined:
    def test_role_aliases_for_accent_selectors(self):
        text = _generate("refined").text
        assert _block(text, ".btn") == ["color: @base !important;", "background-color: @accent !important;"]
        assert _block(text, ".chip-x") == ["background-color: @bi-accent-1 !important;"]
        assert _block(text, "a") == ["color: @bi-accent-2 !important;"]

    def test_hover_text_sits_on_base(self):
        text = _generate("refined").text
        assert "color: @base !important;" in _block(text, ".btn:hover")


# ---------------------------------------------------------------------------
# Registry and config
# ---------------------------------------------------------------------------


def test_registry():
    assert set(GENERATORS) == {"baked", "dynamic", "refined"}
    assert get_generator("refined").name == "refined"


def test_unknown_variant():
    with pytest.raises(UnknownVariantError, match="baked, dynamic, refined"):
        get_generator("pastel")


@pytest.mark.parametrize("accent", ["base", "nope"])
def test_config_rejects_non_accents(accent):
    with pytest.raises(ValueError):
        GeneratorConfig(url=URL, accent=accent)


def test_default_variant_is_dynamic():
    assert GeneratorConfig(url=URL).variant == "dynamic"


class TestDegenerateInput:
    def test_local_file_gets_placeholder_scope(self):
        empty = MappingResult(flavor="mocha", main_accent=P.MAUVE)
        theme = generate_theme(SNAPSHOT, empty, GeneratorConfig(url="file:///tmp/page.html"))
        assert '@-moz-document domain("unknown-host") {' in theme.text
        assert "@name Unknown Host Catppuccin" in theme.text

    def test_international_host_is_scoped_by_punycode(self):
        empty = MappingResult(flavor="mocha", main_accent=P.MAUVE)
        theme = generate_theme(SNAPSHOT, empty, GeneratorConfig(url="https://bücher.de/"))
        assert '@-moz-document domain("xn--bcher-kva.de") {' in theme.text
        assert theme.metadata.host == "xn--bcher-kva.de"

    def test_zero_coverage_is_a_warning_only(self):
        empty = MappingResult(flavor="mocha", main_accent=P.MAUVE)
        theme = generate_theme(SNAPSHOT, empty, GeneratorConfig(url=URL))
        report = validate_output(theme)
        assert report.is_valid
        assert [d.rule for d in report.warnings] == ["check_zero_coverage"]

    def test_repeated_selectors_are_merged(self):
        repeated = MappingResult(
            flavor="mocha",
            main_accent=P.MAUVE,
            selectors=(
                SelectorMapping(".x", C.OTHER, TokenProperties(color=P.TEXT), "one"),
                SelectorMapping(".x", C.OTHER, TokenProperties(background_color=P.BASE), "two"),
            ),
        )
        theme = generate_theme(SNAPSHOT, repeated, GeneratorConfig(url=URL, variant="baked"))
        assert theme.text.count(".x {") == 1
        assert _block(theme.text, ".x") == ["color: @text;", "background-color: @base;"]
