"""Tests for inline and background SVG analysis."""

import pytest

from pastelize.analysis.svg import (
    analyze_svgs,
    classify_purpose,
    colors_in_markup,
    recolor_svg,
    svg_fingerprint,
    svg_stats,
)
from pastelize.model.facts import SVGColorType, SVGInfo, SVGLocation, SVGPurpose
from pastelize.palette.tokens import PaletteToken


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

LOGO_HTML = (
    '<header><div class="logo main"><svg width="24" height="20" viewBox="0 0 24 24">'
    '<path fill="#ff0000" stroke="#000"/></svg></div></header>'
)

ENCODED_CSS = (
    ".icon-search { background-image: url(\"data:image/svg+xml,"
    "%3Csvg xmlns='http://www.w3.org/2000/svg'%3E%3Cpath fill='%23333'/%3E%3C/svg%3E\"); }"
)

BASE64_CSS = (
    ".btn-go { background: url(data:image/svg+xml;base64,"
    "PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciPjxwYXRoIGZpbGw9IiMwMGZmMDAiLz48L3N2Zz4=)"
    " no-repeat; }"
)


# ---------------------------------------------------------------------------
# analyze_svgs
# ---------------------------------------------------------------------------


class TestInlineSvgs:
    def test_owner_class_purpose_and_size(self):
        svgs = analyze_svgs(LOGO_HTML)
        assert len(svgs) == 1
        svg = svgs[0]
        assert svg.location is SVGLocation.INLINE
        assert svg.selector == ".logo"
        assert svg.purpose is SVGPurpose.LOGO
        assert (svg.width, svg.height) == ("24", "20")

    def test_colors_are_normalized_with_raw_kept(self):
        colors = analyze_svgs(LOGO_HTML)[0].colors
        assert [(c.color_type, c.color, c.raw) for c in colors] == [
            (SVGColorType.FILL, "#FF0000", "#ff0000"),
            (SVGColorType.STROKE, "#000000", "#000"),
        ]
        assert all(c.selector == ".logo" for c in colors)

    def test_svg_without_owner_class(self):
        svgs = analyze_svgs('<p><svg><path fill="blue"/></svg></p>')
        assert svgs[0].selector == "svg"
        assert svgs[0].purpose is SVGPurpose.ICON

    def test_identical_svgs_are_deduplicated(self):
        html = LOGO_HTML + LOGO_HTML
        assert len(analyze_svgs(html)) == 1

    def test_keywords_are_not_colors(self):
        svgs = analyze_svgs('<svg><path fill="none" stroke="currentColor"/></svg>')
        assert svgs[0].colors == ()


class TestBackgroundSvgs:
    def test_percent_encoded_data_uri(self):
        svgs = analyze_svgs("", ENCODED_CSS)
        assert len(svgs) == 1
        svg = svgs[0]
        assert svg.location is SVGLocation.BACKGROUND
        assert svg.selector == ".icon-search"
        assert svg.purpose is SVGPurpose.ICON
        assert svg.markup.startswith("<svg")
        assert [c.color for c in svg.colors] == ["#333333"]

    def test_base64_data_uri(self):
        svgs = analyze_svgs("", BASE64_CSS)
        assert len(svgs) == 1
        assert svgs[0].purpose is SVGPurpose.BUTTON
        assert [c.color for c in svgs[0].colors] == ["#00FF00"]

    def test_style_elements_are_scanned(self):
        html = f"<style>{ENCODED_CSS}</style>"
        assert len(analyze_svgs(html)) == 1

    def test_broken_base64_is_skipped(self):
        css = ".x { background: url(data:image/svg+xml;base64,@@@@); }"
        assert analyze_svgs("", css) == []


# ---------------------------------------------------------------------------
# Purpose, markup colors and recoloring
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "selector, purpose",
    [
        (".site-brand", SVGPurpose.LOGO),
        (".nav-icon", SVGPurpose.ICON),
        (".btn", SVGPurpose.BUTTON),
        ("#main-menu", SVGPurpose.NAVIGATION),
        (".share-twitter", SVGPurpose.SOCIAL),
        (".chevron", SVGPurpose.ARROW),
        (".thing", SVGPurpose.OTHER),
    ],
)
def test_classify_purpose(selector, purpose):
    assert classify_purpose(selector) is purpose


def test_colors_in_markup_ignores_similar_attributes():
    markup = '<svg><path fill-rule="evenodd" fill="#abc" stroke-width="2"/><stop stop-color="red"/></svg>'
    assert colors_in_markup(markup) == [
        (SVGColorType.FILL, "#abc", "#AABBCC"),
        (SVGColorType.STOP_COLOR, "red", "#FF0000"),
    ]


class TestRecolor:
    def test_mapped_colors_become_placeholders(self):
        svg = analyze_svgs(LOGO_HTML)[0]
        markup, used = recolor_svg(svg, {"#FF0000": PaletteToken.RED})
        assert 'fill="@{red}"' in markup
        assert 'stroke="#000"' in markup
        assert used == (PaletteToken.RED,)

    def test_nothing_mapped(self):
        svg = analyze_svgs(LOGO_HTML)[0]
        markup, used = recolor_svg(svg, {})
        assert markup == svg.markup
        assert used == ()


def test_svg_stats():
    svgs = analyze_svgs(LOGO_HTML, ENCODED_CSS)
    stats = svg_stats(svgs)
    assert stats["total"] == 2
    assert stats["inline"] == 1
    assert stats["background"] == 1
    assert stats["total_colors"] == 3
    assert stats["colors_by_type"]["fill"] == 2


class TestFingerprint:
    def _svg(self, markup: str) -> SVGInfo:
        return SVGInfo(SVGLocation.INLINE, "svg", markup, ())

    def test_numbers_and_whitespace_runs_are_normalized(self):
        first = self._svg("<svg viewBox='0 0 24 24'>\n  <path d='M1 2'/></svg>")
        second = self._svg("<svg   viewBox='0 0 16 16'> <path d='M3.5 4'/></svg>")
        assert svg_fingerprint(first) == svg_fingerprint(second)

    def test_whitespace_is_collapsed_not_removed(self):
        fingerprint = svg_fingerprint(self._svg("<svg  viewBox='0 0 24 24'>\t<path/></svg>"))
        assert fingerprint == "|<svg viewBox='N N N N'> <path/></svg>"
