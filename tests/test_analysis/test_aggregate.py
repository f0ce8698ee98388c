"""Tests for the analysis aggregator."""

import json

from pastelize.analysis.aggregate import AnalysisOptions, analyze_page, summarize
from pastelize.model.design_system import Framework
from pastelize.model.page import PageSource
from pastelize.model.snapshot import ColorScheme


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SITE_CSS = """
:root { --brand-accent: #1a73e8; --page-bg: #ffffff; --gap: 8px; }
.cta { color: var(--brand-accent); }
.btn-primary { color: #ffffff; background-color: #1a73e8; }
.btn-primary:hover { background-color: #1557b0; }
.layout { display: grid; }
"""
SITE_HTML = """
<html><head><style>.note { color: #444444; }</style></head>
<body>
  <div class="logo"><svg width="32" height="32"><path fill="#1a73e8"/></svg></div>
  <a class="cta" href="#">Go</a>
</body></html>
"""


def _page(**overrides) -> PageSource:
    values = dict(url="https://example.com/", html=SITE_HTML, css=SITE_CSS)
    values.update(overrides)
    return PageSource(**values)


# ---------------------------------------------------------------------------
# analyze_page
# ---------------------------------------------------------------------------


class TestAnalyzePage:
    def test_snapshot_holds_only_color_facts(self):
        snapshot = analyze_page(_page())
        assert snapshot.url == "https://example.com/"
        assert {v.name for v in snapshot.variables} == {"--brand-accent", "--page-bg"}
        selectors = {s.selector for s in snapshot.color_selectors()}
        assert selectors == {".btn-primary", ".btn-primary:hover", ".note"}
        assert len(snapshot.svgs) == 1

    def test_coverage_counts_everything_found(self):
        snapshot = analyze_page(_page())
        assert snapshot.coverage.variables == 3
        assert snapshot.coverage.svgs == 1
        assert snapshot.coverage.selectors == 6

    def test_scheme_and_colors(self):
        snapshot = analyze_page(_page())
        assert snapshot.color_scheme is ColorScheme.LIGHT
        assert "#1A73E8" in snapshot.dominant_colors
        assert snapshot.accent_colors[0] == "#1A73E8"

    def test_branding_colors_lead(self):
        snapshot = analyze_page(_page(branding_colors=("#abcdef",)))
        assert snapshot.dominant_colors[0] == "#ABCDEF"
        assert snapshot.accent_colors[0] == "#ABCDEF"

    def test_disabled_analyzers(self):
        options = AnalysisOptions(variables=False, svgs=False, selectors=False, design_system=False)
        snapshot = analyze_page(_page(), options)
        assert snapshot.variables == ()
        assert snapshot.svgs == ()
        assert snapshot.selectors == ()
        assert snapshot.design_system.framework is Framework.UNKNOWN

    def test_empty_page(self):
        snapshot = analyze_page(PageSource(url="https://blank.example/"))
        assert snapshot.variables == ()
        assert snapshot.svgs == ()
        assert snapshot.selectors == ()
        assert snapshot.dominant_colors == ()
        assert snapshot.coverage.selectors == 0

    def test_garbage_never_raises(self):
        snapshot = analyze_page(_page(html="<div <svg <<", css="}{ :root { --x: ; } {{"))
        assert snapshot.svgs == ()


def test_summarize_is_json_serializable():
    summary = summarize(analyze_page(_page()))
    text = json.dumps(summary)
    assert summary["url"] == "https://example.com/"
    assert summary["coverage"]["variables"] == 3
    assert summary["variables"]["color_variables"] == 2
    assert summary["svgs"]["total"] == 1
    assert "button" in summary["selectors"]["by_category"]
    assert "design_system" in json.loads(text)
