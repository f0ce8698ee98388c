"""Tests for custom-property extraction."""

import pytest

from pastelize.analysis.variables import (
    detect_mode_variables,
    extract_variables,
    filter_color_variables,
    group_variables,
    resolve_value,
    variable_scope,
    variable_stats,
)
from pastelize.model.facts import VariableScope


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _by_name(facts):
    return {f.name: f for f in facts}


# ---------------------------------------------------------------------------
# extract_variables
# ---------------------------------------------------------------------------


class TestExtractVariables:
    def test_declared_and_used_once(self):
        css = ":root { --brand-accent: #1a73e8; } .cta { color: var(--brand-accent); }"
        facts = extract_variables("", css)
        assert len(facts) == 1
        fact = facts[0]
        assert fact.name == "--brand-accent"
        assert fact.value == "#1a73e8"
        assert fact.computed_value == "#1A73E8"
        assert fact.scope is VariableScope.ROOT
        assert fact.selector == ":root"
        assert fact.usage == (".cta",)
        assert fact.frequency == 1

    def test_every_reference_counts(self):
        css = """
        :root { --text: #333; }
        .a { color: var(--text); }
        .b { color: var(--text); border-color: var(--text); }
        """
        fact = _by_name(extract_variables("", css))["--text"]
        assert fact.frequency == 3
        assert fact.usage == (".a", ".b")

    def test_nested_fallback_references_count(self):
        css = """
        :root { --a: #111111; --b: #222222; }
        .card { color: var(--a, var(--b)); }
        .note { color: var(--b); }
        """
        facts = _by_name(extract_variables("", css))
        assert facts["--a"].usage == (".card",)
        assert facts["--b"].usage == (".card", ".note")
        assert facts["--b"].frequency == 2

    def test_unused_declarations_are_kept(self):
        facts = extract_variables("", ":root { --unused: red; }")
        assert facts[0].frequency == 0
        assert facts[0].usage == ()

    def test_references_to_undeclared_variables_are_ignored(self):
        assert extract_variables("", ".a { color: var(--ghost); }") == []

    def test_sorted_by_frequency(self):
        css = """
        :root { --rare: red; --common: blue; }
        .a { color: var(--common); background: var(--common); fill: var(--rare); }
        """
        assert [f.name for f in extract_variables("", css)] == ["--common", "--rare"]

    def test_style_elements_and_inline_styles(self):
        html = """
        <style>.dark { --bg: #111111; }</style>
        <div style="--chip: rgb(255, 0, 0)"></div>
        """
        facts = _by_name(extract_variables(html))
        assert facts["--bg"].scope is VariableScope.CLASS
        assert facts["--bg"].selector == ".dark"
        assert facts["--chip"].scope is VariableScope.ELEMENT
        assert facts["--chip"].computed_value == "#FF0000"
        assert facts["--chip"].frequency == 1

    def test_duplicate_declarations_merge_by_name(self):
        css = ":root { --x: red; } .theme { --x: blue; } .a { color: var(--x); }"
        facts = extract_variables("", css)
        assert len(facts) == 1
        assert facts[0].computed_value == "#FF0000"
        assert facts[0].frequency == 1

    def test_comments_are_ignored(self):
        css = "/* :root { --hidden: red; } */ :root { --shown: blue; }"
        assert [f.name for f in extract_variables("", css)] == ["--shown"]

    def test_malformed_css_yields_no_facts(self):
        assert extract_variables("<html", "{{{ --x: ; }") == []


# ---------------------------------------------------------------------------
# Helpers on facts
# ---------------------------------------------------------------------------


class TestResolveValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#abc", "#AABBCC"),
            ("rgb(0, 0, 0)", "#000000"),
            ("var(--other)", ""),
            ("var(--other) 4px", "4px"),
            ("var(--a, var(--b)) 4px", "4px"),
            ("var(--a, rgb(1, 2, 3))", ""),
            ("var(--a, var(--b, hsl(0, 0%, 0%))) solid", "solid"),
            ("1px solid", "1px solid"),
        ],
    )
    def test_resolve(self, value, expected):
        assert resolve_value(value) == expected


class TestScopes:
    @pytest.mark.parametrize(
        "selector, scope",
        [
            (":root", VariableScope.ROOT),
            ("html", VariableScope.ROOT),
            (".theme-dark", VariableScope.CLASS),
            ('[class~="x"]', VariableScope.CLASS),
            ("body", VariableScope.ELEMENT),
            ("[data-theme=dark]", VariableScope.ELEMENT),
        ],
    )
    def test_scope(self, selector, scope):
        assert variable_scope(selector) is scope


class TestGrouping:
    def _facts(self):
        css = """
        :root { --bs-primary: #0d6efd; --bs-body-bg: #fff; --gap: 4px; }
        [data-theme=dark] { --surface: #000; }
        .light { --panel: #eee; }
        """
        return extract_variables("", css)

    def test_filter_color_variables(self):
        names = {f.name for f in filter_color_variables(self._facts())}
        assert names == {"--bs-primary", "--bs-body-bg", "--surface", "--panel"}

    def test_group_by_prefix(self):
        groups = group_variables(self._facts())
        assert {f.name for f in groups["--bs-"]} == {"--bs-primary", "--bs-body-bg"}
        assert {f.name for f in groups["--other-"]} == {"--gap", "--surface", "--panel"}

    def test_mode_split(self):
        modes = detect_mode_variables(self._facts())
        assert [f.name for f in modes["dark"]] == ["--surface"]
        assert [f.name for f in modes["light"]] == ["--panel"]
        assert len(modes["neutral"]) == 3

    def test_stats(self):
        stats = variable_stats(self._facts())
        assert stats["total"] == 5
        assert stats["color_variables"] == 4
        assert stats["scopes"]["root"] == 3
        assert stats["dark_mode"] == 1
