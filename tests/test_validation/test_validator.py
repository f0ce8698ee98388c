"""Tests for the validator entry points and report formatting."""

import pytest

from pastelize.model.diagnostic import Diagnostic, Severity
from pastelize.model.mapping import MappingResult, VariableMapping
from pastelize.palette.tokens import Flavor, PaletteToken
from pastelize.validation.validator import (
    ValidationError,
    ValidationReport,
    format_report,
    validate_mappings,
    validate_or_raise,
    validate_output,
    validate_syntax,
)

P = PaletteToken


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mappings(token=P.BASE) -> MappingResult:
    return MappingResult(
        flavor=Flavor.MOCHA,
        main_accent=P.MAUVE,
        variables=(VariableMapping("--bg", "#FFFFFF", token, "page"),),
    )


THEME = """\
@-moz-document domain("example.com") {
  .a { color: @text; }
}
"""


# ---------------------------------------------------------------------------
# validate_mappings
# ---------------------------------------------------------------------------


class TestValidateMappings:
    def test_valid(self):
        report = validate_mappings(_mappings())
        assert report.is_valid
        assert report.issues == ()
        assert report.stats == {"variables": 1, "svgs": 0, "selectors": 0, "processed_svgs": 0}

    def test_invalid_token(self):
        report = validate_mappings(_mappings("navy"))
        assert not report.is_valid
        assert len(report.errors) == 1
        assert report.warnings == []

    def test_extra_rules(self):
        def note_everything(result):
            return [Diagnostic("note_everything", Severity.INFO, "looked")]

        report = validate_mappings(_mappings(), extra_rules=[note_everything])
        assert report.is_valid
        assert [d.rule for d in report.issues] == ["note_everything"]


# ---------------------------------------------------------------------------
# validate_output and validate_syntax
# ---------------------------------------------------------------------------


class TestValidateOutput:
    def test_valid_theme(self):
        report = validate_output(THEME)
        assert report.is_valid
        assert report.stats == {"lines": 4, "blocks": 2, "declarations": 1}

    def test_is_idempotent(self):
        broken = THEME + ".b { color: @nope; "
        assert validate_output(broken) == validate_output(broken)

    def test_errors_make_the_report_invalid(self):
        report = validate_output(THEME.replace("@text", "@nope"))
        assert not report.is_valid
        assert [d.rule for d in report.errors] == ["check_references"]

    def test_text_input_never_reports_zero_coverage(self):
        report = validate_output("")
        assert report.is_valid
        assert report.issues == ()


def test_validate_syntax_checks_braces_only():
    assert validate_syntax(".a { color: @nope; }").is_valid
    report = validate_syntax(".a { color: red;")
    assert not report.is_valid
    assert report.errors[0].rule == "check_brace_balance"


# ---------------------------------------------------------------------------
# validate_or_raise and format_report
# ---------------------------------------------------------------------------


class TestValidateOrRaise:
    def test_raises_on_errors(self):
        with pytest.raises(ValidationError, match=r"1 error\(s\)") as excinfo:
            validate_or_raise(validate_mappings(_mappings("navy")))
        assert len(excinfo.value.diagnostics) == 1

    def test_returns_warnings(self):
        warning = Diagnostic("w", Severity.WARNING, "careful")
        report = ValidationReport(is_valid=True, issues=(warning,))
        assert validate_or_raise(report) == [warning]


class TestFormatReport:
    def test_valid(self):
        text = format_report(validate_output(THEME), title="Theme")
        assert text.splitlines()[0] == "Theme: valid"
        assert "blocks=2" in text

    def test_invalid_lists_issues_and_fixes(self):
        text = format_report(validate_output(THEME.replace("@text", "@nope")))
        lines = text.splitlines()
        assert lines[0] == "Validation: INVALID"
        assert any(line.startswith("  ERROR [@nope]: Unknown reference '@nope'") for line in lines)
        assert any(line.startswith("    fix: ") for line in lines)
