"""Tests for design-system fingerprinting."""

from pastelize.analysis.design_system import (
    DETECTORS,
    MIN_CONFIDENCE,
    design_system_stats,
    detect_bootstrap,
    detect_custom,
    detect_design_system,
    detect_tailwind,
)
from pastelize.analysis.variables import extract_variables
from pastelize.model.design_system import Framework, ThemeToggle


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _detect(html: str, css: str = ""):
    return detect_design_system(html, css, extract_variables(html, css))


BOOTSTRAP_CSS = """
:root {
  --bs-primary: #0d6efd; --bs-secondary: #6c757d; --bs-success: #198754;
  --bs-danger: #dc3545; --bs-body-bg: #ffffff; --bs-body-color: #212529;
}
.container { max-width: 960px; }
"""
BOOTSTRAP_HTML = (
    '<html data-bs-theme="light"><div class="container"><button class="btn btn-primary">Go</button>'
    '<span class="badge bg-secondary">1</span></div></html>'
)


# ---------------------------------------------------------------------------
# Framework detection
# ---------------------------------------------------------------------------


class TestBootstrap:
    def test_detected_with_high_confidence(self):
        profile = _detect(BOOTSTRAP_HTML, BOOTSTRAP_CSS)
        assert profile.framework is Framework.BOOTSTRAP
        assert profile.confidence == 1.0
        assert profile.variable_prefixes == ("--bs-",)
        assert profile.color_tokens["--bs-primary"] == "#0D6EFD"
        assert profile.theme_toggle == ThemeToggle("attribute", "data-bs-theme", "dark")
        assert "btn-" in profile.component_patterns

    def test_scores_are_capped(self):
        profile = detect_bootstrap(BOOTSTRAP_HTML, BOOTSTRAP_CSS, extract_variables("", BOOTSTRAP_CSS))
        assert 0.0 <= profile.confidence <= 1.0


class TestTailwind:
    def test_utility_classes(self):
        html = '<div class="flex p-4 bg-red-500 md:p-8 dark">x</div>'
        profile = _detect(html)
        assert profile.framework is Framework.TAILWIND
        assert profile.confidence == 0.9
        assert profile.theme_toggle == ThemeToggle("class", "dark")
        assert "bg-red-500" in profile.component_patterns

    def test_detector_on_empty_page(self):
        assert detect_tailwind("", "", []).confidence == 0.0


class TestOtherFrameworks:
    def test_material(self):
        html = '<button class="mdc-button mdc-button--raised">x</button>'
        css = ".mdc-typography { font-family: Roboto; }"
        profile = _detect(html, css)
        assert profile.framework is Framework.MATERIAL
        assert any(p.startswith("mdc-button") for p in profile.component_patterns)

    def test_antd(self):
        profile = _detect('<button class="ant-btn ant-btn-primary">x</button>', ".ant-btn { color: red; }")
        assert profile.framework is Framework.ANTD
        assert profile.confidence >= 0.6

    def test_chakra(self):
        profile = _detect('<div class="chakra-ui-dark chakra-stack">x</div>')
        assert profile.framework is Framework.CHAKRA
        assert profile.theme_toggle == ThemeToggle("class", "chakra-ui-dark")


class TestCustomFallback:
    def test_custom_prefixes(self):
        css = """
        :root { --brand-blue: #1a73e8; --brand-red: #d93025; --space-sm: 4px; }
        .dark-mode { --brand-blue: #8ab4f8; }
        """
        profile = _detect("<p>plain</p>", css)
        assert profile.framework is Framework.CUSTOM
        assert profile.confidence == 0.5
        assert profile.variable_prefixes == ("--brand-", "--space-")
        assert profile.theme_toggle == ThemeToggle("class", "dark-mode")
        assert set(profile.color_tokens) == {"--brand-blue", "--brand-red"}

    def test_nothing_at_all(self):
        profile = _detect("", "")
        assert profile.framework is Framework.UNKNOWN
        assert profile.confidence == 0.0
        assert profile.theme_toggle is None

    def test_detect_custom_directly(self):
        assert detect_custom("", "", []).framework is Framework.UNKNOWN


def test_weak_framework_signal_falls_back_to_custom():
    # A single bootstrap-style utility class scores 0.1.
    profile = _detect('<p class="border-top">x</p>')
    assert profile.framework is Framework.UNKNOWN
    assert profile.confidence < MIN_CONFIDENCE


def test_every_detector_returns_its_own_framework():
    frameworks = {detector("", "", []).framework for detector in DETECTORS}
    assert frameworks == {
        Framework.MATERIAL,
        Framework.BOOTSTRAP,
        Framework.TAILWIND,
        Framework.ANTD,
        Framework.CHAKRA,
    }


def test_stats():
    stats = design_system_stats(_detect(BOOTSTRAP_HTML, BOOTSTRAP_CSS))
    assert stats["framework"] == "bootstrap"
    assert stats["confidence"] == 100
    assert stats["theme_toggle"] == '[data-bs-theme="dark"]'
