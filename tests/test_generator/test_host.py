"""Tests for host and selector sanitizing."""

import pytest

from pastelize.generator.host import (
    PLACEHOLDER_HOST,
    namespace_slug,
    sanitize_host,
    sanitize_selector,
    site_name,
)


class TestSanitizeHost:
    @pytest.mark.parametrize(
        "url, host",
        [
            ("https://www.Example.com/path?q=1", "www.example.com"),
            ("http://example.com:8080/", "example.com"),
            ("https://example.com./", "example.com"),
            ("  https://docs.example.org  ", "docs.example.org"),
            ("https://bücher.de/", "xn--bcher-kva.de"),
            ("https://BÜCHER.de/shop", "xn--bcher-kva.de"),
        ],
    )
    def test_http_urls(self, url, host):
        assert sanitize_host(url) == host

    @pytest.mark.parametrize(
        "url",
        [
            "file:///tmp/page.html",
            "/tmp/page.html",
            "example.com",
            "",
            "http://exa_mple.com/",
            "http://-bad.example/",
            "http://[::1",
            "http://a..b.example/",
        ],
    )
    def test_unusable_urls_get_the_placeholder(self, url):
        assert sanitize_host(url) == PLACEHOLDER_HOST


@pytest.mark.parametrize(
    "host, name",
    [
        ("www.example.co", "Example"),
        ("docs.my-site.org", "Docs My Site"),
        ("localhost", "Localhost"),
        (PLACEHOLDER_HOST, "Unknown Host"),
        ("", "Unknown"),
    ],
)
def test_site_name(host, name):
    assert site_name(host) == name


def test_namespace_slug():
    assert namespace_slug("www.example.com") == "www-example-com"


class TestSanitizeSelector:
    def test_whitespace_is_collapsed(self):
        assert sanitize_selector("  .nav\n  >  a ") == ".nav > a"

    @pytest.mark.parametrize("selector", ["html", ":root"])
    def test_document_root_becomes_ampersand(self, selector):
        assert sanitize_selector(selector) == "&"

    @pytest.mark.parametrize(
        "selector",
        ["div:not(.valid", "a[href", "a)(", ".a;b", "@media x", "", "  ", "{}", "a}", "{.nav a", ".a } .b"],
    )
    def test_unsafe_selectors_are_dropped(self, selector):
        assert sanitize_selector(selector) is None

    def test_balanced_functional_pseudo_classes_survive(self):
        assert sanitize_selector('a:is(.x, [data-y="1"])') == 'a:is(.x, [data-y="1"])'
