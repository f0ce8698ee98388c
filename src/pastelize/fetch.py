"""Page fetching: HTML plus its linked stylesheets."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import urljoin, urlsplit

from pastelize._http import HttpClient, HttpTimeout
from pastelize._retry import RetryPolicy, with_retry
from pastelize.errors import FetchError, TransportError
from pastelize.model.page import PageSource
from pastelize.palette.color import normalize_color

logger = logging.getLogger(__name__)

DEFAULT_MAX_STYLESHEETS = 10

_TAG_RE = re.compile(r"<(link|meta)\b([^>]*)>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""")


def _attributes(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(raw):
        value = next((g for g in m.groups()[1:] if g is not None), "")
        attrs.setdefault(m.group(1).lower(), value.strip())
    return attrs


def stylesheet_links(html: str, base_url: str) -> list[str]:
    """Absolute URLs of ``<link rel="stylesheet">`` elements, in document order."""
    urls: list[str] = []
    for m in _TAG_RE.finditer(html):
        if m.group(1).lower() != "link":
            continue
        attrs = _attributes(m.group(2))
        if "stylesheet" not in attrs.get("rel", "").lower().split() or not attrs.get("href"):
            continue
        url = urljoin(base_url, attrs["href"])
        if urlsplit(url).scheme in ("http", "https") and url not in urls:
            urls.append(url)
    return urls


def theme_colors(html: str) -> tuple[str, ...]:
    """Normalized ``<meta name="theme-color">`` values."""
    colors: list[str] = []
    for m in _TAG_RE.finditer(html):
        if m.group(1).lower() != "meta":
            continue
        attrs = _attributes(m.group(2))
        if attrs.get("name", "").lower() != "theme-color":
            continue
        color = normalize_color(attrs.get("content"))
        if color and color not in colors:
            colors.append(color)
    return tuple(colors)


def fetch_page(
    url: str,
    *,
    client: HttpClient | None = None,
    max_stylesheets: int = DEFAULT_MAX_STYLESHEETS,
    retry_policy: RetryPolicy | None = None,
) -> PageSource:
    """Download *url* and up to *max_stylesheets* of its linked stylesheets.

    ``<style>`` elements stay in the HTML, where the analyzers read them.
    A stylesheet that cannot be fetched is logged and skipped; failing to
    fetch the page itself raises :class:`FetchError`.
    """
    policy = retry_policy or RetryPolicy()
    owned = client is None
    http = client or HttpClient(timeout=HttpTimeout())
    try:
        try:
            page = with_retry(lambda: http.get(url), policy)
        except TransportError as exc:
            raise FetchError(f"Could not fetch {url}: {exc}", cause=exc) from exc
        logger.info("Fetched %s (%d bytes)", page.url, len(page.text))

        links = stylesheet_links(page.text, page.url)
        if len(links) > max_stylesheets:
            logger.info("Fetching %d of %d linked stylesheets", max_stylesheets, len(links))
            links = links[:max_stylesheets]

        sheets: list[str] = []
        fetched: list[str] = []
        for link in links:
            try:
                sheet = with_retry(lambda: http.get(link), policy)
            except TransportError as exc:
                logger.warning("Skipping stylesheet %s: %s", link, exc)
                continue
            sheets.append(sheet.text)
            fetched.append(link)
        logger.debug("Fetched %d/%d stylesheets for %s", len(fetched), len(links), url)
    finally:
        if owned:
            http.close()

    return PageSource(
        url=url,
        html=page.text,
        css="\n".join(sheets),
        branding_colors=theme_colors(page.text),
        stylesheets=tuple(fetched),
    )


def load_local_page(
    html_path: str | Path,
    css_paths: Iterable[str | Path] = (),
    *,
    url: str | None = None,
) -> PageSource:
    """Build a :class:`PageSource` from files on disk.

    Without *url* the page is identified by its ``file://`` URI, which the
    generator scopes to a placeholder host.
    """
    html_file = Path(html_path)
    try:
        html = html_file.read_text(encoding="utf-8", errors="replace")
        css = [Path(p).read_text(encoding="utf-8", errors="replace") for p in css_paths]
    except OSError as exc:
        raise FetchError(f"Could not read page source: {exc}", cause=exc) from exc
    return PageSource(
        url=url or html_file.resolve().as_uri(),
        html=html,
        css="\n".join(css),
        branding_colors=theme_colors(html),
    )
