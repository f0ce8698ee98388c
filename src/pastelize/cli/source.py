"""Resolve a CLI SOURCE argument into page text."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from pastelize.fetch import fetch_page, load_local_page
from pastelize.model.page import PageSource


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_source(source: str, css_files: tuple[str, ...] = (), url: str | None = None) -> PageSource:
    """Fetch an http(s) URL or read a local HTML file, adding any extra CSS files.

    Raises :class:`~pastelize.errors.FetchError` if the page cannot be read.
    """
    if not is_remote(source):
        return load_local_page(source, css_files, url=url)
    page = fetch_page(source)
    if css_files:
        extra = [Path(p).read_text(encoding="utf-8", errors="replace") for p in css_files]
        page = replace(page, css="\n".join([page.css, *extra]))
    if url:
        page = replace(page, url=url)
    return page
