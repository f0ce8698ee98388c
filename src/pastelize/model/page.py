"""Raw page text handed to the analyzers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageSource:
    """HTML and CSS for one page, plus optional branding color hints.

    ``stylesheets`` records which external stylesheet URLs were actually
    retrieved for this page.
    """

    url: str
    html: str = ""
    css: str = ""
    branding_colors: tuple[str, ...] = ()
    stylesheets: tuple[str, ...] = ()
