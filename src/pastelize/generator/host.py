"""Host and selector sanitizing for theme emission."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

PLACEHOLDER_HOST = "unknown-host"

_LABEL_RE = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
_PAIRS = {")": "(", "]": "["}


def sanitize_host(url: str) -> str:
    """Return the bare hostname of an http(s) *url*, or :data:`PLACEHOLDER_HOST`.

    Non-ASCII labels are IDNA-encoded. ``file://`` URLs, local paths and
    scheme-less strings all degrade to the placeholder so the
    ``domain("...")`` scope always parses.
    """
    try:
        parts = urlsplit(url.strip())
        host = (parts.hostname or "").rstrip(".").lower()
    except ValueError:
        return PLACEHOLDER_HOST
    if parts.scheme not in ("http", "https") or not host:
        return PLACEHOLDER_HOST
    try:
        host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return PLACEHOLDER_HOST
    if not all(_LABEL_RE.match(label) for label in host.split(".")):
        return PLACEHOLDER_HOST
    return host


def site_name(host: str) -> str:
    """Human-readable site name: ``www.example.co`` becomes ``Example``."""
    labels = [label for label in host.split(".") if label]
    if labels and labels[0] == "www":
        labels = labels[1:]
    if len(labels) > 1:
        labels = labels[:-1]
    words = [word for label in labels for word in label.split("-") if word]
    return " ".join(word.capitalize() for word in words) or "Unknown"


def namespace_slug(host: str) -> str:
    return host.replace(".", "-")


def _balanced(selector: str) -> bool:
    stack: list[str] = []
    for ch in selector:
        if ch in "([":
            stack.append(ch)
        elif ch in _PAIRS:
            if not stack or stack.pop() != _PAIRS[ch]:
                return False
    return not stack


def sanitize_selector(selector: str) -> str | None:
    """Clean *selector* for emission, or return None if it must be dropped.

    Whitespace is collapsed. Selectors containing braces, or with unbalanced
    parentheses or brackets, are dropped. ``html`` and ``:root`` become ``&``,
    the element the theme is applied to.
    """
    cleaned = " ".join(selector.split())
    if not cleaned or any(ch in cleaned for ch in "{};@"):
        logger.debug("Dropping selector %r", selector)
        return None
    if not _balanced(cleaned):
        logger.debug("Dropping unbalanced selector %r", selector)
        return None
    if cleaned in ("html", ":root"):
        return "&"
    return cleaned
