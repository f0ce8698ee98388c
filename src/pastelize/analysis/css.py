"""Regex-based scanning of CSS rule blocks and HTML style sources.

Only flat ``prelude { declarations }`` blocks are recognized. A block nested
inside an at-rule is found on its own, because the body pattern refuses
braces.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

__all__ = [
    "RuleBlock",
    "iter_rule_blocks",
    "parse_declarations",
    "split_selector_list",
    "strip_comments",
    "style_blocks",
    "inline_styles",
]

# Matches a complete rule: prelude { declarations }
_RULE_RE = re.compile(
    r"""
    (?P<prelude>[^{}]+)     # everything before the opening brace
    \{                       # opening brace
    (?P<body>[^{}]*)         # declarations, no nested blocks
    \}                       # closing brace
    """,
    re.VERBOSE,
)

# Matches a single declaration: name: value; (the final semicolon is optional)
_DECL_RE = re.compile(
    r"""
    (?:^|(?<=[;\s{]))
    (?P<key>-{0,2}[a-zA-Z_][\w-]*)     # property name, custom properties included
    \s*:\s*                              # colon separator
    (?P<value>[^;]+?)                    # value (non-greedy up to semicolon)
    \s*(?:;|$)                           # terminating semicolon or end of body
    """,
    re.VERBOSE,
)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_STYLE_TAG_RE = re.compile(r"<style\b[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
_STYLE_ATTR_RE = re.compile(r"""\sstyle\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class RuleBlock:
    """One ``prelude { body }`` block and where it starts in the source."""

    prelude: str
    body: str
    start: int
    end: int


def strip_comments(css: str) -> str:
    return _COMMENT_RE.sub("", css)


def iter_rule_blocks(css: str) -> Iterator[RuleBlock]:
    """Yield every innermost rule block in *css*, in source order."""
    for match in _RULE_RE.finditer(css):
        # Drop statements such as ``@import ...;`` that precede the selector.
        prelude = match.group("prelude").rsplit(";", 1)[-1].strip()
        if not prelude:
            continue
        yield RuleBlock(
            prelude=prelude,
            body=match.group("body"),
            start=match.start("prelude"),
            end=match.end(),
        )


def parse_declarations(body: str) -> list[tuple[str, str]]:
    """Parse a declaration body into ``(name, value)`` pairs in source order."""
    return [
        (m.group("key").strip(), m.group("value").strip())
        for m in _DECL_RE.finditer(body.strip())
    ]


def split_selector_list(prelude: str) -> list[str]:
    """Split a selector list on top-level commas.

    Commas inside ``:is(...)`` or attribute brackets do not split.
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in prelude:
        if ch in "([":
            depth += 1
        elif ch in ")]" and depth > 0:
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return [" ".join(p.split()) for p in parts if p.strip()]


def style_blocks(html: str) -> list[str]:
    """Return the contents of every ``<style>`` element in *html*."""
    return [m.group(1) for m in _STYLE_TAG_RE.finditer(html)]


def inline_styles(html: str) -> list[str]:
    """Return the contents of every ``style="..."`` attribute in *html*."""
    return [m.group(2) for m in _STYLE_ATTR_RE.finditer(html)]
