"""Validation rules for generated theme documents.

The document is scanned once into an :class:`OutputDocument`: comments are
blanked out and string contents masked so that braces, semicolons and ``@``
signs inside quoted text never count as structure. Each rule then takes the
document and returns a list of Diagnostic objects.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

from pastelize.model.diagnostic import Diagnostic, Severity
from pastelize.model.theme import ThemeCoverage
from pastelize.palette.tokens import GENERATOR_VARIABLES, is_palette_token

# At-rule keywords that may legitimately follow an ``@``.
AT_RULE_KEYWORDS = frozenset({
    "import",
    "media",
    "supports",
    "keyframes",
    "-webkit-keyframes",
    "font-face",
    "-moz-document",
    "namespace",
    "charset",
    "layer",
    "container",
    "page",
    "document",
    "plugin",
})

_REFERENCE_RE = re.compile(r"@+(-?[A-Za-z][\w-]*)")
_PLACEHOLDER_RE = re.compile(r"@\{([^}]*)\}")
_DOUBLE_SEMICOLON_RE = re.compile(r";\s*;")


def _blank(text: str) -> str:
    return "".join("\n" if c == "\n" else " " for c in text)


def scan(text: str) -> tuple[str, str]:
    """Return ``(stripped, masked)`` copies of *text*.

    Both copies have comments replaced by whitespace. ``masked`` also blanks
    the contents of quoted strings, keeping the quote characters. Offsets and
    line numbers are identical in all three texts.
    """
    stripped: list[str] = []
    masked: list[str] = []
    i, n = 0, len(text)
    quote: str | None = None
    while i < n:
        ch = text[i]
        if quote is not None:
            if ch == "\\" and i + 1 < n:
                pair = text[i : i + 2]
                stripped.append(pair)
                masked.append(_blank(pair))
                i += 2
                continue
            stripped.append(ch)
            masked.append(ch if ch in (quote, "\n") else " ")
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in "\"'":
            quote = ch
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            filler = _blank(text[i:end])
            stripped.append(filler)
            masked.append(filler)
            i = end
            continue
        elif text.startswith("//", i) and (i == 0 or text[i - 1] in " \t\r\n;{}"):
            end = text.find("\n", i)
            end = n if end == -1 else end
            filler = _blank(text[i:end])
            stripped.append(filler)
            masked.append(filler)
            i = end
            continue
        stripped.append(ch)
        masked.append(ch)
        i += 1
    return "".join(stripped), "".join(masked)


@dataclass(frozen=True)
class Block:
    prelude: str
    parents: tuple[str, ...]
    line: int


@dataclass(frozen=True)
class Declaration:
    name: str
    value: str
    line: int


@dataclass(frozen=True)
class OutputDocument:
    """A scanned theme document ready for rule checks."""

    text: str
    stripped: str
    masked: str
    blocks: tuple[Block, ...] = ()
    declarations: tuple[Declaration, ...] = ()
    coverage: ThemeCoverage | None = None
    unbalanced: tuple[tuple[int, str], ...] = ()

    def line_of(self, offset: int) -> int:
        return self.masked.count("\n", 0, offset) + 1


def _statement_end(masked: str, start: int) -> int:
    """Offset where the statement beginning at *start* ends."""
    for i in range(start, len(masked)):
        if masked[i] in ";{}":
            return i
    return len(masked)


def parse_document(text: str, coverage: ThemeCoverage | None = None) -> OutputDocument:
    """Scan *text* into blocks and declarations, noting brace imbalances."""
    stripped, masked = scan(text)
    blocks: list[Block] = []
    declarations: list[Declaration] = []
    unbalanced: list[tuple[int, str]] = []
    stack: list[str] = []

    def line(offset: int) -> int:
        return masked.count("\n", 0, offset) + 1

    pos = 0
    while pos < len(masked):
        end = _statement_end(masked, pos)
        segment = masked[pos:end]
        terminator = masked[end] if end < len(masked) else ""
        stmt_offset = pos + len(segment) - len(segment.lstrip())
        statement = " ".join(segment.split())

        if terminator == "{":
            blocks.append(Block(statement, tuple(stack), line(stmt_offset)))
            stack.append(statement)
        elif statement and stack and ":" in statement and not statement.startswith("@import"):
            name, _, _ = segment.partition(":")
            name_offset = stmt_offset
            value_start = pos + len(name) + 1
            value = stripped[value_start:end].strip()
            declarations.append(Declaration(name.strip(), value, line(name_offset)))

        if terminator == "}":
            if stack:
                stack.pop()
            else:
                unbalanced.append((line(end), "unexpected closing brace"))
        pos = end + 1

    if stack:
        unbalanced.append((line(len(masked)), f"{len(stack)} unclosed brace(s)"))

    return OutputDocument(
        text=text,
        stripped=stripped,
        masked=masked,
        blocks=tuple(blocks),
        declarations=tuple(declarations),
        coverage=coverage,
        unbalanced=tuple(unbalanced),
    )


# ---------------------------------------------------------------------------
# Structural rules (ERROR severity)
# ---------------------------------------------------------------------------


def check_brace_balance(doc: OutputDocument) -> list[Diagnostic]:
    """Every opening brace must be closed, and never closed twice."""
    return [
        Diagnostic(
            rule="check_brace_balance",
            severity=Severity.ERROR,
            message=f"Unbalanced braces: {problem} on line {line}.",
            line=line,
            fix="Add or remove a brace so every block is closed exactly once.",
        )
        for line, problem in doc.unbalanced
    ]


def check_references(doc: OutputDocument) -> list[Diagnostic]:
    """``@name`` references must be palette tokens, theme variables or at-rules."""
    diagnostics: list[Diagnostic] = []
    seen: set[str] = set()
    refs = [(m.group(1), m.start()) for m in _REFERENCE_RE.finditer(doc.masked)]
    refs += [(m.group(1).strip(), m.start()) for m in _PLACEHOLDER_RE.finditer(doc.stripped)]
    for name, offset in refs:
        if name in seen:
            continue
        seen.add(name)
        if is_palette_token(name) or name in GENERATOR_VARIABLES or name.lower() in AT_RULE_KEYWORDS:
            continue
        diagnostics.append(
            Diagnostic(
                rule="check_references",
                severity=Severity.ERROR,
                message=f"Unknown reference '@{name}' on line {doc.line_of(offset)}.",
                subject=f"@{name}",
                fix="Reference one of the 26 palette tokens.",
                line=doc.line_of(offset),
            )
        )
    return diagnostics


def check_property_names(doc: OutputDocument) -> list[Diagnostic]:
    """Property names cannot contain whitespace."""
    return [
        Diagnostic(
            rule="check_property_names",
            severity=Severity.ERROR,
            message=f"Malformed property name '{d.name}' on line {d.line}.",
            subject=d.name,
            fix="Property names are single identifiers.",
            line=d.line,
        )
        for d in doc.declarations
        if not d.name or any(c.isspace() for c in d.name)
    ]


# ---------------------------------------------------------------------------
# Semantic rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_duplicate_blocks(doc: OutputDocument) -> list[Diagnostic]:
    """The same selector should not open two blocks in the same parent."""
    counts = Counter(
        (b.parents, b.prelude) for b in doc.blocks if b.prelude and not b.prelude.startswith("@")
    )
    return [
        Diagnostic(
            rule="check_duplicate_blocks",
            severity=Severity.WARNING,
            message=f"Selector block appears {count} times in the same scope.",
            subject=prelude,
            fix="Merge the blocks.",
        )
        for (_, prelude), count in counts.items()
        if count > 1
    ]


def check_empty_values(doc: OutputDocument) -> list[Diagnostic]:
    return [
        Diagnostic(
            rule="check_empty_values",
            severity=Severity.WARNING,
            message=f"Property '{d.name}' has an empty value on line {d.line}.",
            subject=d.name,
            line=d.line,
        )
        for d in doc.declarations
        if d.value.replace("!important", "").strip() == ""
    ]


def check_double_semicolons(doc: OutputDocument) -> list[Diagnostic]:
    return [
        Diagnostic(
            rule="check_double_semicolons",
            severity=Severity.WARNING,
            message=f"Double semicolon on line {doc.line_of(m.start())}.",
            line=doc.line_of(m.start()),
        )
        for m in _DOUBLE_SEMICOLON_RE.finditer(doc.masked)
    ]


def check_zero_coverage(doc: OutputDocument) -> list[Diagnostic]:
    """A theme that maps nothing at all is probably a degenerate run."""
    if doc.coverage is None or not doc.coverage.is_zero:
        return []
    return [
        Diagnostic(
            rule="check_zero_coverage",
            severity=Severity.WARNING,
            message="No variables, SVGs or selectors were mapped.",
            fix="Check that the page source contained its stylesheets.",
        )
    ]


OUTPUT_RULES = [
    check_brace_balance,
    check_references,
    check_property_names,
    check_duplicate_blocks,
    check_empty_values,
    check_double_semicolons,
    check_zero_coverage,
]
