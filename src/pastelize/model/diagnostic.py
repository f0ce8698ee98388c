"""Findings reported by the mapping and output validators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """One validation finding.

    ``subject`` names the variable, color, selector or reference at fault;
    ``line`` is the 1-based line of a rendered theme, when known. Errors block
    delivery of a theme, warnings never do.
    """

    rule: str
    severity: Severity
    message: str
    subject: str | None = None
    fix: str | None = None
    line: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def location(self) -> str | None:
        if self.subject:
            return self.subject
        return f"line {self.line}" if self.line is not None else None

    def __str__(self) -> str:
        where = f" [{self.location}]" if self.location else ""
        return f"{self.severity.name}{where}: {self.message}"
