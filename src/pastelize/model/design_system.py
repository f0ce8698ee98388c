"""Design-system fingerprint of a page."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Framework(StrEnum):
    MATERIAL = "material"
    BOOTSTRAP = "bootstrap"
    TAILWIND = "tailwind"
    ANTD = "antd"
    CHAKRA = "chakra"
    CUSTOM = "custom"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ThemeToggle:
    """How a page switches between light and dark mode.

    ``kind`` is ``"class"`` (``name`` is the class) or ``"attribute"``
    (``name`` is the attribute and ``value`` the dark-mode value).
    """

    kind: str
    name: str
    value: str | None = None

    def __str__(self) -> str:
        if self.kind == "class":
            return f".{self.name}"
        if self.value:
            return f'[{self.name}="{self.value}"]'
        return f"[{self.name}]"


@dataclass(frozen=True)
class DesignSystemProfile:
    framework: Framework = Framework.UNKNOWN
    confidence: float = 0.0
    variable_prefixes: tuple[str, ...] = ()
    color_tokens: dict[str, str] = field(default_factory=dict)
    theme_toggle: ThemeToggle | None = None
    component_patterns: tuple[str, ...] = ()
