"""Mapping records: source colors assigned to palette tokens."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from enum import StrEnum

from pastelize.model.facts import CSS_PROPERTY_NAMES, SelectorCategory, SVGLocation
from pastelize.palette.accents import AccentRole
from pastelize.palette.tokens import Flavor, PaletteToken


class MappingSource(StrEnum):
    AI = "ai"
    FALLBACK = "fallback"


class Priority(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class HoverGradient:
    angle: int
    main: PaletteToken
    secondary: PaletteToken
    opacity: float


@dataclass(frozen=True)
class TokenProperties:
    """Palette tokens for the five color-bearing properties of a selector."""

    color: PaletteToken | None = None
    background_color: PaletteToken | None = None
    border_color: PaletteToken | None = None
    fill: PaletteToken | None = None
    stroke: PaletteToken | None = None

    def items(self) -> Iterator[tuple[str, PaletteToken]]:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value

    def css_items(self) -> Iterator[tuple[str, PaletteToken]]:
        for name, value in self.items():
            yield CSS_PROPERTY_NAMES[name], value

    def is_empty(self) -> bool:
        return next(self.items(), None) is None


@dataclass(frozen=True)
class VariableMapping:
    name: str
    original: str
    token: PaletteToken
    justification: str
    priority: Priority = Priority.LOW
    source: MappingSource = MappingSource.FALLBACK


@dataclass(frozen=True)
class SVGColorMapping:
    original: str
    token: PaletteToken
    justification: str
    source: MappingSource = MappingSource.FALLBACK


@dataclass(frozen=True)
class SelectorMapping:
    selector: str
    category: SelectorCategory
    properties: TokenProperties
    justification: str
    specificity: int = 0
    important: bool = False
    is_accent: bool = False
    accent_role: AccentRole | None = None
    hover_gradient: HoverGradient | None = None
    source: MappingSource = MappingSource.FALLBACK


@dataclass(frozen=True)
class ProcessedSVG:
    """An SVG whose color literals were replaced by ``@{token}`` placeholders."""

    selector: str
    location: SVGLocation
    original: str
    processed: str
    tokens: tuple[PaletteToken, ...]


@dataclass(frozen=True)
class KindStats:
    mapped: int = 0
    total: int = 0


@dataclass(frozen=True)
class AccentUsage:
    """How often the main accent and the two bi-accents were used."""

    main: int = 0
    secondary: int = 0
    tertiary: int = 0


@dataclass(frozen=True)
class MappingStats:
    variables: KindStats = field(default_factory=KindStats)
    svgs: KindStats = field(default_factory=KindStats)
    selectors: KindStats = field(default_factory=KindStats)
    accent_usage: AccentUsage = field(default_factory=AccentUsage)
    processed_svgs: int = 0
    truncated_selectors: int = 0


@dataclass(frozen=True)
class MappingResult:
    flavor: Flavor
    main_accent: PaletteToken
    variables: tuple[VariableMapping, ...] = ()
    svgs: tuple[SVGColorMapping, ...] = ()
    selectors: tuple[SelectorMapping, ...] = ()
    processed_svgs: tuple[ProcessedSVG, ...] = ()
    stats: MappingStats = field(default_factory=MappingStats)
