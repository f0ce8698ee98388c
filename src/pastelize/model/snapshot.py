"""The aggregate analysis result consumed by the mapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum

from pastelize.model.design_system import DesignSystemProfile
from pastelize.model.facts import SelectorFact, SelectorGroup, SVGColorFact, SVGInfo, VariableFact


class ColorScheme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class AnalysisCoverage:
    """Raw counts of what the analyzers discovered."""

    variables: int = 0
    svgs: int = 0
    selectors: int = 0


@dataclass(frozen=True)
class AnalysisSnapshot:
    url: str
    variables: tuple[VariableFact, ...] = ()
    svgs: tuple[SVGInfo, ...] = ()
    selectors: tuple[SelectorGroup, ...] = ()
    design_system: DesignSystemProfile = field(default_factory=DesignSystemProfile)
    color_scheme: ColorScheme = ColorScheme.LIGHT
    dominant_colors: tuple[str, ...] = ()
    accent_colors: tuple[str, ...] = ()
    coverage: AnalysisCoverage = field(default_factory=AnalysisCoverage)
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def color_selectors(self) -> list[SelectorFact]:
        """All selectors carrying at least one color property, group order preserved."""
        return [s for group in self.selectors for s in group.selectors if s.has_color]

    def svg_color_facts(self) -> list[SVGColorFact]:
        return [fact for svg in self.svgs for fact in svg.colors]
