"""Data model for analysis snapshots, mappings and generated themes."""

from pastelize.model.design_system import DesignSystemProfile, Framework, ThemeToggle
from pastelize.model.diagnostic import Diagnostic, Severity
from pastelize.model.facts import (
    ColorProperties,
    SelectorCategory,
    SelectorFact,
    SelectorGroup,
    SVGColorFact,
    SVGColorType,
    SVGInfo,
    SVGLocation,
    SVGPurpose,
    VariableFact,
    VariableScope,
)
from pastelize.model.mapping import (
    AccentUsage,
    HoverGradient,
    KindStats,
    MappingResult,
    MappingSource,
    MappingStats,
    Priority,
    ProcessedSVG,
    SelectorMapping,
    SVGColorMapping,
    TokenProperties,
    VariableMapping,
)
from pastelize.model.page import PageSource
from pastelize.model.snapshot import AnalysisCoverage, AnalysisSnapshot, ColorScheme
from pastelize.model.theme import GeneratedTheme, ThemeCoverage, ThemeMetadata, ThemeSections

__all__ = [
    "AccentUsage",
    "AnalysisCoverage",
    "AnalysisSnapshot",
    "ColorProperties",
    "ColorScheme",
    "DesignSystemProfile",
    "Diagnostic",
    "Framework",
    "GeneratedTheme",
    "HoverGradient",
    "KindStats",
    "MappingResult",
    "MappingSource",
    "MappingStats",
    "PageSource",
    "Priority",
    "ProcessedSVG",
    "SVGColorFact",
    "SVGColorMapping",
    "SVGColorType",
    "SVGInfo",
    "SVGLocation",
    "SVGPurpose",
    "SelectorCategory",
    "SelectorFact",
    "SelectorGroup",
    "SelectorMapping",
    "Severity",
    "ThemeCoverage",
    "ThemeMetadata",
    "ThemeSections",
    "ThemeToggle",
    "TokenProperties",
    "VariableFact",
    "VariableMapping",
    "VariableScope",
]
