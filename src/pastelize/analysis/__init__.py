"""Page analysis: variables, SVGs, design system and selectors."""

from pastelize.analysis.aggregate import AnalysisOptions, analyze_page, summarize
from pastelize.analysis.design_system import detect_design_system
from pastelize.analysis.selectors import categorize, discover_selectors, filter_color_selectors
from pastelize.analysis.svg import analyze_svgs
from pastelize.analysis.variables import extract_variables

__all__ = [
    "AnalysisOptions",
    "analyze_page",
    "analyze_svgs",
    "categorize",
    "detect_design_system",
    "discover_selectors",
    "extract_variables",
    "filter_color_selectors",
    "summarize",
]
