"""Analysis aggregator: runs every analyzer over one page."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pastelize.analysis.css import strip_comments, style_blocks
from pastelize.analysis.design_system import design_system_stats, detect_design_system
from pastelize.analysis.scheme import accent_colors, detect_color_scheme, dominant_colors, merge_branding
from pastelize.analysis.selectors import discover_selectors, filter_color_selectors, selector_stats
from pastelize.analysis.svg import analyze_svgs, svg_stats
from pastelize.analysis.variables import extract_variables, filter_color_variables, variable_stats
from pastelize.model.design_system import DesignSystemProfile
from pastelize.model.page import PageSource
from pastelize.model.snapshot import AnalysisCoverage, AnalysisSnapshot

__all__ = ["AnalysisOptions", "analyze_page", "summarize"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOptions:
    """Which analyzers run for a page."""

    variables: bool = True
    svgs: bool = True
    selectors: bool = True
    design_system: bool = True


def analyze_page(page: PageSource, options: AnalysisOptions | None = None) -> AnalysisSnapshot:
    """Build an :class:`AnalysisSnapshot` from raw page text.

    Never raises on malformed input; unrecognized fragments simply produce
    fewer facts.
    """
    options = options or AnalysisOptions()
    html = page.html
    # Selectors and scheme markers also live in <style> elements.
    css = strip_comments("\n".join([page.css, *style_blocks(html)]))

    all_variables = extract_variables(html, page.css) if options.variables else []
    color_variables = filter_color_variables(all_variables)
    svgs = analyze_svgs(html, page.css) if options.svgs else []
    groups = discover_selectors(css, html) if options.selectors else []
    color_groups = filter_color_selectors(groups)
    design = (
        detect_design_system(html, css, all_variables)
        if options.design_system
        else DesignSystemProfile()
    )
    color_selectors = [s for g in color_groups for s in g.selectors]

    snapshot = AnalysisSnapshot(
        url=page.url,
        variables=tuple(color_variables),
        svgs=tuple(svgs),
        selectors=tuple(color_groups),
        design_system=design,
        color_scheme=detect_color_scheme(html, css, color_variables),
        dominant_colors=merge_branding(
            page.branding_colors, dominant_colors(color_variables, color_selectors)
        ),
        accent_colors=merge_branding(page.branding_colors, accent_colors(color_variables)),
        coverage=AnalysisCoverage(
            variables=len(all_variables),
            svgs=len(svgs),
            selectors=sum(len(g.selectors) for g in groups),
        ),
    )
    logger.info(
        "Analyzed %s: %d variables (%d color), %d svgs, %d selectors (%d color), %s scheme, design=%s",
        page.url,
        len(all_variables),
        len(color_variables),
        len(svgs),
        snapshot.coverage.selectors,
        len(color_selectors),
        snapshot.color_scheme.value,
        design.framework.value,
    )
    return snapshot


def summarize(snapshot: AnalysisSnapshot) -> dict[str, object]:
    """Plain-data summary of a snapshot, suitable for JSON output."""
    return {
        "url": snapshot.url,
        "color_scheme": snapshot.color_scheme.value,
        "coverage": {
            "variables": snapshot.coverage.variables,
            "svgs": snapshot.coverage.svgs,
            "selectors": snapshot.coverage.selectors,
        },
        "variables": variable_stats(list(snapshot.variables)),
        "svgs": svg_stats(list(snapshot.svgs)),
        "selectors": selector_stats(list(snapshot.selectors)),
        "design_system": design_system_stats(snapshot.design_system),
        "dominant_colors": list(snapshot.dominant_colors),
        "accent_colors": list(snapshot.accent_colors),
    }
