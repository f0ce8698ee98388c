"""CLI command: pastelize analyze -- report the colors found on a page."""

from __future__ import annotations

import json
import sys

import click

from pastelize.analysis.aggregate import analyze_page, summarize
from pastelize.errors import FetchError
from pastelize.cli.source import load_source


@click.command()
@click.argument("source")
@click.option("--css", "css_files", multiple=True, type=click.Path(exists=True, dir_okay=False),
              help="Extra stylesheet to analyze (repeatable)")
@click.option("--url", default=None, help="Page URL to report (for local files)")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
def analyze(source: str, css_files: tuple[str, ...], url: str | None, as_json: bool) -> None:
    """Analyze SOURCE and print what the mapper would work with."""
    try:
        page = load_source(source, css_files, url)
    except FetchError as exc:
        click.echo(f"Fetch error: {exc}", err=True)
        sys.exit(1)

    snapshot = analyze_page(page)
    summary = summarize(snapshot)
    if as_json:
        click.echo(json.dumps(summary, indent=2, default=str))
        return

    design = snapshot.design_system
    click.echo(f"Page: {snapshot.url}")
    click.echo(f"Color scheme: {snapshot.color_scheme.value}")
    click.echo(f"Design system: {design.framework.value} ({round(design.confidence * 100)}%)")
    click.echo(
        f"Found: {snapshot.coverage.variables} variables, {snapshot.coverage.svgs} svgs, "
        f"{snapshot.coverage.selectors} selectors"
    )
    click.echo(
        f"Color facts: {len(snapshot.variables)} variables, "
        f"{len(snapshot.svg_color_facts())} svg colors, {len(snapshot.color_selectors())} selectors"
    )
    if snapshot.dominant_colors:
        click.echo("Dominant colors: " + ", ".join(snapshot.dominant_colors))
    if snapshot.accent_colors:
        click.echo("Accent colors: " + ", ".join(snapshot.accent_colors))
