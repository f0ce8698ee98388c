"""CLI command: pastelize generate -- build a userstyle for a page."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pastelize.config import PastelizeConfig
from pastelize.errors import FetchError
from pastelize.generator import GENERATORS
from pastelize.mapping.llm import OpenAICompatibleClassifier
from pastelize.mapping.options import MapperOptions
from pastelize.cli.source import load_source
from pastelize.palette.tokens import ACCENTS, Flavor
from pastelize.pipeline import PipelineError, PipelineRequest, run_pipeline


@click.command()
@click.argument("source")
@click.option("--css", "css_files", multiple=True, type=click.Path(exists=True, dir_okay=False),
              help="Extra stylesheet to analyze (repeatable)")
@click.option("--url", default=None, help="Page URL to scope the theme to (for local files)")
@click.option("--flavor", type=click.Choice([f.value for f in Flavor]), default=None,
              help="Flavor used for mapping and as the dark default")
@click.option("--light-flavor", type=click.Choice([f.value for f in Flavor]), default=None)
@click.option("--accent", type=click.Choice([a.value for a in ACCENTS]), default=None,
              help="Main accent color")
@click.option("--variant", type=click.Choice(list(GENERATORS)), default=None,
              help="Generator variant")
@click.option("--no-comments", is_flag=True, help="Omit explanatory comments")
@click.option("--no-ai", is_flag=True, help="Use heuristics only, even with an API key set")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write the theme here instead of stdout")
@click.option("--strict", is_flag=True, help="Fail without output on validation errors")
@click.pass_obj
def generate(
    config: PastelizeConfig,
    source: str,
    css_files: tuple[str, ...],
    url: str | None,
    flavor: str | None,
    light_flavor: str | None,
    accent: str | None,
    variant: str | None,
    no_comments: bool,
    no_ai: bool,
    output: str | None,
    strict: bool,
) -> None:
    """Generate a Catppuccin userstyle for SOURCE (an http(s) URL or HTML file).

    Validation errors are reported and, with --strict, exit with code 1
    before anything is written.
    """
    config = config.with_overrides(
        flavor=flavor, light_flavor=light_flavor, accent=accent, variant=variant
    )

    try:
        page = load_source(source, css_files, url)
    except FetchError as exc:
        click.echo(f"Fetch error: {exc}", err=True)
        sys.exit(1)

    options = MapperOptions(max_selectors=config.max_selectors) if no_ai else config.mapper_options()
    request = PipelineRequest.from_page(
        page,
        flavor=config.flavor,
        light_flavor=config.light_flavor,
        main_accent=config.accent,
        mapper_options=options,
        generator_variant=config.variant,
        include_comments=config.include_comments and not no_comments,
    )

    classifier = None if no_ai else config.classifier()
    try:
        result = run_pipeline(request, classifier=classifier, strict=strict)
    except PipelineError as exc:
        for diag in exc.diagnostics:
            click.echo(str(diag), err=True)
        click.echo("Validation failed; no theme written.", err=True)
        sys.exit(1)
    finally:
        if isinstance(classifier, OpenAICompatibleClassifier):
            classifier.close()

    if output:
        Path(output).write_text(result.theme.text, encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(result.theme.text, nl=False)

    for diag in result.errors + result.warnings:
        click.echo(str(diag), err=True)
    coverage = result.theme.coverage
    click.echo(
        f"Coverage: variables {coverage.variables}%, svgs {coverage.svgs}%, "
        f"selectors {coverage.selectors}% "
        f"({len(result.errors)} error(s), {len(result.warnings)} warning(s))",
        err=True,
    )
