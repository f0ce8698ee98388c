"""CLI command: pastelize validate -- check a generated theme file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pastelize.validation import format_report, validate_output


@click.command()
@click.argument("theme_file", type=click.Path(exists=True, dir_okay=False))
def validate(theme_file: str) -> None:
    """Validate a generated LESS theme.

    Prints diagnostics and exits with code 0 if no errors are found, or
    code 1 if there are errors.
    """
    path = Path(theme_file)
    report = validate_output(path.read_text(encoding="utf-8"))

    click.echo(format_report(report, title=path.name))
    click.echo()
    click.echo(f"Summary: {len(report.errors)} error(s), {len(report.warnings)} warning(s)")
    sys.exit(1 if report.errors else 0)
