"""Pastelize CLI entry point: Click group with subcommands."""

import logging
import sys

import click

from pastelize import __version__
from pastelize.config import PastelizeConfig
from pastelize.errors import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="pastelize")
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug output)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Pastelize - generate Catppuccin userstyles from a page's own colors."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    try:
        ctx.obj = PastelizeConfig.from_env()
    except ConfigurationError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)


# Import and register subcommands
from pastelize.cli.analyze import analyze  # noqa: E402
from pastelize.cli.generate import generate  # noqa: E402
from pastelize.cli.validate import validate  # noqa: E402

cli.add_command(generate)
cli.add_command(analyze)
cli.add_command(validate)
