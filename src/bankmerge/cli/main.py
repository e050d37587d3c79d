#!/usr/bin/env python3
"""
Main CLI Entry Point for bankmerge

Provides a unified command-line interface for statement conversion and
enrichment-data administration.
"""

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    bankmerge - Bank Statement Normalizer

    Converts statement exports from several banks into one CSV or OFX file,
    renaming payees and categories against your own payee/category lists.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        import os

        os.environ["BANKMERGE_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("bankmerge").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from bankmerge import __author__, __version__

    click.echo(f"bankmerge v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Payees File: {config_obj.store.payees_file}")
    click.echo(f"  Categories File: {config_obj.store.categories_file}")
    click.echo(f"  Default Format: {config_obj.convert.default_format}")
    click.echo(f"  Output Name: {config_obj.convert.output_name}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


# Import subcommands
from .category import category  # noqa: E402
from .convert import convert  # noqa: E402
from .payee import payee  # noqa: E402
from .synonym import synonym  # noqa: E402

main.add_command(convert)
main.add_command(payee)
main.add_command(category)
main.add_command(synonym)


if __name__ == "__main__":
    main()
