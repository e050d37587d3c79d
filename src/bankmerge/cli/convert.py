#!/usr/bin/env python3
"""
Convert CLI - Bank Statement Conversion

Converts one or more bank exports into a single CSV or OFX file.
"""

import logging
import signal
from contextlib import contextmanager
from pathlib import Path

import click

from ..core.cancellation import CancellationToken
from ..core.config import SUPPORTED_OUTPUT_FORMATS, get_config
from ..core.errors import BankMergeError, OperationCancelled
from ..core.models import BankStatementFile, ConversionSummary
from ..enrichment import EnrichmentStore
from ..exporters import get_exporter
from ..processing import TransactionProcessingService

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


def parse_file_argument(value: str, base_dir: Path) -> BankStatementFile:
    """
    Parse and validate one ``--file`` argument.

    Relative paths must resolve inside ``base_dir``; absolute paths are used
    as given.

    Raises:
        click.BadParameter: If the argument is malformed or escapes base_dir
    """
    try:
        statement_file = BankStatementFile.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--file") from e

    ensure_inside(statement_file.path, base_dir, "--file")
    return statement_file


def ensure_inside(path: Path, base_dir: Path, param_hint: str) -> None:
    """
    Reject a relative path that resolves outside ``base_dir``.

    Absolute paths are used as given.

    Raises:
        click.BadParameter: If the path escapes base_dir
    """
    if path.is_absolute():
        return

    base = base_dir.resolve()
    if not (base / path).resolve().is_relative_to(base):
        raise click.BadParameter(f"Path '{path}' points outside the current directory", param_hint=param_hint)


@contextmanager
def cancel_on_interrupt(token: CancellationToken):
    """Turn Ctrl+C into a cancellation request for the duration of the block."""

    def handler(signum, frame):
        token.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


@click.command()
@click.option(
    "--file",
    "file_args",
    multiple=True,
    required=True,
    help="Input as <path>:<bank>:<account> (repeatable)",
)
@click.option("--output", "output_file", type=click.Path(dir_okay=False), help="Output file path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(SUPPORTED_OUTPUT_FORMATS, case_sensitive=False),
    help="Output format (default: csv)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def convert(
    ctx: click.Context,
    file_args: tuple[str, ...],
    output_file: str | None,
    output_format: str | None,
    verbose: bool,
) -> None:
    """
    Convert bank exports into one CSV or OFX file.

    Supported banks: revolut, wise, tbank, idbank, bbva, santander.

    Examples:
      bankmerge convert --file statement.csv:revolut:Main
      bankmerge convert --file wise.csv:wise:EUR --file idbank.xlsx:idbank:Card --format ofx
    """
    config = get_config()
    verbose = verbose or (ctx.obj or {}).get("verbose", False)

    files = [parse_file_argument(value, Path.cwd()) for value in file_args]

    exporter = get_exporter(output_format or config.convert.default_format)
    if output_file:
        output_path = Path(output_file)
        ensure_inside(output_path, Path.cwd(), "--output")
    else:
        output_path = exporter.default_output_path(config.convert.output_name)

    if verbose:
        click.echo("Statement Conversion")
        for statement_file in files:
            click.echo(f"Input: {statement_file.path} ({statement_file.bank}, account '{statement_file.account}')")
        click.echo(f"Format: {exporter.key}")
        click.echo(f"Output: {output_path}")
        click.echo()

    store = EnrichmentStore.from_config(config)
    service = TransactionProcessingService(store.load)

    try:
        with cancel_on_interrupt(CancellationToken()) as token:
            transactions = service.process_files(files, token)
            exporter.export(transactions, output_path, token)
    except OperationCancelled:
        click.echo("Conversion cancelled", err=True)
        ctx.exit(EXIT_CANCELLED)
    except BankMergeError as e:
        logger.debug("Conversion failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    summary = ConversionSummary.from_transactions(len(files), transactions)
    click.echo(f"Converted {summary.transactions} transactions from {summary.files_processed} file(s)")
    if verbose:
        click.echo(f"Transfers: {summary.transfers}")
        click.echo(f"Currencies: {', '.join(summary.currencies) or '-'}")
    click.echo(f"Output saved to: {output_path}")

