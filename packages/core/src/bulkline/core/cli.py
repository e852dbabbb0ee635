"""``bulk`` command line entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .pipeline import BulkPipeline
from .types import (
    BulkConfig,
    BulkConfigError,
    ConsoleSinkConfig,
    FileSinkConfig,
    SinkConfig,
    parse_bulk_size,
)

logger = logging.getLogger("bulkline")


def configure_logging(*, verbose: bool = False) -> None:
    """Route ``bulkline`` records to stderr; DEBUG when verbose, else WARNING."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@click.command(
    context_settings={"help_option_names": ["-h", "--help"], "ignore_unknown_options": True}
)
@click.version_option(version=__version__, prog_name="bulk")
@click.argument("bulk_size", required=False, envvar="BULKLINE_BULK_SIZE")
@click.option(
    "--output-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for bulk<seconds>.log files.",
)
@click.option("--no-console", is_flag=True, help="Do not print bulks to stdout.")
@click.option("--no-files", is_flag=True, help="Do not write bulk log files.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    bulk_size: str | None,
    output_dir: Path,
    no_console: bool,
    no_files: bool,
    verbose: bool,
) -> None:
    """Group commands read from stdin into bulks of BULK_SIZE.

    Lines between "{" and "}" always form a single bulk.
    """
    configure_logging(verbose=verbose)

    sinks: list[SinkConfig] = []
    if not no_console:
        sinks.append(ConsoleSinkConfig())
    if not no_files:
        sinks.append(FileSinkConfig(directory=output_dir))

    try:
        config = BulkConfig(parse_bulk_size(bulk_size), sinks=sinks)
    except BulkConfigError as exc:
        click.echo(str(exc), err=True)
        ctx.exit(1)

    try:
        with BulkPipeline.from_config(config) as pipeline:
            pipeline.run(sys.stdin)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def main() -> None:
    cli()
