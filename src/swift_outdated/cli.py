"""Command line interface for swift-outdated.

Purpose
-------
Thin click adapter: resolve settings, run the checker, render the result and
map it onto an exit code. All logic lives in the library modules.

Contents
--------
* :func:`cli` - Root command group
* :func:`check_command` - Check the current project's pins
* :func:`config_command` - Show the merged configuration
* :func:`info_command` - Show package metadata
* :func:`main` - Console script entry point
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __init__conf__
from .analyzer import Outdated, write_report_json
from .config import get_outdated_settings
from .config_show import display_config
from .exceptions import LockFileError
from .report import display_result
from .tags import BACKENDS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_OUTDATED = 1
EXIT_LOCK_FILE_ERROR = 2

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


@click.group(help=__init__conf__.title)
@click.version_option(__init__conf__.version, prog_name=__init__conf__.shell_command)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    _configure_logging(verbose)


@cli.command("check")
@click.option(
    "--path",
    "start_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (defaults to the current directory).",
)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", show_default=True)
@click.option("--ignore", "-i", multiple=True, help="Package identity to skip; may be repeated.")
@click.option("--backend", type=click.Choice(BACKENDS), default=None, help="Tag listing backend.")
@click.option("--timeout", type=float, default=None, help="Seconds per repository.")
@click.option("--concurrency", type=int, default=None, help="Simultaneous repositories.")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the JSON result to this file.",
)
def check_command(
    start_dir: Path | None,
    output_format: str,
    ignore: tuple[str, ...],
    backend: str | None,
    timeout: float | None,
    concurrency: int | None,
    output_path: Path | None,
) -> None:
    """Check Package.resolved pins against the latest tagged releases."""
    settings = get_outdated_settings()
    try:
        checker = Outdated(
            timeout=timeout if timeout is not None else settings.timeout,
            concurrency=concurrency if concurrency is not None else settings.concurrency,
            backend=backend or settings.backend,
            ignore=settings.ignore + ignore,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        result = checker.check(start_dir)
    except LockFileError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(EXIT_LOCK_FILE_ERROR) from exc

    display_result(result, format=output_format)
    if output_path is not None:
        write_report_json(result.reports, output_path, result.ignored)

    raise SystemExit(EXIT_OUTDATED if result.has_outdated else EXIT_OK)


@cli.command("config")
@click.option("--format", "output_format", type=click.Choice(["human", "json"]), default="human", show_default=True)
@click.option("--section", default=None, help="Only show this section.")
def config_command(output_format: str, section: str | None) -> None:
    """Show the merged configuration."""
    display_config(format=output_format, section=section)


@cli.command("info")
def info_command() -> None:
    """Show package metadata."""
    __init__conf__.print_info()


def main() -> None:
    cli()


__all__ = [
    "EXIT_LOCK_FILE_ERROR",
    "EXIT_OK",
    "EXIT_OUTDATED",
    "cli",
    "main",
]
