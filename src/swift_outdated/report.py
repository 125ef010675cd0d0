"""Render check results for the terminal.

Purpose
-------
Keep presentation out of the CLI command: build the rich table and JSON
renderings of a :class:`~swift_outdated.models.CheckResult`.

Contents
--------
* :func:`build_table` - Rich table of outdated pins
* :func:`summary_lines` - Lines for the non-outdated categories
* :func:`render_json` - Machine-readable rendering
* :func:`display_result` - Print a rendering in the requested format
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import CheckResult, PinReport, PinStatus
from .schemas import CheckResultSchema

UP_TO_DATE_MESSAGE = "Everything is already up-to-date"


def _names(reports: list[PinReport]) -> str:
    return ", ".join(report.pin.package for report in reports)


def build_table(reports: list[PinReport]) -> Table:
    """Build the table of outdated pins."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Current", style="yellow", no_wrap=True)
    table.add_column("Latest", style="green", no_wrap=True)
    table.add_column("URL", style="dim", overflow="fold")
    for report in reports:
        table.add_row(
            Text(report.pin.package),
            Text(str(report.pin.version)),
            Text(str(report.latest_version)),
            Text(report.pin.repository_url),
        )
    return table


def summary_lines(result: CheckResult) -> list[str]:
    """Describe ignored, not version pinned and unknown pins."""
    lines: list[str] = []
    if not result.has_outdated:
        lines.append(UP_TO_DATE_MESSAGE)
    if result.ignored:
        lines.append(f"Ignored: {', '.join(result.ignored)}")
    not_pinned = result.with_status(PinStatus.NOT_VERSION_PINNED)
    if not_pinned:
        lines.append(f"Not version pinned: {_names(not_pinned)}")
    unknown = result.with_status(PinStatus.UNKNOWN)
    if unknown:
        lines.append(f"No versions found: {_names(unknown)}")
    return lines


def render_json(result: CheckResult) -> str:
    schema = CheckResultSchema.from_reports(result.reports, result.ignored)
    return schema.model_dump_json(indent=2, by_alias=True)


def display_result(result: CheckResult, *, format: str = "table", console: Console | None = None) -> None:
    """Print the result in "table" or "json" format."""
    if format.lower() == "json":
        click.echo(render_json(result))
        return

    console = console or Console()
    outdated = result.with_status(PinStatus.OUTDATED)
    if outdated:
        console.print(build_table(outdated))
    for line in summary_lines(result):
        console.print(line, markup=False, highlight=False)


__all__ = [
    "UP_TO_DATE_MESSAGE",
    "build_table",
    "display_result",
    "render_json",
    "summary_lines",
]
