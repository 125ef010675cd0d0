"""Configuration display functionality for CLI config command.

Purpose
-------
Provides the business logic for displaying merged configuration from all
sources in human-readable or JSON format. Keeps CLI layer thin by handling
all formatting and display logic here.

Contents
--------
* :func:`display_config` – displays configuration in requested format
"""

from __future__ import annotations

import json
from typing import Any, cast

import click

from .config import get_config


def _format_value(value: Any) -> str:
    """Format a configuration value for human-readable display."""
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def _display_section_human(section_name: str, section_data: Any) -> None:
    """Display a single configuration section in human-readable format."""
    click.echo(f"\n[{section_name}]")
    if isinstance(section_data, dict):
        for key, value in cast(dict[str, Any], section_data).items():
            click.echo(f"  {key} = {_format_value(value)}")
    else:
        click.echo(f"  {section_data}")


def _section_or_exit(config: Any, section: str) -> Any:
    section_data = config.get(section, default={})
    if not section_data:
        click.echo(f"Section '{section}' not found or empty", err=True)
        raise SystemExit(1)
    return section_data


def display_config(*, format: str = "human", section: str | None = None) -> None:
    """Display the current merged configuration from all sources.

    Args:
        format: Output format: "human" for TOML-like display or "json" for JSON.
        section: Optional section name to display only that section.

    Side Effects:
        Writes formatted configuration to stdout via click.echo().
        Raises SystemExit(1) if requested section doesn't exist.

    Example:
        >>> display_config(section="outdated")  # doctest: +SKIP
        [outdated]
          timeout = 30.0
          concurrency = 10
          backend = "git"
          ignore = []
    """
    config = get_config()
    as_json = format.lower() == "json"

    if section:
        section_data = _section_or_exit(config, section)
        if as_json:
            click.echo(json.dumps({section: section_data}, indent=2))
        else:
            _display_section_human(section, section_data)
        return

    if as_json:
        click.echo(config.to_json(indent=2))
        return
    data: dict[str, Any] = config.as_dict()
    for section_name in data:
        _display_section_human(section_name, data[section_name])


__all__ = [
    "display_config",
]
