"""Static package metadata surfaced to CLI commands and configuration.

Purpose
-------
Keep the project name, version and configuration identifiers in one place so
the CLI banner, the HTTP user agent and lib_layered_config agree.

Contents
--------
* Module-level metadata constants
* ``LAYEREDCONF_*`` identifiers for :mod:`swift_outdated.config`
* :func:`print_info` - Render the metadata as text
"""

from __future__ import annotations

import click

name = "swift_outdated"
title = "Check Package.resolved pins against the latest tagged releases"
version = "0.4.0"
shell_command = "swift-outdated"

# lib_layered_config identifiers (platform-specific config paths)
LAYEREDCONF_VENDOR = "swift-outdated"
LAYEREDCONF_APP = "swift-outdated"
LAYEREDCONF_SLUG = "swift-outdated"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for swift_outdated:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
        ("config_slug", LAYEREDCONF_SLUG),
    )
    pad = max(len(label) for label, _ in fields)
    click.echo(f"Info for {name}:\n")
    for label, value in fields:
        click.echo(f"    {label.ljust(pad)} = {value}")


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "print_info",
]
