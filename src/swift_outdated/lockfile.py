"""Decode Package.resolved content into pins.

Purpose
-------
Support every Package.resolved layout through an ordered list of schema
adapters. The first adapter that decodes the content wins; content no adapter
understands yields no pins.

Contents
--------
* :class:`LockFileSchema` - Protocol implemented by schema adapters
* :class:`ResolvedV1` - Adapter for the nested version 1 layout
* :class:`ResolvedV2` - Adapter for the flat version 2+ layout
* :func:`parse_lock_file` - Decode bytes with the registered adapters
* :func:`load_pins` - Locate, read and decode in one call
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from .locator import locate_lock_file, read_lock_file
from .models import Pin
from .schemas import PinStateSchema, ResolvedV1Schema, ResolvedV2Schema
from .semver import parse_version

logger = logging.getLogger(__name__)


class LockFileSchema(Protocol):
    """A Package.resolved layout that can be tried against raw content."""

    name: str

    def try_decode(self, data: bytes) -> list[Pin] | None:
        """Return the decoded pins, or None if data does not match the layout."""
        ...


def _build_pin(package: str, repository_url: str, state: PinStateSchema) -> Pin:
    version = parse_version(state.version)
    if state.version and version is None:
        logger.debug("Ignoring unparsable version %r of %s", state.version, package)
    return Pin(
        package=package,
        repository_url=repository_url,
        revision=state.revision,
        version=version,
    )


class ResolvedV1:
    """``{"object": {"pins": [{"package", "repositoryURL", "state"}]}}``"""

    name = "v1"

    def try_decode(self, data: bytes) -> list[Pin] | None:
        try:
            resolved = ResolvedV1Schema.model_validate_json(data)
        except ValidationError:
            return None
        return [_build_pin(pin.package, pin.repository_url, pin.state) for pin in resolved.object.pins]


class ResolvedV2:
    """``{"pins": [{"identity", "location", "state"}]}``"""

    name = "v2"

    def try_decode(self, data: bytes) -> list[Pin] | None:
        try:
            resolved = ResolvedV2Schema.model_validate_json(data)
        except ValidationError:
            return None
        return [_build_pin(pin.identity, pin.location, pin.state) for pin in resolved.pins]


DEFAULT_SCHEMAS: Sequence[LockFileSchema] = (ResolvedV1(), ResolvedV2())


def parse_lock_file(data: bytes, schemas: Sequence[LockFileSchema] = DEFAULT_SCHEMAS) -> list[Pin]:
    """Decode lock file content into pins.

    Args:
        data: Raw Package.resolved content.
        schemas: Adapters to try, in order.

    Returns:
        Pins in lock file order, or an empty list if no schema matches.
    """
    for schema in schemas:
        pins = schema.try_decode(data)
        if pins is not None:
            logger.debug("Decoded %d pins with schema %s", len(pins), schema.name)
            return pins
    logger.warning("Lock file content matches no known Package.resolved schema")
    return []


def load_pins(start_dir: Path | str | None = None) -> tuple[Path, list[Pin]]:
    """Locate, read and decode the lock file of the project in start_dir.

    Raises:
        LockFileNotFoundError: If no lock file exists.
        LockFileNotReadableError: If the lock file cannot be read.
    """
    path = locate_lock_file(start_dir)
    logger.info("Using %s", path)
    return path, parse_lock_file(read_lock_file(path))


__all__ = [
    "DEFAULT_SCHEMAS",
    "LockFileSchema",
    "ResolvedV1",
    "ResolvedV2",
    "load_pins",
    "parse_lock_file",
]
