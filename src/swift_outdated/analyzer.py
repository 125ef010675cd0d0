"""Core checker that evaluates Package.resolved pins.

Purpose
-------
Orchestrate the check pipeline: locate and decode the lock file, discover the
tagged versions of every pinned repository, and evaluate each pin.

Contents
--------
* :class:`Outdated` - Configured checker
* :func:`check_outdated` - Main API function returning one report per pin
* :func:`write_report_json` - Serialize reports to a JSON file

System Role
-----------
The central component that coordinates all other modules to produce the final
check results. This is the main entry point for the library.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .evaluator import evaluate_pin
from .lockfile import load_pins
from .models import CheckResult, Pin, PinReport
from .schemas import CheckResultSchema
from .tags import (
    BACKEND_GIT,
    BACKENDS,
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT,
    TagDiscovery,
    TagLister,
    build_tag_lister,
)

logger = logging.getLogger(__name__)


def _split_ignored(pins: list[Pin], ignore: Iterable[str]) -> tuple[list[Pin], list[str]]:
    """Separate pins whose package is in the ignore list (case-insensitive)."""
    ignored_names = {name.lower() for name in ignore}
    kept: list[Pin] = []
    skipped: list[str] = []
    for pin in pins:
        if pin.package.lower() in ignored_names:
            skipped.append(pin.package)
        else:
            kept.append(pin)
    return kept, skipped


@dataclass
class Outdated:
    """Checks the pins of a Package.resolved against remote tags.

    Attributes:
        timeout: Seconds to wait for one repository's tag listing.
        concurrency: Maximum simultaneous tag listings.
        backend: Tag listing backend, "git" or "http".
        ignore: Package identities excluded from the check.
        lister: Tag lister; built from backend and timeout when omitted.
        discovery: The tag discovery used for every check.
    """

    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    backend: str = BACKEND_GIT
    ignore: tuple[str, ...] = ()
    lister: TagLister | None = None
    discovery: TagDiscovery = field(init=False)

    def __post_init__(self) -> None:
        """Initialize and validate the checker configuration."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.concurrency <= 0:
            raise ValueError(f"concurrency must be positive, got {self.concurrency}")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(BACKENDS)}, got {self.backend!r}")

        lister = self.lister if self.lister is not None else build_tag_lister(self.backend, timeout=self.timeout)
        self.discovery = TagDiscovery(lister=lister)

    async def check_pins_async(self, pins: list[Pin]) -> list[PinReport]:
        """Evaluate pins, listing each distinct repository once."""
        versioned_urls = [pin.repository_url for pin in pins if pin.has_resolved_version]
        available = await self.discovery.available_versions_many(versioned_urls, concurrency=self.concurrency)

        reports = [evaluate_pin(pin, available.get(pin.repository_url, [])) for pin in pins]
        for report in reports:
            logger.debug("%s: %s (latest %s)", report.pin.package, report.status.value, report.latest_version)
        return reports

    async def check_async(self, start_dir: Path | str | None = None) -> CheckResult:
        """Check the lock file of the project in start_dir asynchronously.

        Raises:
            LockFileNotFoundError: If no lock file exists.
            LockFileNotReadableError: If the lock file cannot be read.
        """
        lock_file, pins = await asyncio.to_thread(load_pins, start_dir)
        logger.info("Found %d pins", len(pins))

        kept, skipped = _split_ignored(pins, self.ignore)
        if skipped:
            logger.debug("Ignoring %s", ", ".join(skipped))

        reports = await self.check_pins_async(kept)
        return CheckResult(lock_file=lock_file, reports=reports, ignored=skipped)

    def check(self, start_dir: Path | str | None = None) -> CheckResult:
        """Synchronous wrapper for check_async."""
        return asyncio.run(self.check_async(start_dir))


def check_outdated(
    start_dir: Path | str | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    backend: str = BACKEND_GIT,
    ignore: Iterable[str] = (),
) -> list[PinReport]:
    """Check a project's Package.resolved and return one report per pin.

    This is the main API function for the library.

    Args:
        start_dir: Project directory. Defaults to the current working directory.
        timeout: Seconds to wait for one repository's tag listing.
        concurrency: Maximum simultaneous tag listings.
        backend: Tag listing backend, "git" or "http".
        ignore: Package identities excluded from the check.

    Returns:
        Reports in lock file order.

    Example:
        >>> for report in check_outdated():  # doctest: +SKIP
        ...     if report.outdated:  # doctest: +SKIP
        ...         print(f"{report.pin.package}: {report.pin.version} -> {report.latest_version}")  # doctest: +SKIP
    """
    checker = Outdated(timeout=timeout, concurrency=concurrency, backend=backend, ignore=tuple(ignore))
    return checker.check(start_dir).reports


def write_report_json(
    reports: list[PinReport],
    output_path: Path | str,
    ignored: list[str] | None = None,
) -> None:
    """Write check results, grouped by status, to a JSON file.

    Raises:
        ValueError: If output_path is a directory.
    """
    path = Path(output_path).resolve()

    if path.is_dir():
        raise ValueError(f"Output path must be a file, not a directory: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    schema = CheckResultSchema.from_reports(reports, ignored)
    path.write_text(schema.model_dump_json(indent=2, by_alias=True), encoding="utf-8")

    logger.info("Wrote %d reports to %s", len(reports), path)


__all__ = [
    "Outdated",
    "check_outdated",
    "write_report_json",
]
