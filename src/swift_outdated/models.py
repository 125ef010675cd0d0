"""Domain models for outdated pin detection (dataclasses).

Purpose
-------
Define core data structures for the outdated-check domain layer.
These are pure dataclasses used for internal business logic.

For lock file decoding and JSON serialization, use the Pydantic schemas in
schemas.py.

Contents
--------
* :class:`Pin` - One dependency as recorded in Package.resolved
* :class:`PinStatus` - Reporting category of a pin
* :class:`PinReport` - Outdated verdict for a single pin
* :class:`CheckResult` - Complete result of one run

Data Flow Pattern
-----------------
Package.resolved → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → Output

System Role
-----------
Provides the canonical data structures that flow through the check pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .semver import SemanticVersion


class PinStatus(str, Enum):
    """Reporting category of a pin after evaluation.

    Attributes:
        OUTDATED: A newer tagged version exists.
        UP_TO_DATE: The pinned version is the newest tagged version.
        NOT_VERSION_PINNED: The pin records a revision or branch only.
        UNKNOWN: No tagged versions could be discovered.
    """

    OUTDATED = "outdated"
    UP_TO_DATE = "up to date"
    NOT_VERSION_PINNED = "not version pinned"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Pin:
    """A single pinned dependency from Package.resolved.

    Attributes:
        package: The package identity or name.
        repository_url: Location used to list remote tags.
        revision: The pinned commit, if recorded.
        version: The pinned semantic version, None for branch or revision pins.
    """

    package: str
    repository_url: str
    revision: str | None = None
    version: SemanticVersion | None = None

    @property
    def has_resolved_version(self) -> bool:
        return self.version is not None


@dataclass(frozen=True, slots=True)
class PinReport:
    """Outdated verdict for one pin.

    Attributes:
        pin: The evaluated pin.
        outdated: True or False when decidable, None when unknown.
        latest_version: The newest tagged version, or None if none was found.
    """

    pin: Pin
    outdated: bool | None
    latest_version: SemanticVersion | None

    @property
    def status(self) -> PinStatus:
        """Map the verdict onto a reporting category."""
        if self.outdated is True:
            return PinStatus.OUTDATED
        if self.outdated is False:
            return PinStatus.UP_TO_DATE
        if not self.pin.has_resolved_version:
            return PinStatus.NOT_VERSION_PINNED
        return PinStatus.UNKNOWN


def _empty_report_list() -> list[PinReport]:
    """Return an empty PinReport list for dataclass defaults."""
    return []


def _empty_str_list() -> list[str]:
    """Return an empty string list for dataclass defaults."""
    return []


@dataclass(slots=True)
class CheckResult:
    """Complete result of checking one Package.resolved file.

    Attributes:
        lock_file: Path of the evaluated lock file.
        reports: One report per checked pin, in lock file order.
        ignored: Package names skipped because of the ignore list.
    """

    lock_file: Path
    reports: list[PinReport] = field(default_factory=_empty_report_list)
    ignored: list[str] = field(default_factory=_empty_str_list)

    def with_status(self, status: PinStatus) -> list[PinReport]:
        return [report for report in self.reports if report.status is status]

    @property
    def outdated_count(self) -> int:
        return len(self.with_status(PinStatus.OUTDATED))

    @property
    def has_outdated(self) -> bool:
        return self.outdated_count > 0


__all__ = [
    "CheckResult",
    "Pin",
    "PinReport",
    "PinStatus",
]
