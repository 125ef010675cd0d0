"""Decide whether a pin is outdated.

A pin is outdated when its version is lower than the newest discovered
version. Pins without a version, and pins whose repository yielded no
versions, cannot be judged and evaluate to None.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import Pin, PinReport
from .semver import SemanticVersion


def latest_version(available_versions: Sequence[SemanticVersion]) -> SemanticVersion | None:
    return max(available_versions) if available_versions else None


def is_outdated(pin: Pin, available_versions: Sequence[SemanticVersion]) -> bool | None:
    """Compare a pin against the versions available for its repository.

    Args:
        pin: The pin to evaluate.
        available_versions: Versions discovered for ``pin.repository_url``.

    Returns:
        True if a newer version exists, False if the pin is current, None if
        the pin has no version or no versions are available.
    """
    if pin.version is None:
        return None
    latest = latest_version(available_versions)
    if latest is None:
        return None
    return pin.version < latest


def evaluate_pin(pin: Pin, available_versions: Sequence[SemanticVersion]) -> PinReport:
    """Build the report for one pin."""
    return PinReport(
        pin=pin,
        outdated=is_outdated(pin, available_versions),
        latest_version=latest_version(available_versions),
    )


__all__ = [
    "evaluate_pin",
    "is_outdated",
    "latest_version",
]
