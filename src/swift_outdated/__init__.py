"""Public package surface for outdated Package.resolved checks.

This package locates a Swift Package Manager lock file, lists the tags of
every pinned repository, and reports pins that are behind the newest tagged
release.

Main API
--------
* :func:`check_outdated` - Check a project and return one report per pin
* :class:`Outdated` - Configured checker
* :class:`PinReport` - Verdict for one pin
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .analyzer import Outdated, check_outdated, write_report_json
from .config import get_config
from .evaluator import evaluate_pin, is_outdated
from .exceptions import (
    LockFileError,
    LockFileNotFoundError,
    LockFileNotReadableError,
    SwiftOutdatedError,
    TagListingError,
)
from .lockfile import load_pins, parse_lock_file
from .locator import locate_lock_file, read_lock_file
from .models import CheckResult, Pin, PinReport, PinStatus
from .semver import SemanticVersion, parse_version
from .tags import TagDiscovery

__all__ = [
    "CheckResult",
    "LockFileError",
    "LockFileNotFoundError",
    "LockFileNotReadableError",
    "Outdated",
    "Pin",
    "PinReport",
    "PinStatus",
    "SemanticVersion",
    "SwiftOutdatedError",
    "TagDiscovery",
    "TagListingError",
    "check_outdated",
    "evaluate_pin",
    "get_config",
    "is_outdated",
    "load_pins",
    "locate_lock_file",
    "parse_lock_file",
    "parse_version",
    "print_info",
    "read_lock_file",
    "write_report_json",
]
