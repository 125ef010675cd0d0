"""Locate and read the Package.resolved lock file.

Purpose
-------
Find the lock file of a Swift package, an Xcode workspace or an Xcode project
below a starting directory, and read its raw bytes.

Contents
--------
* :func:`locate_lock_file` - Search the candidate locations in order
* :func:`read_lock_file` - Read the located file

System Role
-----------
The first stage of the check pipeline. Errors raised here abort the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import LockFileNotFoundError, LockFileNotReadableError

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = "Package.resolved"
HIDDEN_LOCK_FILE_NAME = ".package.resolved"

WORKSPACE_SUFFIX = "xcworkspace"
WORKSPACE_LOCK_FILE = Path("xcshareddata", "swiftpm", LOCK_FILE_NAME)

PROJECT_SUFFIX = "xcodeproj"
PROJECT_LOCK_FILE = Path("project.xcworkspace") / WORKSPACE_LOCK_FILE


def _first_subdirectory(directory: Path, suffix: str) -> Path | None:
    """Return the first subdirectory (by name) whose name ends with suffix."""
    try:
        candidates = sorted(entry for entry in directory.iterdir() if entry.is_dir() and entry.name.endswith(suffix))
    except OSError as exc:
        logger.debug("Could not list %s: %s", directory, exc)
        return None
    return candidates[0] if candidates else None


def _lock_file_in_bundle(bundle: Path, nested: Path) -> Path:
    """Return the nested lock file of an Xcode bundle or raise NotFound."""
    path = bundle / nested
    if not path.is_file():
        logger.debug("%s has no %s", bundle.name, nested)
        raise LockFileNotFoundError()
    return path


def locate_lock_file(start_dir: Path | str | None = None) -> Path:
    """Find the Package.resolved for the project in start_dir.

    Candidates are tried in order and the first match wins:

    1. ``Package.resolved``
    2. ``.package.resolved``
    3. ``<first *xcworkspace>/xcshareddata/swiftpm/Package.resolved``
    4. ``<first *xcodeproj>/project.xcworkspace/xcshareddata/swiftpm/Package.resolved``

    A workspace or project bundle without the nested lock file ends the
    search; later tiers are not consulted.

    Args:
        start_dir: Directory to search. Defaults to the current working directory.

    Returns:
        Path of the located lock file.

    Raises:
        LockFileNotFoundError: If no candidate exists.
    """
    directory = Path(start_dir) if start_dir is not None else Path.cwd()

    for name in (LOCK_FILE_NAME, HIDDEN_LOCK_FILE_NAME):
        candidate = directory / name
        if candidate.is_file():
            logger.debug("Found %s", candidate)
            return candidate

    for suffix, nested in ((WORKSPACE_SUFFIX, WORKSPACE_LOCK_FILE), (PROJECT_SUFFIX, PROJECT_LOCK_FILE)):
        bundle = _first_subdirectory(directory, suffix)
        if bundle is not None:
            return _lock_file_in_bundle(bundle, nested)

    raise LockFileNotFoundError()


def read_lock_file(path: Path | str) -> bytes:
    """Read the raw bytes of a lock file.

    Args:
        path: Path returned by :func:`locate_lock_file`.

    Returns:
        File content.

    Raises:
        LockFileNotReadableError: If the file cannot be read.
    """
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise LockFileNotReadableError(path) from exc


__all__ = [
    "LOCK_FILE_NAME",
    "locate_lock_file",
    "read_lock_file",
]
