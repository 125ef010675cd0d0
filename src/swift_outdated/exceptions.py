"""Exception hierarchy for lock file and tag discovery failures.

Locate and read errors abort a run; tag listing errors are caught inside
:mod:`swift_outdated.tags` and never reach the caller.
"""

from __future__ import annotations

from pathlib import Path


class SwiftOutdatedError(Exception):
    """Base class for all errors raised by this package."""


class LockFileError(SwiftOutdatedError):
    """A Package.resolved file could not be located or read."""


class LockFileNotFoundError(LockFileError):
    """No Package.resolved exists at any searched location."""

    def __init__(self, message: str = "No Package.resolved found in current working tree.") -> None:
        super().__init__(message)


class LockFileNotReadableError(LockFileError):
    """A Package.resolved exists but its bytes could not be read."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Package.resolved could not be read: {self.path}")


class TagListingError(SwiftOutdatedError):
    """Listing the tags of a remote repository failed."""

    def __init__(self, repository_url: str, reason: str) -> None:
        self.repository_url = repository_url
        self.reason = reason
        super().__init__(f"Could not list tags for {repository_url}: {reason}")


__all__ = [
    "LockFileError",
    "LockFileNotFoundError",
    "LockFileNotReadableError",
    "SwiftOutdatedError",
    "TagListingError",
]
