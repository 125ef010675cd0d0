"""Semantic version parsing and ordering.

Purpose
-------
Turn tag names and ``Package.resolved`` version strings into comparable
values. Parsing is delegated to :mod:`semantic_version` (strict SemVer 2.0);
ordering is computed here so that build metadata never takes part in it.

Contents
--------
* :class:`SemanticVersion` - Immutable version with a total order
* :func:`parse_version` - Lenient parser returning ``None`` on bad input

System Role
-----------
Leaf module shared by the lock file parser, tag discovery and the outdated
evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

import semantic_version

# Identifier keys: numeric identifiers sort before alphanumeric ones
_NUMERIC = 0
_ALPHANUMERIC = 1

# Release marker sorts after any pre-release of the same major.minor.patch
_PRERELEASE = 0
_RELEASE = 1


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    if identifier.isdigit():
        return (_NUMERIC, int(identifier), "")
    return (_ALPHANUMERIC, 0, identifier)


def _empty_identifiers() -> tuple[str, ...]:
    """Return an empty identifier tuple for dataclass defaults."""
    return ()


@dataclass(frozen=True, slots=True, eq=False)
class SemanticVersion:
    """A ``major.minor.patch[-prerelease][+build]`` version.

    Equality, hashing and ordering ignore build metadata, so
    ``1.0.0+a == 1.0.0+b`` while ``1.0.0-beta < 1.0.0``.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated pre-release identifiers.
        build: Dot-separated build metadata identifiers.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default_factory=_empty_identifiers)
    build: tuple[str, ...] = field(default_factory=_empty_identifiers)

    @property
    def precedence_key(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        """Return the tuple used for equality and ordering."""
        if self.prerelease:
            marker = _PRERELEASE
            identifiers = tuple(_identifier_key(part) for part in self.prerelease)
        else:
            marker = _RELEASE
            identifiers = ()
        return (self.major, self.minor, self.patch, marker, identifiers)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        """Return the canonical SemVer rendering, build metadata included."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key == other.precedence_key

    def __hash__(self) -> int:
        return hash(self.precedence_key)

    def __lt__(self, other: object) -> bool:
        """Compare versions for sorting."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key < other.precedence_key

    def __le__(self, other: object) -> bool:
        """Compare versions."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key <= other.precedence_key

    def __gt__(self, other: object) -> bool:
        """Compare versions."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key > other.precedence_key

    def __ge__(self, other: object) -> bool:
        """Compare versions."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key >= other.precedence_key

    @classmethod
    def from_string(cls, version_str: str) -> SemanticVersion:
        """Parse a strict SemVer string.

        Args:
            version_str: Version like "1.2.3", "1.0.0-rc.1" or "2.0.0+build.5".

        Returns:
            Parsed version object.

        Raises:
            ValueError: If the string is not a valid semantic version.
        """
        parsed = semantic_version.Version(version_str)
        return cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=tuple(parsed.prerelease),
            build=tuple(parsed.build),
        )


@lru_cache(maxsize=2048)
def parse_version(text: str | None) -> SemanticVersion | None:
    """Parse a version string, returning None when it is not a semantic version.

    Args:
        text: Candidate version string (a normalized tag or a pinned version).

    Returns:
        The parsed version, or None for empty or malformed input.

    Example:
        >>> parse_version("1.2.3") < parse_version("1.10.0")
        True
        >>> parse_version("vNext") is None
        True
    """
    if not text:
        return None
    try:
        return SemanticVersion.from_string(text)
    except ValueError:
        return None


__all__ = [
    "SemanticVersion",
    "parse_version",
]
