"""Remote tag discovery for pinned repositories.

Purpose
-------
List the tags of a remote git repository and turn them into a sorted list of
semantic versions. Listing is pluggable: ``git ls-remote`` in a subprocess or
the git smart-HTTP reference advertisement fetched with httpx. Both produce
``<hash>\\t<ref>`` lines, so normalization and parsing are shared.

Contents
--------
* :class:`TagLister` - Protocol for raw tag listing
* :class:`GitLsRemoteTagLister` - Lists tags with ``git ls-remote --tags``
* :class:`HttpTagLister` - Lists tags over git smart HTTP
* :func:`normalize_tag` - Strip ``refs/tags/`` and a ``v`` version prefix
* :func:`parse_tag_lines` - Raw listing lines to sorted versions
* :class:`TagDiscovery` - Failure-isolating discovery with an injected logger

System Role
-----------
Runs once per distinct repository URL. Failures never propagate: they are
reported to the diagnostics logger and yield an empty version list.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import subprocess
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from . import __init__conf__
from .exceptions import TagListingError
from .semver import SemanticVersion, parse_version

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_CONCURRENCY = 10

BACKEND_GIT = "git"
BACKEND_HTTP = "http"
BACKENDS = (BACKEND_GIT, BACKEND_HTTP)

DEREFERENCED_TAG_MARKER = "^{}"
TAG_REF_PREFIX = "refs/tags/"

# "refs/tags/" prefix, then a "v" only when a digit follows
_RE_TAG_PREFIX = re.compile(r"^(?:refs/tags/)?(?:v(?=\d))?")

_UPLOAD_PACK_ADVERTISEMENT = "application/x-git-upload-pack-advertisement"
_PKT_FLUSH = 0
_PKT_HEADER_SIZE = 4


class TagLister(Protocol):
    """Lists the raw tag references of a remote repository."""

    def list_tags(self, repository_url: str) -> list[str]:
        """Return ``<hash>\\t<ref>`` lines for every tag reference.

        Raises:
            TagListingError: If the repository cannot be queried.
        """
        ...


@dataclass(slots=True)
class GitLsRemoteTagLister:
    """Runs ``git ls-remote --tags <url>`` and returns its output lines.

    Attributes:
        timeout: Seconds before the git process is killed.
        git: Name or path of the git executable.
    """

    timeout: float = DEFAULT_TIMEOUT
    git: str = "git"

    def list_tags(self, repository_url: str) -> list[str]:
        logger.debug("Running git ls-remote for %s", repository_url)
        # Never block on a credential prompt
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            completed = subprocess.run(  # noqa: S603
                [self.git, "ls-remote", "--tags", repository_url],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise TagListingError(repository_url, f"timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise TagListingError(repository_url, str(exc)) from exc

        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"git exited with status {completed.returncode}"
            raise TagListingError(repository_url, reason)
        return completed.stdout.splitlines()


def _iter_pkt_lines(payload: bytes) -> Iterator[bytes]:
    """Yield the payloads of git pkt-line framed data, skipping special packets."""
    offset = 0
    while offset + _PKT_HEADER_SIZE <= len(payload):
        header = payload[offset : offset + _PKT_HEADER_SIZE]
        try:
            length = int(header, 16)
        except ValueError as exc:
            raise ValueError(f"Invalid pkt-line header {header!r}") from exc
        if length < _PKT_HEADER_SIZE:
            # flush, delimiter and response-end packets carry no data
            offset += _PKT_HEADER_SIZE
            continue
        yield payload[offset + _PKT_HEADER_SIZE : offset + length]
        offset += length


def parse_ref_advertisement(payload: bytes) -> list[str]:
    """Extract tag references from a smart-HTTP ``info/refs`` response.

    Args:
        payload: Response body of ``GET <url>/info/refs?service=git-upload-pack``.

    Returns:
        ``<hash>\\t<ref>`` lines for references under ``refs/tags/``.

    Raises:
        ValueError: If the body is not valid pkt-line data.
    """
    lines: list[str] = []
    for packet in _iter_pkt_lines(payload):
        text = packet.split(b"\0", 1)[0].decode("utf-8", errors="replace").rstrip("\n")
        if not text or text.startswith("#"):
            continue
        commit, _, ref = text.partition(" ")
        if ref.startswith(TAG_REF_PREFIX):
            lines.append(f"{commit}\t{ref}")
    return lines


@dataclass(slots=True)
class HttpTagLister:
    """Lists tags through the git smart-HTTP reference advertisement.

    Attributes:
        timeout: Request timeout in seconds.
        client: Optional shared httpx client; one is created per call otherwise.
    """

    timeout: float = DEFAULT_TIMEOUT
    client: httpx.Client | None = None

    def _get_headers(self) -> dict[str, str]:
        # Smart HTTP servers only answer clients that identify as git
        return {
            "User-Agent": f"git/2.0 ({__init__conf__.name}/{__init__conf__.version})",
            "Accept": _UPLOAD_PACK_ADVERTISEMENT,
        }

    def _fetch(self, client: httpx.Client, repository_url: str) -> httpx.Response:
        url = f"{repository_url.rstrip('/')}/info/refs"
        response = client.get(
            url,
            params={"service": "git-upload-pack"},
            headers=self._get_headers(),
        )
        response.raise_for_status()
        return response

    def list_tags(self, repository_url: str) -> list[str]:
        if not repository_url.startswith(("http://", "https://")):
            raise TagListingError(repository_url, "only http(s) URLs are supported by the http backend")

        logger.debug("Fetching info/refs for %s", repository_url)
        try:
            if self.client is not None:
                response = self._fetch(self.client, repository_url)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = self._fetch(client, repository_url)
        except httpx.HTTPError as exc:
            raise TagListingError(repository_url, str(exc)) from exc

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith(_UPLOAD_PACK_ADVERTISEMENT):
            raise TagListingError(repository_url, f"unexpected content type {content_type!r}")
        try:
            return parse_ref_advertisement(response.content)
        except ValueError as exc:
            raise TagListingError(repository_url, str(exc)) from exc


def build_tag_lister(backend: str = BACKEND_GIT, *, timeout: float = DEFAULT_TIMEOUT) -> TagLister:
    """Create the tag lister for a configured backend name.

    Raises:
        ValueError: If backend is not one of :data:`BACKENDS`.
    """
    if backend == BACKEND_GIT:
        return GitLsRemoteTagLister(timeout=timeout)
    if backend == BACKEND_HTTP:
        return HttpTagLister(timeout=timeout)
    raise ValueError(f"backend must be one of {', '.join(BACKENDS)}, got {backend!r}")


def normalize_tag(tag: str) -> str:
    """Strip a ``refs/tags/`` prefix and a ``v`` that precedes a digit.

    Example:
        >>> normalize_tag("refs/tags/v2.0.0")
        '2.0.0'
        >>> normalize_tag("refs/tags/vNext")
        'vNext'
    """
    return _RE_TAG_PREFIX.sub("", tag.strip(), count=1)


def parse_tag_lines(lines: Iterable[str]) -> list[SemanticVersion]:
    """Turn ``<hash>\\t<ref>`` listing lines into sorted versions.

    Dereferenced annotated tag entries (``^{}``) and tags that are not
    semantic versions are dropped.
    """
    versions: list[SemanticVersion] = []
    for line in lines:
        if not line.strip():
            continue
        tag = normalize_tag(line.split("\t")[-1])
        if DEREFERENCED_TAG_MARKER in tag:
            continue
        version = parse_version(tag)
        if version is not None:
            versions.append(version)
    return sorted(versions)


def _default_lister() -> TagLister:
    return GitLsRemoteTagLister()


@dataclass(slots=True)
class TagDiscovery:
    """Discovers the released versions of remote repositories.

    Attributes:
        lister: Source of raw tag listing lines.
        diagnostics: Logger receiving discovery failures.
    """

    lister: TagLister = field(default_factory=_default_lister)
    diagnostics: logging.Logger = logger

    def available_versions(self, repository_url: str) -> list[SemanticVersion]:
        """Return the tagged versions of a repository, sorted ascending.

        Never raises: listing failures are reported to :attr:`diagnostics`
        and produce an empty list.
        """
        try:
            lines = self.lister.list_tags(repository_url)
            return parse_tag_lines(lines)
        except Exception as exc:  # noqa: BLE001 - one repository must not abort the run
            self.diagnostics.error("Error listing tags for %s: %s", repository_url, exc)
            return []

    async def available_versions_many(
        self,
        repository_urls: Iterable[str],
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> dict[str, list[SemanticVersion]]:
        """Discover versions for many repositories with bounded parallelism.

        Each distinct URL is queried once on a worker thread.

        Args:
            repository_urls: URLs to query; duplicates are collapsed.
            concurrency: Maximum simultaneous listings.

        Returns:
            Map of repository URL to its sorted versions.
        """
        unique_urls = list(dict.fromkeys(repository_urls))
        semaphore = asyncio.Semaphore(concurrency)

        async def discover(url: str) -> tuple[str, list[SemanticVersion]]:
            async with semaphore:
                return url, await asyncio.to_thread(self.available_versions, url)

        results = await asyncio.gather(*(discover(url) for url in unique_urls))
        return dict(results)


__all__ = [
    "BACKENDS",
    "BACKEND_GIT",
    "BACKEND_HTTP",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_TIMEOUT",
    "GitLsRemoteTagLister",
    "HttpTagLister",
    "TagDiscovery",
    "TagLister",
    "build_tag_lister",
    "normalize_tag",
    "parse_ref_advertisement",
    "parse_tag_lines",
]
