"""Shared fixtures: lock file writers and a scripted tag lister."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from swift_outdated.exceptions import TagListingError


def resolved_v1(*pins: dict[str, Any]) -> dict[str, Any]:
    return {"object": {"pins": list(pins)}, "version": 1}


def resolved_v2(*pins: dict[str, Any]) -> dict[str, Any]:
    return {"pins": list(pins), "version": 2}


def v1_pin(package: str, url: str, *, version: str | None = None, revision: str | None = "abc123") -> dict[str, Any]:
    return {
        "package": package,
        "repositoryURL": url,
        "state": {"branch": None, "revision": revision, "version": version},
    }


def v2_pin(identity: str, url: str, *, version: str | None = None, revision: str | None = "abc123") -> dict[str, Any]:
    state: dict[str, Any] = {"revision": revision}
    if version is not None:
        state["version"] = version
    return {"identity": identity, "kind": "remoteSourceControl", "location": url, "state": state}


@pytest.fixture
def write_resolved(tmp_path: Path) -> Callable[..., Path]:
    """Write a lock file document below tmp_path and return its path."""

    def write(document: dict[str, Any], relative: str = "Package.resolved") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return write


@dataclass
class ScriptedLister:
    """Tag lister answering from a dict; URLs missing from it fail."""

    tags: dict[str, list[str]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def list_tags(self, repository_url: str) -> list[str]:
        self.calls.append(repository_url)
        if repository_url not in self.tags:
            raise TagListingError(repository_url, "repository not found")
        return [f"deadbeef\trefs/tags/{tag}" for tag in self.tags[repository_url]]


@pytest.fixture
def scripted_lister() -> ScriptedLister:
    return ScriptedLister()
