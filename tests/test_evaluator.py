"""Evaluator stories: a pin is outdated only when a newer tag exists."""

from __future__ import annotations

import pytest

from swift_outdated.evaluator import evaluate_pin, is_outdated, latest_version
from swift_outdated.models import Pin, PinStatus
from swift_outdated.semver import SemanticVersion, parse_version


def _pin(version: str | None) -> Pin:
    return Pin(package="a", repository_url="u", revision="abc123", version=parse_version(version))


def _available(*texts: str) -> list[SemanticVersion]:
    return sorted(SemanticVersion.from_string(text) for text in texts)


# ════════════════════════════════════════════════════════════════════════════
# is_outdated
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_pin_behind_latest_is_outdated() -> None:
    assert is_outdated(_pin("1.0.0"), _available("1.0.0", "1.2.0")) is True


@pytest.mark.os_agnostic
def test_pin_at_latest_is_not_outdated() -> None:
    assert is_outdated(_pin("1.2.0"), _available("1.0.0", "1.2.0")) is False


@pytest.mark.os_agnostic
def test_pin_ahead_of_latest_is_not_outdated() -> None:
    assert is_outdated(_pin("2.0.0"), _available("1.0.0")) is False


@pytest.mark.os_agnostic
def test_prerelease_pin_is_behind_its_release() -> None:
    assert is_outdated(_pin("1.0.0-beta"), _available("1.0.0")) is True


@pytest.mark.os_agnostic
def test_build_metadata_does_not_make_a_pin_outdated() -> None:
    assert is_outdated(_pin("1.0.0+local"), _available("1.0.0+ci.7")) is False


@pytest.mark.os_agnostic
def test_pin_without_version_is_unknown() -> None:
    assert is_outdated(_pin(None), _available("9.9.9")) is None


@pytest.mark.os_agnostic
def test_pin_without_available_versions_is_unknown() -> None:
    assert is_outdated(_pin("1.0.0"), []) is None


@pytest.mark.os_agnostic
def test_unsorted_available_versions_use_maximum() -> None:
    versions = [SemanticVersion(3, 0, 0), SemanticVersion(1, 0, 0)]

    assert is_outdated(_pin("2.0.0"), versions) is True
    assert latest_version(versions) == SemanticVersion(3, 0, 0)


# ════════════════════════════════════════════════════════════════════════════
# evaluate_pin: Report categories
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("version", "available", "status"),
    [
        ("1.0.0", ("1.2.0",), PinStatus.OUTDATED),
        ("1.2.0", ("1.2.0",), PinStatus.UP_TO_DATE),
        (None, ("1.2.0",), PinStatus.NOT_VERSION_PINNED),
        (None, (), PinStatus.NOT_VERSION_PINNED),
        ("1.0.0", (), PinStatus.UNKNOWN),
    ],
)
def test_evaluate_pin_assigns_status(version: str | None, available: tuple[str, ...], status: PinStatus) -> None:
    report = evaluate_pin(_pin(version), _available(*available))

    assert report.status is status


@pytest.mark.os_agnostic
def test_evaluate_pin_records_latest_version() -> None:
    report = evaluate_pin(_pin("1.0.0"), _available("1.0.0", "1.2.0"))

    assert report.latest_version == SemanticVersion(1, 2, 0)
    assert report.outdated is True
