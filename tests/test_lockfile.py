"""Lock file parser stories: both Package.resolved layouts become pins."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from conftest import resolved_v1, resolved_v2, v1_pin, v2_pin

from swift_outdated.exceptions import LockFileNotFoundError
from swift_outdated.lockfile import DEFAULT_SCHEMAS, ResolvedV1, ResolvedV2, load_pins, parse_lock_file
from swift_outdated.models import Pin
from swift_outdated.semver import SemanticVersion


def _encode(document: Any) -> bytes:
    return json.dumps(document).encode("utf-8")


# ════════════════════════════════════════════════════════════════════════════
# Schema V1
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_v1_maps_fields_onto_pins() -> None:
    data = _encode(resolved_v1(v1_pin("Alamofire", "https://github.com/Alamofire/Alamofire.git", version="5.4.0")))

    pins = parse_lock_file(data)

    assert pins == [
        Pin(
            package="Alamofire",
            repository_url="https://github.com/Alamofire/Alamofire.git",
            revision="abc123",
            version=SemanticVersion(5, 4, 0),
        )
    ]


@pytest.mark.os_agnostic
def test_v1_keeps_branch_pin_without_version() -> None:
    data = _encode(resolved_v1(v1_pin("Nuke", "https://example.com/nuke.git")))

    pins = parse_lock_file(data)

    assert pins[0].version is None
    assert pins[0].revision == "abc123"


@pytest.mark.os_agnostic
def test_v1_adapter_rejects_v2_content() -> None:
    data = _encode(resolved_v2(v2_pin("a", "u", version="1.0.0")))

    assert ResolvedV1().try_decode(data) is None


# ════════════════════════════════════════════════════════════════════════════
# Schema V2
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_v2_maps_identity_and_location() -> None:
    data = _encode(resolved_v2(v2_pin("a", "u", version="1.0.0")))

    pins = parse_lock_file(data)

    assert pins == [Pin(package="a", repository_url="u", revision="abc123", version=SemanticVersion(1, 0, 0))]


@pytest.mark.os_agnostic
def test_v2_accepts_revision_only_state() -> None:
    data = _encode(resolved_v2(v2_pin("a", "u")))

    pins = parse_lock_file(data)

    assert pins[0].version is None
    assert pins[0].has_resolved_version is False


@pytest.mark.os_agnostic
def test_v2_accepts_state_without_revision() -> None:
    data = _encode(resolved_v2(v2_pin("a", "u", version="2.1.0", revision=None)))

    pins = parse_lock_file(data)

    assert pins[0].revision is None
    assert pins[0].version == SemanticVersion(2, 1, 0)


@pytest.mark.os_agnostic
def test_v2_ignores_unknown_top_level_keys() -> None:
    document = resolved_v2(v2_pin("a", "u", version="1.0.0"))
    document["originHash"] = "f00d"
    document["version"] = 3

    pins = parse_lock_file(_encode(document))

    assert len(pins) == 1


@pytest.mark.os_agnostic
def test_v2_adapter_rejects_v1_content() -> None:
    data = _encode(resolved_v1(v1_pin("a", "u", version="1.0.0")))

    assert ResolvedV2().try_decode(data) is None


# ════════════════════════════════════════════════════════════════════════════
# Version mapping and fallbacks
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw_version", ["", "1.0", "main", "v1.0.0"])
def test_malformed_version_yields_absent_version_not_a_skipped_pin(raw_version: str) -> None:
    data = _encode(
        resolved_v2(
            v2_pin("broken", "u1", version=raw_version),
            v2_pin("fine", "u2", version="3.0.0"),
        )
    )

    pins = parse_lock_file(data)

    assert [pin.package for pin in pins] == ["broken", "fine"]
    assert pins[0].version is None
    assert pins[1].version == SemanticVersion(3, 0, 0)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("data", [b"", b"not json", b"[]", b'{"pins": "nope"}', b'{"object": {}}'])
def test_unrecognised_content_yields_no_pins(data: bytes) -> None:
    assert parse_lock_file(data) == []


@pytest.mark.os_agnostic
def test_pin_missing_required_field_fails_whole_schema() -> None:
    data = _encode({"pins": [{"identity": "a", "state": {}}]})

    assert parse_lock_file(data) == []


@pytest.mark.os_agnostic
def test_schemas_are_tried_in_order() -> None:
    class Always:
        name = "always"

        def try_decode(self, data: bytes) -> list[Pin] | None:
            return [Pin(package="first", repository_url="x")]

    data = _encode(resolved_v2(v2_pin("a", "u")))

    pins = parse_lock_file(data, schemas=(Always(), *DEFAULT_SCHEMAS))

    assert pins[0].package == "first"


@pytest.mark.os_agnostic
def test_empty_pin_list_is_a_valid_document() -> None:
    assert parse_lock_file(_encode(resolved_v2())) == []


# ════════════════════════════════════════════════════════════════════════════
# load_pins: Locate, read and decode
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_load_pins_returns_path_and_pins(tmp_path: Path, write_resolved: Callable[..., Path]) -> None:
    expected = write_resolved(resolved_v2(v2_pin("a", "u", version="1.0.0")))

    path, pins = load_pins(tmp_path)

    assert path == expected
    assert [pin.package for pin in pins] == ["a"]


@pytest.mark.os_agnostic
def test_load_pins_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(LockFileNotFoundError):
        load_pins(tmp_path)
