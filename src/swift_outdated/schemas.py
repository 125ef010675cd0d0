"""Pydantic schemas for external data boundaries.

Purpose
-------
Define Pydantic models for data that crosses system boundaries:
- Input: Decoding both Package.resolved schema versions
- Output: JSON serialization of check results

These models handle validation, coercion, and serialization at the edges
while internal business logic uses lightweight dataclasses.

Data Flow Pattern
-----------------
External Input → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → External Output
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models import PinReport, PinStatus


class PinStateSchema(BaseModel):
    """The ``state`` object shared by both lock file versions."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    revision: str | None = None
    version: str | None = None


class ResolvedV1PinSchema(BaseModel):
    """A pin entry in a version 1 Package.resolved."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    package: str
    repository_url: str = Field(alias="repositoryURL")
    state: PinStateSchema


class ResolvedV1ObjectSchema(BaseModel):
    """The nested ``object`` of a version 1 Package.resolved."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pins: list[ResolvedV1PinSchema]


class ResolvedV1Schema(BaseModel):
    """Schema for Package.resolved version 1 (Xcode 12, SwiftPM 5.5 and older)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    object: ResolvedV1ObjectSchema


class ResolvedV2PinSchema(BaseModel):
    """A pin entry in a version 2 Package.resolved."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    identity: str
    location: str
    state: PinStateSchema


class ResolvedV2Schema(BaseModel):
    """Schema for Package.resolved version 2 and later (flat ``pins`` list)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pins: list[ResolvedV2PinSchema]


class PinReportSchema(BaseModel):
    """Pydantic schema for serializing a pin report to JSON."""

    model_config = ConfigDict(frozen=True)

    package: str = Field(description="The package identity")
    repository_url: str = Field(serialization_alias="repositoryURL", description="Remote repository location")
    revision: str | None = Field(default=None, description="Pinned revision")
    current_version: str | None = Field(description="Pinned version")
    latest_version: str | None = Field(description="Newest tagged version")

    @classmethod
    def from_report(cls, report: PinReport) -> PinReportSchema:
        pin = report.pin
        return cls(
            package=pin.package,
            repository_url=pin.repository_url,
            revision=pin.revision,
            current_version=str(pin.version) if pin.version else None,
            latest_version=str(report.latest_version) if report.latest_version else None,
        )


def _empty_report_list() -> list[PinReportSchema]:
    """Return empty list for default factory."""
    return []


class CheckResultSchema(BaseModel):
    """Pydantic schema for a complete check result, grouped by status."""

    model_config = ConfigDict(frozen=True)

    outdated: list[PinReportSchema] = Field(default_factory=_empty_report_list)
    up_to_date: list[PinReportSchema] = Field(default_factory=_empty_report_list)
    not_version_pinned: list[PinReportSchema] = Field(default_factory=_empty_report_list)
    unknown: list[PinReportSchema] = Field(default_factory=_empty_report_list)
    ignored: list[str] = Field(default_factory=list)

    @classmethod
    def from_reports(cls, reports: list[PinReport], ignored: list[str] | None = None) -> CheckResultSchema:
        groups: dict[PinStatus, list[PinReportSchema]] = {status: [] for status in PinStatus}
        for report in reports:
            groups[report.status].append(PinReportSchema.from_report(report))
        return cls(
            outdated=groups[PinStatus.OUTDATED],
            up_to_date=groups[PinStatus.UP_TO_DATE],
            not_version_pinned=groups[PinStatus.NOT_VERSION_PINNED],
            unknown=groups[PinStatus.UNKNOWN],
            ignored=list(ignored or []),
        )


__all__ = [
    "CheckResultSchema",
    "PinReportSchema",
    "PinStateSchema",
    "ResolvedV1ObjectSchema",
    "ResolvedV1PinSchema",
    "ResolvedV1Schema",
    "ResolvedV2PinSchema",
    "ResolvedV2Schema",
]
