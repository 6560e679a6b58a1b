"""Persisted shape of the deliverable aggregate.

The on-disk format keeps the historical camelCase keys and the two status
booleans (`passed`, `blocked`). Conversion to and from the in-memory
`DeliverableStatus` happens only here.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from autonoe_deliverables.domain.deliverable import Deliverable, DeliverableState
from autonoe_deliverables.domain.status import DeliverableStatus, first_duplicate_id, utc_now

logger = logging.getLogger(__name__)


def _coerce_timestamp(value: object) -> object:
    # Older status files stored plain dates ("2025-01-14").
    if isinstance(value, str) and len(value) == 10:
        try:
            day = date.fromisoformat(value)
        except ValueError:
            return value
        return datetime(day.year, day.month, day.day, tzinfo=UTC)
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class DeliverableRecord(BaseModel):
    """One persisted deliverable."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str
    acceptance_criteria: list[str] = Field(default_factory=list, alias="acceptanceCriteria")
    passed: bool = False
    blocked: bool = False
    deprecated: bool = False
    deprecated_at: datetime | None = Field(default=None, alias="deprecatedAt")

    @field_validator("deprecated_at", mode="before")
    @classmethod
    def _parse_deprecated_at(cls, value: object) -> object:
        return _coerce_timestamp(value)

    @classmethod
    def from_deliverable(cls, deliverable: Deliverable) -> DeliverableRecord:
        return cls(
            id=deliverable.id,
            description=deliverable.description,
            acceptance_criteria=list(deliverable.acceptance_criteria),
            passed=deliverable.passed,
            blocked=deliverable.blocked,
            deprecated=deliverable.deprecated,
            deprecated_at=deliverable.deprecated_at,
        )

    def to_deliverable(self) -> Deliverable:
        if self.passed and self.blocked:
            logger.warning(
                "Deliverable record is both passed and blocked; treating as passed",
                extra={"deliverable_id": self.id},
            )
        deprecated_at = self.deprecated_at
        if deprecated_at is not None and not self.deprecated:
            logger.warning(
                "Deliverable record has deprecatedAt but is not deprecated; ignoring it",
                extra={"deliverable_id": self.id},
            )
            deprecated_at = None
        return Deliverable(
            id=self.id,
            description=self.description,
            acceptance_criteria=tuple(self.acceptance_criteria),
            state=DeliverableState.from_flags(passed=self.passed, blocked=self.blocked),
            deprecated=self.deprecated,
            deprecated_at=_as_utc(deprecated_at) if deprecated_at else None,
        )


class DeliverableStatusRecord(BaseModel):
    """The full persisted aggregate."""

    model_config = ConfigDict(populate_by_name=True)

    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")
    deliverables: list[DeliverableRecord] = Field(default_factory=list)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: object) -> object:
        return _coerce_timestamp(value)

    @model_validator(mode="after")
    def _unique_ids(self) -> DeliverableStatusRecord:
        duplicate = first_duplicate_id(r.id for r in self.deliverables)
        if duplicate is not None:
            raise ValueError(f'Duplicate deliverable ID "{duplicate}" in status')
        return self

    @classmethod
    def from_status(cls, status: DeliverableStatus) -> DeliverableStatusRecord:
        return cls(
            created_at=status.created_at,
            updated_at=status.updated_at,
            deliverables=[DeliverableRecord.from_deliverable(d) for d in status.deliverables],
        )

    def to_status(self) -> DeliverableStatus:
        return DeliverableStatus(
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
            deliverables=tuple(r.to_deliverable() for r in self.deliverables),
        )


def encode_status(status: DeliverableStatus) -> dict[str, Any]:
    """Flatten an aggregate into its JSON-ready persisted form."""

    return DeliverableStatusRecord.from_status(status).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )


def decode_status(raw: object) -> DeliverableStatus:
    """Rebuild an aggregate from persisted data.

    Data without a deliverables list is treated as an empty aggregate, matching
    the "never fail with not found" loading contract.
    """

    if raw is None:
        return DeliverableStatus.empty()

    if not isinstance(raw, dict) or not isinstance(raw.get("deliverables"), list):
        logger.warning("Deliverable status has unexpected shape; treating as empty")
        return DeliverableStatus.empty()

    return DeliverableStatusRecord.model_validate(raw).to_status()
