"""Argument schemas for the deliverable tools.

Agents send camelCase JSON arguments; these models validate them before any
repository access happens.
"""

from __future__ import annotations

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from autonoe_deliverables.domain.deliverable import DeliverableState
from autonoe_deliverables.operations.listing import DeliverableFilter
from autonoe_deliverables.operations.transitions import DeliverableInput


class _ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DeliverableInputModel(_ToolInput):
    id: str = Field(description="Unique deliverable ID (e.g., DL-001)")
    description: str = Field(description="Clear description of the deliverable")
    acceptance_criteria: list[str] = Field(
        alias="acceptanceCriteria",
        description="List of verifiable completion conditions",
    )

    def to_input(self) -> DeliverableInput:
        return DeliverableInput(
            id=self.id,
            description=self.description,
            acceptance_criteria=tuple(self.acceptance_criteria),
        )


class CreateDeliverablesInput(_ToolInput):
    deliverables: list[DeliverableInputModel]


class SetDeliverableStatusInput(_ToolInput):
    deliverable_id: str = Field(alias="deliverableId")
    # Checked by the transition so the agent gets the domain error message.
    status: str


class DeliverableIdInput(_ToolInput):
    deliverable_id: str = Field(alias="deliverableId")


class ListFilterInput(_ToolInput):
    status: DeliverableState | None = None
    verified: bool | None = None


class ListDeliverablesInput(_ToolInput):
    filter: ListFilterInput | None = None
    limit: int | None = Field(default=None, ge=0)

    def to_filter(self) -> DeliverableFilter:
        if self.filter is None:
            return DeliverableFilter()
        return DeliverableFilter(status=self.filter.status, verified=self.filter.verified)


def describe_validation_error(error: pydantic.ValidationError) -> str:
    """One-line summary of a pydantic error, suitable for an agent to act on."""

    parts: list[str] = []
    for item in error.errors(include_url=False):
        location = ".".join(str(p) for p in item.get("loc", ())) or "input"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "Invalid input: " + "; ".join(parts)
