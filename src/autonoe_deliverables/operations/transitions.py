"""Pure transition functions over the DeliverableStatus aggregate.

Each function takes the current aggregate and returns a `TransitionOutcome`:
the new aggregate plus a `ToolResult`. On failure the outcome carries the
input aggregate untouched, so a caller that only saves on
`outcome.result.success` can never persist a partial change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from autonoe_deliverables.domain.deliverable import Deliverable, DeliverableState
from autonoe_deliverables.domain.errors import (
    DeliverableError,
    ErrorCode,
    NotFoundError,
    StateConflictError,
    ToolResult,
    ValidationError,
)
from autonoe_deliverables.domain.status import DeliverableStatus, utc_now


@dataclass(frozen=True, slots=True)
class DeliverableInput:
    """One entry of a batch creation request."""

    id: str
    description: str
    acceptance_criteria: Sequence[str]


@dataclass(frozen=True, slots=True)
class DeliverableStatusNotification:
    """Payload delivered to status-change listeners."""

    deliverable_id: str
    deliverable_description: str
    previous_status: DeliverableState
    new_status: DeliverableState

    def to_json(self) -> dict[str, object]:
        return {
            "deliverableId": self.deliverable_id,
            "deliverableDescription": self.deliverable_description,
            "previousStatus": self.previous_status.value,
            "newStatus": self.new_status.value,
        }


@dataclass(frozen=True, slots=True)
class TransitionOutcome:
    status: DeliverableStatus
    result: ToolResult
    notification: DeliverableStatusNotification | None = None


def _require_text(value: str, message: str) -> None:
    if not value or not value.strip():
        raise ValidationError(message)


def _validate_input(item: DeliverableInput) -> None:
    _require_text(item.id, "Deliverable ID is required")
    _require_text(item.description, "Deliverable description is required")
    if not item.acceptance_criteria:
        raise ValidationError("At least one acceptance criterion is required")
    if any(not c or not c.strip() for c in item.acceptance_criteria):
        raise ValidationError("Acceptance criteria cannot be empty")


def _lookup(status: DeliverableStatus, deliverable_id: str) -> int:
    _require_text(deliverable_id, "Deliverable ID is required")
    idx = status.index_of(deliverable_id)
    if idx is None:
        raise NotFoundError(f'Deliverable "{deliverable_id}" not found')
    return idx


def parse_state(value: DeliverableState | str) -> DeliverableState:
    if isinstance(value, DeliverableState):
        return value
    try:
        return DeliverableState(value)
    except ValueError:
        raise ValidationError(
            f'Invalid status "{value}". Must be pending, passed, or blocked'
        ) from None


def _create(
    status: DeliverableStatus, inputs: Sequence[DeliverableInput], now: datetime
) -> TransitionOutcome:
    if not inputs:
        raise ValidationError("At least one deliverable is required")

    seen: set[str] = set()
    for item in inputs:
        if item.id in seen:
            raise ValidationError(
                f'Duplicate ID "{item.id}" in request', code=ErrorCode.DUPLICATE_ID
            )
        seen.add(item.id)

    created: list[Deliverable] = []
    for item in inputs:
        _validate_input(item)
        if status.index_of(item.id) is not None:
            raise ValidationError(
                f'Deliverable "{item.id}" already exists', code=ErrorCode.DUPLICATE_ID
            )
        created.append(Deliverable.pending(item.id, item.description, item.acceptance_criteria))

    updated = status.with_deliverables((*status.deliverables, *created)).with_updated_at(now)
    return TransitionOutcome(
        status=updated, result=ToolResult.ok(f"Created {len(created)} deliverable(s)")
    )


def _set_status(
    status: DeliverableStatus,
    deliverable_id: str,
    new_state: DeliverableState | str,
    now: datetime,
) -> TransitionOutcome:
    target = parse_state(new_state)
    idx = _lookup(status, deliverable_id)
    existing = status.deliverables[idx]
    if existing.deprecated:
        raise StateConflictError(
            f'Deliverable "{deliverable_id}" is deprecated and its status cannot be changed'
        )

    updated = status.replace_at(idx, existing.with_state(target)).with_updated_at(now)
    return TransitionOutcome(
        status=updated,
        result=ToolResult.ok(
            f'Deliverable "{existing.description}" ({existing.id}) marked as {target.value}'
        ),
        notification=DeliverableStatusNotification(
            deliverable_id=existing.id,
            deliverable_description=existing.description,
            previous_status=existing.state,
            new_status=target,
        ),
    )


def _deprecate(status: DeliverableStatus, deliverable_id: str, now: datetime) -> TransitionOutcome:
    idx = _lookup(status, deliverable_id)
    existing = status.deliverables[idx]
    if existing.deprecated:
        raise StateConflictError(f'Deliverable "{deliverable_id}" is already deprecated')

    updated = status.replace_at(idx, existing.deprecate(now)).with_updated_at(now)
    return TransitionOutcome(
        status=updated, result=ToolResult.ok(f'Deliverable "{deliverable_id}" deprecated')
    )


def create_deliverables(
    status: DeliverableStatus,
    inputs: Sequence[DeliverableInput],
    *,
    now: datetime | None = None,
) -> TransitionOutcome:
    """Append a batch of new pending deliverables, all or nothing."""

    try:
        return _create(status, inputs, now or utc_now())
    except DeliverableError as e:
        return TransitionOutcome(status=status, result=e.to_result())


def set_deliverable_status(
    status: DeliverableStatus,
    deliverable_id: str,
    new_state: DeliverableState | str,
    *,
    now: datetime | None = None,
) -> TransitionOutcome:
    """Set a deliverable's status absolutely; the previous status does not matter.

    The outcome carries the notification to deliver on success.
    """

    try:
        return _set_status(status, deliverable_id, new_state, now or utc_now())
    except DeliverableError as e:
        return TransitionOutcome(status=status, result=e.to_result())


def deprecate_deliverable(
    status: DeliverableStatus,
    deliverable_id: str,
    *,
    now: datetime | None = None,
) -> TransitionOutcome:
    """Permanently retire a deliverable while keeping its record."""

    try:
        return _deprecate(status, deliverable_id, now or utc_now())
    except DeliverableError as e:
        return TransitionOutcome(status=status, result=e.to_result())
