"""Async command handlers for the deliverable tools.

Each handler follows the same sequence: validate arguments, load the aggregate,
run a pure transition, save only if it succeeded, and return a JSON-ready
payload that is shown verbatim to the agent.

There is no locking between handlers. Two commands racing on the same
repository both load, both compute, and the later save wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import pydantic

from autonoe_deliverables.domain.errors import ErrorCode, ToolResult
from autonoe_deliverables.operations.listing import list_deliverables
from autonoe_deliverables.operations.transitions import (
    DeliverableStatusNotification,
    create_deliverables,
    deprecate_deliverable,
    set_deliverable_status,
)
from autonoe_deliverables.operations.verification import VerificationTracker
from autonoe_deliverables.persistence.repository import (
    DeliverableRepository,
    DeliverableStatusReader,
)

from .inputs import (
    CreateDeliverablesInput,
    DeliverableIdInput,
    ListDeliverablesInput,
    SetDeliverableStatusInput,
    describe_validation_error,
)

logger = logging.getLogger(__name__)

DeliverableStatusCallback = Callable[[DeliverableStatusNotification], None]

DEFAULT_LIST_LIMIT = 5

_M = TypeVar("_M", bound=pydantic.BaseModel)


class _InvalidArguments(Exception):
    def __init__(self, result: ToolResult) -> None:
        super().__init__(result.message)
        self.result = result


def _parse(model: type[_M], arguments: Mapping[str, Any] | _M) -> _M:
    if isinstance(arguments, model):
        return arguments
    try:
        return model.model_validate(arguments)
    except pydantic.ValidationError as e:
        raise _InvalidArguments(
            ToolResult.failure(describe_validation_error(e), ErrorCode.VALIDATION_ERROR)
        ) from e


async def handle_create_deliverables(
    repository: DeliverableRepository,
    arguments: Mapping[str, Any] | CreateDeliverablesInput,
) -> dict[str, object]:
    try:
        parsed = _parse(CreateDeliverablesInput, arguments)
    except _InvalidArguments as e:
        return e.result.to_json()

    status = await repository.load()
    outcome = create_deliverables(status, [d.to_input() for d in parsed.deliverables])

    if outcome.result.success:
        await repository.save(outcome.status)
        logger.info(
            "Deliverables created",
            extra={"created": [d.id for d in parsed.deliverables]},
        )
    else:
        logger.info("Deliverable creation rejected", extra={"reason": outcome.result.message})

    return outcome.result.to_json()


async def handle_set_deliverable_status(
    repository: DeliverableRepository,
    arguments: Mapping[str, Any] | SetDeliverableStatusInput,
    on_status_change: DeliverableStatusCallback | None = None,
) -> dict[str, object]:
    try:
        parsed = _parse(SetDeliverableStatusInput, arguments)
    except _InvalidArguments as e:
        return e.result.to_json()

    status = await repository.load()
    outcome = set_deliverable_status(status, parsed.deliverable_id, parsed.status)

    if not outcome.result.success:
        logger.info(
            "Deliverable status change rejected",
            extra={"deliverable_id": parsed.deliverable_id, "reason": outcome.result.message},
        )
        return outcome.result.to_json()

    await repository.save(outcome.status)
    notification = outcome.notification
    if notification is not None:
        logger.info(
            "Deliverable status changed",
            extra={
                "deliverable_id": notification.deliverable_id,
                "previous_status": notification.previous_status.value,
                "new_status": notification.new_status.value,
            },
        )
        if on_status_change is not None:
            on_status_change(notification)

    return outcome.result.to_json()


async def handle_deprecate_deliverable(
    repository: DeliverableRepository,
    arguments: Mapping[str, Any] | DeliverableIdInput,
) -> dict[str, object]:
    try:
        parsed = _parse(DeliverableIdInput, arguments)
    except _InvalidArguments as e:
        return e.result.to_json()

    status = await repository.load()
    outcome = deprecate_deliverable(status, parsed.deliverable_id)

    if outcome.result.success:
        await repository.save(outcome.status)
        logger.info("Deliverable deprecated", extra={"deliverable_id": parsed.deliverable_id})
    else:
        logger.info(
            "Deliverable deprecation rejected",
            extra={"deliverable_id": parsed.deliverable_id, "reason": outcome.result.message},
        )

    return outcome.result.to_json()


async def handle_verify_deliverable(
    tracker: VerificationTracker,
    arguments: Mapping[str, Any] | DeliverableIdInput,
) -> dict[str, object]:
    try:
        parsed = _parse(DeliverableIdInput, arguments)
    except _InvalidArguments as e:
        return e.result.to_json()

    result = tracker.verify(parsed.deliverable_id)
    logger.debug(
        "Deliverable verification",
        extra={"deliverable_id": parsed.deliverable_id, "verified": result.success},
    )
    return result.to_json()


async def handle_list_deliverables(
    repository: DeliverableStatusReader,
    tracker: VerificationTracker | None,
    arguments: Mapping[str, Any] | ListDeliverablesInput,
    *,
    default_limit: int = DEFAULT_LIST_LIMIT,
) -> dict[str, object]:
    try:
        parsed = _parse(ListDeliverablesInput, arguments)
    except _InvalidArguments as e:
        return e.result.to_json()

    status = await repository.load()
    limit = default_limit if parsed.limit is None else parsed.limit
    listing = list_deliverables(status, tracker=tracker, filter=parsed.to_filter(), limit=limit)
    result = ToolResult.ok(f"Found {len(listing.deliverables)} deliverable(s)")
    return {**result.to_json(), **listing.to_json()}
