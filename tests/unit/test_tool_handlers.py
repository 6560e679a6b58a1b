"""Unit tests for the async deliverable tool handlers.

The handlers must save only after a successful transition and fire the status
notification exactly once per successful status change.
"""

from __future__ import annotations

import pydantic
import pytest

from autonoe_deliverables.domain import DeliverableState
from autonoe_deliverables.operations import DeliverableStatusNotification, VerificationTracker
from autonoe_deliverables.persistence import InMemoryDeliverableRepository
from autonoe_deliverables.tools import (
    handle_create_deliverables,
    handle_deprecate_deliverable,
    handle_list_deliverables,
    handle_set_deliverable_status,
    handle_verify_deliverable,
)


def _create_args(*ids: str) -> dict[str, object]:
    return {
        "deliverables": [
            {"id": i, "description": f"Deliverable {i}", "acceptanceCriteria": ["a"]} for i in ids
        ]
    }


@pytest.mark.asyncio
async def test_status_change_notifications(repository: InMemoryDeliverableRepository) -> None:
    received: list[DeliverableStatusNotification] = []

    created = await handle_create_deliverables(
        repository,
        {"deliverables": [{"id": "DL-001", "description": "X", "acceptanceCriteria": ["a"]}]},
    )
    assert created == {"success": True, "message": "Created 1 deliverable(s)"}

    await handle_set_deliverable_status(
        repository, {"deliverableId": "DL-001", "status": "passed"}, received.append
    )
    await handle_set_deliverable_status(
        repository, {"deliverableId": "DL-001", "status": "pending"}, received.append
    )

    assert [n.to_json() for n in received] == [
        {
            "deliverableId": "DL-001",
            "deliverableDescription": "X",
            "previousStatus": "pending",
            "newStatus": "passed",
        },
        {
            "deliverableId": "DL-001",
            "deliverableDescription": "X",
            "previousStatus": "passed",
            "newStatus": "pending",
        },
    ]
    assert repository.save_count == 3


@pytest.mark.asyncio
async def test_failed_status_change_does_not_save_or_notify(
    mixed_repository: InMemoryDeliverableRepository,
) -> None:
    received: list[DeliverableStatusNotification] = []

    missing = await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "DL-999", "status": "passed"}, received.append
    )
    deprecated = await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "DL-004", "status": "passed"}, received.append
    )

    assert missing["success"] is False
    assert missing["error"] == "NOT_FOUND"
    assert deprecated["success"] is False
    assert deprecated["error"] == "STATE_CONFLICT"
    assert received == []
    assert mixed_repository.save_count == 0


@pytest.mark.asyncio
async def test_create_failure_does_not_save(mixed_repository: InMemoryDeliverableRepository) -> None:
    result = await handle_create_deliverables(mixed_repository, _create_args("DL-010", "DL-001"))

    assert result["success"] is False
    assert result["message"] == 'Deliverable "DL-001" already exists'
    assert mixed_repository.save_count == 0
    assert len((await mixed_repository.load()).deliverables) == 4


@pytest.mark.asyncio
async def test_invalid_arguments_are_reported(repository: InMemoryDeliverableRepository) -> None:
    result = await handle_create_deliverables(repository, {"deliverables": [{"id": "DL-001"}]})

    assert result["success"] is False
    assert result["error"] == "VALIDATION_ERROR"
    assert str(result["message"]).startswith("Invalid input: ")
    assert repository.save_count == 0


@pytest.mark.asyncio
async def test_invalid_status_value(mixed_repository: InMemoryDeliverableRepository) -> None:
    result = await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "DL-001", "status": "done"}
    )

    assert result == {
        "success": False,
        "message": 'Invalid status "done". Must be pending, passed, or blocked',
        "error": "VALIDATION_ERROR",
    }


@pytest.mark.asyncio
async def test_deprecate_persists_and_rejects_second_call(
    mixed_repository: InMemoryDeliverableRepository,
) -> None:
    first = await handle_deprecate_deliverable(mixed_repository, {"deliverableId": "DL-001"})
    second = await handle_deprecate_deliverable(mixed_repository, {"deliverableId": "DL-001"})

    assert first["success"] is True
    assert second["success"] is False
    assert "already deprecated" in str(second["message"])
    assert mixed_repository.save_count == 1

    status = await mixed_repository.load()
    d = status.find("DL-001")
    assert d is not None and d.deprecated and d.deprecated_at is not None


@pytest.mark.asyncio
async def test_list_applies_default_limit(repository: InMemoryDeliverableRepository) -> None:
    ids = [f"DL-00{i}" for i in range(1, 8)]
    await handle_create_deliverables(repository, _create_args(*ids))

    default = await handle_list_deliverables(repository, None, {})
    explicit = await handle_list_deliverables(repository, None, {"limit": 3})

    assert default["success"] is True
    assert [d["id"] for d in default["deliverables"]] == ids[:5]  # type: ignore[union-attr]
    assert [d["id"] for d in explicit["deliverables"]] == ids[:3]  # type: ignore[union-attr]
    assert explicit["message"] == "Found 3 deliverable(s)"


@pytest.mark.asyncio
async def test_list_filters_and_echoes(mixed_repository: InMemoryDeliverableRepository) -> None:
    tracker = VerificationTracker.from_status(await mixed_repository.load())
    tracker.verify("DL-003")

    result = await handle_list_deliverables(
        mixed_repository,
        tracker,
        {"filter": {"status": "blocked", "verified": True}, "limit": 10},
    )

    assert [d["id"] for d in result["deliverables"]] == ["DL-003"]  # type: ignore[union-attr]
    assert result["filter"] == {"status": "blocked", "verified": True}


@pytest.mark.asyncio
async def test_list_rejects_negative_limit(mixed_repository: InMemoryDeliverableRepository) -> None:
    result = await handle_list_deliverables(mixed_repository, None, {"limit": -1})

    assert result["success"] is False
    assert result["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_verify_handler() -> None:
    tracker = VerificationTracker.from_ids(["DL-001"])

    ok = await handle_verify_deliverable(tracker, {"deliverableId": "DL-001"})
    missing = await handle_verify_deliverable(tracker, {"deliverableId": "DL-002"})

    assert ok == {"success": True, "message": "Deliverable DL-001 marked as verified"}
    assert missing["success"] is False
    assert "not found" in str(missing["message"])
    assert tracker.is_verified("DL-001")
    assert not tracker.is_verified("DL-002")


@pytest.mark.asyncio
async def test_blocked_then_pending_via_handlers(
    mixed_repository: InMemoryDeliverableRepository,
) -> None:
    await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "DL-001", "status": "blocked"}
    )
    await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "DL-001", "status": "pending"}
    )

    d = (await mixed_repository.load()).find("DL-001")
    assert d is not None
    assert d.state is DeliverableState.PENDING


@pytest.mark.asyncio
async def test_blank_deliverable_id_is_a_validation_error(
    mixed_repository: InMemoryDeliverableRepository,
) -> None:
    received: list[DeliverableStatusNotification] = []

    set_result = await handle_set_deliverable_status(
        mixed_repository, {"deliverableId": "", "status": "passed"}, received.append
    )
    deprecate_result = await handle_deprecate_deliverable(
        mixed_repository, {"deliverableId": " "}
    )

    expected = {
        "success": False,
        "message": "Deliverable ID is required",
        "error": "VALIDATION_ERROR",
    }
    assert set_result == expected
    assert deprecate_result == expected
    assert received == []
    assert mixed_repository.save_count == 0


@pytest.mark.asyncio
async def test_stored_duplicate_ids_fail_before_any_change() -> None:
    record = {"id": "DL-001", "description": "X", "acceptanceCriteria": ["a"]}
    repository = InMemoryDeliverableRepository(
        {"createdAt": "2025-01-14", "updatedAt": "2025-01-14", "deliverables": [record, record]}
    )

    with pytest.raises(pydantic.ValidationError):
        await handle_set_deliverable_status(
            repository, {"deliverableId": "DL-001", "status": "passed"}
        )
    assert repository.save_count == 0
