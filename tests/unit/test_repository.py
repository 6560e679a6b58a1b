"""Unit tests for the in-memory repository and the null reader."""

from __future__ import annotations

import pytest

from autonoe_deliverables.domain import DeliverableStatus
from autonoe_deliverables.persistence import (
    InMemoryDeliverableRepository,
    NullDeliverableStatusReader,
)


@pytest.mark.asyncio
async def test_load_without_data_returns_empty(repository: InMemoryDeliverableRepository) -> None:
    assert await repository.exists() is False

    status = await repository.load()

    assert status.deliverables == ()
    assert repository.save_count == 0


@pytest.mark.asyncio
async def test_save_then_load_roundtrip(
    repository: InMemoryDeliverableRepository, mixed_status: DeliverableStatus
) -> None:
    await repository.save(mixed_status)

    assert await repository.exists() is True
    assert repository.save_count == 1
    assert await repository.load() == mixed_status

    data = repository.data
    assert data is not None
    assert [d["id"] for d in data["deliverables"]] == ["DL-001", "DL-002", "DL-003", "DL-004"]


@pytest.mark.asyncio
async def test_save_overwrites(
    repository: InMemoryDeliverableRepository,
    mixed_status: DeliverableStatus,
    empty_status: DeliverableStatus,
) -> None:
    await repository.save(mixed_status)
    await repository.save(empty_status)

    assert (await repository.load()).deliverables == ()
    assert repository.save_count == 2


@pytest.mark.asyncio
async def test_data_is_a_copy(mixed_repository: InMemoryDeliverableRepository) -> None:
    data = mixed_repository.data
    assert data is not None
    data["deliverables"].clear()

    assert len((await mixed_repository.load()).deliverables) == 4


@pytest.mark.asyncio
async def test_null_reader() -> None:
    reader = NullDeliverableStatusReader()

    assert await reader.exists() is False
    assert (await reader.load()).deliverables == ()
