"""Test configuration and fixtures."""

import logging
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from autonoe_deliverables.config import DeliverableSettings
from autonoe_deliverables.domain import Deliverable, DeliverableState, DeliverableStatus
from autonoe_deliverables.persistence import InMemoryDeliverableRepository, encode_status

T0 = datetime(2025, 1, 14, 9, 0, tzinfo=UTC)


@pytest.fixture
def created_at() -> datetime:
    return T0


@pytest.fixture
def empty_status() -> DeliverableStatus:
    """Provide an empty aggregate with fixed timestamps."""
    return DeliverableStatus.empty(now=T0)


@pytest.fixture
def mixed_status() -> DeliverableStatus:
    """Provide one pending, one passed, one blocked and one deprecated deliverable."""
    return DeliverableStatus(
        created_at=T0,
        updated_at=T0,
        deliverables=(
            Deliverable.pending("DL-001", "Pending work", ["a"]),
            Deliverable.pending("DL-002", "Finished work", ["b"]).with_state(
                DeliverableState.PASSED
            ),
            Deliverable.pending("DL-003", "Stuck work", ["c"]).with_state(
                DeliverableState.BLOCKED
            ),
            Deliverable.pending("DL-004", "Dropped work", ["d"]).deprecate(T0),
        ),
    )


@pytest.fixture
def repository() -> InMemoryDeliverableRepository:
    """Provide an empty in-memory repository."""
    return InMemoryDeliverableRepository()


@pytest.fixture
def mixed_repository(mixed_status: DeliverableStatus) -> InMemoryDeliverableRepository:
    """Provide a repository pre-populated with `mixed_status`."""
    return InMemoryDeliverableRepository(encode_status(mixed_status))


@pytest.fixture
def settings() -> DeliverableSettings:
    """Provide settings that ignore any local `.env`."""
    return DeliverableSettings(_env_file=None)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo any root-logger reconfiguration made by the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
