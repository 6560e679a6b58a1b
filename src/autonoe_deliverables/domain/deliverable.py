from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class DeliverableState(str, Enum):
    """Three-way deliverable status.

    Persisted as two booleans (passed/blocked); the enum makes the
    passed-and-blocked combination unrepresentable in memory.
    """

    PENDING = "pending"
    PASSED = "passed"
    BLOCKED = "blocked"

    @staticmethod
    def from_flags(*, passed: bool, blocked: bool) -> DeliverableState:
        if passed:
            return DeliverableState.PASSED
        if blocked:
            return DeliverableState.BLOCKED
        return DeliverableState.PENDING


@dataclass(frozen=True, slots=True)
class Deliverable:
    """A verifiable work unit with acceptance criteria.

    Deprecated deliverables stay in the aggregate but are frozen: their status
    can no longer change and they cannot be un-deprecated.
    """

    id: str
    description: str
    acceptance_criteria: tuple[str, ...]
    state: DeliverableState = DeliverableState.PENDING
    deprecated: bool = False
    deprecated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.deprecated_at is not None and not self.deprecated:
            raise ValueError(f'Deliverable "{self.id}" has deprecated_at but is not deprecated')

    @staticmethod
    def pending(
        id: str,  # noqa: A002
        description: str,
        acceptance_criteria: Sequence[str],
    ) -> Deliverable:
        return Deliverable(
            id=id, description=description, acceptance_criteria=tuple(acceptance_criteria)
        )

    @property
    def passed(self) -> bool:
        return self.state is DeliverableState.PASSED

    @property
    def blocked(self) -> bool:
        return self.state is DeliverableState.BLOCKED

    def with_state(self, state: DeliverableState) -> Deliverable:
        return replace(self, state=state)

    def deprecate(self, at: datetime) -> Deliverable:
        return replace(self, deprecated=True, deprecated_at=at)
