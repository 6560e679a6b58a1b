"""DeliverableStatus aggregate root.

The aggregate is a value: every change produces a new instance and nothing
holds a mutable reference into it. Loading and saving are the repository's
job (see `autonoe_deliverables.persistence`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from .deliverable import Deliverable


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def first_duplicate_id(ids: Iterable[str]) -> str | None:
    seen: set[str] = set()
    for deliverable_id in ids:
        if deliverable_id in seen:
            return deliverable_id
        seen.add(deliverable_id)
    return None


@dataclass(frozen=True, slots=True)
class DeliverableStatus:
    created_at: datetime
    updated_at: datetime
    deliverables: tuple[Deliverable, ...] = ()

    def __post_init__(self) -> None:
        duplicate = first_duplicate_id(d.id for d in self.deliverables)
        if duplicate is not None:
            raise ValueError(f'Duplicate deliverable ID "{duplicate}" in aggregate')

    @staticmethod
    def empty(now: datetime | None = None) -> DeliverableStatus:
        stamp = now or utc_now()
        return DeliverableStatus(created_at=stamp, updated_at=stamp, deliverables=())

    @property
    def active_deliverables(self) -> tuple[Deliverable, ...]:
        """Deliverables that have not been deprecated, in insertion order."""

        return tuple(d for d in self.deliverables if not d.deprecated)

    def index_of(self, deliverable_id: str) -> int | None:
        for idx, deliverable in enumerate(self.deliverables):
            if deliverable.id == deliverable_id:
                return idx
        return None

    def find(self, deliverable_id: str) -> Deliverable | None:
        idx = self.index_of(deliverable_id)
        return None if idx is None else self.deliverables[idx]

    def count_passed(self) -> int:
        return sum(1 for d in self.active_deliverables if d.passed)

    def count_blocked(self) -> int:
        return sum(1 for d in self.active_deliverables if d.blocked)

    def all_achievable_passed(self) -> bool:
        """True when every active, non-blocked deliverable has passed.

        An aggregate with nothing achievable is never considered complete.
        """

        achievable = [d for d in self.active_deliverables if not d.blocked]
        if not achievable:
            return False
        return all(d.passed for d in achievable)

    def all_blocked(self) -> bool:
        active = self.active_deliverables
        if not active:
            return False
        return all(d.blocked for d in active)

    def with_deliverables(self, deliverables: tuple[Deliverable, ...]) -> DeliverableStatus:
        return replace(self, deliverables=tuple(deliverables))

    def with_updated_at(self, updated_at: datetime) -> DeliverableStatus:
        return replace(self, updated_at=updated_at)

    def replace_at(self, index: int, deliverable: Deliverable) -> DeliverableStatus:
        items = self.deliverables
        return self.with_deliverables((*items[:index], deliverable, *items[index + 1 :]))
