"""In-memory verification tracking for a single verification pass.

The tracker records which deliverables the agent has explicitly checked. It is
independent of the persisted pass/block status and is never saved.

The set of known ids is captured once at construction. A deliverable created
after that point cannot be verified through the same tracker instance.
"""

from __future__ import annotations

from collections.abc import Iterable

from autonoe_deliverables.domain.errors import ErrorCode, ToolResult
from autonoe_deliverables.domain.status import DeliverableStatus


class VerificationTracker:
    def __init__(self, deliverable_ids: Iterable[str]) -> None:
        # dict keeps first-seen order for unverified_ids()
        self._known: dict[str, None] = dict.fromkeys(deliverable_ids)
        self._verified: set[str] = set()

    @classmethod
    def from_ids(cls, ids: Iterable[str]) -> VerificationTracker:
        return cls(ids)

    @classmethod
    def from_status(cls, status: DeliverableStatus) -> VerificationTracker:
        """Track the active (non-deprecated) deliverables of `status`."""

        return cls(d.id for d in status.active_deliverables)

    @classmethod
    def empty(cls) -> VerificationTracker:
        return cls(())

    def verify(self, deliverable_id: str) -> ToolResult:
        if deliverable_id not in self._known:
            return ToolResult.failure(
                f"Deliverable {deliverable_id} not found in tracker", ErrorCode.NOT_FOUND
            )
        self._verified.add(deliverable_id)
        return ToolResult.ok(f"Deliverable {deliverable_id} marked as verified")

    def is_verified(self, deliverable_id: str) -> bool:
        return deliverable_id in self._verified

    def all_verified(self) -> bool:
        return len(self._verified) == len(self._known)

    def unverified_ids(self) -> list[str]:
        return [i for i in self._known if i not in self._verified]

    @property
    def verified_count(self) -> int:
        return len(self._verified)

    @property
    def total_count(self) -> int:
        return len(self._known)
