from __future__ import annotations

from dataclasses import dataclass

from autonoe_deliverables.domain.deliverable import Deliverable, DeliverableState
from autonoe_deliverables.domain.status import DeliverableStatus

from .verification import VerificationTracker


@dataclass(frozen=True, slots=True)
class DeliverableFilter:
    """Listing criteria; unset fields do not constrain the result."""

    status: DeliverableState | None = None
    verified: bool | None = None

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {}
        if self.status is not None:
            out["status"] = self.status.value
        if self.verified is not None:
            out["verified"] = self.verified
        return out


@dataclass(frozen=True, slots=True)
class ListResult:
    deliverables: tuple[Deliverable, ...]
    filter: DeliverableFilter

    def to_json(self) -> dict[str, object]:
        return {
            "deliverables": [
                {
                    "id": d.id,
                    "description": d.description,
                    "status": d.state.value,
                    "acceptanceCriteria": list(d.acceptance_criteria),
                }
                for d in self.deliverables
            ],
            "filter": self.filter.to_json(),
        }


def list_deliverables(
    status: DeliverableStatus,
    *,
    tracker: VerificationTracker | None = None,
    filter: DeliverableFilter | None = None,  # noqa: A002
    limit: int | None = None,
) -> ListResult:
    """Return active deliverables matching `filter`, in insertion order.

    Deprecated deliverables are never listed. The `verified` criterion is
    ignored when no tracker is supplied. `limit` is applied last.
    """

    criteria = filter or DeliverableFilter()
    matches = list(status.active_deliverables)

    if criteria.status is not None:
        matches = [d for d in matches if d.state is criteria.status]

    if criteria.verified is not None and tracker is not None:
        matches = [d for d in matches if tracker.is_verified(d.id) == criteria.verified]

    if limit is not None:
        matches = matches[: max(limit, 0)]

    return ListResult(deliverables=tuple(matches), filter=criteria)
