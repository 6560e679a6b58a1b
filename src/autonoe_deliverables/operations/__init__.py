"""Operations over the deliverable aggregate.

- Transitions: batch create, set status, deprecate (pure, value-in/value-out)
- Listing: filter + limit, optionally against a verification tracker
- Verification: a session-scoped tracker of checked deliverables
"""

from autonoe_deliverables.operations.listing import (
    DeliverableFilter,
    ListResult,
    list_deliverables,
)
from autonoe_deliverables.operations.transitions import (
    DeliverableInput,
    DeliverableStatusNotification,
    TransitionOutcome,
    create_deliverables,
    deprecate_deliverable,
    parse_state,
    set_deliverable_status,
)
from autonoe_deliverables.operations.verification import VerificationTracker

__all__ = [
    "DeliverableFilter",
    "DeliverableInput",
    "DeliverableStatusNotification",
    "ListResult",
    "TransitionOutcome",
    "VerificationTracker",
    "create_deliverables",
    "deprecate_deliverable",
    "list_deliverables",
    "parse_state",
    "set_deliverable_status",
]
