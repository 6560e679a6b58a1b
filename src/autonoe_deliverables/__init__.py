"""Autonoe deliverable tracking.

Tracks the deliverables of an autonomous coding-agent session:
- an immutable aggregate with pending/passed/blocked status and deprecation
- pure transition functions returning a result instead of raising
- a session-scoped verification tracker
- async tool handlers over an injected repository
"""

__version__ = "0.1.0"

from autonoe_deliverables.config import DeliverableSettings
from autonoe_deliverables.domain import Deliverable, DeliverableState, DeliverableStatus
from autonoe_deliverables.operations import VerificationTracker

__all__ = [
    "__version__",
    "Deliverable",
    "DeliverableSettings",
    "DeliverableState",
    "DeliverableStatus",
    "VerificationTracker",
]
