"""Deliverable domain model: entity, aggregate and error/result types."""

from autonoe_deliverables.domain.deliverable import Deliverable, DeliverableState
from autonoe_deliverables.domain.errors import (
    DeliverableError,
    ErrorCode,
    NotFoundError,
    StateConflictError,
    ToolResult,
    ValidationError,
)
from autonoe_deliverables.domain.status import DeliverableStatus, utc_now

__all__ = [
    "Deliverable",
    "DeliverableError",
    "DeliverableState",
    "DeliverableStatus",
    "ErrorCode",
    "NotFoundError",
    "StateConflictError",
    "ToolResult",
    "ValidationError",
    "utc_now",
]
