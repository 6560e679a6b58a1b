"""Persistence boundary for the deliverable aggregate."""

from autonoe_deliverables.persistence.records import (
    DeliverableRecord,
    DeliverableStatusRecord,
    decode_status,
    encode_status,
)
from autonoe_deliverables.persistence.repository import (
    DeliverableRepository,
    DeliverableStatusReader,
    InMemoryDeliverableRepository,
    NullDeliverableStatusReader,
)

__all__ = [
    "DeliverableRecord",
    "DeliverableRepository",
    "DeliverableStatusReader",
    "DeliverableStatusRecord",
    "InMemoryDeliverableRepository",
    "NullDeliverableStatusReader",
    "decode_status",
    "encode_status",
]
