"""Repository protocols for the deliverable aggregate.

Concrete storage lives outside this package. Only an in-memory repository is
provided here; it keeps the *encoded* form so that every load and save goes
through the same flattening a real store would use.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

from autonoe_deliverables.domain.status import DeliverableStatus

from .records import decode_status, encode_status

logger = logging.getLogger(__name__)


class DeliverableStatusReader(Protocol):
    """Read-only access, e.g. for loop termination checks."""

    async def exists(self) -> bool: ...

    async def load(self) -> DeliverableStatus: ...


class DeliverableRepository(DeliverableStatusReader, Protocol):
    async def save(self, status: DeliverableStatus) -> None: ...


class NullDeliverableStatusReader:
    """Reader used when no status has been configured: nothing exists."""

    async def exists(self) -> bool:
        return False

    async def load(self) -> DeliverableStatus:
        return DeliverableStatus.empty()


class InMemoryDeliverableRepository:
    """Process-local repository holding the persisted record shape.

    No locking is performed: concurrent writers race and the last save wins.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] | None = copy.deepcopy(initial)
        self.save_count = 0

    @property
    def data(self) -> dict[str, Any] | None:
        """A copy of the currently persisted record."""

        return copy.deepcopy(self._data)

    async def exists(self) -> bool:
        return self._data is not None

    async def load(self) -> DeliverableStatus:
        if self._data is None:
            logger.debug("No persisted deliverable status; starting empty")
            return DeliverableStatus.empty()
        return decode_status(self._data)

    async def save(self, status: DeliverableStatus) -> None:
        self._data = encode_status(status)
        self.save_count += 1
        logger.debug(
            "Deliverable status saved",
            extra={"deliverables": len(status.deliverables), "save_count": self.save_count},
        )
