"""Error taxonomy and the result payload returned to the invoking agent.

Every deliverable operation reports failure through a `ToolResult` rather than
raising. The exception classes below are raised inside the operations and
converted into results at their public edge, so the message an agent sees is
exactly the exception message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ID = "DUPLICATE_ID"
    NOT_FOUND = "NOT_FOUND"
    STATE_CONFLICT = "STATE_CONFLICT"


class DeliverableError(Exception):
    """Base class for recoverable deliverable operation failures."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_result(self) -> ToolResult:
        return ToolResult.failure(self.message, self.code)


class ValidationError(DeliverableError):
    """Malformed input or a duplicate id."""

    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(DeliverableError):
    """The referenced deliverable id is absent."""

    code = ErrorCode.NOT_FOUND


class StateConflictError(DeliverableError):
    """The deliverable exists but its state forbids the operation."""

    code = ErrorCode.STATE_CONFLICT


@dataclass(frozen=True, slots=True)
class ToolResult:
    success: bool
    message: str
    error: ErrorCode | None = None

    @staticmethod
    def ok(message: str) -> ToolResult:
        return ToolResult(success=True, message=message)

    @staticmethod
    def failure(message: str, error: ErrorCode = ErrorCode.VALIDATION_ERROR) -> ToolResult:
        return ToolResult(success=False, message=message, error=error)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"success": self.success, "message": self.message}
        if self.error is not None:
            out["error"] = self.error.value
        return out
