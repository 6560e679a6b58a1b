from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TextIO

from autonoe_deliverables.config import DeliverableSettings
from autonoe_deliverables.domain.errors import ErrorCode, ToolResult
from autonoe_deliverables.logging import configure_logging
from autonoe_deliverables.operations.verification import VerificationTracker
from autonoe_deliverables.persistence.repository import DeliverableRepository
from autonoe_deliverables.tool_sets import (
    DeliverableToolName,
    qualified_tool_name,
    resolve_tool_set,
)

from .handlers import (
    DeliverableStatusCallback,
    handle_create_deliverables,
    handle_deprecate_deliverable,
    handle_list_deliverables,
    handle_set_deliverable_status,
    handle_verify_deliverable,
)

logger = logging.getLogger(__name__)


class DeliverableToolbox:
    """The deliverable tools exposed to one agent session.

    The repository, tracker and status callback are passed in explicitly; the
    toolbox holds no other state.
    """

    def __init__(
        self,
        repository: DeliverableRepository,
        *,
        tool_set: str | Sequence[str | DeliverableToolName] | None = None,
        on_status_change: DeliverableStatusCallback | None = None,
        verification_tracker: VerificationTracker | None = None,
        settings: DeliverableSettings | None = None,
    ) -> None:
        self._settings = settings or DeliverableSettings()
        self._repository = repository
        self._on_status_change = on_status_change
        self._tracker = verification_tracker
        self.tools = resolve_tool_set(
            tool_set if tool_set is not None else self._settings.default_tool_set
        )

        logger.debug(
            "Deliverable toolbox ready",
            extra={"tools": [t.value for t in self.tools]},
        )

    @classmethod
    def open_session(
        cls,
        repository: DeliverableRepository,
        *,
        tool_set: str | Sequence[str | DeliverableToolName] | None = None,
        on_status_change: DeliverableStatusCallback | None = None,
        verification_tracker: VerificationTracker | None = None,
        settings: DeliverableSettings | None = None,
        log_stream: TextIO | None = None,
    ) -> DeliverableToolbox:
        """Set up an agent session: configure logging from settings, then build the toolbox."""

        resolved = settings or DeliverableSettings()
        configure_logging(resolved.log_level, json_output=resolved.log_json, stream=log_stream)
        toolbox = cls(
            repository,
            tool_set=tool_set,
            on_status_change=on_status_change,
            verification_tracker=verification_tracker,
            settings=resolved,
        )
        logger.info(
            "Deliverable session opened",
            extra={
                "allowed_tools": toolbox.allowed_tools,
                "verification": verification_tracker is not None,
            },
        )
        return toolbox

    @property
    def allowed_tools(self) -> list[str]:
        """Fully qualified tool names, as the agent runtime expects them."""

        return [qualified_tool_name(self._settings.tool_server_name, t) for t in self.tools]

    async def call(
        self, tool: str | DeliverableToolName, arguments: Mapping[str, Any] | None = None
    ) -> dict[str, object]:
        args: Mapping[str, Any] = arguments or {}
        try:
            name = DeliverableToolName(tool)
        except ValueError:
            return ToolResult.failure(f"Unknown tool: {tool}", ErrorCode.NOT_FOUND).to_json()

        if name not in self.tools:
            return ToolResult.failure(
                f"Tool {name.value} is not available in this session", ErrorCode.VALIDATION_ERROR
            ).to_json()

        if name is DeliverableToolName.CREATE:
            return await handle_create_deliverables(self._repository, args)
        if name is DeliverableToolName.SET_STATUS:
            return await handle_set_deliverable_status(
                self._repository, args, self._on_status_change
            )
        if name is DeliverableToolName.DEPRECATE:
            return await handle_deprecate_deliverable(self._repository, args)
        if name is DeliverableToolName.VERIFY:
            if self._tracker is None:
                return ToolResult.failure(
                    "Verification tracker not available", ErrorCode.VALIDATION_ERROR
                ).to_json()
            return await handle_verify_deliverable(self._tracker, args)
        return await handle_list_deliverables(
            self._repository,
            self._tracker,
            args,
            default_limit=self._settings.list_default_limit,
        )
