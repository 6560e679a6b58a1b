from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class DeliverableToolName(str, Enum):
    CREATE = "create"
    SET_STATUS = "set_status"
    DEPRECATE = "deprecate"
    VERIFY = "verify"
    LIST = "list"


# Each agent phase only sees the tools it needs.
DELIVERABLE_TOOL_SETS: dict[str, tuple[DeliverableToolName, ...]] = {
    "initializer": (DeliverableToolName.CREATE,),
    "coding": (DeliverableToolName.SET_STATUS, DeliverableToolName.LIST),
    "sync": (
        DeliverableToolName.CREATE,
        DeliverableToolName.DEPRECATE,
        DeliverableToolName.LIST,
    ),
    "verify": (
        DeliverableToolName.SET_STATUS,
        DeliverableToolName.VERIFY,
        DeliverableToolName.LIST,
    ),
}


def resolve_tool_set(
    tool_set: str | Sequence[str | DeliverableToolName],
) -> tuple[DeliverableToolName, ...]:
    """Turn a tool-set name or an explicit list of tool names into tool names.

    Raises:
        ValueError: for an unknown set name or tool name.
    """

    if isinstance(tool_set, str):
        try:
            return DELIVERABLE_TOOL_SETS[tool_set]
        except KeyError:
            raise ValueError(f"Unknown tool set: {tool_set!r}") from None

    names: list[DeliverableToolName] = []
    for name in tool_set:
        try:
            resolved = DeliverableToolName(name)
        except ValueError:
            raise ValueError(f"Unknown deliverable tool: {name!r}") from None
        if resolved not in names:
            names.append(resolved)
    return tuple(names)


def qualified_tool_name(server_name: str, tool: DeliverableToolName) -> str:
    return f"mcp__{server_name}__{tool.value}"
