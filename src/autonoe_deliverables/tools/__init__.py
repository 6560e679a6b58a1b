"""Agent-facing deliverable tools.

Handlers drive load -> transition -> save against an explicitly supplied
repository; `DeliverableToolbox` exposes a named subset of them.
"""

from autonoe_deliverables.tools.handlers import (
    DeliverableStatusCallback,
    handle_create_deliverables,
    handle_deprecate_deliverable,
    handle_list_deliverables,
    handle_set_deliverable_status,
    handle_verify_deliverable,
)
from autonoe_deliverables.tools.toolbox import DeliverableToolbox

__all__ = [
    "DeliverableStatusCallback",
    "DeliverableToolbox",
    "handle_create_deliverables",
    "handle_deprecate_deliverable",
    "handle_list_deliverables",
    "handle_set_deliverable_status",
    "handle_verify_deliverable",
]
