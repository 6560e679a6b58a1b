"""Configuration for the deliverable tools.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from autonoe_deliverables.tool_sets import DELIVERABLE_TOOL_SETS


class DeliverableSettings(BaseSettings):
    """Settings for the deliverable tool adapter.

    Environment variables:
    - LOG_LEVEL                (optional)
    - LOG_JSON                 (optional)
    - DELIVERABLE_LIST_LIMIT   (optional)
    - DELIVERABLE_TOOL_SERVER  (optional)
    - DELIVERABLE_TOOL_SET     (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `DeliverableSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Emit JSON log lines (false: plain text lines)",
    )

    list_default_limit: int = Field(
        default=5,
        ge=1,
        validation_alias="DELIVERABLE_LIST_LIMIT",
        description="Number of deliverables returned by `list` when no limit is given",
    )

    tool_server_name: str = Field(
        default="autonoe",
        validation_alias="DELIVERABLE_TOOL_SERVER",
        description="Server name used to qualify tool names (mcp__<server>__<tool>)",
    )

    default_tool_set: str = Field(
        default="coding",
        validation_alias="DELIVERABLE_TOOL_SET",
        description="Tool set exposed when none is requested explicitly",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("default_tool_set")
    @classmethod
    def _known_tool_set(cls, value: str) -> str:
        if value not in DELIVERABLE_TOOL_SETS:
            known = ", ".join(sorted(DELIVERABLE_TOOL_SETS))
            raise ValueError(f"Unknown tool set {value!r} (expected one of: {known})")
        return value

    @field_validator("tool_server_name")
    @classmethod
    def _non_blank_server(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("DELIVERABLE_TOOL_SERVER must not be blank")
        return value.strip()
