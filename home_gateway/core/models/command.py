"""Command models.

ParsedCommand is what the text parser extracts from an utterance.
DeviceCommand is the vendor-shaped instruction derived from it.
CommandResult is what the orchestrator hands back to its caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommandName(str, Enum):
    """Closed set of commands the parser can produce."""

    TURN_ON = "turnOn"
    TURN_OFF = "turnOff"
    SET_BRIGHTNESS = "setBrightness"
    SET_TEMPERATURE = "setTemperature"
    SET_COLOR = "setColor"
    LOCK = "lock"
    UNLOCK = "unlock"
    OPEN = "open"
    CLOSE = "close"


class CommandArgs(BaseModel):
    """Single captured argument of a parsed command."""

    model_config = ConfigDict(frozen=True)

    value: str


class ParsedCommand(BaseModel):
    """Structured command extracted from free text.

    Examples:
        >>> ParsedCommand(command=CommandName.SET_BRIGHTNESS, args=CommandArgs(value="40"))
    """

    model_config = ConfigDict(frozen=True)

    command: CommandName

    args: CommandArgs | None = None


class DeviceCommand(BaseModel):
    """Vendor-API-shaped command for a single device.

    ``device_id`` is left empty by the mapper and bound later by the
    orchestrator once the target device has been resolved.
    """

    model_config = ConfigDict(frozen=True)

    device_id: str | None = Field(default=None, description="Target device id")

    component: str = Field(default="main", description="Device component")

    capability: str = Field(..., description="Vendor capability id")

    command: str = Field(..., description="Capability command")

    arguments: list[Any] | None = Field(
        default=None,
        description="Positional command arguments",
    )

    def bind(self, device_id: str) -> DeviceCommand:
        """Return a copy targeting a specific device."""
        return self.model_copy(update={"device_id": device_id})

    def to_payload(self) -> dict[str, Any]:
        """Render the command body entry for ``POST /devices/{id}/commands``."""
        payload: dict[str, Any] = {
            "component": self.component,
            "capability": self.capability,
            "command": self.command,
        }
        if self.arguments is not None:
            payload["arguments"] = self.arguments
        return payload


class CommandResult(BaseModel):
    """Outcome of a completed command pipeline."""

    success: bool = Field(..., description="Whether the command completed")

    message: str = Field(..., description="User-facing confirmation")

    data: Any = Field(default=None, description="Raw execution result")

    device_id: str | None = Field(default=None, description="Device that was targeted")
