"""Base classes for agent actions.

Actions are what the agent runtime invokes when a message passes an
action's keyword validation. Every handler returns an ActionResponse,
including on failure, so the user always gets a reply.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, Field

from home_gateway.core.errors import (
    CommandExecutionFailed,
    DiscoveryFailed,
    HomeGatewayError,
    InvalidCommandArgument,
    OperationTimeout,
    OracleError,
    TargetNotResolved,
    UnknownCommand,
    UnparseableCommand,
)

RESPONSE_SOURCE = "home-assistant"


class ActionMessage(BaseModel):
    """Incoming message handed to an action."""

    text: str = Field(..., description="Message text")
    user_id: str = Field(default="anonymous", description="Sender")
    device_id: str | None = Field(default=None, description="Explicit target device")


class ActionResponse(BaseModel):
    """Response envelope returned to the agent runtime."""

    text: str = Field(..., description="User-facing reply")
    action: str = Field(..., description="Response action tag")
    source: str = Field(default=RESPONSE_SOURCE)


ActionCallback = Callable[[ActionResponse], Awaitable[None]]


class BaseAction(ABC):
    """Abstract base class for agent actions."""

    similes: tuple[str, ...] = ()
    description: str = ""
    keywords: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Action identifier (e.g., 'CONTROL_DEVICE')."""
        pass

    def validate(self, message: ActionMessage) -> bool:
        """Check whether the message mentions any of the action's keywords."""
        text = message.text.lower()
        return any(keyword in text for keyword in self.keywords)

    @abstractmethod
    async def handler(
        self,
        message: ActionMessage,
        callback: ActionCallback | None = None,
    ) -> ActionResponse:
        """Handle a validated message."""
        pass

    async def _respond(self, response: ActionResponse, callback: ActionCallback | None) -> ActionResponse:
        if callback is not None:
            await callback(response)
        return response

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"


def describe_error(error: HomeGatewayError) -> str:
    """Turn a pipeline error into a short user-facing sentence."""
    if isinstance(error, UnparseableCommand):
        return "Sorry, I couldn't work out which device command you meant."
    if isinstance(error, UnknownCommand):
        return f"Sorry, I don't know how to perform '{error.command}'."
    if isinstance(error, InvalidCommandArgument):
        if error.value is None:
            return "Sorry, that command needs a value."
        return f"Sorry, '{error.value}' isn't a valid value for that command."
    if isinstance(error, TargetNotResolved):
        if error.candidates:
            return f"Sorry, I'm not sure which device you meant: {', '.join(error.candidates)}."
        return "Sorry, I couldn't tell which device you meant."
    if isinstance(error, CommandExecutionFailed):
        return f"Sorry, the device command failed: {error.cause}"
    if isinstance(error, OperationTimeout):
        return "Sorry, the smart home service took too long to respond."
    if isinstance(error, DiscoveryFailed):
        return f"Sorry, I couldn't reach your devices: {error.cause}"
    if isinstance(error, OracleError):
        return "Sorry, I couldn't process that request right now."
    return f"Sorry, something went wrong: {error}"
