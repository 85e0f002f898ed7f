"""Agent runtime collaborator protocols.

The conversational runtime supplies an intent oracle, a completion
oracle and a message memory store. The gateway never implements the
runtime itself; it only calls through these interfaces.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class IntentDecision(str, Enum):
    """Answers the intent oracle can give."""

    RESPOND = "RESPOND"
    IGNORE = "IGNORE"
    STOP = "STOP"


@runtime_checkable
class IntentOracle(Protocol):
    """Decides whether a message is addressed to the home controller."""

    async def should_respond(self, template: str, variables: dict[str, Any]) -> IntentDecision:
        """Classify a message rendered into the should-respond template."""
        ...


@runtime_checkable
class CompletionOracle(Protocol):
    """Generates natural language from a template."""

    async def complete(self, template: str, variables: dict[str, Any]) -> str:
        """Render the template with variables and return generated text."""
        ...


@runtime_checkable
class MemoryStore(Protocol):
    """Append-only conversational memory."""

    async def create_memory(self, record: dict[str, Any]) -> None:
        """Persist a memory record."""
        ...
