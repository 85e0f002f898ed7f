"""Conversational memory records for handled commands.

Each command handed to the client is appended to the runtime's message
memory before it runs through the pipeline.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from collections import deque
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MEMORY_SOURCE = "home-assistant"
EMBEDDING_DIMENSIONS = int(os.getenv("EMBEDDING_DIMENSIONS", "384"))
DEFAULT_MAX_RECORDS = 1000


def string_to_uuid(value: str) -> str:
    """Derive a stable UUID from an arbitrary string."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, value))


class MemoryContent(BaseModel):
    """Text payload of a memory."""

    text: str
    source: str = MEMORY_SOURCE


class MemoryRecord(BaseModel):
    """A persisted conversational memory."""

    id: str
    user_id: str = Field(..., serialization_alias="userId")
    agent_id: str = Field(..., serialization_alias="agentId")
    room_id: str = Field(..., serialization_alias="roomId")
    content: MemoryContent
    embedding: list[float]
    created_at: int = Field(..., serialization_alias="createdAt")

    def to_record(self) -> dict[str, Any]:
        """Render with the runtime's camelCase field names."""
        return self.model_dump(by_alias=True)


def build_command_memory(command: str, user_id: str, agent_id: str) -> MemoryRecord:
    """Build the memory record for an incoming command.

    Args:
        command: Command text
        user_id: Requesting user
        agent_id: Agent the command is addressed to

    Returns:
        MemoryRecord with a zero embedding and epoch-millisecond timestamp
    """
    now_ms = int(time.time() * 1000)
    return MemoryRecord(
        id=string_to_uuid(f"command-{now_ms}-{uuid.uuid4().hex}"),
        user_id=string_to_uuid(user_id),
        agent_id=agent_id,
        room_id=string_to_uuid(f"home-{user_id}"),
        content=MemoryContent(text=command),
        embedding=[0.0] * EMBEDDING_DIMENSIONS,
        created_at=now_ms,
    )


class InMemoryMemoryStore:
    """Bounded process-local MemoryStore used when no runtime store is attached."""

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS) -> None:
        """Initialize store.

        Args:
            max_records: Records kept before the oldest are evicted
        """
        self.records: deque[dict[str, Any]] = deque(maxlen=max_records)

    async def create_memory(self, record: dict[str, Any]) -> None:
        self.records.append(record)
        logger.debug(f"Stored memory {record.get('id')}")
