"""Tests for command memory records."""

import uuid

import pytest

from home_gateway.services.memory import (
    DEFAULT_MAX_RECORDS,
    EMBEDDING_DIMENSIONS,
    InMemoryMemoryStore,
    build_command_memory,
    string_to_uuid,
)


def test_string_to_uuid_is_stable():
    value = string_to_uuid("user-1")
    assert value == string_to_uuid("user-1")
    assert value != string_to_uuid("user-2")
    assert uuid.UUID(value).version == 5


class TestBuildCommandMemory:
    """Test suite for build_command_memory()."""

    def test_fields(self):
        record = build_command_memory("turn off the fan", "user-1", "agent-1")

        assert record.content.text == "turn off the fan"
        assert record.content.source == "home-assistant"
        assert record.user_id == string_to_uuid("user-1")
        assert record.room_id == string_to_uuid("home-user-1")
        assert record.agent_id == "agent-1"
        assert len(record.embedding) == EMBEDDING_DIMENSIONS
        assert not any(record.embedding)
        assert record.created_at > 1_600_000_000_000

    def test_ids_are_unique(self):
        first = build_command_memory("a", "u", "agent")
        second = build_command_memory("a", "u", "agent")
        assert first.id != second.id

    def test_record_uses_camel_case(self):
        data = build_command_memory("a", "u", "agent").to_record()
        assert {"id", "userId", "agentId", "roomId", "content", "embedding", "createdAt"} <= set(data)
        assert data["content"] == {"text": "a", "source": "home-assistant"}


@pytest.mark.asyncio
async def test_in_memory_store():
    store = InMemoryMemoryStore()
    record = build_command_memory("a", "u", "agent").to_record()

    await store.create_memory(record)

    assert list(store.records) == [record]
    assert store.records.maxlen == DEFAULT_MAX_RECORDS


@pytest.mark.asyncio
async def test_in_memory_store_evicts_oldest():
    store = InMemoryMemoryStore(max_records=2)
    records = [build_command_memory(text, "u", "agent").to_record() for text in ("a", "b", "c")]

    for record in records:
        await store.create_memory(record)

    assert len(store.records) == 2
    assert list(store.records) == records[1:]
