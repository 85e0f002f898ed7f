"""Tests for HomeClient wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from home_gateway.client import HomeClient
from home_gateway.core.errors import ConfigValidationFailed
from home_gateway.models import Config
from home_gateway.services.llm_oracle import LLMOracle
from home_gateway.services.memory import InMemoryMemoryStore, string_to_uuid
from home_gateway.services.smartthings_api import SmartThingsApi


@pytest.fixture
def home_client(mock_config, mock_gateway, intent_oracle, completion_oracle) -> HomeClient:
    return HomeClient(
        mock_config,
        gateway=mock_gateway,
        intent_oracle=intent_oracle,
        completion_oracle=completion_oracle,
        memory_store=InMemoryMemoryStore(),
        agent_id="agent-1",
    )


class TestInitialize:
    """Test suite for HomeClient.initialize()."""

    @pytest.mark.asyncio
    async def test_registers_components(self, home_client):
        await home_client.initialize(start_polling=False)

        assert home_client.initialized
        assert home_client.actions.list_actions() == ["CONTROL_DEVICE", "DISCOVER_DEVICES"]
        assert home_client.providers.list_providers() == [
            "home-assistant-state",
            "device-state",
            "automation-state",
        ]
        assert len(home_client.capabilities) == 2
        assert not home_client.polling.running

    @pytest.mark.asyncio
    async def test_missing_token_refuses_to_initialize(self, monkeypatch, mock_gateway, intent_oracle, completion_oracle):
        monkeypatch.delenv("SMARTTHINGS_TOKEN", raising=False)
        client = HomeClient(
            Config(_env_file=None, smartthings_token=""),
            gateway=mock_gateway,
            intent_oracle=intent_oracle,
            completion_oracle=completion_oracle,
        )

        with pytest.raises(ConfigValidationFailed):
            await client.initialize(start_polling=False)

        assert not client.initialized

    @pytest.mark.asyncio
    async def test_runtime_setting_supplies_token(self, monkeypatch, mock_gateway, intent_oracle, completion_oracle):
        monkeypatch.delenv("SMARTTHINGS_TOKEN", raising=False)
        client = HomeClient(
            Config(_env_file=None),
            get_setting=lambda key: "runtime-token",
            gateway=mock_gateway,
            intent_oracle=intent_oracle,
            completion_oracle=completion_oracle,
        )

        await client.initialize(start_polling=False)

        assert client.initialized

    @pytest.mark.asyncio
    async def test_missing_llm_key_without_oracles(self, monkeypatch):
        monkeypatch.delenv("LLM_API_KEY", raising=False)
        client = HomeClient(Config(_env_file=None, smartthings_token="tok"))

        with pytest.raises(ConfigValidationFailed):
            await client.initialize(start_polling=False)

    @pytest.mark.asyncio
    async def test_builds_default_clients(self, mock_config):
        client = HomeClient(mock_config)

        await client.initialize(start_polling=False)

        assert isinstance(client.orchestrator.gateway, SmartThingsApi)
        assert isinstance(client.orchestrator.intent_oracle, LLMOracle)
        assert client.orchestrator.intent_oracle is client.orchestrator.completion_oracle
        await client.stop()

    @pytest.mark.asyncio
    async def test_loads_aliases(self, tmp_path, mock_gateway, intent_oracle, completion_oracle):
        path = tmp_path / "aliases.yaml"
        path.write_text("aliases:\n  porch: dev-porch\n")
        config = Config(_env_file=None, smartthings_token="tok", device_aliases_path=str(path))
        client = HomeClient(config, gateway=mock_gateway, intent_oracle=intent_oracle, completion_oracle=completion_oracle)

        await client.initialize(start_polling=False)
        result = await client.handle_command("turn on the porch", "user-1")

        assert result.device_id == "dev-porch"


class TestHandleCommand:
    """Test suite for HomeClient.handle_command()."""

    @pytest.mark.asyncio
    async def test_requires_initialize(self, home_client):
        with pytest.raises(RuntimeError):
            await home_client.handle_command("turn on the lamp", "user-1")

    @pytest.mark.asyncio
    async def test_records_memory_then_runs_pipeline(self, home_client, mock_gateway):
        await home_client.initialize(start_polling=False)

        result = await home_client.handle_command("turn off the kitchen fan", "user-1")

        records = home_client.memory_store.records
        assert len(records) == 1
        assert records[0]["content"]["text"] == "turn off the kitchen fan"
        assert records[0]["userId"] == string_to_uuid("user-1")
        assert records[0]["agentId"] == "agent-1"
        assert result.device_id == "0a9b3c2d-fan"
        mock_gateway.devices.execute_command.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_memory_recorded_even_when_declined(self, home_client, intent_oracle):
        from home_gateway.core.interfaces.runtime import IntentDecision

        intent_oracle.should_respond.return_value = IntentDecision.IGNORE
        await home_client.initialize(start_polling=False)

        assert await home_client.handle_command("what a nice day", "user-1") is None
        assert len(home_client.memory_store.records) == 1

    @pytest.mark.asyncio
    async def test_memory_failure_does_not_block_command(
        self, mock_config, mock_gateway, intent_oracle, completion_oracle
    ):
        memory_store = MagicMock()
        memory_store.create_memory = AsyncMock(side_effect=RuntimeError("db down"))
        client = HomeClient(
            mock_config,
            gateway=mock_gateway,
            intent_oracle=intent_oracle,
            completion_oracle=completion_oracle,
            memory_store=memory_store,
        )
        await client.initialize(start_polling=False)

        result = await client.handle_command("turn off the kitchen fan", "user-1")

        assert result.device_id == "0a9b3c2d-fan"
        memory_store.create_memory.assert_awaited_once()
        mock_gateway.devices.execute_command.assert_awaited_once()


class TestStop:
    """Test suite for HomeClient.stop()."""

    @pytest.mark.asyncio
    async def test_stops_polling(self, home_client):
        await home_client.initialize()
        assert home_client.polling.running

        await home_client.stop()

        assert not home_client.polling.running

    @pytest.mark.asyncio
    async def test_does_not_close_injected_gateway(self, home_client, mock_gateway):
        await home_client.initialize(start_polling=False)
        await home_client.stop()
        mock_gateway.close.assert_not_awaited()
