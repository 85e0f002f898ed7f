"""Pytest configuration and shared fixtures for Home Gateway tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from home_gateway.core.interfaces.runtime import IntentDecision
from home_gateway.models import Config
from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.orchestrator import CommandOrchestrator
from home_gateway.services.state_cache import StateCache

LAMP_ID = "6f1d7c0e-lamp"
FAN_ID = "0a9b3c2d-fan"
LOCK_ID = "9e8f7a6b-lock"


@pytest.fixture
def mock_config() -> Config:
    """Fixture providing configuration with test values.

    Returns:
        Config that ignores any local .env file
    """
    return Config(
        _env_file=None,
        smartthings_token="test_token_123",
        smartthings_base_url="http://test-smartthings/v1",
        home_assistant_url="http://test-ha:8123",
        home_assistant_token="ha_token",
        llm_api_key="test-llm-key",
        poll_interval=60.0,
        log_level="DEBUG",
    )


@pytest.fixture
def sample_devices() -> list[dict[str, Any]]:
    """Fixture providing SmartThings ``GET /devices`` items.

    Returns:
        Lamp (switch + level), fan (switch + fanSpeed) and door lock
    """
    return [
        {
            "deviceId": LAMP_ID,
            "name": "c2c-dimmer",
            "label": "Living Room Lamp",
            "roomId": "room-living",
            "components": [
                {
                    "id": "main",
                    "capabilities": [{"id": "switch"}, {"id": "switchLevel"}],
                }
            ],
            "status": {"switch": {"value": "on"}, "level": {"value": 80}},
        },
        {
            "deviceId": FAN_ID,
            "name": "Kitchen Fan",
            "components": [
                {
                    "id": "main",
                    "capabilities": [{"id": "switch"}, {"id": "fanSpeed"}],
                }
            ],
            "status": {"switch": {"value": "on"}},
        },
        {
            "deviceId": LOCK_ID,
            "label": "Front Door",
            "components": [
                {
                    "id": "main",
                    "capabilities": [{"id": "lock"}, {"id": "battery"}],
                }
            ],
            "status": {"lock": {"value": "locked"}},
        },
    ]


@pytest.fixture
def mock_gateway(sample_devices):
    """Mock SmartThings gateway."""
    gateway = MagicMock()
    gateway.devices.list = AsyncMock(return_value=sample_devices)
    gateway.devices.get_status = AsyncMock(return_value={"switch": {"value": "off"}})
    gateway.devices.execute_command = AsyncMock(return_value={"results": [{"status": "ACCEPTED"}]})
    gateway.close = AsyncMock()
    return gateway


@pytest.fixture
def intent_oracle():
    """Mock intent oracle answering RESPOND."""
    oracle = MagicMock()
    oracle.should_respond = AsyncMock(return_value=IntentDecision.RESPOND)
    return oracle


@pytest.fixture
def completion_oracle():
    """Mock completion oracle."""
    oracle = MagicMock()
    oracle.complete = AsyncMock(return_value="Done! The kitchen fan is now off.")
    return oracle


@pytest.fixture
def entity_registry(mock_gateway) -> EntityRegistry:
    return EntityRegistry(mock_gateway)


@pytest.fixture
def state_cache() -> StateCache:
    return StateCache()


@pytest.fixture
def orchestrator(mock_gateway, entity_registry, state_cache, intent_oracle, completion_oracle) -> CommandOrchestrator:
    """Fixture providing an orchestrator wired to mocks."""
    return CommandOrchestrator(
        gateway=mock_gateway,
        entity_registry=entity_registry,
        state_cache=state_cache,
        intent_oracle=intent_oracle,
        completion_oracle=completion_oracle,
        call_timeout=5.0,
    )
