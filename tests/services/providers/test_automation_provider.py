"""Tests for AutomationStateProvider."""

import httpx
import pytest

from home_gateway.services.providers import AutomationStateProvider
from home_gateway.services.providers.automation import UNAVAILABLE_AUTOMATIONS

HA_STATES = [
    {
        "entity_id": "automation.morning_lights",
        "state": "on",
        "attributes": {"friendly_name": "Morning Lights"},
    },
    {
        "entity_id": "light.kitchen",
        "state": "off",
        "attributes": {"friendly_name": "Kitchen"},
    },
    {
        "entity_id": "automation.away_mode",
        "state": "off",
        "attributes": {},
    },
]


def make_provider(handler, url: str = "http://test-ha:8123", token: str = "ha_token") -> AutomationStateProvider:
    return AutomationStateProvider(base_url=url, token=token, transport=httpx.MockTransport(handler))


class TestAutomationStateProvider:
    """Test suite for AutomationStateProvider."""

    @pytest.mark.asyncio
    async def test_filters_automations(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=HA_STATES)

        provider = make_provider(handler)
        text = await provider.get()

        assert provider.name == "automation-state"
        assert text == "Current Automation States:\nMorning Lights: on\nautomation.away_mode: off"
        assert requests[0].url.path == "/api/states"
        assert requests[0].headers["Authorization"] == "Bearer ha_token"

    @pytest.mark.asyncio
    async def test_http_error(self):
        provider = make_provider(lambda request: httpx.Response(401))
        assert await provider.get() == UNAVAILABLE_AUTOMATIONS

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert await make_provider(handler).get() == UNAVAILABLE_AUTOMATIONS

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"message": "API running."}))
        assert await provider.get() == UNAVAILABLE_AUTOMATIONS

    @pytest.mark.asyncio
    async def test_not_configured(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("should not be called")

        assert await make_provider(handler, token="").get() == UNAVAILABLE_AUTOMATIONS
