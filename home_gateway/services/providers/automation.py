"""Home Assistant automation state provider.

Polls a second, independently authenticated API (Home Assistant's
``/api/states``) and reports the state of every ``automation.*``
entity. It does not share anything with the SmartThings registry.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from home_gateway.services.providers.base import BaseProvider

logger = logging.getLogger(__name__)

UNAVAILABLE_AUTOMATIONS = "Unable to fetch automation states"


class AutomationStateProvider(BaseProvider):
    """Renders Home Assistant automations as ``friendly_name: state`` lines."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize automation provider.

        Args:
            base_url: Home Assistant URL (e.g., http://homeassistant.local:8123)
            token: Long-lived access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "automation-state"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def get_states(self) -> list[dict[str, Any]]:
        """Fetch all entity states from Home Assistant.

        Raises:
            httpx.HTTPError: On network failure or non-2xx response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(f"{self.base_url}/api/states", headers=self._get_headers())
            response.raise_for_status()
        return response.json()

    async def get(self) -> str:
        if not self.base_url or not self.token:
            logger.debug("Home Assistant URL or token not configured")
            return UNAVAILABLE_AUTOMATIONS

        try:
            states = await self.get_states()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch automation states: {e}")
            return UNAVAILABLE_AUTOMATIONS

        if not isinstance(states, list):
            logger.error(f"Unexpected automation states payload: {type(states).__name__}")
            return UNAVAILABLE_AUTOMATIONS

        automations = [
            state for state in states
            if str(state.get("entity_id", "")).startswith("automation.")
        ]
        automation_states = "\n".join(
            f"{(automation.get('attributes') or {}).get('friendly_name', automation['entity_id'])}: "
            f"{automation.get('state')}"
            for automation in automations
        )
        return f"Current Automation States:\n{automation_states}"
