"""SmartThings REST API client.

Thin authenticated wrapper over the device, scene and room endpoints of
``https://api.smartthings.com/v1``. Any non-2xx response is a hard
failure: the error body is not parsed, only the status text is kept.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from home_gateway.core.errors import OperationTimeout, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.smartthings.com/v1"


class SmartThingsApi:
    """Client for the SmartThings cloud API.

    Usage:
        api = SmartThingsApi(token="...")
        devices = await api.devices.list()
        await api.devices.execute_command(device_id, {"capability": "switch", "command": "on"})
        await api.close()
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize SmartThings client.

        Args:
            token: Personal access token (bearer)
            base_url: API root URL
            timeout: Per-request deadline in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If token is empty
        """
        if not token:
            raise ValueError("SmartThings token is required")

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=timeout,
            transport=transport,
        )

        self.devices = DevicesEndpoints(self)
        self.scenes = ScenesEndpoints(self)
        self.rooms = RoomsEndpoints(self)

    def _get_headers(self) -> dict[str, str]:
        """Build authorization headers."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: Path relative to the API root (e.g., ``/devices``)
            json: Optional JSON body

        Returns:
            Decoded JSON body (None for empty bodies)

        Raises:
            TransportError: On non-2xx status, network failure or a non-JSON body
            OperationTimeout: If the request exceeds the timeout
        """
        logger.debug(f"SmartThings {method} {endpoint}")
        try:
            response = await self._client.request(method, endpoint, json=json)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling SmartThings {method} {endpoint} (>{self.timeout}s)")
            raise OperationTimeout(f"SmartThings {method} {endpoint}", self.timeout) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from SmartThings: {e.response.status_code} {e.response.reason_phrase}")
            raise TransportError(
                e.response.reason_phrase or str(e.response.status_code),
                status_code=e.response.status_code,
                api="SmartThings",
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling SmartThings: {type(e).__name__}: {e}")
            raise TransportError(str(e) or type(e).__name__, api="SmartThings") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"SmartThings returned invalid JSON for {method} {endpoint}: {e}")
            raise TransportError(
                "invalid JSON response",
                status_code=response.status_code,
                api="SmartThings",
            ) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


class DevicesEndpoints:
    """``/devices`` endpoint group."""

    def __init__(self, api: SmartThingsApi) -> None:
        self._api = api

    async def list(self) -> list[dict[str, Any]]:
        """List devices, unwrapping the ``items`` page envelope."""
        data = await self._api.request("GET", "/devices")
        if isinstance(data, dict):
            return data.get("items", [])
        return data or []

    async def get(self, device_id: str) -> dict[str, Any]:
        return await self._api.request("GET", f"/devices/{device_id}")

    async def get_status(self, device_id: str) -> dict[str, Any]:
        return await self._api.request("GET", f"/devices/{device_id}/status")

    async def execute_command(self, device_id: str, command: dict[str, Any]) -> dict[str, Any]:
        """Execute one command on a device."""
        return await self.execute_commands(device_id, [command])

    async def execute_commands(self, device_id: str, commands: list[dict[str, Any]]) -> dict[str, Any]:
        """Execute several commands on a device in one request."""
        return await self._api.request(
            "POST",
            f"/devices/{device_id}/commands",
            json={"commands": commands},
        )

    async def get_components(self, device_id: str) -> dict[str, Any]:
        return await self._api.request("GET", f"/devices/{device_id}/components")

    async def get_capabilities(self, device_id: str) -> dict[str, Any]:
        return await self._api.request("GET", f"/devices/{device_id}/capabilities")


class ScenesEndpoints:
    """``/scenes`` endpoint group."""

    def __init__(self, api: SmartThingsApi) -> None:
        self._api = api

    async def list(self) -> list[dict[str, Any]]:
        data = await self._api.request("GET", "/scenes")
        if isinstance(data, dict):
            return data.get("items", [])
        return data or []

    async def execute(self, scene_id: str) -> dict[str, Any]:
        return await self._api.request("POST", f"/scenes/{scene_id}/execute")


class RoomsEndpoints:
    """``/rooms`` endpoint group."""

    def __init__(self, api: SmartThingsApi) -> None:
        self._api = api

    async def list(self) -> list[dict[str, Any]]:
        data = await self._api.request("GET", "/rooms")
        if isinstance(data, dict):
            return data.get("items", [])
        return data or []

    async def get(self, room_id: str) -> dict[str, Any]:
        return await self._api.request("GET", f"/rooms/{room_id}")
