"""Device gateway protocol.

The entity registry and the orchestrator only depend on this structural
interface, so tests can substitute mocks for the SmartThings client.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DeviceEndpoints(Protocol):
    """Device operations consumed by the command pipeline."""

    async def list(self) -> list[dict[str, Any]]:
        """List all devices visible to the token."""
        ...

    async def get_status(self, device_id: str) -> dict[str, Any]:
        """Get the full status payload of a device."""
        ...

    async def execute_command(self, device_id: str, command: dict[str, Any]) -> dict[str, Any]:
        """Execute a single command on a device."""
        ...


@runtime_checkable
class DeviceGateway(Protocol):
    """Authenticated access to the device-control cloud API.

    Lifecycle:
        1. Create with credentials (never from ambient global state)
        2. Use ``devices`` operations
        3. Call ``close()`` during shutdown
    """

    @property
    def devices(self) -> DeviceEndpoints:
        """Device endpoint group."""
        ...

    async def close(self) -> None:
        """Release the underlying HTTP resources."""
        ...
