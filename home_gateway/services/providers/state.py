"""Context providers backed by the gateway's own device state."""

from __future__ import annotations

import logging

from home_gateway.core.errors import DiscoveryFailed
from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.providers.base import BaseProvider
from home_gateway.services.state_cache import StateCache, render_state

logger = logging.getLogger(__name__)


class CachedStateProvider(BaseProvider):
    """Snapshot of the state cache. Never touches the network."""

    def __init__(self, state_cache: StateCache) -> None:
        self.state_cache = state_cache

    @property
    def name(self) -> str:
        return "home-assistant-state"

    async def get(self) -> str:
        return f"Current Home Assistant States:\n{self.state_cache.snapshot()}"


class DeviceStateProvider(BaseProvider):
    """Live device states, rediscovered on every call."""

    def __init__(self, entity_registry: EntityRegistry) -> None:
        self.entity_registry = entity_registry

    @property
    def name(self) -> str:
        return "device-state"

    async def get(self) -> str:
        """Rediscover devices and render ``name: state`` lines."""
        try:
            entities = await self.entity_registry.discover_entities()
        except DiscoveryFailed as e:
            logger.error(f"Device state provider failed: {e}")
            return "Unable to fetch device states"

        device_states = "\n".join(f"{entity.name}: {render_state(entity.state)}" for entity in entities)
        return f"Current Device States:\n{device_states}"
