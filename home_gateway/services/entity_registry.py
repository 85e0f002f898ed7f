"""In-memory directory of discovered SmartThings devices.

Discovery rebuilds the whole directory from ``GET /devices`` and swaps
it in under a lock, so readers always see either the previous or the
new snapshot and a failed discovery leaves the previous one intact.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from home_gateway.core.errors import DiscoveryFailed, HomeGatewayError
from home_gateway.core.interfaces.gateway import DeviceGateway
from home_gateway.core.models.entity import Entity

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Directory of entities keyed by vendor device id."""

    def __init__(self, gateway: DeviceGateway) -> None:
        """Initialize entity registry.

        Args:
            gateway: Device API gateway used for discovery
        """
        self.gateway = gateway
        self._entities: dict[str, Entity] = {}
        self._lock = asyncio.Lock()

    async def discover_entities(self) -> list[Entity]:
        """Fetch all devices and replace the registry contents.

        Returns:
            Discovered entities in discovery order

        Raises:
            DiscoveryFailed: If fetching or decoding the device list fails
        """
        try:
            devices = await self.gateway.devices.list()
            discovered: dict[str, Entity] = {}
            for device in devices:
                entity = Entity.from_device(device)
                discovered[entity.entity_id] = entity
        except (HomeGatewayError, KeyError, TypeError, ValidationError) as e:
            logger.error(f"Entity discovery failed: {e}")
            raise DiscoveryFailed(e) from e

        async with self._lock:
            self._entities = discovered

        logger.info(f"Discovered {len(discovered)} entities")
        return list(discovered.values())

    def get_entity(self, entity_id: str) -> Entity | None:
        """Look up an entity by id."""
        return self._entities.get(entity_id)

    def list_entities(self) -> list[Entity]:
        """Snapshot of all entities in discovery order."""
        return list(self._entities.values())

    async def update_entity_state(self, entity_id: str, state: Any) -> None:
        """Overwrite the embedded state of a known entity.

        Unknown ids are ignored.

        Args:
            entity_id: Entity to update
            state: New status payload
        """
        async with self._lock:
            entity = self._entities.get(entity_id)
            if entity is None:
                logger.debug(f"Ignoring state update for unknown entity {entity_id}")
                return
            updated = dict(self._entities)
            updated[entity_id] = entity.with_state(state)
            self._entities = updated

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities
