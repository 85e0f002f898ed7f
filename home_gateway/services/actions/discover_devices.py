"""DISCOVER_DEVICES action: rediscover and list all devices."""

from __future__ import annotations

import logging

from home_gateway.core.errors import DiscoveryFailed
from home_gateway.services.actions.base import (
    ActionCallback,
    ActionMessage,
    ActionResponse,
    BaseAction,
    describe_error,
)
from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.state_cache import render_state

logger = logging.getLogger(__name__)


class DiscoverDevicesAction(BaseAction):
    """Discovers and lists all available smart home devices."""

    similes = ("SCAN_DEVICES", "FIND_DEVICES", "LIST_DEVICES")
    description = "Discovers and lists all available smart home devices"
    keywords = (
        "discover",
        "find",
        "scan",
        "list",
        "show",
        "what",
        "devices",
        "lights",
        "switches",
    )

    def __init__(self, entity_registry: EntityRegistry) -> None:
        self.entity_registry = entity_registry

    @property
    def name(self) -> str:
        return "DISCOVER_DEVICES"

    async def handler(
        self,
        message: ActionMessage,
        callback: ActionCallback | None = None,
    ) -> ActionResponse:
        try:
            entities = await self.entity_registry.discover_entities()
        except DiscoveryFailed as e:
            response = ActionResponse(text=describe_error(e), action="DEVICE_LIST_ERROR")
            return await self._respond(response, callback)

        if not entities:
            text = "I couldn't find any devices."
        else:
            device_list = "\n".join(
                f"- {entity.name} ({entity.entity_id}): {render_state(entity.state)}" for entity in entities
            )
            text = f"Here are all the available devices:\n\n{device_list}"

        response = ActionResponse(text=text, action="DEVICE_LIST_RESPONSE")
        return await self._respond(response, callback)
