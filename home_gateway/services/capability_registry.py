"""Catalog of control-surface capabilities exposed to the agent protocol."""

from __future__ import annotations

import logging

from home_gateway.core.models.capability import (
    CapabilityDescriptor,
    CapabilityProperties,
    SupportedProperty,
)

logger = logging.getLogger(__name__)

POWER_CONTROLLER = CapabilityDescriptor(
    interface="Alexa.PowerController",
    version="3",
    type="AlexaInterface",
    properties=CapabilityProperties(
        supported=(SupportedProperty(name="powerState"),),
        proactively_reported=True,
        retrievable=True,
    ),
)

BRIGHTNESS_CONTROLLER = CapabilityDescriptor(
    interface="Alexa.BrightnessController",
    version="3",
    type="AlexaInterface",
    properties=CapabilityProperties(
        supported=(SupportedProperty(name="brightness"),),
        proactively_reported=True,
        retrievable=True,
    ),
)

BUILTIN_CAPABILITIES = (POWER_CONTROLLER, BRIGHTNESS_CONTROLLER)


class CapabilityRegistry:
    """In-memory capability catalog keyed by interface name."""

    def __init__(self, include_builtins: bool = True) -> None:
        """Initialize the catalog.

        Args:
            include_builtins: Register power and brightness control
        """
        self._capabilities: dict[str, CapabilityDescriptor] = {}
        if include_builtins:
            for descriptor in BUILTIN_CAPABILITIES:
                self.register(descriptor)

    def register(self, descriptor: CapabilityDescriptor) -> None:
        """Register a descriptor, replacing any with the same interface."""
        if descriptor.interface in self._capabilities:
            logger.warning(f"Capability '{descriptor.interface}' already registered, replacing")
        self._capabilities[descriptor.interface] = descriptor

    def get(self, interface: str) -> CapabilityDescriptor | None:
        return self._capabilities.get(interface)

    def list_all(self) -> list[CapabilityDescriptor]:
        """All descriptors in registration order."""
        return list(self._capabilities.values())

    def __len__(self) -> int:
        return len(self._capabilities)
