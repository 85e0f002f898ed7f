"""Domain models shared by the gateway services."""

from home_gateway.core.models.capability import (
    CapabilityDescriptor,
    CapabilityProperties,
    SupportedProperty,
)
from home_gateway.core.models.command import (
    CommandArgs,
    CommandName,
    CommandResult,
    DeviceCommand,
    ParsedCommand,
)
from home_gateway.core.models.device_type import DEVICE_TYPE_RULES, DeviceType, classify
from home_gateway.core.models.entity import Entity

__all__ = [
    "CapabilityDescriptor",
    "CapabilityProperties",
    "SupportedProperty",
    "CommandArgs",
    "CommandName",
    "CommandResult",
    "DeviceCommand",
    "ParsedCommand",
    "DEVICE_TYPE_RULES",
    "DeviceType",
    "classify",
    "Entity",
]
