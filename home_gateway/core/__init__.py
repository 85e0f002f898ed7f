"""Core abstractions for the home gateway.

Modules:
    errors: Exception hierarchy
    interfaces: Protocols for the device gateway and the agent runtime
    models: Entities, device types, capabilities and commands
"""

from home_gateway.core.errors import HomeGatewayError
from home_gateway.core.models import (
    CapabilityDescriptor,
    CommandName,
    CommandResult,
    DeviceCommand,
    DeviceType,
    Entity,
    ParsedCommand,
)

__all__ = [
    "HomeGatewayError",
    "CapabilityDescriptor",
    "CommandName",
    "CommandResult",
    "DeviceCommand",
    "DeviceType",
    "Entity",
    "ParsedCommand",
]
