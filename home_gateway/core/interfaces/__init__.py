"""Protocols the gateway depends on."""

from home_gateway.core.interfaces.gateway import DeviceEndpoints, DeviceGateway
from home_gateway.core.interfaces.runtime import (
    CompletionOracle,
    IntentDecision,
    IntentOracle,
    MemoryStore,
)

__all__ = [
    "DeviceEndpoints",
    "DeviceGateway",
    "CompletionOracle",
    "IntentDecision",
    "IntentOracle",
    "MemoryStore",
]
