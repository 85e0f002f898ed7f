"""Context providers exposed to the agent runtime."""

from home_gateway.services.providers.automation import AutomationStateProvider
from home_gateway.services.providers.base import BaseProvider, ProviderRegistry
from home_gateway.services.providers.state import CachedStateProvider, DeviceStateProvider

__all__ = [
    "AutomationStateProvider",
    "BaseProvider",
    "CachedStateProvider",
    "DeviceStateProvider",
    "ProviderRegistry",
]
