"""Agent actions exposed to the runtime."""

from home_gateway.services.actions.base import ActionMessage, ActionResponse, BaseAction
from home_gateway.services.actions.control_device import ControlDeviceAction
from home_gateway.services.actions.discover_devices import DiscoverDevicesAction
from home_gateway.services.actions.registry import ActionRegistry

__all__ = [
    "ActionMessage",
    "ActionResponse",
    "BaseAction",
    "ControlDeviceAction",
    "DiscoverDevicesAction",
    "ActionRegistry",
]
