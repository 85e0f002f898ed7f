"""Semantic device types and the capability rules that derive them.

A device's type is never reported by the vendor API. It is derived from
the set of capability identifiers the device exposes by walking an
ordered rule table: the first type whose required capabilities are all
present wins, otherwise the device is ``unknown``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class DeviceType(str, Enum):
    """Closed set of semantic device types."""

    SWITCH = "switch"
    LIGHT = "light"
    THERMOSTAT = "thermostat"
    LOCK = "lock"
    MOTION_SENSOR = "motionSensor"
    CONTACT_SENSOR = "contactSensor"
    PRESENCE_SENSOR = "presenceSensor"
    MEDIA_PLAYER = "mediaPlayer"
    WINDOW_SHADE = "windowShade"
    GARAGE_DOOR = "garageDoor"
    FAN = "fan"
    POWER_METER = "powerMeter"
    BATTERY = "battery"
    UNKNOWN = "unknown"


# Declaration order is priority order. LIGHT and FAN both require
# "switch", so any device reporting it classifies as SWITCH first.
DEVICE_TYPE_RULES: tuple[tuple[DeviceType, frozenset[str]], ...] = (
    (DeviceType.SWITCH, frozenset({"switch"})),
    (
        DeviceType.LIGHT,
        frozenset({"switch", "switchLevel", "colorControl", "colorTemperature"}),
    ),
    (
        DeviceType.THERMOSTAT,
        frozenset({"thermostat", "temperatureMeasurement", "humidityMeasurement"}),
    ),
    (DeviceType.LOCK, frozenset({"lock"})),
    (DeviceType.MOTION_SENSOR, frozenset({"motionSensor"})),
    (DeviceType.CONTACT_SENSOR, frozenset({"contactSensor"})),
    (DeviceType.PRESENCE_SENSOR, frozenset({"presenceSensor"})),
    (DeviceType.MEDIA_PLAYER, frozenset({"mediaPlayback", "volume"})),
    (DeviceType.WINDOW_SHADE, frozenset({"windowShade"})),
    (DeviceType.GARAGE_DOOR, frozenset({"garageDoor"})),
    (DeviceType.FAN, frozenset({"fanSpeed", "switch"})),
    (DeviceType.POWER_METER, frozenset({"powerMeter", "energyMeter"})),
    (DeviceType.BATTERY, frozenset({"battery"})),
)


def classify(capabilities: Iterable[str]) -> DeviceType:
    """Classify a device from its reported capability identifiers.

    Args:
        capabilities: Capability ids reported by the device

    Returns:
        First matching DeviceType in declaration order, or UNKNOWN
    """
    reported = frozenset(capabilities)
    for device_type, required in DEVICE_TYPE_RULES:
        if required <= reported:
            return device_type
    return DeviceType.UNKNOWN
