"""Entity model for discovered SmartThings devices.

An Entity is the in-memory record the gateway keeps for every device
returned by discovery. Its type is derived from its capabilities on
every access, so it can never go stale when capabilities change.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from home_gateway.core.models.device_type import DeviceType, classify


class Entity(BaseModel):
    """A controllable or observable device.

    Attributes:
        entity_id: Stable opaque identifier from the vendor API
        name: Display label
        capabilities: Vendor capability identifiers reported by the device
        state: Last-known status payload (vendor-defined shape)
        room_id: Room the device belongs to, when reported

    Examples:
        >>> Entity(
        ...     entity_id="6f1d7c0e",
        ...     name="Kitchen Fan",
        ...     capabilities=("fanSpeed", "switch"),
        ... ).type
        <DeviceType.SWITCH: 'switch'>
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str = Field(..., description="Vendor device identifier")

    name: str = Field(..., description="Human-readable display name")

    capabilities: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Capability identifiers reported by the device",
    )

    state: Any = Field(
        default=None,
        description="Last-known opaque status payload",
    )

    room_id: str | None = Field(
        default=None,
        description="Vendor room identifier",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type(self) -> DeviceType:
        """Semantic device type derived from capabilities."""
        return classify(self.capabilities)

    def has_capability(self, capability: str) -> bool:
        """Check whether the device reports a capability."""
        return capability in self.capabilities

    def with_state(self, state: Any) -> Entity:
        """Return a copy of this entity carrying a new state payload."""
        return self.model_copy(update={"state": state})

    @classmethod
    def from_device(cls, device: dict[str, Any]) -> Entity:
        """Build an entity from a SmartThings device payload.

        The label is preferred over the factory name. Capabilities are
        collected from every component, falling back to a top-level
        ``capabilities`` list when the payload is flattened.

        Args:
            device: Device dict as returned by ``GET /devices``

        Returns:
            Entity for the device
        """
        capabilities: list[str] = []
        for component in device.get("components") or []:
            for capability in component.get("capabilities") or []:
                capability_id = capability.get("id") if isinstance(capability, dict) else capability
                if capability_id and capability_id not in capabilities:
                    capabilities.append(capability_id)
        for capability in device.get("capabilities") or []:
            capability_id = capability.get("id") if isinstance(capability, dict) else capability
            if capability_id and capability_id not in capabilities:
                capabilities.append(capability_id)

        return cls(
            entity_id=device["deviceId"],
            name=device.get("label") or device.get("name") or device["deviceId"],
            capabilities=tuple(capabilities),
            state=device.get("status"),
            room_id=device.get("roomId"),
        )
