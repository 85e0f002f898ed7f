"""Control-surface capability descriptors.

Descriptors announce which agent-protocol interfaces (power, brightness)
the gateway exposes. They are immutable once registered.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SupportedProperty(BaseModel):
    """A property exposed by a capability interface."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Property name (e.g., powerState)")


class CapabilityProperties(BaseModel):
    """Property block of a capability descriptor.

    Attributes:
        supported: Properties the interface exposes
        proactively_reported: Whether changes are pushed without a request
        retrievable: Whether the property can be queried on demand
    """

    model_config = ConfigDict(frozen=True)

    supported: tuple[SupportedProperty, ...] = Field(default_factory=tuple)

    proactively_reported: bool = Field(
        default=False,
        description="Changes are reported proactively",
    )

    retrievable: bool = Field(
        default=False,
        description="Property is retrievable on demand",
    )


class CapabilityDescriptor(BaseModel):
    """A declared control-surface interface.

    Examples:
        >>> CapabilityDescriptor(
        ...     interface="Alexa.PowerController",
        ...     version="3",
        ...     type="AlexaInterface",
        ...     properties=CapabilityProperties(
        ...         supported=(SupportedProperty(name="powerState"),),
        ...         proactively_reported=True,
        ...         retrievable=True,
        ...     ),
        ... )
    """

    model_config = ConfigDict(frozen=True)

    interface: str = Field(..., description="Unique interface name")

    version: str = Field(..., description="Interface version")

    type: str = Field(..., description="Declared interface type tag")

    properties: CapabilityProperties = Field(default_factory=CapabilityProperties)

    @property
    def property_names(self) -> list[str]:
        """Names of the supported properties."""
        return [prop.name for prop in self.properties.supported]
