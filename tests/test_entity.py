"""Tests for the Entity model."""

import pytest
from pydantic import ValidationError

from home_gateway.core.models import DeviceType, Entity


class TestEntityFromDevice:
    """Test suite for Entity.from_device()."""

    def test_collects_component_capabilities(self, sample_devices):
        """Capabilities come from every component, label preferred as name."""
        entity = Entity.from_device(sample_devices[0])

        assert entity.entity_id == "6f1d7c0e-lamp"
        assert entity.name == "Living Room Lamp"
        assert entity.capabilities == ("switch", "switchLevel")
        assert entity.type == DeviceType.SWITCH
        assert entity.room_id == "room-living"
        assert entity.state == {"switch": {"value": "on"}, "level": {"value": 80}}

    def test_name_falls_back_to_device_name(self, sample_devices):
        entity = Entity.from_device(sample_devices[1])
        assert entity.name == "Kitchen Fan"

    def test_name_falls_back_to_device_id(self):
        entity = Entity.from_device({"deviceId": "abc", "components": []})
        assert entity.name == "abc"
        assert entity.type == DeviceType.UNKNOWN

    def test_flat_capabilities_list(self):
        """A flattened payload with top-level capability ids is accepted."""
        entity = Entity.from_device({"deviceId": "d1", "label": "Hall Sensor", "capabilities": ["motionSensor"]})
        assert entity.capabilities == ("motionSensor",)
        assert entity.type == DeviceType.MOTION_SENSOR

    def test_duplicate_capabilities_across_components(self):
        device = {
            "deviceId": "d2",
            "components": [
                {"id": "main", "capabilities": [{"id": "switch"}]},
                {"id": "outlet2", "capabilities": [{"id": "switch"}]},
            ],
        }
        assert Entity.from_device(device).capabilities == ("switch",)

    def test_missing_device_id_raises(self):
        with pytest.raises(KeyError):
            Entity.from_device({"label": "No Id"})


class TestEntity:
    """Test suite for Entity behavior."""

    def test_type_is_derived_from_capabilities(self):
        entity = Entity(entity_id="x", name="Door", capabilities=("lock",))
        assert entity.type == DeviceType.LOCK
        assert entity.model_dump()["type"] == "lock"

    def test_has_capability(self):
        entity = Entity(entity_id="x", name="Fan", capabilities=("switch", "fanSpeed"))
        assert entity.has_capability("fanSpeed")
        assert not entity.has_capability("lock")

    def test_with_state_returns_copy(self):
        entity = Entity(entity_id="x", name="Fan", capabilities=("switch",), state="on")
        updated = entity.with_state("off")

        assert updated.state == "off"
        assert entity.state == "on"
        assert updated.entity_id == "x"

    def test_is_immutable(self):
        entity = Entity(entity_id="x", name="Fan")
        with pytest.raises(ValidationError):
            entity.name = "Other"
