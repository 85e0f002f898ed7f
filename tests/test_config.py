"""Tests for configuration loading and validation."""

import pytest

from home_gateway.config import load_device_aliases, validate_home_config
from home_gateway.core.errors import ConfigValidationFailed
from home_gateway.models import Config


@pytest.fixture(autouse=True)
def clear_token(monkeypatch):
    monkeypatch.delenv("SMARTTHINGS_TOKEN", raising=False)


class TestValidateHomeConfig:
    """Test suite for validate_home_config()."""

    def test_runtime_setting_wins(self, monkeypatch):
        monkeypatch.setenv("SMARTTHINGS_TOKEN", "from-env")
        config = validate_home_config(lambda key: "from-runtime" if key == "SMARTTHINGS_TOKEN" else None)
        assert config.SMARTTHINGS_TOKEN == "from-runtime"

    def test_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("SMARTTHINGS_TOKEN", "from-env")
        assert validate_home_config(lambda key: None).SMARTTHINGS_TOKEN == "from-env"
        assert validate_home_config().SMARTTHINGS_TOKEN == "from-env"

    def test_missing_token(self):
        with pytest.raises(ConfigValidationFailed) as exc_info:
            validate_home_config(lambda key: None)

        assert str(exc_info.value).startswith("SmartThings configuration validation failed:")
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith("SMARTTHINGS_TOKEN:")

    def test_empty_token(self, monkeypatch):
        monkeypatch.setenv("SMARTTHINGS_TOKEN", "")
        with pytest.raises(ConfigValidationFailed):
            validate_home_config(lambda key: "")


class TestLoadDeviceAliases:
    """Test suite for load_device_aliases()."""

    def test_no_path(self):
        assert load_device_aliases(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_device_aliases(tmp_path / "missing.yaml") == {}

    def test_loads_lowercased_aliases(self, tmp_path):
        path = tmp_path / "aliases.yaml"
        path.write_text("aliases:\n  Porch Light: dev-porch\n  fan: dev-fan\n  broken:\n")

        assert load_device_aliases(path) == {"porch light": "dev-porch", "fan": "dev-fan"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "aliases.yaml"
        path.write_text("")
        assert load_device_aliases(str(path)) == {}


class TestConfig:
    """Test suite for Config settings."""

    def test_defaults(self):
        config = Config(_env_file=None)

        assert config.smartthings_base_url == "https://api.smartthings.com/v1"
        assert config.poll_interval == 60.0
        assert config.target_match_threshold == 70
        assert config.device_aliases_path is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SMARTTHINGS_TOKEN", "env-token")
        monkeypatch.setenv("POLL_INTERVAL", "30")

        config = Config(_env_file=None)

        assert config.smartthings_token == "env-token"
        assert config.poll_interval == 30.0
