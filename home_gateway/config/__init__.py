"""Configuration helpers."""

from home_gateway.config.environment import HomeConfig, load_device_aliases, validate_home_config

__all__ = ["HomeConfig", "load_device_aliases", "validate_home_config"]
