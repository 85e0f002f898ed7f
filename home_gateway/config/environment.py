"""Startup configuration validation.

The SmartThings token is resolved through the agent runtime's settings
first and the process environment second. Validation is eager: a
missing token stops the integration from initializing.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from home_gateway.core.errors import ConfigValidationFailed

logger = logging.getLogger(__name__)

SettingGetter = Callable[[str], str | None]


class HomeConfig(BaseModel):
    """Validated credentials required by the device gateway."""

    SMARTTHINGS_TOKEN: str = Field(..., min_length=1)


def validate_home_config(get_setting: SettingGetter | None = None) -> HomeConfig:
    """Validate required configuration.

    Args:
        get_setting: Runtime setting lookup, consulted before the environment

    Returns:
        Validated HomeConfig

    Raises:
        ConfigValidationFailed: If the token is missing or empty
    """
    token = get_setting("SMARTTHINGS_TOKEN") if get_setting else None
    if not token:
        token = os.getenv("SMARTTHINGS_TOKEN")

    try:
        return HomeConfig(SMARTTHINGS_TOKEN=token or "")
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigValidationFailed(errors) from e


def load_device_aliases(path: str | Path | None) -> dict[str, str]:
    """Load spoken-alias to device-id mappings from a YAML file.

    Expected layout::

        aliases:
          living room lamp: 6f1d7c0e-...
          porch: 0a9b...

    Args:
        path: YAML file path, or None to skip

    Returns:
        Lower-cased alias -> device id mapping (empty when no file)

    Raises:
        yaml.YAMLError: If the file is not valid YAML
    """
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Device alias file not found: {config_path}")
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    aliases = {
        str(alias).lower().strip(): str(device_id)
        for alias, device_id in (data.get("aliases") or {}).items()
        if device_id
    }
    logger.info(f"Loaded {len(aliases)} device aliases from {config_path}")
    return aliases
