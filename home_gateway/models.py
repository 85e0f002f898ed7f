"""Application configuration and HTTP request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Gateway settings loaded from environment variables and ``.env``.

    Field names map to upper-case environment variables, e.g.
    ``smartthings_token`` is read from ``SMARTTHINGS_TOKEN``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # SmartThings device API
    smartthings_token: str = ""
    smartthings_base_url: str = "https://api.smartthings.com/v1"
    smartthings_timeout: float = 10.0

    # Background refresh of the entity registry
    poll_interval: float = 60.0

    # Home Assistant automation state (independent credentials)
    home_assistant_url: str = ""
    home_assistant_token: str = ""
    home_assistant_timeout: float = 10.0

    # OpenAI-compatible LLM used for the intent and completion oracles
    llm_base_url: str = "https://api.openai.com/v1"
    llm_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_timeout: float = 30.0

    # Target device resolution
    target_match_threshold: int = 70
    device_aliases_path: str | None = None

    log_level: str = "INFO"
    access_log: bool = True


class CommandRequest(BaseModel):
    """Request body for ``POST /command``."""

    text: str = Field(..., min_length=1, description="User utterance")
    user_id: str = Field(default="anonymous", description="Requesting user")
    device_id: str | None = Field(default=None, description="Explicit target device")


class CommandResponse(BaseModel):
    """Response body for ``POST /command``."""

    handled: bool = Field(..., description="False when the intent gate declined")
    success: bool = Field(default=False)
    message: str | None = Field(default=None)
    data: Any = Field(default=None)
    device_id: str | None = Field(default=None)


class EntityResponse(BaseModel):
    """Entity as rendered by ``POST /devices/discover``."""

    entity_id: str
    name: str
    type: str
    capabilities: list[str]
    state: Any = None
