"""Configuration settings and loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hateoas_client.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "hateoas.yaml"


class HalConfiguration(BaseSettings):
    """Configuration for the HAL client."""

    model_config = SettingsConfigDict(
        env_prefix="HATEOAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_api_url: str = "http://localhost:8080/api/v1"
    default_page_size: int = 20
    cache_enabled: bool = True
    cache_lifetime: int = 300
    timeout: float = 30.0
    retry_count: int = 3
    retry_delay: float = 1.0
    default_headers: dict[str, str] = Field(default_factory=dict)
    verbose_logs: bool = False

    @field_validator("base_api_url")
    @classmethod
    def validate_base_api_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_api_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("default_page_size")
    @classmethod
    def validate_default_page_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_page_size must be positive")
        return v

    @field_validator("cache_lifetime")
    @classmethod
    def validate_cache_lifetime(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_lifetime must be non-negative")
        return v


def load_config(config_path: str | Path | None = None, **overrides: Any) -> HalConfiguration:
    """Load configuration from file and environment.

    Priority: keyword overrides > config file > env vars > defaults

    Raises:
        ConfigurationError: If the merged configuration is invalid.
    """
    config_data: dict[str, Any] = {}

    path = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_FILE)
    if path.exists():
        with open(path) as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
    elif config_path is not None:
        raise ConfigurationError(f"Config file {path} not found")

    config_data.update(overrides)

    try:
        return HalConfiguration(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", cause=e) from e
