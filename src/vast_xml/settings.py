"""
Settings Management Module

Provides pydantic-based settings for the codec with:
- YAML configuration file loading
- Environment variable overrides (VAST_XML_*)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Codec settings.

    Configuration hierarchy (lowest to highest precedence):
    1. Field defaults
    2. YAML file passed to ``load_from_yaml``
    3. Environment variables (VAST_XML_*)

    Examples:
        >>> settings = get_settings()
        >>> settings.encoding
        'utf-8'
    """

    model_config = SettingsConfigDict(
        env_prefix="VAST_XML_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_json: bool = False

    xpath_extensions: str = ".//{*}Extensions/{*}Extension"
    encoding: str = "utf-8"
    recover_on_error: bool = False
    huge_tree: bool = False
    cdata_uris: bool = True
    xml_declaration: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "Settings":
        """
        Load settings from a YAML file.

        A missing file yields default settings. Environment variables still
        take precedence over values read from the file.

        Args:
            config_path: Path to the YAML file

        Returns:
            Settings instance
        """
        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            config_data: dict[str, Any] = yaml.safe_load(f) or {}

        # Init kwargs outrank env in pydantic-settings; drop keys env overrides
        env_overrides = cls().model_dump(exclude_defaults=True)
        config_data.update(env_overrides)
        return cls(**config_data)


@lru_cache
def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Settings instance
    """
    if config_path is None:
        return Settings()
    return Settings.load_from_yaml(config_path)


__all__ = ["Settings", "get_settings"]
