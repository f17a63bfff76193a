"""
Librarium configuration.

Settings are read once from the environment (after loading a .env file),
validated into an immutable model and shared for the process lifetime.

Priority order:
1. Environment variables
2. Schema defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from librarium.shared.gate import GateLogger
from librarium.Config.schema import (
    CONFIG_SCHEMA,
    ConfigField,
    ConfigType,
    ConfigCategory,
    DEFAULT_PREVIEW_EXTENSIONS,
    DEFAULT_PROMPT_EXTENSIONS,
    get_schema_by_key,
)

_log = GateLogger.get("Config")

_settings: Optional["Settings"] = None


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _normalize_extensions(values: List[str]) -> List[str]:
    result = []
    for value in values:
        ext = value.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        result.append(ext)
    return result


class Settings(BaseModel):
    """Validated, immutable runtime configuration."""

    model_config = ConfigDict(frozen=True)

    base_directory: Path
    prompts_directory: Path
    static_base_url: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    preview_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PREVIEW_EXTENSIONS)
    )
    prompt_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PROMPT_EXTENSIONS)
    )

    @field_validator("base_directory")
    @classmethod
    def _base_directory_exists(cls, value: Path) -> Path:
        value = value.expanduser().resolve()
        if not value.is_dir():
            raise ValueError(f"Directory does not exist: {value}")
        return value

    @field_validator("prompts_directory")
    @classmethod
    def _absolute_prompts_directory(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("static_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        field = get_schema_by_key("LOG_LEVEL")
        if value not in field.options:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("preview_extensions", "prompt_extensions")
    @classmethod
    def _extensions(cls, value: List[str]) -> List[str]:
        return _normalize_extensions(value)


def _convert_type(value: Any, config_type: ConfigType) -> Any:
    """Convert a raw environment string to the schema type."""
    if value is None:
        return None
    if config_type == ConfigType.LIST:
        if isinstance(value, list):
            return value
        return [v.strip() for v in str(value).split(",") if v.strip()]
    if config_type == ConfigType.INTEGER:
        try:
            return int(value)
        except (TypeError, ValueError):
            return value
    return str(value)


def _read_raw(field: ConfigField, environ: Mapping[str, str]) -> Any:
    value = environ.get(field.env_var)
    if value is not None and field.config_type == ConfigType.PATH:
        # Tolerate "KEY==/path" typos in .env files
        value = value.strip().lstrip("=")
    if value is None or value == "":
        return field.default
    return value


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env file loaded before reading variables
        environ: Mapping to read instead of os.environ (no .env loading)

    Returns:
        Validated Settings

    Raises:
        ConfigError: If a required value is missing or a value is invalid
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    values: Dict[str, Any] = {}
    missing = []
    for field in CONFIG_SCHEMA:
        value = _read_raw(field, environ)
        if value is None:
            if field.required:
                missing.append(field.key)
            continue
        values[field.attr] = _convert_type(value, field.config_type)

    if missing:
        raise ConfigError(f"Required config missing: {', '.join(missing)}")

    try:
        settings = Settings.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    _log.debug(f"Loaded settings (base_directory={settings.base_directory})")
    return settings


def get_settings() -> Settings:
    """Get process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


__all__ = [
    "Settings",
    "ConfigError",
    "ConfigField",
    "ConfigType",
    "ConfigCategory",
    "load_settings",
    "get_settings",
]
