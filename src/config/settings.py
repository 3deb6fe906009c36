"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection settings
- LoggingConfig: Logging levels, files, and debugging options
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///data/db/users.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("users.log")
    real_time_debug: bool = True


# Legacy flat variable names mapped onto nested groups
_FLAT_ENV_MAPPINGS = {
    "database": {
        "database_url": "url",
        "database_echo": "echo",
    },
    "logging": {
        "console_log_level": "console_level",
        "file_log_level": "file_level",
        "log_file": "log_file",
        "log_real_time_debug": "real_time_debug",
    },
}


def _nest_flat_values(values: dict[str, Any]) -> dict[str, Any]:
    """Pop legacy flat keys out of ``values`` and group them by section."""
    nested: dict[str, dict[str, Any]] = {}
    for group, mapping in _FLAT_ENV_MAPPINGS.items():
        for env_key, field_key in mapping.items():
            if env_key in values:
                nested.setdefault(group, {})[field_key] = values.pop(env_key)
    return nested


class FlatEnvSettingsSource(PydanticBaseSettingsSource):
    """Settings source for the legacy flat names (DATABASE_URL, LOG_FILE, ...).

    Reads them from the variables already loaded by the environment and
    dotenv sources, since those sources skip names that are not declared
    fields. Process environment wins over the .env file.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        *sources: PydanticBaseSettingsSource,
    ) -> None:
        super().__init__(settings_cls)
        # Ordered lowest priority first
        self._sources = sources

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for source in self._sources:
            env_vars = getattr(source, "env_vars", {})
            values.update(
                (key.lower(), value)
                for key, value in env_vars.items()
                if value is not None
            )
        return _nest_flat_values(values)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL, LOG_FILE
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL, LOGGING__LOG_FILE

    Both forms are read from the process environment and from the .env
    file. Nested names take precedence over flat ones.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            FlatEnvSettingsSource(settings_cls, dotenv_settings, env_settings),
            file_secret_settings,
        )

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map flat keyword arguments (database_url=...) onto nested groups."""
        if not isinstance(data, dict):
            return data

        for group, flat_values in _nest_flat_values(data).items():
            nested = data.get(group)
            if isinstance(nested, BaseModel):
                nested = nested.model_dump()
            data[group] = {**(nested or {}), **flat_values}

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Database settings
    "DATABASE_URL": lambda: settings.database.url,
    "DATABASE_ECHO": lambda: settings.database.echo,
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
}


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by its flat legacy key.

    Args:
        key: Flat configuration key, e.g. "DATABASE_URL"
        default: Value returned when the key is unknown

    Returns:
        Current configuration value or the default
    """
    getter = _LEGACY_KEY_MAP.get(key)
    if getter is None:
        return default
    return getter()
