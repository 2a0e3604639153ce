"""Configuration management for Taskboard.

This module defines the configuration schema using Pydantic settings,
supporting TOML files, environment variables, and programmatic overrides.

Configuration loading priority (highest to lowest):
1. Environment variables (TASKBOARD_* prefix)
2. TOML configuration file, or keyword arguments passed to TaskboardConfig
3. Default values defined in this module

Example TOML configuration:
    [logging]
    level = "DEBUG"
    format = "console"

    [rules]
    description_min_length = 10
    people_max = 8

Example environment variable override:
    TASKBOARD_RULES__PEOPLE_MAX=8
    TASKBOARD_LOGGING__LEVEL=WARNING
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomli
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (json or console)
        file: Optional log file path (None for stream output only)
        rotation_size_mb: Log file rotation size in megabytes
        retention_count: Number of rotated log files to keep
        stream: Stream used when no file is configured (stdout or stderr)
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_LOGGING__",
        extra="forbid",
    )

    level: str = Field(default="INFO")
    format: str = Field(default="json")
    file: Path | None = Field(default=None)
    rotation_size_mb: int = Field(default=50, ge=1, le=1000)
    retention_count: int = Field(default=10, ge=1, le=100)
    stream: str = Field(default="stdout")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format is recognized."""
        valid_formats = {"json", "console"}
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return v_lower

    @field_validator("stream")
    @classmethod
    def validate_stream(cls, v: str) -> str:
        """Validate output stream name is recognized."""
        valid_streams = {"stdout", "stderr"}
        v_lower = v.lower()
        if v_lower not in valid_streams:
            raise ValueError(f"Invalid log stream: {v}. Must be one of {valid_streams}")
        return v_lower


class InputRulesConfig(BaseSettings):
    """Constraints applied to project proposals before they reach the store.

    Attributes:
        title_required: Reject blank titles
        description_min_length: Minimum description length in characters
        people_min: Smallest accepted people count (inclusive)
        people_max: Largest accepted people count (inclusive)
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_RULES__",
        extra="forbid",
    )

    title_required: bool = Field(default=True)
    description_min_length: int = Field(default=5, ge=0, le=10000)
    people_min: int = Field(default=1, ge=1)
    people_max: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def validate_people_range(self) -> "InputRulesConfig":
        """Ensure the people range is not empty."""
        if self.people_min > self.people_max:
            raise ValueError(
                f"people_min ({self.people_min}) must not exceed people_max ({self.people_max})"
            )
        return self


class TaskboardConfig(BaseSettings):
    """Root configuration for Taskboard.

    Configuration can be loaded from:
    1. TOML files (using load_config function)
    2. Environment variables (TASKBOARD_* prefix)
    3. Direct instantiation with keyword arguments

    Environment variable format for nested config:
        TASKBOARD_<SECTION>__<KEY>=value
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_nested_delimiter="__",
        extra="forbid",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rules: InputRulesConfig = Field(default_factory=InputRulesConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let environment variables win over values loaded from TOML."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_config(config_path: Path | None = None) -> TaskboardConfig:
    """Load configuration from TOML file with environment variable overrides.

    Configuration search order (first found is used):
    1. config_path if explicitly provided
    2. ./taskboard.toml (current directory)
    3. ~/.config/taskboard/config.toml (user config directory)

    Args:
        config_path: Explicit path to TOML config file. If None, searches
                    default locations.

    Returns:
        TaskboardConfig: Fully resolved configuration instance.

    Raises:
        FileNotFoundError: If config_path is explicitly provided but doesn't exist.
        ValueError: If TOML file contains invalid configuration.
    """
    toml_data: dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        selected_path = config_path
    else:
        search_paths = [
            Path.cwd() / "taskboard.toml",
            Path.home() / ".config" / "taskboard" / "config.toml",
        ]
        selected_path = None
        for path in search_paths:
            if path.exists():
                selected_path = path
                break

    if selected_path is not None:
        with open(selected_path, "rb") as f:
            toml_data = tomli.load(f)

    # Pydantic overlays environment variables on top of the TOML data
    try:
        return TaskboardConfig(**toml_data)
    except Exception as e:
        if selected_path:
            raise ValueError(
                f"Invalid configuration in {selected_path}: {e}"
            ) from e
        else:
            raise ValueError(f"Invalid configuration: {e}") from e
