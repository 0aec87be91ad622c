"""Configuration management for tagvalidator using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".tagvalidator.json"
DEFAULT_TAG_NAME = "valid"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class ErrorOverride(BaseModel):
    """Custom message for one (field, rule) failure.

    ``message`` may contain a ``%v`` placeholder for the rule parameter.
    """
    field: str
    rule: str
    message: str

    @field_validator("field", "rule")
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError("field and rule must not be empty")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class ValidatorConfig(BaseModel):
    """Complete tagvalidator configuration model."""
    tag_name: str = Field(alias="tagName", default=DEFAULT_TAG_NAME)
    overrides: list[ErrorOverride] = Field(default_factory=list)
    warn_on_unknown_rules: bool = Field(alias="warnOnUnknownRules", default=False)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("tag_name")
    @classmethod
    def validate_tag_name(cls, v):
        if not v or not v.strip():
            raise ValueError("tagName must not be empty")
        return v

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def load_config(config_path: str | Path | None = None) -> ValidatorConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .tagvalidator.json

    Returns:
        ValidatorConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ValidatorConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .tagvalidator.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> ValidatorConfig:
    """Create default configuration: tag key "valid", no overrides."""
    return ValidatorConfig()


def apply_logging_config(config: ValidatorConfig) -> None:
    """Set the level of the tagvalidator logger hierarchy."""
    level = _LEVELS[LogLevel(config.logging.level)]
    logging.getLogger("tagvalidator").setLevel(level)
