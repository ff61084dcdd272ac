"""Configuration management for archview using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".archview.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class WorkspaceConfig(BaseModel):
    """Workspace metadata section."""
    name: str = "Workspace"
    description: str = ""
    version: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("workspace name must not be empty")
        return v


class ViewsConfig(BaseModel):
    """View materialization section."""
    auto_complete_relationships: bool = Field(alias="autoCompleteRelationships", default=True)
    auto_add_context_system: bool = Field(alias="autoAddContextSystem", default=True)

    model_config = ConfigDict(populate_by_name=True)


class ValidationConfig(BaseModel):
    """Validation configuration section."""
    fail_on_empty_animation: bool = Field(alias="failOnEmptyAnimation", default=True)
    check_relationship_endpoints: bool = Field(alias="checkRelationshipEndpoints", default=True)
    warn_on_unrelated_elements: bool = Field(alias="warnOnUnrelatedElements", default=False)

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class ArchviewConfig(BaseModel):
    """Complete archview configuration model."""
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    views: ViewsConfig = Field(default_factory=ViewsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ArchviewConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .archview.json

    Returns:
        ArchviewConfig: Loaded and validated configuration

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
            return ArchviewConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .archview.json configuration file by searching up directory tree.

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


def create_default_config() -> ArchviewConfig:
    """Create default configuration."""
    return ArchviewConfig()


_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def configure_logging(config: ArchviewConfig) -> None:
    """Apply the configured level to the archview logger hierarchy."""
    level = config.logging.level
    if isinstance(level, LogLevel):
        level = level.value
    logging.getLogger("archview").setLevel(_LEVELS[level])
