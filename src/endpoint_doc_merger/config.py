"""
Configuration loading and validation for Endpoint Documentation Merger.

This module handles configuration file parsing, validation, and provides
sensible defaults for all configuration options.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class MergeConfig(BaseModel):
    """Configuration for the merge core."""

    wrapper_types: list[str] = Field(
        default=["ResponseEnvelope", "ResponseEntity"],
        description="Return type names treated as transport envelopes.",
    )


class ScannerConfig(BaseModel):
    """Configuration for controller scanning."""

    include_private: bool = Field(
        default=False,
        description="Document handler methods whose name starts with an underscore.",
    )


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    colorize: bool = Field(
        default=True,
        description="Use colors in terminal output.",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose output.",
    )


class Config(BaseModel):
    """Root configuration model for Endpoint Documentation Merger."""

    merge: MergeConfig = Field(default_factory=MergeConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the configuration file. If None, returns defaults.

    Returns:
        Config object with loaded or default values.

    Raises:
        FileNotFoundError: If the specified config file doesn't exist.
        ValueError: If the config file is invalid.
    """
    if config_path is None:
        return Config()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to load configuration: {e}") from e


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Search for a configuration file starting from the given path.

    Searches for `.doc-merger.yaml` or `.doc-merger.yml` in the start
    path and parent directories.

    Args:
        start_path: Directory to start searching from.

    Returns:
        Path to the config file if found, None otherwise.
    """
    config_names = [".doc-merger.yaml", ".doc-merger.yml"]

    current = start_path.resolve()
    while current != current.parent:
        for name in config_names:
            config_path = current / name
            if config_path.exists():
                return config_path
        current = current.parent

    return None
