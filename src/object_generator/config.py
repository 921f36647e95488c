"""
Configuration management for the object generator.

Loads configuration from YAML with ZERO defaults.
Every value must be explicitly specified or startup fails.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    import numpy as np


class ServiceConfig(BaseModel):
    """Identity of the tool embedding the generator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    version: str


class PrefixConfig(BaseModel):
    """Key prefix policy for generated objects."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    custom: str
    random_length: int = Field(ge=0)


class RandomConfig(BaseModel):
    """Options for the random data source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    block_size: int
    strategy: Literal["resynthesize", "reuse"]


class TextConfig(BaseModel):
    """Options for the compressible text data source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    block_size: int


class GeneratorConfig(BaseModel):
    """
    Immutable parameters shared by all sources.

    total_size is the exact object size, or the upper bound when
    randomize_size is set. A compression_ratio of 0 disables
    compressibility control.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: Literal["random", "text"]
    total_size: int = Field(ge=1)
    randomize_size: bool
    seed: int | None
    compression_ratio: int = Field(ge=0)
    compression_window: int = Field(ge=1)
    prefix: PrefixConfig
    random: RandomConfig
    text: TextConfig

    def size_for_object(self, rng: np.random.Generator) -> int:
        """
        Pick the size of the next object.

        Args:
            rng: Seeded generator owned by the calling source

        Returns:
            total_size, or a uniform draw in [1, total_size] when randomized
        """
        if not self.randomize_size:
            return self.total_size
        return int(rng.integers(1, self.total_size, endpoint=True))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str
    format: Literal["json"]


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.

    Usage:
        from object_generator.config import get_settings
        settings = get_settings()
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    service: ServiceConfig
    generator: GeneratorConfig
    logging: LoggingConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load and parse YAML configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigurationError: If file is missing, empty, or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Create the file or set CONFIG_PATH environment variable."
        )

    try:
        with config_path.open() as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"All configuration values must be explicitly specified."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}"
        )

    return config


def get_config_path() -> Path:
    """
    Determine configuration file path.

    Uses CONFIG_PATH environment variable if set, otherwise defaults
    to ./config.yaml relative to working directory.

    Returns:
        Path to configuration file
    """
    config_path_str = os.environ.get("CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


def load_settings(yaml_config: dict[str, Any]) -> Settings:
    """
    Build typed settings from raw YAML config.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"All configuration values must be explicitly specified.\n"
            f"No default values are allowed."
        ) from e


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate configuration.

    Cached to ensure single instance across the process.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: Config file missing or invalid
    """
    config_path = get_config_path()
    yaml_config = load_yaml_config(config_path)
    return load_settings(yaml_config)


def clear_settings_cache() -> None:
    """Clear the settings cache. Used in testing."""
    get_settings.cache_clear()
