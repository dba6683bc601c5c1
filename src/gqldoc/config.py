"""Configuration for document rendering.

Settings live in an optional ``gqldoc.yaml`` file:

    title: Example API
    description: Public API of the *example* service.
    minify: true
    toc: true
    layout:
      field_description_width: 69
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

CONFIG_FILENAME = "gqldoc.yaml"
DEFAULT_WRAP_WIDTH = 69
MIN_WRAP_WIDTH = 20


class LayoutConfig(BaseModel):
    """Wrap widths for text placed in table cells and lists.

    Each fragment has its own budget; call sites subtract the length of any
    label already written on the same line.
    """

    field_description_width: int = DEFAULT_WRAP_WIDTH
    argument_description_width: int = DEFAULT_WRAP_WIDTH
    input_field_description_width: int = DEFAULT_WRAP_WIDTH
    enum_value_description_width: int = DEFAULT_WRAP_WIDTH
    mutation_input_width: int = DEFAULT_WRAP_WIDTH

    @field_validator("*")
    @classmethod
    def check_width(cls, v: int) -> int:
        """Widths below the minimum would break almost every word."""
        if v < MIN_WRAP_WIDTH:
            raise ValueError(f"wrap width must be at least {MIN_WRAP_WIDTH}, got {v}")
        return v

    def budget(self, width: int, label: str = "") -> int:
        """Width left on a line after ``label``, never below the minimum."""
        return max(width - len(label), MIN_WRAP_WIDTH)


class RenderConfig(BaseModel):
    """Configuration for Markdown document generation."""

    title: str = "Schema Documentation"
    description: str | None = None  # Markdown paragraph shown under the title
    minify: bool = True  # Compact embedded HTML tables
    toc: bool = True
    layout: LayoutConfig = Field(default_factory=LayoutConfig)


def load_config(config_path: Path | str) -> RenderConfig:
    """Load render configuration from a YAML file.

    Args:
        config_path: Path to the gqldoc.yaml file

    Returns:
        Parsed RenderConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the file is empty, not a mapping, or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from e

    if not data:
        raise ConfigError(f"Empty configuration file: {config_path}")
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the root level")

    try:
        return RenderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def discover_config(
    schema_paths: Sequence[Path | str], config_path: Path | None = None
) -> RenderConfig:
    """Find and load the render configuration.

    Search order:
    1. Explicit config_path argument
    2. gqldoc.yaml in the directory of the first schema file
    3. gqldoc.yaml in the current directory

    Falls back to defaults when none is found.
    """
    if config_path is not None:
        return load_config(config_path)

    candidates: list[Path] = []
    if schema_paths:
        candidates.append(Path(schema_paths[0]).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_config(candidate)
    return RenderConfig()
