from __future__ import annotations

import re
from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from graph.algos import CORE_KEY

CONFIG_FILENAME = "modgraph.toml"

DEFAULT_VERSION_PATTERN = r"^\d+\.\d+\.\d+$"


class GraphConfig(BaseModel):
    """Configuration for dependency graph construction."""

    model_config = ConfigDict(extra="forbid")

    core_key: str = Field(
        default=CORE_KEY,
        min_length=1,
        description="Reserved module key treated as the root of every tree",
    )


class ValidatorConfig(BaseModel):
    """Scoring and threshold settings for module validation."""

    model_config = ConfigDict(extra="forbid")

    error_penalty: int = Field(
        default=20,
        ge=0,
        description="Score penalty per error or breaking issue",
    )
    warning_penalty: int = Field(
        default=5,
        ge=0,
        description="Score penalty per warning",
    )
    min_description_length: int = Field(
        default=20,
        ge=0,
        description="Descriptions shorter than this get a suggestion",
    )
    version_pattern: str = Field(
        default=DEFAULT_VERSION_PATTERN,
        description="Regular expression a module version must match",
    )

    @field_validator("version_pattern")
    @classmethod
    def validate_version_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            msg = f"Invalid version_pattern {v!r}: {exc}"
            raise ValueError(msg) from exc
        return v


class ModGraphConfig(BaseModel):
    """Configuration for modgraph-core."""

    model_config = ConfigDict(extra="forbid")

    graph: GraphConfig = Field(
        default_factory=GraphConfig,
        description="Dependency graph settings",
    )
    validator: ValidatorConfig = Field(
        default_factory=ValidatorConfig,
        description="Module validation settings",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ModGraphConfig:
    """Load configuration from modgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModGraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModGraphConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
