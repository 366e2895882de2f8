"""Configuration rules for modgraph-core."""

from rules.config import (
    ConfigError,
    GraphConfig,
    ModGraphConfig,
    ValidatorConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "GraphConfig",
    "ModGraphConfig",
    "ValidatorConfig",
    "load_config",
]
