"""Module configuration validation."""

from validate.validator import ConfigValidator

__all__ = ["ConfigValidator"]
