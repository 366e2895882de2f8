"""Module configuration state passed to the validator.

Module records carry arbitrary extra fields. The fields the validator
inspects are typed; anything else is kept in ``model_extra`` untouched.
Every typed field is coerced leniently so that building a state from a
malformed record never raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModuleState(BaseModel):
    """A snapshot of a module configuration record."""

    model_config = ConfigDict(extra="allow")

    module_key: str = ""
    module_name: str = ""
    description: str | None = None
    features: list[Any] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    version: str | None = None

    @field_validator("module_key", "module_name", mode="before")
    @classmethod
    def coerce_required_str(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("description", "version", mode="before")
    @classmethod
    def coerce_optional_str(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("features", mode="before")
    @classmethod
    def coerce_features(cls, v: Any) -> list[Any]:
        return list(v) if isinstance(v, (list, tuple)) else []

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [
            dep if isinstance(dep, str) else str(dep) for dep in v if dep is not None
        ]

    def feature_keys(self) -> list[str]:
        """Return the keys of features that carry one, in order."""
        keys: list[str] = []
        for feature in self.features:
            key = (
                feature.get("key")
                if isinstance(feature, dict)
                else getattr(feature, "key", None)
            )
            if isinstance(key, str) and key:
                keys.append(key)
        return keys

    @classmethod
    def coerce(cls, value: ModuleState | dict[str, Any] | None) -> ModuleState:
        """Build a state from a record, a mapping, or nothing at all.

        Raises:
            TypeError: If value is neither a mapping, a ModuleState nor None.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            msg = f"module state must be a mapping, got {type(value).__name__}"
            raise TypeError(msg)
        return cls.model_validate(value)


__all__ = ["ModuleState"]
