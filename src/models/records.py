"""Input records supplied by the backing store.

This module contains the dependency edge and compatibility judgment models
that the graph engine is built from.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

DependencyType = Literal["required", "optional", "peer", "dev"]
CompatibilityStatus = Literal[
    "compatible", "partial", "incompatible", "unknown", "testing"
]


class DependencyEdge(BaseModel):
    """A directed "module depends on module" edge."""

    module_key: str
    depends_on: str
    dependency_type: DependencyType = "required"
    min_version: str | None = None
    max_version: str | None = None
    is_active: bool = True


class CompatibilityRecord(BaseModel):
    """A compatibility judgment over an unordered pair of modules."""

    module_a: str
    module_b: str
    status: CompatibilityStatus = "unknown"
    score: float | None = None
    notes: str | None = None

    def matches(self, a: str, b: str) -> bool:
        return (self.module_a == a and self.module_b == b) or (
            self.module_a == b and self.module_b == a
        )


__all__ = [
    "CompatibilityRecord",
    "CompatibilityStatus",
    "DependencyEdge",
    "DependencyType",
]
