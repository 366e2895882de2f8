"""Derived dependency graph models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models.records import DependencyType  # noqa: TC001


class DependencyNode(BaseModel):
    """One node per module key appearing in any active edge."""

    id: str
    dependencies: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)
    level: int = 0
    is_core: bool = False


class GraphEdge(BaseModel):
    """A directed edge from a module to the module it depends on."""

    from_key: str = Field(alias="from")
    to: str
    type: DependencyType

    model_config = ConfigDict(populate_by_name=True)


class DependencyGraph(BaseModel):
    """Dependency graph rebuilt in full from the active edge list."""

    nodes: dict[str, DependencyNode] = Field(default_factory=dict)
    edges: list[GraphEdge] = Field(default_factory=list)
    levels: dict[int, list[str]] = Field(default_factory=dict)
    has_cycles: bool = False
    cycles: list[list[str]] = Field(default_factory=list)


__all__ = ["DependencyGraph", "DependencyNode", "GraphEdge"]
