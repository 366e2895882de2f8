"""Query surface over a module dependency graph.

The engine owns a built :class:`DependencyGraph` and the compatibility
judgments it was refreshed with. Every query is synchronous and never
raises on data: unknown keys yield empty results and cycles are reported
through ``has_cycles``/``cycles`` on the graph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from pydantic import ValidationError

from graph.algos import (
    CORE_KEY,
    build_dependency_graph,
    collect_reachable,
    installation_order,
)
from graph.cache import GraphCache
from models.graph import DependencyGraph
from models.records import CompatibilityRecord, DependencyEdge

logger = logging.getLogger(__name__)

_RecordT = TypeVar("_RecordT", DependencyEdge, CompatibilityRecord)


def _valid_records(
    model: type[_RecordT], values: Iterable[_RecordT | dict[str, Any]]
) -> list[_RecordT]:
    """Validate store rows, skipping the ones that do not fit the model."""
    records: list[_RecordT] = []
    for value in values:
        if isinstance(value, model):
            records.append(value)
            continue
        try:
            records.append(model.model_validate(value))
        except ValidationError as exc:
            logger.warning(
                "skipping malformed %s %r: %s", model.__name__, value, exc
            )
    return records


class DependencyGraphEngine:
    """Dependency graph plus compatibility lookups for a set of modules."""

    def __init__(
        self,
        edges: Iterable[DependencyEdge | dict[str, Any]] = (),
        compatibility: Iterable[CompatibilityRecord | dict[str, Any]] = (),
        *,
        core_key: str = CORE_KEY,
        cache: GraphCache | None = None,
    ) -> None:
        if cache is not None and cache.core_key != core_key:
            msg = (
                f"cache core_key {cache.core_key!r} does not match engine "
                f"core_key {core_key!r}"
            )
            raise ValueError(msg)
        self.core_key = core_key
        self._cache = cache
        self._graph = DependencyGraph()
        self._compatibility: list[CompatibilityRecord] = []
        self._dependencies: dict[str, list[str]] = {}
        self._dependents: dict[str, list[str]] = {}
        self.refresh(edges, compatibility)

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def compatibility(self) -> list[CompatibilityRecord]:
        return list(self._compatibility)

    def refresh(
        self,
        edges: Iterable[DependencyEdge | dict[str, Any]],
        compatibility: Iterable[CompatibilityRecord | dict[str, Any]] = (),
    ) -> DependencyGraph:
        """Rebuild the graph in full from a fresh snapshot.

        Rows that fail validation are logged and left out of the graph.
        """
        edge_list = _valid_records(DependencyEdge, edges)
        self._compatibility = _valid_records(CompatibilityRecord, compatibility)

        if self._cache is not None:
            self._graph = self._cache.get_or_build(edge_list)
        else:
            self._graph = build_dependency_graph(edge_list, core_key=self.core_key)

        self._dependencies = {
            node_id: node.dependencies for node_id, node in self._graph.nodes.items()
        }
        self._dependents = {
            node_id: node.dependents for node_id, node in self._graph.nodes.items()
        }

        logger.debug(
            "rebuilt dependency graph: %d nodes, %d edges, %d compatibility records",
            len(self._graph.nodes),
            len(self._graph.edges),
            len(self._compatibility),
        )
        if self._graph.has_cycles:
            logger.warning(
                "dependency graph has %d cycle(s): %s",
                len(self._graph.cycles),
                "; ".join(" -> ".join(cycle) for cycle in self._graph.cycles),
            )
        return self._graph

    def knows(self, key: str) -> bool:
        """Return True when key is an endpoint of any active edge."""
        return key in self._graph.nodes

    def get_module_dependencies(self, key: str) -> list[str]:
        return collect_reachable(self._dependencies, key)

    def get_module_dependents(self, key: str) -> list[str]:
        return collect_reachable(self._dependents, key)

    def check_compatibility(self, a: str, b: str) -> CompatibilityRecord | None:
        """Look up the judgment for the unordered pair (a, b).

        No inference is made: a judgment for (a, b) says nothing about
        (b, c) or (a, c).
        """
        for record in self._compatibility:
            if record.matches(a, b):
                return record
        return None

    def get_installation_order(self, keys: Sequence[str]) -> list[str]:
        return installation_order(self._dependencies, keys)


__all__ = ["DependencyGraphEngine"]
