"""In-memory backing store for dependency edges and compatibility records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.records import (
    CompatibilityRecord,
    CompatibilityStatus,
    DependencyEdge,
    DependencyType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def _pair_key(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)


class ModuleStore:
    """Holds the edge and compatibility lists an engine is refreshed from.

    Edges are unique per ``(module_key, depends_on)``, an active edge winning
    over an inactive duplicate. Compatibility records are unique per
    unordered module pair. Insertion order is preserved.
    """

    def __init__(
        self,
        edges: Iterable[DependencyEdge] = (),
        compatibility: Iterable[CompatibilityRecord] = (),
    ) -> None:
        self._edges: dict[tuple[str, str], DependencyEdge] = {}
        self._compatibility: dict[tuple[str, str], CompatibilityRecord] = {}
        for edge in edges:
            pair = (edge.module_key, edge.depends_on)
            existing = self._edges.get(pair)
            if existing is not None:
                logger.debug("duplicate dependency %s -> %s", *pair)
                if existing.is_active and not edge.is_active:
                    continue
            self._edges[pair] = edge
        for record in compatibility:
            self._compatibility[_pair_key(record.module_a, record.module_b)] = record

    def add_dependency(
        self,
        module_key: str,
        depends_on: str,
        dependency_type: DependencyType = "required",
        min_version: str | None = None,
        max_version: str | None = None,
    ) -> DependencyEdge:
        """Add an active edge, replacing any existing edge for the same pair."""
        edge = DependencyEdge(
            module_key=module_key,
            depends_on=depends_on,
            dependency_type=dependency_type,
            min_version=min_version,
            max_version=max_version,
            is_active=True,
        )
        self._edges[(module_key, depends_on)] = edge
        logger.debug(
            "added dependency %s -> %s (%s)", module_key, depends_on, dependency_type
        )
        return edge

    def remove_dependency(self, module_key: str, depends_on: str) -> bool:
        removed = self._edges.pop((module_key, depends_on), None) is not None
        if removed:
            logger.debug("removed dependency %s -> %s", module_key, depends_on)
        return removed

    def upsert_compatibility(
        self,
        module_a: str,
        module_b: str,
        status: CompatibilityStatus,
        score: float | None = None,
        notes: str | None = None,
    ) -> CompatibilityRecord:
        """Insert or replace the judgment for an unordered module pair."""
        record = CompatibilityRecord(
            module_a=module_a,
            module_b=module_b,
            status=status,
            score=score,
            notes=notes,
        )
        self._compatibility[_pair_key(module_a, module_b)] = record
        logger.debug("upserted compatibility %s <-> %s: %s", module_a, module_b, status)
        return record

    def edges(self) -> list[DependencyEdge]:
        return list(self._edges.values())

    def compatibility(self) -> list[CompatibilityRecord]:
        return list(self._compatibility.values())

    def snapshot(self) -> tuple[list[DependencyEdge], list[CompatibilityRecord]]:
        """Return the active edges and all compatibility records."""
        active = [edge for edge in self._edges.values() if edge.is_active]
        return active, self.compatibility()


__all__ = ["ModuleStore"]
