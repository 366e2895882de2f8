"""Caller-owned cache of built dependency graphs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from graph.algos import CORE_KEY, build_dependency_graph
from utils import edges_fingerprint

if TYPE_CHECKING:
    from models.graph import DependencyGraph
    from models.records import DependencyEdge

logger = logging.getLogger(__name__)


class GraphCache:
    """Cache of built graphs keyed by a fingerprint of the edge list.

    Only the ``max_entries`` most recently used graphs are kept. Built
    graphs are shared between callers and must be treated as read-only.
    """

    def __init__(self, *, core_key: str = CORE_KEY, max_entries: int = 8) -> None:
        if max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self.core_key = core_key
        self.max_entries = max_entries
        self._entries: dict[str, DependencyGraph] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def fingerprint(self, edges: Iterable[DependencyEdge]) -> str:
        active = [edge for edge in edges if edge.is_active]
        return edges_fingerprint(active, core_key=self.core_key)

    def get_or_build(self, edges: Iterable[DependencyEdge]) -> DependencyGraph:
        edge_list = list(edges)
        key = self.fingerprint(edge_list)
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("graph cache hit for %s", key[:12])
            self._entries[key] = self._entries.pop(key)
            return cached

        logger.debug("graph cache miss for %s; rebuilding", key[:12])
        graph = build_dependency_graph(edge_list, core_key=self.core_key)
        self._entries[key] = graph
        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        return graph

    def invalidate(self) -> None:
        self._entries.clear()


__all__ = ["GraphCache"]
