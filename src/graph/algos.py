"""Graph algorithms over module dependency edges."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.graph import DependencyGraph, DependencyNode, GraphEdge

if TYPE_CHECKING:
    from collections.abc import Iterator

    from models.records import DependencyEdge

CORE_KEY = "core"


@dataclass
class _Frame:
    node_id: str
    pending: Iterator[str]
    best: int = -1


class _LevelState:
    """Mutable state for the level and cycle traversal."""

    def __init__(self, nodes: dict[str, DependencyNode]) -> None:
        self.nodes = nodes
        self.visited: set[str] = set()
        self.path: list[str] = []
        self.on_path: set[str] = set()
        self.cycles: list[list[str]] = []

    def enter(self, node_id: str) -> _Frame:
        self.visited.add(node_id)
        self.path.append(node_id)
        self.on_path.add(node_id)
        return _Frame(node_id, iter(self.nodes[node_id].dependencies))

    def leave(self, frame: _Frame) -> int:
        self.path.pop()
        self.on_path.discard(frame.node_id)
        level = frame.best + 1 if frame.best >= 0 else 0
        self.nodes[frame.node_id].level = level
        return level


def _resolve_levels(start: str, state: _LevelState) -> None:
    """Assign levels to every node reachable from start.

    Depth-first with an explicit work stack. A dependency that is still on
    the active path closes a cycle: the path segment from its first
    occurrence is recorded and the branch contributes level 0.
    """
    stack = [state.enter(start)]
    while stack:
        frame = stack[-1]
        descended = False
        for dep in frame.pending:
            if dep in state.on_path:
                state.cycles.append(state.path[state.path.index(dep) :])
                frame.best = max(frame.best, 0)
            elif dep in state.visited:
                frame.best = max(frame.best, state.nodes[dep].level)
            else:
                stack.append(state.enter(dep))
                descended = True
                break
        if descended:
            continue

        level = state.leave(stack.pop())
        if stack:
            stack[-1].best = max(stack[-1].best, level)


def build_dependency_graph(
    edges: Iterable[DependencyEdge], *, core_key: str = CORE_KEY
) -> DependencyGraph:
    """Build a dependency graph from active dependency edges.

    Inactive edges are skipped. The result is a pure function of the edge
    list: node order follows first appearance of each key in the edges.

    Args:
        edges: Dependency edges as supplied by the backing store
        core_key: Reserved key marking the implicit root module

    Returns:
        DependencyGraph with nodes, edges, levels and any detected cycles
    """
    active = [edge for edge in edges if edge.is_active]

    nodes: dict[str, DependencyNode] = {}
    for edge in active:
        for key in (edge.module_key, edge.depends_on):
            if key not in nodes:
                nodes[key] = DependencyNode(id=key, is_core=key == core_key)

    graph_edges: list[GraphEdge] = []
    for edge in active:
        nodes[edge.module_key].dependencies.append(edge.depends_on)
        nodes[edge.depends_on].dependents.append(edge.module_key)
        graph_edges.append(
            GraphEdge(
                from_key=edge.module_key,
                to=edge.depends_on,
                type=edge.dependency_type,
            )
        )

    state = _LevelState(nodes)
    for node_id in nodes:
        if node_id not in state.visited:
            _resolve_levels(node_id, state)

    levels: dict[int, list[str]] = {}
    for node_id, node in nodes.items():
        levels.setdefault(node.level, []).append(node_id)

    return DependencyGraph(
        nodes=nodes,
        edges=graph_edges,
        levels=levels,
        has_cycles=bool(state.cycles),
        cycles=state.cycles,
    )


def collect_reachable(adjacency: Mapping[str, Sequence[str]], key: str) -> list[str]:
    """Return every key reachable from key, in depth-first discovery order.

    The start key is only included when a cycle leads back to it. Unknown
    keys yield an empty list.
    """
    seen: dict[str, None] = {}
    stack = list(reversed(adjacency.get(key, ())))
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen[current] = None
        stack.extend(reversed(adjacency.get(current, ())))
    return list(seen)


def installation_order(
    adjacency: Mapping[str, Sequence[str]], candidates: Sequence[str]
) -> list[str]:
    """Order candidates so each comes after its dependencies among candidates.

    Post-order depth-first traversal seeded from each candidate in input
    order. Dependencies outside the candidate set are ignored. Cycles inside
    the candidate set are not broken: each key is emitted once, in the order
    the traversal first completes it.
    """
    candidate_set = set(candidates)
    visited: set[str] = set()
    order: list[str] = []

    def _pending(node_id: str) -> Iterator[str]:
        return (dep for dep in adjacency.get(node_id, ()) if dep in candidate_set)

    for key in candidates:
        if key in visited:
            continue
        visited.add(key)
        stack: list[tuple[str, Iterator[str]]] = [(key, _pending(key))]
        while stack:
            node_id, pending = stack[-1]
            for dep in pending:
                if dep not in visited:
                    visited.add(dep)
                    stack.append((dep, _pending(dep)))
                    break
            else:
                stack.pop()
                order.append(node_id)

    return order


__all__ = [
    "CORE_KEY",
    "_LevelState",
    "_resolve_levels",
    "build_dependency_graph",
    "collect_reachable",
    "installation_order",
]
