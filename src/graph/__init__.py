"""Module dependency graph construction and queries."""

from graph.algos import CORE_KEY, build_dependency_graph
from graph.cache import GraphCache
from graph.engine import DependencyGraphEngine

__all__ = [
    "CORE_KEY",
    "DependencyGraphEngine",
    "GraphCache",
    "build_dependency_graph",
]
