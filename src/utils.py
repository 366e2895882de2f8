"""Shared utilities for modgraph-core."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from models.records import DependencyEdge


def dedupe(items: Iterable[str]) -> list[str]:
    """Return items without duplicates, keeping first-seen order.

    Examples:
        >>> dedupe(["c", "d", "c"])
        ['c', 'd']
    """
    return list(dict.fromkeys(items))


def edges_fingerprint(edges: Iterable[DependencyEdge], *, core_key: str) -> str:
    """Compute a stable sha256 fingerprint of an edge list.

    Edge order is part of the fingerprint: it decides node iteration order,
    and with it the order of ``levels`` entries in a built graph.
    """
    payload = {
        "core_key": core_key,
        "edges": [edge.model_dump() for edge in edges],
    }
    encoded = orjson.dumps(payload, option=orjson.OPT_SORT_KEYS)
    return hashlib.sha256(encoded).hexdigest()
