"""Backing store stand-ins for modgraph-core."""

from store.memory import ModuleStore
from store.snapshot import SnapshotError, load_module_state, load_snapshot

__all__ = ["ModuleStore", "SnapshotError", "load_module_state", "load_snapshot"]
