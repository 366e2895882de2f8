"""Loading store snapshots from JSON files.

A snapshot file is a JSON object with two optional lists::

    {"dependencies": [DependencyEdge, ...],
     "compatibility": [CompatibilityRecord, ...]}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from models.modules import ModuleState
from models.records import CompatibilityRecord, DependencyEdge
from store.memory import ModuleStore

if TYPE_CHECKING:
    from pathlib import Path


class SnapshotError(Exception):
    """Raised when a snapshot or module state file cannot be loaded."""


def _read_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read {path}: {exc}"
        raise SnapshotError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise SnapshotError(msg) from exc


def _records(data: dict[str, Any], name: str, path: Path) -> list[Any]:
    raw = data.get(name, [])
    if not isinstance(raw, list):
        msg = f"Expected a list for '{name}' in {path}"
        raise SnapshotError(msg)
    return raw


def load_snapshot(path: Path) -> ModuleStore:
    """Load a snapshot file into a new ModuleStore.

    Raises:
        SnapshotError: If the file is unreadable, not JSON, or a record
            fails validation.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path}"
        raise SnapshotError(msg)

    try:
        edges = [
            DependencyEdge.model_validate(item)
            for item in _records(data, "dependencies", path)
        ]
        compatibility = [
            CompatibilityRecord.model_validate(item)
            for item in _records(data, "compatibility", path)
        ]
    except ValidationError as exc:
        msg = f"Invalid record in {path}: {exc}"
        raise SnapshotError(msg) from exc

    return ModuleStore(edges, compatibility)


def load_module_state(path: Path) -> ModuleState:
    """Load a single module record from a JSON file."""
    data = _read_json(path)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path}"
        raise SnapshotError(msg)
    return ModuleState.coerce(data)


__all__ = ["SnapshotError", "load_module_state", "load_snapshot"]
