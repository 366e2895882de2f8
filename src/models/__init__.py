"""Model namespace for modgraph-core records."""

from models.graph import DependencyGraph, DependencyNode, GraphEdge
from models.modules import ModuleState
from models.records import (
    CompatibilityRecord,
    CompatibilityStatus,
    DependencyEdge,
    DependencyType,
)
from models.validation import IssueType, ValidationIssue, ValidationResult

__all__ = [
    "CompatibilityRecord",
    "CompatibilityStatus",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyNode",
    "DependencyType",
    "GraphEdge",
    "IssueType",
    "ModuleState",
    "ValidationIssue",
    "ValidationResult",
]
