"""Validation of proposed module configuration changes.

The validator runs a fixed battery of checks over a proposed module state,
compared with its previous state, and reports what it finds as issues. It
never raises on malformed module data: describing malformed input is the
whole point. Graph-aware checks go through a :class:`DependencyGraphEngine`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from models.modules import ModuleState
from models.validation import ValidationIssue, ValidationResult
from rules.config import ValidatorConfig
from utils import dedupe

if TYPE_CHECKING:
    from graph.engine import DependencyGraphEngine

logger = logging.getLogger(__name__)


@dataclass
class _Buckets:
    issues: list[ValidationIssue] = field(default_factory=list)
    breaking: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    suggestions: list[ValidationIssue] = field(default_factory=list)
    affected_modules: list[str] = field(default_factory=list)


class ConfigValidator:
    """Checks module configuration changes against the dependency graph."""

    def __init__(
        self,
        engine: DependencyGraphEngine,
        config: ValidatorConfig | None = None,
    ) -> None:
        self.engine = engine
        self.config = config or ValidatorConfig()
        self._version_re = re.compile(self.config.version_pattern, re.ASCII)

    def validate_module(
        self,
        current: ModuleState | dict[str, Any] | None,
        proposed: ModuleState | dict[str, Any],
    ) -> ValidationResult:
        """Run every check on a proposed change.

        Args:
            current: Previously persisted state, or None for a new module
            proposed: State about to be saved

        Returns:
            ValidationResult with bucketed issues, score and save flags

        Raises:
            TypeError: If either state is not a mapping or ModuleState.
        """
        before = ModuleState.coerce(current)
        after = ModuleState.coerce(proposed)
        buckets = _Buckets()

        self._check_required_fields(after, buckets)
        self._check_key_change(before, after, buckets)
        self._check_removed_features(before, after, buckets)
        self._check_unknown_dependencies(after, buckets)
        self._check_self_dependency(after, buckets)
        self._check_version(after, buckets)
        self._check_compatibility(after, buckets)
        self._check_documentation(after, buckets)

        result = self._assemble(buckets)
        logger.debug(
            "validated module %r: score=%d can_save=%s codes=%s",
            after.module_key,
            result.score,
            result.can_save,
            result.codes(),
        )
        return result

    def validate_quick(
        self,
        current: ModuleState | dict[str, Any] | None,
        proposed: ModuleState | dict[str, Any],
    ) -> ValidationResult:
        """Fast path: required fields and key-rename impact only."""
        before = ModuleState.coerce(current)
        after = ModuleState.coerce(proposed)
        buckets = _Buckets()

        self._check_required_fields(after, buckets)
        self._check_key_change(before, after, buckets)

        return self._assemble(buckets)

    def _check_required_fields(self, after: ModuleState, buckets: _Buckets) -> None:
        if not after.module_key.strip():
            buckets.issues.append(
                ValidationIssue(
                    type="error",
                    code="MISSING_KEY",
                    message="Module key is required.",
                    field="module_key",
                )
            )
        if not after.module_name.strip():
            buckets.issues.append(
                ValidationIssue(
                    type="error",
                    code="MISSING_NAME",
                    message="Module name is required.",
                    field="module_name",
                )
            )

    def _check_key_change(
        self, before: ModuleState, after: ModuleState, buckets: _Buckets
    ) -> None:
        if not before.module_key or before.module_key == after.module_key:
            return

        dependents = self.engine.get_module_dependents(before.module_key)
        if not dependents:
            return

        # Breaking changes need confirmation but do not block saving.
        buckets.breaking.append(
            ValidationIssue(
                type="warning",
                code="KEY_CHANGE_BREAKING",
                message=(
                    f"Renaming '{before.module_key}' to '{after.module_key}' "
                    f"breaks {len(dependents)} dependent module(s)."
                ),
                field="module_key",
                suggestion="Update the dependent modules before renaming.",
            )
        )
        buckets.affected_modules.extend(dependents)

    def _check_removed_features(
        self, before: ModuleState, after: ModuleState, buckets: _Buckets
    ) -> None:
        kept = set(after.feature_keys())
        for key in dedupe(before.feature_keys()):
            if key in kept:
                continue
            buckets.warnings.append(
                ValidationIssue(
                    type="warning",
                    code="FEATURE_REMOVED",
                    message=f"Feature '{key}' was removed.",
                    field="features",
                    suggestion="Check that no module relies on this feature.",
                )
            )

    def _check_unknown_dependencies(
        self, after: ModuleState, buckets: _Buckets
    ) -> None:
        for dep in after.dependencies:
            if dep == self.engine.core_key or self.engine.knows(dep):
                continue
            buckets.warnings.append(
                ValidationIssue(
                    type="warning",
                    code="UNKNOWN_DEPENDENCY",
                    message=f"Dependency '{dep}' is not a known module.",
                    field="dependencies",
                    suggestion="Check the module key or register the dependency.",
                )
            )

    def _check_self_dependency(self, after: ModuleState, buckets: _Buckets) -> None:
        if after.module_key and after.module_key in after.dependencies:
            buckets.issues.append(
                ValidationIssue(
                    type="error",
                    code="CIRCULAR_DEPENDENCY",
                    message=f"Module '{after.module_key}' cannot depend on itself.",
                    field="dependencies",
                )
            )

    def _check_version(self, after: ModuleState, buckets: _Buckets) -> None:
        if not after.version:
            return
        if self._version_re.fullmatch(after.version):
            return
        buckets.warnings.append(
            ValidationIssue(
                type="warning",
                code="INVALID_VERSION",
                message=f"Version '{after.version}' is not in MAJOR.MINOR.PATCH form.",
                field="version",
                suggestion="Use a semantic version such as 1.0.0.",
            )
        )

    def _check_compatibility(self, after: ModuleState, buckets: _Buckets) -> None:
        if not after.module_key:
            return
        for dependent in self.engine.get_module_dependents(after.module_key):
            record = self.engine.check_compatibility(after.module_key, dependent)
            if record is None or record.status != "incompatible":
                continue
            buckets.warnings.append(
                ValidationIssue(
                    type="warning",
                    code="COMPATIBILITY_ISSUE",
                    message=(
                        f"Module '{dependent}' is marked incompatible with "
                        f"'{after.module_key}'."
                    ),
                    field="dependencies",
                    suggestion=record.notes,
                )
            )

    def _check_documentation(self, after: ModuleState, buckets: _Buckets) -> None:
        description = (after.description or "").strip()
        if not description:
            buckets.suggestions.append(
                ValidationIssue(
                    type="info",
                    code="MISSING_DESCRIPTION",
                    message="Module has no description.",
                    field="description",
                    suggestion="Describe what the module does.",
                )
            )
        elif len(description) < self.config.min_description_length:
            buckets.suggestions.append(
                ValidationIssue(
                    type="info",
                    code="SHORT_DESCRIPTION",
                    message=(
                        "Description is shorter than "
                        f"{self.config.min_description_length} characters."
                    ),
                    field="description",
                    suggestion="Expand the description.",
                )
            )

        if not after.features:
            buckets.suggestions.append(
                ValidationIssue(
                    type="info",
                    code="NO_FEATURES",
                    message="Module declares no features.",
                    field="features",
                    suggestion="List the features the module provides.",
                )
            )

    def _assemble(self, buckets: _Buckets) -> ValidationResult:
        error_count = sum(1 for issue in buckets.issues if issue.type == "error")
        breaking_count = len(buckets.breaking)
        warning_count = len(buckets.warnings)

        penalty = (
            self.config.error_penalty * (error_count + breaking_count)
            + self.config.warning_penalty * warning_count
        )
        score = max(0, min(100, 100 - penalty))

        return ValidationResult(
            is_valid=error_count == 0 and breaking_count == 0,
            score=score,
            can_save=error_count == 0,
            requires_confirmation=breaking_count > 0 or warning_count > 0,
            issues=buckets.issues,
            breaking=buckets.breaking,
            warnings=buckets.warnings,
            suggestions=buckets.suggestions,
            affected_modules=dedupe(buckets.affected_modules),
        )


__all__ = ["ConfigValidator"]
