"""Validation issue and result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

IssueType = Literal["error", "warning", "info"]


class ValidationIssue(BaseModel):
    """A single finding about a proposed module configuration."""

    type: IssueType
    code: str
    message: str
    field: str | None = None
    suggestion: str | None = None


class ValidationResult(BaseModel):
    """Issues grouped by bucket, plus the fields derived from them."""

    is_valid: bool
    score: int
    can_save: bool
    requires_confirmation: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    breaking: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    suggestions: list[ValidationIssue] = Field(default_factory=list)
    affected_modules: list[str] = Field(default_factory=list)

    def all_issues(self) -> list[ValidationIssue]:
        return [*self.issues, *self.breaking, *self.warnings, *self.suggestions]

    def codes(self) -> list[str]:
        return [issue.code for issue in self.all_issues()]


__all__ = ["IssueType", "ValidationIssue", "ValidationResult"]
