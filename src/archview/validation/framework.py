"""Core validation framework for archview workspaces.

Rules run independently over a finalized workspace and record issues into a
single result so callers see every problem at once rather than the first.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from archview.config import ArchviewConfig

if TYPE_CHECKING:
    from archview.workspace import Workspace

logger = logging.getLogger(__name__)


class ValidationStatus(str, Enum):
    """Validation status."""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass
class ValidationIssue:
    """A single validation issue found during validation."""
    rule: str
    severity: ValidationStatus
    message: str
    entity: str | None = None
    path: str | None = None
    error: Exception | None = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        location = ""
        if self.entity:
            location += f" in {self.entity}"
        if self.path:
            location += f" at {self.path}"
        return f"[{self.severity.value.upper()}] {self.rule}: {self.message}{location}"


@dataclass
class ValidationResult:
    """Accumulated outcome of a validation pass."""
    status: ValidationStatus = ValidationStatus.PASS
    issues: list[ValidationIssue] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        """0 = pass/warn, 1 = fail."""
        return 0 if self.status != ValidationStatus.FAIL else 1

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationStatus.FAIL]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationStatus.WARN]

    def add_issue(self, rule: str, severity: ValidationStatus, message: str,
                  entity: str | None = None, path: str | None = None,
                  error: Exception | None = None) -> None:
        """Add a validation issue."""
        issue = ValidationIssue(rule, severity, message, entity, path, error)
        self.issues.append(issue)

        # fail > warn > pass
        if severity == ValidationStatus.FAIL:
            self.status = ValidationStatus.FAIL
        elif severity == ValidationStatus.WARN and self.status == ValidationStatus.PASS:
            self.status = ValidationStatus.WARN

    def add_error(self, rule: str, error: Exception, entity: Any = None,
                  path: str | None = None,
                  severity: ValidationStatus = ValidationStatus.FAIL) -> None:
        """Record an archview error as an issue."""
        self.add_issue(
            rule,
            severity,
            str(error),
            entity=str(entity) if entity is not None else None,
            path=path,
            error=error,
        )

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "issues": [
                {
                    "rule": issue.rule,
                    "severity": issue.severity.value,
                    "message": issue.message,
                    "entity": issue.entity,
                    "path": issue.path
                }
                for issue in self.issues
            ]
        }


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        """Execute validation rule.

        Args:
            workspace: Finalized workspace holding the model and views
            config: archview configuration
            result: Validation result to update with issues/counters
        """
        pass


class ValidationFramework:
    """Runs a set of rules over a workspace."""

    def __init__(self, config: ArchviewConfig):
        self.config = config
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, workspace: "Workspace") -> ValidationResult:
        """Run every rule over the workspace.

        Args:
            workspace: Workspace to validate

        Returns:
            ValidationResult with status, issues, and counters
        """
        result = ValidationResult(status=ValidationStatus.PASS)

        logger.info(f"Validating workspace {workspace.name!r} with {len(self.rules)} rules")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                rule.validate(workspace, self.config, result)
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                result.add_issue(
                    rule.name,
                    ValidationStatus.FAIL,
                    f"Rule execution failed: {e}"
                )

        logger.info(f"Validation completed with status: {result.status.value}")
        logger.info(f"Found {len(result.issues)} issues")

        return result

    def create_default_rules(self) -> None:
        """Register the standard workspace rules."""
        from archview.validation.rules import (
            EmptyAnimationStepRule,
            RelationshipEndpointsRule,
            UnrelatedElementsRule,
            UnresolvedDestinationRule,
            ViewMembershipRule,
        )

        self.add_rule(UnresolvedDestinationRule())
        self.add_rule(ViewMembershipRule())
        self.add_rule(EmptyAnimationStepRule())
        if self.config.validation.check_relationship_endpoints:
            self.add_rule(RelationshipEndpointsRule())
        if self.config.validation.warn_on_unrelated_elements:
            self.add_rule(UnrelatedElementsRule())
