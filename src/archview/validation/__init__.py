"""Validation layer for archview workspaces.

Checks that views only hold the element kinds they admit, that animation
steps introduce elements and that every relationship destination resolves.
"""

from archview.validation.framework import ValidationFramework, ValidationIssue, ValidationResult, ValidationRule, ValidationStatus
from archview.validation.rules import (
    EmptyAnimationStepRule,
    RelationshipEndpointsRule,
    UnrelatedElementsRule,
    UnresolvedDestinationRule,
    ViewMembershipRule,
)

__all__ = [
    "ValidationFramework",
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "ValidationStatus",
    "UnresolvedDestinationRule",
    "ViewMembershipRule",
    "EmptyAnimationStepRule",
    "RelationshipEndpointsRule",
    "UnrelatedElementsRule",
]
