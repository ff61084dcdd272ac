"""Validation rules over a finalized workspace.

Each rule checks one consistency aspect of the model or its views. Views can
be populated by means other than the membership functions, so the kind
constraints enforced when adding elements are checked again here.
"""

import logging
from typing import TYPE_CHECKING

from archview.config import ArchviewConfig
from archview.errors import EmptyAnimationStepError, UnresolvedDestinationError, ViewMembershipViolationError
from archview.model.elements import ElementKind
from archview.views.membership import check_membership
from archview.validation.framework import ValidationResult, ValidationRule, ValidationStatus

if TYPE_CHECKING:
    from archview.workspace import Workspace

logger = logging.getLogger(__name__)


class UnresolvedDestinationRule(ValidationRule):
    """Validate that every relationship destination resolves to an element.

    ``ModelBuilder.finalize`` already refuses unresolved destinations, so this
    only reports on workspaces assembled around a model whose registry was
    extended by hand after finalize.
    """

    @property
    def name(self) -> str:
        return "unresolved_destination"

    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        model = workspace.model
        for rel in model.relationships:
            if rel.is_resolved:
                result.increment_counter("relationships_resolved")
                continue
            name = rel.destination_name or ""
            if model.find_element(name, scope=rel.source) is None:
                result.add_error(self.name, UnresolvedDestinationError(rel, name), entity=rel, path=name)


class ViewMembershipRule(ValidationRule):
    """Validate that views only hold the element kinds they admit."""

    @property
    def name(self) -> str:
        return "view_membership_violation"

    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        for view in workspace.views:
            for error in check_membership(view):
                result.add_error(self.name, error, entity=view)
            result.increment_counter("views_checked")


class EmptyAnimationStepRule(ValidationRule):
    """Validate that every animation step introduces at least one new element."""

    @property
    def name(self) -> str:
        return "empty_animation_step"

    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        severity = ValidationStatus.FAIL if config.validation.fail_on_empty_animation else ValidationStatus.WARN
        for view in workspace.views:
            seen: set[str] = set()
            for i, step in enumerate(view.animations):
                introduced = [eid for eid in step.element_ids if eid not in seen]
                seen.update(step.element_ids)
                if not introduced:
                    error = EmptyAnimationStepError(
                        f"animation at index {i} in view with key {view.key!r} introduces no new elements"
                    )
                    result.add_error(self.name, error, entity=view, path=f"animations[{i}]", severity=severity)
                result.increment_counter("animation_steps")


class RelationshipEndpointsRule(ValidationRule):
    """Validate that both endpoints of every relationship view are in the view."""

    @property
    def name(self) -> str:
        return "relationship_endpoints"

    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        for view in workspace.views:
            for i, rv in enumerate(view.relationship_views):
                missing = [eid for eid in (rv.source_id, rv.destination_id) if not view.has_element(eid)]
                if missing:
                    error = ViewMembershipViolationError(
                        f"relationship {rv.relationship} in {view} references elements "
                        f"missing from the view: {', '.join(missing)}"
                    )
                    result.add_error(self.name, error, entity=view, path=f"relationships[{i}]")


class UnrelatedElementsRule(ValidationRule):
    """Warn about people and software systems without any relationship."""

    @property
    def name(self) -> str:
        return "unrelated_elements"

    def validate(self, workspace: "Workspace", config: ArchviewConfig, result: ValidationResult) -> None:
        model = workspace.model
        for element in model.elements:
            if element.kind not in (ElementKind.PERSON, ElementKind.SOFTWARE_SYSTEM):
                continue
            if not model.relationships_of(element.id):
                result.add_issue(
                    self.name,
                    ValidationStatus.WARN,
                    f"{element} has no relationships",
                    entity=str(element),
                )
