"""Views: kind-constrained projections of the architecture model."""

from archview.views.animation import add_animation_step
from archview.views.deployment import add_deployment_elements, project_node
from archview.views.filtered import materialize_filtered
from archview.views.membership import (
    add_all,
    add_elements,
    add_interaction,
    add_neighbors,
    add_relationships,
    check_membership,
    remove,
    remove_tagged,
    remove_unreachable,
    remove_unrelated,
)
from archview.views.models import (
    ADMITTED_KINDS,
    AnimationStep,
    ElementView,
    FilterMode,
    RelationshipView,
    View,
    ViewKind,
)
from archview.views.viewset import ViewSet

__all__ = [
    "View",
    "ViewKind",
    "ViewSet",
    "ElementView",
    "RelationshipView",
    "AnimationStep",
    "FilterMode",
    "ADMITTED_KINDS",
    "add_elements",
    "add_relationships",
    "add_all",
    "add_neighbors",
    "add_interaction",
    "remove",
    "remove_tagged",
    "remove_unreachable",
    "remove_unrelated",
    "check_membership",
    "add_deployment_elements",
    "project_node",
    "add_animation_step",
    "materialize_filtered",
]
