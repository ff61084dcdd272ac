"""Architecture model: elements, relationships and their registry."""

from archview.model.builder import ModelBuilder
from archview.model.elements import (
    DEPLOYMENT_KINDS,
    Element,
    ElementKind,
    InteractionStyle,
    LocationKind,
    Relationship,
    merge_tags,
)
from archview.model.model import Model
from archview.model.queries import (
    reachable,
    related,
    related_components,
    related_containers,
    related_people,
    related_software_systems,
)
from archview.model.registry import Registry
from archview.model.resolver import RelationshipResolver

__all__ = [
    "ModelBuilder",
    "Model",
    "Registry",
    "RelationshipResolver",
    "Element",
    "ElementKind",
    "Relationship",
    "InteractionStyle",
    "LocationKind",
    "DEPLOYMENT_KINDS",
    "merge_tags",
    "reachable",
    "related",
    "related_people",
    "related_software_systems",
    "related_containers",
    "related_components",
]
