"""Finalized architecture model."""

import logging
from collections import defaultdict

from archview.model.elements import Element, ElementKind, Relationship
from archview.model.registry import Registry

logger = logging.getLogger(__name__)


class Model:
    """The element and relationship graph produced by a model build."""

    def __init__(
        self,
        registry: Registry,
        people: list[Element],
        software_systems: list[Element],
        deployment_nodes: list[Element],
        enterprise: str | None = None,
    ):
        self.registry = registry
        self.people = people
        self.software_systems = software_systems
        self.deployment_nodes = deployment_nodes
        self.enterprise = enterprise
        self._touching: dict[str, list[Relationship]] | None = None

    @property
    def elements(self) -> list[Element]:
        """All elements in registration order."""
        return [e for e in self.registry if isinstance(e, Element)]

    @property
    def relationships(self) -> list[Relationship]:
        """All relationships in registration order."""
        return [r for r in self.registry if isinstance(r, Relationship)]

    def get(self, entity_id: str) -> Element | Relationship | None:
        return self.registry.lookup(entity_id)

    def element(self, element_id: str, kind: ElementKind | None = None) -> Element | None:
        """Look up an element, optionally requiring a kind."""
        entity = self.registry.lookup(element_id)
        if not isinstance(entity, Element):
            return None
        if kind is not None and entity.kind != kind:
            return None
        return entity

    def relationship(self, relationship_id: str) -> Relationship | None:
        entity = self.registry.lookup(relationship_id)
        return entity if isinstance(entity, Relationship) else None

    def find_element(self, path: str, scope: Element | None = None) -> Element | None:
        """Resolve a symbolic element reference.

        A bare name is looked up among the structural siblings of ``scope``
        first, then among people and software systems. A slash separated
        path (``System/Container/Component`` or ``Node/Child/...``) is
        resolved from the top level.
        """
        parts = [p.strip() for p in path.split("/")]
        if len(parts) > 1:
            roots = self.software_systems + self.deployment_nodes
            current = _named(roots, parts[0])
            for name in parts[1:]:
                if current is None:
                    return None
                current = _named(current.children, name)
            return current

        name = parts[0]
        if scope is not None and scope.parent is not None:
            sibling = _named(scope.parent.children, name)
            if sibling is not None:
                return sibling
        return _named(self.people, name) or _named(self.software_systems, name)

    def index_relationships(self) -> None:
        """Build the element id to touching relationships index."""
        touching: dict[str, list[Relationship]] = defaultdict(list)
        for rel in self.relationships:
            touching[rel.source_id].append(rel)
            if rel.destination_id != rel.source_id:
                touching[rel.destination_id].append(rel)
        self._touching = dict(touching)
        logger.debug(f"Indexed {len(self.relationships)} relationships")

    def relationships_of(self, element_id: str) -> list[Relationship]:
        """Relationships with ``element_id`` as source or destination."""
        if self._touching is None:
            self.index_relationships()
        return list(self._touching.get(element_id, []))


def _named(elements: list[Element], name: str) -> Element | None:
    for element in elements:
        if element.name == name:
            return element
    return None
