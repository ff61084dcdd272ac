"""Scoped builder for constructing an architecture model."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from archview.errors import ValidationFailedError
from archview.model.elements import (
    Element,
    ElementKind,
    InteractionStyle,
    LocationKind,
    Relationship,
    split_tags,
)
from archview.model.model import Model
from archview.model.registry import Registry
from archview.model.resolver import RelationshipResolver

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "Default"


class ModelBuilder:
    """Builds a model through ordered construction calls.

    Construction may reference elements declared later by name; ``finalize``
    resolves those references once every element exists and returns the
    finished ``Model``. The builder cannot be used after finalize.
    """

    def __init__(self, registry: Registry | None = None, enterprise: str | None = None):
        self.registry = registry if registry is not None else Registry()
        self.enterprise = enterprise
        self._people: list[Element] = []
        self._systems: list[Element] = []
        self._nodes: list[Element] = []
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("model builder already finalized")

    def _add(self, element: Element, parent: Element | None = None) -> Element:
        self._check_open()
        self.registry.register(element)
        if parent is not None:
            element.parent = parent
            parent.children.append(element)
        return element

    @staticmethod
    def _require(element: Element, kind: ElementKind, role: str) -> None:
        if element.kind != kind:
            raise ValueError(f"{role} must be a {kind.value.lower()}, got {element}")

    def person(
        self,
        name: str,
        description: str = "",
        *,
        location: LocationKind = LocationKind.UNDEFINED,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare a person."""
        element = Element(
            kind=ElementKind.PERSON,
            name=name,
            description=description,
            location=location,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        self._people.append(self._add(element))
        return element

    def software_system(
        self,
        name: str,
        description: str = "",
        *,
        location: LocationKind = LocationKind.UNDEFINED,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare a software system."""
        element = Element(
            kind=ElementKind.SOFTWARE_SYSTEM,
            name=name,
            description=description,
            location=location,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        self._systems.append(self._add(element))
        return element

    def container(
        self,
        system: Element,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare a container owned by ``system``."""
        self._require(system, ElementKind.SOFTWARE_SYSTEM, "container owner")
        element = Element(
            kind=ElementKind.CONTAINER,
            name=name,
            description=description,
            technology=technology,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        return self._add(element, system)

    def component(
        self,
        container: Element,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare a component owned by ``container``."""
        self._require(container, ElementKind.CONTAINER, "component owner")
        element = Element(
            kind=ElementKind.COMPONENT,
            name=name,
            description=description,
            technology=technology,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        return self._add(element, container)

    def deployment_node(
        self,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        parent: Element | None = None,
        environment: str | None = None,
        instances: int = 1,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare a deployment node, top level or nested under ``parent``.

        Nested nodes inherit the environment of their parent unless one is
        given explicitly.
        """
        if parent is not None:
            self._require(parent, ElementKind.DEPLOYMENT_NODE, "deployment node parent")
            environment = environment or parent.environment
        if instances < 1:
            raise ValueError(f"deployment node instances must be >= 1, got {instances}")
        element = Element(
            kind=ElementKind.DEPLOYMENT_NODE,
            name=name,
            description=description,
            technology=technology,
            environment=environment or DEFAULT_ENVIRONMENT,
            instances=instances,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        self._add(element, parent)
        if parent is None:
            self._nodes.append(element)
        return element

    def infrastructure_node(
        self,
        node: Element,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Declare an infrastructure node (load balancer, firewall...) in ``node``."""
        self._require(node, ElementKind.DEPLOYMENT_NODE, "infrastructure node parent")
        element = Element(
            kind=ElementKind.INFRASTRUCTURE_NODE,
            name=name,
            description=description,
            technology=technology,
            environment=node.environment,
            tags=split_tags(tags),
            url=url,
            properties=dict(properties or {}),
            id=id,
        )
        return self._add(element, node)

    def container_instance(
        self,
        node: Element,
        container: Element,
        *,
        instance_id: int | None = None,
        tags: str | Iterable[str] | None = None,
        properties: dict[str, str] | None = None,
        id: str = "",
    ) -> Element:
        """Deploy an instance of ``container`` in ``node``.

        Instance ids count up per container and environment when not given.
        """
        self._require(node, ElementKind.DEPLOYMENT_NODE, "container instance parent")
        self._require(container, ElementKind.CONTAINER, "instantiated element")
        if instance_id is None:
            instance_id = 1 + sum(
                1
                for e in self.registry
                if isinstance(e, Element)
                and e.kind == ElementKind.CONTAINER_INSTANCE
                and e.container is container
                and e.environment == node.environment
            )
        element = Element(
            kind=ElementKind.CONTAINER_INSTANCE,
            name="",
            environment=node.environment,
            instance_id=instance_id,
            container=container,
            tags=split_tags(tags),
            properties=dict(properties or {}),
            id=id,
        )
        return self._add(element, node)

    def uses(
        self,
        source: Element,
        destination: Element | str,
        description: str = "",
        technology: str = "",
        *,
        interaction_style: InteractionStyle = InteractionStyle.UNDEFINED,
        tags: str | Iterable[str] | None = None,
        url: str = "",
        id: str = "",
    ) -> Relationship:
        """Declare a relationship from ``source`` to ``destination``.

        ``destination`` is either an element or a symbolic name resolved at
        finalize: a sibling or person/system name, or a ``System/Container``
        style path.
        """
        self._check_open()
        rel = Relationship(
            source=source,
            description=description,
            technology=technology,
            interaction_style=interaction_style,
            tags=split_tags(tags),
            url=url,
            id=id,
        )
        if isinstance(destination, Element):
            rel.destination = destination
            rel.destination_id = destination.id
        else:
            rel.destination_name = destination
        self.registry.register(rel)
        source.relationships.append(rel)
        return rel

    def finalize(self) -> Model:
        """Resolve cross references and return the finished model.

        Raises:
            ValidationFailedError: If any relationship destination is
                                   unresolved; the result lists all of them
        """
        from archview.validation.framework import ValidationResult

        self._check_open()
        model = Model(
            self.registry,
            people=list(self._people),
            software_systems=list(self._systems),
            deployment_nodes=list(self._nodes),
            enterprise=self.enterprise,
        )

        resolver = RelationshipResolver(model)
        unresolved = resolver.unresolved()
        if unresolved:
            result = ValidationResult()
            for error in unresolved:
                result.add_error(
                    "unresolved_destination",
                    error,
                    entity=error.relationship,
                    path=error.name,
                )
            logger.error(f"Model finalize failed: {len(unresolved)} unresolved destinations")
            raise ValidationFailedError(result)

        resolver.resolve()
        replicated = self._replicate_instance_relationships(model)
        model.index_relationships()
        self._finalized = True

        logger.info(
            f"Model finalized: {len(model.elements)} elements, "
            f"{len(model.relationships)} relationships ({replicated} replicated)"
        )
        return model

    def _replicate_instance_relationships(self, model: Model) -> int:
        """Mirror container relationships between their deployed instances.

        Instances are only linked within one deployment environment.
        """
        instances: dict[tuple[str, str], list[Element]] = defaultdict(list)
        for element in model.elements:
            if element.kind == ElementKind.CONTAINER_INSTANCE:
                instances[(element.container_id, element.environment)].append(element)

        environments = {env for _, env in instances}
        count = 0
        for rel in model.relationships:
            if rel.source.kind != ElementKind.CONTAINER:
                continue
            if rel.destination.kind != ElementKind.CONTAINER:
                continue
            for env in sorted(environments):
                for src in instances.get((rel.source_id, env), []):
                    for dst in instances.get((rel.destination_id, env), []):
                        mirrored = Relationship(
                            source=src,
                            destination=dst,
                            description=rel.description,
                            technology=rel.technology,
                            interaction_style=rel.interaction_style,
                            tags=list(rel.tags),
                            url=rel.url,
                            linked_relationship_id=rel.id,
                        )
                        self.registry.register(mirrored)
                        src.relationships.append(mirrored)
                        count += 1
        return count
