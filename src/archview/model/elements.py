"""Element and relationship data structures for the architecture graph."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class ElementKind(str, Enum):
    """Element kinds. Values double as the default structural tag."""
    PERSON = "Person"
    SOFTWARE_SYSTEM = "Software System"
    CONTAINER = "Container"
    COMPONENT = "Component"
    DEPLOYMENT_NODE = "Deployment Node"
    INFRASTRUCTURE_NODE = "Infrastructure Node"
    CONTAINER_INSTANCE = "Container Instance"


class LocationKind(str, Enum):
    """Location of a person or software system relative to the enterprise."""
    UNDEFINED = "Undefined"
    INTERNAL = "Internal"
    EXTERNAL = "External"


class InteractionStyle(str, Enum):
    """Interaction style of a relationship."""
    UNDEFINED = "Undefined"
    SYNCHRONOUS = "Synchronous"
    ASYNCHRONOUS = "Asynchronous"


DEPLOYMENT_KINDS = frozenset({
    ElementKind.DEPLOYMENT_NODE,
    ElementKind.INFRASTRUCTURE_NODE,
    ElementKind.CONTAINER_INSTANCE,
})

ELEMENT_TAG = "Element"
RELATIONSHIP_TAG = "Relationship"


def merge_tags(tags: list[str], *new_tags: str) -> list[str]:
    """Append each tag not already present, preserving order. Mutates ``tags``."""
    for tag in new_tags:
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def split_tags(tags: str | Iterable[str] | None) -> list[str]:
    """Normalize a comma separated string or iterable of tags into a list."""
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return merge_tags([], *tags)


@dataclass(eq=False)
class Element:
    """A node of the architecture graph.

    A single type carries every element kind; ``kind`` decides which of the
    optional fields are meaningful (``location`` for people and systems,
    ``environment``/``instances`` for deployment nodes, ``container`` and
    ``instance_id`` for container instances).
    """
    kind: ElementKind
    name: str
    description: str = ""
    technology: str = ""
    tags: list[str] = field(default_factory=list)
    url: str = ""
    properties: dict[str, str] = field(default_factory=dict)
    location: LocationKind = LocationKind.UNDEFINED
    environment: str = ""
    instances: int = 1
    instance_id: int = 0
    id: str = ""
    parent: "Element | None" = field(default=None, repr=False)
    container: "Element | None" = field(default=None, repr=False)
    children: list["Element"] = field(default_factory=list, repr=False)
    relationships: list["Relationship"] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        name = self.name
        if not name and self.container is not None:
            name = self.container.name
        return f"{self.kind.value.lower()} {name!r}"

    @property
    def default_tags(self) -> list[str]:
        return [ELEMENT_TAG, self.kind.value]

    @property
    def container_id(self) -> str | None:
        """ID of the container a container instance instantiates."""
        return self.container.id if self.container is not None else None

    def _children_of(self, kind: ElementKind) -> list["Element"]:
        return [c for c in self.children if c.kind == kind]

    @property
    def containers(self) -> list["Element"]:
        return self._children_of(ElementKind.CONTAINER)

    @property
    def components(self) -> list["Element"]:
        return self._children_of(ElementKind.COMPONENT)

    @property
    def child_nodes(self) -> list["Element"]:
        return self._children_of(ElementKind.DEPLOYMENT_NODE)

    @property
    def infrastructure_nodes(self) -> list["Element"]:
        return self._children_of(ElementKind.INFRASTRUCTURE_NODE)

    @property
    def container_instances(self) -> list["Element"]:
        return self._children_of(ElementKind.CONTAINER_INSTANCE)

    @property
    def software_system(self) -> "Element | None":
        """Software system owning this element, if any."""
        if self.kind == ElementKind.SOFTWARE_SYSTEM:
            return self
        if self.kind == ElementKind.CONTAINER_INSTANCE and self.container is not None:
            return self.container.software_system
        for ancestor in self.ancestors():
            if ancestor.kind == ElementKind.SOFTWARE_SYSTEM:
                return ancestor
        return None

    @property
    def path(self) -> str:
        """Slash separated name path from the structural root."""
        names = [a.name for a in reversed(list(self.ancestors()))]
        names.append(self.name)
        return "/".join(names)

    def ancestors(self) -> Iterator["Element"]:
        """Yield structural parents, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator["Element"]:
        """Yield every element under this one, depth first."""
        for child in self.children:
            yield child
            yield from child.descendants()

    def finalize(self) -> None:
        """Merge the default structural tags ahead of the declared ones."""
        self.tags = merge_tags(self.default_tags, *self.tags)


@dataclass(eq=False)
class Relationship:
    """A directed edge between two elements.

    Until finalize, ``destination`` may be None with ``destination_name``
    holding a symbolic path to resolve.
    """
    source: Element
    destination: Element | None = None
    destination_name: str | None = None
    description: str = ""
    technology: str = ""
    interaction_style: InteractionStyle = InteractionStyle.UNDEFINED
    tags: list[str] = field(default_factory=list)
    url: str = ""
    linked_relationship_id: str | None = None
    id: str = ""
    destination_id: str = ""

    def __post_init__(self):
        if self.destination is not None:
            self.destination_id = self.destination.id

    def __str__(self) -> str:
        target = self.destination_id or self.destination_name or "?"
        return f"{self.description} [{self.source_id} -> {target}]"

    @property
    def source_id(self) -> str:
        return self.source.id

    @property
    def is_resolved(self) -> bool:
        return self.destination is not None

    def resolve(self, destination: Element) -> None:
        """Fix the destination and merge the structural relationship tag."""
        self.destination = destination
        self.destination_id = destination.id
        self.tags = merge_tags([RELATIONSHIP_TAG], *self.tags)

    def touches(self, element_id: str) -> bool:
        return element_id in (self.source_id, self.destination_id)

    def other_end(self, element_id: str) -> Element | None:
        """Element at the opposite endpoint from ``element_id``."""
        if self.source_id == element_id:
            return self.destination
        if self.destination_id == element_id:
            return self.source
        return None
