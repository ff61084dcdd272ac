"""View data models."""

from dataclasses import dataclass, field
from enum import Enum

from archview.model.elements import DEPLOYMENT_KINDS, Element, ElementKind, Relationship
from archview.model.model import Model


class ViewKind(str, Enum):
    """View kinds."""
    LANDSCAPE = "Landscape"
    CONTEXT = "Context"
    CONTAINER = "Container"
    COMPONENT = "Component"
    DYNAMIC = "Dynamic"
    DEPLOYMENT = "Deployment"
    FILTERED = "Filtered"


class FilterMode(str, Enum):
    """Whether a filtered view keeps or drops the tagged elements."""
    INCLUDE = "Include"
    EXCLUDE = "Exclude"


_PS = frozenset({ElementKind.PERSON, ElementKind.SOFTWARE_SYSTEM})
_PSC = _PS | {ElementKind.CONTAINER}
_PSCC = _PSC | {ElementKind.COMPONENT}

ADMITTED_KINDS: dict[ViewKind, frozenset[ElementKind]] = {
    ViewKind.LANDSCAPE: _PS,
    ViewKind.CONTEXT: _PS,
    ViewKind.CONTAINER: _PSC,
    ViewKind.COMPONENT: _PSCC,
    ViewKind.DYNAMIC: _PSCC,
    ViewKind.DEPLOYMENT: DEPLOYMENT_KINDS,
    ViewKind.FILTERED: frozenset(),
}


@dataclass
class ElementView:
    """Membership of an element in a view, with its stored position."""
    element: Element
    x: int | None = None
    y: int | None = None

    @property
    def id(self) -> str:
        return self.element.id


@dataclass
class RelationshipView:
    """Membership of a relationship in a view, with its stored routing."""
    relationship: Relationship
    description: str = ""  # Overrides the relationship description when set
    order: str = ""  # Dynamic views only
    vertices: list[tuple[int, int]] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.relationship.id

    @property
    def source_id(self) -> str:
        return self.relationship.source_id

    @property
    def destination_id(self) -> str:
        return self.relationship.destination_id


@dataclass
class AnimationStep:
    """One step of a view's presentation sequence."""
    order: int
    element_ids: list[str] = field(default_factory=list)
    relationship_ids: list[str] = field(default_factory=list)


@dataclass(eq=False)
class View:
    """A kind-constrained projection of the model.

    ``scope`` is the software system a context, container or deployment view
    is for, the container of a component view, or the optional element a
    dynamic view describes.
    """
    kind: ViewKind
    key: str
    model: Model = field(repr=False)
    title: str = ""
    description: str = ""
    scope: Element | None = None
    environment: str | None = None
    base_key: str | None = None
    filter_mode: FilterMode = FilterMode.INCLUDE
    filter_tags: list[str] = field(default_factory=list)
    auto_complete: bool = True
    element_views: list[ElementView] = field(default_factory=list, repr=False)
    relationship_views: list[RelationshipView] = field(default_factory=list, repr=False)
    animations: list[AnimationStep] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return f"{self.kind.value.lower()} view {self.key!r}"

    @property
    def admitted_kinds(self) -> frozenset[ElementKind]:
        return ADMITTED_KINDS[self.kind]

    @property
    def scope_id(self) -> str | None:
        return self.scope.id if self.scope is not None else None

    @property
    def element_ids(self) -> list[str]:
        return [ev.id for ev in self.element_views]

    @property
    def relationship_ids(self) -> list[str]:
        return [rv.id for rv in self.relationship_views]

    def element_view(self, element_id: str) -> ElementView | None:
        for ev in self.element_views:
            if ev.id == element_id:
                return ev
        return None

    def relationship_view(self, relationship_id: str) -> RelationshipView | None:
        for rv in self.relationship_views:
            if rv.id == relationship_id:
                return rv
        return None

    def has_element(self, element_id: str) -> bool:
        return self.element_view(element_id) is not None

    def claimed_ids(self) -> set[str]:
        """Element ids already introduced by an animation step."""
        return {eid for step in self.animations for eid in step.element_ids}
