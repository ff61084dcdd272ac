"""Tag based style rules and their cascading resolution."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import TypeVar

from archview.model.elements import Element, Relationship


class ShapeKind(str, Enum):
    """Element shapes."""
    BOX = "Box"
    ROUNDED_BOX = "RoundedBox"
    CIRCLE = "Circle"
    ELLIPSE = "Ellipse"
    HEXAGON = "Hexagon"
    CYLINDER = "Cylinder"
    PIPE = "Pipe"
    PERSON = "Person"
    ROBOT = "Robot"
    FOLDER = "Folder"
    WEB_BROWSER = "WebBrowser"
    MOBILE_DEVICE_PORTRAIT = "MobileDevicePortrait"
    MOBILE_DEVICE_LANDSCAPE = "MobileDeviceLandscape"
    COMPONENT = "Component"


class BorderKind(str, Enum):
    """Element border styles."""
    SOLID = "Solid"
    DASHED = "Dashed"
    DOTTED = "Dotted"


class RoutingKind(str, Enum):
    """Relationship line routing."""
    DIRECT = "Direct"
    ORTHOGONAL = "Orthogonal"
    CURVED = "Curved"


def _check_opacity(opacity: int | None) -> None:
    if opacity is not None and not 0 <= opacity <= 100:
        raise ValueError(f"opacity must be between 0-100, got: {opacity}")


@dataclass
class ElementStyle:
    """Style applied to elements carrying ``tag``. Unset fields are None."""
    tag: str | None = None
    shape: ShapeKind | None = None
    icon: str | None = None
    background: str | None = None
    color: str | None = None
    stroke: str | None = None
    width: int | None = None
    height: int | None = None
    font_size: int | None = None
    border: BorderKind | None = None
    opacity: int | None = None
    metadata: bool | None = None
    description: bool | None = None

    def __post_init__(self):
        _check_opacity(self.opacity)


@dataclass
class RelationshipStyle:
    """Style applied to relationships carrying ``tag``. Unset fields are None."""
    tag: str | None = None
    thickness: int | None = None
    color: str | None = None
    dashed: bool | None = None
    routing: RoutingKind | None = None
    font_size: int | None = None
    width: int | None = None
    position: int | None = None
    opacity: int | None = None

    def __post_init__(self):
        _check_opacity(self.opacity)


StyleT = TypeVar("StyleT", ElementStyle, RelationshipStyle)


def cascade(tags: list[str], rules: list[StyleT], style_type: type[StyleT]) -> StyleT:
    """Merge every rule whose tag is in ``tags`` into one effective style.

    Rules are applied in declaration order; each set field of a matching
    rule overrides the value collected so far. Unset fields never override.
    """
    resolved = style_type()
    for rule in rules:
        if rule.tag not in tags:
            continue
        for f in fields(rule):
            if f.name == "tag":
                continue
            value = getattr(rule, f.name)
            if value is not None:
                setattr(resolved, f.name, value)
    return resolved


class Styles:
    """Ordered element and relationship style rules of a workspace."""

    def __init__(self):
        self.elements: list[ElementStyle] = []
        self.relationships: list[RelationshipStyle] = []

    def add_element_style(self, tag: str, **values) -> ElementStyle:
        style = ElementStyle(tag=tag, **values)
        self.elements.append(style)
        return style

    def add_relationship_style(self, tag: str, **values) -> RelationshipStyle:
        style = RelationshipStyle(tag=tag, **values)
        self.relationships.append(style)
        return style

    def element_style(self, element: Element) -> ElementStyle:
        """Effective style of an element."""
        return cascade(element.tags, self.elements, ElementStyle)

    def relationship_style(self, relationship: Relationship) -> RelationshipStyle:
        """Effective style of a relationship."""
        return cascade(relationship.tags, self.relationships, RelationshipStyle)
