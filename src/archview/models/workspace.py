"""Workspace artifact models consumed by renderers and exporters."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer

from archview.model.elements import ElementKind, InteractionStyle, LocationKind
from archview.styles import ElementStyle, RelationshipStyle
from archview.views.models import FilterMode, ViewKind


class ElementArtifact(BaseModel):
    """Serialized element."""

    id: str = Field(description="Unique element identifier")
    kind: ElementKind = Field(description="Element kind")
    name: str = Field(default="", description="Element name, empty for container instances")
    description: str = Field(default="", description="Element description")
    technology: str = Field(default="", description="Technology used by the element")
    tags: List[str] = Field(default_factory=list, description="Ordered tags including structural defaults")
    url: str = Field(default="", description="URL with more information")
    properties: Dict[str, str] = Field(default_factory=dict, description="Free-form key/value properties")
    location: Optional[LocationKind] = Field(default=None, description="Location, people and software systems only")
    parent_id: Optional[str] = Field(default=None, description="ID of the structural parent")
    container_id: Optional[str] = Field(default=None, description="Instantiated container, container instances only")
    environment: Optional[str] = Field(default=None, description="Deployment environment")
    instances: Optional[int] = Field(default=None, description="Instance count, deployment nodes only")
    instance_id: Optional[int] = Field(default=None, description="Instance number, container instances only")


class RelationshipArtifact(BaseModel):
    """Serialized relationship."""

    id: str = Field(description="Unique relationship identifier")
    source_id: str = Field(description="ID of the source element")
    destination_id: str = Field(description="ID of the destination element")
    description: str = Field(default="", description="Relationship description")
    technology: str = Field(default="", description="Technology used by the relationship")
    interaction_style: InteractionStyle = Field(default=InteractionStyle.UNDEFINED, description="Interaction style")
    tags: List[str] = Field(default_factory=list, description="Ordered tags")
    url: str = Field(default="", description="URL with more information")
    linked_relationship_id: Optional[str] = Field(
        default=None, description="Container relationship mirrored by a container instance relationship"
    )


class ElementViewArtifact(BaseModel):
    """Element membership of a view."""

    id: str = Field(description="Element identifier")
    x: Optional[int] = Field(default=None, description="Stored horizontal position")
    y: Optional[int] = Field(default=None, description="Stored vertical position")


class RelationshipViewArtifact(BaseModel):
    """Relationship membership of a view."""

    id: str = Field(description="Relationship identifier")
    description: str = Field(default="", description="Description override")
    order: str = Field(default="", description="Interaction order in dynamic views")
    vertices: List[tuple[int, int]] = Field(default_factory=list, description="Stored routing vertices")


class AnimationStepArtifact(BaseModel):
    """Animation step of a view."""

    order: int = Field(description="Step number starting at 1")
    elements: List[str] = Field(default_factory=list, description="Element IDs introduced by the step")
    relationships: List[str] = Field(default_factory=list, description="Relationship IDs attributed to the step")


class ViewArtifact(BaseModel):
    """Materialized view."""

    key: str = Field(description="Unique view key")
    kind: ViewKind = Field(description="View kind")
    title: str = Field(default="", description="View title")
    description: str = Field(default="", description="View description")
    scope_id: Optional[str] = Field(default=None, description="Element the view is scoped to")
    environment: Optional[str] = Field(default=None, description="Deployment environment")
    base_key: Optional[str] = Field(default=None, description="Base view of a filtered view")
    filter_mode: Optional[FilterMode] = Field(default=None, description="Filtered view mode")
    filter_tags: List[str] = Field(default_factory=list, description="Filtered view tags")
    elements: List[ElementViewArtifact] = Field(default_factory=list, description="Element views")
    relationships: List[RelationshipViewArtifact] = Field(default_factory=list, description="Relationship views")
    animations: List[AnimationStepArtifact] = Field(default_factory=list, description="Animation steps")


class StylesArtifact(BaseModel):
    """Style rules in declaration order."""

    elements: List[ElementStyle] = Field(default_factory=list, description="Element style rules")
    relationships: List[RelationshipStyle] = Field(default_factory=list, description="Relationship style rules")


class ModelArtifact(BaseModel):
    """Serialized model."""

    enterprise: Optional[str] = Field(default=None, description="Enterprise name")
    elements: List[ElementArtifact] = Field(default_factory=list, description="All elements")
    relationships: List[RelationshipArtifact] = Field(default_factory=list, description="All relationships")


class WorkspaceArtifact(BaseModel):
    """Complete workspace artifact."""

    name: str = Field(description="Workspace name")
    description: str = Field(default="", description="Workspace description")
    version: Optional[str] = Field(default=None, description="Workspace version")
    schema_version: str = Field(default="1.0.0", description="Workspace artifact schema version")
    generated_at: datetime = Field(description="Timestamp when the artifact was generated")
    archview_version: str = Field(description="Version of archview that generated this artifact")

    model: ModelArtifact = Field(description="Elements and relationships")
    views: List[ViewArtifact] = Field(default_factory=list, description="Materialized views")
    styles: StylesArtifact = Field(default_factory=StylesArtifact, description="Style rules")

    generation_config: Dict[str, Any] = Field(default_factory=dict, description="Configuration used during generation")

    @field_serializer('generated_at')
    def serialize_generated_at(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()
