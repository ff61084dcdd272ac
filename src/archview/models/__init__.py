"""Pydantic data models for archview artifacts."""

from archview.models.workspace import (
    AnimationStepArtifact,
    ElementArtifact,
    ElementViewArtifact,
    ModelArtifact,
    RelationshipArtifact,
    RelationshipViewArtifact,
    StylesArtifact,
    ViewArtifact,
    WorkspaceArtifact,
)

__all__ = [
    "WorkspaceArtifact",
    "ModelArtifact",
    "ElementArtifact",
    "RelationshipArtifact",
    "ViewArtifact",
    "ElementViewArtifact",
    "RelationshipViewArtifact",
    "AnimationStepArtifact",
    "StylesArtifact",
]
