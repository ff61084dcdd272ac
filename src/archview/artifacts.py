"""Artifact generation for archview workspaces."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from archview import __version__
from archview.config import ArchviewConfig
from archview.model.elements import Element, ElementKind, Relationship
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
from archview.views.models import View, ViewKind

if TYPE_CHECKING:
    from archview.workspace import Workspace

logger = logging.getLogger(__name__)

WORKSPACE_FILE_NAME = "workspace.json"


class ArtifactGenerator:
    """Builds the read-only workspace artifact handed to renderers."""

    def __init__(self, config: ArchviewConfig):
        self.config = config

    def generate(self, workspace: "Workspace") -> WorkspaceArtifact:
        """Project a validated workspace into its artifact form."""
        model = workspace.model
        artifact = WorkspaceArtifact(
            name=workspace.name,
            description=workspace.description,
            version=workspace.version,
            generated_at=datetime.now(UTC),
            archview_version=__version__,
            model=ModelArtifact(
                enterprise=model.enterprise,
                elements=[self._element(e) for e in model.elements],
                relationships=[self._relationship(r) for r in model.relationships],
            ),
            views=[self._view(v) for v in workspace.views],
            styles=StylesArtifact(
                elements=list(workspace.views.styles.elements),
                relationships=list(workspace.views.styles.relationships),
            ),
            generation_config=self.config.model_dump(mode="json"),
        )
        logger.info(
            f"Generated workspace artifact: {len(artifact.model.elements)} elements, "
            f"{len(artifact.views)} views"
        )
        return artifact

    def write(self, workspace: "Workspace", output_dir: Path) -> Path:
        """Write the workspace artifact as JSON and return its path."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        artifact = self.generate(workspace)

        path = output_dir / WORKSPACE_FILE_NAME
        with open(path, "w", encoding="utf-8") as f:
            json.dump(artifact.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote workspace artifact to {path}")
        return path

    def _element(self, element: Element) -> ElementArtifact:
        kind = element.kind
        return ElementArtifact(
            id=element.id,
            kind=kind,
            name=element.name,
            description=element.description,
            technology=element.technology,
            tags=list(element.tags),
            url=element.url,
            properties=dict(element.properties),
            location=element.location if kind in (ElementKind.PERSON, ElementKind.SOFTWARE_SYSTEM) else None,
            parent_id=element.parent.id if element.parent is not None else None,
            container_id=element.container_id,
            environment=element.environment or None,
            instances=element.instances if kind == ElementKind.DEPLOYMENT_NODE else None,
            instance_id=element.instance_id if kind == ElementKind.CONTAINER_INSTANCE else None,
        )

    def _relationship(self, rel: Relationship) -> RelationshipArtifact:
        return RelationshipArtifact(
            id=rel.id,
            source_id=rel.source_id,
            destination_id=rel.destination_id,
            description=rel.description,
            technology=rel.technology,
            interaction_style=rel.interaction_style,
            tags=list(rel.tags),
            url=rel.url,
            linked_relationship_id=rel.linked_relationship_id,
        )

    def _view(self, view: View) -> ViewArtifact:
        filtered = view.kind == ViewKind.FILTERED
        return ViewArtifact(
            key=view.key,
            kind=view.kind,
            title=view.title,
            description=view.description,
            scope_id=view.scope_id,
            environment=view.environment,
            base_key=view.base_key,
            filter_mode=view.filter_mode if filtered else None,
            filter_tags=list(view.filter_tags),
            elements=[ElementViewArtifact(id=ev.id, x=ev.x, y=ev.y) for ev in view.element_views],
            relationships=[
                RelationshipViewArtifact(
                    id=rv.id,
                    description=rv.description,
                    order=rv.order,
                    vertices=list(rv.vertices),
                )
                for rv in view.relationship_views
            ],
            animations=[
                AnimationStepArtifact(
                    order=step.order,
                    elements=list(step.element_ids),
                    relationships=list(step.relationship_ids),
                )
                for step in view.animations
            ],
        )
