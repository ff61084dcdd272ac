"""Workspace assembly and the two-phase build entry point."""

import logging
from collections.abc import Callable

from archview.artifacts import ArtifactGenerator
from archview.config import ArchviewConfig, configure_logging, create_default_config
from archview.errors import ValidationFailedError
from archview.model.builder import ModelBuilder
from archview.model.model import Model
from archview.models.workspace import WorkspaceArtifact
from archview.validation.framework import ValidationFramework, ValidationResult
from archview.views.viewset import ViewSet

logger = logging.getLogger(__name__)


class Workspace:
    """A finalized model together with its views and styles."""

    def __init__(
        self,
        model: Model,
        config: ArchviewConfig | None = None,
        views: ViewSet | None = None,
    ):
        self.config = config if config is not None else create_default_config()
        self.model = model
        self.views = views if views is not None else ViewSet(model, self.config.views)

    @property
    def name(self) -> str:
        return self.config.workspace.name

    @property
    def description(self) -> str:
        return self.config.workspace.description

    @property
    def version(self) -> str | None:
        return self.config.workspace.version

    def validate(self) -> ValidationResult:
        """Run the default validation rules over the model and every view."""
        framework = ValidationFramework(self.config)
        framework.create_default_rules()
        return framework.validate(self)

    def to_artifact(self) -> WorkspaceArtifact:
        return ArtifactGenerator(self.config).generate(self)


def build_workspace(
    construct: Callable[[ModelBuilder], None],
    declare_views: Callable[[ViewSet], None] | None = None,
    config: ArchviewConfig | None = None,
) -> Workspace:
    """Build and validate a workspace.

    ``construct`` declares elements and relationships against a fresh
    builder. Once it returns, relationship destinations are resolved and
    ``declare_views`` populates the views over the finished model.

    Args:
        construct: Callable declaring the model
        declare_views: Optional callable declaring and populating views
        config: archview configuration (defaults when None)

    Returns:
        The validated workspace

    Raises:
        ValidationFailedError: If finalize or validation reports errors; the
                               exception carries every issue found
    """
    config = config or create_default_config()
    configure_logging(config)

    builder = ModelBuilder()
    construct(builder)
    model = builder.finalize()

    workspace = Workspace(model, config=config)
    if declare_views is not None:
        declare_views(workspace.views)
    workspace.views.materialize_filtered_views()

    result = workspace.validate()
    if result.errors:
        logger.error(f"Workspace {workspace.name!r} failed validation with {len(result.errors)} errors")
        raise ValidationFailedError(result)

    logger.info(f"Built workspace {workspace.name!r} with {len(workspace.views)} views")
    return workspace
