"""Collection of the views declared over a model."""

import logging
from collections.abc import Iterable, Iterator

from archview.config import ViewsConfig
from archview.errors import DuplicateIDError
from archview.model.elements import Element, ElementKind, split_tags
from archview.model.model import Model
from archview.styles import Styles
from archview.views.filtered import materialize_filtered
from archview.views.membership import add_elements
from archview.views.models import FilterMode, View, ViewKind

logger = logging.getLogger(__name__)


class ViewSet:
    """Creates and holds the views of a workspace, keyed by view key."""

    def __init__(self, model: Model, config: ViewsConfig | None = None):
        self.model = model
        self.config = config if config is not None else ViewsConfig()
        self.styles = Styles()
        self._views: dict[str, View] = {}

    def __iter__(self) -> Iterator[View]:
        return iter(self._views.values())

    def __len__(self) -> int:
        return len(self._views)

    def get(self, key: str) -> View | None:
        return self._views.get(key)

    def of_kind(self, kind: ViewKind) -> list[View]:
        return [v for v in self._views.values() if v.kind == kind]

    def _create(self, kind: ViewKind, key: str, **kwargs) -> View:
        view = View(
            kind=kind,
            key=key,
            model=self.model,
            auto_complete=self.config.auto_complete_relationships,
            **kwargs,
        )
        existing = self._views.get(key)
        if existing is not None:
            raise DuplicateIDError(key, existing, view)
        self._views[key] = view
        logger.debug(f"Created {view}")
        return view

    @staticmethod
    def _require(element: Element, kind: ElementKind, role: str) -> None:
        if element.kind != kind:
            raise ValueError(f"{role} must be a {kind.value.lower()}, got {element}")

    def landscape_view(self, key: str, title: str = "", description: str = "") -> View:
        return self._create(ViewKind.LANDSCAPE, key, title=title, description=description)

    def context_view(self, system: Element, key: str, title: str = "", description: str = "") -> View:
        """Create a system context view for ``system``."""
        self._require(system, ElementKind.SOFTWARE_SYSTEM, "context view scope")
        view = self._create(ViewKind.CONTEXT, key, title=title, description=description, scope=system)
        if self.config.auto_add_context_system:
            add_elements(view, system)
        return view

    def container_view(self, system: Element, key: str, title: str = "", description: str = "") -> View:
        self._require(system, ElementKind.SOFTWARE_SYSTEM, "container view scope")
        return self._create(ViewKind.CONTAINER, key, title=title, description=description, scope=system)

    def component_view(self, container: Element, key: str, title: str = "", description: str = "") -> View:
        self._require(container, ElementKind.CONTAINER, "component view scope")
        return self._create(ViewKind.COMPONENT, key, title=title, description=description, scope=container)

    def dynamic_view(self, key: str, scope: Element | None = None, title: str = "", description: str = "") -> View:
        """Create a dynamic view; relationships are only added as interactions."""
        view = self._create(ViewKind.DYNAMIC, key, title=title, description=description, scope=scope)
        view.auto_complete = False
        return view

    def deployment_view(
        self,
        key: str,
        environment: str | None = None,
        system: Element | None = None,
        title: str = "",
        description: str = "",
    ) -> View:
        """Create a deployment view, optionally scoped to a system and an environment."""
        if system is not None:
            self._require(system, ElementKind.SOFTWARE_SYSTEM, "deployment view scope")
        return self._create(
            ViewKind.DEPLOYMENT,
            key,
            title=title,
            description=description,
            scope=system,
            environment=environment,
        )

    def filtered_view(
        self,
        base_key: str,
        key: str,
        tags: str | Iterable[str],
        exclude: bool = False,
        title: str = "",
        description: str = "",
    ) -> View:
        """Declare a filtered view over the view keyed ``base_key``."""
        return self._create(
            ViewKind.FILTERED,
            key,
            title=title,
            description=description,
            base_key=base_key,
            filter_mode=FilterMode.EXCLUDE if exclude else FilterMode.INCLUDE,
            filter_tags=split_tags(tags),
        )

    def materialize_filtered_views(self) -> None:
        """Project every filtered view from its base view.

        Raises:
            ValueError: If a base view does not exist
        """
        for view in self.of_kind(ViewKind.FILTERED):
            base = self.get(view.base_key)
            if base is None:
                raise ValueError(f"base view {view.base_key!r} of {view} not found")
            materialize_filtered(view, base)
