"""Filtered views: tag based projections of another static view."""

import logging

from archview.views.models import ElementView, FilterMode, RelationshipView, View, ViewKind

logger = logging.getLogger(__name__)

_STATIC_KINDS = (ViewKind.LANDSCAPE, ViewKind.CONTEXT, ViewKind.CONTAINER, ViewKind.COMPONENT)


def _matches(tags: list[str], filter_tags: list[str]) -> bool:
    return any(tag in tags for tag in filter_tags)


def materialize_filtered(view: View, base: View) -> None:
    """Replace the contents of a filtered view with its projection of ``base``.

    In include mode elements and relationships carrying any filter tag are
    kept, in exclude mode they are dropped. Relationships also need both
    endpoints kept.

    Raises:
        ValueError: If ``view`` is not filtered or ``base`` is not a static view
    """
    if view.kind != ViewKind.FILTERED:
        raise ValueError(f"{view} is not a filtered view")
    if base.kind not in _STATIC_KINDS:
        raise ValueError(f"filtered views can only be based on static views, not {base}")

    keep_matching = view.filter_mode == FilterMode.INCLUDE

    view.element_views = [
        ElementView(element=ev.element, x=ev.x, y=ev.y)
        for ev in base.element_views
        if _matches(ev.element.tags, view.filter_tags) == keep_matching
    ]
    view.relationship_views = [
        RelationshipView(
            relationship=rv.relationship,
            description=rv.description,
            vertices=list(rv.vertices),
        )
        for rv in base.relationship_views
        if _matches(rv.relationship.tags, view.filter_tags) == keep_matching
        and view.has_element(rv.source_id)
        and view.has_element(rv.destination_id)
    ]
    logger.debug(
        f"Materialized {view} from {base}: {len(view.element_views)} elements, "
        f"{len(view.relationship_views)} relationships"
    )
