"""Element and relationship membership rules for views.

Adding an element also adds every relationship between it and the elements
already in the view. The completion is incremental: it only looks at what
is present when each element is inserted, so adding A then B picks up the
A-B edge when B arrives, and nothing is recomputed afterwards. Calling
``add_relationships(view, *view.model.relationships)`` recomputes all edges
between present elements.
"""

import logging

from archview.errors import TypeMismatchError, ViewMembershipViolationError
from archview.model.elements import Element, ElementKind, Relationship
from archview.model.queries import reachable, related
from archview.views.models import ElementView, RelationshipView, View, ViewKind

logger = logging.getLogger(__name__)


def add_elements(view: View, *elements: Element) -> None:
    """Add elements to a view, completing relationships to present elements.

    Args:
        view: Target view
        elements: Candidates; those already present are ignored, except that
                  deployment nodes are always projected again

    Raises:
        TypeMismatchError: If a candidate's kind is not admitted by the view
                           kind. Nothing is added in that case.
    """
    candidates = [e for e in elements if not view.has_element(e.id)]
    for element in candidates:
        if element.kind not in view.admitted_kinds:
            raise TypeMismatchError(view, element)

    if view.kind == ViewKind.DEPLOYMENT:
        # A node already present as an ancestor still needs its subtree projected.
        from archview.views.deployment import add_deployment_elements
        add_deployment_elements(view, *elements)
        return

    for element in candidates:
        insert_element(view, element)


def insert_element(view: View, element: Element) -> bool:
    """Insert an element view without kind checks.

    Returns:
        True if the element was not already in the view
    """
    if view.has_element(element.id):
        return False
    view.element_views.append(ElementView(element=element))

    if view.auto_complete:
        rels = [
            rel for rel in view.model.relationships_of(element.id)
            if view.has_element(rel.source_id) and view.has_element(rel.destination_id)
        ]
        add_relationships(view, *rels)
    return True


def add_relationships(view: View, *relationships: Relationship) -> int:
    """Add relationships whose endpoints are both in the view.

    Relationships already present or with a missing endpoint are skipped.

    Returns:
        Number of relationships added
    """
    added = 0
    for rel in relationships:
        if not view.has_element(rel.source_id) or not view.has_element(rel.destination_id):
            continue
        if view.relationship_view(rel.id) is not None:
            continue
        view.relationship_views.append(RelationshipView(relationship=rel))
        added += 1
    return added


def remove(view: View, element_id: str) -> bool:
    """Remove an element and every relationship touching it from a view.

    Context and container views keep the software system they are for,
    component views keep their container and its software system. Removing
    a deployment node from a deployment view removes everything under it.

    Returns:
        True if the element was removed
    """
    if _is_protected(view, element_id):
        logger.debug(f"Refusing to remove scope element {element_id} from {view}")
        return False

    if view.kind == ViewKind.DEPLOYMENT:
        node = view.model.element(element_id, ElementKind.DEPLOYMENT_NODE)
        if node is not None:
            for instance in node.container_instances:
                _remove_element(view, instance.id)
            for infra in node.infrastructure_nodes:
                _remove_element(view, infra.id)
            for child in node.child_nodes:
                remove(view, child.id)

    return _remove_element(view, element_id)


def _is_protected(view: View, element_id: str) -> bool:
    scope = view.scope
    if scope is None:
        return False
    if view.kind in (ViewKind.CONTEXT, ViewKind.CONTAINER):
        return element_id == scope.id
    if view.kind == ViewKind.COMPONENT:
        system = scope.parent
        return element_id == scope.id or (system is not None and element_id == system.id)
    return False


def _remove_element(view: View, element_id: str) -> bool:
    ev = view.element_view(element_id)
    if ev is None:
        return False
    view.element_views.remove(ev)
    view.relationship_views = [
        rv for rv in view.relationship_views
        if rv.source_id != element_id and rv.destination_id != element_id
    ]
    _renumber_interactions(view)
    return True


def _renumber_interactions(view: View) -> None:
    """Close gaps in dynamic view interaction numbers left by removals."""
    if view.kind != ViewKind.DYNAMIC:
        return
    order = 0
    for rv in view.relationship_views:
        if rv.order:
            order += 1
            rv.order = str(order)


def add_all(view: View) -> None:
    """Add every element the view kind admits within the view's scope."""
    if view.kind == ViewKind.DEPLOYMENT:
        from archview.views.deployment import add_deployment_elements
        add_deployment_elements(view, *view.model.deployment_nodes)
        return
    if view.kind in (ViewKind.DYNAMIC, ViewKind.FILTERED):
        raise ValueError(f"add_all is not supported for {view}")

    candidates = [
        e for e in view.model.elements
        if e.kind in view.admitted_kinds and _in_scope(view, e)
    ]
    add_elements(view, *candidates)


def _in_scope(view: View, element: Element) -> bool:
    scope = view.scope
    if view.kind == ViewKind.CONTAINER:
        if element is scope:
            return False
        if element.kind == ElementKind.CONTAINER:
            return element.parent is scope
    if view.kind == ViewKind.COMPONENT:
        if element is scope:
            return False
        if element.kind == ElementKind.COMPONENT:
            return element.parent is scope
    return True


def add_neighbors(view: View, element: Element) -> None:
    """Add ``element`` and every admitted element one relationship away."""
    if view.kind in (ViewKind.DEPLOYMENT, ViewKind.FILTERED):
        raise ValueError(f"add_neighbors is not supported for {view}")
    neighbors = related(view.model, element, view.admitted_kinds)
    add_elements(view, element, *neighbors)


def remove_tagged(view: View, tag: str) -> None:
    """Remove elements and relationships carrying ``tag``."""
    for ev in list(view.element_views):
        if tag in ev.element.tags:
            remove(view, ev.id)
    view.relationship_views = [
        rv for rv in view.relationship_views if tag not in rv.relationship.tags
    ]
    _renumber_interactions(view)


def remove_unreachable(view: View, element: Element) -> None:
    """Remove elements not connected to ``element`` through relationships."""
    keep = reachable(view.model, element)
    for element_id in view.element_ids:
        if element_id not in keep:
            remove(view, element_id)


def remove_unrelated(view: View) -> None:
    """Remove elements with no relationship in the view."""
    related_ids = set()
    for rv in view.relationship_views:
        related_ids.add(rv.source_id)
        related_ids.add(rv.destination_id)
    for element_id in view.element_ids:
        if element_id not in related_ids:
            remove(view, element_id)


def add_interaction(view: View, source: Element, destination: Element, description: str = "") -> RelationshipView:
    """Add a numbered interaction between two elements to a dynamic view.

    Interactions are numbered from 1 in insertion order; removing elements
    renumbers the remaining ones without gaps.

    Raises:
        ValueError: If the view is not dynamic or no relationship links the
                    two elements
    """
    if view.kind != ViewKind.DYNAMIC:
        raise ValueError(f"interactions can only be added to dynamic views, not {view}")
    rel = next(
        (r for r in view.model.relationships_of(source.id)
         if r.source_id == source.id and r.destination_id == destination.id),
        None,
    )
    if rel is None:
        raise ValueError(f"no relationship from {source} to {destination}")

    add_elements(view, source, destination)
    rv = RelationshipView(
        relationship=rel,
        description=description,
        order=str(sum(1 for r in view.relationship_views if r.order) + 1),
    )
    view.relationship_views.append(rv)
    return rv


def check_membership(view: View) -> list[ViewMembershipViolationError]:
    """Report element views whose kind the view does not admit."""
    if view.kind == ViewKind.FILTERED:
        return []
    allowed = ", ".join(k.value.lower() for k in sorted(view.admitted_kinds, key=lambda k: k.value))
    return [
        ViewMembershipViolationError(f"{view} can only contain {allowed}, found {ev.element}")
        for ev in view.element_views
        if ev.element.kind not in view.admitted_kinds
    ]
