"""Animation steps for progressive presentation of a view."""

import logging

from archview.errors import NoNewElementsError
from archview.model.elements import Element, ElementKind
from archview.views.models import AnimationStep, View

logger = logging.getLogger(__name__)

_DEPLOYED_KINDS = (ElementKind.INFRASTRUCTURE_NODE, ElementKind.CONTAINER_INSTANCE)


def add_animation_step(view: View, *candidates: Element) -> AnimationStep:
    """Append an animation step introducing the given elements.

    Candidates missing from the view or introduced by an earlier step are
    skipped. Infrastructure nodes and container instances bring along their
    deployment node ancestors that no step has introduced yet. The step
    lists the relationships linking one of its elements to an element of an
    earlier step.

    Args:
        view: View to animate
        candidates: Elements to introduce, in order

    Returns:
        The appended step

    Raises:
        NoNewElementsError: If no candidate can be introduced
    """
    earlier = view.claimed_ids()
    claimed = set(earlier)
    step = AnimationStep(order=len(view.animations) + 1)

    for element in candidates:
        if not view.has_element(element.id):
            logger.debug(f"Animation step {step.order}: {element} not in {view}, skipped")
            continue
        if element.id in claimed:
            continue
        claimed.add(element.id)
        step.element_ids.append(element.id)

        if element.kind in _DEPLOYED_KINDS:
            for ancestor in element.ancestors():
                if ancestor.id in claimed:
                    break
                claimed.add(ancestor.id)
                step.element_ids.append(ancestor.id)

    if not step.element_ids:
        raise NoNewElementsError(
            f"none of the elements of animation step {step.order} are in {view} "
            "or missing from previous steps"
        )

    introduced = set(step.element_ids)
    for rv in view.relationship_views:
        src, dst = rv.source_id, rv.destination_id
        bridges = (src in introduced and dst in earlier) or (src in earlier and dst in introduced)
        if bridges and rv.id not in step.relationship_ids:
            step.relationship_ids.append(rv.id)

    view.animations.append(step)
    logger.debug(
        f"Added animation step {step.order} to {view}: "
        f"{len(step.element_ids)} elements, {len(step.relationship_ids)} relationships"
    )
    return step
