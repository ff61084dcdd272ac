"""Graph traversal queries over a finalized model."""

from collections.abc import Iterable

from archview.model.elements import Element, ElementKind
from archview.model.model import Model


def reachable(model: Model, root: Element | str) -> set[str]:
    """Return the ids of every element connected to ``root``.

    Relationships are followed in both directions. The result includes
    ``root`` itself. The graph may contain cycles; each element is marked
    visited before its neighbors are pushed.
    """
    root_id = root if isinstance(root, str) else root.id
    visited = {root_id}
    stack = [root_id]
    while stack:
        current = stack.pop()
        for rel in model.relationships_of(current):
            if rel.source_id == current:
                neighbor = rel.destination_id
            else:
                neighbor = rel.source_id
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return visited


def related(model: Model, root: Element | str, kinds: Iterable[ElementKind] | None = None) -> list[Element]:
    """Elements one relationship away from ``root``, in either direction.

    Args:
        model: Finalized model
        root: Element or element id
        kinds: Only return elements of these kinds (all kinds when None)

    Returns:
        Elements in first-seen order without duplicates; empty when nothing
        matches
    """
    root_id = root if isinstance(root, str) else root.id
    wanted = set(kinds) if kinds is not None else None
    seen: set[str] = set()
    result = []
    for rel in model.relationships_of(root_id):
        other = rel.other_end(root_id)
        if other is None or other.id in seen:
            continue
        if wanted is not None and other.kind not in wanted:
            continue
        seen.add(other.id)
        result.append(other)
    return result


def related_people(model: Model, root: Element | str) -> list[Element]:
    return related(model, root, [ElementKind.PERSON])


def related_software_systems(model: Model, root: Element | str) -> list[Element]:
    return related(model, root, [ElementKind.SOFTWARE_SYSTEM])


def related_containers(model: Model, root: Element | str) -> list[Element]:
    return related(model, root, [ElementKind.CONTAINER])


def related_components(model: Model, root: Element | str) -> list[Element]:
    return related(model, root, [ElementKind.COMPONENT])
