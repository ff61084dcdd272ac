"""Deployment node projection for deployment views.

A deployment node only appears in a deployment view when something under it
belongs there: a container instance of the software system in scope (any
system when the view is unscoped) or an infrastructure node. Subtrees that
contribute nothing are pruned even when requested explicitly. Included nodes
bring their whole ancestor chain along so containment stays visible.
"""

import logging

from archview.model.elements import Element, ElementKind
from archview.views.membership import insert_element
from archview.views.models import View

logger = logging.getLogger(__name__)


def add_deployment_elements(view: View, *elements: Element) -> None:
    """Add deployment nodes, infrastructure nodes or container instances."""
    for element in elements:
        if not _in_environment(view, element):
            logger.debug(f"Skipping {element}: not in environment {view.environment!r}")
            continue

        if element.kind == ElementKind.DEPLOYMENT_NODE:
            included = project_node(view, element)
        elif element.kind == ElementKind.CONTAINER_INSTANCE:
            included = instance_in_scope(view, element)
            if included:
                insert_element(view, element)
        else:
            included = True
            insert_element(view, element)

        if included:
            for ancestor in element.ancestors():
                insert_element(view, ancestor)
        else:
            logger.debug(f"Pruned {element} from {view}: nothing in scope")


def project_node(view: View, node: Element) -> bool:
    """Add the parts of ``node``'s subtree that belong in the view.

    Returns:
        True if anything under ``node`` was included, in which case ``node``
        itself was added too
    """
    if not _in_environment(view, node):
        return False

    nested = False
    for instance in node.container_instances:
        if instance_in_scope(view, instance):
            insert_element(view, instance)
            nested = True
    for infra in node.infrastructure_nodes:
        insert_element(view, infra)
        nested = True
    for child in node.child_nodes:
        if project_node(view, child):
            nested = True

    if nested:
        insert_element(view, node)
    return nested


def instance_in_scope(view: View, instance: Element) -> bool:
    """Whether a container instance belongs to the view's software system."""
    if view.scope is None:
        return True
    system = instance.software_system
    return system is not None and system.id == view.scope_id


def _in_environment(view: View, element: Element) -> bool:
    return not view.environment or element.environment == view.environment
