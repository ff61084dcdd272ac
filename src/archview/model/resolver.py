"""Post-construction resolution of symbolic relationship destinations."""

import logging

from archview.errors import UnresolvedDestinationError
from archview.model.model import Model

logger = logging.getLogger(__name__)


class RelationshipResolver:
    """Resolves relationship destinations once construction has completed.

    Relationships may name elements declared after them, so resolution only
    runs when the whole graph exists.
    """

    def __init__(self, model: Model):
        self.model = model

    def unresolved(self) -> list[UnresolvedDestinationError]:
        """Collect every relationship whose destination cannot be resolved."""
        errors = []
        for rel in self.model.relationships:
            if rel.is_resolved:
                continue
            if self.model.find_element(rel.destination_name or "", scope=rel.source) is None:
                errors.append(UnresolvedDestinationError(rel, rel.destination_name or ""))
        return errors

    def resolve(self) -> None:
        """Resolve every relationship and merge default structural tags.

        Raises:
            UnresolvedDestinationError: If a destination matches no element
        """
        for element in self.model.elements:
            element.finalize()

        resolved = 0
        for rel in self.model.relationships:
            destination = rel.destination
            if destination is None:
                name = rel.destination_name or ""
                destination = self.model.find_element(name, scope=rel.source)
                if destination is None:
                    raise UnresolvedDestinationError(rel, name)
                resolved += 1
            rel.resolve(destination)

        logger.debug(f"Resolved {resolved} symbolic relationship destinations")
