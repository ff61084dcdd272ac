"""Identifier registry for the elements and relationships of one model build."""

import logging
from collections.abc import Iterator
from typing import Any

from archview.errors import DuplicateIDError

logger = logging.getLogger(__name__)


class Registry:
    """Maps identifiers to entities for the duration of one model build.

    Each builder owns its own registry so independent builds never share
    identifiers.
    """

    def __init__(self):
        self._entities: dict[str, Any] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: str) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entities.values())

    def register(self, entity: Any) -> str:
        """Assign or validate the identifier of an entity.

        Args:
            entity: Element or relationship; an empty ``id`` gets the next
                    free sequential identifier

        Returns:
            The entity identifier

        Raises:
            DuplicateIDError: If a different entity already holds the identifier
        """
        if not entity.id:
            while str(self._next_id) in self._entities:
                self._next_id += 1
            entity.id = str(self._next_id)
            self._next_id += 1

        existing = self._entities.get(entity.id)
        if existing is not None and existing is not entity:
            raise DuplicateIDError(entity.id, existing, entity)

        self._entities[entity.id] = entity
        return entity.id

    def lookup(self, entity_id: str) -> Any | None:
        """Return the entity registered under ``entity_id`` or None."""
        return self._entities.get(entity_id)

    def reset(self) -> None:
        """Forget every registered entity."""
        logger.debug(f"Resetting registry holding {len(self._entities)} entities")
        self._entities.clear()
        self._next_id = 1
