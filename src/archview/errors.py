"""Exception types raised by archview.

Single-operation misuse (adding the wrong kind of element to a view, an
animation step that introduces nothing) raises immediately. Model-wide
problems are collected by the validation framework and surface together
through ``ValidationFailedError``.
"""

from typing import Any


class ArchviewError(Exception):
    """Base class for all archview errors."""
    pass


class DuplicateIDError(ArchviewError):
    """Raised when a different entity already holds an identifier."""

    def __init__(self, entity_id: str, existing: Any, entity: Any):
        self.entity_id = entity_id
        self.existing = existing
        self.entity = entity
        super().__init__(f"identifier {entity_id!r} already used by {existing}")


class UnresolvedDestinationError(ArchviewError):
    """Raised when a symbolic relationship destination matches no element."""

    def __init__(self, relationship: Any, name: str):
        self.relationship = relationship
        self.name = name
        super().__init__(f"could not find relationship target {name!r} for {relationship}")


class TypeMismatchError(ArchviewError):
    """Raised when an element kind is not admitted by a view kind."""

    def __init__(self, view: Any, element: Any):
        self.view = view
        self.element = element
        super().__init__(
            f"elements of kind {element.kind.value} cannot be added to "
            f"{view.kind.value} view {view.key!r}"
        )


class NoNewElementsError(ArchviewError):
    """Raised when an animation step would not introduce any element."""
    pass


class EmptyAnimationStepError(ArchviewError):
    """A declared animation step introduces no element."""
    pass


class ViewMembershipViolationError(ArchviewError):
    """A view holds an element its kind does not admit."""
    pass


class ValidationFailedError(ArchviewError):
    """Raised by the build entry points when validation reports failures."""

    def __init__(self, result: Any):
        self.result = result
        count = len(result.errors)
        super().__init__(f"validation failed with {count} error(s)")
