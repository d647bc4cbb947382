"""Base classes for domain layer.

Provides the foundational abstractions shared by catalog snapshots
and the filter configuration value objects.
"""

from abc import ABC
from dataclasses import dataclass


# ============================================================================
# Value Object Base
# ============================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. They have no lifecycle and are interchangeable
    when their values are equal.

    Example:
        @dataclass(frozen=True)
        class FilterArgument(ValueObject):
            name: str
            type: ConfigArgType
            value: str
    """

    pass


# ============================================================================
# Entity Base
# ============================================================================


@dataclass(frozen=True)
class Entity(ABC):
    """Base class for entity snapshots.

    Entities have identity that persists across state changes.
    Two snapshots are equal if they have the same identity,
    regardless of their other attributes. Snapshots are frozen:
    a state change produces a new snapshot via ``dataclasses.replace``.

    Subclasses must be declared with ``eq=False`` so they keep
    identity comparison instead of generated field comparison.

    Attributes:
        id: Unique identifier for this entity.
    """

    id: str

    def __eq__(self, other: object) -> bool:
        """Compare entities by identity.

        Args:
            other: Object to compare with.

        Returns:
            True if other is same type with same id.
        """
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash entity by identity.

        Returns:
            Hash of the entity id.
        """
        return hash(self.id)
