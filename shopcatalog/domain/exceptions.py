"""Domain exceptions.

All domain-level errors raised by the catalog core. Configuration
errors surface while the process starts up or while the write path
stores an entity; they are never raised from a read.

An entity that is missing or hidden from the requesting audience is
a normal ``None`` result, not an exception.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Configuration Errors
# ============================================================================


class CatalogConfigurationError(DomainError):
    """Base class for fatal catalog misconfiguration."""

    pass


class DuplicateFilterCodeError(CatalogConfigurationError):
    """Raised when a collection filter code is registered twice."""

    def __init__(self, code: str) -> None:
        """Initialize duplicate filter code error.

        Args:
            code: The filter code that is already registered.
        """
        super().__init__(
            f"A collection filter with code '{code}' is already registered",
            details={"filter_code": code},
        )


class FilterRegistryFrozenError(CatalogConfigurationError):
    """Raised when registering a filter after startup has completed."""

    def __init__(self, code: str) -> None:
        """Initialize frozen registry error.

        Args:
            code: The filter code that was being registered.
        """
        super().__init__(
            f"Cannot register collection filter '{code}': registry is frozen",
            details={"filter_code": code},
        )


class CollectionCycleError(CatalogConfigurationError):
    """Raised when a collection parent chain loops back on itself."""

    def __init__(self, collection_id: str, chain: list[str]) -> None:
        """Initialize collection cycle error.

        Args:
            collection_id: Collection whose ancestry contains the cycle.
            chain: Collection ids walked before the cycle was detected.
        """
        super().__init__(
            f"Collection {collection_id} has a cyclic parent chain: "
            f"{' -> '.join(chain)}",
            details={"collection_id": collection_id, "chain": chain},
        )


class DanglingReferenceError(CatalogConfigurationError):
    """Raised when an entity references another entity that does not exist."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        reference_type: str,
        reference_id: str,
    ) -> None:
        """Initialize dangling reference error.

        Args:
            entity_type: Type of the referencing entity (e.g., "ProductVariant").
            entity_id: ID of the referencing entity.
            reference_type: Type of the missing entity (e.g., "Product").
            reference_id: ID of the missing entity.
        """
        super().__init__(
            f"{entity_type}({entity_id}) references unknown "
            f"{reference_type}({reference_id})",
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "reference_type": reference_type,
                "reference_id": reference_id,
            },
        )


# ============================================================================
# Filter Errors
# ============================================================================


class InvalidFilterArgumentsError(DomainError):
    """Raised when filter arguments do not match the declared parameters.

    Never escapes a read: the filter step catches it and matches nothing.
    """

    def __init__(self, filter_code: str, reason: str) -> None:
        """Initialize invalid filter arguments error.

        Args:
            filter_code: Code of the filter being evaluated.
            reason: Explanation of why the arguments were rejected.
        """
        super().__init__(
            f"Invalid arguments for collection filter '{filter_code}': {reason}",
            details={"filter_code": filter_code, "reason": reason},
        )
