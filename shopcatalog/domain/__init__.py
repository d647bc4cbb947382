"""Domain layer - Base classes, value objects, domain errors.

This module exports the building blocks shared by the catalog core:

- **Base classes**: identity-compared entity snapshots and value objects
- **Value Objects**: filter chain configuration (codes and typed arguments)
- **Exceptions**: configuration errors and filter argument errors
"""

from shopcatalog.domain.base import Entity, ValueObject
from shopcatalog.domain.exceptions import (
    CatalogConfigurationError,
    CollectionCycleError,
    DanglingReferenceError,
    DomainError,
    DuplicateFilterCodeError,
    FilterRegistryFrozenError,
    InvalidFilterArgumentsError,
)
from shopcatalog.domain.value_objects import ConfigArgType, FilterArgument, FilterDefinition

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    # Value Objects
    "ConfigArgType",
    "FilterArgument",
    "FilterDefinition",
    # Exceptions
    "CatalogConfigurationError",
    "CollectionCycleError",
    "DanglingReferenceError",
    "DomainError",
    "DuplicateFilterCodeError",
    "FilterRegistryFrozenError",
    "InvalidFilterArgumentsError",
]
