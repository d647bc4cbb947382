"""Catalog visibility and collection membership.

Decides which products, variants, facet values and collections a
shop or admin read may return, and which variants belong to which
collection according to its filter chain.
"""

from shopcatalog.catalog.audience import Audience, RequestContext
from shopcatalog.catalog.filters import (
    DEFAULT_FILTERS,
    CollectionFilter,
    FilterParameter,
    FilterRegistry,
    facet_value_filter,
    get_filter_registry,
    register_filter,
    variant_name_filter,
)
from shopcatalog.catalog.gate import PaginatedResult, PaginationParams
from shopcatalog.catalog.models import (
    CatalogSnapshot,
    Collection,
    Facet,
    FacetValue,
    Product,
    ProductVariant,
)
from shopcatalog.catalog.predicates import (
    collection_visible,
    facet_value_visible,
    product_visible,
    variant_visible,
)
from shopcatalog.catalog.repository import CatalogRepository, get_catalog_repository
from shopcatalog.catalog.resolver import CollectionResolver
from shopcatalog.catalog.seed import CatalogSeeder, SeedConfig
from shopcatalog.catalog.service import (
    CatalogService,
    CollectionMembershipPage,
    get_catalog_service,
)

__all__ = [
    # Audience
    "Audience",
    "RequestContext",
    # Models
    "CatalogSnapshot",
    "Collection",
    "Facet",
    "FacetValue",
    "Product",
    "ProductVariant",
    # Predicates
    "collection_visible",
    "facet_value_visible",
    "product_visible",
    "variant_visible",
    # Filters
    "DEFAULT_FILTERS",
    "CollectionFilter",
    "FilterParameter",
    "FilterRegistry",
    "facet_value_filter",
    "get_filter_registry",
    "register_filter",
    "variant_name_filter",
    # Resolver
    "CollectionResolver",
    # Gate
    "PaginatedResult",
    "PaginationParams",
    # Repository
    "CatalogRepository",
    "get_catalog_repository",
    # Seeding
    "CatalogSeeder",
    "SeedConfig",
    # Service
    "CatalogService",
    "CollectionMembershipPage",
    "get_catalog_service",
]
