"""Visibility gate for catalog reads.

Every read path goes through these functions so that the audience
rules live in one place. Single reads return ``None`` for a hidden
entity, list reads drop hidden entities before pagination, and nested
reads prune children without dropping the parent.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from shopcatalog.catalog.audience import Audience
from shopcatalog.catalog.models import (
    CatalogSnapshot,
    Collection,
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

T = TypeVar("T")


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
    """

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        """Validate pagination bounds.

        Raises:
            ValueError: If page or page_size is below 1.
        """
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
        total_pages: Total number of pages.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


def paginate(items: Sequence[T], pagination: PaginationParams) -> PaginatedResult[T]:
    """Cut a page out of an already pruned list.

    Args:
        items: Visible items in output order.
        pagination: Pagination parameters.

    Returns:
        Page of items with the post-filter total.
    """
    start = pagination.offset
    return PaginatedResult(
        items=list(items[start : start + pagination.limit]),
        total=len(items),
        page=pagination.page,
        page_size=pagination.page_size,
    )


# ============================================================================
# Single Reads
# ============================================================================


def gate_product(product: Product | None, audience: Audience) -> Product | None:
    """Return the product if the audience may see it."""
    if product is None or not product_visible(product, audience):
        return None
    return product


def gate_variant(
    variant: ProductVariant | None,
    catalog: CatalogSnapshot,
    audience: Audience,
) -> ProductVariant | None:
    """Return the variant if the audience may see it."""
    if variant is None:
        return None
    if not variant_visible(variant, catalog.product_of(variant), audience):
        return None
    return variant


def gate_collection(collection: Collection | None, audience: Audience) -> Collection | None:
    """Return the collection if the audience may see it."""
    if collection is None or not collection_visible(collection, audience):
        return None
    return collection


def gate_facet_value(
    facet_value: FacetValue | None,
    catalog: CatalogSnapshot,
    audience: Audience,
) -> FacetValue | None:
    """Return the facet value if the audience may see it."""
    if facet_value is None:
        return None
    if not facet_value_visible(facet_value, catalog.facet_of(facet_value), audience):
        return None
    return facet_value


# ============================================================================
# List and Nested Reads
# ============================================================================


def prune_products(products: Iterable[Product], audience: Audience) -> list[Product]:
    """Drop products hidden from the audience."""
    return [product for product in products if product_visible(product, audience)]


def prune_variants(
    variants: Iterable[ProductVariant],
    catalog: CatalogSnapshot,
    audience: Audience,
) -> list[ProductVariant]:
    """Drop variants hidden from the audience, including those of disabled products."""
    return [
        variant
        for variant in variants
        if variant_visible(variant, catalog.product_of(variant), audience)
    ]


def prune_facet_values(
    facet_values: Iterable[FacetValue],
    catalog: CatalogSnapshot,
    audience: Audience,
) -> list[FacetValue]:
    """Drop facet values of private facets for the shop audience."""
    return [
        value
        for value in facet_values
        if facet_value_visible(value, catalog.facet_of(value), audience)
    ]


def prune_collections(collections: Iterable[Collection], audience: Audience) -> list[Collection]:
    """Drop collections hidden from the audience."""
    return [collection for collection in collections if collection_visible(collection, audience)]
