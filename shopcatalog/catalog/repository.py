"""In-memory catalog repository.

Stands in for the storage collaborator: the write path saves entity
state here and every read takes a fresh immutable snapshot.
"""

import threading

import structlog

from shopcatalog.catalog.models import (
    CatalogSnapshot,
    Collection,
    Facet,
    FacetValue,
    Product,
    ProductVariant,
    check_collection_tree,
)
from shopcatalog.domain.exceptions import DanglingReferenceError

logger = structlog.get_logger()


class CatalogRepository:
    """In-memory repository for catalog entities.

    Saving an entity that already exists replaces it in place, so its
    creation order (and therefore its output order) is preserved.

    Example usage:
        repo = CatalogRepository()
        repo.save_product(Product(id="T_1", name="Laptop"))
        repo.save_variant(ProductVariant(id="T_1", product_id="T_1", name="Laptop 13 inch"))
        catalog = repo.snapshot()
    """

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self._variants: dict[str, ProductVariant] = {}
        self._facets: dict[str, Facet] = {}
        self._facet_values: dict[str, FacetValue] = {}
        self._collections: dict[str, Collection] = {}
        self._lock = threading.Lock()

    def _check_facet_values(
        self, entity_type: str, entity_id: str, facet_value_ids: tuple[str, ...]
    ) -> None:
        for value_id in facet_value_ids:
            if value_id not in self._facet_values:
                raise DanglingReferenceError(entity_type, entity_id, "FacetValue", value_id)

    def save_product(self, product: Product) -> None:
        """Save a product.

        Raises:
            DanglingReferenceError: If an attached facet value is unknown.
        """
        with self._lock:
            self._check_facet_values("Product", product.id, product.facet_value_ids)
            self._products[product.id] = product

    def save_variant(self, variant: ProductVariant) -> None:
        """Save a variant.

        Raises:
            DanglingReferenceError: If the owning product or an attached
                facet value is unknown.
        """
        with self._lock:
            if variant.product_id not in self._products:
                raise DanglingReferenceError(
                    "ProductVariant", variant.id, "Product", variant.product_id
                )
            self._check_facet_values("ProductVariant", variant.id, variant.facet_value_ids)
            self._variants[variant.id] = variant

    def save_facet(self, facet: Facet) -> None:
        """Save a facet."""
        with self._lock:
            self._facets[facet.id] = facet

    def save_facet_value(self, facet_value: FacetValue) -> None:
        """Save a facet value.

        Raises:
            DanglingReferenceError: If the owning facet is unknown.
        """
        with self._lock:
            if facet_value.facet_id not in self._facets:
                raise DanglingReferenceError(
                    "FacetValue", facet_value.id, "Facet", facet_value.facet_id
                )
            self._facet_values[facet_value.id] = facet_value

    def save_collection(self, collection: Collection) -> None:
        """Save a collection, replacing its filter chain wholesale.

        The parent chain is validated before the collection is stored.

        Raises:
            DanglingReferenceError: If the parent collection is unknown.
            CollectionCycleError: If the parent chain would become cyclic.
        """
        with self._lock:
            candidate = dict(self._collections)
            candidate[collection.id] = collection
            check_collection_tree(candidate)
            self._collections = candidate

        logger.info(
            "Saved collection",
            collection_id=collection.id,
            parent_id=collection.parent_id,
            is_private=collection.is_private,
            filters=[step.code for step in collection.filters],
        )

    def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        return self._products.get(product_id)

    def get_variant(self, variant_id: str) -> ProductVariant | None:
        """Get variant by ID."""
        return self._variants.get(variant_id)

    def get_collection(self, collection_id: str) -> Collection | None:
        """Get collection by ID."""
        return self._collections.get(collection_id)

    def snapshot(self) -> CatalogSnapshot:
        """Take an immutable snapshot of the current state.

        Returns:
            CatalogSnapshot of all entities.
        """
        with self._lock:
            return CatalogSnapshot(
                products=list(self._products.values()),
                variants=list(self._variants.values()),
                facets=list(self._facets.values()),
                facet_values=list(self._facet_values.values()),
                collections=list(self._collections.values()),
            )

    def clear(self) -> None:
        """Remove all entities."""
        with self._lock:
            self._products.clear()
            self._variants.clear()
            self._facets.clear()
            self._facet_values.clear()
            self._collections.clear()


# Global repository instance
_catalog_repo: CatalogRepository | None = None


def get_catalog_repository() -> CatalogRepository:
    """Get catalog repository singleton."""
    global _catalog_repo
    if _catalog_repo is None:
        _catalog_repo = CatalogRepository()
    return _catalog_repo
