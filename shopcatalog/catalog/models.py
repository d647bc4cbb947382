"""Catalog entity snapshots.

Defines the read-only Product, ProductVariant, Facet, FacetValue and
Collection snapshots supplied by the storage collaborator, and the
CatalogSnapshot that bundles them for a single read.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from shopcatalog.domain.base import Entity
from shopcatalog.domain.exceptions import CollectionCycleError, DanglingReferenceError
from shopcatalog.domain.value_objects import FilterDefinition


@dataclass(frozen=True, eq=False)
class Product(Entity):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier.
        name: Product name.
        slug: URL slug.
        enabled: Disabled products are hidden from the shop together
            with all of their variants.
        facet_value_ids: Facet values attached at product level.
    """

    name: str
    slug: str = ""
    enabled: bool = True
    facet_value_ids: tuple[str, ...] = ()

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]}, enabled={self.enabled})>"


@dataclass(frozen=True, eq=False)
class ProductVariant(Entity):
    """Purchasable variant of a product (e.g., size or colour).

    Attributes:
        id: Unique variant identifier.
        product_id: Owning product ID.
        name: Variant name (e.g., "Running Shoe Size 40").
        sku: Stock keeping unit.
        enabled: Variant availability flag.
        facet_value_ids: Facet values attached at variant level.
    """

    product_id: str
    name: str
    sku: str = ""
    enabled: bool = True
    facet_value_ids: tuple[str, ...] = ()

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductVariant(id={self.id}, name={self.name})>"


@dataclass(frozen=True, eq=False)
class Facet(Entity):
    """Attribute category whose values can be attached to products.

    Attributes:
        id: Unique facet identifier.
        code: Facet code (e.g., "category").
        name: Display name.
        is_private: Private facets and all their values are hidden from the shop.
    """

    code: str
    name: str
    is_private: bool = False


@dataclass(frozen=True, eq=False)
class FacetValue(Entity):
    """A single value of a facet.

    Attributes:
        id: Unique facet value identifier.
        facet_id: Owning facet ID.
        code: Value code.
        name: Display name.
    """

    facet_id: str
    code: str
    name: str


@dataclass(frozen=True, eq=False)
class Collection(Entity):
    """Filter-derived grouping of product variants.

    Membership is never stored: it is computed from the filter chain
    on every read.

    Attributes:
        id: Unique collection identifier.
        name: Collection name.
        description: Collection description.
        is_private: Private collections are hidden from the shop.
        filters: Ordered filter chain.
        parent_id: Parent collection ID; a child only narrows its parent.
    """

    name: str
    description: str = ""
    is_private: bool = False
    filters: tuple[FilterDefinition, ...] = ()
    parent_id: str | None = None

    def __repr__(self) -> str:
        """String representation."""
        return f"<Collection(id={self.id}, name={self.name}, private={self.is_private})>"


def check_collection_tree(collections: Mapping[str, Collection]) -> None:
    """Validate parent references of a set of collections.

    Args:
        collections: Collections keyed by ID.

    Raises:
        DanglingReferenceError: If a parent ID does not exist.
        CollectionCycleError: If a parent chain loops back on itself.
    """
    for collection in collections.values():
        chain = [collection.id]
        seen = {collection.id}
        current = collection
        while current.parent_id is not None:
            parent = collections.get(current.parent_id)
            if parent is None:
                raise DanglingReferenceError(
                    "Collection", current.id, "Collection", current.parent_id
                )
            chain.append(parent.id)
            if parent.id in seen:
                raise CollectionCycleError(collection.id, chain)
            seen.add(parent.id)
            current = parent


class CatalogSnapshot:
    """Immutable view of the whole catalog for a single read.

    Entities are kept in creation order; that order is the canonical
    output order for every list the core returns. Construction checks
    referential integrity and collection acyclicity so that the read
    path can follow references without further checks.

    Example usage:
        catalog = CatalogSnapshot(
            products=[Product(id="T_1", name="Laptop")],
            variants=[ProductVariant(id="T_1", product_id="T_1", name="Laptop 13 inch")],
        )
        catalog.variants_of("T_1")
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        variants: Iterable[ProductVariant] = (),
        facets: Iterable[Facet] = (),
        facet_values: Iterable[FacetValue] = (),
        collections: Iterable[Collection] = (),
    ) -> None:
        """Build snapshot and validate references.

        Args:
            products: Products in creation order.
            variants: Variants in creation order.
            facets: Facets in creation order.
            facet_values: Facet values in creation order.
            collections: Collections in creation order.

        Raises:
            CatalogConfigurationError: If a reference is dangling or a
                collection parent chain is cyclic.
        """
        self._products: dict[str, Product] = {p.id: p for p in products}
        self._variants: dict[str, ProductVariant] = {v.id: v for v in variants}
        self._facets: dict[str, Facet] = {f.id: f for f in facets}
        self._facet_values: dict[str, FacetValue] = {fv.id: fv for fv in facet_values}
        self._collections: dict[str, Collection] = {c.id: c for c in collections}

        self._variant_position = {vid: index for index, vid in enumerate(self._variants)}
        self._variants_by_product: dict[str, list[ProductVariant]] = {}
        for variant in self._variants.values():
            self._variants_by_product.setdefault(variant.product_id, []).append(variant)

        self._validate()

    def _validate(self) -> None:
        """Check referential integrity of the snapshot."""
        for variant in self._variants.values():
            if variant.product_id not in self._products:
                raise DanglingReferenceError(
                    "ProductVariant", variant.id, "Product", variant.product_id
                )
            self._check_facet_values("ProductVariant", variant.id, variant.facet_value_ids)

        for product in self._products.values():
            self._check_facet_values("Product", product.id, product.facet_value_ids)

        for value in self._facet_values.values():
            if value.facet_id not in self._facets:
                raise DanglingReferenceError("FacetValue", value.id, "Facet", value.facet_id)

        check_collection_tree(self._collections)

    def _check_facet_values(
        self, entity_type: str, entity_id: str, facet_value_ids: Iterable[str]
    ) -> None:
        for value_id in facet_value_ids:
            if value_id not in self._facet_values:
                raise DanglingReferenceError(entity_type, entity_id, "FacetValue", value_id)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        return self._products.get(product_id)

    def get_variant(self, variant_id: str) -> ProductVariant | None:
        """Get variant by ID."""
        return self._variants.get(variant_id)

    def get_facet(self, facet_id: str) -> Facet | None:
        """Get facet by ID."""
        return self._facets.get(facet_id)

    def get_facet_value(self, facet_value_id: str) -> FacetValue | None:
        """Get facet value by ID."""
        return self._facet_values.get(facet_value_id)

    def get_collection(self, collection_id: str) -> Collection | None:
        """Get collection by ID."""
        return self._collections.get(collection_id)

    def products(self) -> list[Product]:
        """Get all products in creation order."""
        return list(self._products.values())

    def variants(self) -> list[ProductVariant]:
        """Get all variants in creation order."""
        return list(self._variants.values())

    def facets(self) -> list[Facet]:
        """Get all facets in creation order."""
        return list(self._facets.values())

    def facet_values(self) -> list[FacetValue]:
        """Get all facet values in creation order."""
        return list(self._facet_values.values())

    def collections(self) -> list[Collection]:
        """Get all collections in creation order."""
        return list(self._collections.values())

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def product_of(self, variant: ProductVariant) -> Product:
        """Get the owning product of a variant.

        Args:
            variant: Variant from this snapshot.

        Returns:
            Owning product.
        """
        return self._products[variant.product_id]

    def facet_of(self, value: FacetValue) -> Facet:
        """Get the owning facet of a facet value.

        Args:
            value: Facet value from this snapshot.

        Returns:
            Owning facet.
        """
        return self._facets[value.facet_id]

    def variants_of(self, product_id: str) -> list[ProductVariant]:
        """Get the variants of a product in creation order.

        Args:
            product_id: Product ID.

        Returns:
            Variants of the product, empty if none or unknown product.
        """
        return list(self._variants_by_product.get(product_id, []))

    def values_of(self, facet_id: str) -> list[FacetValue]:
        """Get the values of a facet in creation order."""
        return [v for v in self._facet_values.values() if v.facet_id == facet_id]

    def facet_values_by_ids(self, facet_value_ids: Iterable[str]) -> list[FacetValue]:
        """Resolve facet value IDs, skipping unknown ones.

        Args:
            facet_value_ids: Facet value IDs in the order they are attached.

        Returns:
            Facet values in the same order.
        """
        return [
            self._facet_values[value_id]
            for value_id in facet_value_ids
            if value_id in self._facet_values
        ]

    def in_canonical_order(self, variants: Iterable[ProductVariant]) -> list[ProductVariant]:
        """Sort variants into creation order.

        Args:
            variants: Variants from this snapshot, in any order.

        Returns:
            Variants sorted by creation order.
        """
        return sorted(variants, key=lambda v: self._variant_position[v.id])
