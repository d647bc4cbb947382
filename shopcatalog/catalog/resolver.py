"""Collection membership resolution.

Membership is recomputed from the current snapshot on every call and
is never stored.
"""

from collections.abc import Iterable

import structlog

from shopcatalog.catalog.audience import Audience
from shopcatalog.catalog.filters import FilterRegistry, get_filter_registry
from shopcatalog.catalog.models import CatalogSnapshot, Collection, ProductVariant
from shopcatalog.catalog.predicates import collection_visible, variant_visible

logger = structlog.get_logger()


class CollectionResolver:
    """Computes which variants belong to a collection.

    Resolution steps:
    1. A collection hidden from the audience resolves to nothing.
    2. The universe is every variant visible to the audience.
    3. Each filter of the chain runs in declared order on the output of
       the previous one. An empty chain keeps the whole universe.
    4. Visibility is applied again, so no filter can bring back a
       hidden variant.
    5. The result is intersected with the parent's membership.
    6. Variants are emitted in catalog creation order.

    Example usage:
        resolver = CollectionResolver()
        variants = resolver.resolve_membership(collection, catalog, Audience.SHOP)
    """

    def __init__(self, registry: FilterRegistry | None = None) -> None:
        """Initialize resolver.

        Args:
            registry: Filter registry; defaults to the global registry.
        """
        self.registry = registry or get_filter_registry()

    def resolve_membership(
        self,
        collection: Collection,
        catalog: CatalogSnapshot,
        audience: Audience,
    ) -> list[ProductVariant]:
        """Resolve the variants of a single collection.

        Args:
            collection: Collection to resolve.
            catalog: Current catalog snapshot.
            audience: Requesting audience.

        Returns:
            Member variants in canonical order.
        """
        return self._resolve(collection, catalog, audience, {})

    def resolve_memberships(
        self,
        collections: Iterable[Collection],
        catalog: CatalogSnapshot,
        audience: Audience,
    ) -> dict[str, list[ProductVariant]]:
        """Resolve several collections against the same snapshot.

        Parent results are shared between the collections of this call.

        Args:
            collections: Collections to resolve.
            catalog: Current catalog snapshot.
            audience: Requesting audience.

        Returns:
            Member variants keyed by collection ID.
        """
        resolved: dict[str, list[ProductVariant]] = {}
        return {
            collection.id: self._resolve(collection, catalog, audience, resolved)
            for collection in collections
        }

    def _resolve(
        self,
        collection: Collection,
        catalog: CatalogSnapshot,
        audience: Audience,
        resolved: dict[str, list[ProductVariant]],
    ) -> list[ProductVariant]:
        if collection.id in resolved:
            return resolved[collection.id]

        if not collection_visible(collection, audience):
            resolved[collection.id] = []
            return []

        members = self._visible_variants(catalog.variants(), catalog, audience)
        for step in collection.filters:
            if not members:
                break
            members = self.registry.apply(step, members, catalog)
        members = self._visible_variants(members, catalog, audience)

        if collection.parent_id is not None:
            # Snapshot construction guarantees the parent exists and the chain is acyclic
            parent = catalog.get_collection(collection.parent_id)
            parent_ids = {v.id for v in self._resolve(parent, catalog, audience, resolved)}
            members = [variant for variant in members if variant.id in parent_ids]

        members = catalog.in_canonical_order(members)
        logger.debug(
            "Resolved collection membership",
            collection_id=collection.id,
            audience=audience.value,
            filter_count=len(collection.filters),
            variant_count=len(members),
        )
        resolved[collection.id] = members
        return members

    @staticmethod
    def _visible_variants(
        variants: Iterable[ProductVariant],
        catalog: CatalogSnapshot,
        audience: Audience,
    ) -> list[ProductVariant]:
        return [
            variant
            for variant in variants
            if variant_visible(variant, catalog.product_of(variant), audience)
        ]
