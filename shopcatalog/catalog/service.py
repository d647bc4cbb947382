"""Catalog service for shop and admin reads.

High-level service that takes a fresh snapshot from the repository,
resolves collection membership and passes every result through the
visibility gate before handing it to the transport layer.
"""

from dataclasses import dataclass

import structlog

from shopcatalog.catalog import gate
from shopcatalog.catalog.audience import RequestContext
from shopcatalog.catalog.gate import PaginatedResult, PaginationParams
from shopcatalog.catalog.models import (
    Collection,
    FacetValue,
    Product,
    ProductVariant,
)
from shopcatalog.catalog.repository import CatalogRepository, get_catalog_repository
from shopcatalog.catalog.resolver import CollectionResolver

logger = structlog.get_logger()


@dataclass
class CollectionMembershipPage:
    """A collection together with one page of its member variants.

    Attributes:
        collection: The collection.
        variants: Page of member variants.
    """

    collection: Collection
    variants: PaginatedResult[ProductVariant]


class CatalogService:
    """Service for audience-aware catalog reads.

    Every method reads a new snapshot, so updates made by the write
    path between two calls are always reflected.

    Example usage:
        service = CatalogService()
        ctx = RequestContext.shop(request_id="req-1")

        product = service.resolve_product_visibility("T_1", ctx)
        page = service.resolve_collection_membership(
            "T_3", ctx, PaginationParams(page=1, page_size=10)
        )
    """

    def __init__(
        self,
        repository: CatalogRepository | None = None,
        resolver: CollectionResolver | None = None,
    ) -> None:
        """Initialize service.

        Args:
            repository: Catalog repository; defaults to the global one.
            resolver: Collection resolver; defaults to one on the global registry.
        """
        self.repository = repository or get_catalog_repository()
        self.resolver = resolver or CollectionResolver()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def resolve_product_visibility(
        self, product_id: str, ctx: RequestContext
    ) -> Product | None:
        """Get a product if visible to the audience.

        Args:
            product_id: Product ID.
            ctx: Request context.

        Returns:
            Product, or None if missing or hidden.
        """
        catalog = self.repository.snapshot()
        product = gate.gate_product(catalog.get_product(product_id), ctx.audience)
        logger.debug(
            "Resolved product",
            product_id=product_id,
            found=product is not None,
            **ctx.log_context(),
        )
        return product

    def list_products(
        self, ctx: RequestContext, pagination: PaginationParams
    ) -> PaginatedResult[Product]:
        """List visible products.

        Pagination is applied after hidden products are removed.

        Args:
            ctx: Request context.
            pagination: Pagination parameters.

        Returns:
            Page of products.
        """
        catalog = self.repository.snapshot()
        visible = gate.prune_products(catalog.products(), ctx.audience)
        return gate.paginate(visible, pagination)

    def resolve_variant_list_for_product(
        self, product_id: str, ctx: RequestContext
    ) -> list[ProductVariant]:
        """List the visible variants of a visible product.

        Args:
            product_id: Product ID.
            ctx: Request context.

        Returns:
            Variants in creation order; empty if the product is hidden.
        """
        catalog = self.repository.snapshot()
        product = gate.gate_product(catalog.get_product(product_id), ctx.audience)
        if product is None:
            return []
        return gate.prune_variants(catalog.variants_of(product.id), catalog, ctx.audience)

    def resolve_variant(
        self, variant_id: str, ctx: RequestContext
    ) -> ProductVariant | None:
        """Get a variant if it and its product are visible to the audience."""
        catalog = self.repository.snapshot()
        return gate.gate_variant(catalog.get_variant(variant_id), catalog, ctx.audience)

    def resolve_collections_for_product(
        self, product_id: str, ctx: RequestContext
    ) -> list[Collection]:
        """List visible collections containing any visible variant of a product.

        Args:
            product_id: Product ID.
            ctx: Request context.

        Returns:
            Collections in creation order; empty if the product is hidden.
        """
        catalog = self.repository.snapshot()
        product = gate.gate_product(catalog.get_product(product_id), ctx.audience)
        if product is None:
            return []

        variant_ids = {v.id for v in catalog.variants_of(product.id)}
        collections = gate.prune_collections(catalog.collections(), ctx.audience)
        memberships = self.resolver.resolve_memberships(collections, catalog, ctx.audience)
        return [
            collection
            for collection in collections
            if any(v.id in variant_ids for v in memberships[collection.id])
        ]

    # ------------------------------------------------------------------
    # Facet values
    # ------------------------------------------------------------------

    def resolve_facet_values_for(
        self, entity: Product | ProductVariant, ctx: RequestContext
    ) -> list[FacetValue]:
        """List the visible facet values attached to a product or variant.

        Args:
            entity: Product or variant snapshot.
            ctx: Request context.

        Returns:
            Facet values in attachment order.
        """
        catalog = self.repository.snapshot()
        values = catalog.facet_values_by_ids(entity.facet_value_ids)
        return gate.prune_facet_values(values, catalog, ctx.audience)

    def resolve_facet_value(
        self, facet_value_id: str, ctx: RequestContext
    ) -> FacetValue | None:
        """Get a facet value if visible to the audience."""
        catalog = self.repository.snapshot()
        return gate.gate_facet_value(
            catalog.get_facet_value(facet_value_id), catalog, ctx.audience
        )

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def resolve_collection(
        self, collection_id: str, ctx: RequestContext
    ) -> Collection | None:
        """Get a collection if visible to the audience."""
        catalog = self.repository.snapshot()
        return gate.gate_collection(catalog.get_collection(collection_id), ctx.audience)

    def resolve_collection_list(
        self, ctx: RequestContext, pagination: PaginationParams
    ) -> PaginatedResult[Collection]:
        """List visible collections.

        Args:
            ctx: Request context.
            pagination: Pagination parameters.

        Returns:
            Page of collections, counted after private ones are removed.
        """
        catalog = self.repository.snapshot()
        visible = gate.prune_collections(catalog.collections(), ctx.audience)
        return gate.paginate(visible, pagination)

    def resolve_collection_membership(
        self,
        collection_id: str,
        ctx: RequestContext,
        pagination: PaginationParams,
    ) -> CollectionMembershipPage | None:
        """Get a collection with a page of its member variants.

        Args:
            collection_id: Collection ID.
            ctx: Request context.
            pagination: Pagination parameters for the variants.

        Returns:
            Membership page, or None if the collection is missing or hidden.
        """
        catalog = self.repository.snapshot()
        collection = gate.gate_collection(catalog.get_collection(collection_id), ctx.audience)
        if collection is None:
            logger.debug(
                "Collection not visible",
                collection_id=collection_id,
                **ctx.log_context(),
            )
            return None

        members = self.resolver.resolve_membership(collection, catalog, ctx.audience)
        return CollectionMembershipPage(
            collection=collection,
            variants=gate.paginate(members, pagination),
        )


def get_catalog_service() -> CatalogService:
    """Create a catalog service on the global repository and registry."""
    return CatalogService()
