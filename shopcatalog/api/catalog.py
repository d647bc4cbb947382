"""Catalog API endpoints.

Read-only endpoints over the catalog service. The audience of each
request is resolved by middleware; a result the service reports as
absent becomes a 404 here.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from shopcatalog.api.schemas import (
    CollectionListResponse,
    CollectionResponse,
    ErrorResponse,
    FacetValueSchema,
    ProductListResponse,
    ProductResponse,
    VariantListResponse,
    VariantSchema,
    collection_to_response,
    facet_value_to_schema,
    page_fields,
    product_to_response,
    variant_to_schema,
)
from shopcatalog.catalog.audience import Audience, RequestContext
from shopcatalog.catalog.gate import PaginationParams
from shopcatalog.catalog.models import Product
from shopcatalog.catalog.service import CatalogService, get_catalog_service
from shopcatalog.infrastructure.config import settings

router = APIRouter(tags=["Catalog"])


# ============================================================================
# Dependencies
# ============================================================================


def get_context(request: Request) -> RequestContext:
    """Build the request context from middleware state."""
    return RequestContext(
        audience=getattr(request.state, "audience", Audience.SHOP),
        request_id=getattr(request.state, "request_id", None),
    )


def get_pagination(
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, le=settings.max_page_size, description="Items per page"),
    ] = settings.default_page_size,
) -> PaginationParams:
    """Get pagination parameters from the query string."""
    return PaginationParams(page=page, page_size=page_size)


Context = Annotated[RequestContext, Depends(get_context)]
Service = Annotated[CatalogService, Depends(get_catalog_service)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]


def _not_found(error_code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error_code": error_code, "message": message},
    )


def _require_product(service: CatalogService, product_id: str, ctx: RequestContext) -> Product:
    product = service.resolve_product_visibility(product_id, ctx)
    if product is None:
        raise _not_found("PRODUCT_NOT_FOUND", f"Product not found: {product_id}")
    return product


# ============================================================================
# Products
# ============================================================================


@router.get("/products", response_model=ProductListResponse, summary="List products")
async def list_products(
    service: Service, ctx: Context, pagination: Pagination
) -> ProductListResponse:
    """List products visible to the caller."""
    result = service.list_products(ctx, pagination)
    return ProductListResponse(
        items=[product_to_response(p) for p in result.items],
        **page_fields(result),
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(product_id: str, service: Service, ctx: Context) -> ProductResponse:
    """Get a product by ID."""
    return product_to_response(_require_product(service, product_id, ctx))


@router.get(
    "/products/{product_id}/variants",
    response_model=list[VariantSchema],
    responses={404: {"model": ErrorResponse}},
    summary="List product variants",
)
async def list_product_variants(
    product_id: str, service: Service, ctx: Context
) -> list[VariantSchema]:
    """List the visible variants of a product."""
    _require_product(service, product_id, ctx)
    variants = service.resolve_variant_list_for_product(product_id, ctx)
    return [variant_to_schema(v) for v in variants]


@router.get(
    "/products/{product_id}/facet-values",
    response_model=list[FacetValueSchema],
    responses={404: {"model": ErrorResponse}},
    summary="List product facet values",
)
async def list_product_facet_values(
    product_id: str, service: Service, ctx: Context
) -> list[FacetValueSchema]:
    """List the visible facet values attached to a product."""
    product = _require_product(service, product_id, ctx)
    return [facet_value_to_schema(v) for v in service.resolve_facet_values_for(product, ctx)]


@router.get(
    "/products/{product_id}/collections",
    response_model=list[CollectionResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List product collections",
)
async def list_product_collections(
    product_id: str, service: Service, ctx: Context
) -> list[CollectionResponse]:
    """List the visible collections containing the product."""
    _require_product(service, product_id, ctx)
    collections = service.resolve_collections_for_product(product_id, ctx)
    return [collection_to_response(c) for c in collections]


@router.get(
    "/variants/{variant_id}/facet-values",
    response_model=list[FacetValueSchema],
    responses={404: {"model": ErrorResponse}},
    summary="List variant facet values",
)
async def list_variant_facet_values(
    variant_id: str, service: Service, ctx: Context
) -> list[FacetValueSchema]:
    """List the visible facet values attached to a variant."""
    variant = service.resolve_variant(variant_id, ctx)
    if variant is None:
        raise _not_found("VARIANT_NOT_FOUND", f"Variant not found: {variant_id}")
    return [facet_value_to_schema(v) for v in service.resolve_facet_values_for(variant, ctx)]


# ============================================================================
# Facet values
# ============================================================================


@router.get(
    "/facet-values/{facet_value_id}",
    response_model=FacetValueSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get facet value",
)
async def get_facet_value(
    facet_value_id: str, service: Service, ctx: Context
) -> FacetValueSchema:
    """Get a facet value by ID."""
    value = service.resolve_facet_value(facet_value_id, ctx)
    if value is None:
        raise _not_found("FACET_VALUE_NOT_FOUND", f"Facet value not found: {facet_value_id}")
    return facet_value_to_schema(value)


# ============================================================================
# Collections
# ============================================================================


@router.get("/collections", response_model=CollectionListResponse, summary="List collections")
async def list_collections(
    service: Service, ctx: Context, pagination: Pagination
) -> CollectionListResponse:
    """List collections visible to the caller."""
    result = service.resolve_collection_list(ctx, pagination)
    return CollectionListResponse(
        items=[collection_to_response(c) for c in result.items],
        **page_fields(result),
    )


@router.get(
    "/collections/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get collection",
)
async def get_collection(
    collection_id: str, service: Service, ctx: Context
) -> CollectionResponse:
    """Get a collection by ID."""
    collection = service.resolve_collection(collection_id, ctx)
    if collection is None:
        raise _not_found("COLLECTION_NOT_FOUND", f"Collection not found: {collection_id}")
    return collection_to_response(collection)


@router.get(
    "/collections/{collection_id}/variants",
    response_model=VariantListResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List collection variants",
)
async def list_collection_variants(
    collection_id: str, service: Service, ctx: Context, pagination: Pagination
) -> VariantListResponse:
    """List a page of the variants currently in a collection."""
    membership = service.resolve_collection_membership(collection_id, ctx, pagination)
    if membership is None:
        raise _not_found("COLLECTION_NOT_FOUND", f"Collection not found: {collection_id}")
    return VariantListResponse(
        collection_id=membership.collection.id,
        items=[variant_to_schema(v) for v in membership.variants.items],
        **page_fields(membership.variants),
    )
