"""API schemas for the catalog read surface.

Pydantic models for response serialization.
"""

from pydantic import BaseModel, Field

from shopcatalog.catalog.gate import PaginatedResult
from shopcatalog.catalog.models import Collection, FacetValue, Product, ProductVariant
from shopcatalog.domain.value_objects import ConfigArgType


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of visible items")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    has_more: bool = Field(..., description="Whether there are more pages")


# ============================================================================
# Catalog Schemas
# ============================================================================


class FacetValueSchema(BaseModel):
    """Facet value representation."""

    id: str
    facet_id: str
    code: str
    name: str


class VariantSchema(BaseModel):
    """Product variant representation."""

    id: str
    product_id: str
    name: str
    sku: str
    enabled: bool


class ProductResponse(BaseModel):
    """Response for a single product."""

    id: str
    name: str
    slug: str
    enabled: bool


class ProductListResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductResponse]


class FilterArgumentSchema(BaseModel):
    """Encoded filter argument."""

    name: str
    type: ConfigArgType
    value: str


class FilterSchema(BaseModel):
    """One step of a collection filter chain."""

    code: str
    arguments: list[FilterArgumentSchema] = Field(default_factory=list)


class CollectionResponse(BaseModel):
    """Response for a single collection."""

    id: str
    name: str
    description: str
    is_private: bool
    parent_id: str | None = None
    filters: list[FilterSchema] = Field(default_factory=list)


class CollectionListResponse(PaginatedResponse):
    """Paginated list of collections."""

    items: list[CollectionResponse]


class VariantListResponse(PaginatedResponse):
    """Paginated list of collection member variants."""

    collection_id: str
    items: list[VariantSchema]


# ============================================================================
# Converters
# ============================================================================


def page_fields(result: PaginatedResult) -> dict:
    """Extract pagination fields shared by list responses."""
    return {
        "total": result.total,
        "page": result.page,
        "page_size": result.page_size,
        "has_more": result.has_next,
    }


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product snapshot to response schema."""
    return ProductResponse(
        id=product.id,
        name=product.name,
        slug=product.slug,
        enabled=product.enabled,
    )


def variant_to_schema(variant: ProductVariant) -> VariantSchema:
    """Convert ProductVariant snapshot to response schema."""
    return VariantSchema(
        id=variant.id,
        product_id=variant.product_id,
        name=variant.name,
        sku=variant.sku,
        enabled=variant.enabled,
    )


def facet_value_to_schema(value: FacetValue) -> FacetValueSchema:
    """Convert FacetValue snapshot to response schema."""
    return FacetValueSchema(
        id=value.id,
        facet_id=value.facet_id,
        code=value.code,
        name=value.name,
    )


def collection_to_response(collection: Collection) -> CollectionResponse:
    """Convert Collection snapshot to response schema."""
    return CollectionResponse(
        id=collection.id,
        name=collection.name,
        description=collection.description,
        is_private=collection.is_private,
        parent_id=collection.parent_id,
        filters=[
            FilterSchema(
                code=step.code,
                arguments=[
                    FilterArgumentSchema(name=arg.name, type=arg.type, value=arg.value)
                    for arg in step.arguments
                ],
            )
            for step in collection.filters
        ],
    )
