"""Visibility predicates.

Pure functions over entity snapshots. Admin audience sees everything;
shop audience only sees enabled and public entities.
"""

from shopcatalog.catalog.audience import Audience
from shopcatalog.catalog.models import Collection, Facet, FacetValue, Product, ProductVariant


def product_visible(product: Product, audience: Audience) -> bool:
    """Check if a product can be shown to the audience."""
    if audience.is_admin:
        return True
    return product.enabled


def variant_visible(
    variant: ProductVariant,
    owning_product: Product,
    audience: Audience,
) -> bool:
    """Check if a variant can be shown to the audience.

    A variant of a disabled product is hidden even when the variant
    itself is enabled.
    """
    if audience.is_admin:
        return True
    return variant.enabled and owning_product.enabled


def facet_value_visible(
    facet_value: FacetValue,
    owning_facet: Facet,
    audience: Audience,
) -> bool:
    """Check if a facet value can be shown to the audience."""
    if audience.is_admin:
        return True
    return not owning_facet.is_private


def collection_visible(collection: Collection, audience: Audience) -> bool:
    """Check if a collection can be shown to the audience."""
    if audience.is_admin:
        return True
    return not collection.is_private
