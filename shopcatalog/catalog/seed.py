"""Demo catalog seeding with deterministic randomness.

Fills a repository with facets, products, variants and collections so
the HTTP surface has something to serve locally. The same seed always
produces the same catalog, ids included.
"""

import random
from dataclasses import dataclass
from typing import Any

import structlog

from shopcatalog.catalog.models import Collection, Facet, FacetValue, Product, ProductVariant
from shopcatalog.catalog.repository import CatalogRepository
from shopcatalog.domain.value_objects import FilterArgument, FilterDefinition

logger = structlog.get_logger()


# ============================================================================
# Constants
# ============================================================================

# Product names per category; each category becomes a public facet value
CATEGORY_PRODUCTS: dict[str, list[str]] = {
    "Electronics": ["Laptop", "Tablet", "Headphones", "Smart Speaker", "Monitor"],
    "Home & Garden": ["Desk Lamp", "Bonsai Tree", "Cactus", "Orchid", "Spiky Cactus"],
    "Sports & Outdoor": ["Road Bike", "Tent", "Football", "Skipping Rope", "Running Shoe"],
}

# Synthetic brand names (fictional companies)
BRANDS = ["Acme", "Contoso", "Northwind", "Fabrikam", "Globex"]

# Variant options: (name suffix, SKU suffix)
VARIANT_OPTIONS = [
    ("Small", "S"),
    ("Medium", "M"),
    ("Large", "L"),
    ("X-Large", "XL"),
]

# Private facet used for internal merchandising
MARGIN_VALUES = ["low", "medium", "high"]


@dataclass
class SeedConfig:
    """Configuration for demo catalog seeding.

    Attributes:
        seed: Random seed for reproducibility.
        max_variants: Maximum variants per product.
        disabled_ratio: Share of products and variants created disabled.
    """

    seed: int = 42
    max_variants: int = 3
    disabled_ratio: float = 0.1


class CatalogSeeder:
    """Populates a repository with a deterministic demo catalog.

    IDs follow the "T_<n>" scheme per entity type, numbered in creation
    order.

    Example usage:
        seeder = CatalogSeeder(get_catalog_repository(), SeedConfig(seed=7))
        summary = seeder.seed()
    """

    def __init__(self, repository: CatalogRepository, config: SeedConfig | None = None) -> None:
        """Initialize seeder.

        Args:
            repository: Repository to fill.
            config: Seeding configuration.
        """
        self.repository = repository
        self.config = config or SeedConfig()
        self._rng = random.Random(self.config.seed)
        self._counters: dict[str, int] = {}

    def _next_id(self, kind: str) -> str:
        self._counters[kind] = self._counters.get(kind, 0) + 1
        return f"T_{self._counters[kind]}"

    def _facet(self, code: str, name: str, values: list[str], is_private: bool) -> list[FacetValue]:
        facet = Facet(id=self._next_id("facet"), code=code, name=name, is_private=is_private)
        self.repository.save_facet(facet)
        created = []
        for value in values:
            facet_value = FacetValue(
                id=self._next_id("facet_value"),
                facet_id=facet.id,
                code=value.lower().replace(" & ", "-").replace(" ", "-"),
                name=value,
            )
            self.repository.save_facet_value(facet_value)
            created.append(facet_value)
        return created

    def seed(self) -> dict[str, Any]:
        """Create the demo catalog.

        Returns:
            Seeding result with counts.
        """
        categories = self._facet("category", "Category", list(CATEGORY_PRODUCTS), False)
        brands = self._facet("brand", "Brand", BRANDS, False)
        margins = self._facet("profit-margin", "Profit Margin", MARGIN_VALUES, True)

        product_count = 0
        variant_count = 0
        for category in categories:
            for base_name in CATEGORY_PRODUCTS[category.name]:
                brand = self._rng.choice(brands)
                margin = self._rng.choice(margins)
                product = Product(
                    id=self._next_id("product"),
                    name=f"{brand.name} {base_name}",
                    slug=f"{brand.code}-{base_name.lower().replace(' ', '-')}",
                    enabled=self._rng.random() >= self.config.disabled_ratio,
                    facet_value_ids=(category.id, brand.id, margin.id),
                )
                self.repository.save_product(product)
                product_count += 1

                option_count = self._rng.randint(1, self.config.max_variants)
                for name_suffix, sku_suffix in VARIANT_OPTIONS[:option_count]:
                    self.repository.save_variant(
                        ProductVariant(
                            id=self._next_id("variant"),
                            product_id=product.id,
                            name=f"{product.name} {name_suffix}",
                            sku=f"{product.slug.upper()}-{sku_suffix}",
                            enabled=self._rng.random() >= self.config.disabled_ratio,
                        )
                    )
                    variant_count += 1

        collections = self._seed_collections(categories)

        result = {
            "seed": self.config.seed,
            "facets_created": self._counters["facet"],
            "products_created": product_count,
            "variants_created": variant_count,
            "collections_created": collections,
        }
        logger.info("Seeded demo catalog", **result)
        return result

    def _seed_collections(self, categories: list[FacetValue]) -> int:
        count = 0
        for category in categories:
            parent = Collection(
                id=self._next_id("collection"),
                name=category.name,
                filters=(
                    FilterDefinition(
                        code="facet-value-filter",
                        arguments=(FilterArgument.facet_value_ids("facetValueIds", [category.id]),),
                    ),
                ),
            )
            self.repository.save_collection(parent)
            count += 1

            for name_suffix, _ in VARIANT_OPTIONS[:2]:
                self.repository.save_collection(
                    Collection(
                        id=self._next_id("collection"),
                        name=f"{category.name} - {name_suffix}",
                        parent_id=parent.id,
                        filters=(
                            FilterDefinition(
                                code="variant-name-filter",
                                arguments=(
                                    FilterArgument.string("operator", "endsWith"),
                                    FilterArgument.string("term", name_suffix),
                                ),
                            ),
                        ),
                    )
                )
                count += 1
        return count
