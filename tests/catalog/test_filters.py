"""Tests for the collection filter registry and default filters."""

from dataclasses import replace

import pytest

from shopcatalog.catalog.filters import (
    CollectionFilter,
    FilterParameter,
    FilterRegistry,
    facet_value_filter,
    get_filter_registry,
    register_filter,
    variant_name_filter,
)
from shopcatalog.catalog.models import CatalogSnapshot
from shopcatalog.catalog.repository import CatalogRepository
from shopcatalog.domain.exceptions import (
    DuplicateFilterCodeError,
    FilterRegistryFrozenError,
    InvalidFilterArgumentsError,
)
from shopcatalog.domain.value_objects import ConfigArgType, FilterArgument, FilterDefinition
from tests.catalog_data import (
    COMPUTERS,
    MASSIVE_MARGIN,
    PHOTO,
    SPORTS,
    facet_filter,
    name_filter,
)


def _ids(variants) -> list[str]:
    return [v.id for v in variants]


@pytest.fixture
def catalog(repository: CatalogRepository) -> CatalogSnapshot:
    """Snapshot of the sample catalog."""
    return repository.snapshot()


class TestFilterRegistry:
    """Tests for FilterRegistry."""

    def test_register_and_get(self) -> None:
        """Registered filters can be looked up by code."""
        registry = FilterRegistry()
        registry.register(facet_value_filter)
        assert registry.get("facet-value-filter") is facet_value_filter
        assert "facet-value-filter" in registry
        assert len(registry) == 1

    def test_get_unknown_code(self) -> None:
        """Unknown codes return None."""
        assert FilterRegistry().get("missing") is None

    def test_duplicate_code_rejected(self) -> None:
        """Registering the same code twice is a configuration error."""
        registry = FilterRegistry()
        registry.register(facet_value_filter)
        with pytest.raises(DuplicateFilterCodeError) as exc_info:
            registry.register(
                CollectionFilter(code="facet-value-filter", evaluate=lambda u, a, c: u)
            )
        assert exc_info.value.details["filter_code"] == "facet-value-filter"
        assert registry.get("facet-value-filter") is facet_value_filter

    def test_frozen_registry_rejects_registration(self) -> None:
        """No filters can be added once startup froze the registry."""
        registry = FilterRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(FilterRegistryFrozenError):
            registry.register(variant_name_filter)

    def test_codes_in_registration_order(self, registry: FilterRegistry) -> None:
        """Codes are listed in registration order."""
        assert registry.codes() == ["facet-value-filter", "variant-name-filter"]

    def test_unknown_code_step_matches_nothing(
        self, registry: FilterRegistry, catalog: CatalogSnapshot
    ) -> None:
        """A chain step with an unregistered code yields the empty set."""
        step = FilterDefinition(code="price-range-filter")
        assert registry.apply(step, catalog.variants(), catalog) == []

    def test_global_registry_has_default_filters(self) -> None:
        """The global registry starts with the default filters."""
        registry = get_filter_registry()
        assert registry.codes() == ["facet-value-filter", "variant-name-filter"]
        assert not registry.frozen

    def test_register_filter_on_global_registry(self, catalog: CatalogSnapshot) -> None:
        """register_filter adds a filter to the global registry."""
        sku_filter = register_filter(
            "sku-suffix-filter",
            lambda universe, args, _catalog: [
                v for v in universe if v.sku.endswith(args["suffix"])
            ],
            parameters=[FilterParameter("suffix", ConfigArgType.STRING)],
        )
        assert get_filter_registry().get("sku-suffix-filter") is sku_filter

        step = FilterDefinition(
            code="sku-suffix-filter",
            arguments=(FilterArgument.string("suffix", "-31"),),
        )
        assert _ids(get_filter_registry().apply(step, catalog.variants(), catalog)) == ["T_31"]

    def test_register_filter_duplicate_of_default(self) -> None:
        """register_filter cannot shadow a default filter."""
        with pytest.raises(DuplicateFilterCodeError):
            register_filter("facet-value-filter", lambda u, a, c: u)


class TestDecodeArguments:
    """Tests for argument decoding."""

    def test_decodes_ids_and_default(self) -> None:
        """Id lists are decoded and optional arguments take their default."""
        args = facet_value_filter.decode_arguments(
            [FilterArgument.facet_value_ids("facetValueIds", ["T_1", "T_2"])]
        )
        assert args == {"facetValueIds": ("T_1", "T_2"), "containsAny": True}

    def test_numeric_ids_become_strings(self) -> None:
        """Numeric ids in the JSON array are normalized to strings."""
        args = facet_value_filter.decode_arguments(
            [FilterArgument("facetValueIds", ConfigArgType.FACET_VALUE_IDS, "[1, 2]")]
        )
        assert args["facetValueIds"] == ("1", "2")

    def test_decodes_boolean(self) -> None:
        """Boolean arguments are decoded case-insensitively."""
        args = facet_value_filter.decode_arguments(
            [
                FilterArgument.facet_value_ids("facetValueIds", ["T_1"]),
                FilterArgument("containsAny", ConfigArgType.BOOLEAN, "FALSE"),
            ]
        )
        assert args["containsAny"] is False

    @pytest.mark.parametrize(
        "arguments",
        [
            [],
            [FilterArgument("facetValueIds", ConfigArgType.FACET_VALUE_IDS, "not json")],
            [FilterArgument("facetValueIds", ConfigArgType.FACET_VALUE_IDS, '{"a": 1}')],
            [FilterArgument("facetValueIds", ConfigArgType.FACET_VALUE_IDS, "[true]")],
            [FilterArgument("facetValueIds", ConfigArgType.STRING, '["T_1"]')],
            [
                FilterArgument.facet_value_ids("facetValueIds", ["T_1"]),
                FilterArgument("containsAny", ConfigArgType.BOOLEAN, "yes"),
            ],
            [
                FilterArgument.facet_value_ids("facetValueIds", ["T_1"]),
                FilterArgument.string("unexpected", "x"),
            ],
            [
                FilterArgument.facet_value_ids("facetValueIds", ["T_1"]),
                FilterArgument.facet_value_ids("facetValueIds", ["T_2"]),
            ],
        ],
    )
    def test_invalid_arguments_raise(self, arguments: list[FilterArgument]) -> None:
        """Missing, malformed, mistyped, unknown or repeated arguments are rejected."""
        with pytest.raises(InvalidFilterArgumentsError):
            facet_value_filter.decode_arguments(arguments)

    def test_int_argument(self) -> None:
        """Int arguments are parsed."""
        limit_filter = CollectionFilter(
            code="first-n",
            evaluate=lambda u, a, c: list(u)[: a["count"]],
            parameters=(FilterParameter("count", ConfigArgType.INT),),
        )
        assert limit_filter.decode_arguments(
            [FilterArgument("count", ConfigArgType.INT, "3")]
        ) == {"count": 3}
        with pytest.raises(InvalidFilterArgumentsError):
            limit_filter.decode_arguments([FilterArgument("count", ConfigArgType.INT, "three")])

    def test_plain_string_type_is_normalized(self) -> None:
        """A stored type name is accepted in place of the enum member."""
        stored_type = "facet_value_ids"
        stored = FilterArgument("facetValueIds", stored_type, '["T_4"]')  # type: ignore[arg-type]
        args = facet_value_filter.decode_arguments([stored])
        assert args["facetValueIds"] == ("T_4",)

    @pytest.mark.parametrize(
        "arguments",
        [
            [FilterArgument("facetValueIds", "id_list", '["T_4"]')],
            [FilterArgument("facetValueIds", ConfigArgType.FACET_VALUE_IDS, ["T_4"])],
            [
                FilterArgument.facet_value_ids("facetValueIds", ["T_4"]),
                FilterArgument("containsAny", ConfigArgType.BOOLEAN, True),
            ],
        ],
    )
    def test_unencoded_arguments_raise(self, arguments: list[FilterArgument]) -> None:
        """Unknown type names and values that are not strings are rejected."""
        with pytest.raises(InvalidFilterArgumentsError):
            facet_value_filter.decode_arguments(arguments)

    def test_unencoded_arguments_match_nothing(self, catalog: CatalogSnapshot) -> None:
        """A step with a raw boolean value degrades to the empty set."""
        arguments = (
            FilterArgument.facet_value_ids("facetValueIds", [SPORTS]),
            FilterArgument("containsAny", ConfigArgType.BOOLEAN, True),  # type: ignore[arg-type]
        )
        assert facet_value_filter.apply(catalog.variants(), arguments, catalog) == []


class TestFacetValueFilter:
    """Tests for facet-value-filter."""

    def test_matches_product_level_facet_values(
        self, registry: FilterRegistry, catalog: CatalogSnapshot
    ) -> None:
        """Variants match through facet values attached to their product."""
        result = registry.apply(facet_filter(SPORTS), catalog.variants(), catalog)
        assert _ids(result) == [f"T_{n}" for n in range(22, 32)]

    def test_union_across_ids(self, registry: FilterRegistry, catalog: CatalogSnapshot) -> None:
        """A variant matches if it carries any of the listed values."""
        result = registry.apply(facet_filter(PHOTO, SPORTS), catalog.variants(), catalog)
        assert _ids(result) == [f"T_{n}" for n in range(18, 32)]

    def test_matches_variant_level_facet_values(self, repository: CatalogRepository) -> None:
        """Variants match through their own facet values."""
        repository.save_variant(
            replace(repository.get_variant("T_6"), facet_value_ids=(MASSIVE_MARGIN,))
        )
        catalog = repository.snapshot()
        result = facet_value_filter.apply(
            catalog.variants(), facet_filter(MASSIVE_MARGIN).arguments, catalog
        )
        assert _ids(result) == ["T_6"]

    def test_contains_all(self, repository: CatalogRepository) -> None:
        """With containsAny=false a variant must carry every listed value."""
        repository.save_variant(
            replace(repository.get_variant("T_1"), facet_value_ids=(MASSIVE_MARGIN,))
        )
        catalog = repository.snapshot()
        step = facet_filter(COMPUTERS, MASSIVE_MARGIN, contains_any=False)
        result = facet_value_filter.apply(catalog.variants(), step.arguments, catalog)
        assert _ids(result) == ["T_1"]

    def test_empty_id_list_matches_nothing(
        self, registry: FilterRegistry, catalog: CatalogSnapshot
    ) -> None:
        """An empty id list yields the empty set."""
        assert registry.apply(facet_filter(), catalog.variants(), catalog) == []

    def test_invalid_arguments_match_nothing(
        self, registry: FilterRegistry, catalog: CatalogSnapshot
    ) -> None:
        """Malformed arguments degrade to the empty set instead of raising."""
        step = FilterDefinition(
            code="facet-value-filter",
            arguments=(FilterArgument.string("facetValueIds", SPORTS),),
        )
        assert registry.apply(step, catalog.variants(), catalog) == []

    def test_restricted_to_universe(self, catalog: CatalogSnapshot) -> None:
        """Only variants of the given universe can match."""
        universe = [catalog.get_variant("T_22"), catalog.get_variant("T_1")]
        result = facet_value_filter.apply(universe, facet_filter(SPORTS).arguments, catalog)
        assert _ids(result) == ["T_22"]


class TestVariantNameFilter:
    """Tests for variant-name-filter."""

    @pytest.mark.parametrize(
        ("operator", "term", "expected"),
        [
            ("contains", "shoe", ["T_28", "T_29", "T_30", "T_31"]),
            ("startsWith", "running shoe size 4", ["T_28", "T_29", "T_30", "T_31"]),
            ("endsWith", "SIZE 46", ["T_31"]),
        ],
    )
    def test_operators(
        self,
        catalog: CatalogSnapshot,
        operator: str,
        term: str,
        expected: list[str],
    ) -> None:
        """Names are compared case-insensitively."""
        universe = [v for v in catalog.variants() if v.product_id in ("T_16", "T_17")]
        result = variant_name_filter.apply(universe, name_filter(operator, term).arguments, catalog)
        assert _ids(result) == expected

    def test_does_not_contain(self, catalog: CatalogSnapshot) -> None:
        """doesNotContain excludes matching names."""
        universe = [v for v in catalog.variants() if v.product_id in ("T_16", "T_17")]
        result = variant_name_filter.apply(
            universe, name_filter("doesNotContain", "shoe").arguments, catalog
        )
        assert _ids(result) == ["T_27"]

    def test_unknown_operator_matches_nothing(self, catalog: CatalogSnapshot) -> None:
        """Unknown operators yield the empty set."""
        result = variant_name_filter.apply(
            catalog.variants(), name_filter("matches", "shoe").arguments, catalog
        )
        assert result == []

    def test_blank_term_matches_nothing(self, catalog: CatalogSnapshot) -> None:
        """A blank term yields the empty set."""
        result = variant_name_filter.apply(
            catalog.variants(), name_filter("contains", "  ").arguments, catalog
        )
        assert result == []


class TestCustomEvaluator:
    """Tests for evaluators that misbehave."""

    def test_evaluator_cannot_add_variants_outside_universe(
        self, catalog: CatalogSnapshot
    ) -> None:
        """Whatever the evaluator yields, the step output is a subset of its input."""
        greedy = CollectionFilter(code="everything", evaluate=lambda u, a, c: c.variants())
        universe = [catalog.get_variant("T_23"), catalog.get_variant("T_22")]
        assert _ids(greedy.apply(universe, (), catalog)) == ["T_23", "T_22"]
