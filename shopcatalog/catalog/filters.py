"""Collection filter registry and evaluators.

A collection filter is a named, parameterized, pure function that
narrows a set of product variants. Filters are registered once at
process start under a unique code; a collection stores only the code
and the encoded arguments of each step in its chain.

Example usage:
    registry = get_filter_registry()
    registry.register(
        CollectionFilter(
            code="sku-prefix-filter",
            description="Variants whose SKU starts with a prefix",
            parameters=(FilterParameter("prefix", ConfigArgType.STRING),),
            evaluate=lambda universe, args, catalog: (
                v for v in universe if v.sku.startswith(args["prefix"])
            ),
        )
    )
    registry.freeze()
"""

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from shopcatalog.catalog.models import CatalogSnapshot, ProductVariant
from shopcatalog.domain.exceptions import (
    DuplicateFilterCodeError,
    FilterRegistryFrozenError,
    InvalidFilterArgumentsError,
)
from shopcatalog.domain.value_objects import ConfigArgType, FilterArgument, FilterDefinition

logger = structlog.get_logger()

FilterArgs = Mapping[str, Any]
Evaluator = Callable[
    [Sequence[ProductVariant], FilterArgs, CatalogSnapshot],
    Iterable[ProductVariant],
]


# ============================================================================
# Filter Definitions
# ============================================================================


@dataclass(frozen=True)
class FilterParameter:
    """Parameter declared by a collection filter.

    Attributes:
        name: Argument name.
        type: Expected argument type.
        required: Whether the argument must be supplied.
        default: Decoded value used when an optional argument is missing.
    """

    name: str
    type: ConfigArgType
    required: bool = True
    default: Any = None


def _decode_value(code: str, argument: FilterArgument) -> Any:
    """Decode an encoded argument value by its type."""
    if argument.type is ConfigArgType.FACET_VALUE_IDS:
        try:
            decoded = json.loads(argument.value)
        except json.JSONDecodeError as exc:
            raise InvalidFilterArgumentsError(
                code, f"'{argument.name}' is not a JSON array: {exc.msg}"
            ) from exc
        if not isinstance(decoded, list) or not all(
            isinstance(item, (str, int)) and not isinstance(item, bool) for item in decoded
        ):
            raise InvalidFilterArgumentsError(code, f"'{argument.name}' must be a list of ids")
        return tuple(str(item) for item in decoded)

    if argument.type is ConfigArgType.BOOLEAN:
        lowered = argument.value.strip().lower()
        if lowered not in ("true", "false"):
            raise InvalidFilterArgumentsError(code, f"'{argument.name}' must be true or false")
        return lowered == "true"

    if argument.type is ConfigArgType.INT:
        try:
            return int(argument.value)
        except ValueError as exc:
            raise InvalidFilterArgumentsError(
                code, f"'{argument.name}' must be an integer"
            ) from exc

    return argument.value


@dataclass(frozen=True)
class CollectionFilter:
    """A registered collection filter.

    Attributes:
        code: Unique filter code referenced by collection filter chains.
        evaluate: Evaluator receiving the universe, decoded arguments and
            the catalog snapshot, yielding the matching variants.
        parameters: Declared parameters.
        description: Human-readable description.
    """

    code: str
    evaluate: Evaluator
    parameters: tuple[FilterParameter, ...] = ()
    description: str = ""

    def decode_arguments(self, arguments: Sequence[FilterArgument]) -> dict[str, Any]:
        """Decode arguments against the declared parameters.

        Args:
            arguments: Encoded arguments of a filter chain step.

        Returns:
            Decoded arguments keyed by parameter name.

        Raises:
            InvalidFilterArgumentsError: If an argument is missing, unknown,
                duplicated, of the wrong type, or cannot be decoded.
        """
        declared = {param.name: param for param in self.parameters}
        supplied: dict[str, FilterArgument] = {}
        for argument in arguments:
            if argument.name not in declared:
                raise InvalidFilterArgumentsError(self.code, f"unknown argument '{argument.name}'")
            if argument.name in supplied:
                raise InvalidFilterArgumentsError(
                    self.code, f"argument '{argument.name}' given more than once"
                )
            expected = declared[argument.name].type
            try:
                arg_type = ConfigArgType(argument.type)
            except (TypeError, ValueError) as exc:
                raise InvalidFilterArgumentsError(
                    self.code, f"'{argument.name}' has unknown type {argument.type!r}"
                ) from exc
            if arg_type is not expected:
                raise InvalidFilterArgumentsError(
                    self.code,
                    f"'{argument.name}' must be of type {expected.value}, "
                    f"got {arg_type.value}",
                )
            if not isinstance(argument.value, str):
                raise InvalidFilterArgumentsError(
                    self.code, f"'{argument.name}' must be an encoded string value"
                )
            supplied[argument.name] = FilterArgument(argument.name, arg_type, argument.value)

        decoded: dict[str, Any] = {}
        for param in self.parameters:
            if param.name in supplied:
                decoded[param.name] = _decode_value(self.code, supplied[param.name])
            elif param.required:
                raise InvalidFilterArgumentsError(self.code, f"missing argument '{param.name}'")
            else:
                decoded[param.name] = param.default
        return decoded

    def apply(
        self,
        universe: Sequence[ProductVariant],
        arguments: Sequence[FilterArgument],
        catalog: CatalogSnapshot,
    ) -> list[ProductVariant]:
        """Run the filter as one step of a chain.

        The result is always a subset of ``universe`` in universe order,
        whatever the evaluator yields. Invalid arguments match nothing.

        Args:
            universe: Output of the previous chain step.
            arguments: Encoded arguments of this step.
            catalog: Snapshot the universe was taken from.

        Returns:
            Matching variants.
        """
        try:
            args = self.decode_arguments(arguments)
        except InvalidFilterArgumentsError as exc:
            logger.warning(
                "Collection filter arguments rejected",
                filter_code=self.code,
                reason=exc.details["reason"],
            )
            return []

        matched = {variant.id for variant in self.evaluate(universe, args, catalog)}
        return [variant for variant in universe if variant.id in matched]


# ============================================================================
# Registry
# ============================================================================


class FilterRegistry:
    """Write-once mapping of filter code to collection filter.

    Filters are registered at startup. After ``freeze()`` the mapping is
    read-only, so concurrent reads need no locking.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._filters: dict[str, CollectionFilter] = {}
        self._frozen = False

    def register(self, collection_filter: CollectionFilter) -> CollectionFilter:
        """Register a collection filter.

        Args:
            collection_filter: Filter to register.

        Returns:
            The registered filter.

        Raises:
            DuplicateFilterCodeError: If the code is already registered.
            FilterRegistryFrozenError: If the registry has been frozen.
        """
        code = collection_filter.code
        if self._frozen:
            raise FilterRegistryFrozenError(code)
        if code in self._filters:
            raise DuplicateFilterCodeError(code)

        self._filters[code] = collection_filter
        logger.info(
            "Registered collection filter",
            filter_code=code,
            parameters=[param.name for param in collection_filter.parameters],
        )
        return collection_filter

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """Check if the registry is read-only."""
        return self._frozen

    def get(self, code: str) -> CollectionFilter | None:
        """Get filter by code.

        Args:
            code: Filter code.

        Returns:
            CollectionFilter if registered, None otherwise.
        """
        return self._filters.get(code)

    def codes(self) -> list[str]:
        """Get registered filter codes in registration order."""
        return list(self._filters)

    def apply(
        self,
        step: FilterDefinition,
        universe: Sequence[ProductVariant],
        catalog: CatalogSnapshot,
    ) -> list[ProductVariant]:
        """Apply one filter chain step.

        An unregistered code matches nothing.

        Args:
            step: Filter chain step.
            universe: Output of the previous step.
            catalog: Snapshot the universe was taken from.

        Returns:
            Matching variants in universe order.
        """
        collection_filter = self._filters.get(step.code)
        if collection_filter is None:
            logger.warning("Unknown collection filter code", filter_code=step.code)
            return []
        return collection_filter.apply(universe, step.arguments, catalog)

    def __contains__(self, code: object) -> bool:
        return code in self._filters

    def __len__(self) -> int:
        return len(self._filters)


# ============================================================================
# Default Filters
# ============================================================================


def _evaluate_facet_values(
    universe: Sequence[ProductVariant],
    args: FilterArgs,
    catalog: CatalogSnapshot,
) -> Iterable[ProductVariant]:
    wanted = set(args["facetValueIds"])
    if not wanted:
        return
    contains_any = args["containsAny"]

    for variant in universe:
        carried = set(variant.facet_value_ids)
        carried.update(catalog.product_of(variant).facet_value_ids)
        if contains_any:
            if not carried.isdisjoint(wanted):
                yield variant
        elif wanted <= carried:
            yield variant


# Case-insensitive name comparisons for variant-name-filter
NAME_OPERATORS: dict[str, Callable[[str, str], bool]] = {
    "contains": lambda name, term: term in name,
    "doesNotContain": lambda name, term: term not in name,
    "startsWith": lambda name, term: name.startswith(term),
    "endsWith": lambda name, term: name.endswith(term),
}


def _evaluate_variant_name(
    universe: Sequence[ProductVariant],
    args: FilterArgs,
    catalog: CatalogSnapshot,
) -> Iterable[ProductVariant]:
    compare = NAME_OPERATORS.get(args["operator"])
    term = args["term"].strip().lower()
    if compare is None or not term:
        return []
    return [variant for variant in universe if compare(variant.name.lower(), term)]


facet_value_filter = CollectionFilter(
    code="facet-value-filter",
    description="Variants carrying the given facet values on the variant or its product",
    parameters=(
        FilterParameter("facetValueIds", ConfigArgType.FACET_VALUE_IDS),
        FilterParameter("containsAny", ConfigArgType.BOOLEAN, required=False, default=True),
    ),
    evaluate=_evaluate_facet_values,
)

variant_name_filter = CollectionFilter(
    code="variant-name-filter",
    description="Variants whose name matches a term",
    parameters=(
        FilterParameter("operator", ConfigArgType.STRING),
        FilterParameter("term", ConfigArgType.STRING),
    ),
    evaluate=_evaluate_variant_name,
)

DEFAULT_FILTERS: tuple[CollectionFilter, ...] = (facet_value_filter, variant_name_filter)


# Global registry instance
_filter_registry: FilterRegistry | None = None


def get_filter_registry() -> FilterRegistry:
    """Get the filter registry singleton.

    The registry is created with the default filters registered and
    left open until startup freezes it.

    Returns:
        FilterRegistry instance.
    """
    global _filter_registry
    if _filter_registry is None:
        _filter_registry = FilterRegistry()
        for collection_filter in DEFAULT_FILTERS:
            _filter_registry.register(collection_filter)
    return _filter_registry


def register_filter(
    code: str,
    evaluator: Evaluator,
    parameters: Sequence[FilterParameter] = (),
    description: str = "",
) -> CollectionFilter:
    """Register a collection filter on the global registry.

    Called by configuration at process start.

    Args:
        code: Unique filter code.
        evaluator: Evaluator function.
        parameters: Declared parameters.
        description: Human-readable description.

    Returns:
        The registered filter.

    Raises:
        DuplicateFilterCodeError: If the code is already registered.
        FilterRegistryFrozenError: If startup has already frozen the registry.
    """
    return get_filter_registry().register(
        CollectionFilter(
            code=code,
            evaluate=evaluator,
            parameters=tuple(parameters),
            description=description,
        )
    )
