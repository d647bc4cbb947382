"""Shared fixtures for catalog tests."""

import pytest

import shopcatalog.catalog.filters as filters_module
import shopcatalog.catalog.repository as repository_module
from shopcatalog.catalog.filters import DEFAULT_FILTERS, FilterRegistry
from shopcatalog.catalog.models import Collection
from shopcatalog.catalog.repository import CatalogRepository
from shopcatalog.catalog.resolver import CollectionResolver
from shopcatalog.catalog.service import CatalogService
from tests.catalog_data import SPORTS, build_sample_repository, facet_filter


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset global registry and repository before each test."""
    filters_module._filter_registry = None
    repository_module._catalog_repo = None
    yield
    filters_module._filter_registry = None
    repository_module._catalog_repo = None


@pytest.fixture
def registry() -> FilterRegistry:
    """Create a filter registry with the default filters."""
    registry = FilterRegistry()
    for collection_filter in DEFAULT_FILTERS:
        registry.register(collection_filter)
    registry.freeze()
    return registry


@pytest.fixture
def resolver(registry: FilterRegistry) -> CollectionResolver:
    """Create a resolver on the test registry."""
    return CollectionResolver(registry)


@pytest.fixture
def repository() -> CatalogRepository:
    """Create a repository holding the sample catalog."""
    return build_sample_repository()


@pytest.fixture
def sports_collection(repository: CatalogRepository) -> Collection:
    """Save a public collection filtered on the sports category."""
    collection = Collection(id="T_3", name="My Collection", filters=(facet_filter(SPORTS),))
    repository.save_collection(collection)
    return collection


@pytest.fixture
def service(repository: CatalogRepository, resolver: CollectionResolver) -> CatalogService:
    """Create a catalog service over the sample repository."""
    return CatalogService(repository=repository, resolver=resolver)
