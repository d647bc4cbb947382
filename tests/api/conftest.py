"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

import shopcatalog.catalog.repository as repository_module
from shopcatalog.catalog.repository import CatalogRepository
from shopcatalog.infrastructure.config import settings
from shopcatalog.main import app
from tests.catalog_data import build_sample_repository


@pytest.fixture(autouse=True)
def sample_catalog() -> CatalogRepository:
    """Install the sample catalog as the global repository."""
    repository_module._catalog_repo = build_sample_repository()
    return repository_module._catalog_repo


@pytest.fixture
def client() -> TestClient:
    """Create test client for the shop audience."""
    return TestClient(app)


@pytest.fixture
def admin_client() -> TestClient:
    """Create test client with the admin API key."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.admin_api_key}"},
    )
