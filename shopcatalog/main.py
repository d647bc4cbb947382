"""Shop catalog main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from shopcatalog.api.catalog import router as catalog_router
from shopcatalog.api.health import router as health_router
from shopcatalog.api.middleware import setup_middleware
from shopcatalog.catalog.filters import get_filter_registry
from shopcatalog.catalog.repository import get_catalog_repository
from shopcatalog.catalog.seed import CatalogSeeder, SeedConfig
from shopcatalog.infrastructure.config import settings
from shopcatalog.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging()
    logger.info(
        "Starting shop catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    # Filters are registered during import/configuration; nothing may be added later
    registry = get_filter_registry()
    registry.freeze()
    logger.info("Collection filters ready", filter_codes=registry.codes())

    if settings.seed_demo_catalog:
        CatalogSeeder(get_catalog_repository(), SeedConfig(seed=settings.seed)).seed()

    yield

    logger.info("Shutting down shop catalog API")


app = FastAPI(
    title="Shop Catalog API",
    description="Audience-aware catalog visibility and collection membership",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Setup custom middleware (request ID, audience, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": [],
            "request_id": request_id,
        },
    )
