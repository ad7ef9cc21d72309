"""QuoteFlow Backend - Main FastAPI Application

Deterministic RFQ line to catalog SKU mapping service.

This module creates and configures the main FastAPI application, including:
- Matcher snapshot loading at startup (CSV or database catalog)
- Middleware (request ID correlation, CORS)
- Exception handlers
- Mapping, catalog and observability routers
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.csv_provider import CsvAliasProvider, CsvCatalogProvider
from catalog.router import router as catalog_router
from catalog.sql_provider import SqlAliasProvider, SqlCatalogProvider
from config import Settings, get_settings
from database import SessionLocal
from matching.config import load_mapping_config
from matching.ports import AliasProvider, CatalogProvider, CatalogUnavailableError, MatcherError
from matching.registry import MatcherRegistry
from matching.router import router as matching_router
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

settings = get_settings()

# Configure logging
configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> Tuple[CatalogProvider, AliasProvider]:
    """Select catalog and alias sources from CATALOG_SOURCE."""
    if settings.CATALOG_SOURCE == "database":
        return SqlCatalogProvider(SessionLocal), SqlAliasProvider(SessionLocal)
    return (
        CsvCatalogProvider(settings.PRICE_MASTER_PATH),
        CsvAliasProvider(settings.SKU_ALIASES_PATH),
    )


def build_registry(settings: Settings) -> MatcherRegistry:
    """Create the registry from settings (no catalog is loaded yet).

    Raises:
        MappingConfigError: If the mapping config file is invalid
    """
    catalog_provider, alias_provider = build_providers(settings)
    return MatcherRegistry(
        catalog_provider,
        alias_provider,
        load_mapping_config(settings.MAPPING_CONFIG_PATH),
        max_workers=settings.MAPPING_MAX_WORKERS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: Build the matcher registry and load the first catalog snapshot
    - Shutdown: Log only, the snapshot holds no external resources
    """
    logger.info("QuoteFlow API starting up...")
    logger.info(f"Environment: {settings.ENV}")
    logger.info(f"Catalog source: {settings.CATALOG_SOURCE}")

    registry = getattr(app.state, "matcher_registry", None)
    if registry is None:
        registry = build_registry(settings)
        app.state.matcher_registry = registry

    if not registry.is_loaded:
        try:
            registry.reload()
        except CatalogUnavailableError as e:
            # Keep serving; mapping endpoints answer 503 until a reload succeeds
            logger.error(f"Catalog unavailable at startup: {e}")

    yield

    logger.info("QuoteFlow API shutting down...")


def create_app(registry: Optional[MatcherRegistry] = None) -> FastAPI:
    """Application factory.

    Args:
        registry: Prebuilt registry (built from settings at startup if None)

    Returns:
        Configured FastAPI application
    """
    is_production = settings.ENV == "production"
    application = FastAPI(
        title="QuoteFlow API",
        description="Deterministic RFQ line to catalog SKU mapping",
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )

    if registry is not None:
        application.state.matcher_registry = registry

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    application.add_middleware(RequestIDMiddleware)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors with field-level details."""
        logger.warning(f"Validation error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @application.exception_handler(MatcherError)
    async def matcher_exception_handler(
        request: Request,
        exc: MatcherError
    ) -> JSONResponse:
        """Handle matcher errors escaping a route.

        Catalog unavailability is a 503; any other matcher error is a 500.
        """
        logger.error(
            f"Matcher error on {request.method} {request.url.path}: {exc}",
            extra={"error_type": type(exc).__name__},
        )
        if isinstance(exc, CatalogUnavailableError):
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "error": "catalog_unavailable",
                    "message": str(exc),
                },
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "matcher_error",
                "message": str(exc),
            },
        )

    @application.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle uncaught exceptions.

        Full details are logged but not exposed to the client.
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    # Observability (health, metrics, ready)
    application.include_router(observability_router)

    # Mapping
    application.include_router(matching_router)

    # Catalog snapshot
    application.include_router(catalog_router, prefix="/api/v1")

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        """Root endpoint - API information."""
        return {
            "name": "QuoteFlow API",
            "version": "0.1.0",
            "status": "running",
            "docs": None if is_production else "/docs",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
