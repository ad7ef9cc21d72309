"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from config import Settings, get_settings
from database import get_db_session
from dependencies import get_matcher_registry
from matching.registry import MatcherRegistry
from .health import (
    check_catalog_health,
    check_database_health,
    get_overall_health,
    HealthStatus,
)
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    description="Exposes Prometheus metrics for monitoring and alerting",
    include_in_schema=False,  # Hide from OpenAPI docs
)
def metrics():
    """Expose Prometheus metrics.

    Returns:
        Response: Metrics in Prometheus text format
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the catalog snapshot (and database when it is the catalog source)",
    status_code=200,
)
def health_check(
    registry: MatcherRegistry = Depends(get_matcher_registry),
    settings: Settings = Depends(get_settings)
):
    """Check health of all system components.

    Returns 200 OK if no component is unhealthy, 503 otherwise.

    Returns:
        dict: Health status of each component and overall status
    """
    components = {
        "catalog": check_catalog_health(registry),
    }

    if settings.CATALOG_SOURCE == "database":
        with get_db_session() as db:
            components["database"] = check_database_health(db)

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    # Return 503 if unhealthy
    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )


@router.get(
    "/ready",
    summary="Readiness check endpoint",
    description="Returns readiness status (for Kubernetes readiness probes)",
    status_code=200,
)
def readiness_check(registry: MatcherRegistry = Depends(get_matcher_registry)):
    """Ready once a catalog snapshot is loaded."""
    if registry.is_loaded:
        return {
            "status": "ready",
            "message": "Application is ready to serve traffic"
        }

    return JSONResponse(
        content={
            "status": "not_ready",
            "message": "No catalog snapshot loaded"
        },
        status_code=503
    )
