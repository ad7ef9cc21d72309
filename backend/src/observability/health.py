"""Health check utilities for QuoteFlow.

Reports the state of the matcher snapshot and, when the catalog is served from
the database, database connectivity.
"""

import time
from enum import Enum
from typing import Dict, Optional
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_database_health(db: Session) -> ComponentHealth:
    """Check database connectivity.

    Args:
        db: Database session

    Returns:
        ComponentHealth: Database health status
    """
    try:
        start = time.perf_counter()
        db.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000

        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Database connection OK",
            latency_ms=round(latency_ms, 2)
        )
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Database error: {str(e)}"
        )


def check_catalog_health(registry) -> ComponentHealth:
    """Check that a matcher snapshot is loaded.

    A snapshot running on the built-in seed aliases is reported as degraded:
    matching works but with reduced alias coverage.

    Args:
        registry: MatcherRegistry

    Returns:
        ComponentHealth: Catalog snapshot health status
    """
    if not registry.is_loaded:
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message="No catalog snapshot loaded"
        )

    matcher = registry.current()
    if matcher.alias_index.is_seed:
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message=f"{len(matcher.catalog)} SKUs loaded, using built-in seed aliases"
        )

    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message=f"{len(matcher.catalog)} SKUs, {matcher.alias_index.alias_count} aliases loaded"
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall health from component statuses.

    Args:
        components: Dictionary of component health statuses

    Returns:
        HealthStatus: Overall system health
    """
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
