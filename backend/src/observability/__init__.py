"""Observability module for QuoteFlow.

Provides structured logging, request correlation, metrics, and health checks.
"""

from .logging_config import (
    configure_logging,
    get_logger,
    request_id_var,
    get_request_id,
    set_request_id,
    generate_request_id,
)
from .metrics import (
    mapping_lines_total,
    mapping_top_score,
    mapping_batch_duration_seconds,
    catalog_skus,
    catalog_reloads_total,
    alias_seed_fallback,
)
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Metrics
    "mapping_lines_total",
    "mapping_top_score",
    "mapping_batch_duration_seconds",
    "catalog_skus",
    "catalog_reloads_total",
    "alias_seed_fallback",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
