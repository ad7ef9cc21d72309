"""Global FastAPI dependencies for access to the matcher snapshot.

This module provides:
- get_matcher_registry: The registry created at startup (app.state)
- get_matcher: The current DeterministicMatcher, 503 if no catalog is loaded
"""

from fastapi import Depends, HTTPException, Request, status

from matching.engine import DeterministicMatcher
from matching.ports import CatalogUnavailableError
from matching.registry import MatcherRegistry


def get_matcher_registry(request: Request) -> MatcherRegistry:
    """Return the application's MatcherRegistry.

    Raises:
        HTTPException 503: If the application started without a registry
    """
    registry = getattr(request.app.state, "matcher_registry", None)
    if registry is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Matcher is not initialized",
        )
    return registry


def get_matcher(registry: MatcherRegistry = Depends(get_matcher_registry)) -> DeterministicMatcher:
    """Return the active matcher snapshot.

    Each request pins the snapshot it received, so a concurrent reload never
    changes the catalog under a running batch.

    Raises:
        HTTPException 503: If no catalog snapshot is loaded
    """
    try:
        return registry.current()
    except CatalogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
