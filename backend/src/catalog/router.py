"""Catalog API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_matcher
from matching.engine import DeterministicMatcher
from .schemas import CatalogListResponse, CatalogSkuResponse

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/skus", response_model=CatalogListResponse)
def list_skus(
    family: Optional[str] = Query(None, description="Filter by product family (case-insensitive)"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    matcher: DeterministicMatcher = Depends(get_matcher)
):
    """
    List SKUs of the active catalog snapshot in catalog order.

    Args:
        family: Optional product family filter
        limit: Maximum number of results
        offset: Number of results to skip

    Returns:
        Page of snapshot SKUs with the total count
    """
    skus = list(matcher.catalog)
    if family:
        skus = [sku for sku in skus if sku.product_family.lower() == family.strip().lower()]

    page = skus[offset:offset + limit]
    return CatalogListResponse(
        items=[CatalogSkuResponse.model_validate(sku) for sku in page],
        total=len(skus),
        limit=limit,
        offset=offset,
    )
