"""Mapping API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from config import Settings, get_settings
from dependencies import get_matcher, get_matcher_registry
from .config import MappingConfig, load_mapping_config
from .engine import DeterministicMatcher, summarize
from .ports import CatalogUnavailableError, MappingConfigError
from .registry import MatcherRegistry
from .schemas import (
    CandidateSkuSchema,
    MapLinesRequest,
    MapLinesResponse,
    MappedLineSchema,
    MappingResultSchema,
    MappingSummarySchema,
    NormalizedAttributesSchema,
    ReloadResponse,
    TestMappingRequest,
    TestMappingResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/mappings", tags=["matching"])


@router.post("/map", response_model=MapLinesResponse)
def map_lines(
    request: MapLinesRequest,
    matcher: DeterministicMatcher = Depends(get_matcher)
):
    """Map a batch of RFQ lines to catalog SKUs.

    Lines come back in input order. A line without an acceptable candidate is
    returned with status ``failed``; it is not an error.

    Args:
        request: Lines to map
        matcher: Active matcher snapshot

    Returns:
        Mapped lines with a per-status summary
    """
    mapped = matcher.map_line_items([line.to_request_line() for line in request.lines])
    summary = summarize([item.result for item in mapped])

    logger.info(
        "Mapped RFQ batch",
        extra={"line_count": summary.total_lines},
    )

    return MapLinesResponse(
        lines=[MappedLineSchema.from_mapped_line(item) for item in mapped],
        summary=MappingSummarySchema.from_summary(summary),
    )


@router.post("/test", response_model=TestMappingResponse)
def test_mapping(
    request: TestMappingRequest,
    matcher: DeterministicMatcher = Depends(get_matcher)
):
    """Map a single description and return full candidate details.

    Raises:
        HTTPException 400: If the description is blank
    """
    if not request.description.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Description is required"
        )

    mapped = matcher.map_line_item(request.to_request_line())

    candidate_skus = []
    for candidate in mapped.result.candidates:
        sku = matcher.find_sku(candidate.sku_code)
        if sku is not None:
            candidate_skus.append(CandidateSkuSchema(
                sku_code=sku.sku_code,
                product_family=sku.product_family,
                description=sku.description,
                uom=sku.uom,
                material=sku.material,
                gauge=sku.gauge,
                size_od_mm=sku.size_od_mm,
                tolerance_mm=sku.tolerance_mm,
                rate=sku.rate,
            ))

    return TestMappingResponse(
        input_text=mapped.line.input_text,
        normalized=NormalizedAttributesSchema.from_attributes(mapped.line.normalized),
        result=MappingResultSchema.from_result(mapped.result),
        candidate_skus=candidate_skus,
    )


@router.get("/config", response_model=MappingConfig)
def get_mapping_config(registry: MatcherRegistry = Depends(get_matcher_registry)):
    """Return the mapping configuration of the active snapshot."""
    return registry.config


@router.post("/reload", response_model=ReloadResponse)
def reload_catalog(
    registry: MatcherRegistry = Depends(get_matcher_registry),
    settings: Settings = Depends(get_settings)
):
    """Re-read catalog, aliases and mapping config and swap the snapshot.

    Requests already running keep the snapshot they started with.

    Raises:
        HTTPException 500: If the mapping config file is invalid
        HTTPException 503: If the catalog cannot be loaded (previous snapshot stays active)
    """
    try:
        config = load_mapping_config(settings.MAPPING_CONFIG_PATH)
        matcher = registry.reload(config)
    except MappingConfigError as e:
        logger.error(f"Reload rejected: {e}", extra={"error_type": "MappingConfigError"})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except CatalogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return ReloadResponse(
        sku_count=len(matcher.catalog),
        alias_count=matcher.alias_index.alias_count,
        alias_source="seed" if matcher.alias_index.is_seed else "provider",
        loaded_at=registry.loaded_at,
    )
