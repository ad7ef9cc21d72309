"""Matching module for QuoteFlow.

Deterministic mapping of RFQ lines to catalog SKUs combining:
- Attribute normalization (size, material, gauge, color)
- Hard constraints (product family, size tolerance, material compatibility)
- Weighted fuzzy, size, material and alias scoring
- Threshold and margin based auto-map decision
"""

from .ports import (
    AliasEntry,
    AliasProvider,
    AliasSourceError,
    CatalogEntry,
    CatalogProvider,
    CatalogUnavailableError,
    MappingConfigError,
    MappingResult,
    MappingStatus,
    MatcherError,
    MatcherPort,
    RawTokens,
    RequestLine,
)
from .config import MappingConfig, load_mapping_config
from .alias_index import AliasIndex
from .engine import DeterministicMatcher, MappingSummary, summarize
from .registry import MatcherRegistry, build_matcher

__all__ = [
    "AliasEntry",
    "AliasProvider",
    "AliasSourceError",
    "CatalogEntry",
    "CatalogProvider",
    "CatalogUnavailableError",
    "MappingConfigError",
    "MappingResult",
    "MappingStatus",
    "MatcherError",
    "MatcherPort",
    "RawTokens",
    "RequestLine",
    "MappingConfig",
    "load_mapping_config",
    "AliasIndex",
    "DeterministicMatcher",
    "MappingSummary",
    "summarize",
    "MatcherRegistry",
    "build_matcher",
]
