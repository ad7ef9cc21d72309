"""Deterministic matcher combining hard constraints, scoring and decision.

Pipeline per request line:
1. Normalize raw tokens (size, material, gauge, color)
2. Infer the product family from the line text
3. Drop SKUs failing hard constraints (family, size tolerance, material)
4. Score admissible SKUs (fuzzy, size, material, alias)
5. Rank by score DESC (ties keep catalog order)
6. Apply threshold/margin policy: auto_mapped, needs_review or failed
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from observability.metrics import (
    mapping_batch_duration_seconds,
    mapping_lines_total,
    mapping_top_score,
)

from .alias_index import AliasIndex
from .config import MappingConfig
from .constraints import HardConstraintFilter
from .decision import DecisionEngine
from .normalizer import normalize_line
from .ports import (
    CatalogEntry,
    MappedLine,
    MappingResult,
    MappingStatus,
    MatcherPort,
    RequestLine,
    ScoredCandidate,
)
from .rules import infer_product_family
from .scorer import CandidateScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingSummary:
    total_lines: int
    auto_mapped: int
    needs_review: int
    failed: int


def summarize(results: Sequence[MappingResult]) -> MappingSummary:
    """Count mapping outcomes for a batch."""
    statuses = [result.status for result in results]
    return MappingSummary(
        total_lines=len(statuses),
        auto_mapped=statuses.count(MappingStatus.AUTO_MAPPED),
        needs_review=statuses.count(MappingStatus.NEEDS_REVIEW),
        failed=statuses.count(MappingStatus.FAILED),
    )


class DeterministicMatcher(MatcherPort):
    """Reproducible, explainable SKU matcher over an immutable catalog snapshot.

    The matcher holds no mutable state after construction, so one instance can
    serve many lines concurrently.
    """

    def __init__(
        self,
        catalog: Sequence[CatalogEntry],
        alias_index: AliasIndex,
        config: Optional[MappingConfig] = None,
        max_workers: Optional[int] = None
    ):
        """Initialize matcher.

        Args:
            catalog: Catalog snapshot (kept as an immutable tuple)
            alias_index: Read-only alias index
            config: Mapping configuration (defaults if None)
            max_workers: Thread pool size for batch mapping (sequential if None or 1)
        """
        self.catalog = tuple(catalog)
        self.alias_index = alias_index
        self.config = config or MappingConfig()
        self.max_workers = max_workers

        self.constraint_filter = HardConstraintFilter(self.config)
        self.scorer = CandidateScorer(alias_index, self.config)
        self.decision_engine = DecisionEngine(self.config)

        if not self.catalog:
            logger.warning("Matcher built with an empty catalog, every line will fail")

    def find_candidates(
        self,
        line: RequestLine,
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> List[ScoredCandidate]:
        """Filter, score and rank catalog entries for a normalized line.

        Args:
            line: Normalized request line
            catalog: Catalog to search (snapshot if None)

        Returns:
            Candidates sorted by descending score
        """
        entries = self.catalog if catalog is None else catalog
        line_family = infer_product_family(line.input_text)

        candidates = []
        for sku in entries:
            if not self.constraint_filter.admissible(line, sku, line_family):
                continue

            candidate = self.scorer.score(line, sku)
            if candidate.score > self.config.min_candidate_score:
                candidates.append(candidate)

        # list.sort is stable, equal scores keep catalog order
        candidates.sort(key=lambda candidate: candidate.score, reverse=True)
        return candidates

    def map_line_item(
        self,
        line: RequestLine,
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> MappedLine:
        """Normalize and map one line, keeping the normalized line."""
        normalized = normalize_line(line)
        candidates = self.find_candidates(normalized, catalog)
        result = self.decision_engine.decide(candidates)

        mapping_lines_total.labels(status=result.status.value).inc()
        if candidates:
            mapping_top_score.observe(candidates[0].score)

        logger.debug(
            f"Mapped '{normalized.input_text}' -> {result.status.value} "
            f"({len(candidates)} candidates, selected={result.selected_sku})"
        )
        return MappedLine(line=normalized, result=result)

    def map_line_items(
        self,
        lines: Sequence[RequestLine],
        catalog: Optional[Sequence[CatalogEntry]] = None,
        max_workers: Optional[int] = None
    ) -> List[MappedLine]:
        """Map multiple lines, optionally across a thread pool.

        Args:
            lines: Request lines
            catalog: Catalog to search (snapshot if None)
            max_workers: Overrides the matcher's pool size

        Returns:
            Mapped lines in input order
        """
        workers = self.max_workers if max_workers is None else max_workers
        start_time = time.perf_counter()

        if workers and workers > 1 and len(lines) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                mapped = list(executor.map(lambda line: self.map_line_item(line, catalog), lines))
        else:
            mapped = [self.map_line_item(line, catalog) for line in lines]

        duration = time.perf_counter() - start_time
        mapping_batch_duration_seconds.observe(duration)

        summary = summarize([item.result for item in mapped])
        logger.info(
            f"Mapped {summary.total_lines} lines in {duration * 1000:.1f}ms: "
            f"{summary.auto_mapped} auto_mapped, {summary.needs_review} needs_review, "
            f"{summary.failed} failed"
        )
        return mapped

    def map_line(
        self,
        line: RequestLine,
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> MappingResult:
        return self.map_line_item(line, catalog).result

    def map_lines(
        self,
        lines: Sequence[RequestLine],
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> List[MappingResult]:
        return [item.result for item in self.map_line_items(lines, catalog)]

    def find_sku(self, sku_code: str) -> Optional[CatalogEntry]:
        """Look up a snapshot SKU by code."""
        for sku in self.catalog:
            if sku.sku_code == sku_code:
                return sku
        return None
