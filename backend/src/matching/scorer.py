"""Candidate scoring with fuzzy, size, material and alias sub-scores.

Scoring formula:
- S_fuzzy = 1 - levenshtein(text, description) / max(len(text), len(description))
- S_size = 1.0 (Δ <= t) | 0.7 (Δ <= 2t) | 0.3 (Δ <= 4t) | 0.0
- S_material = 1.0 (exact) | 0.7 (exact, gauge mismatch) | 0.5 (both unset)
  | 0.2 (one unset) | 0.0 (mismatch)
- S_alias = max over aliases of word-ratio * boost or 0.8 * boost (substring)
- score = min(1.0, w_f * S_fuzzy + w_s * S_size + w_m * S_material + w_a * S_alias)
"""

import re
from typing import List

from rapidfuzz.distance import Levenshtein

from .alias_index import AliasIndex
from .config import MappingConfig
from .ports import CatalogEntry, RequestLine, ScoreBreakdown, ScoredCandidate
from .reasons import (
    AliasHit,
    FuzzyMatch,
    MatchReason,
    MaterialExact,
    MaterialSimilar,
    SizePartial,
    SizeWithinTolerance,
)
from .rules import GAUGE_SENSITIVE_FAMILIES

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")

# Alias substring hits score slightly below full word coverage
SUBSTRING_ALIAS_FACTOR = 0.8


class CandidateScorer:
    """Calculate explainable match scores for admissible candidates."""

    def __init__(self, alias_index: AliasIndex, config: MappingConfig):
        """Initialize scorer.

        Args:
            alias_index: Read-only alias index
            config: Mapping configuration (weights, default tolerance)
        """
        self.alias_index = alias_index
        self.config = config

    def score(self, line: RequestLine, sku: CatalogEntry) -> ScoredCandidate:
        """Score a single candidate.

        Args:
            line: Normalized request line
            sku: Admissible catalog entry

        Returns:
            ScoredCandidate with total score, breakdown and reasons
        """
        breakdown = ScoreBreakdown(
            fuzzy_score=self.calculate_fuzzy_score(line.input_text, sku.description),
            size_score=self.calculate_size_score(line.normalized.size_mm, sku.size_od_mm),
            material_score=self.calculate_material_score(line, sku),
            alias_score=self.calculate_alias_score(line.input_text, sku.sku_code),
        )

        total = (
            breakdown.fuzzy_score * self.config.fuzzy_weight
            + breakdown.size_score * self.config.size_weight
            + breakdown.material_score * self.config.material_weight
            + breakdown.alias_score * self.config.alias_weight
        )

        return ScoredCandidate(
            sku=sku,
            score=max(0.0, min(1.0, total)),
            breakdown=breakdown,
            reasons=tuple(self._collect_reasons(breakdown)),
        )

    def calculate_fuzzy_score(self, text: str, description: str) -> float:
        """Normalized edit-distance similarity (0.0-1.0)."""
        text_lower = (text or "").lower()
        description_lower = (description or "").lower()

        max_length = max(len(text_lower), len(description_lower))
        if max_length == 0:
            return 0.0

        distance = Levenshtein.distance(text_lower, description_lower)
        return 1.0 - distance / max_length

    def calculate_size_score(self, line_size_mm, sku_size_mm) -> float:
        """Tiered size score relative to the configured tolerance.

        Returns:
            1.0, 0.7, 0.3 or 0.0; 0.0 when either size is missing
        """
        if not line_size_mm or not sku_size_mm:
            return 0.0

        tolerance = self.config.size_tolerance_mm
        size_diff = abs(line_size_mm - sku_size_mm)
        if size_diff <= tolerance:
            return 1.0
        if size_diff <= tolerance * 2:
            return 0.7
        if size_diff <= tolerance * 4:
            return 0.3
        return 0.0

    def calculate_material_score(self, line: RequestLine, sku: CatalogEntry) -> float:
        line_material = line.normalized.material
        sku_material = sku.material

        if not line_material and not sku_material:
            return 0.5  # Nothing to contradict
        if not line_material or not sku_material:
            return 0.2

        if line_material.lower() != sku_material.lower():
            return 0.0

        if sku.product_family in GAUGE_SENSITIVE_FAMILIES:
            line_gauge = line.normalized.gauge
            if line_gauge and sku.gauge and line_gauge.upper() != sku.gauge.upper():
                return 0.7

        return 1.0

    def calculate_alias_score(self, text: str, sku_code: str) -> float:
        """Best alias coverage for the SKU, capped at 1.0.

        Args:
            text: Free text of the request line
            sku_code: Candidate SKU code

        Returns:
            Alias score (0.0-1.0)
        """
        aliases = self.alias_index.boosts_for(sku_code)
        if not aliases:
            return 0.0

        text_lower = (text or "").lower()
        text_words = text_lower.split()
        text_compact = _NON_ALPHANUMERIC.sub("", text_lower)

        best = 0.0
        for alias, boost in aliases:
            alias_words = alias.split()
            if alias_words:
                word_matches = sum(
                    1 for alias_word in alias_words
                    if any(word in alias_word or alias_word in word for word in text_words)
                )
                if word_matches:
                    best = max(best, word_matches / len(alias_words) * boost)

            if alias in text_lower or (text_compact and text_compact in alias):
                best = max(best, boost * SUBSTRING_ALIAS_FACTOR)

        return min(best, 1.0)

    def _collect_reasons(self, breakdown: ScoreBreakdown) -> List[MatchReason]:
        config = self.config
        reasons: List[MatchReason] = []

        fuzzy = breakdown.fuzzy_score
        if fuzzy > 0.5:
            reasons.append(FuzzyMatch(fuzzy, fuzzy * config.fuzzy_weight))

        size = breakdown.size_score
        if size > 0.8:
            reasons.append(SizeWithinTolerance(size, size * config.size_weight))
        elif size > 0.5:
            reasons.append(SizePartial(size, size * config.size_weight))

        material = breakdown.material_score
        if material > 0.9:
            reasons.append(MaterialExact(material, material * config.material_weight))
        elif material > 0.5:
            reasons.append(MaterialSimilar(material, material * config.material_weight))

        alias = breakdown.alias_score
        if alias > 0.5:
            reasons.append(AliasHit(alias, alias * config.alias_weight))

        return reasons
