"""Threshold/margin decision policy for ranked candidates.

A single absolute threshold cannot tell "one clearly best candidate at 0.90"
from "two near-identical candidates at 0.90 and 0.89", so auto-mapping needs
both the absolute floor and a relative margin over the runner-up.
"""

from typing import List, Optional, Sequence

from .config import MappingConfig
from .ports import (
    CandidateSummary,
    ConfidenceLevel,
    Explanation,
    MappingResult,
    MappingStatus,
    ScoreBreakdown,
    ScoredCandidate,
)

MEDIUM_CONFIDENCE_FLOOR = 0.6
MATCHED_FIELD_THRESHOLD = 0.5
EXACT_MATERIAL_THRESHOLD = 0.9
MAX_REPORTED_CANDIDATES = 3

NO_CANDIDATE_ASSUMPTIONS = (
    "No suitable SKU candidates found",
    "Consider checking product catalog or input format",
)


class DecisionEngine:
    """Turn a sorted candidate list into a MappingResult."""

    def __init__(self, config: MappingConfig):
        self.config = config

    def decide(self, candidates: Sequence[ScoredCandidate]) -> MappingResult:
        """Apply the auto-map policy.

        Args:
            candidates: Scored candidates sorted by descending score

        Returns:
            MappingResult (auto_mapped, needs_review or failed)
        """
        if not candidates:
            return MappingResult(
                status=MappingStatus.FAILED,
                candidates=(),
                explanation=Explanation(
                    matched_fields=(),
                    scores=ScoreBreakdown(),
                    total_score=0.0,
                    size_tolerance_mm=self.config.size_tolerance_mm,
                    material_match=False,
                    assumptions=NO_CANDIDATE_ASSUMPTIONS,
                    confidence=ConfidenceLevel.LOW,
                    needs_review=True,
                ),
            )

        top = candidates[0]
        second = candidates[1] if len(candidates) > 1 else None

        confidence = self.calculate_confidence(top.score, second.score if second else None)
        needs_review = self.needs_review(top.score, second.score if second else None)

        status = MappingStatus.NEEDS_REVIEW if needs_review else MappingStatus.AUTO_MAPPED

        return MappingResult(
            status=status,
            selected_sku=None if needs_review else top.sku.sku_code,
            candidates=tuple(
                CandidateSummary(
                    sku_code=candidate.sku.sku_code,
                    score=candidate.score,
                    reason=candidate.reason_text(),
                    reasons=candidate.reasons,
                )
                for candidate in candidates[:MAX_REPORTED_CANDIDATES]
            ),
            explanation=Explanation(
                matched_fields=tuple(self.matched_fields(top.breakdown)),
                scores=top.breakdown,
                total_score=top.score,
                size_tolerance_mm=self.config.size_tolerance_mm,
                material_match=top.breakdown.material_score > EXACT_MATERIAL_THRESHOLD,
                assumptions=tuple(reason.describe() for reason in top.reasons),
                confidence=confidence,
                needs_review=needs_review,
            ),
        )

    def calculate_confidence(self, top_score: float, second_score: Optional[float]) -> ConfidenceLevel:
        threshold = self.config.auto_map_threshold
        if top_score >= threshold and (
            second_score is None or top_score - second_score >= self.config.confidence_delta
        ):
            return ConfidenceLevel.HIGH
        if top_score >= MEDIUM_CONFIDENCE_FLOOR:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def needs_review(self, top_score: float, second_score: Optional[float]) -> bool:
        if top_score < self.config.auto_map_threshold:
            return True
        return second_score is not None and top_score - second_score < self.config.confidence_delta

    @staticmethod
    def matched_fields(breakdown: ScoreBreakdown) -> List[str]:
        fields = []
        if breakdown.fuzzy_score > MATCHED_FIELD_THRESHOLD:
            fields.append("description")
        if breakdown.size_score > MATCHED_FIELD_THRESHOLD:
            fields.append("size")
        if breakdown.material_score > MATCHED_FIELD_THRESHOLD:
            fields.append("material")
        if breakdown.alias_score > MATCHED_FIELD_THRESHOLD:
            fields.append("aliases")
        return fields
