"""Pydantic schemas for mapping endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .engine import MappingSummary
from .ports import (
    CandidateSummary,
    Explanation,
    MappedLine,
    MappingResult,
    NormalizedAttributes,
    RawTokens,
    RequestLine,
)


class RawTokensSchema(BaseModel):
    """Token substrings extracted by the RFQ parser."""
    description: Optional[str] = None
    size_token: Optional[str] = None
    material_token: Optional[str] = None
    gauge_token: Optional[str] = None
    color_token: Optional[str] = None


class RequestLineSchema(BaseModel):
    """Input schema for a single RFQ line."""
    input_text: str = Field(..., min_length=1)
    qty: float = Field(default=1.0, ge=0)
    uom: str = "PCS"
    raw_tokens: RawTokensSchema = Field(default_factory=RawTokensSchema)

    def to_request_line(self) -> RequestLine:
        return RequestLine(
            input_text=self.input_text,
            qty=self.qty,
            uom=self.uom,
            raw_tokens=RawTokens(**self.raw_tokens.model_dump()),
        )


class MapLinesRequest(BaseModel):
    """Batch of RFQ lines to map."""
    lines: List[RequestLineSchema] = Field(..., max_length=1000)


class TestMappingRequest(BaseModel):
    """Single description with optional structured attributes."""
    description: str
    size_od_mm: Optional[float] = Field(default=None, gt=0)
    material: Optional[str] = None
    gauge: Optional[str] = None
    colour: Optional[str] = None

    def to_request_line(self) -> RequestLine:
        return RequestLine(
            input_text=self.description,
            raw_tokens=RawTokens(
                description=self.description,
                material_token=self.material,
                gauge_token=self.gauge,
                color_token=self.colour,
            ),
            normalized=NormalizedAttributes(size_mm=self.size_od_mm),
        )


class ReasonSchema(BaseModel):
    kind: str
    score: float
    weighted: float
    description: str


class ScoreBreakdownSchema(BaseModel):
    fuzzy_score: float
    size_score: float
    material_score: float
    alias_score: float


class CandidateSchema(BaseModel):
    """Ranked candidate with its reasons."""
    sku_code: str
    score: float = Field(ge=0.0, le=1.0)
    reason: str
    reasons: List[ReasonSchema]

    @classmethod
    def from_summary(cls, candidate: CandidateSummary) -> "CandidateSchema":
        return cls(
            sku_code=candidate.sku_code,
            score=candidate.score,
            reason=candidate.reason,
            reasons=[ReasonSchema(**reason.to_dict()) for reason in candidate.reasons],
        )


class ExplanationSchema(BaseModel):
    matched_fields: List[str]
    scores: ScoreBreakdownSchema
    total_score: float
    size_tolerance_mm: float
    material_match: bool
    assumptions: List[str]
    confidence: str
    needs_review: bool

    @classmethod
    def from_explanation(cls, explanation: Explanation) -> "ExplanationSchema":
        scores = explanation.scores
        return cls(
            matched_fields=list(explanation.matched_fields),
            scores=ScoreBreakdownSchema(
                fuzzy_score=scores.fuzzy_score,
                size_score=scores.size_score,
                material_score=scores.material_score,
                alias_score=scores.alias_score,
            ),
            total_score=explanation.total_score,
            size_tolerance_mm=explanation.size_tolerance_mm,
            material_match=explanation.material_match,
            assumptions=list(explanation.assumptions),
            confidence=explanation.confidence.value,
            needs_review=explanation.needs_review,
        )


class MappingResultSchema(BaseModel):
    """Result of mapping one line."""
    status: str
    selected_sku: Optional[str]
    candidates: List[CandidateSchema]
    explanation: ExplanationSchema

    @classmethod
    def from_result(cls, result: MappingResult) -> "MappingResultSchema":
        return cls(
            status=result.status.value,
            selected_sku=result.selected_sku,
            candidates=[CandidateSchema.from_summary(c) for c in result.candidates],
            explanation=ExplanationSchema.from_explanation(result.explanation),
        )


class NormalizedAttributesSchema(BaseModel):
    size_mm: Optional[float] = None
    material: Optional[str] = None
    gauge: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_attributes(cls, normalized: NormalizedAttributes) -> "NormalizedAttributesSchema":
        return cls(
            size_mm=normalized.size_mm,
            material=normalized.material,
            gauge=normalized.gauge,
            color=normalized.color,
        )


class MappedLineSchema(BaseModel):
    input_text: str
    qty: float
    uom: str
    normalized: NormalizedAttributesSchema
    result: MappingResultSchema

    @classmethod
    def from_mapped_line(cls, mapped: MappedLine) -> "MappedLineSchema":
        return cls(
            input_text=mapped.line.input_text,
            qty=mapped.line.qty,
            uom=mapped.line.uom,
            normalized=NormalizedAttributesSchema.from_attributes(mapped.line.normalized),
            result=MappingResultSchema.from_result(mapped.result),
        )


class MappingSummarySchema(BaseModel):
    total_lines: int
    auto_mapped: int
    needs_review: int
    failed: int

    @classmethod
    def from_summary(cls, summary: MappingSummary) -> "MappingSummarySchema":
        return cls(
            total_lines=summary.total_lines,
            auto_mapped=summary.auto_mapped,
            needs_review=summary.needs_review,
            failed=summary.failed,
        )


class MapLinesResponse(BaseModel):
    lines: List[MappedLineSchema]
    summary: MappingSummarySchema


class CandidateSkuSchema(BaseModel):
    """Catalog details of a reported candidate."""
    sku_code: str
    product_family: str
    description: str
    uom: str
    material: Optional[str] = None
    gauge: Optional[str] = None
    size_od_mm: Optional[float] = None
    tolerance_mm: Optional[float] = None
    rate: float


class TestMappingResponse(BaseModel):
    """Mapping result for a single description plus candidate SKU details."""
    input_text: str
    normalized: NormalizedAttributesSchema
    result: MappingResultSchema
    candidate_skus: List[CandidateSkuSchema]


class ReloadResponse(BaseModel):
    """Snapshot state after a reload."""
    sku_count: int
    alias_count: int
    alias_source: str
    loaded_at: Optional[datetime]
