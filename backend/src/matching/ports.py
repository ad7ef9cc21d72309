"""Matching ports and interfaces for hexagonal architecture.

Defines the value objects exchanged between the normalizer, the hard-constraint
filter, the scorer and the decision engine, the provider ports implemented by
catalog adapters, and the matcher error hierarchy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .reasons import MatchReason


class MappingStatus(str, Enum):
    """Terminal outcome of mapping a single request line."""
    AUTO_MAPPED = "auto_mapped"
    NEEDS_REVIEW = "needs_review"
    FAILED = "failed"


class ConfidenceLevel(str, Enum):
    """Coarse confidence bucket reported in the explanation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RawTokens:
    """Substrings extracted from the RFQ line by the upstream parser.

    Attributes:
        description: Description fragment
        size_token: Size text, e.g. "25mm" or '1"'
        material_token: Material text, e.g. "FR PP"
        gauge_token: Gauge text, e.g. "medium"
        color_token: Color text
    """
    description: Optional[str] = None
    size_token: Optional[str] = None
    material_token: Optional[str] = None
    gauge_token: Optional[str] = None
    color_token: Optional[str] = None


@dataclass(frozen=True)
class NormalizedAttributes:
    """Canonical, comparable projection of the raw tokens.

    Attributes:
        size_mm: Size in millimeters
        material: Canonical material code (PVC, PP, FRPP, ...)
        gauge: Canonical gauge code (L, M, H)
        color: Lowercase color
    """
    size_mm: Optional[float] = None
    material: Optional[str] = None
    gauge: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class RequestLine:
    """Single parsed RFQ line.

    Attributes:
        input_text: Original free text of the line
        qty: Requested quantity
        uom: Unit of measure as requested
        raw_tokens: Extracted token substrings
        normalized: Canonical attributes (filled by the normalizer)
    """
    input_text: str
    qty: float = 1.0
    uom: str = "PCS"
    raw_tokens: RawTokens = field(default_factory=RawTokens)
    normalized: NormalizedAttributes = field(default_factory=NormalizedAttributes)


@dataclass(frozen=True)
class CatalogEntry:
    """Canonical catalog SKU from the price master.

    Attributes:
        sku_code: Unique SKU code
        product_family: Product family name
        description: Catalog description used for fuzzy matching
        uom: Unit of measure
        material: Material code
        alt_material: Alternate material code the SKU also satisfies
        gauge: Gauge code (L, M, H)
        size_od_mm: Nominal outer diameter in millimeters
        tolerance_mm: SKU specific size tolerance (global default if None)
        rate: Unit rate
        lead_time_days: Lead time in days
        moq: Minimum order quantity
        hsn_code: Tax classification code
        coil_length_m: Coil length for coil-packed products
        colour: Catalog colour
        aux_size: Secondary size designation
        rate_alt: Alternate unit rate
    """
    sku_code: str
    product_family: str
    description: str
    uom: str
    material: Optional[str] = None
    alt_material: Optional[str] = None
    gauge: Optional[str] = None
    size_od_mm: Optional[float] = None
    tolerance_mm: Optional[float] = None
    rate: float = 0.0
    lead_time_days: int = 7
    moq: float = 1.0
    hsn_code: str = "00000000"
    coil_length_m: Optional[float] = None
    colour: Optional[str] = None
    aux_size: Optional[str] = None
    rate_alt: Optional[float] = None


@dataclass(frozen=True)
class AliasEntry:
    """Free-text alias known to refer to a SKU.

    Attributes:
        alias: Lowercase alias text
        sku_code: Target SKU code
        boost: Score boost in (0, 1]
    """
    alias: str
    sku_code: str
    boost: float


@dataclass(frozen=True)
class ScoreBreakdown:
    fuzzy_score: float = 0.0
    size_score: float = 0.0
    material_score: float = 0.0
    alias_score: float = 0.0


@dataclass(frozen=True)
class ScoredCandidate:
    """Admissible SKU with its total score, breakdown and reasons."""
    sku: CatalogEntry
    score: float
    breakdown: ScoreBreakdown
    reasons: Tuple[MatchReason, ...] = ()

    def reason_text(self) -> str:
        return "; ".join(reason.describe() for reason in self.reasons)


@dataclass(frozen=True)
class CandidateSummary:
    """Candidate as reported to reviewers (top 3 per line)."""
    sku_code: str
    score: float
    reason: str
    reasons: Tuple[MatchReason, ...] = ()


@dataclass(frozen=True)
class Explanation:
    """Structured, auditable explanation of a mapping decision.

    Attributes:
        matched_fields: Fields whose sub-score exceeded 0.5
        scores: Sub-score breakdown of the top candidate
        total_score: Total score of the top candidate
        size_tolerance_mm: Tolerance used for size scoring
        material_match: True if the top candidate matched material exactly
        assumptions: Human-readable notes (reasons or failure hints)
        confidence: Confidence bucket
        needs_review: True if a human must confirm the mapping
    """
    matched_fields: Tuple[str, ...]
    scores: ScoreBreakdown
    total_score: float
    size_tolerance_mm: float
    material_match: bool
    assumptions: Tuple[str, ...]
    confidence: ConfidenceLevel
    needs_review: bool


@dataclass(frozen=True)
class MappingResult:
    """Outcome of mapping one request line.

    Attributes:
        status: auto_mapped, needs_review or failed
        candidates: Top 3 candidates, best first
        explanation: Decision explanation
        selected_sku: Chosen SKU code (only when auto_mapped)
    """
    status: MappingStatus
    candidates: Tuple[CandidateSummary, ...]
    explanation: Explanation
    selected_sku: Optional[str] = None

    def __post_init__(self):
        if (self.selected_sku is not None) != (self.status == MappingStatus.AUTO_MAPPED):
            raise ValueError(
                f"selected_sku must be set exactly when status is auto_mapped "
                f"(status={self.status.value}, selected_sku={self.selected_sku})"
            )


@dataclass(frozen=True)
class MappedLine:
    """Normalized request line paired with its mapping result."""
    line: RequestLine
    result: MappingResult


class MatcherError(Exception):
    """Exception raised for matching errors."""
    pass


class CatalogUnavailableError(MatcherError):
    """Catalog source missing, unreadable or empty."""
    pass


class AliasSourceError(MatcherError):
    """Alias source missing or unreadable."""
    pass


class MappingConfigError(MatcherError):
    """Mapping configuration file is malformed."""
    pass


class CatalogProvider(ABC):
    """Port for loading the SKU catalog (price master)."""

    @abstractmethod
    def get_all_catalog_entries(self) -> List[CatalogEntry]:
        """Load every catalog entry in source order.

        Raises:
            CatalogUnavailableError: If the source cannot be read or is empty
        """
        pass


class AliasProvider(ABC):
    """Port for loading SKU aliases."""

    @abstractmethod
    def get_alias_entries(self) -> List[AliasEntry]:
        """Load alias entries.

        Raises:
            AliasSourceError: If the source cannot be read
        """
        pass


class MatcherPort(ABC):
    """Port interface for SKU matching strategies."""

    @abstractmethod
    def map_line(
        self,
        line: RequestLine,
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> MappingResult:
        """Map a single request line to a catalog SKU.

        Args:
            line: Request line (raw tokens and/or normalized attributes)
            catalog: Catalog to match against (engine snapshot if None)

        Returns:
            MappingResult with status, candidates and explanation
        """
        pass

    @abstractmethod
    def map_lines(
        self,
        lines: Sequence[RequestLine],
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> List[MappingResult]:
        """Map multiple lines (same order as inputs)."""
        pass
