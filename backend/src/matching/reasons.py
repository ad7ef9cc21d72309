"""Typed match reasons.

Each reason records the sub-score that triggered it and its weighted share of
the total score, so downstream consumers (quote review, the test endpoint)
never need to parse free-form strings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class MatchReason(ABC):
    """Base class for a single explainable scoring contribution.

    Attributes:
        score: Sub-score that produced the reason (0.0-1.0)
        weighted: Contribution of the sub-score to the total (score * weight)
    """
    kind: ClassVar[str] = "reason"

    score: float
    weighted: float

    @abstractmethod
    def describe(self) -> str:
        """Human-readable text for the reason."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "score": self.score,
            "weighted": self.weighted,
            "description": self.describe(),
        }


@dataclass(frozen=True)
class FuzzyMatch(MatchReason):
    kind: ClassVar[str] = "fuzzy_match"

    def describe(self) -> str:
        return f"Description similarity: {self.score * 100:.1f}%"


@dataclass(frozen=True)
class SizeWithinTolerance(MatchReason):
    kind: ClassVar[str] = "size_within_tolerance"

    def describe(self) -> str:
        return "Size match within tolerance"


@dataclass(frozen=True)
class SizePartial(MatchReason):
    kind: ClassVar[str] = "size_partial"

    def describe(self) -> str:
        return "Partial size match"


@dataclass(frozen=True)
class MaterialExact(MatchReason):
    kind: ClassVar[str] = "material_exact"

    def describe(self) -> str:
        return "Exact material match"


@dataclass(frozen=True)
class MaterialSimilar(MatchReason):
    kind: ClassVar[str] = "material_similar"

    def describe(self) -> str:
        return "Material similarity"


@dataclass(frozen=True)
class AliasHit(MatchReason):
    kind: ClassVar[str] = "alias_hit"

    def describe(self) -> str:
        return "Alias match detected"
