"""page_roast.models: данные, которые проходят через конвейер оценки.

``SignalBundle`` is a plain frozen dataclass because it is built by our own
extractor; ``EvaluationResult`` is a pydantic model because it is validated
against whatever the evaluation backend sends back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt

__all__ = [
    "SignalBundle",
    "Rating",
    "DimensionAssessment",
    "EvaluationResult",
    "DIMENSIONS",
    "EvaluationSource",
    "Evaluation",
]


@dataclass(frozen=True, slots=True)
class SignalBundle:
    """Normalized textual signals of one landing page."""

    url: str
    title: str = ""
    headings: Tuple[str, ...] = ()
    ctas: Tuple[str, ...] = ()
    body_text: str = ""

    @property
    def headings_text(self) -> str:
        return ", ".join(self.headings)

    @property
    def ctas_text(self) -> str:
        return ", ".join(self.ctas)


class Rating(str, Enum):
    good = "good"
    needs_work = "needs-work"
    bad = "bad"


class DimensionAssessment(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    rating: Rating
    feedback: str = Field(..., min_length=1)
    suggestion: Optional[str] = None


#: wire names of the four evaluation axes, in display order
DIMENSIONS: Tuple[str, ...] = ("headline", "cta", "trustSignals", "clarity")


class EvaluationResult(BaseModel):
    """Оценка страницы: общий балл, четыре измерения, резюме и быстрые улучшения."""

    model_config = ConfigDict(
        frozen=True, extra="ignore", populate_by_name=True, str_strip_whitespace=True
    )

    score: StrictInt = Field(..., ge=0, le=100)
    headline: DimensionAssessment
    cta: DimensionAssessment
    trust_signals: DimensionAssessment = Field(..., alias="trustSignals")
    clarity: DimensionAssessment
    overall: str = Field(..., min_length=1)
    quick_wins: Tuple[str, ...] = Field(default=(), alias="quickWins")

    def dimension(self, name: str) -> DimensionAssessment:
        """Look a dimension up by its wire name (``trustSignals``) or attribute name."""
        attr = "trust_signals" if name == "trustSignals" else name
        if attr not in ("headline", "cta", "trust_signals", "clarity"):
            raise KeyError(name)
        return getattr(self, attr)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with wire names; absent suggestions are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EvaluationSource(str, Enum):
    """Where a result came from. Internal only, never part of the result body."""

    backend = "backend"
    demo = "demo"  # no credential configured
    fallback = "fallback"  # backend failed or answered garbage


@dataclass(frozen=True, slots=True)
class Evaluation:
    result: EvaluationResult
    source: EvaluationSource
    signals: Optional[SignalBundle] = None

    @property
    def is_fallback(self) -> bool:
        return self.source is not EvaluationSource.backend
