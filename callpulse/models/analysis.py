"""Call analysis models — one per completed call, immutable once stored."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .dimensions import DIMENSIONS


class DimensionScore(BaseModel):
    score: int = Field(..., ge=1, le=10)
    justification: str
    evidence_quotes: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("evidence_quotes", "quotes"),
    )


class DimensionAssessment(DimensionScore):
    """Dimension score as produced by the scoring pipeline, with its coaching tip."""
    coaching_suggestion: str = Field(..., min_length=1)


class CallAnalysisCreate(BaseModel):
    """Payload produced by the scoring pipeline for a single call."""
    overall_score: float = Field(..., ge=0, le=10)
    dimensions: dict[str, DimensionAssessment]
    strengths: list[str] = []
    weaknesses: list[str] = []
    summary: str

    @field_validator("overall_score")
    @classmethod
    def _one_decimal(cls, v: float) -> float:
        return round(v, 1)

    @field_validator("dimensions")
    @classmethod
    def _all_dimensions(cls, v: dict[str, DimensionAssessment]) -> dict[str, DimensionAssessment]:
        missing = [d for d in DIMENSIONS if d not in v]
        unknown = [d for d in v if d not in DIMENSIONS]
        if missing:
            raise ValueError(f"missing dimensions: {', '.join(missing)}")
        if unknown:
            raise ValueError(f"unknown dimensions: {', '.join(unknown)}")
        return {d: v[d] for d in DIMENSIONS}


class CallAnalysis(BaseModel):
    """Full model returned from the database."""
    id: UUID
    call_id: UUID
    overall_score: float
    dimensions: dict[str, DimensionScore]
    strengths: list[str] = []
    weaknesses: list[str] = []
    summary: str
    created_at: datetime

    model_config = {"from_attributes": True}
