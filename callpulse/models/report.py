"""Weekly report models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class WeeklyRollup:
    """In-memory aggregate of one SDR's week, before comparison and persistence."""
    calls_analyzed: int
    avg_scores: dict[str, float]   # canonical dimension order, "overall" last
    best_call_id: Optional[UUID] = None
    worst_call_id: Optional[UUID] = None


class CoachingImpact(BaseModel):
    coached: bool = True
    delta: float
    improved: bool


class WeeklyReportCreate(BaseModel):
    """A composed weekly report, keyed by (sdr_id, week_number, year)."""
    company_id: UUID
    sdr_id: UUID
    week_number: int = Field(..., ge=1, le=53)
    year: int = Field(..., ge=1000, le=9999)
    calls_analyzed: int = Field(..., ge=0)
    avg_scores: dict[str, float]
    best_call_id: Optional[UUID] = None
    worst_call_id: Optional[UUID] = None
    summary: Optional[str] = None
    comparison_with_previous: dict[str, float] = {}
    coaching_impact: dict[str, CoachingImpact] = {}


class WeeklyReport(WeeklyReportCreate):
    """Full report record returned from the database."""
    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class BatchFailure(BaseModel):
    sdr_id: UUID
    error: str


class BatchResult(BaseModel):
    """Outcome of generating one week's reports for several SDRs."""
    week_number: int
    year: int
    reports: list[WeeklyReport] = []
    skipped: list[UUID] = []
    failed: list[BatchFailure] = []
