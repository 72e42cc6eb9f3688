"""Roll up one SDR's completed call analyses into a weekly aggregate."""

import logging
from collections.abc import Sequence
from decimal import Decimal
from uuid import UUID

import asyncpg

from callpulse.errors import IncompleteAnalysisError, NoDataError
from callpulse.models.analysis import CallAnalysis
from callpulse.models.dimensions import DIMENSIONS, OVERALL
from callpulse.models.report import WeeklyRollup
from callpulse.services import analysis_service
from .weeks import round_half_up

logger = logging.getLogger(__name__)


def _tie_break_order(analyses: Sequence[CallAnalysis]) -> list[CallAnalysis]:
    # Earliest analysis wins a tie on overall_score, then the lowest id.
    return sorted(analyses, key=lambda a: (a.created_at, a.id))


def _dimension_average(analyses: Sequence[CallAnalysis], dimension: str) -> Decimal:
    total = 0
    for analysis in analyses:
        scored = analysis.dimensions.get(dimension)
        if scored is None:
            raise IncompleteAnalysisError(analysis.id, dimension)
        total += scored.score
    return round_half_up(Decimal(total) / Decimal(len(analyses)))


def aggregate_analyses(analyses: Sequence[CallAnalysis]) -> WeeklyRollup:
    """
    Compute the weekly rollup for a non-empty set of analyses.

    - Each dimension average is the mean of that dimension's scores, rounded
      half-up to one decimal.
    - ``overall`` is the mean of the six rounded dimension averages, not the
      mean of the calls' own overall scores.
    - Best and worst calls are picked on ``overall_score``; ties go to the
      earliest analysis (created_at, then id).
    """
    if not analyses:
        raise NoDataError()

    averages: dict[str, Decimal] = {
        dimension: _dimension_average(analyses, dimension) for dimension in DIMENSIONS
    }
    averages[OVERALL] = round_half_up(sum(averages.values()) / Decimal(len(DIMENSIONS)))

    ordered = _tie_break_order(analyses)
    best = max(ordered, key=lambda a: a.overall_score)
    worst = min(ordered, key=lambda a: a.overall_score)

    return WeeklyRollup(
        calls_analyzed=len(analyses),
        avg_scores={key: float(value) for key, value in averages.items()},
        best_call_id=best.call_id,
        worst_call_id=worst.call_id,
    )


async def aggregate(
    db: asyncpg.Connection,
    sdr_id: UUID,
    company_id: UUID,
    week_number: int,
    year: int,
) -> WeeklyRollup:
    """Load the SDR's completed analyses for the week and roll them up.

    Raises NoDataError when the week has no completed analyses.
    """
    analyses = await analysis_service.get_completed_analyses(
        db, company_id=company_id, sdr_id=sdr_id, week_number=week_number, year=year
    )
    if not analyses:
        raise NoDataError(sdr_id, week_number, year)
    logger.debug("Aggregating %d analyses for SDR %s, week %d/%d", len(analyses), sdr_id, week_number, year)
    return aggregate_analyses(analyses)
