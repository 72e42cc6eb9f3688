"""Week-over-week comparison against the previously stored report."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Optional
from uuid import UUID

import asyncpg

from callpulse.models.report import WeeklyRollup
from callpulse.services import report_service
from .weeks import previous_week, round_half_up


def compare(
    rollup: WeeklyRollup, prior_scores: Optional[Mapping[str, float]]
) -> dict[str, float]:
    """Return signed deltas (current - prior) for every key both weeks share.

    No prior week gives an empty mapping. Keys missing from the prior week are
    left out rather than zero-filled: absent means no baseline.
    """
    if not prior_scores:
        return {}
    deltas: dict[str, float] = {}
    for key, current in rollup.avg_scores.items():
        if key not in prior_scores:
            continue
        delta = Decimal(str(current)) - Decimal(str(prior_scores[key]))
        deltas[key] = float(round_half_up(delta))
    return deltas


async def load_prior_scores(
    db: asyncpg.Connection, sdr_id: UUID, week_number: int, year: int
) -> Optional[dict[str, float]]:
    """Return avg_scores of the report stored for the week before (week_number, year)."""
    prior_week, prior_year = previous_week(week_number, year)
    prior = await report_service.get_report_for_week(db, sdr_id, prior_week, prior_year)
    return prior.avg_scores if prior else None
