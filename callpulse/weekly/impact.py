"""Coaching impact: did the dimensions an SDR was coached on move this week?"""

from collections.abc import Iterable, Mapping
from uuid import UUID

import asyncpg

from callpulse.models.dimensions import DIMENSIONS
from callpulse.models.report import CoachingImpact
from callpulse.services import coaching_service


def analyze_impact(
    coached_dimensions: Iterable[str], comparison: Mapping[str, float]
) -> dict[str, CoachingImpact]:
    """Report the delta of every coached dimension that has a baseline.

    ``improved`` is strictly ``delta > 0``; no change counts as not improved.
    """
    coached = set(coached_dimensions)
    impact: dict[str, CoachingImpact] = {}
    for dimension in DIMENSIONS:
        if dimension not in coached or dimension not in comparison:
            continue
        delta = comparison[dimension]
        impact[dimension] = CoachingImpact(coached=True, delta=delta, improved=delta > 0)
    return impact


async def analyze_coaching_impact(
    db: asyncpg.Connection,
    sdr_id: UUID,
    company_id: UUID,
    comparison: Mapping[str, float],
) -> dict[str, CoachingImpact]:
    """Cross the SDR's all-time coaching history with this week's deltas."""
    if not comparison:
        return {}
    coached = await coaching_service.get_coached_dimensions(db, sdr_id, company_id)
    return analyze_impact(coached, comparison)
