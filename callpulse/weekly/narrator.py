"""Plain-text weekly synopsis built from the computed numbers."""

from collections.abc import Mapping

from callpulse.models.dimensions import DIMENSIONS, OVERALL, dimension_label
from callpulse.models.report import WeeklyRollup


def _direction(delta: float) -> str:
    if delta > 0:
        return "up"
    if delta < 0:
        return "down"
    return "flat"


def narrate(rollup: WeeklyRollup, comparison: Mapping[str, float]) -> str:
    """Summarise call count, overall average, strongest/weakest dimension and WoW change.

    Ties between dimensions resolve to the earlier one in canonical order.
    """
    scores = rollup.avg_scores
    # max/min keep the first of equal items, so canonical order breaks ties
    strongest = max(DIMENSIONS, key=lambda d: scores[d])
    weakest = min(DIMENSIONS, key=lambda d: scores[d])

    calls = "call" if rollup.calls_analyzed == 1 else "calls"
    text = (
        f"Analyzed {rollup.calls_analyzed} {calls} this week with an average score of "
        f"{scores[OVERALL]:.1f}/10. "
        f"Strongest area: {dimension_label(strongest)} ({scores[strongest]:.1f}). "
        f"Needs work: {dimension_label(weakest)} ({scores[weakest]:.1f})."
    )
    if OVERALL in comparison:
        delta = comparison[OVERALL]
        text += f" Compared to last week: {_direction(delta)} {abs(delta):.1f} points overall."
    return text
