from .aggregator import aggregate, aggregate_analyses
from .comparator import compare, load_prior_scores
from .impact import analyze_coaching_impact, analyze_impact
from .narrator import narrate
from .weeks import iso_week, previous_week, round_half_up

__all__ = [
    "aggregate", "aggregate_analyses",
    "compare", "load_prior_scores",
    "analyze_coaching_impact", "analyze_impact",
    "narrate",
    "iso_week", "previous_week", "round_half_up",
]
