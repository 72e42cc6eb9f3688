"""The six rubric dimensions every call is scored on."""

from typing import Literal

DimensionKey = Literal["opening", "discovery", "value_prop", "objection", "closing", "tone"]

# Canonical order: report mappings, tie-breaks and narration all follow it.
DIMENSIONS: tuple[str, ...] = (
    "opening",
    "discovery",
    "value_prop",
    "objection",
    "closing",
    "tone",
)

DIMENSION_LABELS: dict[str, str] = {
    "opening": "Opening & Hook",
    "discovery": "Discovery & Qualification",
    "value_prop": "Value Proposition",
    "objection": "Objection Handling",
    "closing": "Closing Technique",
    "tone": "Tone & Rapport",
}

# Computed from the six averages, never stored as a dimension.
OVERALL = "overall"

REPORT_KEYS: tuple[str, ...] = DIMENSIONS + (OVERALL,)


def dimension_label(key: str) -> str:
    return DIMENSION_LABELS.get(key, key)
