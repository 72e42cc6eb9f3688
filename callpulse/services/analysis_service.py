"""Persistence for call analyses, read by the weekly engine."""

import logging
from decimal import Decimal
from uuid import UUID

import asyncpg

from callpulse.models.analysis import CallAnalysis, CallAnalysisCreate, DimensionScore
from callpulse.models.dimensions import DIMENSIONS

logger = logging.getLogger(__name__)

_DIMENSION_COLUMNS = [
    f"{d}_{suffix}" for d in DIMENSIONS for suffix in ("score", "justification", "quotes")
]


def _row_to_analysis(row: asyncpg.Record) -> CallAnalysis:
    dimensions = {}
    for d in DIMENSIONS:
        # A NULL score is left out; the aggregator refuses incomplete analyses.
        if row[f"{d}_score"] is None:
            continue
        dimensions[d] = DimensionScore(
            score=row[f"{d}_score"],
            justification=row[f"{d}_justification"],
            evidence_quotes=list(row[f"{d}_quotes"] or []),
        )
    return CallAnalysis(
        id=row["id"],
        call_id=row["call_id"],
        overall_score=float(row["overall_score"]),
        dimensions=dimensions,
        strengths=list(row["strengths"] or []),
        weaknesses=list(row["weaknesses"] or []),
        summary=row["summary"],
        created_at=row["created_at"],
    )


async def save_analysis(
    db: asyncpg.Connection,
    call_id: UUID,
    sdr_id: UUID,
    company_id: UUID,
    analysis: CallAnalysisCreate,
) -> CallAnalysis:
    """
    Store a call's analysis in one transaction:
    the analysis row, one open coaching item per dimension, and the call
    marked as completed.
    """
    values: list = [call_id, Decimal(str(analysis.overall_score))]
    for d in DIMENSIONS:
        scored = analysis.dimensions[d]
        values.extend([scored.score, scored.justification, scored.evidence_quotes])
    values.extend([analysis.strengths, analysis.weaknesses, analysis.summary])

    columns = ["call_id", "overall_score", *_DIMENSION_COLUMNS, "strengths", "weaknesses", "summary"]
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))

    async with db.transaction():
        row = await db.fetchrow(
            f"INSERT INTO call_analyses ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *",
            *values,
        )
        await db.executemany(
            """INSERT INTO coaching_items
                   (call_analysis_id, sdr_id, company_id, dimension, action_item, status)
               VALUES ($1, $2, $3, $4, $5, 'open')""",
            [
                (row["id"], sdr_id, company_id, d, analysis.dimensions[d].coaching_suggestion)
                for d in DIMENSIONS
            ],
        )
        await db.execute("UPDATE calls SET status = 'completed' WHERE id = $1", call_id)

    logger.info("Stored analysis %s for call %s (overall %.1f)", row["id"], call_id, analysis.overall_score)
    return _row_to_analysis(row)


async def get_analysis(db: asyncpg.Connection, analysis_id: UUID) -> CallAnalysis | None:
    """Return an analysis by id, or None."""
    row = await db.fetchrow("SELECT * FROM call_analyses WHERE id = $1", analysis_id)
    return _row_to_analysis(row) if row else None


async def get_analysis_for_call(db: asyncpg.Connection, call_id: UUID) -> CallAnalysis | None:
    """Return the analysis of a call, or None if it has not been analysed yet."""
    row = await db.fetchrow("SELECT * FROM call_analyses WHERE call_id = $1", call_id)
    return _row_to_analysis(row) if row else None


async def get_completed_analyses(
    db: asyncpg.Connection,
    company_id: UUID,
    sdr_id: UUID,
    week_number: int,
    year: int,
) -> list[CallAnalysis]:
    """Return analyses of the SDR's completed calls in a week, oldest analysis first."""
    rows = await db.fetch(
        """SELECT a.* FROM call_analyses a
           JOIN calls c ON c.id = a.call_id
           WHERE c.company_id = $1
             AND c.sdr_id = $2
             AND c.week_number = $3
             AND c.year = $4
             AND c.status = 'completed'
           ORDER BY a.created_at, a.id""",
        company_id, sdr_id, week_number, year,
    )
    return [_row_to_analysis(r) for r in rows]
