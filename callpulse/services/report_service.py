"""Persistence for weekly SDR reports, keyed by (sdr_id, week_number, year)."""

import json
from typing import Any, Optional
from uuid import UUID

import asyncpg

from callpulse.models.dimensions import REPORT_KEYS
from callpulse.models.report import CoachingImpact, WeeklyReport, WeeklyReportCreate


def _load_json(value: Any) -> dict:
    # asyncpg may return JSONB as already-parsed Python object or as string
    if value is None:
        return {}
    if isinstance(value, str):
        return json.loads(value)
    return value


def _canonical(mapping: dict) -> dict:
    """Re-apply dimension order (JSONB does not keep key order), "overall" last."""
    ordered = {k: mapping[k] for k in REPORT_KEYS if k in mapping}
    ordered.update({k: v for k, v in mapping.items() if k not in ordered})
    return ordered


def _row_to_report(row: asyncpg.Record) -> WeeklyReport:
    impact = _canonical(_load_json(row["coaching_impact"]))
    return WeeklyReport(
        id=row["id"],
        company_id=row["company_id"],
        sdr_id=row["sdr_id"],
        week_number=row["week_number"],
        year=row["year"],
        calls_analyzed=row["calls_analyzed"],
        avg_scores=_canonical(_load_json(row["avg_scores"])),
        best_call_id=row["best_call_id"],
        worst_call_id=row["worst_call_id"],
        summary=row["summary"],
        comparison_with_previous=_canonical(_load_json(row["comparison_with_previous"])),
        coaching_impact={k: CoachingImpact(**v) for k, v in impact.items()},
        created_at=row["created_at"],
    )


async def upsert_report(db: asyncpg.Connection, report: WeeklyReportCreate) -> WeeklyReport:
    """Insert the report, or fully replace the one stored for the same SDR week.

    The stored id and created_at survive a replace; every other column is overwritten.
    """
    row = await db.fetchrow(
        """INSERT INTO weekly_reports
               (company_id, sdr_id, week_number, year, calls_analyzed, avg_scores,
                best_call_id, worst_call_id, summary, comparison_with_previous, coaching_impact)
           VALUES ($1, $2, $3, $4, $5, $6::jsonb, $7, $8, $9, $10::jsonb, $11::jsonb)
           ON CONFLICT (sdr_id, week_number, year) DO UPDATE SET
               company_id = EXCLUDED.company_id,
               calls_analyzed = EXCLUDED.calls_analyzed,
               avg_scores = EXCLUDED.avg_scores,
               best_call_id = EXCLUDED.best_call_id,
               worst_call_id = EXCLUDED.worst_call_id,
               summary = EXCLUDED.summary,
               comparison_with_previous = EXCLUDED.comparison_with_previous,
               coaching_impact = EXCLUDED.coaching_impact
           RETURNING *""",
        report.company_id,
        report.sdr_id,
        report.week_number,
        report.year,
        report.calls_analyzed,
        json.dumps(report.avg_scores),
        report.best_call_id,
        report.worst_call_id,
        report.summary,
        json.dumps(report.comparison_with_previous),
        json.dumps({k: v.model_dump() for k, v in report.coaching_impact.items()}),
    )
    return _row_to_report(row)


async def get_report(db: asyncpg.Connection, report_id: UUID) -> WeeklyReport | None:
    """Return a specific report by id."""
    row = await db.fetchrow("SELECT * FROM weekly_reports WHERE id = $1", report_id)
    return _row_to_report(row) if row else None


async def get_report_for_week(
    db: asyncpg.Connection, sdr_id: UUID, week_number: int, year: int
) -> WeeklyReport | None:
    """Return the report stored for an SDR week, or None."""
    row = await db.fetchrow(
        "SELECT * FROM weekly_reports WHERE sdr_id = $1 AND week_number = $2 AND year = $3",
        sdr_id, week_number, year,
    )
    return _row_to_report(row) if row else None


async def query_reports(
    db: asyncpg.Connection,
    company_id: UUID,
    sdr_id: Optional[UUID] = None,
    week_number: Optional[int] = None,
    year: Optional[int] = None,
) -> list[WeeklyReport]:
    """Return a company's reports, most recent week first."""
    clauses = ["company_id = $1"]
    values: list = [company_id]
    for column, value in (("sdr_id", sdr_id), ("week_number", week_number), ("year", year)):
        if value is not None:
            values.append(value)
            clauses.append(f"{column} = ${len(values)}")
    rows = await db.fetch(
        f"""SELECT * FROM weekly_reports
            WHERE {' AND '.join(clauses)}
            ORDER BY year DESC, week_number DESC, sdr_id""",
        *values,
    )
    return [_row_to_report(r) for r in rows]


async def get_sdr_trend(
    db: asyncpg.Connection, sdr_id: UUID, weeks: int = 8
) -> list[WeeklyReport]:
    """Return the SDR's latest `weeks` reports in chronological order."""
    rows = await db.fetch(
        """SELECT * FROM weekly_reports
           WHERE sdr_id = $1
           ORDER BY year DESC, week_number DESC
           LIMIT $2""",
        sdr_id, weeks,
    )
    return [_row_to_report(r) for r in reversed(rows)]
