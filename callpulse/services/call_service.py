"""Async CRUD operations for uploaded calls."""

from typing import Optional
from uuid import UUID

import asyncpg

from callpulse.models.call import Call, CallCreate
from callpulse.weekly.weeks import iso_week


def _row_to_call(row: asyncpg.Record) -> Call:
    return Call(
        id=row["id"],
        company_id=row["company_id"],
        sdr_id=row["sdr_id"],
        uploaded_by=row["uploaded_by"],
        call_date=row["call_date"],
        transcript=row["transcript"],
        duration_seconds=row["duration_seconds"],
        prospect_name=row["prospect_name"],
        week_number=row["week_number"],
        year=row["year"],
        status=row["status"],
        created_at=row["created_at"],
    )


async def add_call(db: asyncpg.Connection, call: CallCreate) -> Call:
    """Register a call, filing it under the ISO week of its call date."""
    week_number, year = iso_week(call.call_date)
    row = await db.fetchrow(
        """INSERT INTO calls
               (company_id, sdr_id, uploaded_by, transcript, call_date,
                week_number, year, duration_seconds, prospect_name, status)
           VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10) RETURNING *""",
        call.company_id,
        call.sdr_id,
        call.uploaded_by,
        call.transcript,
        call.call_date,
        week_number,
        year,
        call.duration_seconds,
        call.prospect_name,
        call.status,
    )
    return _row_to_call(row)


async def get_call(db: asyncpg.Connection, call_id: UUID) -> Call | None:
    """Return a call by id, or None."""
    row = await db.fetchrow("SELECT * FROM calls WHERE id = $1", call_id)
    return _row_to_call(row) if row else None


async def list_calls(
    db: asyncpg.Connection,
    company_id: UUID,
    sdr_id: Optional[UUID] = None,
    week_number: Optional[int] = None,
    year: Optional[int] = None,
    status: Optional[str] = None,
) -> list[Call]:
    """Return a company's calls, newest first, with optional filters."""
    clauses = ["company_id = $1"]
    values: list = [company_id]
    for column, value in (
        ("sdr_id", sdr_id),
        ("week_number", week_number),
        ("year", year),
        ("status", status),
    ):
        if value is not None:
            values.append(value)
            clauses.append(f"{column} = ${len(values)}")

    rows = await db.fetch(
        f"SELECT * FROM calls WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, id DESC",
        *values,
    )
    return [_row_to_call(r) for r in rows]


async def list_sdrs_with_calls(
    db: asyncpg.Connection, company_id: UUID, week_number: int, year: int
) -> list[UUID]:
    """Return the SDRs with at least one completed call in the week."""
    rows = await db.fetch(
        """SELECT DISTINCT sdr_id FROM calls
           WHERE company_id = $1
             AND week_number = $2
             AND year = $3
             AND status = 'completed'
           ORDER BY sdr_id""",
        company_id, week_number, year,
    )
    return [r["sdr_id"] for r in rows]


async def update_call_status(
    db: asyncpg.Connection, call_id: UUID, status: str
) -> Call | None:
    """Set the processing status of a call."""
    row = await db.fetchrow(
        "UPDATE calls SET status = $1 WHERE id = $2 RETURNING *", status, call_id
    )
    return _row_to_call(row) if row else None


async def delete_call(db: asyncpg.Connection, call_id: UUID) -> bool:
    """Delete a call (its analysis and coaching items cascade). Returns True if deleted."""
    result = await db.execute("DELETE FROM calls WHERE id = $1", call_id)
    return result == "DELETE 1"
