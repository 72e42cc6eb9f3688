"""Coaching ledger — action items issued per SDR, tagged by dimension."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import asyncpg

from callpulse.errors import InvalidTransitionError
from callpulse.models.coaching import CoachingItem

# open -> in_progress -> completed, plus direct completion and reopening.
_ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "open": {"in_progress", "completed"},
    "in_progress": {"completed", "open"},
    "completed": {"open"},
}


def _row_to_item(row: asyncpg.Record) -> CoachingItem:
    return CoachingItem(
        id=row["id"],
        call_analysis_id=row["call_analysis_id"],
        sdr_id=row["sdr_id"],
        company_id=row["company_id"],
        dimension=row["dimension"],
        action_item=row["action_item"],
        status=row["status"],
        created_at=row["created_at"],
        completed_at=row["completed_at"],
    )


async def get_coaching_item(db: asyncpg.Connection, item_id: UUID) -> CoachingItem | None:
    row = await db.fetchrow("SELECT * FROM coaching_items WHERE id = $1", item_id)
    return _row_to_item(row) if row else None


async def list_coaching_items(
    db: asyncpg.Connection,
    company_id: UUID,
    sdr_id: Optional[UUID] = None,
    status: Optional[str] = None,
) -> list[CoachingItem]:
    """Return a company's coaching items, most recent first."""
    clauses = ["company_id = $1"]
    values: list = [company_id]
    if sdr_id is not None:
        values.append(sdr_id)
        clauses.append(f"sdr_id = ${len(values)}")
    if status is not None:
        values.append(status)
        clauses.append(f"status = ${len(values)}")
    rows = await db.fetch(
        f"SELECT * FROM coaching_items WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, id",
        *values,
    )
    return [_row_to_item(r) for r in rows]


async def get_coached_dimensions(
    db: asyncpg.Connection, sdr_id: UUID, company_id: UUID
) -> set[str]:
    """Return every dimension the SDR has ever been coached on, whatever the item status."""
    rows = await db.fetch(
        "SELECT DISTINCT dimension FROM coaching_items WHERE sdr_id = $1 AND company_id = $2",
        sdr_id, company_id,
    )
    return {r["dimension"] for r in rows}


async def update_coaching_status(
    db: asyncpg.Connection, item_id: UUID, status: str
) -> CoachingItem | None:
    """Move a coaching item to a new status. Returns None if the item does not exist.

    Raises InvalidTransitionError for moves outside the workflow.
    """
    item = await get_coaching_item(db, item_id)
    if not item:
        return None
    if item.status == status:
        return item
    if status not in _ALLOWED_TRANSITIONS[item.status]:
        raise InvalidTransitionError(item.status, status)

    completed_at = datetime.now(timezone.utc) if status == "completed" else None
    row = await db.fetchrow(
        "UPDATE coaching_items SET status = $1, completed_at = $2 WHERE id = $3 RETURNING *",
        status, completed_at, item_id,
    )
    return _row_to_item(row) if row else None
