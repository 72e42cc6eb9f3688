"""Endpoints for coaching action items."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from callpulse.api.dependencies import DbDep
from callpulse.errors import InvalidTransitionError
from callpulse.models.coaching import CoachingItem, CoachingItemUpdate, CoachingStatus
from callpulse.services import coaching_service

router = APIRouter(prefix="/coaching", tags=["coaching"])


@router.get("", response_model=list[CoachingItem])
async def list_coaching_items(
    db: DbDep,
    company_id: UUID = Query(...),
    sdr_id: Optional[UUID] = Query(None),
    item_status: Optional[CoachingStatus] = Query(None, alias="status"),
) -> list[CoachingItem]:
    """Return coaching items, most recent first."""
    return await coaching_service.list_coaching_items(
        db, company_id, sdr_id=sdr_id, status=item_status
    )


@router.patch("/{item_id}", response_model=CoachingItem)
async def update_coaching_item(
    item_id: UUID, payload: CoachingItemUpdate, db: DbDep
) -> CoachingItem:
    """Start, complete or reopen a coaching item."""
    try:
        item = await coaching_service.update_coaching_status(db, item_id, payload.status)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail=f"Coaching item {item_id} not found")
    return item
