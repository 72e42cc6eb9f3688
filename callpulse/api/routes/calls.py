"""Endpoints for calls and their analyses."""

from typing import Optional
from uuid import UUID

import asyncpg
from fastapi import APIRouter, HTTPException, Query, status

from callpulse.api.dependencies import DbDep
from callpulse.models.analysis import CallAnalysis, CallAnalysisCreate
from callpulse.models.call import Call, CallCreate, CallStatus, CallStatusUpdate
from callpulse.services import analysis_service, call_service

router = APIRouter(prefix="/calls", tags=["calls"])


@router.post("", response_model=Call, status_code=status.HTTP_201_CREATED)
async def add_call(payload: CallCreate, db: DbDep) -> Call:
    """Register an uploaded call; its ISO week is derived from call_date."""
    return await call_service.add_call(db, payload)


@router.get("", response_model=list[Call])
async def list_calls(
    db: DbDep,
    company_id: UUID = Query(..., description="Company whose calls to list"),
    sdr_id: Optional[UUID] = Query(None),
    week_number: Optional[int] = Query(None, ge=1, le=53),
    year: Optional[int] = Query(None),
    call_status: Optional[CallStatus] = Query(None, alias="status"),
) -> list[Call]:
    """Return a company's calls, newest first."""
    return await call_service.list_calls(
        db, company_id, sdr_id=sdr_id, week_number=week_number, year=year, status=call_status
    )


@router.get("/{call_id}", response_model=Call)
async def get_call(call_id: UUID, db: DbDep) -> Call:
    call = await call_service.get_call(db, call_id)
    if not call:
        raise HTTPException(status_code=404, detail=f"Call {call_id} not found")
    return call


@router.patch("/{call_id}/status", response_model=Call)
async def update_call_status(call_id: UUID, payload: CallStatusUpdate, db: DbDep) -> Call:
    """Advance a call through the processing pipeline."""
    call = await call_service.update_call_status(db, call_id, payload.status)
    if not call:
        raise HTTPException(status_code=404, detail=f"Call {call_id} not found")
    return call


@router.delete("/{call_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_call(call_id: UUID, db: DbDep) -> None:
    """Delete a call together with its analysis and coaching items (cascade)."""
    deleted = await call_service.delete_call(db, call_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Call {call_id} not found")


@router.post(
    "/{call_id}/analysis", response_model=CallAnalysis, status_code=status.HTTP_201_CREATED
)
async def save_analysis(call_id: UUID, payload: CallAnalysisCreate, db: DbDep) -> CallAnalysis:
    """Store the scoring pipeline's analysis for a call and mark the call completed."""
    call = await call_service.get_call(db, call_id)
    if not call:
        raise HTTPException(status_code=404, detail=f"Call {call_id} not found")
    try:
        return await analysis_service.save_analysis(
            db, call_id, sdr_id=call.sdr_id, company_id=call.company_id, analysis=payload
        )
    except asyncpg.UniqueViolationError:
        raise HTTPException(status_code=409, detail=f"Call {call_id} already has an analysis")


@router.get("/{call_id}/analysis", response_model=CallAnalysis)
async def get_analysis(call_id: UUID, db: DbDep) -> CallAnalysis:
    analysis = await analysis_service.get_analysis_for_call(db, call_id)
    if not analysis:
        raise HTTPException(status_code=404, detail=f"No analysis for call {call_id}")
    return analysis
