"""Weekly report endpoints — generation, listing and trends."""

import logging
import os
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from callpulse.api.dependencies import DbDep
from callpulse.errors import NoDataError, StoreUnavailableError
from callpulse.models.report import BatchResult, WeeklyReport
from callpulse.services import report_service, weekly_report_service
from callpulse.weekly import iso_week

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

TREND_WEEKS = int(os.getenv("TREND_WEEKS", "8"))


class GenerateRequest(BaseModel):
    company_id: UUID
    sdr_id: UUID
    week_number: Optional[int] = Field(None, ge=1, le=53, description="Default: current ISO week")
    year: Optional[int] = Field(None, ge=1000, le=9999)


class BatchGenerateRequest(BaseModel):
    company_id: UUID
    week_number: Optional[int] = Field(None, ge=1, le=53, description="Default: current ISO week")
    year: Optional[int] = Field(None, ge=1000, le=9999)
    sdr_ids: Optional[list[UUID]] = Field(
        None, description="Default: every SDR with a completed call that week"
    )


def _resolve_week(week_number: Optional[int], year: Optional[int]) -> tuple[int, int]:
    current_week, current_year = iso_week(date.today())
    return week_number or current_week, year or current_year


@router.post("/generate", response_model=WeeklyReport)
async def generate_report(body: GenerateRequest, db: DbDep) -> WeeklyReport:
    """Build (or rebuild) one SDR's weekly report."""
    week_number, year = _resolve_week(body.week_number, body.year)
    try:
        return await weekly_report_service.generate_weekly_report(
            db, body.company_id, body.sdr_id, week_number, year
        )
    except NoDataError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=503, detail="Report store unavailable")


@router.post("/generate-batch", response_model=BatchResult)
async def generate_reports(body: BatchGenerateRequest, db: DbDep) -> BatchResult:
    """
    Build one week's reports for a team.

    SDRs without analysed calls are listed under `skipped`, SDRs whose
    generation failed under `failed`; neither stops the rest of the batch.
    """
    week_number, year = _resolve_week(body.week_number, body.year)
    try:
        return await weekly_report_service.generate_weekly_reports(
            db, body.company_id, week_number, year, sdr_ids=body.sdr_ids
        )
    except StoreUnavailableError:
        raise HTTPException(status_code=503, detail="Report store unavailable")


@router.get("", response_model=list[WeeklyReport])
async def list_reports(
    db: DbDep,
    company_id: UUID = Query(...),
    sdr_id: Optional[UUID] = Query(None),
    week_number: Optional[int] = Query(None, ge=1, le=53),
    year: Optional[int] = Query(None),
) -> list[WeeklyReport]:
    """Return reports, most recent week first."""
    return await report_service.query_reports(
        db, company_id, sdr_id=sdr_id, week_number=week_number, year=year
    )


@router.get("/trend/{sdr_id}", response_model=list[WeeklyReport])
async def get_trend(
    sdr_id: UUID,
    db: DbDep,
    weeks: int = Query(TREND_WEEKS, ge=1, le=52),
) -> list[WeeklyReport]:
    """Return the SDR's most recent weekly reports, oldest first."""
    return await report_service.get_sdr_trend(db, sdr_id, weeks=weeks)


@router.get("/{report_id}", response_model=WeeklyReport)
async def get_report(report_id: UUID, db: DbDep) -> WeeklyReport:
    report = await report_service.get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    return report
