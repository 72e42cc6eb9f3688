"""Compose and store weekly SDR reports: aggregate, compare, coaching impact, narrate."""

import logging
from typing import Optional
from uuid import UUID

import asyncpg

from callpulse.errors import CallPulseError, NoDataError
from callpulse.models.report import BatchFailure, BatchResult, WeeklyReport, WeeklyReportCreate
from callpulse.services import call_service, report_service
from callpulse.services.database import store_errors
from callpulse.weekly import aggregate, analyze_coaching_impact, compare, load_prior_scores, narrate

logger = logging.getLogger(__name__)


async def generate_weekly_report(
    db: asyncpg.Connection,
    company_id: UUID,
    sdr_id: UUID,
    week_number: int,
    year: int,
) -> WeeklyReport:
    """
    Build the SDR's report for one week and upsert it.

    Raises:
        NoDataError: the SDR has no completed analyses that week.
        StoreUnavailableError: the database could not be read or written.
    """
    with store_errors():
        rollup = await aggregate(db, sdr_id, company_id, week_number, year)
        prior_scores = await load_prior_scores(db, sdr_id, week_number, year)
        comparison = compare(rollup, prior_scores)
        impact = await analyze_coaching_impact(db, sdr_id, company_id, comparison)

        report = await report_service.upsert_report(
            db,
            WeeklyReportCreate(
                company_id=company_id,
                sdr_id=sdr_id,
                week_number=week_number,
                year=year,
                calls_analyzed=rollup.calls_analyzed,
                avg_scores=rollup.avg_scores,
                best_call_id=rollup.best_call_id,
                worst_call_id=rollup.worst_call_id,
                summary=narrate(rollup, comparison),
                comparison_with_previous=comparison,
                coaching_impact=impact,
            ),
        )

    logger.info(
        "Weekly report for SDR %s, week %d/%d: %d calls, overall %.1f",
        sdr_id, week_number, year, rollup.calls_analyzed, rollup.avg_scores["overall"],
    )
    return report


async def generate_weekly_reports(
    db: asyncpg.Connection,
    company_id: UUID,
    week_number: int,
    year: int,
    sdr_ids: Optional[list[UUID]] = None,
) -> BatchResult:
    """Generate one week's reports for several SDRs, one at a time.

    Without explicit sdr_ids, every SDR with a completed call that week is
    included. A per-SDR failure is recorded and the batch carries on.
    """
    if sdr_ids is None:
        with store_errors():
            sdr_ids = await call_service.list_sdrs_with_calls(db, company_id, week_number, year)

    result = BatchResult(week_number=week_number, year=year)
    for sdr_id in sdr_ids:
        try:
            report = await generate_weekly_report(db, company_id, sdr_id, week_number, year)
        except NoDataError:
            logger.warning("No analyzed calls for SDR %s in week %d/%d, skipped", sdr_id, week_number, year)
            result.skipped.append(sdr_id)
        except CallPulseError as exc:
            logger.exception("Weekly report failed for SDR %s in week %d/%d", sdr_id, week_number, year)
            result.failed.append(BatchFailure(sdr_id=sdr_id, error=str(exc)))
        else:
            result.reports.append(report)

    logger.info(
        "Week %d/%d batch: %d generated, %d skipped, %d failed",
        week_number, year, len(result.reports), len(result.skipped), len(result.failed),
    )
    return result
