"""Unit tests for report_service."""

from uuid import uuid4

import pytest

from callpulse.models.report import CoachingImpact, WeeklyReportCreate
from callpulse.services.report_service import (
    get_report,
    get_report_for_week,
    get_sdr_trend,
    query_reports,
    upsert_report,
)

pytestmark = pytest.mark.asyncio

_SCORES = {"opening": 5.7, "discovery": 6.0, "value_prop": 6.3,
           "objection": 5.0, "closing": 5.8, "tone": 7.0, "overall": 6.0}


def _report(company_id, sdr_id, week=10, year=2026, **overrides) -> WeeklyReportCreate:
    fields = dict(
        company_id=company_id,
        sdr_id=sdr_id,
        week_number=week,
        year=year,
        calls_analyzed=3,
        avg_scores=_SCORES,
        summary="Analyzed 3 calls this week with an average score of 6.0/10.",
        comparison_with_previous={"closing": -0.2, "overall": 0.4},
        coaching_impact={"closing": CoachingImpact(delta=-0.2, improved=False)},
    )
    fields.update(overrides)
    return WeeklyReportCreate(**fields)


async def test_upsert_inserts_report(db, company_id, sdr_id):
    report = await upsert_report(db, _report(company_id, sdr_id))
    assert report.id is not None
    assert report.calls_analyzed == 3
    assert report.avg_scores == _SCORES
    assert report.coaching_impact["closing"].improved is False


async def test_avg_scores_keep_canonical_order(db, company_id, sdr_id):
    report = await upsert_report(db, _report(company_id, sdr_id))
    assert list(report.avg_scores) == [
        "opening", "discovery", "value_prop", "objection", "closing", "tone", "overall",
    ]
    assert list(report.comparison_with_previous) == ["closing", "overall"]


async def test_upsert_replaces_same_sdr_week(db, company_id, sdr_id):
    first = await upsert_report(db, _report(company_id, sdr_id))
    second = await upsert_report(
        db,
        _report(company_id, sdr_id, calls_analyzed=5, comparison_with_previous={}, coaching_impact={}),
    )
    assert second.id == first.id
    assert second.created_at == first.created_at
    assert second.calls_analyzed == 5
    # Full replace, not merge
    assert second.comparison_with_previous == {}
    assert second.coaching_impact == {}
    assert len(await query_reports(db, company_id, sdr_id=sdr_id)) == 1


async def test_get_report(db, company_id, sdr_id):
    saved = await upsert_report(db, _report(company_id, sdr_id))
    fetched = await get_report(db, saved.id)
    assert fetched is not None
    assert fetched == saved


async def test_get_report_not_found(db):
    assert await get_report(db, uuid4()) is None


async def test_get_report_for_week(db, company_id, sdr_id):
    await upsert_report(db, _report(company_id, sdr_id, week=52, year=2025))
    found = await get_report_for_week(db, sdr_id, 52, 2025)
    assert found is not None
    assert (found.week_number, found.year) == (52, 2025)
    assert await get_report_for_week(db, sdr_id, 1, 2026) is None


async def test_query_reports_most_recent_week_first(db, company_id, sdr_id):
    for week, year in [(51, 2025), (2, 2026), (52, 2025), (1, 2026)]:
        await upsert_report(db, _report(company_id, sdr_id, week=week, year=year))

    reports = await query_reports(db, company_id)
    assert [(r.year, r.week_number) for r in reports] == [
        (2026, 2), (2026, 1), (2025, 52), (2025, 51),
    ]


async def test_query_reports_filters(db, company_id, sdr_id):
    other_sdr = uuid4()
    await upsert_report(db, _report(company_id, sdr_id, week=9))
    await upsert_report(db, _report(company_id, sdr_id, week=10))
    await upsert_report(db, _report(company_id, other_sdr, week=10))
    await upsert_report(db, _report(uuid4(), uuid4(), week=10))  # another company

    assert len(await query_reports(db, company_id)) == 3
    assert len(await query_reports(db, company_id, sdr_id=sdr_id)) == 2
    week10 = await query_reports(db, company_id, week_number=10, year=2026)
    assert {r.sdr_id for r in week10} == {sdr_id, other_sdr}


async def test_sdr_trend_returns_latest_weeks_oldest_first(db, company_id, sdr_id):
    for week in range(1, 11):
        await upsert_report(db, _report(company_id, sdr_id, week=week))

    trend = await get_sdr_trend(db, sdr_id, weeks=3)
    assert [r.week_number for r in trend] == [8, 9, 10]


async def test_sdr_trend_empty(db):
    assert await get_sdr_trend(db, uuid4()) == []
