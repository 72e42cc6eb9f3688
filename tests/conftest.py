"""Shared fixtures across tests — PostgreSQL via asyncpg, plus model factories."""

import os
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

import asyncpg
import pytest
import pytest_asyncio

from callpulse.models.analysis import (
    CallAnalysis, CallAnalysisCreate, DimensionAssessment, DimensionScore,
)
from callpulse.models.call import CallCreate
from callpulse.models.dimensions import DIMENSIONS
from callpulse.services.analysis_service import save_analysis
from callpulse.services.call_service import add_call
from callpulse.services.database import (
    _CREATE_CALL_ANALYSES,
    _CREATE_CALLS,
    _CREATE_COACHING_ITEMS,
    _CREATE_WEEKLY_REPORTS,
)

# Use TEST_DATABASE_URL or fall back to DATABASE_URL
_TEST_DSN = os.getenv("TEST_DATABASE_URL") or os.getenv("DATABASE_URL", "")

_BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db():
    """PostgreSQL connection with tables, rolled back after each test."""
    if not _TEST_DSN:
        pytest.skip("No TEST_DATABASE_URL or DATABASE_URL set — skipping DB tests")

    conn = await asyncpg.connect(_TEST_DSN)

    # Start a transaction that we'll roll back at the end
    tr = conn.transaction()
    await tr.start()

    await conn.execute(_CREATE_CALLS)
    await conn.execute(_CREATE_CALL_ANALYSES)
    await conn.execute(_CREATE_COACHING_ITEMS)
    await conn.execute(_CREATE_WEEKLY_REPORTS)

    yield conn

    # Roll back everything so the next test starts clean
    await tr.rollback()
    await conn.close()


@pytest.fixture
def company_id() -> UUID:
    return uuid4()


@pytest.fixture
def sdr_id() -> UUID:
    return uuid4()


def _scores(scores: dict[str, int] | int) -> dict[str, int]:
    if isinstance(scores, int):
        return {d: scores for d in DIMENSIONS}
    return {d: scores.get(d, 5) for d in DIMENSIONS}


@pytest.fixture
def make_analysis():
    """Build an in-memory CallAnalysis; unlisted dimensions score 5."""
    counter = iter(range(10_000))

    def _make(
        scores: dict[str, int] | int = 5,
        overall: float = 5.0,
        created_at: datetime | None = None,
        call_id: UUID | None = None,
    ) -> CallAnalysis:
        n = next(counter)
        return CallAnalysis(
            id=uuid4(),
            call_id=call_id or uuid4(),
            overall_score=overall,
            dimensions={
                d: DimensionScore(score=s, justification=f"{d} justification")
                for d, s in _scores(scores).items()
            },
            summary="Solid call.",
            created_at=created_at or _BASE_TIME + timedelta(minutes=n),
        )

    return _make


def analysis_payload(scores: dict[str, int] | int = 5, overall: float = 5.0) -> CallAnalysisCreate:
    return CallAnalysisCreate(
        overall_score=overall,
        dimensions={
            d: DimensionAssessment(
                score=s,
                justification=f"{d} justification",
                evidence_quotes=[f"quote for {d}"],
                coaching_suggestion=f"Work on {d}",
            )
            for d, s in _scores(scores).items()
        },
        strengths=["Clear agenda"],
        weaknesses=["Rushed close"],
        summary="Solid call.",
    )


@pytest.fixture
def seed_analysis(db, company_id, sdr_id):
    """Insert a call for the SDR and store its analysis (the call becomes completed)."""

    async def _seed(
        call_date: date = date(2026, 3, 4),
        scores: dict[str, int] | int = 5,
        overall: float = 5.0,
        sdr: UUID | None = None,
    ) -> CallAnalysis:
        owner = sdr or sdr_id
        call = await add_call(
            db,
            CallCreate(
                company_id=company_id,
                sdr_id=owner,
                uploaded_by=uuid4(),
                call_date=call_date,
                transcript="Hi, this is Sam from Acme...",
            ),
        )
        return await save_analysis(db, call.id, owner, company_id, analysis_payload(scores, overall))

    return _seed


@pytest.fixture
def make_payload():
    """Factory for the scoring pipeline's CallAnalysisCreate payload."""
    return analysis_payload
