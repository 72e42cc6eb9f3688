"""Healthcheck endpoint."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from callpulse.api.dependencies import DbDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbDep) -> HealthResponse:
    """Return service status and whether the database answers."""
    try:
        database = await db.fetchval("SELECT 1") == 1
    except Exception as e:
        logger.warning("Database healthcheck failed: %s", e)
        database = False
    return HealthResponse(status="ok" if database else "degraded", database=database)
