"""Reusable FastAPI dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

import asyncpg
from fastapi import Depends

from callpulse.services.database import get_db as _get_db


async def db_dependency() -> AsyncGenerator[asyncpg.Connection, None]:
    """Provide a PostgreSQL connection for the duration of the request."""
    async with _get_db() as conn:
        yield conn


DbDep = Annotated[asyncpg.Connection, Depends(db_dependency)]
