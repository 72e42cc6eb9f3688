"""CallPulse API application entry point."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads os.getenv()

from fastapi import FastAPI

from callpulse.api.routes import calls_router, coaching_router, health_router, reports_router
from callpulse.services.database import close_pool, create_tables, init_pool

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool and make sure the schema exists."""
    await init_pool()
    await create_tables()
    logger.info("PostgreSQL pool initialized, tables created")

    yield

    await close_pool()
    logger.info("CallPulse API stopped")


app = FastAPI(
    title="CallPulse API",
    description=(
        "Sales-call coaching: per-SDR weekly score rollups, week-over-week "
        "deltas and coaching impact."
    ),
    version="0.3.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(calls_router)
app.include_router(coaching_router)
app.include_router(reports_router)
