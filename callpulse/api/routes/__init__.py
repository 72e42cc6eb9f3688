"""FastAPI routers."""

from .calls import router as calls_router
from .coaching import router as coaching_router
from .health import router as health_router
from .reports import router as reports_router

__all__ = ["health_router", "calls_router", "coaching_router", "reports_router"]
