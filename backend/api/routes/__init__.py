"""API route modules."""

from .health import router as health_router
from .data import router as data_router
from .stats import router as stats_router

__all__ = [
    "health_router",
    "data_router",
    "stats_router",
]
