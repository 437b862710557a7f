"""
API routes package.
"""

from .admin import router as admin_router
from .engineers import router as engineers_router
from .health import router as health_router
from .jobs import router as jobs_router
from .scheduling import router as scheduling_router

__all__ = [
    "admin_router",
    "engineers_router",
    "health_router",
    "jobs_router",
    "scheduling_router",
]
