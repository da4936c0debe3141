"""API routers."""

from apps.api.routers.notes import router as notes_router
from apps.api.routers.query import router as query_router

__all__ = ["notes_router", "query_router"]
