"""API routes package."""

from .routes_events import router as events_router

__all__ = ["events_router"]
