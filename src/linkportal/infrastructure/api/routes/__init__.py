"""API routes package."""

from linkportal.infrastructure.api.routes.people_router import router as people_router

__all__ = ["people_router"]
