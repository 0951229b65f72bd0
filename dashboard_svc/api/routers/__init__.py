"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.dashboard import router as dashboard_router

__all__ = ["health_router", "dashboard_router"]
