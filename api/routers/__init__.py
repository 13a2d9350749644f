"""
Router package for the workout builder API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- wizard: Builder wizard sessions (navigation, editing, save)
"""

from api.routers.health import router as health_router
from api.routers.wizard import router as wizard_router

__all__ = [
    "health_router",
    "wizard_router",
]
