"""
API router configuration.
"""
from fastapi import APIRouter

from .routes import admin_router, events_router, health_router, pages_router

# Create main API router
router = APIRouter()

# Include sub-routers; pages carries the catch-all and goes last
router.include_router(health_router)
router.include_router(events_router)
router.include_router(admin_router)
router.include_router(pages_router)
