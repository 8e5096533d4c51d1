from .admin import router as admin_router
from .events import router as events_router
from .health import router as health_router
from .pages import router as pages_router

__all__ = [
    "admin_router",
    "events_router",
    "health_router",
    "pages_router",
]
