"""
Event Relay - Main FastAPI Application

Accepts events over HTTP and fans them out to connected clients.

Key Features:
- POST /events/send validates and publishes an event
- GET /events streams events to the client as Server-Sent Events (SSE)
- Single in-memory broadcast topic with bounded history and lag detection
- Landing page and fallback page served from the assets directory
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import router
from .api.errors import register_exception_handlers
from .core.config import settings
from .services.event_relay import EventRelay

# Configure logging
logging.basicConfig(
    level=settings.resolved_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Creates the relay (and its topic) on startup and closes it on shutdown.
    """
    logger.info(
        f"Starting {settings.service_name} (payload: {settings.event_payload}, "
        f"topic capacity: {settings.topic_capacity})"
    )
    app.state.relay = EventRelay(
        capacity=settings.topic_capacity,
        heartbeat_interval=settings.stream_heartbeat_interval,
    )

    yield

    logger.info(f"Shutting down {settings.service_name}")
    app.state.relay.shutdown()
    logger.info(f"{settings.service_name} shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Event Relay",
        description="Publish events over HTTP and receive them over Server-Sent Events",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Run the service with uvicorn on the configured address."""
    import uvicorn

    logger.debug(f"listening on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
