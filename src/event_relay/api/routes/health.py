from fastapi import APIRouter, Depends

from ...core.config import settings
from ...models.schemas import HealthResponse
from ...services.event_relay import EventRelay
from ..deps import get_relay

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(relay: EventRelay = Depends(get_relay)) -> HealthResponse:
    """
    Health check endpoint.

    Returns topic state, listener count and active streams count.
    """
    return HealthResponse(
        status="degraded" if relay.topic.is_closed else "healthy",
        service=settings.service_name,
        topic_capacity=relay.capacity,
        published_events=relay.published_count,
        listeners=relay.receiver_count,
        active_streams=len(relay.active_connections),
    )
