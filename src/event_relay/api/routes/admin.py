from fastapi import APIRouter, Depends

from ...models.schemas import ConnectionInfo, ConnectionsResponse
from ...services.event_relay import EventRelay
from ..deps import get_relay

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/connections", response_model=ConnectionsResponse)
async def list_connections(relay: EventRelay = Depends(get_relay)) -> ConnectionsResponse:
    """
    List all active SSE connections.

    Note: This endpoint should be protected in production.
    """
    return ConnectionsResponse(
        count=len(relay.active_connections),
        connections=[
            ConnectionInfo(connection_id=conn_id, **data)
            for conn_id, data in relay.active_connections.items()
        ],
    )
