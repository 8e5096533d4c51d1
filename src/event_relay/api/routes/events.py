import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from ...models.schemas import Event, EventData, EventResponse
from ...services.event_relay import EventRelay
from ..deps import get_relay, read_event

router = APIRouter(prefix="/events", tags=["Events"])
logger = logging.getLogger(__name__)


@router.post(
    "/send",
    response_model=EventResponse,
    response_model_exclude_none=True,
    responses={
        status.HTTP_202_ACCEPTED: {"model": EventResponse},
        status.HTTP_400_BAD_REQUEST: {"model": EventResponse},
    },
)
async def send_event(
    event: Event = Depends(read_event),
    relay: EventRelay = Depends(get_relay),
) -> JSONResponse:
    """
    Publish an event to every connected stream.

    Returns 200 with the listener count, or 202 when nobody is listening.
    """
    event.check_range()

    delivered_to = relay.publish(event)
    if delivered_to:
        status_code = status.HTTP_200_OK
        message = f"Event sent to {delivered_to} listeners!"
    else:
        status_code = status.HTTP_202_ACCEPTED
        message = "Event accepted, but no listeners"

    body = EventResponse(data=EventData(message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("")
async def subscribe(
    request: Request,
    relay: EventRelay = Depends(get_relay),
) -> EventSourceResponse:
    """
    Subscribe to events via Server-Sent Events (SSE).

    The stream stays open until the client disconnects or the server shuts
    down.
    """
    return EventSourceResponse(
        relay.create_stream(
            user_agent=request.headers.get("user-agent"),
            check_disconnected=request.is_disconnected,
        )
    )
