from .schemas import (
    Event,
    EVENT_MODELS,
    PercentageEvent,
    MessageEvent,
    EventData,
    ErrorDetail,
    EventResponse,
    HealthResponse,
    ConnectionInfo,
    ConnectionsResponse,
)

__all__ = [
    "Event",
    "EVENT_MODELS",
    "PercentageEvent",
    "MessageEvent",
    "EventData",
    "ErrorDetail",
    "EventResponse",
    "HealthResponse",
    "ConnectionInfo",
    "ConnectionsResponse",
]
