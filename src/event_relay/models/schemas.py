from datetime import datetime
from typing import List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import RangeExceededError

PERCENTAGE_MIN = 0.0
PERCENTAGE_MAX = 100.0


class PercentageEvent(BaseModel):
    """Progress event carrying a percentage."""
    model_config = ConfigDict(frozen=True, strict=True)

    percentage: float = Field(..., allow_inf_nan=False, description="Progress in percent (0-100)")

    def check_range(self) -> None:
        if not PERCENTAGE_MIN <= self.percentage <= PERCENTAGE_MAX:
            raise RangeExceededError(self.percentage)

    def to_frame_data(self) -> str:
        return self.model_dump_json()


class MessageEvent(BaseModel):
    """Free-form text event."""
    model_config = ConfigDict(frozen=True, strict=True)

    message: str = Field(..., description="Opaque message text")

    def check_range(self) -> None:
        pass

    def to_frame_data(self) -> str:
        return self.message


Event = Union[PercentageEvent, MessageEvent]

EVENT_MODELS: dict[str, Type[BaseModel]] = {
    "percentage": PercentageEvent,
    "message": MessageEvent,
}


class EventData(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable description")


class EventResponse(BaseModel):
    """Envelope for /events/send responses; exactly one of data/error is set."""
    data: Optional[EventData] = None
    error: Optional[ErrorDetail] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    topic_capacity: int = Field(..., description="Ring buffer slots")
    published_events: int = Field(..., description="Events published since start")
    listeners: int = Field(..., description="Open subscriptions")
    active_streams: int = Field(..., description="Number of active SSE streams")


class ConnectionInfo(BaseModel):
    connection_id: str
    user_agent: Optional[str] = None
    connected_at: datetime


class ConnectionsResponse(BaseModel):
    count: int
    connections: List[ConnectionInfo]
