"""
Request dependencies shared by the API routes.
"""
import logging

from fastapi import Request
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from ..core.config import settings
from ..core.exceptions import (
    BodyBufferError,
    JsonDeserializationError,
    JsonValidityError,
    MissingJsonContentTypeError,
)
from ..models.schemas import EVENT_MODELS, Event
from ..services.event_relay import EventRelay

logger = logging.getLogger(__name__)


def get_relay(request: Request) -> EventRelay:
    """The application's EventRelay, created in the lifespan handler."""
    return request.app.state.relay


def has_json_content_type(content_type: str | None) -> bool:
    """Accept ``application/json`` and ``application/<suffix>+json``."""
    if not content_type:
        return False
    mime = content_type.split(";", 1)[0].strip().lower()
    type_, _, subtype = mime.partition("/")
    if type_ != "application":
        return False
    return subtype == "json" or subtype.endswith("+json")


async def read_event(request: Request) -> Event:
    """
    Parse the request body into the configured event model.

    Every failure is mapped to a distinct client error so callers can tell a
    missing content type from a syntax error from a schema mismatch.
    """
    if not has_json_content_type(request.headers.get("content-type")):
        raise MissingJsonContentTypeError()

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_body_bytes:
        raise BodyBufferError("Failed to buffer the request body: length limit exceeded")

    try:
        body = await request.body()
    except ClientDisconnect:
        raise BodyBufferError("Failed to buffer the request body: client disconnected")

    if len(body) > settings.max_body_bytes:
        raise BodyBufferError("Failed to buffer the request body: length limit exceeded")

    model = EVENT_MODELS[settings.event_payload]
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        if first["type"] == "json_invalid":
            raise JsonValidityError(
                f"Failed to parse the request body as JSON: {first['msg']}"
            )
        location = ".".join(str(part) for part in first["loc"]) or "body"
        raise JsonDeserializationError(
            f"Failed to deserialize the JSON body into the target type: "
            f"{location}: {first['msg']}"
        )
