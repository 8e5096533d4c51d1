"""
Client-facing errors raised while handling relay requests.

Each error carries the HTTP status and the machine-readable code that the
exception handlers in ``event_relay.api.errors`` render into the
``{"error": {"code": ..., "message": ...}}`` envelope.
"""


class RelayError(Exception):
    """Base class for errors reported to the client with a structured body."""

    status_code: int = 400
    code: str = "UNKNOWN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RangeExceededError(RelayError):
    """Percentage outside of the accepted 0-100 range."""

    code = "RANGE_EXCEEDED_ERROR"

    def __init__(self, value: float):
        shown = int(value) if value.is_integer() else value
        super().__init__(
            f"Percentage range is exceeded. It should be within 0-100, but got {shown}"
        )
        self.value = value


class MissingJsonContentTypeError(RelayError):
    code = "MISSING_JSON_CONTENT_TYPE"

    def __init__(self, message: str = (
        "Missing or invalid Content-Type header. Expected 'application/json'"
    )):
        super().__init__(message)


class JsonValidityError(RelayError):
    """Request body is not syntactically valid JSON."""

    code = "JSON_VALIDITY_ERROR"


class JsonDeserializationError(RelayError):
    """Request body is valid JSON but does not match the event schema."""

    code = "JSON_DESERIALIZATION_ERROR"


class BodyBufferError(RelayError):
    """Request body could not be read into memory."""

    code = "BUFFER_ERROR"
