"""
Core configuration and error types for the event relay.
"""

from .config import settings, Settings
from .exceptions import (
    RelayError,
    RangeExceededError,
    MissingJsonContentTypeError,
    JsonDeserializationError,
    JsonValidityError,
    BodyBufferError,
)

__all__ = [
    # Config
    "settings",
    "Settings",
    # Errors
    "RelayError",
    "RangeExceededError",
    "MissingJsonContentTypeError",
    "JsonDeserializationError",
    "JsonValidityError",
    "BodyBufferError",
]
