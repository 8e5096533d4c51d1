"""
Configuration settings for the Event Relay.
"""
import logging
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


class Settings(BaseSettings):
    """
    Event Relay configuration loaded from environment variables.

    For local development, values can also be placed in a .env file.
    """
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_name: str = "event-relay"
    host: str = "127.0.0.1"
    port: int = 4000
    debug: bool = False
    log_level: Optional[str] = None  # overrides the debug-derived level

    # Payload accepted by POST /events/send
    event_payload: Literal["percentage", "message"] = "percentage"

    # Topic settings
    topic_capacity: int = Field(default=800, ge=1)

    # Stream settings
    stream_heartbeat_interval: float = Field(default=15, gt=0)  # seconds

    # Request settings
    max_body_bytes: int = Field(default=2 * 1024 * 1024, ge=1)

    # CORS
    cors_origins: List[str] = ["*"]

    # Landing and fallback pages
    assets_dir: Path = DEFAULT_ASSETS_DIR

    def resolved_log_level(self) -> int:
        """Numeric logging level, honouring LOG_LEVEL when it is set."""
        if self.log_level:
            level = logging.getLevelName(self.log_level.upper())
            if isinstance(level, int):
                return level
            raise ValueError(f"Unknown log level: {self.log_level}")
        return logging.DEBUG if self.debug else logging.INFO


# Global settings instance
settings = Settings()
