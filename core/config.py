"""Client-wide configuration."""

import os

from pydantic import BaseModel, Field


class EventHubConfig(BaseModel):
    """
    EventHub client configuration.

    Defaults match a local development backend. Use from_env() in
    deployments; every field has an EVENTHUB_* variable.
    """

    api_base_url: str = Field(
        default="http://localhost:5001/api",
        description="Base URL of the EventHub REST API",
    )
    request_timeout_seconds: int = Field(
        default=10,
        description="Per-request timeout for API calls",
        ge=1,
        le=120,
    )
    valkey_url: str = Field(
        default="redis://localhost:6379/0",
        description="Valkey URL for persisted auth sessions",
    )
    max_tickets_per_booking: int = Field(
        default=10,
        description="Upper bound on tickets in a single booking",
        ge=1,
    )
    display_timezone: str = Field(
        default="Asia/Jakarta",
        description="IANA timezone used when rendering event dates",
    )

    @classmethod
    def from_env(cls) -> "EventHubConfig":
        """Build config from EVENTHUB_* environment variables, falling back to defaults."""
        env_map = {
            "api_base_url": "EVENTHUB_API_URL",
            "request_timeout_seconds": "EVENTHUB_REQUEST_TIMEOUT_SECONDS",
            "valkey_url": "EVENTHUB_VALKEY_URL",
            "max_tickets_per_booking": "EVENTHUB_MAX_TICKETS_PER_BOOKING",
            "display_timezone": "EVENTHUB_DISPLAY_TIMEZONE",
        }
        values = {
            field: os.environ[var]
            for field, var in env_map.items()
            if os.environ.get(var)
        }
        return cls(**values)
