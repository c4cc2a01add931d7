"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """Settings for the persisted auth session."""

    session_expiry_days: int = Field(
        default=7,
        description="How long a persisted login survives without re-authenticating",
        ge=1,
        le=30,
    )
    key_prefix: str = Field(
        default="session:",
        description="Valkey key prefix for persisted sessions",
        min_length=1,
    )

    @property
    def session_expiry_seconds(self) -> int:
        return self.session_expiry_days * 86400
