"""Pydantic models for auth domain."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    """Account role. Organizers create events, customers book them."""

    CUSTOMER = "CUSTOMER"
    ORGANIZER = "ORGANIZER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """A registered EventHub user."""

    id: str
    email: EmailStr
    full_name: str | None = None
    role: UserRole = UserRole.CUSTOMER
    points: int = Field(0, ge=0)  # Loyalty balance, 1 point = 1 Rupiah
    profile_picture: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class AuthResult(BaseModel):
    """Token and user returned by login/register."""

    token: str = Field(..., min_length=1, description="Bearer token (opaque string)")
    user: User
