"""Tests for auth domain models."""

import pytest
from pydantic import ValidationError

from auth.types import AuthResult, User, UserRole


class TestUser:

    def test_parses_api_payload(self):
        user = User.model_validate({
            "id": "usr-1",
            "email": "ana@example.com",
            "fullName": "Ana Putri",
            "role": "ORGANIZER",
            "points": 1200,
            "createdAt": "2026-01-05T03:00:00.000Z",
        })
        assert user.full_name == "Ana Putri"
        assert user.role == UserRole.ORGANIZER
        assert user.created_at.year == 2026

    def test_role_defaults_to_customer(self):
        assert User(id="usr-1", email="ana@example.com").role == UserRole.CUSTOMER

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            User(id="usr-1", email="not-an-email")

    def test_rejects_negative_points(self):
        with pytest.raises(ValidationError):
            User(id="usr-1", email="ana@example.com", points=-1)

    def test_dump_round_trips_through_aliases(self, user):
        assert User.model_validate(user.model_dump(mode="json", by_alias=True)) == user


class TestAuthResult:

    def test_rejects_empty_token(self, user):
        with pytest.raises(ValidationError):
            AuthResult(token="", user=user)
