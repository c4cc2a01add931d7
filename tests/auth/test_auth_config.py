"""Tests for AuthConfig."""

import pytest
from pydantic import ValidationError

from auth.config import AuthConfig


class TestAuthConfig:

    def test_defaults(self):
        config = AuthConfig()
        assert config.session_expiry_days == 7
        assert config.key_prefix == "session:"

    def test_expiry_seconds(self):
        assert AuthConfig(session_expiry_days=2).session_expiry_seconds == 172800

    @pytest.mark.parametrize("days", [0, 31])
    def test_expiry_bounds(self, days):
        with pytest.raises(ValidationError):
            AuthConfig(session_expiry_days=days)
