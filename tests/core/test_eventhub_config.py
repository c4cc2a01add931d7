"""Tests for EventHubConfig."""

import pytest
from pydantic import ValidationError

from core.config import EventHubConfig


class TestEventHubConfig:

    def test_defaults(self):
        config = EventHubConfig()
        assert config.api_base_url == "http://localhost:5001/api"
        assert config.max_tickets_per_booking == 10
        assert config.display_timezone == "Asia/Jakarta"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EVENTHUB_API_URL", "https://api.eventhub.id/api")
        monkeypatch.setenv("EVENTHUB_REQUEST_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("EVENTHUB_MAX_TICKETS_PER_BOOKING", "4")

        config = EventHubConfig.from_env()

        assert config.api_base_url == "https://api.eventhub.id/api"
        assert config.request_timeout_seconds == 30
        assert config.max_tickets_per_booking == 4

    def test_from_env_ignores_empty_values(self, monkeypatch):
        monkeypatch.setenv("EVENTHUB_API_URL", "")
        assert EventHubConfig.from_env().api_base_url == "http://localhost:5001/api"

    def test_rejects_zero_ticket_cap(self):
        with pytest.raises(ValidationError):
            EventHubConfig(max_tickets_per_booking=0)
