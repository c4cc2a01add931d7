"""API test fixtures - app wired to a mocked EventHubClient."""

from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from clients.eventhub_client import EventHubClient
from core.config import EventHubConfig
from core.models import PromotionValidation
from factories import TEST_TOKEN, make_event, make_promotion, make_transaction


@pytest.fixture
def eventhub():
    """EventHubClient mock with a paid event and a valid SAVE10 code."""
    mock = Mock(spec=EventHubClient)
    mock.get_event.return_value = make_event()
    mock.get_user_points.return_value = 50000
    mock.validate_promotion.return_value = PromotionValidation(
        valid=True, promotion=make_promotion(discount_percent=10)
    )
    mock.create_booking.return_value = make_transaction()
    return mock


@pytest.fixture
def client_factory(eventhub):
    return Mock(return_value=eventhub)


@pytest.fixture
def app(client_factory):
    return create_app(config=EventHubConfig(), client_factory=client_factory)


@pytest.fixture
def anonymous_client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(app):
    """TestClient sending the test bearer token."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {TEST_TOKEN}"},
        raise_server_exceptions=False,
    )
