"""Shared test fixtures for the EventHub booking test suite."""

from decimal import Decimal
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env")

from factories import make_event, make_promotion, make_user


@pytest.fixture
def event():
    return make_event()


@pytest.fixture
def free_event():
    return make_event(price=Decimal(0), is_free=True)


@pytest.fixture
def promotion():
    return make_promotion()


@pytest.fixture
def user():
    return make_user()
