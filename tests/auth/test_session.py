"""Tests for SessionStore - persisted auth session lifecycle."""

import json
from unittest.mock import Mock

import pytest
import responses

from auth.config import AuthConfig
from auth.exceptions import NotAuthenticatedError
from auth.session import SessionStore
from clients.eventhub_client import EventHubAuthError, EventHubClient
from clients.valkey_client import ValkeyClient
from factories import API_URL, make_user

CLIENT_ID = "kiosk-1"
TOKEN_KEY = f"session:{CLIENT_ID}:auth_token"
USER_KEY = f"session:{CLIENT_ID}:user_data"


@pytest.fixture
def stored():
    """Backing dict for the mocked Valkey."""
    return {}


@pytest.fixture
def valkey(stored):
    """ValkeyClient mock backed by a dict of raw strings."""
    mock = Mock(spec=ValkeyClient)
    mock.get.side_effect = stored.get
    mock.get_json.side_effect = lambda key: json.loads(stored[key]) if key in stored else None
    mock.set_many.side_effect = lambda values, expire_seconds=None: stored.update(values)
    mock.set_json.side_effect = lambda key, value, expire_seconds=None: stored.__setitem__(key, json.dumps(value))
    mock.delete.side_effect = lambda *keys: sum(stored.pop(key, None) is not None for key in keys)
    return mock


@pytest.fixture
def config():
    return AuthConfig(session_expiry_days=7)


@pytest.fixture
def store(valkey, config):
    return SessionStore(valkey, config, client_id=CLIENT_ID)


class TestInitialState:

    def test_requires_client_id(self, valkey, config):
        with pytest.raises(ValueError, match="client_id"):
            SessionStore(valkey, config, client_id="")

    def test_loading_until_first_load(self, store):
        assert store.is_loading is True
        assert store.is_authenticated is False
        store.load()
        assert store.is_loading is False


class TestLogin:

    def test_persists_token_and_user_with_expiry(self, store, valkey, stored, user):
        store.login("jwt-abc", user)

        assert stored[TOKEN_KEY] == "jwt-abc"
        assert json.loads(stored[USER_KEY])["fullName"] == "Ana Putri"
        assert valkey.set_many.call_args.kwargs["expire_seconds"] == 7 * 86400
        assert store.is_authenticated is True
        assert store.current_token() == "jwt-abc"

    def test_rejects_empty_token(self, store, user):
        with pytest.raises(ValueError, match="token"):
            store.login("", user)
        assert store.is_authenticated is False


class TestLoad:

    def test_restores_persisted_session(self, valkey, config, user):
        SessionStore(valkey, config, CLIENT_ID).login("jwt-abc", user)

        restored = SessionStore(valkey, config, CLIENT_ID)
        loaded = restored.load()

        assert loaded == user
        assert restored.token == "jwt-abc"

    def test_empty_store_means_logged_out(self, store):
        assert store.load() is None
        assert store.token is None

    def test_token_without_user_means_logged_out(self, store, stored):
        stored[TOKEN_KEY] = "jwt-abc"
        assert store.load() is None
        assert store.is_authenticated is False

    def test_undecodable_user_clears_session(self, store, valkey, stored):
        stored[TOKEN_KEY] = "jwt-abc"
        stored[USER_KEY] = "{broken"
        valkey.get_json.side_effect = ValueError("Invalid JSON")

        assert store.load() is None

        assert TOKEN_KEY not in stored
        assert USER_KEY not in stored

    def test_invalid_user_shape_clears_session(self, store, stored):
        stored[TOKEN_KEY] = "jwt-abc"
        stored[USER_KEY] = json.dumps({"id": "usr-1"})

        assert store.load() is None
        assert TOKEN_KEY not in stored

    def test_sessions_are_per_client(self, valkey, config, user):
        SessionStore(valkey, config, "kiosk-1").login("jwt-abc", user)
        other = SessionStore(valkey, config, "kiosk-2")
        assert other.load() is None


class TestLogout:

    def test_clears_state_and_storage(self, store, stored, user):
        store.login("jwt-abc", user)
        store.logout()

        assert stored == {}
        assert store.user is None
        assert store.current_token() is None

    def test_logout_when_logged_out_is_safe(self, store):
        store.logout()
        assert store.is_authenticated is False


class TestCurrentUser:

    def test_require_user_raises_when_logged_out(self, store):
        with pytest.raises(NotAuthenticatedError):
            store.require_user()

    def test_require_user_returns_user(self, store, user):
        store.login("jwt-abc", user)
        assert store.require_user() == user

    def test_update_user_keeps_token(self, store, stored, user):
        store.login("jwt-abc", user)

        store.update_user(make_user(points=10))

        assert store.user.points == 10
        assert json.loads(stored[USER_KEY])["points"] == 10
        assert store.token == "jwt-abc"

    def test_update_user_requires_session(self, store, user):
        with pytest.raises(NotAuthenticatedError):
            store.update_user(user)


class TestClientWiring:
    """The store drives EventHubClient's token and 401 handling."""

    @responses.activate
    def test_unauthorized_response_clears_persisted_session(self, store, stored, user):
        store.login("jwt-abc", user)
        client = EventHubClient(API_URL, token_provider=store.current_token, on_unauthorized=store.logout)
        responses.get(f"{API_URL}/users/profile", json={"message": "Invalid token"}, status=401)

        with pytest.raises(EventHubAuthError):
            client.get_profile()

        assert responses.calls[0].request.headers["Authorization"] == "Bearer jwt-abc"
        assert TOKEN_KEY not in stored
        assert USER_KEY not in stored
        assert store.is_authenticated is False
        assert store.current_token() is None
