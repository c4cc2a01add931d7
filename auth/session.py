"""Application-wide auth session container.

Holds the logged-in user and bearer token for one client (a browser profile,
a CLI install, a kiosk). State is persisted in Valkey so it survives
restarts:

    store = SessionStore(valkey, AuthConfig(), client_id="kiosk-1")
    store.load()          # startup: read persisted session
    store.login(token, user)
    store.logout()        # teardown: clear persisted session

Pass the store to collaborators explicitly (e.g. EventHubClient takes
store.current_token and store.logout). There is no module-level session.
"""

import logging

from pydantic import ValidationError

from auth.config import AuthConfig
from auth.exceptions import NotAuthenticatedError, SessionCorruptedError
from auth.types import User
from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class SessionStore:
    """Persisted auth state with an explicit load/login/logout lifecycle."""

    TOKEN_KEY = "auth_token"
    USER_KEY = "user_data"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig, client_id: str):
        if not client_id:
            raise ValueError("client_id is required")
        self._valkey = valkey
        self._config = config
        self._client_id = client_id
        self._token: str | None = None
        self._user: User | None = None
        self._is_loading = True

    def _key(self, name: str) -> str:
        """Generate Valkey key for one persisted field of this client's session."""
        return f"{self._config.key_prefix}{self._client_id}:{name}"

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_loading(self) -> bool:
        """True until load() has run once."""
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def current_token(self) -> str | None:
        """Bearer token provider for EventHubClient."""
        return self._token

    def require_user(self) -> User:
        """Return the logged-in user. Raises NotAuthenticatedError if none."""
        if self._user is None:
            raise NotAuthenticatedError("Login required")
        return self._user

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> User | None:
        """
        Read the persisted session (startup, or after another process changed it).

        Both token and user must be present. Undecodable user data clears the
        persisted session rather than failing.
        """
        token = self._valkey.get(self._key(self.TOKEN_KEY))

        try:
            user = self._read_user()
        except SessionCorruptedError as e:
            logger.error(f"Discarding corrupted session for client {self._client_id}: {e}")
            self._clear()
            user = None

        if token and user is not None:
            self._token = token
            self._user = user
            logger.info(f"Session loaded for user {user.id}")
        else:
            self._token = None
            self._user = None

        self._is_loading = False
        return self._user

    def login(self, token: str, user: User) -> None:
        """Persist token and user with the configured expiry and make them current."""
        if not token:
            raise ValueError("token is required")

        self._valkey.set_many(
            {
                self._key(self.TOKEN_KEY): token,
                self._key(self.USER_KEY): user.model_dump_json(by_alias=True),
            },
            expire_seconds=self._config.session_expiry_seconds,
        )
        self._token = token
        self._user = user
        self._is_loading = False
        logger.info(f"User {user.id} logged in")

    def logout(self) -> None:
        """
        Clear the persisted session and in-memory state.

        Safe to call when already logged out.
        """
        user_id = self._user.id if self._user else None
        self._clear()
        if user_id:
            logger.info(f"User {user_id} logged out")

    def update_user(self, user: User) -> None:
        """Replace the cached user (e.g. refreshed points balance), keeping the token."""
        if self._token is None:
            raise NotAuthenticatedError("Cannot update user without a session")
        self._valkey.set_json(
            self._key(self.USER_KEY),
            user.model_dump(mode="json", by_alias=True),
            expire_seconds=self._config.session_expiry_seconds,
        )
        self._user = user

    def _clear(self) -> None:
        self._valkey.delete(self._key(self.TOKEN_KEY), self._key(self.USER_KEY))
        self._token = None
        self._user = None

    def _read_user(self) -> User | None:
        """Persisted user, or None if absent. Raises SessionCorruptedError if undecodable."""
        try:
            data = self._valkey.get_json(self._key(self.USER_KEY))
        except ValueError as e:
            raise SessionCorruptedError(str(e))

        if data is None:
            return None

        try:
            return User.model_validate(data)
        except ValidationError as e:
            raise SessionCorruptedError(str(e))
