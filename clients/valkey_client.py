"""
Valkey (Redis-compatible) storage for persisted auth sessions.

Wraps redis-py. Connection problems surface as redis exceptions; nothing
here substitutes a default for a failed read.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    Key/value access to Valkey with JSON helpers.

    Usage:
        valkey = ValkeyClient("redis://localhost:6379/0")
        valkey.set_many({"session:kiosk-1:auth_token": token, ...}, expire_seconds=604800)
        user = valkey.get_json("session:kiosk-1:user_data")  # None if missing
    """

    def __init__(self, url: str):
        """
        Connect and ping.

        Args:
            url: Redis-compatible URL, e.g. redis://localhost:6379/0

        Raises:
            redis.ConnectionError: Server unreachable
        """
        self._client = redis.from_url(url, decode_responses=True)
        self._client.ping()
        logger.info("Connected to Valkey")

    def ping(self) -> bool:
        self._client.ping()
        return True

    def get(self, key: str) -> str | None:
        """Stored string, or None for a missing key."""
        return self._client.get(key)

    def set(self, key: str, value: str, expire_seconds: int | None = None) -> None:
        if expire_seconds is None:
            self._client.set(key, value)
        else:
            self._client.setex(key, expire_seconds, value)

    def set_many(self, values: dict[str, str], expire_seconds: int | None = None) -> None:
        """Write several keys in a single MULTI/EXEC transaction."""
        with self._client.pipeline(transaction=True) as pipe:
            for key, value in values.items():
                if expire_seconds is None:
                    pipe.set(key, value)
                else:
                    pipe.setex(key, expire_seconds, value)
            pipe.execute()

    def delete(self, *keys: str) -> int:
        """Remove keys; returns how many existed."""
        if not keys:
            return 0
        return self._client.delete(*keys)

    def set_json(self, key: str, value: dict | list, expire_seconds: int | None = None) -> None:
        self.set(key, json.dumps(value), expire_seconds)

    def get_json(self, key: str) -> dict | list | None:
        """
        Decoded JSON value, or None for a missing key.

        Raises:
            ValueError: Stored value is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}")

    def close(self) -> None:
        self._client.close()
        logger.info("Valkey connection closed")
