# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Async Redis client wrapper.

Wraps redis-py's asyncio client with connection pooling, a key namespace
and JSON (de)serialization. The application creates one client in its
lifespan handler and keeps it on ``app.state``.

Example:
    client = RedisClient(settings)
    await client.connect()
    await client.set_json("doc:users:abc", {"role": "user"})
    data = await client.get_json("doc:users:abc")
    await client.close()
"""

import json
from typing import TYPE_CHECKING, Any, Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError as BaseRedisError

if TYPE_CHECKING:
    from learnhub.core.config.settings import Settings


class RedisError(Exception):
    """Exception raised for Redis operation failures.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying Redis error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class RedisClient:
    """Async Redis client with namespaced keys and JSON values.

    Attributes:
        namespace: Prefix added to every key.
    """

    def __init__(self, settings: "Settings", namespace: str = "learnhub") -> None:
        self._settings = settings
        self.namespace = namespace
        self._pool: Optional[ConnectionPool] = None
        self._redis: Optional[Redis] = None

    async def connect(self) -> None:
        """Create the connection pool and verify the connection.

        Raises:
            RedisError: If connection fails.
        """
        try:
            self._pool = ConnectionPool.from_url(
                self._settings.redis.url,
                max_connections=self._settings.redis.max_connections,
                decode_responses=True,
            )
            self._redis = Redis(connection_pool=self._pool)
            await self._redis.ping()
        except BaseRedisError as e:
            raise RedisError("Failed to connect to Redis", e) from e

    async def close(self) -> None:
        """Close the connection pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

        if self._pool is not None:
            await self._pool.disconnect()
            self._pool = None

    def _ensure_connected(self) -> Redis:
        if self._redis is None:
            raise RedisError("Redis client not connected. Call connect() first.")
        return self._redis

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get_json(self, key: str) -> Any:
        """Get and decode a JSON value.

        Returns:
            The decoded value, or None if the key does not exist.

        Raises:
            RedisError: If the operation fails or the value is not JSON.
        """
        redis = self._ensure_connected()
        try:
            value = await redis.get(self._key(key))
        except BaseRedisError as e:
            raise RedisError(f"Failed to get key: {key}", e) from e

        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise RedisError(f"Value at {key} is not JSON", e) from e

    async def set_json(self, key: str, value: Any) -> None:
        """Encode and store a JSON value.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            serialized = json.dumps(value, ensure_ascii=False, default=str)
            await redis.set(self._key(key), serialized)
        except BaseRedisError as e:
            raise RedisError(f"Failed to set key: {key}", e) from e

    async def ping(self) -> bool:
        """Check that Redis answers."""
        try:
            return bool(await self._ensure_connected().ping())
        except (BaseRedisError, RedisError):
            return False
