# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the document stores.

Tests:
- InMemoryDocumentStore
- RedisDocumentStore over a mocked redis-py client
"""

import json
from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

from learnhub.core.config import Settings
from learnhub.domains.profile.redis_store import RedisDocumentStore
from learnhub.domains.profile.store import InMemoryDocumentStore, StoreError
from learnhub.infrastructure.cache import RedisClient, RedisError

REDIS_MODULE = "learnhub.infrastructure.cache.redis_client"


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock redis-py client."""
    return AsyncMock()


@pytest_asyncio.fixture
async def redis_client(settings: Settings, mock_redis: AsyncMock) -> AsyncIterator[RedisClient]:
    """Create a RedisClient connected to the mock."""
    pool_cls = MagicMock()
    pool_cls.from_url.return_value = AsyncMock()
    with patch(f"{REDIS_MODULE}.ConnectionPool", pool_cls), patch(
        f"{REDIS_MODULE}.Redis", return_value=mock_redis
    ):
        client = RedisClient(settings)
        await client.connect()
    yield client


class TestInMemoryDocumentStore:
    """Tests for InMemoryDocumentStore."""

    @pytest.mark.asyncio
    async def test_missing_document_returns_none(self, store: InMemoryDocumentStore) -> None:
        """Unknown ids read as None."""
        assert await store.get("users", "nobody") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, store: InMemoryDocumentStore) -> None:
        """Written documents can be read back."""
        await store.set("users", "u1", {"id": "u1", "role": "user"})

        assert await store.get("users", "u1") == {"id": "u1", "role": "user"}
        assert store.count("users") == 1

    @pytest.mark.asyncio
    async def test_collections_are_separate(self, store: InMemoryDocumentStore) -> None:
        """The same id in another collection is a different document."""
        await store.set("users", "u1", {"id": "u1"})

        assert await store.get("courses", "u1") is None
        assert store.count("courses") == 0

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, store: InMemoryDocumentStore) -> None:
        """Mutating a read or written dict does not touch stored state."""
        document = {"id": "u1", "enrolledCourses": ["c1"]}
        await store.set("users", "u1", document)
        document["enrolledCourses"].append("c2")

        read = await store.get("users", "u1")
        assert read is not None
        read["enrolledCourses"].append("c3")

        assert await store.get("users", "u1") == {"id": "u1", "enrolledCourses": ["c1"]}


class TestRedisDocumentStore:
    """Tests for RedisDocumentStore."""

    @pytest.mark.asyncio
    async def test_get_decodes_json_document(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """Documents are read from namespaced keys and decoded."""
        mock_redis.get.return_value = json.dumps({"id": "u1", "role": "admin"})
        store = RedisDocumentStore(redis_client)

        document = await store.get("users", "u1")

        assert document == {"id": "u1", "role": "admin"}
        mock_redis.get.assert_awaited_once_with("learnhub:doc:users:u1")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """Missing keys read as None."""
        mock_redis.get.return_value = None

        assert await RedisDocumentStore(redis_client).get("users", "u1") is None

    @pytest.mark.asyncio
    async def test_set_encodes_json_document(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """Documents are written as JSON without expiry."""
        await RedisDocumentStore(redis_client).set("users", "u1", {"id": "u1"})

        mock_redis.set.assert_awaited_once_with(
            "learnhub:doc:users:u1",
            json.dumps({"id": "u1"}),
        )

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_store_error(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """redis-py errors surface as StoreError with the cause attached."""
        mock_redis.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreError) as exc_info:
            await RedisDocumentStore(redis_client).get("users", "u1")

        assert isinstance(exc_info.value.original_error, RedisError)

    @pytest.mark.asyncio
    async def test_write_failure_becomes_store_error(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """Failed writes surface as StoreError."""
        mock_redis.set.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreError):
            await RedisDocumentStore(redis_client).set("users", "u1", {"id": "u1"})

    @pytest.mark.asyncio
    async def test_non_object_document_is_rejected(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """A JSON value that is not an object is not a document."""
        mock_redis.get.return_value = json.dumps(["not", "a", "document"])

        with pytest.raises(StoreError, match="not an object"):
            await RedisDocumentStore(redis_client).get("users", "u1")

    @pytest.mark.asyncio
    async def test_corrupt_value_is_rejected(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """Values that are not JSON raise StoreError."""
        mock_redis.get.return_value = "{not json"

        with pytest.raises(StoreError):
            await RedisDocumentStore(redis_client).get("users", "u1")


class TestRedisClient:
    """Tests for RedisClient."""

    @pytest.mark.asyncio
    async def test_unconnected_client_raises(self, settings: Settings) -> None:
        """Operations before connect() raise RedisError."""
        client = RedisClient(settings)

        with pytest.raises(RedisError, match="not connected"):
            await client.get_json("key")

    @pytest.mark.asyncio
    async def test_connect_failure_raises(self, settings: Settings, mock_redis: AsyncMock) -> None:
        """An unreachable server fails connect() with RedisError."""
        mock_redis.ping.side_effect = RedisConnectionError("connection refused")

        with patch(f"{REDIS_MODULE}.ConnectionPool"), patch(f"{REDIS_MODULE}.Redis", return_value=mock_redis):
            with pytest.raises(RedisError, match="Failed to connect"):
                await RedisClient(settings).connect()

    @pytest.mark.asyncio
    async def test_ping_reports_failure_as_false(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """ping() never raises."""
        mock_redis.ping.side_effect = RedisConnectionError("down")

        assert await redis_client.ping() is False

    @pytest.mark.asyncio
    async def test_ping_success(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """ping() is True when Redis answers."""
        mock_redis.ping.return_value = True

        assert await redis_client.ping() is True

    @pytest.mark.asyncio
    async def test_close_releases_client(
        self,
        redis_client: RedisClient,
        mock_redis: AsyncMock,
    ) -> None:
        """close() closes the wrapped client."""
        await redis_client.close()

        mock_redis.aclose.assert_awaited_once()
        with pytest.raises(RedisError):
            await redis_client.get_json("key")
