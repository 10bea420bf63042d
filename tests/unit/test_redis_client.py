# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the Redis client wrapper."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from hemis.infrastructure.cache import redis_client as module
from hemis.infrastructure.cache.redis_client import RedisClient, RedisError


@pytest.fixture
def backend() -> MagicMock:
    redis = MagicMock()
    redis.set = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.delete = AsyncMock(return_value=1)
    redis.exists = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)
    return redis


@pytest.fixture
def client(backend: MagicMock) -> RedisClient:
    client = RedisClient(MagicMock())
    client._redis = backend
    return client


class TestSerialization:
    def test_strings_are_stored_verbatim(self) -> None:
        assert RedisClient._serialize("12345") == "12345"

    def test_structures_are_json(self) -> None:
        assert RedisClient._serialize({"a": 1}) == '{"a": 1}'

    def test_non_json_text_comes_back_as_string(self) -> None:
        assert RedisClient._deserialize("abc") == "abc"
        assert RedisClient._deserialize("12345") == 12345
        assert RedisClient._deserialize(None) is None


class TestOperations:
    @pytest.mark.asyncio
    async def test_set_passes_expiry(self, client: RedisClient, backend: MagicMock) -> None:
        await client.set("captcha:x", "42", expire_seconds=300)

        backend.set.assert_awaited_once_with("captcha:x", "42", ex=300)

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, client: RedisClient, backend: MagicMock) -> None:
        backend.get.return_value = '{"access_token": "t"}'

        assert await client.get("guvd:oauth2:token") == {"access_token": "t"}

    @pytest.mark.asyncio
    async def test_delete_and_exists(self, client: RedisClient) -> None:
        assert await client.delete("k") is True
        assert await client.exists("k") is False

    @pytest.mark.asyncio
    async def test_driver_errors_are_wrapped(
        self, client: RedisClient, backend: MagicMock
    ) -> None:
        backend.get.side_effect = RedisConnectionError("down")

        with pytest.raises(RedisError) as exc_info:
            await client.get("k")

        assert "k" in str(exc_info.value)
        assert isinstance(exc_info.value.original_error, RedisConnectionError)

    @pytest.mark.asyncio
    async def test_ping_reports_failure(self, client: RedisClient, backend: MagicMock) -> None:
        backend.ping.side_effect = RedisConnectionError("down")

        assert await client.ping() is False

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        client = RedisClient(MagicMock())

        with pytest.raises(RedisError):
            await client.get("k")
        assert await client.ping() is False


class TestGlobalClient:
    def test_get_redis_before_init(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(module, "_redis_client", None)

        with pytest.raises(RedisError):
            module.get_redis()

    @pytest.mark.asyncio
    async def test_close_resets_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        existing = MagicMock()
        existing.close = AsyncMock()
        monkeypatch.setattr(module, "_redis_client", existing)

        await module.close_redis()

        existing.close.assert_awaited_once()
        assert module._redis_client is None
