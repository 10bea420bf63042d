# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the health endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

from hemis import __version__
from hemis.infrastructure.cache import RedisError


def redis_mock(ping_result: bool = True) -> MagicMock:
    redis = MagicMock()
    redis.ping = AsyncMock(return_value=ping_result)
    return redis


class TestHealth:
    @patch("hemis.api.routes.health.get_redis")
    @patch("hemis.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_healthy(self, mock_db_check, mock_get_redis, client) -> None:
        mock_db_check.return_value = True
        mock_get_redis.return_value = redis_mock()

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__
        assert body["components"]["database"]["status"] == "healthy"
        assert body["components"]["redis"]["status"] == "healthy"

    @patch("hemis.api.routes.health.get_redis")
    @patch("hemis.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_redis_down_is_degraded(self, mock_db_check, mock_get_redis, client) -> None:
        mock_db_check.return_value = True
        mock_get_redis.side_effect = RedisError("Redis not initialized")

        response = client.get("/health")

        assert response.json()["status"] == "degraded"
        assert response.json()["components"]["redis"]["message"] == "Redis not initialized"

    @patch("hemis.api.routes.health.get_redis")
    @patch("hemis.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_database_down_is_unhealthy(self, mock_db_check, mock_get_redis, client) -> None:
        mock_db_check.return_value = False
        mock_get_redis.return_value = redis_mock()

        response = client.get("/health")

        assert response.json()["status"] == "unhealthy"

    def test_no_auth_needed(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200


class TestReadiness:
    @patch("hemis.api.routes.health.get_redis")
    @patch("hemis.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_ready(self, mock_db_check, mock_get_redis, client) -> None:
        mock_db_check.return_value = True
        mock_get_redis.return_value = redis_mock()

        response = client.get("/ready")

        assert response.json()["ready"] is True

    @patch("hemis.api.routes.health.get_redis")
    @patch("hemis.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_not_ready(self, mock_db_check, mock_get_redis, client) -> None:
        mock_db_check.return_value = True
        mock_get_redis.return_value = redis_mock(ping_result=False)

        response = client.get("/ready")

        assert response.json()["ready"] is False
        assert response.json()["checks"]["redis"]["status"] == "unhealthy"
