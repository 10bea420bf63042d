# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the authentication middleware.

Tests the middleware in isolation from the database.
"""

import time
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from jose import jwt
from pydantic import SecretStr

from hemis.api.middleware.auth import AuthMiddleware, get_current_user
from hemis.domains.auth.jwt import JWTManager
from hemis.infrastructure.cache import RedisError

PROTECTED = "/app/rest/v2/entities/hemishe_EStudent"


@pytest.fixture
def jwt_settings() -> MagicMock:
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.issuer = "hemis"
    return settings


@pytest.fixture
def oauth_settings() -> MagicMock:
    settings = MagicMock()
    settings.expires_in = 2591998
    settings.refresh_token_expire_days = 30
    return settings


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock, oauth_settings: MagicMock) -> JWTManager:
    return JWTManager(jwt_settings, oauth_settings)


@pytest.fixture
def mock_settings(jwt_settings: MagicMock, oauth_settings: MagicMock):
    with patch("hemis.api.middleware.auth.get_settings") as mocked:
        mocked.return_value.jwt = jwt_settings
        mocked.return_value.legacy_oauth = oauth_settings
        yield mocked


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(AuthMiddleware)

    @app.get(PROTECTED)
    async def protected(request: Request) -> dict:
        user = get_current_user(request)
        return {
            "user_id": user.id if user else None,
            "university": user.university if user else None,
        }

    @app.post("/app/rest/v2/oauth/token")
    async def token(request: Request) -> dict:
        return {"user": get_current_user(request)}

    return app


class TestAuthMiddleware:
    def test_public_path_bypasses_auth(self, mock_settings) -> None:
        client = TestClient(build_app())

        response = client.post(
            "/app/rest/v2/oauth/token", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 200
        assert response.json() == {"user": None}

    @patch("hemis.api.middleware.auth.get_redis")
    def test_valid_token_sets_user(self, mock_get_redis, mock_settings, jwt_manager) -> None:
        redis = MagicMock()
        redis.exists = AsyncMock(return_value=False)
        mock_get_redis.return_value = redis
        user_id = str(uuid4())
        tokens = jwt_manager.create_token_pair(
            user_id=user_id, username="otm001", university="00001"
        )

        client = TestClient(build_app())
        response = client.get(
            PROTECTED, headers={"Authorization": f"Bearer {tokens.access_token}"}
        )

        assert response.json() == {"user_id": user_id, "university": "00001"}

    @patch("hemis.api.middleware.auth.get_redis")
    def test_revoked_token_is_ignored(self, mock_get_redis, mock_settings, jwt_manager) -> None:
        redis = MagicMock()
        redis.exists = AsyncMock(return_value=True)
        mock_get_redis.return_value = redis
        tokens = jwt_manager.create_token_pair(user_id=str(uuid4()), username="otm001")

        client = TestClient(build_app())
        response = client.get(
            PROTECTED, headers={"Authorization": f"Bearer {tokens.access_token}"}
        )

        assert response.json()["user_id"] is None

    @patch("hemis.api.middleware.auth.get_redis")
    def test_redis_outage_fails_open(self, mock_get_redis, mock_settings, jwt_manager) -> None:
        mock_get_redis.side_effect = RedisError("Redis not initialized")
        user_id = str(uuid4())
        tokens = jwt_manager.create_token_pair(user_id=user_id, username="otm001")

        client = TestClient(build_app())
        response = client.get(
            PROTECTED, headers={"Authorization": f"Bearer {tokens.access_token}"}
        )

        assert response.json()["user_id"] == user_id

    def test_refresh_token_is_not_accepted(self, mock_settings, jwt_manager) -> None:
        tokens = jwt_manager.create_token_pair(user_id=str(uuid4()), username="otm001")

        client = TestClient(build_app())
        response = client.get(
            PROTECTED, headers={"Authorization": f"Bearer {tokens.refresh_token}"}
        )

        assert response.json()["user_id"] is None

    def test_expired_token(self, mock_settings) -> None:
        now = int(time.time())
        token = jwt.encode(
            {
                "iss": "hemis",
                "sub": "u",
                "username": "otm001",
                "type": "access",
                "iat": now - 120,
                "exp": now - 60,
                "jti": "j",
            },
            "test-secret-key-for-jwt-testing",
            algorithm="HS256",
        )

        client = TestClient(build_app())
        response = client.get(PROTECTED, headers={"Authorization": f"Bearer {token}"})

        assert response.json()["user_id"] is None

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Token abc def"])
    def test_malformed_header(self, mock_settings, header) -> None:
        client = TestClient(build_app())

        response = client.get(PROTECTED, headers={"Authorization": header})

        assert response.json()["user_id"] is None
