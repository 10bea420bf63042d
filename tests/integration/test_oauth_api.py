# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the legacy OAuth2 token endpoint."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from hemis.api.dependencies import get_auth_service
from hemis.api.rest.oauth import parse_basic_auth
from hemis.domains.auth.jwt import TokenPair
from hemis.domains.auth.service import InvalidClientError, InvalidGrantError

TOKEN_URL = "/app/rest/v2/oauth/token"


def basic(client_id: str, secret: str) -> dict[str, str]:
    encoded = base64.b64encode(f"{client_id}:{secret}".encode()).decode()
    return {"Authorization": f"Basic {encoded}"}


@pytest.fixture
def auth_service(app) -> MagicMock:
    service = MagicMock()
    service.verify_client = MagicMock()
    service.password_grant = AsyncMock(
        return_value=TokenPair(
            access_token="access.jwt",
            refresh_token="refresh.jwt",
            expires_in=2591998,
            refresh_expires_in=2592000,
        )
    )
    service.refresh_grant = AsyncMock(return_value=service.password_grant.return_value)
    service.revoke = AsyncMock(return_value=True)
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


class TestParseBasicAuth:
    def test_valid(self) -> None:
        assert parse_basic_auth(basic("client", "se:cret")["Authorization"]) == (
            "client",
            "se:cret",
        )

    @pytest.mark.parametrize("header", [None, "", "Bearer abc", "Basic !!!", "Basic Y2xpZW50"])
    def test_invalid(self, header) -> None:
        assert parse_basic_auth(header) == (None, None)


class TestTokenEndpoint:
    def test_password_grant(self, client, auth_service) -> None:
        response = client.post(
            TOKEN_URL,
            data={"grant_type": "password", "username": "otm001", "password": "pw"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 200
        assert response.json() == {
            "access_token": "access.jwt",
            "token_type": "bearer",
            "refresh_token": "refresh.jwt",
            "expires_in": 2591998,
            "scope": "rest-api",
        }
        assert response.headers["cache-control"] == "no-store"
        auth_service.verify_client.assert_called_once_with("client", "secret")
        auth_service.password_grant.assert_awaited_once_with("otm001", "pw")

    def test_legacy_path(self, client, auth_service) -> None:
        response = client.post(
            "/app/rest/oauth/token",
            data={"grant_type": "password", "username": "otm001", "password": "pw"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 200

    def test_refresh_grant(self, client, auth_service) -> None:
        response = client.post(
            TOKEN_URL,
            data={"grant_type": "refresh_token", "refresh_token": "refresh.jwt"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 200
        auth_service.refresh_grant.assert_awaited_once_with("refresh.jwt")

    def test_invalid_client(self, client, auth_service) -> None:
        auth_service.verify_client.side_effect = InvalidClientError("Bad client credentials")

        response = client.post(TOKEN_URL, data={"grant_type": "password"})

        assert response.status_code == 401
        assert response.json() == {
            "error": "invalid_client",
            "error_description": "Bad client credentials",
        }
        assert response.headers["www-authenticate"] == "Basic"

    def test_invalid_grant(self, client, auth_service) -> None:
        auth_service.password_grant.side_effect = InvalidGrantError(
            "Invalid username or password"
        )

        response = client.post(
            TOKEN_URL,
            data={"grant_type": "password", "username": "otm001", "password": "bad"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_grant"

    def test_unsupported_grant_type(self, client, auth_service) -> None:
        response = client.post(
            TOKEN_URL,
            data={"grant_type": "client_credentials"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "unsupported_grant_type"

    def test_unexpected_error(self, client, auth_service) -> None:
        auth_service.password_grant.side_effect = RuntimeError("db down")

        response = client.post(
            TOKEN_URL,
            data={"grant_type": "password", "username": "otm001", "password": "pw"},
            headers=basic("client", "secret"),
        )

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"


class TestRevokeEndpoint:
    def test_always_ok(self, client, auth_service) -> None:
        auth_service.revoke.return_value = False

        response = client.post("/app/rest/v2/oauth/revoke", data={"token": "whatever"})

        assert response.status_code == 200
        assert response.json() == {}
        auth_service.revoke.assert_awaited_once_with("whatever")
