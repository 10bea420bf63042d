# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the userInfo endpoint."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from hemis.api.dependencies import get_auth_service
from hemis.infrastructure.database.models import User


@pytest.fixture
def auth_service(app) -> MagicMock:
    service = MagicMock()
    service.get_user = AsyncMock(return_value=None)
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


class TestUserInfo:
    @pytest.mark.parametrize("path", ["/app/rest/v2/userInfo", "/app/rest/user/info"])
    def test_returns_profile(self, client, auth_headers, auth_service, api_user_id, path) -> None:
        auth_service.get_user.return_value = User(
            id=uuid.UUID(api_user_id),
            username="otm001",
            password="x",
            first_name="Feruz",
            last_name="Karimov",
            language="uz",
        )

        response = client.get(path, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == api_user_id
        assert body["login"] == "otm001"
        assert body["name"] == "Feruz Karimov"
        assert body["language"] == "uz"
        assert body["locale"] == "ru"
        auth_service.get_user.assert_awaited_once_with(api_user_id)

    def test_unknown_user(self, client, auth_headers, auth_service) -> None:
        response = client.get("/app/rest/v2/userInfo", headers=auth_headers)

        assert response.status_code == 401

    def test_without_token(self, client, auth_service) -> None:
        response = client.get("/app/rest/v2/userInfo")

        assert response.status_code == 401
        auth_service.get_user.assert_not_called()
