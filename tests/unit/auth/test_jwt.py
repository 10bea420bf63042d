# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for JWT token utilities.

Tests the JWTManager class and token operations.
"""

import time
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import SecretStr

from hemis.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPair,
)

SECRET = "test-secret-key-for-jwt-testing"


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr(SECRET)
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
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings, oauth_settings)


class TestJWTManager:
    """Tests for JWTManager class."""

    def test_create_token_pair_returns_valid_tokens(self, jwt_manager: JWTManager) -> None:
        result = jwt_manager.create_token_pair(
            user_id=uuid4(),
            username="otm001",
            university="00001",
            roles=["university_admin"],
        )

        assert isinstance(result, TokenPair)
        assert result.access_token != result.refresh_token
        assert result.expires_in == 2591998
        assert result.refresh_expires_in == 30 * 24 * 60 * 60

    def test_decode_access_token_claims(self, jwt_manager: JWTManager) -> None:
        user_id = uuid4()
        tokens = jwt_manager.create_token_pair(
            user_id=user_id, username="otm001", university="00001", roles=["admin"]
        )

        payload = jwt_manager.decode_token(tokens.access_token, expected_type="access")

        assert payload.sub == str(user_id)
        assert payload.username == "otm001"
        assert payload.university == "00001"
        assert payload.roles == ["admin"]
        assert payload.type == "access"
        assert payload.exp - payload.iat == 2591998
        assert payload.jti

    def test_each_token_has_unique_jti(self, jwt_manager: JWTManager) -> None:
        tokens = jwt_manager.create_token_pair(user_id=uuid4(), username="u")

        access = jwt_manager.decode_token(tokens.access_token)
        refresh = jwt_manager.decode_token(tokens.refresh_token)

        assert access.jti != refresh.jti

    def test_wrong_token_type_is_rejected(self, jwt_manager: JWTManager) -> None:
        tokens = jwt_manager.create_token_pair(user_id=uuid4(), username="u")

        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token(tokens.refresh_token, expected_type="access")

    def test_expired_token(self, jwt_manager: JWTManager) -> None:
        now = int(time.time())
        token = jwt.encode(
            {
                "iss": "hemis",
                "sub": "x",
                "username": "u",
                "type": "access",
                "iat": now - 100,
                "exp": now - 10,
                "jti": "j",
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            jwt_manager.decode_token(token)

    def test_wrong_issuer_is_rejected(self, jwt_manager: JWTManager) -> None:
        now = int(time.time())
        token = jwt.encode(
            {
                "iss": "someone-else",
                "sub": "x",
                "username": "u",
                "type": "access",
                "iat": now,
                "exp": now + 60,
                "jti": "j",
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token(token)

    def test_missing_claims_are_rejected(self, jwt_manager: JWTManager) -> None:
        now = int(time.time())
        token = jwt.encode(
            {"iss": "hemis", "sub": "x", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token(token)

    def test_tampered_signature(self, jwt_manager: JWTManager) -> None:
        tokens = jwt_manager.create_token_pair(user_id=uuid4(), username="u")

        assert jwt_manager.verify_token(tokens.access_token + "x") is False
        assert jwt_manager.verify_token(tokens.access_token) is True
