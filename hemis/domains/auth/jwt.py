# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management for the legacy OAuth2 endpoint.

Tokens are signed with python-jose. The access token lifetime equals
the ``expires_in`` value reported to CUBA clients; refresh tokens live
``refresh_token_expire_days``.

Example:
    >>> settings = get_settings()
    >>> jwt_manager = JWTManager(settings.jwt, settings.legacy_oauth)
    >>> tokens = jwt_manager.create_token_pair(user_id="...", username="otm001")
    >>> claims = jwt_manager.decode_token(tokens.access_token, expected_type="access")
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Literal
from uuid import UUID

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from hemis.core.config.settings import JWTSettings, LegacyOAuthSettings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (user ID).
        username: Login of the user.
        university: University code the account belongs to.
        roles: Role codes.
        type: Token type (access or refresh).
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID, used for revocation.
    """

    sub: str
    username: str
    university: str | None = None
    roles: list[str] = []
    type: Literal["access", "refresh"]
    exp: int
    iat: int
    jti: str


class TokenPair(BaseModel):
    """Access and refresh token pair.

    Attributes:
        access_token: JWT access token string.
        refresh_token: JWT refresh token string.
        expires_in: Access token lifetime in seconds.
        refresh_expires_in: Refresh token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    expires_in: int
    refresh_expires_in: int


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """JWT token creation and validation manager.

    Attributes:
        _settings: JWT signing settings.
        _oauth: Legacy OAuth settings (lifetimes).
    """

    def __init__(self, settings: JWTSettings, oauth: LegacyOAuthSettings) -> None:
        self._settings = settings
        self._oauth = oauth

    @property
    def access_lifetime(self) -> int:
        return self._oauth.expires_in

    @property
    def refresh_lifetime(self) -> int:
        return self._oauth.refresh_token_expire_days * 24 * 60 * 60

    def _encode(self, payload: dict) -> str:
        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def _claims(
        self,
        token_type: Literal["access", "refresh"],
        lifetime: int,
        user_id: str | UUID,
        username: str,
        university: str | None,
        roles: list[str] | None,
    ) -> dict:
        now = datetime.now(timezone.utc)
        return {
            "iss": self._settings.issuer,
            "sub": str(user_id),
            "username": username,
            "university": university,
            "roles": roles or [],
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

    def create_token_pair(
        self,
        user_id: str | UUID,
        username: str,
        university: str | None = None,
        roles: list[str] | None = None,
    ) -> TokenPair:
        """Create an access and refresh token pair.

        Args:
            user_id: User identifier.
            username: Login.
            university: University code of the account.
            roles: Role codes.

        Returns:
            TokenPair with access and refresh tokens.
        """
        access = self._claims("access", self.access_lifetime, user_id, username, university, roles)
        refresh = self._claims(
            "refresh", self.refresh_lifetime, user_id, username, university, roles
        )
        return TokenPair(
            access_token=self._encode(access),
            refresh_token=self._encode(refresh),
            expires_in=self.access_lifetime,
            refresh_expires_in=self.refresh_lifetime,
        )

    def decode_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.
            expected_type: Expected token type (access or refresh).

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or of the wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired") from None
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}") from e

        if expected_type and payload.get("type") != expected_type:
            raise InvalidTokenError(f"Expected {expected_type} token, got {payload.get('type')}")

        try:
            return TokenPayload.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError("Token is missing required claims") from e

    def verify_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> bool:
        """Verify if a token is valid."""
        try:
            self.decode_token(token, expected_type)
            return True
        except JWTError:
            return False
