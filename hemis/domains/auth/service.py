# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Legacy OAuth2 authentication service.

This module provides the LegacyAuthService that backs the CUBA token
endpoint:
- HTTP Basic client verification
- Password grant against ``hemishe_user`` (bcrypt or CUBA hashes)
- Refresh grant with rotation
- Token revocation

Example:
    >>> auth_service = LegacyAuthService(db, jwt_manager, settings.legacy_oauth, blacklist)
    >>> auth_service.verify_client("client", "secret")
    >>> tokens = await auth_service.password_grant("otm001", "password")
"""

import logging
import secrets
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.core.config.settings import LegacyOAuthSettings
from hemis.domains.auth.jwt import JWTError, JWTManager, TokenPair
from hemis.domains.auth.password import PasswordHasher
from hemis.domains.auth.token_blacklist import TokenBlacklist
from hemis.infrastructure.cache import RedisError
from hemis.infrastructure.database.models import User

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for OAuth2 errors.

    Attributes:
        error: RFC 6749 error code.
        description: Value of ``error_description``.
    """

    error = "server_error"

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


class InvalidClientError(AuthenticationError):
    """Raised when HTTP Basic client credentials are missing or wrong."""

    error = "invalid_client"


class InvalidRequestError(AuthenticationError):
    """Raised when required grant parameters are missing."""

    error = "invalid_request"


class InvalidGrantError(AuthenticationError):
    """Raised when user credentials or the refresh token are rejected."""

    error = "invalid_grant"


class UnsupportedGrantTypeError(AuthenticationError):
    """Raised for grant types other than password and refresh_token."""

    error = "unsupported_grant_type"


INVALID_CREDENTIALS = "Invalid username or password"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


class LegacyAuthService:
    """Authentication for the CUBA-compatible token endpoint.

    Attributes:
        _db: Async database session.
        _jwt_manager: JWT token manager.
        _oauth: Client credentials and token lifetimes.
        _blacklist: Revoked token store; revocation is skipped when None.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        oauth: LegacyOAuthSettings,
        blacklist: TokenBlacklist | None = None,
        hasher: PasswordHasher | None = None,
    ) -> None:
        self._db = db
        self._jwt_manager = jwt_manager
        self._oauth = oauth
        self._blacklist = blacklist
        self._hasher = hasher or PasswordHasher()

    def verify_client(self, client_id: str | None, client_secret: str | None) -> None:
        """Check the OAuth2 client credentials.

        Raises:
            InvalidClientError: If the credentials do not match.
        """
        expected_secret = self._oauth.client_secret.get_secret_value()
        if (
            client_id is None
            or client_secret is None
            or not secrets.compare_digest(client_id, self._oauth.client_id)
            or not secrets.compare_digest(client_secret, expected_secret)
        ):
            logger.warning("Invalid OAuth client: %s", client_id)
            raise InvalidClientError("Bad client credentials")

    async def password_grant(self, username: str | None, password: str | None) -> TokenPair:
        """Issue tokens for a username and password.

        Failed attempts are counted on the account. A successful login
        resets the counter and re-hashes CUBA passwords with bcrypt.

        Raises:
            InvalidRequestError: If username or password is missing.
            InvalidGrantError: If the credentials are rejected.
        """
        if not username or not password:
            raise InvalidRequestError("Username and password required")

        user = await self.get_user_by_username(username)
        if user is None:
            logger.info("Login failed, unknown user: %s", username)
            raise InvalidGrantError(INVALID_CREDENTIALS)

        if not user.can_login:
            logger.info("Login refused, account disabled or locked: %s", username)
            raise InvalidGrantError(INVALID_CREDENTIALS)

        if not self._hasher.verify(password, user.password):
            user.failed_attempts = (user.failed_attempts or 0) + 1
            await self._db.commit()
            logger.info("Login failed for %s (attempt %d)", username, user.failed_attempts)
            raise InvalidGrantError(INVALID_CREDENTIALS)

        user.failed_attempts = 0
        if self._hasher.needs_upgrade(user.password):
            user.password = self._hasher.hash(password)
            logger.info("Password hash upgraded to bcrypt for %s", username)
        await self._db.commit()

        logger.info("User logged in: %s", username)
        return self._issue(user)

    async def refresh_grant(self, refresh_token: str | None) -> TokenPair:
        """Exchange a refresh token for a new token pair.

        The presented refresh token is revoked (rotation).

        Raises:
            InvalidRequestError: If the token is missing.
            InvalidGrantError: If the token is invalid, expired or revoked.
        """
        if not refresh_token:
            raise InvalidRequestError("Refresh token required")

        try:
            payload = self._jwt_manager.decode_token(refresh_token, expected_type="refresh")
        except JWTError as e:
            raise InvalidGrantError(INVALID_REFRESH_TOKEN) from e

        if self._blacklist is not None and await self._blacklist.is_revoked(payload.jti):
            logger.warning("Revoked refresh token presented for %s", payload.username)
            raise InvalidGrantError(INVALID_REFRESH_TOKEN)

        user = await self.get_user(payload.sub)
        if user is None or not user.can_login:
            raise InvalidGrantError(INVALID_REFRESH_TOKEN)

        if self._blacklist is not None:
            await self._blacklist.revoke(payload)

        logger.info("Tokens refreshed for user: %s", user.username)
        return self._issue(user)

    async def revoke(self, token: str | None) -> bool:
        """Revoke an access or refresh token.

        Unknown or already invalid tokens are ignored, as RFC 7009 asks.
        A Redis failure is logged and reported as not revoked.

        Returns:
            True if the token was blacklisted.
        """
        if not token or self._blacklist is None:
            return False
        try:
            payload = self._jwt_manager.decode_token(token)
        except JWTError:
            return False
        try:
            return await self._blacklist.revoke(payload)
        except RedisError as e:
            logger.error("Token revocation failed for %s: %s", payload.username, str(e))
            return False

    async def get_user(self, user_id: str | UUID) -> User | None:
        """Load a live user by id; None for unknown or malformed ids."""
        if not isinstance(user_id, UUID):
            try:
                user_id = UUID(str(user_id))
            except ValueError:
                return None
        stmt = select(User).where(User.id == user_id, User.delete_ts.is_(None))
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username, User.delete_ts.is_(None))
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    def _issue(self, user: User) -> TokenPair:
        return self._jwt_manager.create_token_pair(
            user_id=user.id,
            username=user.username,
            university=user.university,
            roles=user.role_list,
        )
