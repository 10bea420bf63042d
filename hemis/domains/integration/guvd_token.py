# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""OAuth2 token for the GUVD (interior ministry) APIs.

The token is obtained with the password grant and cached in Redis at
``guvd:oauth2:token`` so all workers share it.
"""

import logging

import httpx

from hemis.core.config.settings import GuvdSettings
from hemis.infrastructure.cache import RedisClient, RedisError

logger = logging.getLogger(__name__)

TOKEN_KEY = "guvd:oauth2:token"

# Seconds subtracted from the upstream lifetime before caching.
EXPIRY_MARGIN = 60


class GuvdTokenService:
    """Fetch and cache the GUVD access token.

    Attributes:
        _client: Shared httpx client.
        _redis: Redis client; caching is skipped when None.
        _settings: GUVD settings.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        redis: RedisClient | None,
        settings: GuvdSettings,
    ) -> None:
        self._client = client
        self._redis = redis
        self._settings = settings

    async def get_token(self) -> str | None:
        """Return a cached token or fetch a new one.

        Returns:
            Access token, or None if GUVD could not be reached.
        """
        cached = await self._cached()
        if cached:
            return cached

        logger.info("Fetching new GUVD OAuth2 token from %s", self._settings.token_url)
        try:
            response = await self._client.post(
                self._settings.token_url,
                data={
                    "grant_type": "password",
                    "username": self._settings.username,
                    "password": self._settings.password.get_secret_value(),
                },
                auth=(
                    self._settings.client_id,
                    self._settings.client_secret.get_secret_value(),
                ),
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("GUVD OAuth2 request failed: %s", str(e))
            return None

        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            logger.error("GUVD OAuth2 response missing access_token")
            return None

        ttl = self._settings.token_cache_seconds
        expires_in = body.get("expires_in")
        if isinstance(expires_in, (int, float)) and expires_in - EXPIRY_MARGIN < ttl:
            ttl = max(int(expires_in) - EXPIRY_MARGIN, 1)

        await self._store(token, ttl)
        logger.info("GUVD OAuth2 token cached for %d seconds", ttl)
        return token

    async def invalidate_token(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        if self._redis is None:
            return
        try:
            await self._redis.delete(TOKEN_KEY)
            logger.info("GUVD token cache invalidated")
        except RedisError as e:
            logger.warning("Failed to invalidate GUVD token: %s", str(e))

    async def _cached(self) -> str | None:
        if self._redis is None:
            return None
        try:
            value = await self._redis.get(TOKEN_KEY)
        except RedisError as e:
            logger.warning("GUVD token cache unavailable: %s", str(e))
            return None
        return str(value) if value else None

    async def _store(self, token: str, ttl: int) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(TOKEN_KEY, token, expire_seconds=ttl)
        except RedisError as e:
            logger.warning("Failed to cache GUVD token: %s", str(e))
