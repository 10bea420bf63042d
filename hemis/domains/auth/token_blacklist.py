# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Revoked JWT tracking in Redis.

A revoked token's ``jti`` is stored at ``token:blacklist:{jti}`` until
the token would have expired anyway, so the set never grows unbounded.
"""

import logging
import time

from hemis.domains.auth.jwt import TokenPayload
from hemis.infrastructure.cache import RedisClient

logger = logging.getLogger(__name__)

BLACKLIST_PREFIX = "token:blacklist:"


def blacklist_key(jti: str) -> str:
    return f"{BLACKLIST_PREFIX}{jti}"


class TokenBlacklist:
    """Store and query revoked token ids.

    Attributes:
        _redis: Connected Redis client.
    """

    def __init__(self, redis: RedisClient) -> None:
        self._redis = redis

    async def revoke(self, payload: TokenPayload) -> bool:
        """Blacklist a token until its expiry.

        Args:
            payload: Decoded claims of the token.

        Returns:
            False if the token had already expired and nothing was stored.

        Raises:
            RedisError: If Redis fails.
        """
        remaining = payload.exp - int(time.time())
        if remaining <= 0:
            return False
        await self._redis.set(blacklist_key(payload.jti), payload.type, expire_seconds=remaining)
        logger.info("Token revoked: jti=%s type=%s user=%s", payload.jti, payload.type, payload.username)
        return True

    async def is_revoked(self, jti: str) -> bool:
        """Check whether a token id has been revoked.

        Raises:
            RedisError: If Redis fails.
        """
        return await self._redis.exists(blacklist_key(jti))
