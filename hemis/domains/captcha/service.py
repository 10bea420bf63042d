# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Captcha generation and one-time validation.

The solution is stored at ``captcha:{captchaId}`` for five minutes and
removed as soon as it has been validated successfully.

Example:
    >>> service = CaptchaService(get_redis(), settings.captcha)
    >>> captcha = await service.generate_numeric()
    >>> await service.validate(captcha["captchaId"], "12345")
    False
"""

import logging
import secrets
import uuid
from typing import Any

from hemis.core.config.settings import CaptchaSettings
from hemis.domains.captcha.image import render_captcha
from hemis.infrastructure.cache import RedisClient, RedisError

logger = logging.getLogger(__name__)

CAPTCHA_PREFIX = "captcha:"


def captcha_key(captcha_id: str) -> str:
    return f"{CAPTCHA_PREFIX}{captcha_id}"


class CaptchaService:
    """Create captcha challenges and check answers.

    Attributes:
        _redis: Redis client holding the solutions; None while Redis is down.
        _settings: Captcha settings.
    """

    def __init__(self, redis: RedisClient | None, settings: CaptchaSettings) -> None:
        self._redis = redis
        self._settings = settings

    async def generate_numeric(self) -> dict[str, Any]:
        """Generate a numeric captcha of ``settings.length`` digits."""
        value = "".join(str(secrets.randbelow(10)) for _ in range(self._settings.length))
        return await self._create(value, value, "numeric")

    async def generate_arithmetic(self) -> dict[str, Any]:
        """Generate an "a + b" or "a - b" captcha with a non-negative answer."""
        a = secrets.randbelow(50) + 1
        b = secrets.randbelow(50) + 1
        if secrets.randbelow(2):
            a, b = max(a, b), min(a, b)
            expression, answer = f"{a} - {b}", a - b
        else:
            expression, answer = f"{a} + {b}", a + b
        return await self._create(f"{expression} =", str(answer), "arithmetic")

    async def _create(self, text: str, answer: str, captcha_type: str) -> dict[str, Any]:
        if self._redis is None:
            raise RedisError("Redis not available for captcha storage")
        captcha_id = str(uuid.uuid4())
        image = render_captcha(text, self._settings.width, self._settings.height)

        await self._redis.set(
            captcha_key(captcha_id), answer, expire_seconds=self._settings.ttl_seconds
        )

        if self._settings.return_value:
            logger.warning("Captcha value returned in response (CAPTCHA_RETURN_VALUE is set)")

        logger.info("Generated %s captcha: captchaId=%s", captcha_type, captcha_id)
        return {
            "id": str(uuid.uuid4()),
            "image": image,
            "captchaId": captcha_id,
            "captchaType": captcha_type,
            "captchaValue": answer if self._settings.return_value else None,
            "expiresIn": self._settings.ttl_seconds,
        }

    async def validate(self, captcha_id: str | None, value: str | None) -> bool:
        """Check an answer; a correct answer consumes the captcha.

        Args:
            captcha_id: Id returned by generation.
            value: Answer typed by the user.

        Returns:
            True if the answer matches a live captcha. False when the
            solution store cannot be reached.
        """
        if not captcha_id or value is None or not str(value).strip():
            logger.warning("Captcha validation failed: missing parameters")
            return False

        if self._redis is None:
            logger.warning("Captcha validation failed: Redis not available")
            return False

        key = captcha_key(captcha_id)
        try:
            stored = await self._redis.get(key)
        except RedisError as e:
            logger.warning("Captcha validation failed: %s", str(e))
            return False
        if stored is None:
            logger.warning("Captcha validation failed: not found or expired (%s)", captcha_id)
            return False

        if str(stored) != str(value).strip():
            logger.warning("Captcha validation failed: incorrect value (%s)", captcha_id)
            return False

        try:
            await self._redis.delete(key)
        except RedisError as e:
            logger.warning("Captcha %s could not be consumed: %s", captcha_id, str(e))
            return False
        logger.info("Captcha validated: %s", captcha_id)
        return True
