# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for captcha generation and validation."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from hemis.core.config.settings import CaptchaSettings
from hemis.domains.captcha.image import render_captcha
from hemis.domains.captcha.service import CaptchaService, captcha_key
from hemis.infrastructure.cache import RedisError

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def mock_redis() -> MagicMock:
    redis = MagicMock()
    redis.set = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.delete = AsyncMock()
    return redis


def make_service(redis: MagicMock, **overrides) -> CaptchaService:
    return CaptchaService(redis, CaptchaSettings(**overrides))


class TestRenderCaptcha:
    def test_png_data_uri(self) -> None:
        uri = render_captcha("12345", 200, 60)

        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix):]).startswith(PNG_MAGIC)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_numeric(self, mock_redis: MagicMock) -> None:
        service = make_service(mock_redis, length=5, ttl_seconds=300, return_value=True)

        captcha = await service.generate_numeric()

        value = captcha["captchaValue"]
        assert len(value) == 5 and value.isdigit()
        assert captcha["captchaType"] == "numeric"
        assert captcha["expiresIn"] == 300
        mock_redis.set.assert_awaited_once_with(
            captcha_key(captcha["captchaId"]), value, expire_seconds=300
        )

    @pytest.mark.asyncio
    async def test_value_hidden_by_default(self, mock_redis: MagicMock) -> None:
        service = make_service(mock_redis, return_value=False)

        captcha = await service.generate_numeric()

        assert captcha["captchaValue"] is None
        assert captcha["image"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_arithmetic_answer_matches_expression(self, mock_redis: MagicMock) -> None:
        service = make_service(mock_redis)

        for _ in range(20):
            captcha = await service.generate_arithmetic()
            answer = mock_redis.set.call_args.args[1]
            assert captcha["captchaType"] == "arithmetic"
            assert int(answer) >= 0


class TestValidate:
    @pytest.mark.asyncio
    async def test_correct_answer_is_consumed(self, mock_redis: MagicMock) -> None:
        # Redis decodes "12345" as JSON into an int
        mock_redis.get.return_value = 12345
        service = make_service(mock_redis)

        assert await service.validate("abc", " 12345 ") is True
        mock_redis.delete.assert_awaited_once_with("captcha:abc")

    @pytest.mark.asyncio
    async def test_wrong_answer(self, mock_redis: MagicMock) -> None:
        mock_redis.get.return_value = "12345"
        service = make_service(mock_redis)

        assert await service.validate("abc", "54321") is False
        mock_redis.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_expired(self, mock_redis: MagicMock) -> None:
        service = make_service(mock_redis)

        assert await service.validate("abc", "12345") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("captcha_id,value", [(None, "1"), ("abc", None), ("abc", "  ")])
    async def test_missing_parameters(self, mock_redis: MagicMock, captcha_id, value) -> None:
        service = make_service(mock_redis)

        assert await service.validate(captcha_id, value) is False
        mock_redis.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_redis_failure_rejects_answer(self, mock_redis: MagicMock) -> None:
        mock_redis.get.side_effect = RedisError("down")
        service = make_service(mock_redis)

        assert await service.validate("abc", "12345") is False

    @pytest.mark.asyncio
    async def test_unconsumed_captcha_is_rejected(self, mock_redis: MagicMock) -> None:
        mock_redis.get.return_value = "12345"
        mock_redis.delete.side_effect = RedisError("down")
        service = make_service(mock_redis)

        assert await service.validate("abc", "12345") is False

    @pytest.mark.asyncio
    async def test_without_redis(self) -> None:
        service = CaptchaService(None, CaptchaSettings())

        assert await service.validate("abc", "12345") is False
        with pytest.raises(RedisError):
            await service.generate_numeric()
