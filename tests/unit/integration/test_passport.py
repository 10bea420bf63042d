# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the passport and personal data proxies."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from hemis.core.config.settings import CaptchaSettings, PassportSettings, PersonalDataSettings
from hemis.domains.captcha import CaptchaService
from hemis.domains.integration.passport import PassportDataService, PersonalDataService
from hemis.infrastructure.cache import RedisError

PINFL = "31234567890123"


class Upstream:
    """Records requests and replies with a fixed response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def captcha() -> MagicMock:
    service = MagicMock()
    service.validate = AsyncMock(return_value=True)
    return service


@pytest.fixture
def passport_settings() -> PassportSettings:
    return PassportSettings(url="https://passport.test", token="ptoken")


class TestPassportDataService:
    @pytest.mark.asyncio
    async def test_get_data(self, captcha, passport_settings) -> None:
        upstream = Upstream(httpx.Response(200, json={"surname": "ALIYEV"}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data(PINFL, "2020-01-15")

        assert result == {"surname": "ALIYEV", "success": True}
        params = upstream.requests[0].url.params
        assert upstream.requests[0].url.path == "/data"
        assert params["pinfl"] == PINFL
        assert params["given_date"] == "2020-01-15"
        assert params["token"] == "ptoken"
        captcha.validate.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_pinfl(self, captcha, passport_settings) -> None:
        upstream = Upstream(httpx.Response(200, json={}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data(None, None)

        assert result["code"] == "invalid_parameter"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_not_found_becomes_incorrect_data(self, captcha, passport_settings) -> None:
        upstream = Upstream(httpx.Response(200, text="no"))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data(PINFL, "2020-01-15")

        assert result == {
            "success": False,
            "code": "incorrect_data",
            "message": "Incorrect PINFL or given date",
        }

    @pytest.mark.asyncio
    async def test_by_sn_requires_valid_captcha(self, captcha, passport_settings) -> None:
        captcha.validate.return_value = False
        upstream = Upstream(httpx.Response(200, json={}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data_by_sn(PINFL, "AA1234567", "cid", "000")

        assert result == {
            "success": False,
            "code": "invalid_captcha",
            "message": "Invalid captcha value",
        }
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_by_sn(self, captcha, passport_settings) -> None:
        upstream = Upstream(httpx.Response(200, json={"name": "VALI"}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data_by_sn(PINFL, "AA1234567", "cid", "52817")

        assert result["success"] is True
        assert upstream.requests[0].url.params["serial"] == "AA1234567"
        captcha.validate.assert_awaited_once_with("cid", "52817")

    @pytest.mark.asyncio
    async def test_by_sn_birthdate_checks_parameters_first(
        self, captcha, passport_settings
    ) -> None:
        upstream = Upstream(httpx.Response(200, json={}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data_by_sn_birthdate("AA1234567", "", "cid", "1")

        assert result["message"] == "Required parameter: birthdate"
        captcha.validate.assert_not_called()

    @pytest.mark.asyncio
    async def test_by_pinfl_birthdate(self, captcha, passport_settings) -> None:
        upstream = Upstream(httpx.Response(200, text='"no"'))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await service.get_data_by_pinfl_birthdate(PINFL, "2003-05-14", "cid", "1")

        assert result["message"] == "Incorrect PINFL or birth date"

    @pytest.mark.asyncio
    async def test_bearer_header_from_guvd_token(self, captcha, passport_settings) -> None:
        guvd_token = MagicMock()
        guvd_token.get_token = AsyncMock(return_value="guvd-token")
        upstream = Upstream(httpx.Response(200, json={"region": "Toshkent"}))
        service = PassportDataService(upstream.client(), passport_settings, captcha, guvd_token)

        result = await service.get_address(PINFL)

        assert result["region"] == "Toshkent"
        assert upstream.requests[0].url.path == "/address"
        assert upstream.requests[0].headers["authorization"] == "Bearer guvd-token"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,args",
        [
            ("get_data_by_sn", (PINFL, "AA1234567")),
            ("get_data_by_sn_birthdate", ("AA1234567", "2003-05-14")),
            ("get_data_by_pinfl_birthdate", (PINFL, "2003-05-14")),
        ],
    )
    async def test_captcha_store_down(self, passport_settings, method, args) -> None:
        redis = MagicMock()
        redis.get = AsyncMock(side_effect=RedisError("down"))
        captcha = CaptchaService(redis, CaptchaSettings())
        upstream = Upstream(httpx.Response(200, json={}))
        service = PassportDataService(upstream.client(), passport_settings, captcha)

        result = await getattr(service, method)(*args, "cid", "12345")

        assert result == {
            "success": False,
            "code": "invalid_captcha",
            "message": "Invalid captcha value",
        }
        assert upstream.requests == []


class TestPersonalDataService:
    @pytest.mark.asyncio
    async def test_get_data(self) -> None:
        upstream = Upstream(httpx.Response(200, json={"fio": "ALIYEV VALI"}))
        settings = PersonalDataSettings(url="https://mvd.test/student.php", token="T")
        service = PersonalDataService(upstream.client(), settings)

        result = await service.get_data(PINFL, "AA")

        assert result["success"] is True
        params = upstream.requests[0].url.params
        assert params["TOKEN"] == "T"
        assert params["p_seriya"] == "AA"

    @pytest.mark.asyncio
    async def test_get_personal_data_adds_code(self) -> None:
        upstream = Upstream(httpx.Response(200, json={"fio": "ALIYEV VALI"}))
        service = PersonalDataService(upstream.client(), PersonalDataSettings())

        result = await service.get_personal_data(PINFL)

        assert result["code"] == "success"

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        upstream = Upstream(httpx.Response(200, text="no"))
        service = PersonalDataService(upstream.client(), PersonalDataSettings())

        result = await service.get_personal_data(PINFL)

        assert result["code"] == "incorrect_data"
        assert result["message"] == "Incorrect PINFL or passport number"
