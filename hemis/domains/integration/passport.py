# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Passport and personal data lookups.

Lookups that reveal passport data to anonymous university portals are
protected by the image captcha; the captcha is consumed on success.

Example:
    >>> service = PassportDataService(client, settings.passport, captcha, guvd_token)
    >>> await service.get_data_by_sn("12345678901234", "AA1234567", captcha_id, "52817")
    {'success': True, ...}
"""

import logging
from typing import Any

import httpx

from hemis.core.config.settings import PassportSettings, PersonalDataSettings
from hemis.domains.captcha import CaptchaService
from hemis.domains.integration.base import GovernmentApiService, error_response, require
from hemis.domains.integration.guvd_token import GuvdTokenService

logger = logging.getLogger(__name__)

INVALID_CAPTCHA = error_response("invalid_captcha", "Invalid captcha value")


def _incorrect_data(response: dict[str, Any], message: str) -> dict[str, Any]:
    """Replace a not_found result with an incorrect_data one."""
    if response.get("success") is False and response.get("code") == "not_found":
        response["code"] = "incorrect_data"
        response["message"] = message
    return response


class PassportDataService(GovernmentApiService):
    """Proxy to the GUVD passport data API.

    Attributes:
        _settings: Passport API settings.
        _captcha: Captcha service validating user input.
        _guvd_token: Source of the GUVD bearer token, optional.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: PassportSettings,
        captcha: CaptchaService,
        guvd_token: GuvdTokenService | None = None,
    ) -> None:
        super().__init__(client)
        self._settings = settings
        self._captcha = captcha
        self._guvd_token = guvd_token

    async def _headers(self) -> dict[str, str] | None:
        if self._guvd_token is None:
            return None
        token = await self._guvd_token.get_token()
        return {"Authorization": f"Bearer {token}"} if token else None

    async def _lookup(
        self, path: str, params: dict[str, Any], service_name: str
    ) -> dict[str, Any]:
        params["token"] = self._settings.token.get_secret_value() or None
        return await self.call(
            f"{self._settings.url}{path}",
            params,
            None,
            service_name,
            headers=await self._headers(),
        )

    async def get_data(self, pinfl: str | None, given_date: str | None) -> dict[str, Any]:
        """Passport data by PINFL and passport issue date."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        logger.info("Passport data lookup by PINFL: %s", pinfl)
        response = await self._lookup(
            "/data",
            {"pinfl": pinfl, "given_date": given_date},
            "PassportDataService.getData",
        )
        return _incorrect_data(response, "Incorrect PINFL or given date")

    async def get_data_by_sn(
        self,
        pinfl: str | None,
        seria_number: str | None,
        captcha_id: str | None,
        captcha_value: str | None,
    ) -> dict[str, Any]:
        """Passport data by PINFL and passport serial number."""
        invalid = require(pinfl=pinfl, seriaNumber=seria_number)
        if invalid:
            return invalid
        if not await self._captcha.validate(captcha_id, captcha_value):
            return dict(INVALID_CAPTCHA)
        logger.info("Passport data lookup by PINFL and serial: %s", pinfl)
        response = await self._lookup(
            "/data",
            {"pinfl": pinfl, "serial": seria_number},
            "PassportDataService.getDataBySN",
        )
        return _incorrect_data(response, "Incorrect PINFL or passport serial number")

    async def get_data_by_sn_birthdate(
        self,
        seria_number: str | None,
        birthdate: str | None,
        captcha_id: str | None,
        captcha_value: str | None,
    ) -> dict[str, Any]:
        """Passport data by serial number and birth date."""
        invalid = require(seriaNumber=seria_number, birthdate=birthdate)
        if invalid:
            return invalid
        if not await self._captcha.validate(captcha_id, captcha_value):
            return dict(INVALID_CAPTCHA)
        logger.info("Passport data lookup by serial and birth date: %s", seria_number)
        response = await self._lookup(
            "/data",
            {"serial": seria_number, "birthdate": birthdate},
            "PassportDataService.getDataBySNBirthdate",
        )
        return _incorrect_data(response, "Incorrect passport serial number or birth date")

    async def get_data_by_pinfl_birthdate(
        self,
        pinfl: str | None,
        birthdate: str | None,
        captcha_id: str | None,
        captcha_value: str | None,
    ) -> dict[str, Any]:
        """Passport data by PINFL and birth date."""
        invalid = require(pinfl=pinfl, birthdate=birthdate)
        if invalid:
            return invalid
        if not await self._captcha.validate(captcha_id, captcha_value):
            return dict(INVALID_CAPTCHA)
        logger.info("Passport data lookup by PINFL and birth date: %s", pinfl)
        response = await self._lookup(
            "/data",
            {"pinfl": pinfl, "birthdate": birthdate},
            "PassportDataService.getDataByPinflBirthdate",
        )
        return _incorrect_data(response, "Incorrect PINFL or birth date")

    async def get_address(self, pinfl: str | None) -> dict[str, Any]:
        """Registered address by PINFL."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        logger.info("Address lookup by PINFL: %s", pinfl)
        return await self._lookup("/address", {"pinfl": pinfl}, "PassportDataService.getAddress")


class PersonalDataService(GovernmentApiService):
    """Proxy to the MVD personal data endpoint (deprecated API).

    Attributes:
        _settings: Endpoint URL and token.
    """

    def __init__(self, client: httpx.AsyncClient, settings: PersonalDataSettings) -> None:
        super().__init__(client)
        self._settings = settings

    async def get_data(self, pinfl: str | None, serial: str | None = None) -> dict[str, Any]:
        """Personal data by PINFL and optional passport series."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        logger.info("Personal data lookup: %s", pinfl)
        response = await self.call(
            self._settings.url,
            {
                "TOKEN": self._settings.token.get_secret_value(),
                "pinfl": pinfl,
                "p_seriya": serial,
            },
            None,
            "PersonalDataService",
        )
        return _incorrect_data(response, "Incorrect PINFL or passport number")

    async def get_personal_data(self, pinfl: str | None, serial: str | None = None) -> dict[str, Any]:
        """Same as ``get_data`` with ``code: "success"`` on success."""
        result = await self.get_data(pinfl, serial)
        if result.get("success") is True:
            result["code"] = "success"
        return result
