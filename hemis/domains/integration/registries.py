# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Proxies to the GUVD, tax, social protection and employment registries."""

import logging
from typing import Any

import httpx

from hemis.core.config.settings import (
    EmploymentSettings,
    GuvdSettings,
    SocialSettings,
    TaxSettings,
)
from hemis.domains.integration.base import GovernmentApiService, require
from hemis.domains.integration.guvd_token import GuvdTokenService

logger = logging.getLogger(__name__)


class GuvdService(GovernmentApiService):
    """GUVD reference data (classifiers and address objects)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: GuvdSettings,
        guvd_token: GuvdTokenService,
    ) -> None:
        super().__init__(client)
        self._settings = settings
        self._guvd_token = guvd_token

    async def _headers(self) -> dict[str, str] | None:
        token = await self._guvd_token.get_token()
        return {"Authorization": f"Bearer {token}"} if token else None

    async def classifiers(self) -> dict[str, Any]:
        return await self.call(
            f"{self._settings.api_url}/classifiers",
            None,
            None,
            "GuvdService.classifiers",
            headers=await self._headers(),
        )

    async def objects(self, object_type: str | None, query: str | None) -> dict[str, Any]:
        invalid = require(type=object_type, query=query)
        if invalid:
            return invalid
        return await self.call(
            f"{self._settings.api_url}/objects",
            {"type": object_type, "query": query},
            None,
            "GuvdService.objects",
            headers=await self._headers(),
        )


class TaxService(GovernmentApiService):
    """Tax committee: rent payment status."""

    def __init__(self, client: httpx.AsyncClient, settings: TaxSettings) -> None:
        super().__init__(client)
        self._settings = settings

    async def rent(self, pinfl: str | None, period: str | None) -> dict[str, Any]:
        """Whether the person paid rent tax for a period (flag ``is_paid``)."""
        invalid = require(pinfl=pinfl, period=period)
        if invalid:
            return invalid
        return await self.call(
            f"{self._settings.url}/rent",
            {
                "pinfl": pinfl,
                "period": period,
                "token": self._settings.token.get_secret_value() or None,
            },
            "is_paid",
            "TaxService.rent",
        )


class SocialService(GovernmentApiService):
    """Social protection registries ("Yagona reestr", "Temir daftar", etc.).

    Every method takes the citizen's PINFL; registry membership checks
    report a boolean flag instead of an error when the person is absent.
    """

    def __init__(self, client: httpx.AsyncClient, settings: SocialSettings) -> None:
        super().__init__(client)
        self._settings = settings

    async def _get(
        self,
        path: str,
        params: dict[str, Any],
        flag_key: str | None,
        method: str,
    ) -> dict[str, Any]:
        params["token"] = self._settings.token.get_secret_value() or None
        return await self.call(
            f"{self._settings.url}{path}", params, flag_key, f"SocialService.{method}"
        )

    async def single_register(self, pinfl: str | None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get("/single-register", {"pinfl": pinfl}, None, "singleRegister")

    async def daftar_full(self, pinfl: str | None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get("/daftar/full", {"pinfl": pinfl}, None, "daftarFull")

    async def daftar_short(self, pinfl: str | None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get("/daftar/short", {"pinfl": pinfl}, None, "daftarShort")

    async def women(self, pinfl: str | None, sn: str | None = None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get(
            "/women", {"pinfl": pinfl, "sn": sn}, "in_women_registry", "women"
        )

    async def young(
        self, pinfl: str | None, seria: str | None = None, number: str | None = None
    ) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get(
            "/young",
            {"pinfl": pinfl, "seria": seria, "number": number},
            "in_youth_registry",
            "young",
        )

    async def vtek(
        self,
        pinfl: str | None,
        birth_date: str | None = None,
        birth_document: str | None = None,
    ) -> dict[str, Any]:
        """Disability (VTEK) registry check."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self._get(
            "/vtek",
            {"pinfl": pinfl, "birth_date": birth_date, "birth_document": birth_document},
            "has_vtek_disability",
            "vtek",
        )


class EmploymentService(GovernmentApiService):
    """Labour ministry registry: electronic work book."""

    def __init__(self, client: httpx.AsyncClient, settings: EmploymentSettings) -> None:
        super().__init__(client)
        self._settings = settings

    async def workbook(self, pinfl: str | None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        return await self.call(
            f"{self._settings.url}/workbook",
            {"pinfl": pinfl, "token": self._settings.token.get_secret_value() or None},
            None,
            "EmploymentService.workbook",
        )
