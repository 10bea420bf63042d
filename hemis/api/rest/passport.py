# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Captcha, passport data and personal data service endpoints.

Each method is reachable under its REST path and under the CUBA service
name, for example ``/services/passport-data/getData`` and
``/services/hemishe_PassportDataService/getData``.
"""

import logging
from typing import Any

from fastapi import APIRouter, Query

from hemis.api.dependencies import (
    AuthenticatedUser,
    CaptchaServiceDep,
    PassportServiceDep,
    PersonalDataServiceDep,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =========================================================================
# Captcha (public)
# =========================================================================


@router.get("/captcha/getNumericCaptcha")
@router.get("/hemishe_CaptchaService/getNumericCaptcha")
async def get_numeric_captcha(captcha: CaptchaServiceDep) -> dict[str, Any]:
    """Generate a five digit captcha image."""
    return await captcha.generate_numeric()


@router.get("/captcha/getArithmeticCaptcha")
@router.get("/hemishe_CaptchaService/getArithmeticCaptcha")
async def get_arithmetic_captcha(captcha: CaptchaServiceDep) -> dict[str, Any]:
    """Generate an "a + b" or "a - b" captcha image."""
    return await captcha.generate_arithmetic()


# =========================================================================
# Passport data
# =========================================================================


@router.get("/passport-data/getData")
@router.get("/hemishe_PassportDataService/getData")
async def get_passport_data(
    service: PassportServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    given_date: str | None = Query(None, alias="givenDate"),
) -> dict[str, Any]:
    return await service.get_data(pinfl, given_date)


@router.get("/passport-data/getDataBySN")
@router.get("/hemishe_PassportDataService/getDataBySN")
async def get_passport_data_by_sn(
    service: PassportServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    seria_number: str | None = Query(None, alias="seriaNumber"),
    captcha_id: str | None = Query(None, alias="captchaId"),
    captcha_value: str | None = Query(None, alias="captchaValue"),
) -> dict[str, Any]:
    return await service.get_data_by_sn(pinfl, seria_number, captcha_id, captcha_value)


@router.get("/passport-data/getDataBySNBirthdate")
@router.get("/hemishe_PassportDataService/getDataBySNBirthdate")
async def get_passport_data_by_sn_birthdate(
    service: PassportServiceDep,
    current_user: AuthenticatedUser,
    seria_number: str | None = Query(None, alias="seriaNumber"),
    birthdate: str | None = Query(None),
    captcha_id: str | None = Query(None, alias="captchaId"),
    captcha_value: str | None = Query(None, alias="captchaValue"),
) -> dict[str, Any]:
    return await service.get_data_by_sn_birthdate(
        seria_number, birthdate, captcha_id, captcha_value
    )


@router.get("/passport-data/getDataByPinflBirthdate")
@router.get("/hemishe_PassportDataService/getDataByPinflBirthdate")
async def get_passport_data_by_pinfl_birthdate(
    service: PassportServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    birthdate: str | None = Query(None),
    captcha_id: str | None = Query(None, alias="captchaId"),
    captcha_value: str | None = Query(None, alias="captchaValue"),
) -> dict[str, Any]:
    return await service.get_data_by_pinfl_birthdate(
        pinfl, birthdate, captcha_id, captcha_value
    )


@router.get("/passport-data/getAddress")
@router.get("/hemishe_PassportDataService/getAddress")
async def get_passport_address(
    service: PassportServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get_address(pinfl)


# =========================================================================
# Personal data (MVD, deprecated)
# =========================================================================


@router.get("/personal-data/getData", deprecated=True)
@router.get("/hemishe_PersonalDataService/getData", deprecated=True)
async def get_personal_data_legacy(
    service: PersonalDataServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    serial: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get_data(pinfl, serial)


@router.get("/hemishe_PersonalDataService/getPersonalData", deprecated=True)
async def get_personal_data(
    service: PersonalDataServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    serial: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get_personal_data(pinfl, serial)
