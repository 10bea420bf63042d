# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""GUVD, tax, social protection and employment service endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from hemis.api.dependencies import (
    AuthenticatedUser,
    EmploymentServiceDep,
    GuvdServiceDep,
    SocialServiceDep,
    TaxServiceDep,
)

router = APIRouter()


@router.get("/hemishe_GuvdService/classifiers")
async def guvd_classifiers(
    service: GuvdServiceDep,
    current_user: AuthenticatedUser,
) -> dict[str, Any]:
    return await service.classifiers()


@router.get("/hemishe_GuvdService/objects")
async def guvd_objects(
    service: GuvdServiceDep,
    current_user: AuthenticatedUser,
    object_type: str | None = Query(None, alias="type"),
    query: str | None = Query(None),
) -> dict[str, Any]:
    return await service.objects(object_type, query)


@router.get("/hemishe_TaxService/rent")
async def tax_rent(
    service: TaxServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    period: str | None = Query(None),
) -> dict[str, Any]:
    """Rent tax payment status (``is_paid``)."""
    return await service.rent(pinfl, period)


@router.get("/hemishe_SocialService/singleRegister")
async def social_single_register(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.single_register(pinfl)


@router.get("/hemishe_SocialService/daftarFull")
async def social_daftar_full(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.daftar_full(pinfl)


@router.get("/hemishe_SocialService/daftarShort")
async def social_daftar_short(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.daftar_short(pinfl)


@router.get("/hemishe_SocialService/women")
async def social_women(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    sn: str | None = Query(None),
) -> dict[str, Any]:
    return await service.women(pinfl, sn)


@router.get("/hemishe_SocialService/young")
async def social_young(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    seria: str | None = Query(None),
    number: str | None = Query(None),
) -> dict[str, Any]:
    return await service.young(pinfl, seria, number)


@router.get("/hemishe_SocialService/vtek")
async def social_vtek(
    service: SocialServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    birth_date: str | None = Query(None, alias="birthDate"),
    birth_document: str | None = Query(None, alias="birthDocument"),
) -> dict[str, Any]:
    return await service.vtek(pinfl, birth_date, birth_document)


@router.get("/hemishe_EmploymentService/workbook")
async def employment_workbook(
    service: EmploymentServiceDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.workbook(pinfl)
