# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service endpoints backed by the database.

Student, diploma and contract methods use the CUBA service names
(``hemishe_StudentService/get``); classifier, OTM, faculty and diploma
blank lookups keep their legacy paths.
"""

from typing import Any

from fastapi import APIRouter, Query

from hemis.api.dependencies import (
    AuthenticatedUser,
    ClassifierLookupDep,
    ContractLookupDep,
    DiplomaBlankLookupDep,
    DiplomaLookupDep,
    FacultyLookupDep,
    OtmLookupDep,
    StudentLookupDep,
)

router = APIRouter()


@router.get("/hemishe_StudentService/verify")
async def student_verify(
    service: StudentLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.verify(pinfl)


@router.get("/hemishe_StudentService/get")
async def student_get(
    service: StudentLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get(pinfl)


@router.get("/hemishe_StudentService/getById")
async def student_get_by_id(
    service: StudentLookupDep,
    current_user: AuthenticatedUser,
    student_id: str | None = Query(None, alias="id"),
) -> dict[str, Any]:
    return await service.get_by_id(student_id)


@router.get("/hemishe_StudentService/getWithStatus")
async def student_get_with_status(
    service: StudentLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get_with_status(pinfl)


@router.get("/hemishe_StudentService/gpa")
async def student_gpa(
    service: StudentLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.gpa(pinfl)


@router.get("/hemishe_DiplomaService/byhash")
async def diploma_by_hash(
    service: DiplomaLookupDep,
    current_user: AuthenticatedUser,
    diploma_hash: str | None = Query(None, alias="hash"),
) -> dict[str, Any]:
    return await service.by_hash(diploma_hash)


@router.get("/hemishe_DiplomaService/info")
async def diploma_info(
    service: DiplomaLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.info(pinfl)


@router.get("/hemishe_ContractService/get")
async def contract_get(
    service: ContractLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
    year: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get(pinfl, year)


@router.get("/classifiers/info")
async def classifiers_info(
    service: ClassifierLookupDep,
    current_user: AuthenticatedUser,
) -> list[str]:
    return service.info()


@router.get("/classifiers/single")
async def classifiers_single(
    service: ClassifierLookupDep,
    current_user: AuthenticatedUser,
    classifier: str | None = Query(None),
) -> Any:
    return await service.single(classifier)


@router.get("/classifiers/allItems")
async def classifiers_all_items(
    service: ClassifierLookupDep,
    current_user: AuthenticatedUser,
) -> dict[str, Any]:
    return await service.all_items()


@router.get("/classifiers/hokimiyat")
async def classifiers_hokimiyat(
    service: ClassifierLookupDep,
    current_user: AuthenticatedUser,
) -> dict[str, Any]:
    return await service.hokimiyat()


@router.get("/otm/studentInfoById")
async def otm_student_info_by_id(
    service: OtmLookupDep,
    current_user: AuthenticatedUser,
    student_id: str | None = Query(None, alias="studentId"),
) -> dict[str, Any]:
    return await service.student_info_by_id(student_id)


@router.get("/otm/studentInfoByPinfl")
async def otm_student_info_by_pinfl(
    service: OtmLookupDep,
    current_user: AuthenticatedUser,
    pinfl: str | None = Query(None),
) -> dict[str, Any]:
    return await service.student_info_by_pinfl(pinfl)


@router.get("/faculty/list")
async def faculty_list(
    service: FacultyLookupDep,
    current_user: AuthenticatedUser,
    university_code: str | None = Query(None, alias="universityCode"),
) -> dict[str, Any]:
    return await service.list_by_university(university_code)


@router.get("/faculty/get")
async def faculty_get(
    service: FacultyLookupDep,
    current_user: AuthenticatedUser,
    code: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get(code)


@router.get("/faculty/count")
async def faculty_count(
    service: FacultyLookupDep,
    current_user: AuthenticatedUser,
    university_code: str | None = Query(None, alias="universityCode"),
) -> dict[str, Any]:
    return await service.count_by_university(university_code)


@router.get("/diplom-blank/get")
async def diploma_blank_get(
    service: DiplomaBlankLookupDep,
    current_user: AuthenticatedUser,
    university: str | None = Query(None),
    year: str | None = Query(None),
) -> dict[str, Any]:
    return await service.get(university, year)
