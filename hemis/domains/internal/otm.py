# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic student info for universities (``/services/otm``)."""

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.integration.base import error_response, require
from hemis.domains.internal.responses import not_found, pick, success_response
from hemis.domains.internal.student import STUDENT_FIELDS, StudentLookupService
from hemis.infrastructure.database.models import Student

logger = logging.getLogger(__name__)

ACADEMIC_FIELDS = STUDENT_FIELDS + (
    ("faculty", "faculty"),
    ("speciality", "speciality"),
    ("group_id", "group_id"),
    ("group_name", "group_name"),
    ("course", "course"),
    ("education_type", "education_type"),
    ("education_form", "education_form"),
    ("education_year", "education_year"),
    ("education_language", "language"),
    ("enroll_order_number", "enroll_order_number"),
    ("enroll_order_date", "enroll_order_date"),
)


def student_info(student: Student) -> dict[str, Any]:
    data = pick(student, ACADEMIC_FIELDS)
    data["full_name"] = student.full_name
    return success_response(data)


class OtmLookupService:
    """Student card with study details, by id or PINFL."""

    def __init__(self, db: AsyncSession, students: StudentLookupService | None = None) -> None:
        self._students = students or StudentLookupService(db)

    async def student_info_by_id(self, student_id: str | None) -> dict[str, Any]:
        invalid = require(studentId=student_id)
        if invalid:
            return invalid
        try:
            key = uuid.UUID(str(student_id))
        except ValueError:
            return error_response("invalid_id", "Invalid student ID format")

        student = await self._students.find_by_id(key)
        if student is None:
            return not_found("Student")
        return student_info(student)

    async def student_info_by_pinfl(self, pinfl: str | None) -> dict[str, Any]:
        """Study details of the master card for a PINFL."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid

        student = await self._students.find_master(pinfl)
        if student is None:
            logger.info("No student card for PINFL %s", pinfl)
            return not_found("Student")
        return student_info(student)
