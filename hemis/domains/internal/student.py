# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student lookups served as ``hemishe_StudentService`` methods.

A PINFL may be attached to several student cards; every lookup by PINFL
uses the master card, the newest card whose ``is_duplicate`` flag is
unset or false.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.integration.base import error_response, require
from hemis.domains.internal.responses import not_found, pick, success_list_response
from hemis.infrastructure.database.models import Student, StudentGpa

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({"11", "12", "13", "14", "15"})
GRADUATED_STATUSES = frozenset({"21", "22"})
EXPELLED_STATUSES = frozenset({"31", "32", "33", "34"})

STUDENT_FIELDS = (
    ("id", "id"),
    ("code", "code"),
    ("pinfl", "pinfl"),
    ("first_name", "firstname"),
    ("second_name", "lastname"),
    ("third_name", "fathername"),
    ("first_name_latin", "firstname_latin"),
    ("second_name_latin", "lastname_latin"),
    ("third_name_latin", "fathername_latin"),
    ("birth_date", "birthday"),
    ("university", "university"),
    ("student_status", "student_status"),
    ("payment_form", "payment_form"),
    ("gender", "gender"),
    ("citizenship", "citizenship"),
    ("is_duplicate", "is_duplicate"),
)

GPA_FIELDS = (
    ("id", "id"),
    ("education_year", "education_year_code"),
    ("gpa", "gpa"),
    ("method", "method"),
    ("level", "level_code"),
    ("credit_sum", "credit_sum"),
    ("subjects", "subjects"),
    ("debt_subjects", "debt_subjects"),
    ("create_ts", "create_ts"),
)


def student_to_map(student: Student) -> dict[str, Any]:
    data = pick(student, STUDENT_FIELDS)
    data["success"] = True
    return data


class StudentLookupService:
    """Read-only student queries keyed by PINFL or id.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_master(self, pinfl: str) -> Student | None:
        """Load the master student card for a PINFL."""
        stmt = (
            select(Student)
            .where(
                Student.pinfl == pinfl,
                Student.delete_ts.is_(None),
                or_(Student.is_duplicate.is_(None), Student.is_duplicate.is_(False)),
            )
            .order_by(Student.create_ts.desc().nulls_last())
            .limit(1)
        )
        result = await self._db.execute(stmt)
        return result.scalars().first()

    async def find_by_id(self, student_id: uuid.UUID) -> Student | None:
        stmt = select(Student).where(Student.id == student_id, Student.delete_ts.is_(None))
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def verify(self, pinfl: str | None) -> dict[str, Any]:
        """Report whether a student card exists for a PINFL."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid

        student = await self.find_master(pinfl)
        result: dict[str, Any] = {"exists": student is not None, "pinfl": pinfl}
        if student is not None:
            result.update(
                pick(
                    student,
                    (
                        ("id", "id"),
                        ("code", "code"),
                        ("university", "university"),
                        ("status", "student_status"),
                    ),
                )
            )
        return result

    async def get(self, pinfl: str | None) -> dict[str, Any]:
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        student = await self.find_master(pinfl)
        if student is None:
            return not_found("Student")
        return student_to_map(student)

    async def get_by_id(self, student_id: str | None) -> dict[str, Any]:
        invalid = require(id=student_id)
        if invalid:
            return invalid
        try:
            key = uuid.UUID(str(student_id))
        except ValueError:
            return error_response("invalid_id", "Invalid student ID format")

        student = await self.find_by_id(key)
        if student is None:
            return not_found("Student")
        return student_to_map(student)

    async def get_with_status(self, pinfl: str | None) -> dict[str, Any]:
        """Student card plus flags derived from the status code.

        Status codes: 11-15 studying, 21-22 graduated, 31-34 expelled.
        """
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        student = await self.find_master(pinfl)
        if student is None:
            return not_found("Student")

        status = student.student_status
        data = student_to_map(student)
        data["status_code"] = status
        data["is_active"] = status in ACTIVE_STATUSES
        data["is_graduated"] = status in GRADUATED_STATUSES
        data["is_expelled"] = status in EXPELLED_STATUSES
        return data

    async def gpa(self, pinfl: str | None) -> dict[str, Any]:
        """GPA records of the master card, latest education year first."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid
        student = await self.find_master(pinfl)
        if student is None:
            return not_found("Student")

        stmt = (
            select(StudentGpa)
            .where(StudentGpa.student_id == student.id)
            .order_by(
                StudentGpa.education_year_code.desc().nulls_last(),
                StudentGpa.create_ts.desc().nulls_last(),
            )
        )
        result = await self._db.execute(stmt)
        records = [pick(row, GPA_FIELDS) for row in result.scalars().all()]
        logger.info("Found %d GPA records for student %s", len(records), student.id)

        response = success_list_response(records)
        response["pinfl"] = pinfl
        response["student_id"] = str(student.id)
        return response
