# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Faculty lookups served under ``/services/faculty``."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.integration.base import require
from hemis.domains.internal.responses import (
    not_found,
    pick,
    success_list_response,
    success_response,
)
from hemis.infrastructure.database.models import Faculty

FACULTY_FIELDS = (
    ("id", "id"),
    ("code", "code"),
    ("name", "name"),
    ("short_name", "short_name"),
    ("university", "university"),
    ("faculty_type", "faculty_type"),
    ("active", "active"),
)


class FacultyLookupService:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_university(self, university_code: str | None) -> dict[str, Any]:
        """Faculties of a university ordered by code."""
        invalid = require(universityCode=university_code)
        if invalid:
            return invalid

        stmt = (
            select(Faculty)
            .where(Faculty.university == university_code, Faculty.delete_ts.is_(None))
            .order_by(Faculty.code)
        )
        result = await self._db.execute(stmt)
        return success_list_response([pick(f, FACULTY_FIELDS) for f in result.scalars().all()])

    async def get(self, code: str | None) -> dict[str, Any]:
        invalid = require(code=code)
        if invalid:
            return invalid

        stmt = select(Faculty).where(Faculty.code == code, Faculty.delete_ts.is_(None)).limit(1)
        result = await self._db.execute(stmt)
        faculty = result.scalars().first()
        if faculty is None:
            return not_found("Faculty")
        return success_response(pick(faculty, FACULTY_FIELDS))

    async def count_by_university(self, university_code: str | None) -> dict[str, Any]:
        invalid = require(universityCode=university_code)
        if invalid:
            return invalid

        stmt = select(func.count(Faculty.id)).where(
            Faculty.university == university_code, Faculty.delete_ts.is_(None)
        )
        result = await self._db.execute(stmt)
        return {"success": True, "count": result.scalar_one()}
