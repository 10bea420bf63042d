# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Diploma verification, diploma blank and contract lookups."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.integration.base import error_response, require
from hemis.domains.internal.responses import (
    pick,
    success_list_response,
    success_response,
)
from hemis.domains.internal.student import StudentLookupService
from hemis.infrastructure.database.models import Contract, Diploma, DiplomaBlank

logger = logging.getLogger(__name__)

DIPLOMA_FIELDS = (
    ("id", "id"),
    ("diploma_number", "diploma_number"),
    ("serial_number", "serial_number"),
    ("diploma_hash", "diploma_hash"),
    ("diploma_type", "diploma_type"),
    ("student", "student"),
    ("university", "university"),
    ("specialty", "specialty"),
    ("graduation_year", "graduation_year"),
    ("issue_date", "issue_date"),
    ("status", "status"),
)

BLANK_FIELDS = (
    ("id", "id"),
    ("blank_code", "blank_code"),
    ("series", "series"),
    ("number", "number"),
    ("blank_type", "blank_type"),
    ("status", "status"),
    ("received_date", "received_date"),
    ("issued_date", "issued_date"),
    ("batch_number", "batch_number"),
)

CONTRACT_FIELDS = (
    ("id", "id"),
    ("contract_number", "contract_number"),
    ("student", "student"),
    ("university", "university"),
    ("education_year", "education_year"),
    ("contract_type", "contract_type"),
    ("contract_sum", "contract_sum"),
    ("paid_sum", "paid_sum"),
    ("status", "status"),
    ("is_active", "is_active"),
)


class DiplomaLookupService:
    """``hemishe_DiplomaService`` methods."""

    def __init__(self, db: AsyncSession, students: StudentLookupService | None = None) -> None:
        self._db = db
        self._students = students or StudentLookupService(db)

    async def by_hash(self, diploma_hash: str | None) -> dict[str, Any]:
        """Verify a diploma by the hash printed in its QR code."""
        invalid = require(hash=diploma_hash)
        if invalid:
            return invalid

        stmt = select(Diploma).where(
            Diploma.diploma_hash == diploma_hash, Diploma.delete_ts.is_(None)
        )
        result = await self._db.execute(stmt)
        diploma = result.scalar_one_or_none()
        if diploma is None:
            return error_response("not_found", f"Diploma not found with hash: {diploma_hash}")

        data = pick(diploma, DIPLOMA_FIELDS)
        data["verified"] = True
        logger.info("Diploma verified: %s", diploma.diploma_number)
        return success_response(data)

    async def info(self, pinfl: str | None) -> dict[str, Any]:
        """All diplomas of a student, newest issue date first."""
        invalid = require(pinfl=pinfl)
        if invalid:
            return invalid

        student = await self._students.find_master(pinfl)
        if student is None:
            return error_response("not_found", f"Student not found with PINFL: {pinfl}")

        stmt = (
            select(Diploma)
            .where(Diploma.student == student.id, Diploma.delete_ts.is_(None))
            .order_by(Diploma.issue_date.desc().nulls_last())
        )
        result = await self._db.execute(stmt)
        return success_list_response([pick(d, DIPLOMA_FIELDS) for d in result.scalars().all()])


class ContractLookupService:
    """``hemishe_ContractService`` methods."""

    def __init__(self, db: AsyncSession, students: StudentLookupService | None = None) -> None:
        self._db = db
        self._students = students or StudentLookupService(db)

    async def get(self, pinfl: str | None, year: str | None) -> dict[str, Any]:
        """Contract of a student for one education year.

        Args:
            pinfl: Student PINFL.
            year: Education year code, e.g. "2024".
        """
        invalid = require(pinfl=pinfl, year=year)
        if invalid:
            return invalid

        student = await self._students.find_master(pinfl)
        if student is None:
            return error_response("not_found", f"Student not found with PINFL: {pinfl}")

        stmt = (
            select(Contract)
            .where(
                Contract.student == student.id,
                Contract.education_year == year,
                Contract.delete_ts.is_(None),
            )
            .limit(1)
        )
        result = await self._db.execute(stmt)
        contract = result.scalars().first()
        if contract is None:
            return error_response(
                "not_found", f"Contract not found for student {pinfl} in year {year}"
            )
        return success_response(pick(contract, CONTRACT_FIELDS))


class DiplomaBlankLookupService:
    """Diploma forms registered for a university and academic year."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get(self, university: str | None, year: str | None) -> dict[str, Any]:
        invalid = require(university=university, year=year)
        if invalid:
            return invalid
        try:
            academic_year = int(year)
        except ValueError:
            return error_response("invalid_parameter", f"Invalid year: {year}")

        stmt = (
            select(DiplomaBlank)
            .where(
                DiplomaBlank.university == university,
                DiplomaBlank.academic_year == academic_year,
                DiplomaBlank.delete_ts.is_(None),
            )
            .order_by(DiplomaBlank.series, DiplomaBlank.number)
        )
        result = await self._db.execute(stmt)
        blanks = [pick(b, BLANK_FIELDS) for b in result.scalars().all()]
        logger.info("Found %d diploma blanks for %s in %d", len(blanks), university, academic_year)
        return {
            "success": True,
            "university": university,
            "year": academic_year,
            "blanks": blanks,
            "count": len(blanks),
        }
