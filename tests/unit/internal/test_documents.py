# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for diploma, diploma blank and contract lookups."""

import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from hemis.domains.internal.documents import (
    ContractLookupService,
    DiplomaBlankLookupService,
    DiplomaLookupService,
)
from hemis.infrastructure.database.models import Contract, Diploma, DiplomaBlank, Student


@pytest.fixture
def mock_db() -> MagicMock:
    db = MagicMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def student(sample_pinfl: str) -> Student:
    return Student(id=uuid.uuid4(), code="1", pinfl=sample_pinfl)


@pytest.fixture
def students(student: Student) -> MagicMock:
    lookup = MagicMock()
    lookup.find_master = AsyncMock(return_value=student)
    return lookup


def make_diploma(student_id: uuid.UUID, **overrides) -> Diploma:
    values = {
        "id": uuid.uuid4(),
        "diploma_number": "B123456",
        "serial_number": "B",
        "diploma_hash": "f00d",
        "student": student_id,
        "university": "00001",
        "graduation_year": 2024,
        "issue_date": date(2024, 7, 1),
    }
    values.update(overrides)
    return Diploma(**values)


class TestDiplomaByHash:
    @pytest.mark.asyncio
    async def test_verified(self, mock_db, student) -> None:
        result_proxy = MagicMock()
        result_proxy.scalar_one_or_none.return_value = make_diploma(student.id)
        mock_db.execute.return_value = result_proxy

        result = await DiplomaLookupService(mock_db).by_hash("f00d")

        assert result["success"] is True
        assert result["data"]["verified"] is True
        assert result["data"]["diploma_number"] == "B123456"
        assert result["data"]["student"] == str(student.id)
        assert result["data"]["issue_date"] == "2024-07-01"

    @pytest.mark.asyncio
    async def test_unknown_hash(self, mock_db) -> None:
        result_proxy = MagicMock()
        result_proxy.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = result_proxy

        result = await DiplomaLookupService(mock_db).by_hash("beef")

        assert result == {
            "success": False,
            "code": "not_found",
            "message": "Diploma not found with hash: beef",
        }

    @pytest.mark.asyncio
    async def test_missing_hash(self, mock_db) -> None:
        result = await DiplomaLookupService(mock_db).by_hash(None)

        assert result["message"] == "Required parameter: hash"


class TestDiplomaInfo:
    @pytest.mark.asyncio
    async def test_list(self, mock_db, students, student, sample_pinfl) -> None:
        rows = MagicMock()
        rows.scalars.return_value.all.return_value = [
            make_diploma(student.id),
            make_diploma(student.id, diploma_number="B000001", diploma_hash="aa"),
        ]
        mock_db.execute.return_value = rows

        result = await DiplomaLookupService(mock_db, students).info(sample_pinfl)

        assert result["success"] is True
        assert result["count"] == 2
        students.find_master.assert_awaited_once_with(sample_pinfl)

    @pytest.mark.asyncio
    async def test_student_missing(self, mock_db, students, sample_pinfl) -> None:
        students.find_master.return_value = None

        result = await DiplomaLookupService(mock_db, students).info(sample_pinfl)

        assert result["message"] == f"Student not found with PINFL: {sample_pinfl}"
        mock_db.execute.assert_not_called()


class TestContractLookup:
    @pytest.mark.asyncio
    async def test_found(self, mock_db, students, student, sample_pinfl) -> None:
        contract = Contract(
            id=uuid.uuid4(),
            contract_number="K-2024-17",
            student=student.id,
            education_year="2024",
            contract_sum=Decimal("12500000.00"),
            is_active=True,
        )
        rows = MagicMock()
        rows.scalars.return_value.first.return_value = contract
        mock_db.execute.return_value = rows

        result = await ContractLookupService(mock_db, students).get(sample_pinfl, "2024")

        assert result["success"] is True
        assert result["data"]["contract_number"] == "K-2024-17"
        assert result["data"]["contract_sum"] == 12500000.0
        assert result["data"]["is_active"] is True

    @pytest.mark.asyncio
    async def test_no_contract_for_year(self, mock_db, students, sample_pinfl) -> None:
        rows = MagicMock()
        rows.scalars.return_value.first.return_value = None
        mock_db.execute.return_value = rows

        result = await ContractLookupService(mock_db, students).get(sample_pinfl, "2019")

        assert result["message"] == (
            f"Contract not found for student {sample_pinfl} in year 2019"
        )

    @pytest.mark.asyncio
    async def test_year_required(self, mock_db, students, sample_pinfl) -> None:
        result = await ContractLookupService(mock_db, students).get(sample_pinfl, None)

        assert result["message"] == "Required parameter: year"


class TestDiplomaBlankGet:
    @pytest.mark.asyncio
    async def test_blanks_for_year(self, mock_db, sample_university_code) -> None:
        result_proxy = MagicMock()
        result_proxy.scalars.return_value.all.return_value = [
            DiplomaBlank(
                id=uuid.uuid4(),
                blank_code="AA1234567",
                series="AA",
                number="1234567",
                status="ACTIVE",
                received_date=date(2024, 3, 1),
            )
        ]
        mock_db.execute.return_value = result_proxy

        result = await DiplomaBlankLookupService(mock_db).get(sample_university_code, "2024")

        assert result["success"] is True
        assert result["university"] == "00001"
        assert result["year"] == 2024
        assert result["count"] == 1
        assert result["blanks"][0]["blank_code"] == "AA1234567"
        assert result["blanks"][0]["received_date"] == "2024-03-01"

    @pytest.mark.asyncio
    async def test_year_must_be_numeric(self, mock_db, sample_university_code) -> None:
        result = await DiplomaBlankLookupService(mock_db).get(sample_university_code, "2024-25")

        assert result == {
            "success": False,
            "code": "invalid_parameter",
            "message": "Invalid year: 2024-25",
        }
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_university(self, mock_db) -> None:
        result = await DiplomaBlankLookupService(mock_db).get(None, "2024")

        assert result["message"] == "Required parameter: university"
