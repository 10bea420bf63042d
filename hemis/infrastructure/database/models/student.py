# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student tables: the student card and yearly GPA records."""

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import AuditMixin, Base, StandardEntityMixin


class Student(StandardEntityMixin, Base):
    """Student card.

    A PINFL may appear on several cards (transfers, re-admissions); the
    card with ``is_duplicate`` unset is the master record.
    """

    __tablename__ = "hemishe_e_student"

    code: Mapped[str] = mapped_column("code", String(255), nullable=False)
    firstname: Mapped[str | None] = mapped_column("firstname", String(255))
    lastname: Mapped[str | None] = mapped_column("lastname", String(255))
    fathername: Mapped[str | None] = mapped_column("fathername", String(255))
    pinfl: Mapped[str | None] = mapped_column("pinfl", String(255), index=True)
    is_duplicate: Mapped[bool | None] = mapped_column("is_duplicate", Boolean)
    birthday: Mapped[date | None] = mapped_column("birthday", Date)
    firstname_latin: Mapped[str | None] = mapped_column("firstname_latin", String(255))
    lastname_latin: Mapped[str | None] = mapped_column("lastname_latin", String(255))
    fathername_latin: Mapped[str | None] = mapped_column("fathername_latin", String(255))
    serial_number: Mapped[str | None] = mapped_column("serial_number", String(255))
    passport_given_date: Mapped[date | None] = mapped_column("passport_given_date", Date)
    phone: Mapped[str | None] = mapped_column("phone", String(255))
    email: Mapped[str | None] = mapped_column("email", String(255))
    parent_phone: Mapped[str | None] = mapped_column("parent_phone", String(255))
    address: Mapped[str | None] = mapped_column("address", String(1024))
    current_address: Mapped[str | None] = mapped_column("current_address", String(1024))
    soato: Mapped[str | None] = mapped_column("_soato", String(20))
    current_soato: Mapped[str | None] = mapped_column("_current_soato", String(20))
    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    faculty: Mapped[str | None] = mapped_column("_faculty", String(255))
    speciality: Mapped[str | None] = mapped_column("_speciality", String(255))
    student_status: Mapped[str | None] = mapped_column("_student_status", String(32))
    payment_form: Mapped[str | None] = mapped_column("_payment_form", String(32))
    education_type: Mapped[str | None] = mapped_column("_education_type", String(32))
    education_form: Mapped[str | None] = mapped_column("_education_form", String(32))
    course: Mapped[str | None] = mapped_column("_course", String(32))
    education_year: Mapped[str | None] = mapped_column("_education_year", String(32))
    gender: Mapped[str | None] = mapped_column("_gender", String(32))
    nationality: Mapped[str | None] = mapped_column("_nationality", String(32))
    citizenship: Mapped[str | None] = mapped_column("_citizenship", String(32))
    country: Mapped[str | None] = mapped_column("_country", String(32))
    language: Mapped[str | None] = mapped_column("_language", String(32))
    social_category: Mapped[str | None] = mapped_column("_social_category", String(32))
    status: Mapped[str | None] = mapped_column("status", String(255))
    active: Mapped[bool | None] = mapped_column("active", Boolean)
    verified: Mapped[bool | None] = mapped_column("verified", Boolean)
    points: Mapped[str | None] = mapped_column("points", String(255))
    group_id: Mapped[str | None] = mapped_column("group_id", String(255))
    group_name: Mapped[str | None] = mapped_column("group_name", String(255))
    is_graduate: Mapped[str | None] = mapped_column("is_graduate", String(10))
    enroll_order_number: Mapped[str | None] = mapped_column("enroll_order_number", String(255))
    enroll_order_date: Mapped[date | None] = mapped_column("enroll_order_date", Date)

    @property
    def full_name(self) -> str | None:
        """Return "lastname firstname fathername" with blanks skipped."""
        parts = [p for p in (self.lastname, self.firstname, self.fathername) if p]
        return " ".join(parts) or None


class StudentGpa(AuditMixin, Base):
    """GPA for one student and education year.

    This table has no soft-delete columns; rows are append-only.
    """

    __tablename__ = "hemishe_e_student_gpa"

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        "student_id", UUID(as_uuid=True), nullable=False, index=True
    )
    education_year_code: Mapped[str | None] = mapped_column("education_year_code", String(32))
    gpa: Mapped[str | None] = mapped_column("gpa", String(255))
    method: Mapped[str | None] = mapped_column("method_", String(255))
    level_code: Mapped[str | None] = mapped_column("level_code", String(32))
    credit_sum: Mapped[str | None] = mapped_column("credit_sum", String(255))
    subjects: Mapped[int | None] = mapped_column("subjects", Integer)
    debt_subjects: Mapped[int | None] = mapped_column("debt_subjects", Integer)
