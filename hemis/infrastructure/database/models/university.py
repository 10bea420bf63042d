# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University structure tables: universities, faculties, specialties, groups.

Reference columns keep the CUBA underscore prefix in the database
(``_university``, ``_faculty``); the Python attribute drops it.
"""

import uuid

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import (
    AuditMixin,
    Base,
    SoftDeleteMixin,
    StandardEntityMixin,
)


class University(AuditMixin, SoftDeleteMixin, Base):
    """Higher education institution, keyed by its ministry code."""

    __tablename__ = "hemishe_e_university"

    code: Mapped[str] = mapped_column("code", String(255), primary_key=True)
    tin: Mapped[str | None] = mapped_column("tin", String(255))
    name: Mapped[str | None] = mapped_column("name", String(1024))
    address: Mapped[str | None] = mapped_column("address", String(1024))
    cadastre: Mapped[str | None] = mapped_column("cadastre", String(255))
    university_url: Mapped[str | None] = mapped_column("university_url", String(255))
    student_url: Mapped[str | None] = mapped_column("student_url", String(255))
    teacher_url: Mapped[str | None] = mapped_column("teacher_url", String(255))
    uzbmb_url: Mapped[str | None] = mapped_column("uzbmb_url", String(255))
    soato: Mapped[str | None] = mapped_column("_soato", String(20))
    soato_region: Mapped[str | None] = mapped_column("_soato_region", String(20))
    university_type: Mapped[str | None] = mapped_column("_university_type", String(32))
    ownership: Mapped[str | None] = mapped_column("_ownership", String(32))
    university_version: Mapped[str | None] = mapped_column("_university_version", String(32))
    activity_status: Mapped[str | None] = mapped_column(
        "_university_activity_status", String(32)
    )
    belongs_to: Mapped[str | None] = mapped_column("_university_belongs_to", String(32))
    contract_category: Mapped[str | None] = mapped_column(
        "_university_contract_category", String(32)
    )
    parent_university: Mapped[str | None] = mapped_column("_parent_university", String(255))
    active: Mapped[bool | None] = mapped_column("active", Boolean)
    gpa_edit: Mapped[bool | None] = mapped_column("gpa_edit", Boolean)
    accreditation_edit: Mapped[bool | None] = mapped_column("accreditation_edit", Boolean)
    add_student: Mapped[bool | None] = mapped_column("add_student", Boolean)
    allow_grouping: Mapped[bool | None] = mapped_column("allow_grouping", Boolean)
    allow_transfer_outside: Mapped[bool | None] = mapped_column(
        "allow_transfer_outside", Boolean
    )
    version_type: Mapped[str | None] = mapped_column("_version_type", String(32))
    terrain: Mapped[str | None] = mapped_column("_terrain", String(32))
    mail_address: Mapped[str | None] = mapped_column("mail_address", String(1024))
    bank_info: Mapped[str | None] = mapped_column("bank_info", String(1024))
    accreditation_info: Mapped[str | None] = mapped_column("accreditation_info", String(1024))


class Faculty(StandardEntityMixin, Base):
    """University department (faculty)."""

    __tablename__ = "hemishe_e_faculty"

    code: Mapped[str | None] = mapped_column("code", String(255))
    name: Mapped[str | None] = mapped_column("name", String(1024))
    short_name: Mapped[str | None] = mapped_column("short_name", String(255))
    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    faculty_type: Mapped[str | None] = mapped_column("_faculty_type", String(32))
    active: Mapped[bool | None] = mapped_column("active", Boolean)


class Specialty(StandardEntityMixin, Base):
    """Field of study offered by a university."""

    __tablename__ = "hemishe_e_specialty"

    code: Mapped[str | None] = mapped_column("code", String(255))
    name: Mapped[str | None] = mapped_column("name", String(1024))
    short_name: Mapped[str | None] = mapped_column("short_name", String(255))
    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    faculty: Mapped[uuid.UUID | None] = mapped_column("_faculty", UUID(as_uuid=True))
    specialty_type: Mapped[str | None] = mapped_column("_specialty_type", String(32))
    education_type: Mapped[str | None] = mapped_column("_education_type", String(32))
    education_form: Mapped[str | None] = mapped_column("_education_form", String(32))
    study_period: Mapped[str | None] = mapped_column("_study_period", String(32))
    active: Mapped[bool | None] = mapped_column("active", Boolean)


class Group(StandardEntityMixin, Base):
    """Student group (academic class)."""

    __tablename__ = "hemishe_e_group"

    name: Mapped[str | None] = mapped_column("name", String(255))
    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    specialty: Mapped[uuid.UUID | None] = mapped_column("_specialty", UUID(as_uuid=True))
    faculty: Mapped[uuid.UUID | None] = mapped_column("_faculty", UUID(as_uuid=True))
    curriculum: Mapped[uuid.UUID | None] = mapped_column("_curriculum", UUID(as_uuid=True))
    academic_year: Mapped[str | None] = mapped_column("academic_year", String(32))
    course: Mapped[int | None] = mapped_column("course", Integer)
    capacity: Mapped[int | None] = mapped_column("capacity", Integer)
    student_count: Mapped[int | None] = mapped_column("student_count", Integer)
    education_type: Mapped[str | None] = mapped_column("_education_type", String(32))
    education_form: Mapped[str | None] = mapped_column("_education_form", String(32))
    education_lang: Mapped[str | None] = mapped_column("_education_lang", String(32))
    active: Mapped[bool | None] = mapped_column("active", Boolean)
