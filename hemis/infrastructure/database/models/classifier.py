# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reference tables (``hemishe_h_*``) keyed by a short code.

Student and university rows store classifier codes in their underscore
columns (``_gender``, ``_payment_form``); these tables hold the labels.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import AuditMixin, Base, SoftDeleteMixin


class ClassifierMixin(AuditMixin, SoftDeleteMixin):
    """Code plus labels in the three UI languages."""

    code: Mapped[str] = mapped_column("code", String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column("name", String(1024))
    name_ru: Mapped[str | None] = mapped_column("name_ru", String(1024))
    name_en: Mapped[str | None] = mapped_column("name_en", String(1024))
    active: Mapped[bool | None] = mapped_column("active", Boolean)


class Country(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_country"


class Citizenship(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_citizenship"


class Nationality(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_nationality"


class Gender(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_gender"


class Course(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_course"


class EducationType(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_education_type"


class EducationForm(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_education_form"


class EducationLanguage(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_education_language"


class EducationYear(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_education_year"


class PaymentForm(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_payment_form"


class StudentStatusType(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_student_status_type"


class UniversityType(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_university_type"


class Ownership(ClassifierMixin, Base):
    __tablename__ = "hemishe_h_ownership"


class Soato(AuditMixin, SoftDeleteMixin, Base):
    """Territory code: regions at the top, districts below via ``parent_code``."""

    __tablename__ = "hemishe_h_soato"

    code: Mapped[str] = mapped_column("code", String(20), primary_key=True)
    name_uz: Mapped[str | None] = mapped_column("name_uz", String(1024))
    name_ru: Mapped[str | None] = mapped_column("name_ru", String(1024))
    parent_code: Mapped[str | None] = mapped_column("parent_code", String(20), index=True)
