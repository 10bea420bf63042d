# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models mapped onto the legacy old-hemis tables."""

from hemis.infrastructure.database.models.base import (
    AuditMixin,
    Base,
    SoftDeleteMixin,
    StandardEntityMixin,
)
from hemis.infrastructure.database.models.classifier import (
    Citizenship,
    ClassifierMixin,
    Country,
    Course,
    EducationForm,
    EducationLanguage,
    EducationType,
    EducationYear,
    Gender,
    Nationality,
    Ownership,
    PaymentForm,
    Soato,
    StudentStatusType,
    UniversityType,
)
from hemis.infrastructure.database.models.document import Contract, Diploma, DiplomaBlank
from hemis.infrastructure.database.models.finance import Employment, Scholarship
from hemis.infrastructure.database.models.schedule import Schedule
from hemis.infrastructure.database.models.student import Student, StudentGpa
from hemis.infrastructure.database.models.teacher import Teacher
from hemis.infrastructure.database.models.university import Faculty, Group, Specialty, University
from hemis.infrastructure.database.models.user import User

__all__ = [
    # Base
    "AuditMixin",
    "Base",
    "SoftDeleteMixin",
    "StandardEntityMixin",
    # Classifiers
    "Citizenship",
    "ClassifierMixin",
    "Country",
    "Course",
    "EducationForm",
    "EducationLanguage",
    "EducationType",
    "EducationYear",
    "Gender",
    "Nationality",
    "Ownership",
    "PaymentForm",
    "Soato",
    "StudentStatusType",
    "UniversityType",
    # Entities
    "Contract",
    "Diploma",
    "DiplomaBlank",
    "Employment",
    "Faculty",
    "Group",
    "Scholarship",
    "Schedule",
    "Specialty",
    "Student",
    "StudentGpa",
    "Teacher",
    "University",
    "User",
]
