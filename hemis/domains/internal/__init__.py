# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database-backed CUBA service methods (students, diplomas, contracts, classifiers)."""

from hemis.domains.internal.classifiers import ClassifierLookupService
from hemis.domains.internal.documents import (
    ContractLookupService,
    DiplomaBlankLookupService,
    DiplomaLookupService,
)
from hemis.domains.internal.faculty import FacultyLookupService
from hemis.domains.internal.otm import OtmLookupService
from hemis.domains.internal.student import StudentLookupService

__all__ = [
    "ClassifierLookupService",
    "ContractLookupService",
    "DiplomaBlankLookupService",
    "DiplomaLookupService",
    "FacultyLookupService",
    "OtmLookupService",
    "StudentLookupService",
]
