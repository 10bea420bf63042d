# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Proxies to external government services."""

from hemis.domains.integration.base import GovernmentApiService, error_response, require
from hemis.domains.integration.guvd_token import GuvdTokenService
from hemis.domains.integration.passport import PassportDataService, PersonalDataService
from hemis.domains.integration.registries import (
    EmploymentService,
    GuvdService,
    SocialService,
    TaxService,
)

__all__ = [
    "EmploymentService",
    "GovernmentApiService",
    "GuvdService",
    "GuvdTokenService",
    "PassportDataService",
    "PersonalDataService",
    "SocialService",
    "TaxService",
    "error_response",
    "require",
]
