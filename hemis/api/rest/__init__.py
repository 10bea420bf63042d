# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""CUBA-compatible REST routes under ``/app/rest``.

Modules:
    entities: Generic entity CRUD (``/v2/entities/{entityName}``).
    oauth: Token and revocation endpoints.
    user_info: Current user profile.
    passport: Captcha, passport data and personal data services.
    registries: GUVD, tax, social and employment services.
    internal: Student, diploma, contract, classifier, OTM and faculty lookups.
"""

from fastapi import APIRouter

from hemis.api.rest import entities, internal, oauth, passport, registries, user_info

router = APIRouter(prefix="/app/rest")

router.include_router(oauth.router, tags=["OAuth"])
router.include_router(user_info.router, tags=["User Info"])
router.include_router(entities.router, prefix="/v2/entities", tags=["Entities"])
router.include_router(passport.router, prefix="/v2/services", tags=["Passport"])
router.include_router(registries.router, prefix="/v2/services", tags=["Registries"])
router.include_router(internal.router, prefix="/v2/services", tags=["Internal Services"])
