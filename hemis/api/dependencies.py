# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get the authenticated user
- Build domain service instances over the shared Redis and HTTP clients

Example:
    @router.get("/{entity_id}")
    async def get_entity(
        entity_name: str,
        entity_id: str,
        service: EntityServiceDep,
        current_user: AuthenticatedUser,
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.api.middleware.auth import CurrentUser, get_current_user
from hemis.core.config import Settings, get_settings
from hemis.domains.auth.jwt import JWTManager
from hemis.domains.auth.password import PasswordHasher
from hemis.domains.auth.service import LegacyAuthService
from hemis.domains.auth.token_blacklist import TokenBlacklist
from hemis.domains.captcha import CaptchaService
from hemis.domains.entities.service import EntityService
from hemis.domains.integration import (
    EmploymentService,
    GuvdService,
    GuvdTokenService,
    PassportDataService,
    PersonalDataService,
    SocialService,
    TaxService,
)
from hemis.domains.internal import (
    ClassifierLookupService,
    ContractLookupService,
    DiplomaBlankLookupService,
    DiplomaLookupService,
    FacultyLookupService,
    OtmLookupService,
    StudentLookupService,
)
from hemis.infrastructure.cache import RedisClient, RedisError, get_redis
from hemis.infrastructure.database.connection import get_session
from hemis.infrastructure.http import IntegrationError, get_http_client

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a legacy database session.

    Yields:
        AsyncSession committed when the request succeeds.
    """
    async with get_session() as session:
        yield session


def get_app_settings() -> Settings:
    return get_settings()


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# =========================================================================
# Infrastructure
# =========================================================================


def get_redis_client() -> RedisClient:
    """Get the shared Redis client.

    Raises:
        HTTPException: 503 if Redis is not initialized.
    """
    try:
        return get_redis()
    except RedisError as e:
        logger.error("Redis unavailable: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cache not available",
        ) from e


def get_optional_redis() -> RedisClient | None:
    try:
        return get_redis()
    except RedisError:
        return None


def get_outbound_client() -> httpx.AsyncClient:
    """Get the shared httpx client for upstream registries.

    Raises:
        HTTPException: 503 if the client is not initialized.
    """
    try:
        return get_http_client()
    except IntegrationError as e:
        logger.error("HTTP client unavailable: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Outbound HTTP client not available",
        ) from e


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    settings = get_settings()
    return JWTManager(settings.jwt, settings.legacy_oauth)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    hasher: PasswordHasher = Depends(get_password_hasher),
    redis: RedisClient | None = Depends(get_optional_redis),
) -> LegacyAuthService:
    """Get the legacy OAuth2 service.

    Token revocation is disabled while Redis is unavailable.
    """
    blacklist = TokenBlacklist(redis) if redis is not None else None
    return LegacyAuthService(
        db,
        jwt_manager,
        get_settings().legacy_oauth,
        blacklist=blacklist,
        hasher=hasher,
    )


def get_entity_service(db: AsyncSession = Depends(get_db)) -> EntityService:
    settings = get_settings()
    return EntityService(
        db,
        timezone=settings.api.timezone,
        max_page_size=settings.api.max_page_size,
    )


def get_captcha_service(redis: RedisClient = Depends(get_redis_client)) -> CaptchaService:
    return CaptchaService(redis, get_settings().captcha)


def get_captcha_validator(
    redis: RedisClient | None = Depends(get_optional_redis),
) -> CaptchaService:
    """Captcha checks for the passport lookups; they fail while Redis is down."""
    return CaptchaService(redis, get_settings().captcha)


def get_guvd_token_service(
    client: httpx.AsyncClient = Depends(get_outbound_client),
    redis: RedisClient | None = Depends(get_optional_redis),
) -> GuvdTokenService:
    return GuvdTokenService(client, redis, get_settings().guvd)


def get_passport_service(
    client: httpx.AsyncClient = Depends(get_outbound_client),
    captcha: CaptchaService = Depends(get_captcha_validator),
    guvd_token: GuvdTokenService = Depends(get_guvd_token_service),
) -> PassportDataService:
    return PassportDataService(client, get_settings().passport, captcha, guvd_token)


def get_personal_data_service(
    client: httpx.AsyncClient = Depends(get_outbound_client),
) -> PersonalDataService:
    return PersonalDataService(client, get_settings().personal_data)


def get_guvd_service(
    client: httpx.AsyncClient = Depends(get_outbound_client),
    guvd_token: GuvdTokenService = Depends(get_guvd_token_service),
) -> GuvdService:
    return GuvdService(client, get_settings().guvd, guvd_token)


def get_tax_service(client: httpx.AsyncClient = Depends(get_outbound_client)) -> TaxService:
    return TaxService(client, get_settings().tax)


def get_social_service(client: httpx.AsyncClient = Depends(get_outbound_client)) -> SocialService:
    return SocialService(client, get_settings().social)


def get_employment_service(
    client: httpx.AsyncClient = Depends(get_outbound_client),
) -> EmploymentService:
    return EmploymentService(client, get_settings().employment)


def get_student_lookup(db: AsyncSession = Depends(get_db)) -> StudentLookupService:
    return StudentLookupService(db)


def get_diploma_lookup(db: AsyncSession = Depends(get_db)) -> DiplomaLookupService:
    return DiplomaLookupService(db)


def get_contract_lookup(db: AsyncSession = Depends(get_db)) -> ContractLookupService:
    return ContractLookupService(db)


def get_diploma_blank_lookup(db: AsyncSession = Depends(get_db)) -> DiplomaBlankLookupService:
    return DiplomaBlankLookupService(db)


def get_classifier_lookup(db: AsyncSession = Depends(get_db)) -> ClassifierLookupService:
    return ClassifierLookupService(db)


def get_otm_lookup(db: AsyncSession = Depends(get_db)) -> OtmLookupService:
    return OtmLookupService(db)


def get_faculty_lookup(db: AsyncSession = Depends(get_db)) -> FacultyLookupService:
    return FacultyLookupService(db)


# =========================================================================
# Type aliases for cleaner endpoint signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AuthServiceDep = Annotated[LegacyAuthService, Depends(get_auth_service)]
EntityServiceDep = Annotated[EntityService, Depends(get_entity_service)]
CaptchaServiceDep = Annotated[CaptchaService, Depends(get_captcha_service)]
PassportServiceDep = Annotated[PassportDataService, Depends(get_passport_service)]
PersonalDataServiceDep = Annotated[PersonalDataService, Depends(get_personal_data_service)]
GuvdServiceDep = Annotated[GuvdService, Depends(get_guvd_service)]
TaxServiceDep = Annotated[TaxService, Depends(get_tax_service)]
SocialServiceDep = Annotated[SocialService, Depends(get_social_service)]
EmploymentServiceDep = Annotated[EmploymentService, Depends(get_employment_service)]
StudentLookupDep = Annotated[StudentLookupService, Depends(get_student_lookup)]
DiplomaLookupDep = Annotated[DiplomaLookupService, Depends(get_diploma_lookup)]
ContractLookupDep = Annotated[ContractLookupService, Depends(get_contract_lookup)]
DiplomaBlankLookupDep = Annotated[DiplomaBlankLookupService, Depends(get_diploma_blank_lookup)]
ClassifierLookupDep = Annotated[ClassifierLookupService, Depends(get_classifier_lookup)]
OtmLookupDep = Annotated[OtmLookupService, Depends(get_otm_lookup)]
FacultyLookupDep = Annotated[FacultyLookupService, Depends(get_faculty_lookup)]
