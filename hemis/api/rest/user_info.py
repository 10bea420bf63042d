# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Current user endpoint in the old-hemis format."""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from hemis.api.dependencies import AuthenticatedUser, AuthServiceDep
from hemis.domains.auth.user_info import user_info

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v2/userInfo")
@router.get("/user/info")
async def get_user_info(
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
) -> JSONResponse:
    """Return the profile of the token's user, without any wrapper."""
    user = await auth_service.get_user(current_user.id)
    if user is None:
        logger.warning("Token references unknown user: %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return JSONResponse(content=user_info(user))
