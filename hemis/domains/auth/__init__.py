# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain: legacy passwords, JWTs and the OAuth2 grants."""

from hemis.domains.auth.jwt import (
    InvalidTokenError,
    JWTError,
    JWTManager,
    TokenExpiredError,
    TokenPair,
    TokenPayload,
)
from hemis.domains.auth.password import PasswordHasher
from hemis.domains.auth.service import (
    AuthenticationError,
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
    LegacyAuthService,
    UnsupportedGrantTypeError,
)
from hemis.domains.auth.token_blacklist import TokenBlacklist
from hemis.domains.auth.user_info import user_info

__all__ = [
    "AuthenticationError",
    "InvalidClientError",
    "InvalidGrantError",
    "InvalidRequestError",
    "InvalidTokenError",
    "JWTError",
    "JWTManager",
    "LegacyAuthService",
    "PasswordHasher",
    "TokenBlacklist",
    "TokenExpiredError",
    "TokenPair",
    "TokenPayload",
    "UnsupportedGrantTypeError",
    "user_info",
]
