# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the legacy HEMIS API.

Example:
    >>> from hemis.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from hemis.core.config.settings import (
    APISettings,
    CaptchaSettings,
    CORSSettings,
    DatabaseSettings,
    EmploymentSettings,
    ExternalHTTPSettings,
    GuvdSettings,
    JWTSettings,
    LegacyOAuthSettings,
    PassportSettings,
    PersonalDataSettings,
    RateLimitSettings,
    RedisSettings,
    Settings,
    SocialSettings,
    TaxSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "RedisSettings",
    "JWTSettings",
    "LegacyOAuthSettings",
    "CaptchaSettings",
    "ExternalHTTPSettings",
    "GuvdSettings",
    "PassportSettings",
    "PersonalDataSettings",
    "TaxSettings",
    "SocialSettings",
    "EmploymentSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
]
