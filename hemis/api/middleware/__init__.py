# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

This package provides middleware for request processing:
- AuthMiddleware: JWT authentication with the revocation check.
- RequestLoggingMiddleware: request id and access log.
- limiter: slowapi rate limiter.
"""

from hemis.api.middleware.auth import AuthMiddleware, CurrentUser, get_current_user
from hemis.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from hemis.api.middleware.request_logging import RequestLoggingMiddleware

__all__ = [
    "AuthMiddleware",
    "CurrentUser",
    "RequestLoggingMiddleware",
    "get_current_user",
    "limiter",
    "rate_limit_exceeded_handler",
]
