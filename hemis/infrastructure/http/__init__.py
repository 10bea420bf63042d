# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Outbound HTTP infrastructure (httpx)."""

from hemis.infrastructure.http.client import (
    IntegrationError,
    close_http_client,
    create_http_client,
    get_http_client,
    init_http_client,
)

__all__ = [
    "IntegrationError",
    "close_http_client",
    "create_http_client",
    "get_http_client",
    "init_http_client",
]
