# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared outbound HTTP client for government service proxies.

One ``httpx.AsyncClient`` is created at startup and reused by every
integration service so connections to the same upstream hosts are pooled.

Example:
    from hemis.infrastructure.http import init_http_client, get_http_client

    init_http_client(settings)
    client = get_http_client()
    response = await client.get(url, params={"pinfl": pinfl})
"""

from typing import TYPE_CHECKING, Optional

import httpx

if TYPE_CHECKING:
    from hemis.core.config.settings import Settings

# Module-level state
_http_client: Optional[httpx.AsyncClient] = None


class IntegrationError(Exception):
    """Exception raised when an upstream service call fails.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying httpx error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def create_http_client(
    settings: "Settings",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build an AsyncClient configured from ``ExternalHTTPSettings``.

    Args:
        settings: Application settings.
        transport: Optional transport override (tests pass MockTransport).

    Returns:
        New AsyncClient. The caller owns it and must close it.
    """
    return httpx.AsyncClient(
        timeout=settings.external_http.timeout,
        verify=settings.external_http.verify_ssl,
        follow_redirects=True,
        transport=transport,
    )


def init_http_client(settings: "Settings") -> None:
    """Initialize the global HTTP client."""
    global _http_client

    _http_client = create_http_client(settings)


async def close_http_client() -> None:
    """Close the global HTTP client."""
    global _http_client

    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def get_http_client() -> httpx.AsyncClient:
    """Get the global HTTP client.

    Raises:
        IntegrationError: If the client has not been initialized.
    """
    if _http_client is None:
        raise IntegrationError("HTTP client not initialized. Call init_http_client() first.")
    return _http_client
