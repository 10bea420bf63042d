# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared behaviour of the government API proxies.

Upstream registries answer either with a JSON document or with the
bare text ``no`` (sometimes quoted) when nothing matches. Clients of the
legacy API expect both cases folded into a flat map with a ``success``
flag, and never an HTTP error:

    {"success": true, ...upstream fields...}
    {"success": true, "in_women_registry": false}
    {"success": false, "code": "not_found", "message": "Data not found"}
    {"success": false, "code": "service_not_available", "message": "... not available"}
"""

import json
import logging
import re
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def error_response(code: str, message: str) -> dict[str, Any]:
    """Build a ``{"success": false, "code", "message"}`` map."""
    return {"success": False, "code": code, "message": message}


def is_no_response(body: str | None) -> bool:
    """Check for the upstream "no" answer, ignoring quotes and punctuation."""
    return body is not None and _NON_ALNUM.sub("", body).lower() == "no"


def require(**params: Any) -> dict[str, Any] | None:
    """Check that every keyword argument is non-blank.

    Returns:
        ``invalid_parameter`` error map for the first blank parameter,
        or None when all are present.
    """
    for name, value in params.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            return error_response("invalid_parameter", f"Required parameter: {name}")
    return None


class GovernmentApiService:
    """Base class for proxies to government registries.

    Attributes:
        _client: Shared httpx client.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def call(
        self,
        url: str,
        params: dict[str, Any] | None,
        flag_key: str | None,
        service_name: str,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET an upstream URL and fold the answer into a result map.

        Args:
            url: Full upstream URL.
            params: Query parameters; None values are dropped.
            flag_key: Boolean key reporting whether the person was found.
                When set, a "no" answer is a success with the flag false.
            service_name: Name used in logs and in the unavailable message.
            headers: Extra request headers.

        Returns:
            Result map; never raises for upstream failures.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self._client.get(url, params=query, headers=headers)
            response.raise_for_status()
            return self._fold(response.text, flag_key, service_name)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("%s - upstream call failed: %s", service_name, str(e))
            return error_response("service_not_available", f"{service_name} not available")

    @staticmethod
    def _fold(body: str, flag_key: str | None, service_name: str) -> dict[str, Any]:
        if is_no_response(body):
            logger.info("%s - data not found", service_name)
            if flag_key is not None:
                return {"success": True, flag_key: False}
            return error_response("not_found", "Data not found")

        data = json.loads(body)
        if isinstance(data, list):
            result: dict[str, Any] = {"success": True, "data": data}
        elif isinstance(data, dict):
            result = dict(data)
            result["success"] = True
        else:
            raise ValueError(f"Unexpected JSON document: {type(data).__name__}")

        if flag_key is not None:
            result[flag_key] = True
        logger.info("%s - data retrieved", service_name)
        return result
