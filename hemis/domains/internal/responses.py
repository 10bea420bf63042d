# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result maps shared by the database-backed CUBA services."""

from collections.abc import Iterable
from typing import Any

from hemis.domains.cuba.serializer import to_json_value
from hemis.domains.integration.base import error_response


def success_response(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def success_list_response(items: list[Any]) -> dict[str, Any]:
    return {"success": True, "data": items, "count": len(items)}


def not_found(what: str) -> dict[str, Any]:
    return error_response("not_found", f"{what} not found")


def pick(instance: Any, fields: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Copy model attributes into a JSON-ready map.

    Args:
        instance: ORM row.
        fields: Pairs of (map key, model attribute).
    """
    return {key: to_json_value(getattr(instance, attr)) for key, attr in fields}
