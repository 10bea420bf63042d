# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Conversion between ORM rows and CUBA entity maps.

A CUBA map is a flat JSON object that starts with ``_entityName`` and
``_instanceName`` followed by the entity attributes, keyed by their
column names (``_university``, ``firstname``) except for the audit
columns which use CUBA's camelCase (``createTs``, ``updatedBy``).

Example:
    >>> to_map(student, get_descriptor("hemishe_EStudent"))
    {'_entityName': 'hemishe_EStudent', '_instanceName': 'Aliyev Vali', 'id': '...', ...}
"""

import enum
import uuid
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from hemis.domains.entities.registry import Attribute, EntityDescriptor
from hemis.utils.datetime import (
    format_cuba_datetime,
    format_time,
    parse_cuba_datetime,
    parse_date,
    parse_time,
)

ENTITY_NAME_KEY = "_entityName"
INSTANCE_NAME_KEY = "_instanceName"
LOCAL_VIEW = "_local"

# Attributes left out of the _local view besides references.
_LOCAL_EXCLUDED = frozenset({"version", "fullname", "full_name"})


def to_json_value(value: Any) -> Any:
    """Convert a Python column value to its CUBA JSON representation."""
    if isinstance(value, datetime):
        return format_cuba_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return format_time(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, Decimal):
        return float(value)
    return value


def instance_name(instance: Any, descriptor: EntityDescriptor) -> str:
    """Build the ``_instanceName`` shown by CUBA clients.

    Args:
        instance: ORM row.
        descriptor: Descriptor of the row's entity.

    Returns:
        Person name, "name - code", either part alone, or the primary key.
    """
    if descriptor.person:
        parts = [
            getattr(instance, key, None) for key in ("lastname", "firstname", "fathername")
        ]
        joined = " ".join(p.strip() for p in parts if p and p.strip())
        if joined:
            return joined
    else:
        name = _text(instance, descriptor.name_attribute)
        code = _text(instance, descriptor.code_attribute)
        if name and code:
            return f"{name} - {code}"
        if name or code:
            return name or code
    pk = getattr(instance, descriptor.primary_key.key, None)
    return "" if pk is None else str(pk)


def _text(instance: Any, key: str | None) -> str | None:
    if key is None:
        return None
    value = getattr(instance, key, None)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_map(
    instance: Any,
    descriptor: EntityDescriptor,
    return_nulls: bool = False,
    view: str | None = None,
) -> dict[str, Any]:
    """Render an ORM row as a CUBA map.

    Args:
        instance: ORM row.
        descriptor: Descriptor of the row's entity.
        return_nulls: Include attributes whose value is null.
        view: CUBA view name. ``_local`` drops references and computed
            attributes; any other view renders everything.

    Returns:
        Ordered dict ready for JSON encoding.
    """
    local = view == LOCAL_VIEW
    result: dict[str, Any] = {
        ENTITY_NAME_KEY: descriptor.entity_name,
        INSTANCE_NAME_KEY: instance_name(instance, descriptor),
    }

    for attr in descriptor.attributes:
        if attr.hidden:
            continue
        if local and (attr.is_reference or attr.name in _LOCAL_EXCLUDED):
            continue
        value = getattr(instance, attr.key)
        if value is None and not return_nulls:
            continue
        result[attr.name] = to_json_value(value)

    if not local:
        for name in descriptor.computed:
            value = getattr(instance, name, None)
            if value is None and not return_nulls:
                continue
            result[name] = to_json_value(value)

    return result


def to_map_list(
    instances: Iterable[Any],
    descriptor: EntityDescriptor,
    return_nulls: bool = False,
    view: str | None = None,
) -> list[dict[str, Any]]:
    """Render several rows with ``to_map``."""
    return [to_map(i, descriptor, return_nulls=return_nulls, view=view) for i in instances]


def minimal_response(instance: Any, descriptor: EntityDescriptor) -> dict[str, Any]:
    """Body returned by create and update: entity name, instance name and id."""
    pk = descriptor.primary_key
    return {
        ENTITY_NAME_KEY: descriptor.entity_name,
        INSTANCE_NAME_KEY: instance_name(instance, descriptor),
        pk.name: to_json_value(getattr(instance, pk.key)),
    }


def coerce_value(attr: Attribute, value: Any) -> Any:
    """Convert a JSON value to the Python type of a column.

    References may be sent either as a plain id or as a nested
    ``{"id": ...}`` object.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        ref = value.get("id", value.get("code"))
        if ref is None:
            raise ValueError(f"Attribute {attr.name}: nested object without id")
        value = ref
    if isinstance(value, (list, tuple)):
        raise ValueError(f"Attribute {attr.name}: unexpected array")

    target = attr.python_type
    try:
        if target is uuid.UUID:
            return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        if target is datetime:
            return value if isinstance(value, datetime) else parse_cuba_datetime(str(value))
        if target is date:
            return value if isinstance(value, date) else parse_date(str(value))
        if target is time:
            return value if isinstance(value, time) else parse_time(str(value))
        if target is bool:
            return _to_bool(value)
        if target is int:
            return _to_int(value)
        if target is float:
            if isinstance(value, bool):
                raise ValueError("boolean is not a number")
            return float(value)
        if target is Decimal:
            if isinstance(value, bool):
                raise ValueError("boolean is not a number")
            return Decimal(str(value))
        return value if isinstance(value, str) else str(value)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise ValueError(f"Attribute {attr.name}: invalid value {value!r}") from e


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    return int(str(value).strip())


def from_map(
    data: Mapping[str, Any],
    descriptor: EntityDescriptor,
    include_primary_key: bool = False,
) -> dict[str, Any]:
    """Extract writable column values from a CUBA map.

    ``_entityName``, ``_instanceName``, unknown keys, read-only
    attributes and null values are skipped. The primary key is only
    taken when ``include_primary_key`` is set (creates).

    Args:
        data: Request body.
        descriptor: Target entity.
        include_primary_key: Accept the primary key attribute.

    Returns:
        Mapping of model attribute key to converted value.

    Raises:
        ValueError: If a value cannot be converted.
    """
    values: dict[str, Any] = {}
    for name, raw in data.items():
        if name in (ENTITY_NAME_KEY, INSTANCE_NAME_KEY) or raw is None:
            continue
        attr = descriptor.find(name)
        if attr is None or attr.read_only:
            continue
        if attr.primary_key and not include_primary_key:
            continue
        values[attr.key] = coerce_value(attr, raw)
    return values
