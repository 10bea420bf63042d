# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Sorting, paging and filter translation for CUBA REST queries.

CUBA REST v2 search filters look like::

    {
        "conditions": [
            {"property": "_university", "operator": "=", "value": "00001"},
            {
                "group": "OR",
                "conditions": [
                    {"property": "lastname", "operator": "startsWith", "value": "Ali"},
                    {"property": "firstname", "operator": "contains", "value": "vali"}
                ]
            }
        ]
    }

Top-level conditions are combined with AND. String operators are
case-insensitive, as in CUBA.
"""

import json
from collections.abc import Mapping
from typing import Any

from sqlalchemy import String, and_, cast, or_
from sqlalchemy.sql.elements import ColumnElement

from hemis.domains.cuba.serializer import coerce_value
from hemis.domains.entities.exceptions import EntityValidationError
from hemis.domains.entities.registry import Attribute, EntityDescriptor

DEFAULT_LIMIT = 50

_SORT_DIRECTIONS = {"ASC": False, "DESC": True}

_COMPARISONS = {
    "=": lambda col, v: col.is_(None) if v is None else col == v,
    "<>": lambda col, v: col.is_not(None) if v is None else col != v,
    ">": lambda col, v: col > v,
    ">=": lambda col, v: col >= v,
    "<": lambda col, v: col < v,
    "<=": lambda col, v: col <= v,
}

_STRING_OPERATORS = {
    "startsWith": lambda col, v: col.istartswith(v, autoescape=True),
    "endsWith": lambda col, v: col.iendswith(v, autoescape=True),
    "contains": lambda col, v: col.icontains(v, autoescape=True),
    "doesNotContain": lambda col, v: ~col.icontains(v, autoescape=True),
}

OPERATORS = frozenset(_COMPARISONS) | frozenset(_STRING_OPERATORS) | {
    "in",
    "notIn",
    "notEmpty",
    "isNull",
}


def parse_sort(sort: str | None, descriptor: EntityDescriptor) -> list[tuple[Attribute, bool]]:
    """Parse the ``sort`` query parameter.

    Accepted forms, comma separated: ``field``, ``+field``, ``-field``,
    ``field-desc``, ``field-asc`` and the Spring pair ``field,DESC``.

    Args:
        sort: Raw parameter value.
        descriptor: Entity being queried.

    Returns:
        List of ``(attribute, descending)``. Primary key ascending when
        nothing is given.

    Raises:
        EntityValidationError: If a field is not an attribute of the entity.
    """
    if sort is None or not sort.strip():
        return [(descriptor.primary_key, False)]

    tokens = [t.strip() for t in sort.split(",") if t.strip()]
    orders: list[tuple[Attribute, bool]] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        descending = False
        following = tokens[i + 1].upper() if i + 1 < len(tokens) else None
        if following in _SORT_DIRECTIONS:
            descending = _SORT_DIRECTIONS[following]
            i += 1
        elif token.startswith("-"):
            token, descending = token[1:], True
        elif token.startswith("+"):
            token = token[1:]
        elif token.lower().endswith("-desc"):
            token, descending = token[:-5], True
        elif token.lower().endswith("-asc"):
            token = token[:-4]
        i += 1

        attr = descriptor.find(token)
        if attr is None:
            raise EntityValidationError(f"Unknown sort property: {token}")
        orders.append((attr, descending))
    return orders


def order_by_clauses(
    orders: list[tuple[Attribute, bool]], descriptor: EntityDescriptor
) -> list[Any]:
    """Turn parsed sort orders into ORDER BY clauses.

    The primary key is appended as a tiebreaker so pages are stable.
    """
    clauses = []
    for attr, descending in orders:
        col = descriptor.model_attr(attr)
        clauses.append(col.desc() if descending else col.asc())
    if all(not attr.primary_key for attr, _ in orders):
        clauses.append(descriptor.model_attr(descriptor.primary_key).asc())
    return clauses


def normalize_paging(offset: int | None, limit: int | None, max_page_size: int) -> tuple[int, int]:
    """Apply defaults and bounds to offset and limit.

    Raises:
        EntityValidationError: On negative offset or non-positive limit.
    """
    offset = 0 if offset is None else offset
    limit = DEFAULT_LIMIT if limit is None else limit
    if offset < 0:
        raise EntityValidationError("offset must be >= 0")
    if limit < 1:
        raise EntityValidationError("limit must be >= 1")
    return offset, min(limit, max_page_size)


def parse_filter(raw: str | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Decode a filter given as a JSON string or an already parsed body.

    Raises:
        EntityValidationError: If the JSON is malformed or not an object.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        if not raw.strip():
            return None
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise EntityValidationError(f"Invalid filter JSON: {e.msg}") from e
    if not isinstance(raw, Mapping):
        raise EntityValidationError("Filter must be a JSON object")
    return raw


def build_filter(
    filter_spec: Mapping[str, Any] | None, descriptor: EntityDescriptor
) -> ColumnElement[bool] | None:
    """Translate a CUBA filter into a SQLAlchemy WHERE condition.

    Args:
        filter_spec: Parsed filter object.
        descriptor: Entity being searched.

    Returns:
        Condition, or None when the filter has no conditions.

    Raises:
        EntityValidationError: On unknown properties, operators or bad values.
    """
    if not filter_spec:
        return None
    conditions = filter_spec.get("conditions")
    if conditions is None:
        return None
    return _build_group(conditions, "AND", descriptor)


def _build_group(
    conditions: Any, group: str, descriptor: EntityDescriptor
) -> ColumnElement[bool] | None:
    if not isinstance(conditions, list):
        raise EntityValidationError("Filter conditions must be an array")

    clauses = []
    for item in conditions:
        if not isinstance(item, Mapping):
            raise EntityValidationError("Filter condition must be an object")
        if "group" in item:
            clause = _build_group(item.get("conditions", []), str(item["group"]), descriptor)
        else:
            clause = _build_condition(item, descriptor)
        if clause is not None:
            clauses.append(clause)

    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]

    group = group.upper()
    if group == "AND":
        return and_(*clauses)
    if group == "OR":
        return or_(*clauses)
    raise EntityValidationError(f"Unknown filter group: {group}")


def _build_condition(
    condition: Mapping[str, Any], descriptor: EntityDescriptor
) -> ColumnElement[bool]:
    prop = condition.get("property")
    operator = condition.get("operator")
    value = condition.get("value")

    attr = descriptor.find(prop) if isinstance(prop, str) else None
    if attr is None:
        raise EntityValidationError(f"Unknown filter property: {prop}")
    if not isinstance(operator, str) or operator not in OPERATORS:
        raise EntityValidationError(f"Unknown filter operator: {operator}")

    col = descriptor.model_attr(attr)

    if operator == "isNull":
        return col.is_(None) if _flag(value, True) else col.is_not(None)
    if operator == "notEmpty":
        return col.is_not(None) if _flag(value, True) else col.is_(None)

    if operator in _STRING_OPERATORS:
        if value is None:
            raise EntityValidationError(f"Operator {operator} requires a value")
        if attr.python_type is not str:
            col = cast(col, String)
        return _STRING_OPERATORS[operator](col, str(value))

    if operator in ("in", "notIn"):
        if not isinstance(value, list):
            raise EntityValidationError(f"Operator {operator} requires an array value")
        items = [_coerce(attr, v) for v in value]
        return col.in_(items) if operator == "in" else col.not_in(items)

    return _COMPARISONS[operator](col, _coerce(attr, value))


def _coerce(attr: Attribute, value: Any) -> Any:
    try:
        return coerce_value(attr, value)
    except ValueError as e:
        raise EntityValidationError(str(e)) from e


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return bool(value)
