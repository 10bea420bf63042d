# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""CUBA REST v2 entity endpoints.

One router serves every registered entity:
- GET    /entities/{entityName}              - page of instances
- GET    /entities/{entityName}/search       - filtered page (filter in query)
- POST   /entities/{entityName}/search       - filtered page (filter in body)
- GET    /entities/{entityName}/{id}         - one instance
- POST   /entities/{entityName}              - create
- PUT    /entities/{entityName}/{id}         - partial update
- DELETE /entities/{entityName}/{id}         - soft delete

Errors use the CUBA body ``{"error": ..., "details": ...}``.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Query, Request, Response, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hemis.api.dependencies import AuthenticatedUser, EntityServiceDep
from hemis.domains.cuba.serializer import minimal_response, to_map, to_map_list
from hemis.domains.entities import (
    EntityNotFoundError,
    EntityServiceError,
    EntityValidationError,
    Operation,
    OperationNotAllowedError,
    UnknownEntityError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ENTITIES_PATH = "/app/rest/v2/entities"
TOTAL_COUNT_HEADER = "X-Total-Count"

_ERROR_STATUS = {
    UnknownEntityError: status.HTTP_404_NOT_FOUND,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    EntityValidationError: status.HTTP_400_BAD_REQUEST,
    OperationNotAllowedError: status.HTTP_405_METHOD_NOT_ALLOWED,
}


async def entity_error_handler(request: Request, exc: EntityServiceError) -> JSONResponse:
    """Render entity service errors as CUBA error bodies."""
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Entity request failed: %s %s", request.url.path, exc.details)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.error, "details": exc.details},
    )


async def entity_request_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed entity parameters as a CUBA 400 body.

    Requests outside the entity endpoints keep the FastAPI 422 response.
    """
    if not request.url.path.startswith(ENTITIES_PATH):
        return await request_validation_exception_handler(request, exc)

    problems = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err.get("loc", ())[1:])
        problems.append(f"{name}: {err.get('msg')}" if name else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": EntityValidationError.error, "details": "; ".join(problems)},
    )


def _page_response(
    items: list[Any],
    total: int,
    descriptor: Any,
    return_nulls: bool,
    view: str | None,
    return_count: bool,
) -> JSONResponse:
    headers = {TOTAL_COUNT_HEADER: str(total)} if return_count else None
    return JSONResponse(
        content=to_map_list(items, descriptor, return_nulls=return_nulls, view=view),
        headers=headers,
    )


@router.get("/{entity_name}")
async def list_entities(
    entity_name: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    offset: int | None = Query(None, description="Rows to skip"),
    limit: int | None = Query(None, description="Page size"),
    sort: str | None = Query(None, description="Sort expression, e.g. -createTs"),
    return_nulls: bool = Query(False, alias="returnNulls"),
    view: str | None = Query(None),
    return_count: bool = Query(False, alias="returnCount"),
) -> JSONResponse:
    """List instances of an entity page by page."""
    items, total = await service.list_entities(entity_name, offset=offset, limit=limit, sort=sort)
    descriptor = service.descriptor(entity_name, Operation.READ)
    return _page_response(items, total, descriptor, return_nulls, view, return_count)


@router.get("/{entity_name}/search")
async def search_entities_get(
    entity_name: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    filter: str | None = Query(None, description="CUBA filter as JSON"),
    offset: int | None = Query(None),
    limit: int | None = Query(None),
    sort: str | None = Query(None),
    return_nulls: bool = Query(False, alias="returnNulls"),
    view: str | None = Query(None),
    return_count: bool = Query(False, alias="returnCount"),
) -> JSONResponse:
    """Search with the filter passed as a query parameter."""
    items, total = await service.search(
        entity_name, filter, offset=offset, limit=limit, sort=sort
    )
    descriptor = service.descriptor(entity_name, Operation.READ)
    return _page_response(items, total, descriptor, return_nulls, view, return_count)


@router.post("/{entity_name}/search")
async def search_entities_post(
    entity_name: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Search with the filter and paging options in the JSON body.

    The body holds ``filter`` plus the optional ``offset``, ``limit``,
    ``sort``, ``returnNulls``, ``view`` and ``returnCount`` keys.
    """
    body = body or {}
    return_nulls = bool(body.get("returnNulls", False))
    return_count = bool(body.get("returnCount", False))
    try:
        offset = _optional_int(body.get("offset"))
        limit = _optional_int(body.get("limit"))
    except ValueError as e:
        raise EntityValidationError(str(e)) from e

    items, total = await service.search(
        entity_name,
        body.get("filter"),
        offset=offset,
        limit=limit,
        sort=body.get("sort"),
    )
    descriptor = service.descriptor(entity_name, Operation.READ)
    return _page_response(items, total, descriptor, return_nulls, body.get("view"), return_count)


@router.get("/{entity_name}/{entity_id}")
async def get_entity(
    entity_name: str,
    entity_id: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    return_nulls: bool = Query(False, alias="returnNulls"),
    view: str | None = Query(None),
    dynamic_attributes: bool = Query(False, alias="dynamicAttributes"),
) -> JSONResponse:
    """Get one instance by id."""
    instance = await service.get(entity_name, entity_id)
    descriptor = service.descriptor(entity_name, Operation.READ)
    return JSONResponse(content=to_map(instance, descriptor, return_nulls=return_nulls, view=view))


@router.post("/{entity_name}", status_code=status.HTTP_201_CREATED)
async def create_entity(
    entity_name: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    body: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Create an instance from a CUBA map."""
    instance = await service.create(entity_name, body, username=current_user.username)
    descriptor = service.descriptor(entity_name, Operation.READ)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=minimal_response(instance, descriptor),
    )


@router.put("/{entity_name}/{entity_id}")
async def update_entity(
    entity_name: str,
    entity_id: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
    body: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Update the attributes present in the body."""
    instance = await service.update(
        entity_name, entity_id, body, username=current_user.username
    )
    descriptor = service.descriptor(entity_name, Operation.READ)
    return JSONResponse(content=minimal_response(instance, descriptor))


@router.delete("/{entity_name}/{entity_id}")
async def delete_entity(
    entity_name: str,
    entity_id: str,
    service: EntityServiceDep,
    current_user: AuthenticatedUser,
) -> Response:
    """Soft delete an instance."""
    await service.delete(entity_name, entity_id, username=current_user.username)
    return Response(status_code=status.HTTP_200_OK)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Expected an integer, got {value!r}") from None
