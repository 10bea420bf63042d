# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic CRUD service for registered CUBA entities.

This module provides the EntityService that handles:
- Lookup by primary key
- Paged listing and filtered search with CUBA sort syntax
- Create, partial update and soft delete with CUBA audit stamps

Soft-deleted rows (``delete_ts`` set) are invisible to every operation.

Example:
    >>> service = EntityService(db)
    >>> students, total = await service.list_entities("hemishe_EStudent", limit=20)
    >>> student = await service.create("hemishe_EStudent", body, username="admin")
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.cuba.query import (
    build_filter,
    normalize_paging,
    order_by_clauses,
    parse_filter,
    parse_sort,
)
from hemis.domains.cuba.serializer import coerce_value, from_map
from hemis.domains.entities.exceptions import (
    EntityNotFoundError,
    EntityValidationError,
    OperationNotAllowedError,
)
from hemis.domains.entities.registry import (
    EntityDescriptor,
    EntityRegistry,
    Operation,
    get_registry,
)
from hemis.utils.datetime import local_now

logger = logging.getLogger(__name__)


class EntityService:
    """CRUD over the legacy tables through entity descriptors.

    Attributes:
        _db: Async database session.
        _registry: Entity registry.
        _timezone: Zone of the naive audit timestamps.
        _max_page_size: Upper bound applied to ``limit``.
    """

    def __init__(
        self,
        db: AsyncSession,
        registry: EntityRegistry | None = None,
        timezone: str = "Asia/Tashkent",
        max_page_size: int = 5000,
    ) -> None:
        self._db = db
        self._registry = registry or get_registry()
        self._timezone = timezone
        self._max_page_size = max_page_size

    def descriptor(self, entity_name: str, operation: Operation) -> EntityDescriptor:
        """Resolve an entity and check that it supports an operation.

        Raises:
            UnknownEntityError: If the entity is not registered.
            OperationNotAllowedError: If the operation is disabled.
        """
        descriptor = self._registry.get(entity_name)
        if not descriptor.allows(operation):
            raise OperationNotAllowedError(
                f"Operation {operation.value} is not allowed for {entity_name}"
            )
        return descriptor

    def _base_query(self, descriptor: EntityDescriptor) -> Select:
        stmt = select(descriptor.model)
        if descriptor.soft_delete:
            stmt = stmt.where(descriptor.model.delete_ts.is_(None))
        return stmt

    async def _load(self, descriptor: EntityDescriptor, entity_id: Any) -> Any:
        pk = descriptor.primary_key
        try:
            key = coerce_value(pk, entity_id)
        except ValueError:
            raise EntityNotFoundError(
                f"Entity {descriptor.entity_name} with id {entity_id} not found"
            ) from None

        stmt = self._base_query(descriptor).where(descriptor.model_attr(pk) == key)
        result = await self._db.execute(stmt)
        instance = result.scalar_one_or_none()
        if instance is None:
            raise EntityNotFoundError(
                f"Entity {descriptor.entity_name} with id {entity_id} not found"
            )
        return instance

    async def get(self, entity_name: str, entity_id: Any) -> Any:
        """Get one instance by primary key.

        Args:
            entity_name: CUBA entity name.
            entity_id: Primary key as sent by the client.

        Returns:
            ORM instance.

        Raises:
            UnknownEntityError: If the entity is not registered.
            EntityNotFoundError: If no live row has this key.
        """
        descriptor = self.descriptor(entity_name, Operation.READ)
        return await self._load(descriptor, entity_id)

    async def list_entities(
        self,
        entity_name: str,
        offset: int | None = 0,
        limit: int | None = None,
        sort: str | None = None,
    ) -> tuple[list[Any], int]:
        """List instances page by page.

        Returns:
            Tuple of (instances, total count).
        """
        return await self.search(entity_name, None, offset=offset, limit=limit, sort=sort)

    async def search(
        self,
        entity_name: str,
        filter: str | Mapping[str, Any] | None,
        offset: int | None = 0,
        limit: int | None = None,
        sort: str | None = None,
    ) -> tuple[list[Any], int]:
        """Search instances with a CUBA filter.

        Args:
            entity_name: CUBA entity name.
            filter: Filter object or its JSON text.
            offset: Rows to skip.
            limit: Page size, capped at the configured maximum.
            sort: CUBA sort expression.

        Returns:
            Tuple of (instances, total count).

        Raises:
            UnknownEntityError: If the entity is not registered.
            EntityValidationError: On bad filter, sort or paging values.
        """
        descriptor = self.descriptor(entity_name, Operation.READ)
        offset, limit = normalize_paging(offset, limit, self._max_page_size)
        orders = parse_sort(sort, descriptor)

        stmt = self._base_query(descriptor)
        condition = build_filter(parse_filter(filter), descriptor)
        if condition is not None:
            stmt = stmt.where(condition)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        count_result = await self._db.execute(count_stmt)
        total = count_result.scalar() or 0

        stmt = stmt.order_by(*order_by_clauses(orders, descriptor))
        stmt = stmt.offset(offset).limit(limit)
        result = await self._db.execute(stmt)
        return list(result.scalars().all()), total

    async def create(
        self,
        entity_name: str,
        data: Mapping[str, Any],
        username: str | None = None,
    ) -> Any:
        """Create an instance from a CUBA map.

        A UUID primary key is generated when the body does not carry one.

        Raises:
            UnknownEntityError: If the entity is not registered.
            OperationNotAllowedError: If creation is disabled.
            EntityValidationError: On bad values or constraint violations.
        """
        descriptor = self.descriptor(entity_name, Operation.CREATE)
        try:
            values = from_map(data, descriptor, include_primary_key=True)
        except ValueError as e:
            raise EntityValidationError(str(e)) from e

        pk = descriptor.primary_key
        if pk.key not in values:
            if pk.python_type is not uuid.UUID:
                raise EntityValidationError(f"Attribute {pk.name} is required")
            values[pk.key] = uuid.uuid4()

        instance = descriptor.model(**values)
        instance.version = 1
        instance.create_ts = local_now(self._timezone)
        instance.created_by = username

        self._db.add(instance)
        await self._commit(descriptor)
        await self._db.refresh(instance)

        logger.info(
            "Entity created: %s %s by %s",
            entity_name,
            getattr(instance, pk.key),
            username,
        )
        return instance

    async def update(
        self,
        entity_name: str,
        entity_id: Any,
        data: Mapping[str, Any],
        username: str | None = None,
    ) -> Any:
        """Apply the attributes present in a CUBA map to an instance.

        Raises:
            UnknownEntityError: If the entity is not registered.
            OperationNotAllowedError: If updates are disabled.
            EntityNotFoundError: If no live row has this key.
            EntityValidationError: On bad values or constraint violations.
        """
        descriptor = self.descriptor(entity_name, Operation.UPDATE)
        instance = await self._load(descriptor, entity_id)
        try:
            values = from_map(data, descriptor)
        except ValueError as e:
            raise EntityValidationError(str(e)) from e

        for key, value in values.items():
            setattr(instance, key, value)
        instance.version = (instance.version or 0) + 1
        instance.update_ts = local_now(self._timezone)
        instance.updated_by = username

        await self._commit(descriptor)
        await self._db.refresh(instance)

        logger.info("Entity updated: %s %s by %s", entity_name, entity_id, username)
        return instance

    async def delete(
        self,
        entity_name: str,
        entity_id: Any,
        username: str | None = None,
    ) -> None:
        """Soft delete an instance.

        Raises:
            UnknownEntityError: If the entity is not registered.
            OperationNotAllowedError: If deletion is disabled.
            EntityNotFoundError: If no live row has this key.
        """
        descriptor = self.descriptor(entity_name, Operation.DELETE)
        instance = await self._load(descriptor, entity_id)

        instance.delete_ts = local_now(self._timezone)
        instance.deleted_by = username
        await self._commit(descriptor)

        logger.info("Entity deleted: %s %s by %s", entity_name, entity_id, username)

    async def _commit(self, descriptor: EntityDescriptor) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(
                "Constraint violation on %s: %s", descriptor.entity_name, e.orig
            )
            raise EntityValidationError(
                f"Constraint violation for {descriptor.entity_name}"
            ) from e
