# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and CUBA audit mixins.

Every CUBA "StandardEntity" table carries the same bookkeeping columns:
a UUID primary key, an optimistic-lock ``version``, creation and update
stamps and the soft-delete pair ``delete_ts``/``deleted_by``. Rows with
a non-null ``delete_ts`` are invisible to the API.

Column ``info`` keys understood by the CUBA serializer:
    json: attribute name on the wire (defaults to the column name).
    read_only: never accepted from request bodies.
    hidden: never rendered.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all legacy HEMIS tables."""


class AuditMixin:
    """Version and create/update stamps."""

    version: Mapped[int] = mapped_column(
        "version", Integer, nullable=False, default=1, info={"read_only": True}
    )
    create_ts: Mapped[datetime | None] = mapped_column(
        "create_ts", DateTime, info={"json": "createTs", "read_only": True}
    )
    created_by: Mapped[str | None] = mapped_column(
        "created_by", String(50), info={"json": "createdBy", "read_only": True}
    )
    update_ts: Mapped[datetime | None] = mapped_column(
        "update_ts", DateTime, info={"json": "updateTs", "read_only": True}
    )
    updated_by: Mapped[str | None] = mapped_column(
        "updated_by", String(50), info={"json": "updatedBy", "read_only": True}
    )


class SoftDeleteMixin:
    """Soft delete columns, never exposed through the API."""

    delete_ts: Mapped[datetime | None] = mapped_column(
        "delete_ts", DateTime, info={"hidden": True, "read_only": True}
    )
    deleted_by: Mapped[str | None] = mapped_column(
        "deleted_by", String(50), info={"hidden": True, "read_only": True}
    )

    @property
    def is_deleted(self) -> bool:
        """Check if the row has been soft deleted."""
        return self.delete_ts is not None


class StandardEntityMixin(AuditMixin, SoftDeleteMixin):
    """UUID primary key plus all CUBA bookkeeping columns."""

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
