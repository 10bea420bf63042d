# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student documents: diplomas, diploma blanks and tuition contracts."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Float, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import Base, StandardEntityMixin


class Diploma(StandardEntityMixin, Base):
    """Issued diploma.

    ``diploma_hash`` is the public verification key printed in the QR code.
    """

    __tablename__ = "hemishe_e_diploma"

    diploma_number: Mapped[str | None] = mapped_column("diploma_number", String(128), unique=True)
    student: Mapped[uuid.UUID | None] = mapped_column(
        "_student", UUID(as_uuid=True), index=True
    )
    university: Mapped[str | None] = mapped_column("_university", String(64))
    specialty: Mapped[uuid.UUID | None] = mapped_column("_specialty", UUID(as_uuid=True))
    diploma_blank: Mapped[uuid.UUID | None] = mapped_column(
        "_diploma_blank", UUID(as_uuid=True)
    )
    serial_number: Mapped[str | None] = mapped_column("serial_number", String(64))
    diploma_type: Mapped[str | None] = mapped_column("_diploma_type", String(32))
    issue_date: Mapped[date | None] = mapped_column("issue_date", Date)
    registration_date: Mapped[date | None] = mapped_column("registration_date", Date)
    graduation_year: Mapped[int | None] = mapped_column("graduation_year", Integer)
    qualification: Mapped[str | None] = mapped_column("qualification", String(512))
    average_grade: Mapped[float | None] = mapped_column("average_grade", Float)
    honors: Mapped[str | None] = mapped_column("_honors", String(32))
    diploma_hash: Mapped[str | None] = mapped_column("diploma_hash", String(128), unique=True)
    rector_name: Mapped[str | None] = mapped_column("rector_name", String(256))
    status: Mapped[str | None] = mapped_column("_status", String(32))
    qr_code: Mapped[str | None] = mapped_column("qr_code", String(512))
    verification_url: Mapped[str | None] = mapped_column("verification_url", String(512))
    notes: Mapped[str | None] = mapped_column("notes", String(2048))


class DiplomaBlank(StandardEntityMixin, Base):
    """Pre-printed diploma form tracked from delivery to issue."""

    __tablename__ = "hemishe_e_diploma_blank"

    blank_code: Mapped[str | None] = mapped_column("blank_code", String(64), unique=True)
    series: Mapped[str | None] = mapped_column("series", String(8))
    number: Mapped[str | None] = mapped_column("number", String(16))
    university: Mapped[str | None] = mapped_column("_university", String(64), index=True)
    blank_type: Mapped[str | None] = mapped_column("_blank_type", String(32))
    status: Mapped[str | None] = mapped_column("_status", String(32))
    received_date: Mapped[date | None] = mapped_column("received_date", Date)
    issued_date: Mapped[date | None] = mapped_column("issued_date", Date)
    academic_year: Mapped[int | None] = mapped_column("academic_year", Integer)
    supplier: Mapped[str | None] = mapped_column("supplier", String(256))
    batch_number: Mapped[str | None] = mapped_column("batch_number", String(64))
    status_reason: Mapped[str | None] = mapped_column("status_reason", String(512))
    security_features: Mapped[str | None] = mapped_column("security_features", String(1024))
    notes: Mapped[str | None] = mapped_column("notes", String(2048))


class Contract(StandardEntityMixin, Base):
    """Tuition contract of a student for one education year."""

    __tablename__ = "hemishe_e_contract"

    contract_number: Mapped[str | None] = mapped_column("contract_number", String(128), index=True)
    student: Mapped[uuid.UUID | None] = mapped_column(
        "_student", UUID(as_uuid=True), index=True
    )
    university: Mapped[str | None] = mapped_column("_university", String(64), index=True)
    education_year: Mapped[str | None] = mapped_column("_education_year", String(32))
    contract_type: Mapped[str | None] = mapped_column("_contract_type", String(32))
    contract_date: Mapped[date | None] = mapped_column("contract_date", Date)
    contract_sum: Mapped[Decimal | None] = mapped_column("contract_sum", Numeric(15, 2))
    paid_sum: Mapped[Decimal | None] = mapped_column("paid_sum", Numeric(15, 2))
    status: Mapped[str | None] = mapped_column("_status", String(32))
    is_active: Mapped[bool | None] = mapped_column("is_active", Boolean)
