# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Scholarship payments and graduate employment records."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import Base, StandardEntityMixin


class Scholarship(StandardEntityMixin, Base):
    """Scholarship award for a student and semester."""

    __tablename__ = "hemishe_e_scholarship"

    scholarship_code: Mapped[str | None] = mapped_column(
        "scholarship_code", String(64), unique=True
    )
    student: Mapped[uuid.UUID | None] = mapped_column(
        "_student", UUID(as_uuid=True), index=True
    )
    university: Mapped[str | None] = mapped_column("_university", String(64), index=True)
    education_year: Mapped[str | None] = mapped_column("_education_year", String(32))
    semester: Mapped[int | None] = mapped_column("semester", Integer)
    scholarship_type: Mapped[str | None] = mapped_column("_scholarship_type", String(32))
    amount: Mapped[Decimal | None] = mapped_column("amount", Numeric(15, 2))
    start_date: Mapped[date | None] = mapped_column("start_date", Date)
    end_date: Mapped[date | None] = mapped_column("end_date", Date)
    payment_date: Mapped[date | None] = mapped_column("payment_date", Date)
    status: Mapped[str | None] = mapped_column("_status", String(32))
    order_number: Mapped[str | None] = mapped_column("order_number", String(128))
    order_date: Mapped[date | None] = mapped_column("order_date", Date)
    approved_by: Mapped[str | None] = mapped_column("approved_by", String(256))
    payment_method: Mapped[str | None] = mapped_column("_payment_method", String(32))
    bank_account: Mapped[str | None] = mapped_column("bank_account", String(64))
    bank_code: Mapped[str | None] = mapped_column("bank_code", String(16))
    transaction_ref: Mapped[str | None] = mapped_column("transaction_ref", String(128))
    reason: Mapped[str | None] = mapped_column("reason", String(512))
    notes: Mapped[str | None] = mapped_column("notes", String(2048))
    is_active: Mapped[bool | None] = mapped_column("is_active", Boolean)


class Employment(StandardEntityMixin, Base):
    """Employment record of a graduate."""

    __tablename__ = "hemishe_e_employment"

    employment_code: Mapped[str | None] = mapped_column(
        "employment_code", String(64), unique=True
    )
    student: Mapped[uuid.UUID | None] = mapped_column(
        "_student", UUID(as_uuid=True), index=True
    )
    university: Mapped[str | None] = mapped_column("_university", String(64), index=True)
    diploma: Mapped[uuid.UUID | None] = mapped_column("_diploma", UUID(as_uuid=True))
    company_name: Mapped[str | None] = mapped_column("company_name", String(512))
    company_tin: Mapped[str | None] = mapped_column("company_tin", String(32))
    company_address: Mapped[str | None] = mapped_column("company_address", String(512))
    company_phone: Mapped[str | None] = mapped_column("company_phone", String(32))
    employment_type: Mapped[str | None] = mapped_column("_employment_type", String(32))
    position: Mapped[str | None] = mapped_column("position", String(256))
    employment_date: Mapped[date | None] = mapped_column("employment_date", Date)
    contract_number: Mapped[str | None] = mapped_column("contract_number", String(128))
    contract_date: Mapped[date | None] = mapped_column("contract_date", Date)
    salary: Mapped[Decimal | None] = mapped_column("salary", Numeric(15, 2))
    employment_status: Mapped[str | None] = mapped_column("_employment_status", String(32))
    termination_date: Mapped[date | None] = mapped_column("termination_date", Date)
    termination_reason: Mapped[str | None] = mapped_column("termination_reason", String(512))
    soato: Mapped[str | None] = mapped_column("_soato", String(20))
    industry_code: Mapped[str | None] = mapped_column("_industry_code", String(32))
    is_specialty_related: Mapped[bool | None] = mapped_column("is_specialty_related", Boolean)
    notes: Mapped[str | None] = mapped_column("notes", String(2048))
    is_active: Mapped[bool | None] = mapped_column("is_active", Boolean)
