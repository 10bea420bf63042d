# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class schedule table."""

import uuid
from datetime import date, time

from sqlalchemy import Boolean, Date, Integer, String, Time
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import Base, StandardEntityMixin


class Schedule(StandardEntityMixin, Base):
    """One lesson slot (pair) of a group."""

    __tablename__ = "hemishe_e_schedule"

    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    group: Mapped[uuid.UUID | None] = mapped_column("_group", UUID(as_uuid=True), index=True)
    course: Mapped[uuid.UUID | None] = mapped_column("_course", UUID(as_uuid=True))
    teacher: Mapped[uuid.UUID | None] = mapped_column("_teacher", UUID(as_uuid=True))
    auditorium: Mapped[uuid.UUID | None] = mapped_column("_auditorium", UUID(as_uuid=True))
    schedule_date: Mapped[date | None] = mapped_column("schedule_date", Date)
    start_time: Mapped[time | None] = mapped_column("start_time", Time)
    end_time: Mapped[time | None] = mapped_column("end_time", Time)
    day_of_week: Mapped[int | None] = mapped_column("day_of_week", Integer)
    pair_number: Mapped[int | None] = mapped_column("pair_number", Integer)
    academic_year: Mapped[str | None] = mapped_column("academic_year", String(32))
    semester: Mapped[int | None] = mapped_column("semester", Integer)
    week_number: Mapped[int | None] = mapped_column("week_number", Integer)
    lesson_type: Mapped[str | None] = mapped_column("_lesson_type", String(32))
    schedule_type: Mapped[str | None] = mapped_column("_schedule_type", String(32))
    active: Mapped[bool | None] = mapped_column("active", Boolean)
    is_cancelled: Mapped[bool | None] = mapped_column("is_cancelled", Boolean)
