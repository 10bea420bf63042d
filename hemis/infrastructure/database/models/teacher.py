# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher (academic staff) table."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import Base, StandardEntityMixin


class Teacher(StandardEntityMixin, Base):
    """Academic staff member of a university."""

    __tablename__ = "hemishe_e_teacher"

    firstname: Mapped[str | None] = mapped_column("firstname", String(255))
    lastname: Mapped[str | None] = mapped_column("lastname", String(255))
    fathername: Mapped[str | None] = mapped_column("fathername", String(255))
    birthday: Mapped[date | None] = mapped_column("birthday", Date)
    gender: Mapped[str | None] = mapped_column("_gender", String(32))
    university: Mapped[str | None] = mapped_column("_university", String(255), index=True)
    academic_degree: Mapped[str | None] = mapped_column("_academic_degree", String(32))
    academic_rank: Mapped[str | None] = mapped_column("_academic_rank", String(32))

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.lastname, self.firstname, self.fathername) if p]
        return " ".join(parts) or None
