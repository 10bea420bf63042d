# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API user accounts used by university integrations.

Passwords migrated from CUBA are stored as ``hash:salt:iterations``
(PBKDF2-HMAC-SHA1); accounts re-hashed after login use bcrypt.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hemis.infrastructure.database.models.base import Base, StandardEntityMixin


class User(StandardEntityMixin, Base):
    """Login account for the legacy REST API."""

    __tablename__ = "hemishe_user"

    username: Mapped[str] = mapped_column("username", String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column("password", String(255), nullable=False)
    roles: Mapped[str | None] = mapped_column("roles", String(1024))
    enabled: Mapped[bool] = mapped_column("enabled", Boolean, nullable=False, default=True)
    university: Mapped[str | None] = mapped_column("_university", String(255))
    full_name: Mapped[str | None] = mapped_column("full_name", String(512))
    first_name: Mapped[str | None] = mapped_column("first_name", String(255))
    middle_name: Mapped[str | None] = mapped_column("middle_name", String(255))
    last_name: Mapped[str | None] = mapped_column("last_name", String(255))
    position: Mapped[str | None] = mapped_column("position", String(255))
    email: Mapped[str | None] = mapped_column("email", String(255))
    phone: Mapped[str | None] = mapped_column("phone", String(255))
    time_zone: Mapped[str | None] = mapped_column("time_zone", String(64))
    language: Mapped[str | None] = mapped_column("language", String(16))
    locale: Mapped[str | None] = mapped_column("locale", String(16))
    account_non_locked: Mapped[bool] = mapped_column(
        "account_non_locked", Boolean, nullable=False, default=True
    )
    failed_attempts: Mapped[int] = mapped_column(
        "failed_attempts", Integer, nullable=False, default=0
    )

    @property
    def role_list(self) -> list[str]:
        """Split the comma-separated roles column."""
        if not self.roles:
            return []
        return [r.strip() for r in self.roles.split(",") if r.strip()]

    @property
    def can_login(self) -> bool:
        """Check whether the account may authenticate."""
        return bool(self.enabled) and bool(self.account_non_locked) and not self.is_deleted
