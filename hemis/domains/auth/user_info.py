# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""The ``userInfo`` document returned to CUBA clients."""

from typing import Any

from hemis.infrastructure.database.models import User

DEFAULT_LANGUAGE = "ru"


def display_name(user: User) -> str:
    """Join first, middle and last name.

    A user with only a first name gets a trailing space, as old-hemis did.
    """
    parts = [p for p in (user.first_name, user.middle_name, user.last_name) if p is not None]
    name = " ".join(parts).strip()
    if user.first_name is not None and user.middle_name is None and user.last_name is None:
        name += " "
    return name


def instance_name(user: User) -> str:
    shown = user.first_name if user.first_name is not None else user.username
    return f"{shown} [{user.username}]"


def user_info(user: User) -> dict[str, Any]:
    """Build the userInfo body; old-hemis never included the university."""
    return {
        "id": str(user.id),
        "login": user.username,
        "name": display_name(user),
        "firstName": user.first_name,
        "middleName": user.middle_name,
        "lastName": user.last_name,
        "position": user.position,
        "email": user.email,
        "timeZone": user.time_zone,
        "language": user.language or DEFAULT_LANGUAGE,
        "_instanceName": instance_name(user),
        "locale": user.locale or DEFAULT_LANGUAGE,
    }
