# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Entity service exceptions.

Each exception carries the short ``error`` text of the CUBA REST error
body; the message becomes its ``details``.
"""


class EntityServiceError(Exception):
    """Base exception for entity service errors."""

    error = "Server error"

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class UnknownEntityError(EntityServiceError):
    """Raised when the entity name is not registered."""

    error = "MetaClass not found"


class EntityNotFoundError(EntityServiceError):
    """Raised when an instance does not exist or is soft deleted."""

    error = "Entity not found"


class EntityValidationError(EntityServiceError):
    """Raised for malformed bodies, filters, sort or paging parameters."""

    error = "Bad request"


class OperationNotAllowedError(EntityServiceError):
    """Raised when the entity does not support the requested operation."""

    error = "Operation not allowed"
