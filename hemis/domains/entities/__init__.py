# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registered CUBA entities.

The service lives in ``hemis.domains.entities.service``; it depends on
the CUBA format modules, which in turn depend on this package.
"""

from hemis.domains.entities.exceptions import (
    EntityNotFoundError,
    EntityServiceError,
    EntityValidationError,
    OperationNotAllowedError,
    UnknownEntityError,
)
from hemis.domains.entities.registry import (
    Attribute,
    EntityDescriptor,
    EntityRegistry,
    Operation,
    get_descriptor,
    get_registry,
)

__all__ = [
    "Attribute",
    "EntityDescriptor",
    "EntityNotFoundError",
    "EntityRegistry",
    "EntityServiceError",
    "EntityValidationError",
    "Operation",
    "OperationNotAllowedError",
    "UnknownEntityError",
    "get_descriptor",
    "get_registry",
]
