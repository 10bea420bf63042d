# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registry of entities exposed under /app/rest/v2/entities.

Each CUBA entity name (``hemishe_EStudent``) maps to an
``EntityDescriptor`` describing its ORM model, the attributes visible on
the wire and the operations clients may perform. The generic entity
router and service work only through descriptors.

Example:
    >>> descriptor = get_descriptor("hemishe_EStudent")
    >>> descriptor.primary_key.name
    'id'
"""

import enum
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.sql.schema import Column

from hemis.domains.entities.exceptions import UnknownEntityError
from hemis.infrastructure.database.models import (
    Base,
    Contract,
    Diploma,
    DiplomaBlank,
    Employment,
    Faculty,
    Group,
    Schedule,
    Scholarship,
    Specialty,
    Student,
    StudentGpa,
    Teacher,
    University,
)


class Operation(str, enum.Enum):
    """Entity operations."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ALL_OPERATIONS = frozenset(Operation)


@dataclass(frozen=True)
class Attribute:
    """One mapped column as seen by API clients.

    Attributes:
        key: Python attribute name on the model.
        name: Attribute name in CUBA maps (the column name by default).
        column: The mapped table column.
        read_only: Never accepted from request bodies.
        hidden: Never rendered.
        primary_key: Part of the primary key.
    """

    key: str
    name: str
    column: Column
    read_only: bool = False
    hidden: bool = False
    primary_key: bool = False

    @property
    def python_type(self) -> type:
        try:
            return self.column.type.python_type
        except NotImplementedError:
            return str

    @property
    def is_reference(self) -> bool:
        return self.name.startswith("_")


@dataclass(eq=False)
class EntityDescriptor:
    """How one CUBA entity maps onto its table.

    Attributes:
        entity_name: CUBA metaclass name, e.g. ``hemishe_EStudent``.
        model: SQLAlchemy model class.
        operations: Operations clients may perform.
        person: Instance name is "lastname firstname fathername".
        name_attribute: Attribute used as instance name.
        code_attribute: Attribute appended to the instance name.
        computed: Model properties appended to maps outside ``_local``.
    """

    entity_name: str
    model: type[Base]
    operations: frozenset[Operation] = ALL_OPERATIONS
    person: bool = False
    name_attribute: str | None = None
    code_attribute: str | None = None
    computed: tuple[str, ...] = field(default_factory=tuple)

    @cached_property
    def attributes(self) -> list[Attribute]:
        """Mapped columns with the primary key first."""
        mapper = inspect(self.model)
        attrs = []
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            info = column.info
            attrs.append(
                Attribute(
                    key=prop.key,
                    name=info.get("json", column.name),
                    column=column,
                    read_only=bool(info.get("read_only", False)),
                    hidden=bool(info.get("hidden", False)),
                    primary_key=column.primary_key,
                )
            )
        attrs.sort(key=lambda a: not a.primary_key)
        return attrs

    @cached_property
    def _by_name(self) -> dict[str, Attribute]:
        lookup: dict[str, Attribute] = {}
        for attr in self.attributes:
            if attr.hidden:
                continue
            lookup.setdefault(attr.key, attr)
            lookup[attr.name] = attr
        return lookup

    @cached_property
    def primary_key(self) -> Attribute:
        return next(a for a in self.attributes if a.primary_key)

    @property
    def soft_delete(self) -> bool:
        return "delete_ts" in self.model.__table__.c

    def find(self, name: str) -> Attribute | None:
        """Look up a visible attribute by wire name or Python name."""
        return self._by_name.get(name)

    def allows(self, operation: Operation) -> bool:
        return operation in self.operations

    def model_attr(self, attr: Attribute) -> Any:
        """Return the instrumented attribute for use in SQL expressions."""
        return getattr(self.model, attr.key)


class EntityRegistry:
    """Lookup of descriptors by CUBA entity name."""

    def __init__(self, descriptors: list[EntityDescriptor] | None = None) -> None:
        self._descriptors: dict[str, EntityDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: EntityDescriptor) -> None:
        self._descriptors[descriptor.entity_name] = descriptor

    def get(self, entity_name: str) -> EntityDescriptor:
        """Get a descriptor.

        Raises:
            UnknownEntityError: If the name is not registered.
        """
        try:
            return self._descriptors[entity_name]
        except KeyError:
            raise UnknownEntityError(f"MetaClass not found for {entity_name}") from None

    def names(self) -> list[str]:
        return sorted(self._descriptors)

    def __contains__(self, entity_name: object) -> bool:
        return entity_name in self._descriptors


def _default_descriptors() -> list[EntityDescriptor]:
    return [
        EntityDescriptor(
            "hemishe_EStudent", Student, person=True, computed=("full_name",)
        ),
        EntityDescriptor("hemishe_ETeacher", Teacher, person=True),
        EntityDescriptor(
            "hemishe_EUniversity", University, name_attribute="name", code_attribute="code"
        ),
        EntityDescriptor(
            "hemishe_EUniversityDepartment",
            Faculty,
            name_attribute="name",
            code_attribute="code",
        ),
        EntityDescriptor(
            "hemishe_EUniversitySpeciality",
            Specialty,
            name_attribute="name",
            code_attribute="code",
        ),
        EntityDescriptor("hemishe_EUniversityGroup", Group, name_attribute="name"),
        EntityDescriptor(
            "hemishe_EStudentDiploma",
            Diploma,
            name_attribute="serial_number",
            code_attribute="diploma_number",
        ),
        EntityDescriptor(
            "hemishe_EDiplomaBlank",
            DiplomaBlank,
            name_attribute="series",
            code_attribute="number",
        ),
        EntityDescriptor("hemishe_ESchedule", Schedule),
        EntityDescriptor(
            "hemishe_EStudentScholarshipFull", Scholarship, code_attribute="scholarship_code"
        ),
        EntityDescriptor("hemishe_EContract", Contract, code_attribute="contract_number"),
        EntityDescriptor(
            "hemishe_EEmployment",
            Employment,
            name_attribute="company_name",
            code_attribute="employment_code",
        ),
        EntityDescriptor(
            "hemishe_EStudentGpa",
            StudentGpa,
            operations=frozenset({Operation.READ, Operation.CREATE}),
        ),
    ]


_registry = EntityRegistry(_default_descriptors())


def get_registry() -> EntityRegistry:
    """Get the application entity registry."""
    return _registry


def get_descriptor(entity_name: str) -> EntityDescriptor:
    """Get a descriptor from the application registry.

    Raises:
        UnknownEntityError: If the name is not registered.
    """
    return _registry.get(entity_name)
