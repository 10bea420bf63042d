# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the entity registry."""

import pytest

from hemis.domains.entities.exceptions import UnknownEntityError
from hemis.domains.entities.registry import (
    EntityDescriptor,
    EntityRegistry,
    Operation,
    get_descriptor,
    get_registry,
)
from hemis.infrastructure.database.models import Student, University


class TestEntityRegistry:
    def test_known_entities(self) -> None:
        names = get_registry().names()

        assert "hemishe_EStudent" in names
        assert "hemishe_EUniversity" in names
        assert "hemishe_EStudentGpa" in names

    def test_unknown_entity(self) -> None:
        with pytest.raises(UnknownEntityError, match="MetaClass not found for hemishe_ENope"):
            get_descriptor("hemishe_ENope")

    def test_register(self) -> None:
        registry = EntityRegistry()
        registry.register(EntityDescriptor("test_EStudent", Student))

        assert "test_EStudent" in registry
        assert registry.get("test_EStudent").model is Student


class TestEntityDescriptor:
    def test_primary_key_is_first(self) -> None:
        descriptor = get_descriptor("hemishe_EStudent")

        assert descriptor.attributes[0].primary_key
        assert descriptor.primary_key.name == "id"

    def test_university_keyed_by_code(self) -> None:
        descriptor = get_descriptor("hemishe_EUniversity")

        assert descriptor.model is University
        assert descriptor.primary_key.name == "code"

    def test_find_by_wire_and_python_name(self) -> None:
        descriptor = get_descriptor("hemishe_EStudent")

        assert descriptor.find("_university") is descriptor.find("university")
        assert descriptor.find("createTs").key == "create_ts"

    def test_hidden_attributes_are_not_found(self) -> None:
        descriptor = get_descriptor("hemishe_EStudent")

        assert descriptor.find("delete_ts") is None
        assert descriptor.find("deleted_by") is None

    def test_soft_delete(self) -> None:
        assert get_descriptor("hemishe_EStudent").soft_delete is True
        assert get_descriptor("hemishe_EStudentGpa").soft_delete is False

    def test_gpa_is_append_only(self) -> None:
        descriptor = get_descriptor("hemishe_EStudentGpa")

        assert descriptor.allows(Operation.READ)
        assert descriptor.allows(Operation.CREATE)
        assert not descriptor.allows(Operation.UPDATE)
        assert not descriptor.allows(Operation.DELETE)
