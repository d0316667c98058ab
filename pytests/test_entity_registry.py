from __future__ import annotations

import pytest

from crud.entities import Entity, EntityRegistry
from crud.errors import NotFound
from settings import DEMO_ENTITIES


def test_entity_defaults():
    e = Entity(table_name="users")

    assert e.primary_key == "id"
    assert e.title_singular == "users"
    assert e.title_plural == "users"
    assert e.order == 0
    assert e.get_select_columns() == ["*"]
    assert e.get_edit_columns() == ["*"]
    assert e.get_new_columns() == ["*"]


def test_entity_requires_table_name():
    with pytest.raises(ValueError):
        Entity(table_name="  ")


def test_new_columns_fall_back_to_edit_columns():
    e = Entity(table_name="users", edit_columns=["name", "email"])
    assert e.get_new_columns() == ["name", "email"]

    e = Entity(table_name="users", edit_columns=["name"], new_columns=["name", "password"])
    assert e.get_new_columns() == ["name", "password"]


def test_register_accepts_mappings():
    registry = EntityRegistry(DEMO_ENTITIES)

    assert len(registry) == len(DEMO_ENTITIES)
    assert "users" in registry
    assert registry.lookup("users").title_plural == "Users"
    assert registry.lookup("nope") is None


def test_reregistering_replaces_previous_definition():
    registry = EntityRegistry()
    registry.register(Entity(table_name="users", title_plural="People", order=3))
    registry.register(Entity(table_name="users"))

    assert len(registry) == 1
    e = registry.require("users")
    # Last write wins; nothing is merged.
    assert e.title_plural == "users"
    assert e.order == 0


def test_require_unknown_entity_raises_not_found():
    with pytest.raises(NotFound):
        EntityRegistry().require("ghosts")


def test_frozen_registry_rejects_registration():
    registry = EntityRegistry([Entity(table_name="users")])
    registry.freeze()

    assert registry.frozen
    with pytest.raises(RuntimeError):
        registry.register(Entity(table_name="tasks"))
    assert [e.table_name for e in registry] == ["users"]
