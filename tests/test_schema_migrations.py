"""Tests for the migration registry and the shipped migrations."""

import pytest

from app.errors import DuplicateMigrationError
from models.migration import Migration
from models.snapshot import EXPORT_TABLES
from services.schema_migrations import (
    CURRENT_SCHEMA_VERSION,
    DEFAULT_MIGRATIONS,
    MigrationRegistry,
    build_default_registry,
    find_migration_path,
    migrate_v1_0_to_v1_1,
    migrate_v1_1_to_v1_2,
)
from utils.validators import normalize_data


def _step(src, dst):
    return Migration(src, dst, f"{src} to {dst}", lambda data: {**data, "version": dst})


def test_path_follows_chain_in_order():
    first, second = _step("1.0", "1.1"), _step("1.1", "1.2")
    registry = MigrationRegistry([second, first])

    assert registry.find_path("1.0", "1.2") == [first, second]


def test_path_empty_when_already_at_target():
    registry = MigrationRegistry([_step("1.0", "1.1"), _step("1.1", "1.2")])
    assert registry.find_path("1.2", "1.2") == []


def test_path_stops_at_missing_link():
    registry = MigrationRegistry([_step("1.0", "1.1"), _step("1.2", "1.3")])
    path = registry.find_path("1.0", "1.3")
    assert [m.to_version for m in path] == ["1.1"]


def test_path_empty_for_unknown_source():
    assert build_default_registry().find_path("0.5", CURRENT_SCHEMA_VERSION) == []


def test_cyclic_registry_terminates():
    registry = MigrationRegistry([_step("1.0", "1.1"), _step("1.1", "1.0")])
    assert len(registry.find_path("1.0", "2.0")) == 2


def test_duplicate_source_version_rejected():
    with pytest.raises(DuplicateMigrationError) as exc:
        MigrationRegistry([_step("1.0", "1.1"), _step("1.0", "1.2")])
    assert exc.value.from_version == "1.0"
    assert exc.value.code == "DUPLICATE_MIGRATION"


def test_registry_is_immutable_copy():
    source = [_step("1.0", "1.1")]
    registry = MigrationRegistry(source)
    source.append(_step("1.1", "1.2"))
    assert len(registry) == 1
    assert isinstance(registry.migrations, tuple)


def test_default_chain_reaches_current_version():
    path = find_migration_path("1.0", CURRENT_SCHEMA_VERSION)
    assert [m.from_version for m in path] == ["1.0", "1.1"]
    assert path[-1].to_version == CURRENT_SCHEMA_VERSION
    assert len(DEFAULT_MIGRATIONS) == 2


def test_migration_label():
    assert DEFAULT_MIGRATIONS[0].label == "1.0 → 1.1: Add equipment table"


def test_v1_0_to_v1_1_adds_equipment():
    data = {"version": "1.0", "tables": {"notifications": []}}
    migrated = migrate_v1_0_to_v1_1(data)

    assert migrated["version"] == "1.1"
    assert migrated["tables"]["equipment"] == []
    assert "equipment" not in data["tables"]


def test_v1_0_to_v1_1_keeps_existing_equipment():
    data = {"version": "1.0", "tables": {"equipment": [{"id": "e1"}]}}
    assert migrate_v1_0_to_v1_1(data)["tables"]["equipment"] == [{"id": "e1"}]


def test_v1_1_to_v1_2_adds_aircraft_id_everywhere():
    data = normalize_data({
        "version": "1.1",
        "tables": {
            "subscriptions": [{"id": "s1"}],
            "notifications": [{"id": "n1", "aircraft_id": "ac-9"}],
            "equipment": [{"id": "e1"}],
        },
    })
    migrated = migrate_v1_1_to_v1_2(data)

    assert migrated["version"] == "1.2"
    assert migrated["tables"]["subscriptions"] == [{"id": "s1", "aircraft_id": None}]
    assert migrated["tables"]["notifications"] == [{"id": "n1", "aircraft_id": "ac-9"}]
    assert migrated["tables"]["equipment"] == [{"id": "e1", "aircraft_id": None}]
    for table in EXPORT_TABLES:
        assert all("aircraft_id" in record for record in migrated["tables"][table])
    # Source records untouched
    assert data["tables"]["subscriptions"] == [{"id": "s1"}]


def test_equivalent_source_versions_are_duplicates():
    with pytest.raises(DuplicateMigrationError):
        MigrationRegistry([_step("1.0", "1.1"), _step("1.0.0", "1.2")])


def test_path_matches_versions_numerically():
    registry = build_default_registry()
    assert [m.from_version for m in registry.find_path("1.0.0", CURRENT_SCHEMA_VERSION)] == ["1.0", "1.1"]
    assert registry.find("1.1.0") is registry.find("1.1")
