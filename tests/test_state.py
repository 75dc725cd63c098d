"""Tests for LocalStorage and loading/saving the configuration record."""

import json

import pytest

from leaderkey.constants import CURRENT_VERSION, LEGACY_STORAGE_KEY, STORAGE_KEY
from leaderkey.models import Group
from leaderkey.state import clear_config, default_config, get_config, migrate_from_legacy, save_config
from leaderkey.storage import LocalStorage


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


# ----------------------------
# LocalStorage
# ----------------------------
def test_storage_roundtrip(storage):
    assert storage.get_item("k") is None
    storage.set_item("k", "v")
    storage.set_item("other", "w")
    assert storage.get_item("k") == "v"
    assert LocalStorage(storage.path).get_item("other") == "w"

    storage.remove_item("k")
    assert storage.get_item("k") is None
    assert storage.get_item("other") == "w"

    storage.clear()
    assert storage.get_item("other") is None


def test_storage_tolerates_corrupt_file(storage):
    storage.path.write_text("{broken", encoding="utf-8")
    assert storage.get_item("k") is None
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_storage_ignores_non_string_values(storage):
    storage.path.write_text(json.dumps({"a": 1, "b": "two"}), encoding="utf-8")
    assert storage.get_item("a") is None
    assert storage.get_item("b") == "two"


def test_storage_leaves_no_temp_files(storage):
    storage.set_item("k", "v")
    assert [p.name for p in storage.path.parent.iterdir()] == ["storage.json"]


# ----------------------------
# Config record
# ----------------------------
def test_first_load_seeds_defaults(storage):
    config = get_config(storage)
    assert [item.id for item in config.actions] == ["default-c", "default-a"]
    assert [item.id for item in config.actions[1].actions] == ["default-af", "default-at"]

    record = json.loads(storage.get_item(STORAGE_KEY))
    assert record["version"] == CURRENT_VERSION
    assert record["root"]["type"] == "group"


def test_save_then_load(storage, tree):
    save_config(storage, tree)
    assert get_config(storage) == tree


def test_corrupt_record_falls_back_to_defaults(storage):
    storage.set_item(STORAGE_KEY, "not json at all")
    assert get_config(storage) == default_config()

    storage.set_item(STORAGE_KEY, json.dumps({"root": {"type": "application"}}))
    assert get_config(storage) == default_config()

    storage.set_item(STORAGE_KEY, json.dumps({"version": 1}))
    assert get_config(storage) == default_config()


def test_legacy_mappings_are_migrated_and_saved(storage):
    legacy = {
        "mappings": [
            {"id": "1", "sequence": "g", "label": "GitHub", "action": {"type": "url", "target": "https://github.com"}},
            {"id": "2", "sequence": "ot", "label": "Terminal", "action": {"type": "app", "target": "/Apps/Terminal.app"}},
        ]
    }
    storage.set_item(LEGACY_STORAGE_KEY, json.dumps(legacy))

    config = get_config(storage)
    github, group = config.actions
    assert github.id == "1"
    assert isinstance(group, Group)
    assert group.actions[0].value == "/Apps/Terminal.app"

    assert storage.get_item(STORAGE_KEY) is not None
    assert get_config(storage) == config


def test_unusable_legacy_record_is_ignored(storage):
    storage.set_item(LEGACY_STORAGE_KEY, "[1, 2, 3]")
    assert migrate_from_legacy(storage) is None
    storage.set_item(LEGACY_STORAGE_KEY, json.dumps({"mappings": []}))
    assert migrate_from_legacy(storage) is None
    assert get_config(storage) == default_config()


def test_clear_config_removes_both_records(storage, tree):
    save_config(storage, tree)
    storage.set_item(LEGACY_STORAGE_KEY, "{}")
    clear_config(storage)
    assert storage.get_item(STORAGE_KEY) is None
    assert storage.get_item(LEGACY_STORAGE_KEY) is None
    assert get_config(storage) == default_config()
