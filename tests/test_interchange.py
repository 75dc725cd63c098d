"""Tests for the id-free JSON interchange format."""

import json

import pytest

from leaderkey.constants import MAX_IMPORT_DEPTH
from leaderkey.interchange import (
    InterchangeError,
    export_config_to_json,
    export_leader_key_config,
    import_config_from_json,
    import_leader_key_config,
)
from leaderkey.models import Action, Group
from leaderkey.tree import collect_ids


SAMPLE = {
    "type": "group",
    "actions": [
        {"key": "c", "type": "application", "label": "Calculator", "value": "/Apps/Calculator.app"},
        {
            "key": "w",
            "type": "group",
            "label": "Web",
            "browser": "Firefox",
            "actions": [{"key": "g", "type": "url", "value": "https://github.com"}],
        },
    ],
}


def test_import_builds_tree_with_fresh_ids():
    config = import_leader_key_config(SAMPLE)
    calc, web = config.actions
    assert isinstance(calc, Action)
    assert (calc.key, calc.type, calc.label, calc.value) == ("c", "application", "Calculator", "/Apps/Calculator.app")
    assert isinstance(web, Group)
    assert web.browser == "Firefox"
    assert web.actions[0].label is None

    ids = collect_ids(config)
    assert len(ids) == 3
    assert len(set(ids)) == 3

    again = import_leader_key_config(SAMPLE)
    assert set(collect_ids(again)).isdisjoint(ids)


def test_export_drops_ids(tree):
    exported = export_leader_key_config(tree)
    assert exported["type"] == "group"
    assert '"id":' not in json.dumps(exported)
    assert exported["actions"][0] == {
        "key": "c",
        "type": "application",
        "label": "Calculator",
        "value": "/Apps/Calculator.app",
    }
    web = exported["actions"][2]
    assert web["browser"] == "Firefox"
    assert web["actions"][1]["browser"] == "Safari"
    assert "label" not in exported["actions"][4]


def test_export_then_import_keeps_structure(tree):
    result = import_config_from_json(export_config_to_json(tree))
    assert result.ok
    assert export_leader_key_config(result.config) == export_leader_key_config(tree)


def test_export_json_is_indented(tree):
    text = export_config_to_json(tree)
    assert text.startswith("{\n  ")


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "Invalid JSON: not an object"),
        ({"type": "application", "actions": []}, "Invalid config: root must have type 'group'"),
        ({"type": "group"}, "Invalid config: missing 'actions' array"),
        ({"type": "group", "actions": {}}, "Invalid config: missing 'actions' array"),
    ],
)
def test_import_rejects_bad_root(payload, message):
    with pytest.raises(InterchangeError) as exc:
        import_leader_key_config(payload)
    assert str(exc.value) == message


@pytest.mark.parametrize(
    "item, fragment",
    [
        ("c", "root.actions[0] must be an object"),
        ({"type": "url", "value": "x"}, "root.actions[0].key"),
        ({"key": "ab", "type": "url", "value": "x"}, "root.actions[0].key"),
        ({"key": "a", "type": "teleport", "value": "x"}, "root.actions[0].type"),
        ({"key": "a", "type": "url"}, "root.actions[0].value"),
        ({"key": "a", "type": "url", "value": "x", "label": 3}, "root.actions[0].label"),
        ({"key": "a", "type": "group"}, "root.actions[0].actions"),
    ],
)
def test_import_names_the_bad_field(item, fragment):
    with pytest.raises(InterchangeError) as exc:
        import_leader_key_config({"type": "group", "actions": [item]})
    assert fragment in str(exc.value)


def test_import_rejects_duplicate_sibling_keys():
    payload = {
        "type": "group",
        "actions": [
            {"key": "a", "type": "url", "value": "x"},
            {"key": "a", "type": "folder", "value": "/tmp"},
        ],
    }
    with pytest.raises(InterchangeError) as exc:
        import_leader_key_config(payload)
    assert "root.actions[1]" in str(exc.value)


def test_import_from_json_never_raises():
    bad = import_config_from_json("{not json")
    assert not bad.ok
    assert bad.error.startswith("Parse error")

    wrong = import_config_from_json("[1, 2]")
    assert not wrong.ok
    assert wrong.error == "Invalid JSON: not an object"
    assert wrong.config is None


def nested_groups(depth):
    item = {"key": "x", "type": "folder", "value": "/tmp"}
    for _ in range(depth):
        item = {"key": "g", "type": "group", "actions": [item]}
    return {"type": "group", "actions": [item]}


def test_import_accepts_nesting_up_to_the_limit():
    result = import_config_from_json(json.dumps(nested_groups(MAX_IMPORT_DEPTH)))
    assert result.ok


def test_import_rejects_groups_nested_too_deeply():
    result = import_config_from_json(json.dumps(nested_groups(MAX_IMPORT_DEPTH + 5)))
    assert not result.ok
    assert "nested deeper than" in result.error


def test_import_survives_pathological_nesting():
    text = '{"type":"group","actions":' + "[" * 5000 + "]" * 5000 + "}"
    result = import_config_from_json(text)
    assert not result.ok
    assert result.config is None
    assert result.error
