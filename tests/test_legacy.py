"""Tests for migrating flat legacy key mappings into a tree."""

import pytest

from leaderkey.legacy import convert_legacy_type, migrate_legacy_mappings
from leaderkey.models import Action, Group, LegacyAction, LegacyKeyMapping


def mapping(sequence, target="x", kind="app", label="", id_=""):
    return {"id": id_ or f"id-{sequence}", "sequence": sequence, "label": label, "action": {"type": kind, "target": target}}


@pytest.mark.parametrize(
    "legacy, expected",
    [
        ("app", "application"),
        ("url", "url"),
        ("raycast", "url"),
        ("file", "folder"),
        ("shell", "command"),
        ("something-else", "application"),
    ],
)
def test_convert_legacy_type(legacy, expected):
    assert convert_legacy_type(legacy) == expected


def test_nothing_to_migrate():
    assert migrate_legacy_mappings([]) is None
    assert migrate_legacy_mappings([{"id": "1", "sequence": ""}]) is None


def test_single_key_mappings_land_at_root():
    root = migrate_legacy_mappings([mapping("c", "/Apps/Calculator.app", label="Calculator")])
    assert root.actions == [
        Action(id="id-c", key="c", type="application", label="Calculator", value="/Apps/Calculator.app")
    ]


def test_unlabelled_mapping_has_no_label():
    root = migrate_legacy_mappings([mapping("t", "https://example.com", kind="url")])
    assert root.actions[0].label is None
    assert root.actions[0].type == "url"


def test_prefix_groups_are_synthesized():
    root = migrate_legacy_mappings([mapping("xyz", "make", kind="shell", label="Make")])
    (x,) = root.actions
    assert isinstance(x, Group)
    assert (x.key, x.label) == ("x", "X")
    (xy,) = x.actions
    assert (xy.key, xy.label) == ("y", "XY")
    (z,) = xy.actions
    assert isinstance(z, Action)
    assert (z.key, z.type, z.value, z.label) == ("z", "command", "make", "Make")


def test_explicit_group_record_keeps_id_and_name():
    root = migrate_legacy_mappings(
        [
            mapping("wg", "https://github.com", kind="url", label="GitHub"),
            {"id": "g-web", "sequence": "w", "label": "w", "isGroup": True, "groupName": "Web"},
        ]
    )
    (web,) = root.actions
    assert web.id == "g-web"
    assert web.label == "Web"
    assert [a.key for a in web.actions] == ["g"]


def test_explicit_group_falls_back_to_label():
    root = migrate_legacy_mappings([{"id": "g", "sequence": "a", "label": "Apps", "isGroup": True}])
    assert root.actions == [Group(id="g", key="a", label="Apps")]


def test_actions_are_placed_before_groups():
    root = migrate_legacy_mappings([mapping("ab"), mapping("c"), mapping("d")])
    assert [item.key for item in root.actions] == ["c", "d", "a"]


def test_conflicting_records_are_dropped():
    root = migrate_legacy_mappings([mapping("c", "/first"), mapping("c", "/second")])
    assert [a.value for a in root.actions] == ["/first"]


def test_group_conflicting_with_action_is_dropped():
    root = migrate_legacy_mappings([mapping("a", "/Apps/A.app"), mapping("ab", "/Apps/B.app")])
    assert len(root.actions) == 1
    assert isinstance(root.actions[0], Action)


def test_accepts_record_objects():
    record = LegacyKeyMapping(id="1", sequence="f", label="Finder", action=LegacyAction("app", "/Apps/Finder.app"))
    root = migrate_legacy_mappings([record])
    assert root.actions[0].id == "1"
    assert root.actions[0].label == "Finder"


def test_record_from_dict_reads_camel_case():
    record = LegacyKeyMapping.from_dict({"id": "1", "sequence": "w", "isGroup": True, "groupName": "Web"})
    assert record.is_group
    assert record.group_name == "Web"
    assert record.action is None


def shape(items):
    """Structure without ids: (key, type, label, value or children)."""
    return [
        (n.key, n.type, n.label, shape(n.actions) if isinstance(n, Group) else n.value)
        for n in items
    ]


def test_migration_is_repeatable():
    records = [
        mapping("xyz", "make", kind="shell", label="Make"),
        mapping("xw", "https://example.com", kind="url"),
        mapping("c", "/Apps/Calculator.app", label="Calculator"),
        {"id": "", "sequence": "q", "isGroup": True, "groupName": "Quick"},
        mapping("qa", "/tmp", kind="file"),
    ]
    first = migrate_legacy_mappings(records)
    second = migrate_legacy_mappings(records)

    assert shape(first.actions) == shape(second.actions)
    assert first.actions[2].id != second.actions[2].id
    assert shape(first.actions) == [
        ("c", "application", "Calculator", "/Apps/Calculator.app"),
        ("q", "group", "Quick", [("a", "folder", None, "/tmp")]),
        ("x", "group", "X", [
            ("w", "url", None, "https://example.com"),
            ("y", "group", "XY", [("z", "command", "Make", "make")]),
        ]),
    ]
