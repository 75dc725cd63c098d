"""Tests for user preferences and the idle timeout derived from them."""

import json

import pytest

from leaderkey.preferences import default_preferences, load_preferences, save_preferences, timeout_ms


@pytest.mark.parametrize(
    "seconds, expected",
    [
        ("2.5", 2500),
        ("4", 4000),
        ("1", 2500),
        ("10", 6000),
        (3.25, 3250),
        ("abc", 2500),
        ("", 2500),
        (None, 2500),
        ("nan", 2500),
    ],
)
def test_timeout_is_clamped(seconds, expected):
    assert timeout_ms({"enable_timeout": True, "timeout_seconds": seconds}) == expected


def test_timeout_disabled():
    assert timeout_ms({"enable_timeout": False, "timeout_seconds": "4"}) is None


def test_defaults_when_missing(tmp_path):
    prefs = load_preferences(tmp_path / "preferences.json")
    assert prefs == default_preferences()
    assert timeout_ms(prefs) == 2500


def test_save_and_merge_with_defaults(tmp_path):
    path = tmp_path / "nested" / "preferences.json"
    save_preferences(path, {"timeout_seconds": "5"})
    prefs = load_preferences(path)
    assert prefs["timeout_seconds"] == "5"
    assert prefs["enable_timeout"] is True


def test_corrupt_preferences_fall_back(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{nope", encoding="utf-8")
    assert load_preferences(path) == default_preferences()
    path.write_text(json.dumps(["list"]), encoding="utf-8")
    assert load_preferences(path) == default_preferences()
