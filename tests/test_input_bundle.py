import copy

import pytest

from analysis_pipeline.input_bundle import InputBundle


def test_set_and_get_round_trip():
    bundle = InputBundle()
    payload = [1, 2, 3]
    bundle.set("values", payload)
    assert bundle.get("values", list) is payload


def test_get_without_type_returns_value():
    bundle = InputBundle()
    bundle.set("n", 7)
    assert bundle.get("n") == 7


def test_set_overwrites():
    bundle = InputBundle()
    bundle.set("k", 1)
    bundle.set("k", "two")
    assert bundle.get("k", str) == "two"
    assert len(bundle) == 1


def test_get_missing_key_raises():
    bundle = InputBundle()
    with pytest.raises(KeyError, match="not found"):
        bundle.get("missing", int)


def test_get_wrong_type_raises():
    bundle = InputBundle()
    bundle.set("k", "text")
    with pytest.raises(TypeError, match="bad type cast for key 'k'"):
        bundle.get("k", int)


def test_has_checks_key_and_type():
    bundle = InputBundle()
    bundle.set("k", 3.5)
    assert bundle.has("k", float) is True
    assert bundle.has("k", str) is False
    assert bundle.has("other", float) is False


def test_contains_and_len():
    bundle = InputBundle()
    bundle.set("a", 1)
    bundle.set("b", 2)
    assert "a" in bundle
    assert "c" not in bundle
    assert len(bundle) == 2


def test_remove_and_remove_missing():
    bundle = InputBundle()
    bundle.set("a", 1)
    bundle.remove("a")
    bundle.remove("never-there")
    assert "a" not in bundle
    assert len(bundle) == 0


def test_keys_lists_all_entries():
    bundle = InputBundle()
    for key in ("x", "y", "z"):
        bundle.set(key, key)
    assert sorted(bundle.keys()) == ["x", "y", "z"]


def test_clear_empties():
    bundle = InputBundle()
    bundle.set("a", 1)
    bundle.set("b", 2)
    bundle.clear()
    assert len(bundle) == 0
    assert bundle.keys() == []


def test_describe_lists_types():
    bundle = InputBundle()
    bundle.set("a", 1)
    bundle.set("b", "s")
    lines = bundle.describe().splitlines()
    assert sorted(lines) == ["a -> int", "b -> str"]
    assert bundle.describe().endswith("\n")