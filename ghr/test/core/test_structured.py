from __future__ import annotations

from ghr.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_float,
    get_int,
    get_list,
    get_str,
    get_table,
)


def test_as_str_dict() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict({1: "a"}) is None
    assert as_str_dict([1, 2]) is None


def test_as_obj_list() -> None:
    assert as_obj_list([1, "a"]) == [1, "a"]
    assert as_obj_list({"a": 1}) is None


def test_get_str_strips_and_rejects_empty() -> None:
    table: dict[str, object] = {"a": "  v1 ", "b": "   ", "c": 3}
    assert get_str(table, "a") == "v1"
    assert get_str(table, "b") is None
    assert get_str(table, "c") is None
    assert get_str(table, "missing") is None


def test_get_int_rejects_bool() -> None:
    table: dict[str, object] = {"id": 12, "flag": True, "text": "12"}
    assert get_int(table, "id") == 12
    assert get_int(table, "flag") is None
    assert get_int(table, "text") is None


def test_get_float_accepts_int() -> None:
    table: dict[str, object] = {"a": 3, "b": 2.5, "c": False}
    assert get_float(table, "a") == 3.0
    assert get_float(table, "b") == 2.5
    assert get_float(table, "c") is None


def test_get_bool_default() -> None:
    table: dict[str, object] = {"draft": True, "prerelease": "yes"}
    assert get_bool(table, "draft") is True
    assert get_bool(table, "prerelease") is False
    assert get_bool(table, "missing", default=True) is True


def test_get_table_and_list() -> None:
    table: dict[str, object] = {"github": {"owner": "octo"}, "errors": [{"code": "x"}]}
    assert get_table(table, "github") == {"owner": "octo"}
    assert get_table(table, "errors") is None
    assert get_list(table, "errors") == [{"code": "x"}]
    assert get_list(table, "github") is None
