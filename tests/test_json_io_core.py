import json

import pytest

from core.domain_impl.json import json_io_core
from core.exceptions import InvalidPath, ParseError
from core.node_model import Index, Key


DOC = '{"a": {"b": 1, "c": [1, 2]}, "list": [{"x": 1}, {"x": 2}]}'


def test_apply_edit_replaces_only_target():
    result = json_io_core.apply_edit('{"a":{"b":1,"c":[1,2]}}', ["a", "b"], 99)

    assert json.loads(result) == {"a": {"b": 99, "c": [1, 2]}}


def test_apply_edit_output_is_pretty_printed():
    result = json_io_core.apply_edit('{"a":1}', ["a"], 2)

    assert result == '{\n  "a": 2\n}'


def test_apply_edit_array_element():
    result = json_io_core.apply_edit(DOC, ["list", 1, "x"], "two")

    assert json.loads(result)["list"] == [{"x": 1}, {"x": "two"}]
    assert json.loads(result)["a"] == {"b": 1, "c": [1, 2]}


def test_apply_edit_replaces_whole_array_item():
    result = json_io_core.apply_edit(DOC, [Key("list"), Index(0)], {"y": True})

    assert json.loads(result)["list"] == [{"y": True}, {"x": 2}]


def test_apply_edit_adds_missing_final_key():
    result = json_io_core.apply_edit('{"a": {}}', ["a", "new"], None)

    assert json.loads(result) == {"a": {"new": None}}


def test_apply_edit_root_replaces_document():
    assert json_io_core.apply_edit(DOC, [], [1, 2]) == "[\n  1,\n  2\n]"
    assert json_io_core.apply_edit(DOC, None, "x") == '"x"'


def test_apply_edit_root_still_requires_valid_document():
    with pytest.raises(ParseError):
        json_io_core.apply_edit("{not json", [], 1)


def test_apply_edit_missing_intermediate_is_invalid_path():
    with pytest.raises(InvalidPath) as excinfo:
        json_io_core.apply_edit('{"a": 1}', ["x", "y"], 1)

    assert str(excinfo.value) == 'Invalid path: $["x"]'
    assert excinfo.value.path == (Key("x"),)


def test_apply_edit_index_out_of_range_is_invalid_path():
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit(DOC, ["list", 5], 1)
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit(DOC, ["list", 5, "x"], 1)


def test_apply_edit_segment_kind_must_match_container():
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit(DOC, ["list", "0", "x"], 1)
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit('{"0": {"x": 1}}', [0, "x"], 1)


def test_apply_edit_scalar_parent_is_invalid_path():
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit('{"a": 1}', ["a", "b"], 2)
    with pytest.raises(InvalidPath):
        json_io_core.apply_edit('{"a": null}', ["a", "b", "c"], 2)


def test_parse_error_reports_position():
    with pytest.raises(ParseError) as excinfo:
        json_io_core.apply_edit('{"a": }', ["a"], 1)

    assert "(line 1, col 7)" in str(excinfo.value)
    assert excinfo.value.lineno == 1


def test_parse_rejects_non_standard_constants():
    with pytest.raises(ParseError):
        json_io_core.parse_document('{"a": NaN}')


def test_set_value_does_not_mutate_input():
    root = {"a": {"b": 1}, "keep": {"deep": [1]}}
    updated = json_io_core.set_value(root, ["a", "b"], 2)

    assert root == {"a": {"b": 1}, "keep": {"deep": [1]}}
    assert updated == {"a": {"b": 2}, "keep": {"deep": [1]}}
    assert updated["keep"] is root["keep"]


def test_apply_edit_preserves_key_order():
    result = json_io_core.apply_edit('{"z": 1, "a": 2, "m": 3}', ["a"], 20)

    assert list(json.loads(result)) == ["z", "a", "m"]


def test_resolve_target_reports_missing_final_segment():
    root = {"a": {"b": 1}}

    assert json_io_core.resolve_target(root, ["a", "zz"]) is json_io_core.MISSING
    assert json_io_core.resolve_target(root, []) is root
    with pytest.raises(InvalidPath):
        json_io_core.resolve_target(root, ["zz", "b"])
