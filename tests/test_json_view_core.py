import json

from core.domain_impl.json import json_view_core
from core.node_model import Index, Key, KeyedRow, ScalarRow


def test_normalize_empty_rows_is_empty_object():
    assert json_view_core.normalize([]) == "{}"
    assert json_view_core.normalize(None) == "{}"


def test_normalize_scalar_row_serializes_standalone():
    assert json_view_core.normalize([ScalarRow(value=42, type="number")]) == "42"
    assert json_view_core.normalize([ScalarRow(value=True, type="boolean")]) == "true"
    assert json_view_core.normalize([ScalarRow(value=None, type="null")]) == "null"
    assert json_view_core.normalize([ScalarRow(value='say "hi"', type="string")]) == '"say \\"hi\\""'


def test_normalize_scalar_row_falls_back_to_text():
    assert json_view_core.normalize([ScalarRow(value=float("nan"), type="number")]) == "nan"
    assert json_view_core.normalize([ScalarRow(value={1, 2}, type="string")]) in ("{1, 2}", "{2, 1}")


def test_normalize_excludes_nested_rows_and_indents():
    rows = [
        KeyedRow(key="id", value=7, type="number"),
        KeyedRow(key="name", value="Ada", type="string"),
        KeyedRow(key="tags", value="[2 items]", type="array"),
        KeyedRow(key="address", value="{3 keys}", type="object"),
        KeyedRow(key="active", value=False, type="boolean"),
    ]
    text = json_view_core.normalize(rows)

    assert json.loads(text) == {"id": 7, "name": "Ada", "active": False}
    assert text.splitlines()[1] == '  "id": 7,'


def test_normalize_is_stable_under_reparse():
    rows = [KeyedRow(key="a", value=1, type="number"), KeyedRow(key="b", value="x", type="string")]
    first = json_view_core.normalize(rows)
    reparsed = [KeyedRow(key=k, value=v, type=json_view_core.json_type_tag(v)) for k, v in json.loads(first).items()]

    assert json_view_core.normalize(reparsed) == first


def test_normalize_keeps_non_ascii():
    assert json_view_core.normalize([ScalarRow(value="café", type="string")]) == '"café"'


def test_format_path_root_marker():
    assert json_view_core.format_path(None) == "$"
    assert json_view_core.format_path([]) == "$"
    assert json_view_core.format_path(()) == "$"


def test_format_path_brackets_segments():
    assert json_view_core.format_path(["a", 0, "b"]) == '$["a"][0]["b"]'
    assert json_view_core.format_path(["customer", 0, "id"]) == '$["customer"][0]["id"]'
    assert json_view_core.format_path((Key("0"), Index(0))) == '$["0"][0]'


def test_format_path_escapes_quotes_in_keys():
    assert json_view_core.format_path(['say "hi"']) == '$["say \\"hi\\""]'


def test_rows_for_object_summarizes_nested_children():
    rows = json_view_core.rows_for_value({"id": 1, "tags": ["x"], "meta": {}, "gone": None})

    assert rows == (
        KeyedRow(key="id", value=1, type="number"),
        KeyedRow(key="tags", value="[1 item]", type="array"),
        KeyedRow(key="meta", value="{0 keys}", type="object"),
        KeyedRow(key="gone", value=None, type="null"),
    )


def test_rows_for_scalar_and_array():
    assert json_view_core.rows_for_value("hi") == (ScalarRow(value="hi", type="string"),)
    assert json_view_core.rows_for_value(True) == (ScalarRow(value=True, type="boolean"),)
    assert json_view_core.rows_for_value([1, 2]) == ()


def test_select_node_resolves_path():
    node = json_view_core.select_node('{"customer": [{"id": 5}]}', ["customer", 0])

    assert node.path == (Key("customer"), Index(0))
    assert node.rows == (KeyedRow(key="id", value=5, type="number"),)
    assert json_view_core.format_path(node.path) == '$["customer"][0]'


def test_normalize_skips_rows_with_empty_key():
    rows = [KeyedRow(key="", value=1, type="number"), KeyedRow(key="b", value=2, type="number")]

    assert json.loads(json_view_core.normalize(rows)) == {"b": 2}
