import json

import pytest

from core.domain_impl.json import json_view_core
from core.domain_impl.support.node_edit_flow_service import NodeEditSession, parse_raw_edit_text, project_fields
from core.domain_impl.support.node_store_service import DocumentStore, SelectionStore
from core.node_model import KeyedField, KeyedRow, ScalarField, ScalarRow, SelectedNode


class RecordingDocumentStore(DocumentStore):
    def __init__(self, text):
        super().__init__(text)
        self.writes = []

    def set_document_text(self, text, mark_dirty=True):
        self.writes.append((text, mark_dirty))
        super().set_document_text(text, mark_dirty)


def _session(doc, path, diag_log_path=None):
    text = json.dumps(doc)
    documents = RecordingDocumentStore(text)
    selection = SelectionStore(json_view_core.select_node(text, path))
    closed = []
    session = NodeEditSession(documents, selection, on_close=lambda: closed.append(True), diag_log_path=diag_log_path)
    return session, documents, selection, closed


def test_project_fields_variants():
    assert project_fields(()) == []
    assert project_fields((ScalarRow(value=None, type="null"),)) == [ScalarField(value="", type="null")]
    assert project_fields(
        (
            KeyedRow(key="a", value=True, type="boolean"),
            KeyedRow(key="b", value="[1 item]", type="array"),
            KeyedRow(key="c", value=2.5, type="number"),
        )
    ) == [KeyedField(key="a", value="true", type="boolean"), KeyedField(key="c", value="2.5", type="number")]


def test_parse_raw_edit_text_falls_back_to_string():
    assert parse_raw_edit_text('{"a": 1}') == {"a": 1}
    assert parse_raw_edit_text("plain words") == "plain words"
    for token in ("NaN", "Infinity", "-Infinity", "[1, NaN]"):
        assert parse_raw_edit_text(token) == token


def test_session_read_views():
    session, _docs, _sel, _closed = _session({"customer": [{"id": 1, "tags": []}]}, ["customer", 0])

    assert json.loads(session.content_text) == {"id": 1}
    assert session.path_text == '$["customer"][0]'
    assert session.editing is False


def test_save_keyed_node_writes_once_and_closes():
    session, documents, _sel, closed = _session({"a": {"b": 1, "c": "keep", "d": {"e": 1}}}, ["a"])
    session.begin_edit()
    session.remove_field(1)
    session.update_field(0, value="99")

    assert session.save() is True
    assert len(documents.writes) == 1
    text, mark_dirty = documents.writes[0]
    assert mark_dirty is True
    assert json.loads(text) == {"a": {"b": 99, "d": {"e": 1}}}
    assert documents.has_changes is True
    assert session.editing is False
    assert closed == [True]


def test_add_field_names_new_key_after_count():
    session, documents, _sel, _closed = _session({"a": 1}, [])
    session.begin_edit()
    session.add_field()

    assert session.fields[-1] == KeyedField(key="key2", value="", type="string")
    session.update_field(1, value="new")
    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"a": 1, "key2": "new"}


def test_save_scalar_node_coerces_by_type():
    session, documents, _sel, _closed = _session({"list": [1, 2]}, ["list", 1])
    session.begin_edit()
    session.update_field(0, value="20")

    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"list": [1, 20]}


def test_save_string_scalar_keeps_digits_as_text():
    session, documents, _sel, _closed = _session({"s": "old"}, ["s"])
    session.begin_edit()
    session.update_field(0, value="42")

    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"s": "42"}


def test_save_node_without_fields_uses_raw_text():
    session, documents, _sel, _closed = _session({"list": [1, 2]}, ["list"])

    assert session.fields == []
    assert session.edit_text == "{}"
    session.begin_edit()
    session.set_edit_text("[3, 4, 5]")
    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"list": [3, 4, 5]}


def test_save_raw_text_that_is_not_json_is_stored_as_string():
    session, documents, _sel, _closed = _session({"list": []}, ["list"])
    session.begin_edit()
    session.set_edit_text("not json")

    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"list": "not json"}


def test_cancel_discards_edits_and_never_writes():
    session, documents, _sel, closed = _session({"a": 1}, [])
    session.begin_edit()
    session.update_field(0, value="5")
    session.add_field()
    session.cancel_edit()

    assert session.editing is False
    assert session.fields == [KeyedField(key="a", value="1", type="number")]
    assert documents.writes == []
    assert closed == []


def test_save_failure_keeps_edit_mode_and_reports_message(tmp_path):
    diag = tmp_path / "diag.log"
    session, documents, _sel, closed = _session({"a": {"b": {"c": 1}}}, ["a", "b"], diag_log_path=str(diag))
    documents._text = '{"other": 1}'
    session.begin_edit()

    assert session.save() is False
    assert session.editing is True
    assert session.error == 'Invalid path: $["a"]'
    assert documents.writes == []
    assert closed == []
    logged = diag.read_text(encoding="utf-8")
    assert "context=node_save_failure" in logged
    assert 'path=$["a"]["b"]' in logged


def test_save_parse_failure_message():
    session, documents, _sel, _closed = _session({"a": 1}, [])
    documents._text = "{broken"
    session.begin_edit()

    assert session.save() is False
    assert "line 1" in session.error


def test_save_without_selection_is_noop():
    documents = RecordingDocumentStore("{}")
    session = NodeEditSession(documents, SelectionStore(None))

    assert session.content_text == "{}"
    assert session.path_text == "$"
    session.begin_edit()
    assert session.editing is False
    assert session.save() is False
    assert documents.writes == []


def test_selection_change_reloads_session():
    session, _docs, selection, _closed = _session({"a": 1, "b": {"c": "x"}}, [])
    selection.subscribe(session.load)
    session.begin_edit()
    session.update_field(0, value="changed")

    selection.select(SelectedNode(rows=(KeyedRow(key="c", value="x", type="string"),), path=("b",)))

    assert session.editing is False
    assert session.fields == [KeyedField(key="c", value="x", type="string")]
    assert session.path_text == '$["b"]'


def test_update_field_rejects_unknown_attributes():
    session, _docs, _sel, _closed = _session({"a": 1}, [])

    with pytest.raises(TypeError):
        session.update_field(0, type="boolean")


def test_save_without_edits_keeps_empty_key_property():
    session, documents, _sel, _closed = _session({"a": {"": 1, "b": 2}}, ["a"])
    session.begin_edit()

    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"a": {"": 1, "b": 2}}


def test_save_raw_text_nan_is_stored_as_string():
    session, documents, _sel, _closed = _session({"a": []}, ["a"])
    session.begin_edit()
    session.set_edit_text("NaN")

    assert session.save() is True
    assert json.loads(documents.get_document_text()) == {"a": "NaN"}
