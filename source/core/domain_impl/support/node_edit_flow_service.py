"""Edit flow for the node modal: read views, edit mode, field edits and the save boundary."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

from core import constants as app_constants
from core.domain_impl.infra import runtime_log_service
from core.domain_impl.json import json_field_sync_core, json_io_core, json_view_core
from core.editor_state import EditorState
from core.exceptions import EXPECTED_ERRORS, AppError, ParseError
from core.node_model import EditableField, KeyedField, Row, ScalarField, ScalarRow, SelectedNode
from core.domain_impl.support.node_store_service import DocumentProvider, SelectionProvider
import logging
_LOG = logging.getLogger(__name__)

SAVE_ERRORS = (AppError,) + EXPECTED_ERRORS


def _field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        # Matches how the document spells it, so an unchanged field coerces back.
        return "true" if value else "false"
    return str(value)


def project_fields(rows: tuple[Row, ...] | list[Row]) -> list[EditableField]:
    """Project the primitive rows of a node into editable text fields."""
    prims = [row for row in rows or () if not row.is_container]
    if not prims:
        return []
    if len(prims) == 1 and isinstance(prims[0], ScalarRow):
        return [ScalarField(value=_field_text(prims[0].value), type=prims[0].type)]
    return [
        KeyedField(key=getattr(row, "key", None), value=_field_text(row.value), type=row.type)
        for row in prims
    ]


def parse_raw_edit_text(text: Any) -> Any:
    """Decode raw textarea JSON strictly, keeping the text itself when it is not JSON."""
    raw = str(text or "")
    try:
        return json_io_core.parse_document(raw)
    except ParseError as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return raw


class NodeEditSession:
    """Controller behind the node modal for the currently selected node."""

    def __init__(
        self,
        documents: DocumentProvider,
        selection: SelectionProvider,
        on_close: Callable[[], Any] | None = None,
        diag_log_path: str | None = None,
    ) -> None:
        self.documents = documents
        self.selection = selection
        self.on_close = on_close
        self.diag_log_path = diag_log_path
        self.state = EditorState()
        self.load()

    @property
    def node(self) -> SelectedNode | None:
        return self.selection.selected

    @property
    def editing(self) -> bool:
        return self.state.modal.editing

    @property
    def error(self) -> str | None:
        return self.state.modal.error

    @property
    def fields(self) -> list[EditableField]:
        return list(self.state.modal.fields)

    @property
    def edit_text(self) -> str:
        return self.state.modal.edit_text

    @property
    def content_text(self) -> str:
        node = self.node
        return json_view_core.normalize(node.rows if node else ())

    @property
    def path_text(self) -> str:
        node = self.node
        return json_view_core.format_path(node.path if node else None)

    def load(self, _node: Any = None) -> None:
        """Reset edit mode and re-project the selected node; used as a selection listener."""
        modal = self.state.modal
        modal.editing = False
        modal.error = None
        node = self.node
        rows = node.rows if node else ()
        modal.edit_text = json_view_core.normalize(rows)
        modal.fields = project_fields(rows)

    def begin_edit(self) -> None:
        if self.node is None:
            return
        self.state.modal.editing = True

    def cancel_edit(self) -> None:
        self.load()

    def close(self) -> None:
        self.state.modal.editing = False
        self.state.modal.error = None
        if callable(self.on_close):
            self.on_close()

    def set_edit_text(self, text: str) -> None:
        self.state.modal.edit_text = str(text)

    def update_field(self, index: int, **patch: Any) -> None:
        allowed = {"key", "value"}
        unknown = set(patch) - allowed
        if unknown:
            raise TypeError(f"Unsupported field attributes: {sorted(unknown)}")
        fields = self.state.modal.fields
        current = fields[index]
        if isinstance(current, ScalarField):
            patch.pop("key", None)
        fields[index] = dataclasses.replace(current, **patch)

    def add_field(self) -> None:
        fields = self.state.modal.fields
        fields.append(
            KeyedField(
                key=f"{app_constants.NEW_FIELD_KEY_PREFIX}{len(fields) + 1}",
                value="",
                type=app_constants.NEW_FIELD_TYPE,
            )
        )

    def remove_field(self, index: int) -> None:
        del self.state.modal.fields[index]

    def build_updated_document(self) -> str:
        """Compute the new document text for the current edits; raises typed failures."""
        node = self.node
        current = self.documents.get_document_text()
        fields = self.state.modal.fields
        if node.has_keys:
            return json_field_sync_core.sync_fields(current, node.path, fields)
        if len(fields) == 1 and isinstance(fields[0], ScalarField):
            new_value = json_field_sync_core.coerce_field_value(fields[0]).value
        else:
            new_value = parse_raw_edit_text(self.state.modal.edit_text)
        return json_io_core.apply_edit(current, node.path, new_value)

    def save(self) -> bool:
        """Commit edits to the document store; on failure keep edit mode open with a message."""
        self.state.modal.error = None
        node = self.node
        if node is None:
            return False
        try:
            updated = self.build_updated_document()
        except SAVE_ERRORS as exc:
            message = str(exc) or type(exc).__name__
            self.state.modal.error = message
            _LOG.info("save failed at %s: %s", self.path_text, message)
            if self.diag_log_path:
                runtime_log_service.append_diag_entry(
                    self.diag_log_path,
                    "node_save_failure",
                    summary=message,
                    exc=exc,
                    extra_fields={"path": self.path_text},
                )
            return False
        self.documents.set_document_text(updated, mark_dirty=True)
        _LOG.debug("saved node at %s", self.path_text)
        self.close()
        return True
