"""JSON view pillar: read-only renderings of the selected node."""

import json
from typing import Any, Iterable

from core import constants as app_constants
from core.domain_impl.json import json_io_core
from core.exceptions import EXPECTED_ERRORS
from core.node_model import Index, Key, KeyedRow, Row, ScalarRow, SelectedNode, to_path
import logging
_LOG = logging.getLogger(__name__)


def normalize(rows: Iterable[Row] | None) -> str:
    """Render node rows as a JSON snippet, leaving nested array/object rows out."""
    items = list(rows or [])
    if not items:
        return app_constants.EMPTY_OBJECT_TEXT
    if len(items) == 1 and isinstance(items[0], ScalarRow):
        value = items[0].value
        try:
            return json.dumps(value, ensure_ascii=False, allow_nan=False)
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)
            return str(value)

    obj = {}
    for row in items:
        if row.is_container or not isinstance(row, KeyedRow) or not row.key:
            continue
        obj[row.key] = row.value
    try:
        return json.dumps(obj, indent=app_constants.JSON_INDENT, ensure_ascii=False, allow_nan=False)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return str(obj)


def format_path(path: Any = None) -> str:
    """Render a path as $["key"][0]... ; absent or empty is the root marker."""
    use_path = to_path(path)
    if not use_path:
        return app_constants.ROOT_PATH_MARKER
    parts = [app_constants.ROOT_PATH_MARKER]
    for segment in use_path:
        match segment:
            case Index(position=position):
                parts.append(f"[{position}]")
            case Key(name=name):
                parts.append(f"[{json.dumps(name, ensure_ascii=False)}]")
    return "".join(parts)


def json_type_tag(value: Any) -> str:
    if value is None:
        return app_constants.ROW_TYPE_NULL
    if isinstance(value, bool):
        return app_constants.ROW_TYPE_BOOLEAN
    if isinstance(value, (int, float)):
        return app_constants.ROW_TYPE_NUMBER
    if isinstance(value, list):
        return app_constants.ROW_TYPE_ARRAY
    if isinstance(value, dict):
        return app_constants.ROW_TYPE_OBJECT
    return app_constants.ROW_TYPE_STRING


def summarize_container(value: Any) -> str:
    """Placeholder text shown for nested children instead of their contents."""
    count = len(value)
    if isinstance(value, list):
        return f"[{count} item{'' if count == 1 else 's'}]"
    return f"{{{count} key{'' if count == 1 else 's'}}}"


def rows_for_value(value: Any) -> tuple[Row, ...]:
    """Project a parsed JSON value into the rows a tree node displays.

    Objects give one keyed row per property (nested children summarized),
    arrays give no rows of their own, scalars give a single unkeyed row.
    """
    if isinstance(value, dict):
        rows = []
        for key, child in value.items():
            tag = json_type_tag(child)
            shown = summarize_container(child) if tag in app_constants.CONTAINER_ROW_TYPES else child
            rows.append(KeyedRow(key=key, value=shown, type=tag))
        return tuple(rows)
    if isinstance(value, list):
        return ()
    return (ScalarRow(value=value, type=json_type_tag(value)),)


def select_node(document_text: Any, path: Any = None) -> SelectedNode:
    """Build the selected-node payload for the value at path inside the document."""
    root = json_io_core.parse_document(document_text)
    use_path = to_path(path)
    value = json_io_core.get_value(root, use_path)
    return SelectedNode(rows=rows_for_value(value), path=use_path)


__all__ = [name for name in globals() if not name.startswith("__")]
