"""Field sync pillar: write edited key/value rows back into the object at a path."""

import math
from typing import Any, Iterable

from core import constants as app_constants
from core.domain_impl.json import json_io_core
from core.node_model import Coerced, EditableField, KeyedField, to_path
import logging
_LOG = logging.getLogger(__name__)

_MAX_EXACT_FLOAT_INT = 2**53


def _coerce_number(text: str) -> Coerced:
    token = text.strip()
    # int()/float() accept digit separators that are not numbers in JSON.
    if not token or "_" in token:
        return Coerced(text, used_fallback=True)
    try:
        return Coerced(int(token))
    except ValueError:
        pass
    try:
        number = float(token)
    except ValueError:
        return Coerced(text, used_fallback=True)
    if math.isnan(number) or math.isinf(number):
        return Coerced(text, used_fallback=True)
    # Exponent spellings of whole numbers ("1e3") are written back as integers.
    if "e" in token.lower() and number.is_integer() and abs(number) <= _MAX_EXACT_FLOAT_INT:
        return Coerced(int(number))
    return Coerced(number)


def _coerce_boolean(text: str) -> Coerced:
    low = text.lower()
    if low == "true":
        return Coerced(True)
    if low == "false":
        return Coerced(False)
    return Coerced(text, used_fallback=True)


def coerce_text(text: Any, type_tag: Any) -> Coerced:
    """Convert field text to the value its type tag asks for; keep the raw text when it cannot."""
    raw = "" if text is None else str(text)
    match type_tag:
        case app_constants.ROW_TYPE_NUMBER:
            return _coerce_number(raw)
        case app_constants.ROW_TYPE_BOOLEAN:
            return _coerce_boolean(raw)
        case app_constants.ROW_TYPE_NULL:
            return Coerced(None)
        case _:
            return Coerced(raw)


def coerce_field_value(field: EditableField) -> Coerced:
    return coerce_text(field.value, field.type)


def build_field_mapping(fields: Iterable[EditableField]) -> dict[str, Any]:
    """Map named fields to coerced values; unnamed fields are skipped."""
    mapping = {}
    for field in fields or []:
        if not isinstance(field, KeyedField) or not field.key:
            continue
        coerced = coerce_field_value(field)
        if coerced.used_fallback:
            _LOG.debug("field %r kept as text for type %s", field.key, field.type)
        mapping[field.key] = coerced.value
    return mapping


def _is_primitive(value: Any) -> bool:
    return value is None or not isinstance(value, (dict, list))


def field_keys(fields: Iterable[EditableField]) -> set[str]:
    """Keys of every keyed field, including empty ones; decides which properties survive."""
    return {field.key for field in fields or [] if isinstance(field, KeyedField) and field.key is not None}


def merge_fields_into_object(target: dict, mapping: dict[str, Any], present_keys: Any = None) -> dict:
    """Drop primitive keys with no field, then upsert mapping; nested children stay."""
    present = set(mapping) if present_keys is None else set(present_keys) | set(mapping)
    merged = {}
    for key, value in target.items():
        if key in mapping:
            merged[key] = mapping[key]
        elif key in present or not _is_primitive(value):
            merged[key] = value
    for key, value in mapping.items():
        if key not in merged:
            merged[key] = value
    return merged


def sync_fields(document_text: Any, path: Any, fields: Iterable[EditableField]) -> str:
    """Reconcile edited fields against the live object at path and return new document text."""
    fields = list(fields or [])
    mapping = build_field_mapping(fields)
    root = json_io_core.parse_document(document_text)
    use_path = to_path(path)
    target = json_io_core.resolve_target(root, use_path)
    if not isinstance(target, dict):
        return json_io_core.apply_edit(document_text, use_path, mapping)
    merged = merge_fields_into_object(target, mapping, field_keys(fields))
    return json_io_core.build_pretty_json_payload(json_io_core.set_value(root, use_path, merged))


__all__ = [name for name in globals() if not name.startswith("__")]
