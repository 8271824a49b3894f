"""Diagnostics log helpers: size-capped append of save failures and tail reads."""

import os
from datetime import datetime
from typing import Any

from core import constants as app_constants
from core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)

_MAX_EXCEPTION_CHAIN_DEPTH = 3
_MAX_FIELD_VALUE_LEN = 400


def trim_text_file_for_append(path: Any, max_bytes: Any, keep_bytes: Any) -> None:
    """Keep only the newest keep_bytes of a log file once it grows past max_bytes."""
    if not os.path.isfile(path):
        return
    if max_bytes <= 0 or keep_bytes <= 0:
        return
    try:
        size = os.path.getsize(path)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return
    if size <= max_bytes:
        return
    keep_bytes = min(int(keep_bytes), int(size))
    try:
        with open(path, "rb") as src:
            src.seek(size - keep_bytes)
            tail = src.read()
        with open(path, "wb") as dst:
            dst.write(b"\n--- log truncated ---\n")
            dst.write(tail)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return


def _safe_field_value(value: Any) -> str:
    # One line per field so a block stays greppable.
    cleaned = str(value or "").replace("\r", " ").replace("\n", " ").replace("\t", " ").strip()
    if len(cleaned) > _MAX_FIELD_VALUE_LEN:
        return f"{cleaned[:_MAX_FIELD_VALUE_LEN]}..."
    return cleaned


def exception_chain_summary(exc_value: Any, max_depth: int = _MAX_EXCEPTION_CHAIN_DEPTH) -> str:
    chain = []
    current = exc_value
    seen_ids = set()
    depth = 0
    while current is not None and depth < max(1, int(max_depth)):
        ident = id(current)
        if ident in seen_ids:
            break
        seen_ids.add(ident)
        etype = type(current).__name__
        msg = _safe_field_value(current)
        chain.append(f"{etype}: {msg}" if msg else etype)
        next_exc = getattr(current, "__cause__", None)
        if next_exc is None:
            next_exc = getattr(current, "__context__", None)
        current = next_exc
        depth += 1
    return " <= ".join(chain)


def append_diag_entry(path: Any, context: Any, summary: Any = "", exc: Any = None, extra_fields: Any = None) -> bool:
    """Append a ---separated key=value block; return False when the log cannot be written."""
    try:
        trim_text_file_for_append(path, app_constants.DIAG_LOG_MAX_BYTES, app_constants.DIAG_LOG_KEEP_BYTES)
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        fields = {
            "time": stamp,
            "context": context,
            "version": app_constants.APP_VERSION,
            "summary": summary,
        }
        if exc is not None:
            fields["detail"] = exception_chain_summary(exc)
        if isinstance(extra_fields, dict):
            for key, value in extra_fields.items():
                fields[str(key)] = value
        entry = "\n---\n" + "".join(f"{key}={_safe_field_value(value)}\n" for key, value in fields.items())
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(entry)
        return True
    except EXPECTED_ERRORS as exc_write:
        _LOG.debug('expected_error', exc_info=exc_write)
        return False


def read_text_file_tail(path: Any, max_chars: Any = app_constants.DIAG_LOG_TAIL_MAX_CHARS) -> Any:
    if not os.path.isfile(path):
        return ""
    limit = max(0, int(max_chars))
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            text = fh.read()
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return ""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[-limit:]


def read_latest_block(text: Any, max_chars: Any, marker: Any = "\n---\n") -> Any:
    source = str(text or "")
    if not source.strip():
        return ""
    idx = source.rfind(marker)
    if idx >= 0:
        block = source[idx + len(marker) :]
    else:
        block = source
    block = str(block or "").strip()
    if not block:
        return ""
    limit = max(0, int(max_chars))
    if limit > 0 and len(block) > limit:
        return block[-limit:]
    return block
