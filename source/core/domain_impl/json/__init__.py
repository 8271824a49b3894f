"""JSON domain package exports."""

from __future__ import annotations

from . import json_field_sync_core
from . import json_io_core
from . import json_view_core

from .json_field_sync_core import sync_fields
from .json_io_core import apply_edit
from .json_view_core import format_path, normalize

__all__ = [
    "json_field_sync_core",
    "json_io_core",
    "json_view_core",
    "apply_edit",
    "format_path",
    "normalize",
    "sync_fields",
]
