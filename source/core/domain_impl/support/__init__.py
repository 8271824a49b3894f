"""Support domain package exports: stores, edit flow and clipboard helpers."""

from __future__ import annotations

from . import clipboard_service
from . import node_edit_flow_service
from . import node_store_service

__all__ = [
    "clipboard_service",
    "node_edit_flow_service",
    "node_store_service",
]
