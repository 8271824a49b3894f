"""Infra domain package exports: runtime paths, diagnostics log, user settings."""

from __future__ import annotations

from . import runtime_log_service
from . import runtime_paths_service
from . import settings_service

__all__ = [
    "runtime_log_service",
    "runtime_paths_service",
    "settings_service",
]
