"""Structured runtime state for the node modal."""

from __future__ import annotations

from dataclasses import dataclass, field

from core import constants as app_constants
from core.node_model import EditableField


@dataclass(slots=True)
class ModalState:
    """Edit-mode flags and the uncommitted projection of the selected node."""

    editing: bool = False
    edit_text: str = app_constants.EMPTY_OBJECT_TEXT
    fields: list[EditableField] = field(default_factory=list)
    error: str | None = None


@dataclass(slots=True)
class EditorState:
    """Top-level grouped state for one edit session."""

    modal: ModalState = field(default_factory=ModalState)
