"""In-memory document and selection stores consumed by the node edit session."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from core import constants as app_constants
from core.exceptions import EXPECTED_ERRORS
from core.node_model import SelectedNode
import logging
_LOG = logging.getLogger(__name__)


class DocumentProvider(Protocol):
    def get_document_text(self) -> str: ...

    def set_document_text(self, text: str, mark_dirty: bool = True) -> None: ...


class SelectionProvider(Protocol):
    @property
    def selected(self) -> SelectedNode | None: ...


class DocumentStore:
    """Holds the full document text; the only writer is a committed save."""

    def __init__(self, text: str = app_constants.EMPTY_OBJECT_TEXT) -> None:
        self._text = str(text)
        self.has_changes = False

    def get_document_text(self) -> str:
        return self._text

    def set_document_text(self, text: str, mark_dirty: bool = True) -> None:
        self._text = str(text)
        if mark_dirty:
            self.has_changes = True


class SelectionStore:
    """Currently selected node plus change listeners."""

    def __init__(self, selected: SelectedNode | None = None) -> None:
        self._selected = selected
        self._listeners: list[Callable[[SelectedNode | None], Any]] = []

    @property
    def selected(self) -> SelectedNode | None:
        return self._selected

    def subscribe(self, callback: Callable[[SelectedNode | None], Any]) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(callback)
            except ValueError as exc:
                _LOG.debug('expected_error', exc_info=exc)

        return _unsubscribe

    def select(self, node: SelectedNode | None) -> None:
        self._selected = node
        self._notify()

    def clear(self) -> None:
        self.select(None)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self._selected)
            except EXPECTED_ERRORS as exc:
                _LOG.debug('expected_error', exc_info=exc)
