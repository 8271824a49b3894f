"""Copy-path action: clipboard write plus the temporary "Copied" label."""

from typing import Any, Callable

from core import constants as app_constants
from core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)

COPY_FEEDBACK_MS = 1200


def copy_text_to_clipboard(root: Any, text: Any) -> bool:
    """Replace the clipboard contents with text; False when nothing was copied."""
    payload = str(text or "")
    if root is None or not payload:
        return False
    try:
        root.clipboard_clear()
        root.clipboard_append(payload)
        root.update_idletasks()
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False
    return True


class CopyFeedback:
    """Shows COPIED_LABEL after a copy and restores COPY_LABEL once the timer fires.

    A second copy before the timer fires restarts it.
    """

    def __init__(self, root: Any, set_label: Callable[[str], Any], delay_ms: int = COPY_FEEDBACK_MS) -> None:
        self.root = root
        self.set_label = set_label
        self.delay_ms = delay_ms
        self._after_id = None

    @property
    def pending(self) -> bool:
        return self._after_id is not None

    def copy(self, text: Any) -> bool:
        if not copy_text_to_clipboard(self.root, text):
            return False
        self.set_label(app_constants.COPIED_LABEL)
        self.cancel()
        self._after_id = self.root.after(self.delay_ms, self._restore)
        return True

    def cancel(self) -> None:
        after_id, self._after_id = self._after_id, None
        if after_id is None:
            return
        try:
            self.root.after_cancel(after_id)
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)

    def _restore(self) -> None:
        self._after_id = None
        try:
            self.set_label(app_constants.COPY_LABEL)
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)
