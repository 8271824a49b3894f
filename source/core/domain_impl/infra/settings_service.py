"""User settings load/save for the node editor."""

import json
import os
from dataclasses import asdict, dataclass
from typing import Any

from core import constants as app_constants
from core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class UserSettings:
    font_size: int = app_constants.FONT_SIZE_DEFAULT
    diag_log_enabled: bool = True


def _parse_bool_token(raw: Any) -> bool | None:
    # Accepts bool/int or 0/1-style text.
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in ("1", "true", "yes", "on"):
            return True
        if token in ("0", "false", "no", "off"):
            return False
    return None


def settings_from_payload(data: Any) -> UserSettings:
    """Build settings from decoded JSON, ignoring unknown or out-of-range values."""
    settings = UserSettings()
    if not isinstance(data, dict):
        return settings
    fs = data.get("font_size")
    if isinstance(fs, int) and not isinstance(fs, bool):
        if app_constants.FONT_SIZE_MIN <= fs <= app_constants.FONT_SIZE_MAX:
            settings.font_size = fs
    diag_pref = _parse_bool_token(data.get("diag_log_enabled"))
    if diag_pref is not None:
        settings.diag_log_enabled = diag_pref
    return settings


def load_user_settings(path: Any) -> UserSettings:
    if not path or not os.path.isfile(path):
        return UserSettings()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return UserSettings()
    return settings_from_payload(data)


def save_user_settings(path: Any, settings: UserSettings) -> bool:
    try:
        payload = json.dumps(asdict(settings), ensure_ascii=False)
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(payload)
        return True
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False
