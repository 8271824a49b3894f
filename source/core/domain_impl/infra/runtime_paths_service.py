"""Where the node editor keeps its settings and diagnostics files."""

import os
import sys
from dataclasses import dataclass
from typing import Any

from core import constants as app_constants
from core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeFiles:
    root: str
    settings: str
    diag_log: str


def _env_base(platform_name: str, env: Any) -> str:
    match platform_name:
        case "win32":
            names = ("LOCALAPPDATA", "APPDATA")
        case _:
            names = ("XDG_STATE_HOME",)
    for name in names:
        value = str(env.get(name, "") or "").strip()
        if value:
            return value
    return ""


def runtime_data_dir(
    create: bool = False,
    platform_name: str | None = None,
    env: Any = None,
) -> str:
    """Per-user state directory; falls back to the working directory when it cannot be created."""
    platform_name = sys.platform if platform_name is None else platform_name
    env = os.environ if env is None else env
    base = _env_base(platform_name, env)
    if not base:
        home = os.path.expanduser("~")
        base = home if platform_name == "win32" else os.path.join(home, ".local", "state")
    target = os.path.join(base, app_constants.RUNTIME_DIR_NAME)
    if create:
        try:
            os.makedirs(target, exist_ok=True)
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)
            return os.getcwd()
    return target


def runtime_files(runtime_dir: str, settings_override: str | None = None) -> RuntimeFiles:
    root = str(runtime_dir)
    return RuntimeFiles(
        root=root,
        settings=settings_override or os.path.join(root, app_constants.SETTINGS_FILENAME),
        diag_log=os.path.join(root, app_constants.DIAG_LOG_FILENAME),
    )
