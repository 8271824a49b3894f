"""Node editor launcher: edit one node of a JSON document piped through stdin.

Usage:

  node-editor --path '["customer", 0]' < document.json > edited.json

The modal opens on the node at --path. Saving writes the full edited document
to stdout; closing without saving prints nothing.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from core import constants as app_constants
from core.domain_impl.support.node_edit_flow_service import NodeEditSession
from core.domain_impl.support.node_store_service import DocumentStore, SelectionStore
from core.exceptions import AppError
from core.node_model import to_path
from services.node_edit_manager import NODE_EDIT

_LOG = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def parse_path_argument(raw: Any) -> Any:
    """Decode the --path JSON array into a typed path."""
    try:
        decoded = json.loads(str(raw or "[]"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--path must be a JSON array: {exc}") from exc
    if not isinstance(decoded, list):
        raise argparse.ArgumentTypeError("--path must be a JSON array of keys and indexes")
    try:
        return to_path(decoded)
    except (TypeError, ValueError) as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="node-editor",
        description=f"{app_constants.APP_NAME}: edit a single node of a JSON document read from stdin.",
    )
    parser.add_argument("--path", type=parse_path_argument, default=(), help='JSON array, e.g. \'["a", 0]\'')
    parser.add_argument("--settings", default=None, help="settings file (default: runtime data dir)")
    parser.add_argument("--font-size", type=int, default=None, help="store a new font size and use it")
    parser.add_argument("--last-error", action="store_true", help="print the latest diagnostics entry and exit")
    parser.add_argument("--debug", action="store_true", help="enable debug logging on stderr")
    return parser


def build_session(document_text: str, path: Any, diag_log_path: str | None = None) -> NodeEditSession:
    """Wire stores and the edit session for the node at path; raises ParseError/InvalidPath."""
    node = NODE_EDIT.select_node(document_text, path)
    documents = DocumentStore(document_text)
    selection = SelectionStore(node)
    session = NodeEditSession(documents, selection, diag_log_path=diag_log_path)
    selection.subscribe(session.load)
    return session


def run_modal(session: NodeEditSession, font_size: int) -> None:
    import tkinter as tk

    from core.domain_impl.ui.node_modal_ui_service import NodeModalView

    root = tk.Tk()
    root.withdraw()
    session.on_close = root.quit
    NodeModalView(root, session, font_size=font_size)
    try:
        root.mainloop()
    finally:
        root.destroy()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    runtime_dir = NODE_EDIT.runtime_paths_service.runtime_data_dir(create=True)
    files = NODE_EDIT.runtime_paths_service.runtime_files(runtime_dir, args.settings)
    settings = NODE_EDIT.settings_service.load_user_settings(files.settings)

    if args.font_size is not None:
        if not app_constants.FONT_SIZE_MIN <= args.font_size <= app_constants.FONT_SIZE_MAX:
            print(
                f"--font-size must be between {app_constants.FONT_SIZE_MIN} and {app_constants.FONT_SIZE_MAX}",
                file=sys.stderr,
            )
            return EXIT_INPUT_ERROR
        settings.font_size = args.font_size
        NODE_EDIT.settings_service.save_user_settings(files.settings, settings)

    if args.last_error:
        tail = NODE_EDIT.runtime_log_service.read_text_file_tail(files.diag_log)
        print(NODE_EDIT.runtime_log_service.read_latest_block(tail, app_constants.DIAG_LOG_TAIL_MAX_CHARS))
        return EXIT_OK

    document_text = sys.stdin.read()
    try:
        session = build_session(
            document_text,
            args.path,
            diag_log_path=files.diag_log if settings.diag_log_enabled else None,
        )
    except AppError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INPUT_ERROR

    run_modal(session, settings.font_size)
    if session.documents.has_changes:
        sys.stdout.write(session.documents.get_document_text())
        sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
