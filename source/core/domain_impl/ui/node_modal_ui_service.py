"""Tk rendering of the node modal on top of a NodeEditSession."""

from __future__ import annotations

import tkinter as tk
import tkinter.font as tkfont
from typing import Any

from core import constants as app_constants
from core.domain_impl.support import clipboard_service
from core.domain_impl.support.node_edit_flow_service import NodeEditSession
from core.domain_impl.ui import modal_icon_service
from core.domain_impl.ui.modal_theme_service import modal_palette
from core.node_model import ScalarField
import logging
_LOG = logging.getLogger(__name__)


class NodeModalView:
    """Toplevel window showing the selected node, its edit form and its JSON path."""

    def __init__(self, root: Any, session: NodeEditSession, font_size: int = app_constants.FONT_SIZE_DEFAULT) -> None:
        self.root = root
        self.session = session
        self.palette = modal_palette()
        self.mono_font = tkfont.Font(root=root, family="Courier", size=int(font_size))
        self.ui_font = tkfont.Font(root=root, size=max(app_constants.FONT_SIZE_MIN, int(font_size) - 1))
        self.window = tk.Toplevel(root)
        self.window.title(app_constants.MODAL_TITLE)
        self.window.configure(bg=self.palette["bg"])
        self.window.minsize(app_constants.MODAL_MIN_WIDTH, 0)
        self.window.protocol("WM_DELETE_WINDOW", self.close)
        self.icons = modal_icon_service.build_modal_icons(self.palette)
        self.copy_feedback = clipboard_service.CopyFeedback(root, self._set_copy_label)
        self._outer_on_close = session.on_close
        session.on_close = self._on_session_closed
        # Tk variables are unset when their Python objects are collected.
        self._field_vars: list[tuple[tk.StringVar | None, tk.StringVar]] = []
        self._build()
        self.render()

    # ----------------------------
    # widget construction
    # ----------------------------

    def _button(self, parent: Any, text: str, icon_key: str, command: Any) -> tk.Button:
        icon = self.icons.get(icon_key)
        button = tk.Button(
            parent,
            text=text,
            image=icon if icon is not None else "",
            compound="left",
            command=command,
            font=self.ui_font,
            bg=self.palette["accent"],
            fg=self.palette["button_fg"],
            activebackground=self.palette["button_active"],
            activeforeground=self.palette["button_fg"],
            relief="flat",
            padx=6,
            pady=2,
        )
        return button

    def _code_text(self, parent: Any, height: int) -> tk.Text:
        return tk.Text(
            parent,
            height=height,
            wrap="none",
            font=self.mono_font,
            bg=self.palette["code_bg"],
            fg=self.palette["code_fg"],
            insertbackground=self.palette["code_fg"],
            relief="flat",
            borderwidth=0,
            highlightthickness=1,
            highlightbackground=self.palette["border"],
        )

    def _build(self) -> None:
        pal = self.palette
        outer = tk.Frame(self.window, bg=pal["bg"], padx=10, pady=10)
        outer.pack(fill="both", expand=True)

        header = tk.Frame(outer, bg=pal["bg"])
        header.pack(fill="x")
        tk.Label(header, text=app_constants.LABEL_CONTENT, font=self.ui_font, bg=pal["bg"], fg=pal["fg"]).pack(side="left")
        actions = tk.Frame(header, bg=pal["bg"])
        actions.pack(side="right")
        self.edit_button = self._button(actions, "Edit", "edit", self.on_edit)
        self.cancel_button = self._button(actions, "Cancel", "cancel", self.on_cancel)
        self.save_button = self._button(actions, "Save", "save", self.on_save)
        self.close_button = self._button(actions, "", "close", self.close)
        self.close_button.pack(side="right", padx=(4, 0))

        self.body = tk.Frame(outer, bg=pal["bg"])
        self.body.pack(fill="both", expand=True, pady=(6, 6))
        self.content_text = self._code_text(self.body, height=12)
        self.fields_frame = tk.Frame(self.body, bg=pal["bg"])
        self.raw_text = self._code_text(self.body, height=app_constants.MODAL_TEXTAREA_MIN_ROWS)
        self.raw_text.bind("<<Modified>>", self._on_raw_text_modified)

        path_header = tk.Frame(outer, bg=pal["bg"])
        path_header.pack(fill="x")
        tk.Label(path_header, text=app_constants.LABEL_JSON_PATH, font=self.ui_font, bg=pal["bg"], fg=pal["fg"]).pack(side="left")
        self.copy_button = self._button(path_header, app_constants.COPY_LABEL, "copy", self.on_copy_path)
        self.copy_button.pack(side="right")
        self.path_text = self._code_text(outer, height=1)
        self.path_text.pack(fill="x", pady=(4, 0))

        self.error_var = tk.StringVar(value="")
        self.error_label = tk.Label(
            outer,
            textvariable=self.error_var,
            font=self.ui_font,
            bg=pal["bg"],
            fg=pal["error"],
            anchor="w",
            justify="left",
            wraplength=app_constants.MODAL_MAX_WIDTH,
        )
        self.error_label.pack(fill="x", pady=(4, 0))

    # ----------------------------
    # rendering
    # ----------------------------

    @staticmethod
    def _set_readonly_text(widget: tk.Text, text: str) -> None:
        widget.configure(state="normal")
        widget.delete("1.0", "end")
        widget.insert("1.0", text)
        widget.configure(state="disabled")

    def render(self) -> None:
        session = self.session
        for button in (self.edit_button, self.cancel_button, self.save_button):
            button.pack_forget()
        if session.editing:
            self.save_button.pack(side="right", padx=(4, 0))
            self.cancel_button.pack(side="right", padx=(4, 0))
        else:
            self.edit_button.pack(side="right", padx=(4, 0))

        for child in (self.content_text, self.fields_frame, self.raw_text):
            child.pack_forget()
        if not session.editing:
            content = session.content_text
            line_count = content.count("\n") + 1
            self.content_text.configure(height=max(1, min(line_count, app_constants.MODAL_CONTENT_MAX_ROWS)))
            self._set_readonly_text(self.content_text, content)
            self.content_text.pack(fill="both", expand=True)
        elif session.fields:
            self._render_fields()
            self.fields_frame.pack(fill="both", expand=True)
        else:
            self._render_raw_text()
            self.raw_text.pack(fill="both", expand=True)

        self._set_readonly_text(self.path_text, session.path_text)
        self.error_var.set(session.error or "")

    def _render_fields(self) -> None:
        pal = self.palette
        for child in self.fields_frame.winfo_children():
            child.destroy()
        self._field_vars = []
        for idx, field in enumerate(self.session.fields):
            row = tk.Frame(self.fields_frame, bg=pal["bg"])
            row.pack(fill="x", pady=2)
            value_var = tk.StringVar(value=field.value)
            if isinstance(field, ScalarField):
                tk.Label(row, text="Value", font=self.ui_font, bg=pal["bg"], fg=pal["muted"]).pack(anchor="w")
                tk.Entry(row, textvariable=value_var, font=self.mono_font).pack(fill="x")
                value_var.trace_add("write", lambda *_a, i=idx, var=value_var: self.session.update_field(i, value=var.get()))
                self._field_vars.append((None, value_var))
                continue
            key_var = tk.StringVar(value=field.key or "")
            tk.Entry(row, textvariable=key_var, font=self.mono_font, width=16).pack(side="left")
            tk.Entry(row, textvariable=value_var, font=self.mono_font, width=32).pack(side="left", fill="x", expand=True, padx=(4, 4))
            self._button(row, "Remove", "remove", lambda i=idx: self.on_remove_field(i)).pack(side="left")
            key_var.trace_add("write", lambda *_a, i=idx, var=key_var: self.session.update_field(i, key=var.get()))
            value_var.trace_add("write", lambda *_a, i=idx, var=value_var: self.session.update_field(i, value=var.get()))
            self._field_vars.append((key_var, value_var))
        if any(not isinstance(field, ScalarField) for field in self.session.fields):
            self._button(self.fields_frame, "Add field", "add", self.on_add_field).pack(anchor="w", pady=(4, 0))

    def _render_raw_text(self) -> None:
        text = self.session.edit_text
        line_count = text.count("\n") + 1
        rows = max(app_constants.MODAL_TEXTAREA_MIN_ROWS, min(line_count, app_constants.MODAL_TEXTAREA_MAX_ROWS))
        self.raw_text.configure(height=rows)
        self.raw_text.delete("1.0", "end")
        self.raw_text.insert("1.0", text)
        self.raw_text.edit_modified(False)

    # ----------------------------
    # actions
    # ----------------------------

    def _on_raw_text_modified(self, _event: Any = None) -> None:
        if not self.raw_text.edit_modified():
            return
        self.session.set_edit_text(self.raw_text.get("1.0", "end-1c"))
        self.raw_text.edit_modified(False)

    def on_edit(self) -> None:
        self.session.begin_edit()
        self.render()

    def on_cancel(self) -> None:
        self.session.cancel_edit()
        self.render()

    def on_save(self) -> None:
        if self.session.save():
            return
        self.render()

    def on_add_field(self) -> None:
        self.session.add_field()
        self.render()

    def on_remove_field(self, index: int) -> None:
        self.session.remove_field(index)
        self.render()

    def on_copy_path(self) -> None:
        self.copy_feedback.copy(self.session.path_text)

    def _set_copy_label(self, text: str) -> None:
        try:
            self.copy_button.configure(text=text)
        except tk.TclError as exc:
            _LOG.debug('expected_error', exc_info=exc)

    def close(self) -> None:
        self.session.close()

    def _on_session_closed(self) -> None:
        self.copy_feedback.cancel()
        window = self.window
        self.window = None
        if window is not None:
            try:
                window.destroy()
            except tk.TclError as exc:
                _LOG.debug('expected_error', exc_info=exc)
        if callable(self._outer_on_close):
            self._outer_on_close()
