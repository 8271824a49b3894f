"""Modal button icons drawn with Pillow."""

from __future__ import annotations

import tkinter as tk
from typing import Any

from PIL import Image, ImageDraw, ImageTk

from core import constants as app_constants
from core.domain_impl.ui.modal_theme_service import hex_to_rgb_tuple
from core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)

ICON_KEYS = ("edit", "save", "cancel", "close", "copy", "add", "remove")


def draw_modal_icon(key: str, fg_hex: Any, accent_hex: Any) -> Image.Image:
    """Draw one 16x16 RGBA icon; unknown keys give a plain accent frame."""
    size = app_constants.MODAL_ICON_SIZE
    icon = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(icon)
    fg = hex_to_rgb_tuple(fg_hex) + (255,)
    accent = hex_to_rgb_tuple(accent_hex) + (130,)

    def glow_line(points, width=1):
        draw.line(points, fill=accent, width=max(1, width + 2))
        draw.line(points, fill=fg, width=width)

    def glow_rect(box, width=1):
        draw.rectangle(box, outline=accent, width=max(1, width + 1))
        draw.rectangle(box, outline=fg, width=width)

    match key:
        case "edit":
            # Pencil: shaft + tip.
            glow_line((4, 12, 12, 4), width=2)
            draw.polygon([(2, 14), (3, 11), (5, 13)], fill=fg)
        case "save":
            # Check mark.
            glow_line((3, 8, 7, 12), width=2)
            glow_line((7, 12, 13, 4), width=2)
        case "cancel" | "close":
            glow_line((4, 4, 12, 12), width=2)
            glow_line((12, 4, 4, 12), width=2)
        case "copy":
            # Two stacked sheets.
            glow_rect((2, 2, 9, 10), width=1)
            glow_rect((6, 6, 13, 14), width=1)
        case "add":
            glow_line((8, 3, 8, 13), width=2)
            glow_line((3, 8, 13, 8), width=2)
        case "remove":
            glow_line((3, 8, 13, 8), width=2)
        case _:
            draw.rectangle((0, 0, size - 1, size - 1), outline=accent, width=1)
    return icon


def build_modal_icons(palette: dict[str, str]) -> dict[str, Any]:
    """Build Tk photo images for every modal button; empty when Tk cannot host them."""
    icons = {}
    try:
        for key in ICON_KEYS:
            icon = draw_modal_icon(key, palette.get("icon_fg", "#deeff8"), palette.get("icon_accent", "#a9ddf0"))
            icons[key] = ImageTk.PhotoImage(icon)
    except EXPECTED_ERRORS + (tk.TclError,) as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return {}
    return icons
