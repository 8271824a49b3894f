"""Palette and color helpers for the node modal."""

from __future__ import annotations

from typing import Any

from core.exceptions import EXPECTED_ERRORS


def modal_palette(variant: Any = "DARK") -> dict[str, str]:
    use_variant = str(variant).upper()
    match use_variant:
        case "LIGHT":
            return {
                "bg": "#f4f6f9",
                "fg": "#1b2330",
                "panel": "#ffffff",
                "accent": "#d6dde8",
                "button_fg": "#1b2330",
                "button_active": "#c2ccdb",
                "border": "#9fb0c6",
                "code_bg": "#eef1f6",
                "code_fg": "#1b2330",
                "muted": "#5d6b80",
                "error": "#c0262d",
                "icon_fg": "#1b2330",
                "icon_accent": "#3672b9",
            }
        case _:
            return {
                "bg": "#0f131a",
                "fg": "#e6e6e6",
                "panel": "#161b24",
                "accent": "#2a3342",
                "button_fg": "#deeff8",
                "button_active": "#3a465c",
                "border": "#264b64",
                "code_bg": "#11161f",
                "code_fg": "#d7f2ff",
                "muted": "#808a99",
                "error": "#f44747",
                "icon_fg": "#deeff8",
                "icon_accent": "#a9ddf0",
            }


def hex_to_rgb_tuple(
    hex_color: Any,
    default_rgb: tuple[int, int, int] = (220, 235, 245),
    *,
    expected_errors: tuple[type[BaseException], ...] = EXPECTED_ERRORS,
) -> tuple[int, int, int]:
    """Parse #RRGGBB into (r, g, b) with fallback defaults."""
    try:
        raw = str(hex_color).strip().lstrip("#")
        if len(raw) != 6:
            return default_rgb
        return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))
    except expected_errors:
        return default_rgb
