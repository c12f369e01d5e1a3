#!/usr/bin/env python
# encoding: utf-8
"""
Global UI theme configuration for PyQt5 / qfluentwidgets.

Responsibilities:
- Define global font, color, and spacing tokens.
- Provide helpers to apply the unified font/color and title styles.

Side effects:
- Modify QWidget style sheets and fonts of supplied widgets.
"""

from __future__ import annotations
from typing import Annotated

from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QWidget

# -----------------------------------------------------------------------------
# Global Font and Color Constants (Annotated)
# -----------------------------------------------------------------------------

FONT_SIZE: Annotated[int, "Base font size in pixels for general UI text"] = 14
FONT_FAMILY: Annotated[str, "Primary UI font family"] = "Verdana"
TEXT_COLOR: Annotated[str, "Primary foreground color for text"] = "#fafafa"

STYLE_BASE: Annotated[str, "Base inline style snippet used in stylesheets (font-size & family)"] = (
    f"font-size:{FONT_SIZE}px; font-family:{FONT_FAMILY};"
)

ACCENT_COLOR: Annotated[str, "Brand/accent color used for highlights and active states"] = "#0067c0"
CONTROL_HEIGHT: Annotated[int, "Default control height in pixels for inputs/buttons"] = 32
# Symbols are drawn black on white regardless of the window theme.
IMAGE_BACKGROUND: Annotated[str, "Background color behind the rendered symbol"] = "#ffffff"


# -----------------------------------------------------------------------------
# Function: apply_title_style
# -----------------------------------------------------------------------------
def apply_title_style(label: QWidget) -> None:
    """Give a section title the accent left border used across pages."""
    label.setStyleSheet(
        f"""
        {STYLE_BASE} color:{TEXT_COLOR};
        border-left: 4px solid {ACCENT_COLOR};
        padding-left: 8px;
        """
    )
    label.setFont(QFont(FONT_FAMILY, FONT_SIZE))


# -----------------------------------------------------------------------------
# Function: apply_font
# -----------------------------------------------------------------------------
def apply_font(*widgets: QWidget) -> None:
    """Apply the base font and control height to input widgets."""
    font = QFont(FONT_FAMILY, FONT_SIZE)
    for widget in widgets:
        widget.setFont(font)
        widget.setMinimumHeight(CONTROL_HEIGHT)


__all__ = [
    "ACCENT_COLOR",
    "CONTROL_HEIGHT",
    "FONT_FAMILY",
    "FONT_SIZE",
    "IMAGE_BACKGROUND",
    "STYLE_BASE",
    "TEXT_COLOR",
    "apply_font",
    "apply_title_style",
]
