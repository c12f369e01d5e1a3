"""View module for the barcode page.

This module contains the *pure UI* for the single page of the tool:

- Editable rule field with a dropdown of saved rules
- Symbol format selector
- Next / Save rule / Delete rule buttons and the always-on-top switch
- Image area showing the rendered symbol

All behaviour (incrementing, rule management, rendering, persistence) is
implemented in :mod:`barcode_tool.ui.controller.barcode_ctl`, which wires
the widgets exposed here.
"""

from __future__ import annotations

import io
from typing import Iterable

from PIL import Image
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QSizePolicy, QVBoxLayout, QWidget
from qfluentwidgets import (
    BodyLabel,
    CardWidget,
    ComboBox,
    EditableComboBox,
    PrimaryPushButton,
    PushButton,
    StrongBodyLabel,
    SwitchButton,
)

from barcode_tool.ui.view.theme import IMAGE_BACKGROUND, apply_font, apply_title_style
from barcode_tool.util.constants import FORMAT_LABELS


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    """Convert a Pillow image to a QPixmap through an in-memory PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    qimage = QImage.fromData(buffer.getvalue())
    if qimage.isNull():
        raise ValueError("QImage failed to load from PNG buffer")
    return QPixmap.fromImage(qimage)


class BarcodeView(CardWidget):
    """Pure UI view for the barcode page (no rendering or persistence logic)."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("barcodeView")
        self._pixmap: QPixmap | None = None

        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        self.title_label = StrongBodyLabel("Barcode Generator", self)
        apply_title_style(self.title_label)
        layout.addWidget(self.title_label)

        # Rule field + format selector
        input_row = QHBoxLayout()
        input_row.setSpacing(6)
        self.rule_combo = EditableComboBox(self)
        self.rule_combo.setPlaceholderText("Type content or pick a saved rule")
        self.rule_combo.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        input_row.addWidget(self.rule_combo, 1)

        self.type_combo = ComboBox(self)
        self.type_combo.addItems(list(FORMAT_LABELS))
        input_row.addWidget(self.type_combo)
        layout.addLayout(input_row)

        # Actions
        action_row = QHBoxLayout()
        action_row.setSpacing(6)
        self.next_btn = PrimaryPushButton("Next", self)
        self.next_btn.setToolTip("Increment the trailing number and render")
        action_row.addWidget(self.next_btn)

        self.save_rule_btn = PushButton("Save rule", self)
        action_row.addWidget(self.save_rule_btn)

        self.delete_rule_btn = PushButton("Delete rule", self)
        action_row.addWidget(self.delete_rule_btn)
        action_row.addStretch(1)

        self.topmost_label = BodyLabel("Always on top", self)
        action_row.addWidget(self.topmost_label)
        self.topmost_switch = SwitchButton(self)
        self.topmost_switch.setOnText("")
        self.topmost_switch.setOffText("")
        action_row.addWidget(self.topmost_switch)
        layout.addLayout(action_row)

        apply_font(
            self.rule_combo,
            self.type_combo,
            self.next_btn,
            self.save_rule_btn,
            self.delete_rule_btn,
        )

        # Rendered symbol
        self.image_label = QLabel(self)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setMinimumSize(120, 80)
        self.image_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.image_label.setStyleSheet(f"background:{IMAGE_BACKGROUND}; border-radius:6px;")
        layout.addWidget(self.image_label, 1)

    # ------------------------------------------------------------------
    # Rule field
    # ------------------------------------------------------------------

    def rule_text(self) -> str:
        return self.rule_combo.text()

    def set_rule_text(self, text: str) -> None:
        if self.rule_combo.text() != text:
            self.rule_combo.setText(text)

    def set_rules(self, rules: Iterable[str]) -> None:
        """Replace the dropdown items; the typed text is restored by the caller."""
        self.rule_combo.clear()
        self.rule_combo.addItems(list(rules))

    # ------------------------------------------------------------------
    # Image area
    # ------------------------------------------------------------------

    def set_image(self, image: Image.Image | None) -> None:
        """Show *image*, or blank the image area when None."""
        if image is None:
            self._pixmap = None
            self.image_label.clear()
            return
        self._pixmap = pil_to_pixmap(image)
        self._update_scaled_pixmap()

    def _update_scaled_pixmap(self) -> None:
        if self._pixmap is None:
            return
        scaled = self._pixmap.scaled(
            self.image_label.size(),
            Qt.KeepAspectRatio,
            Qt.FastTransformation,
        )
        self.image_label.setPixmap(scaled)

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        self._update_scaled_pixmap()
