"""Controller for the barcode page behaviour.

This module contains the non-UI logic of the page.  It operates on the
pure view object (``BarcodeView``) and an :class:`AppState`, routing
every widget signal through :meth:`BarcodeController.handle_event` so
that rule-list changes are persisted by :func:`autosave_config`.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable

from PyQt5.QtWidgets import QWidget

from barcode_tool.ui.controller import show_info_bar
from barcode_tool.ui.model.autosave import autosave_config
from barcode_tool.ui.model.config import save_app_config
from barcode_tool.ui.model.encoder import RenderResult, render_barcode
from barcode_tool.ui.model.state import AppState


def restored_size(window: QWidget) -> tuple[float, float]:
    """Return the window's normal (non-minimised, non-maximised) size."""
    if window.isMaximized() or window.isMinimized() or window.isFullScreen():
        geometry = window.normalGeometry()
        return float(geometry.width()), float(geometry.height())
    return float(window.width()), float(window.height())


class BarcodeController:
    """Controller that wires behaviour onto a ``BarcodeView`` instance.

    Parameters
    ----------
    view : BarcodeView
        The pure UI view instance created by the caller.
    state : AppState
        Application state, owned by this controller from now on.
    config_path : str | os.PathLike | None
        Config file location; None uses the per-user default.
    window : QWidget | None
        Top-level window whose restored size is persisted with the config.
    apply_topmost : Callable[[bool], None] | None
        Called when the always-on-top switch changes.
    """

    def __init__(
        self,
        view: Any,
        state: AppState,
        *,
        config_path: str | os.PathLike[str] | None = None,
        window: QWidget | None = None,
        apply_topmost: Callable[[bool], None] | None = None,
    ) -> None:
        self.view = view
        self.state = state
        self.config_path = config_path
        self.window = window
        self._apply_topmost = apply_topmost

        self._refreshing = True
        try:
            self.view.set_rules(self.state.rules)
            self.view.set_rule_text(self.state.active_text)
            self.view.type_combo.setCurrentIndex(self.state.type_index)
            self.view.topmost_switch.setChecked(self.state.is_topmost)
        finally:
            self._refreshing = False

        self.view.rule_combo.textChanged.connect(
            lambda text: self.handle_event("text_changed", text)
        )
        self.view.type_combo.currentIndexChanged.connect(
            lambda index: self.handle_event("format_changed", index)
        )
        self.view.next_btn.clicked.connect(lambda: self.handle_event("next_clicked"))
        self.view.save_rule_btn.clicked.connect(lambda: self.handle_event("save_rule_clicked"))
        self.view.delete_rule_btn.clicked.connect(
            lambda: self.handle_event("delete_rule_clicked")
        )
        self.view.topmost_switch.checkedChanged.connect(
            lambda checked: self.handle_event("topmost_toggled", checked)
        )

        self.render()

    # ------------------------------------------------------------------
    # Event routing
    # ------------------------------------------------------------------

    @autosave_config
    def handle_event(self, event: str, *args: Any) -> bool | None:
        """Apply a UI event to the state.

        Returns False for rule events that changed nothing, so the
        autosave decorator skips the write.
        """
        if event == "text_changed":
            if self._refreshing:
                return None
            self.state.active_text = str(args[0]) if args else self.view.rule_text()
            self.render()
            return None

        if event == "format_changed":
            index = int(args[0]) if args else self.view.type_combo.currentIndex()
            self.state.select_format(index)
            self.render()
            return None

        if event == "next_clicked":
            self.state.active_text = self.view.rule_text()
            self.state.next_rule()
            self._show_active_text()
            self.render()
            return None

        if event == "save_rule_clicked":
            self.state.active_text = self.view.rule_text()
            if not self.state.save_active_rule():
                return False
            self._refresh_rules()
            self.render()
            logging.info("Rule saved: %s", self.state.active_text)
            show_info_bar(self.view, "success", "Saved", "Rule saved.")
            return True

        if event == "delete_rule_clicked":
            removed = self.view.rule_text()
            self.state.active_text = removed
            if not self.state.delete_active_rule():
                return False
            self._refresh_rules()
            self.render()
            logging.info("Rule deleted: %s", removed)
            return True

        if event == "topmost_toggled":
            self.state.is_topmost = bool(args[0]) if args else self.view.topmost_switch.isChecked()
            if self._apply_topmost is not None:
                self._apply_topmost(self.state.is_topmost)
            return None

        logging.debug("BarcodeController: unhandled event %s", event)
        return None

    # ------------------------------------------------------------------
    # Rendering / persistence
    # ------------------------------------------------------------------

    def render(self) -> RenderResult:
        """Render the active text; on encoder failure the previous image stays."""
        result = render_barcode(self.state.active_text, self.state.symbol_format)
        if result.ok:
            self.view.set_image(result.image)
        return result

    def save_config(self) -> tuple[bool, str]:
        """Write the current state, including the window's restored size."""
        if self.window is not None:
            self.state.set_window_size(*restored_size(self.window))
        return save_app_config(self.state.to_config(), self.config_path)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _show_active_text(self) -> None:
        self._refreshing = True
        try:
            self.view.set_rule_text(self.state.active_text)
        finally:
            self._refreshing = False

    def _refresh_rules(self) -> None:
        self._refreshing = True
        try:
            self.view.set_rules(self.state.rules)
            self.view.set_rule_text(self.state.active_text)
        finally:
            self._refreshing = False
