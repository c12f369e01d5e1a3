"""Main application window view for the Barcode Test Assistant.

This module hosts the :class:`MainWindow` class and the top-level
exception hook.  The window owns the barcode page, its controller and
the system tray icon, and implements the close-to-tray lifecycle:

- closing the window saves the config and hides it to the tray,
- double-clicking the tray icon restores it,
- the tray menu's *Exit* action quits the application.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QIcon
from PyQt5.QtWidgets import QApplication, QMessageBox, QStyle, QSystemTrayIcon
from qfluentwidgets import Action, FluentIcon, FluentWindow, SystemTrayMenu

from barcode_tool.ui.controller.barcode_ctl import BarcodeController
from barcode_tool.ui.model.config import load_app_config
from barcode_tool.ui.model.state import AppState
from barcode_tool.ui.view.barcode import BarcodeView
from barcode_tool.util.constants import (
    APP_TITLE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MIN_RESTORED_EXTENT,
    Paths,
)


def log_exception(exc_type, exc_value, exc_tb) -> None:
    """Log an unhandled exception and report it in a blocking dialog.

    Registered via ``sys.excepthook`` so that exceptions raised in Qt
    slots are recorded and shown instead of terminating the process; the
    event loop keeps running after the dialog is dismissed.
    """
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return

    formatted = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logging.error("Unhandled exception:\n%s", formatted)
    if QApplication.instance() is None:
        return
    QMessageBox.critical(
        None,
        "Unexpected Error",
        f"The application hit a serious error:\n{exc_value}\n\n{formatted}",
    )


def startup_size(width: float, height: float) -> tuple[int, int]:
    """Return the size to open with; extents of 100 px or less use the defaults."""
    if width <= MIN_RESTORED_EXTENT:
        width = DEFAULT_WINDOW_WIDTH
    if height <= MIN_RESTORED_EXTENT:
        height = DEFAULT_WINDOW_HEIGHT
    return int(width), int(height)


class MainWindow(FluentWindow):
    """Main application window hosting the barcode page and tray icon."""

    def __init__(self, config_path: str | os.PathLike[str] | None = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        config, error = load_app_config(config_path)
        if error:
            logging.warning("MainWindow: using default settings (%s)", error)
        state = AppState.from_config(config)

        self.resize(*startup_size(state.window_width, state.window_height))

        self.app_icon = self._load_icon()
        self.setWindowIcon(self.app_icon)

        # Pages
        self.barcode_view = BarcodeView(self)
        self.addSubInterface(self.barcode_view, FluentIcon.PHOTO, "Barcode")
        self.barcode_ctl = BarcodeController(
            self.barcode_view,
            state,
            config_path=config_path,
            window=self,
            apply_topmost=self.set_topmost,
        )
        self.set_topmost(state.is_topmost)

        self._create_tray_icon()

    # ------------------------------------------------------------------
    # Icon / topmost
    # ------------------------------------------------------------------

    def _load_icon(self) -> QIcon:
        """Return the bundled logo, or the platform's generic application icon."""
        if os.path.exists(Paths.ICON_FILE):
            icon = QIcon(Paths.ICON_FILE)
            if not icon.isNull():
                return icon
        logging.debug("MainWindow: %s missing, using the default icon", Paths.ICON_FILE)
        return self.style().standardIcon(QStyle.SP_ComputerIcon)

    def set_topmost(self, enabled: bool) -> None:
        """Toggle the always-on-top window hint."""
        visible = self.isVisible()
        self.setWindowFlag(Qt.WindowStaysOnTopHint, bool(enabled))
        # Changing window flags hides the window.
        if visible:
            self.show()

    # ------------------------------------------------------------------
    # Tray
    # ------------------------------------------------------------------

    def _create_tray_icon(self) -> None:
        self.tray_icon = QSystemTrayIcon(self.app_icon, self)
        self.tray_icon.setToolTip(APP_TITLE)

        self.tray_menu = SystemTrayMenu(parent=self)
        self.tray_menu.addActions([
            Action(FluentIcon.VIEW, "Show Window", triggered=self.restore_from_tray),
            Action(FluentIcon.CLOSE, "Exit", triggered=self.exit_application),
        ])
        self.tray_icon.setContextMenu(self.tray_menu)
        self.tray_icon.activated.connect(self._on_tray_activated)
        self.tray_icon.show()

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.DoubleClick:
            self.restore_from_tray()

    def restore_from_tray(self) -> None:
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def hide_to_tray(self) -> None:
        """Persist the current state and hide the window."""
        ok, message = self.barcode_ctl.save_config()
        if not ok:
            logging.warning("MainWindow: settings not saved (%s)", message)
        self.hide()

    def exit_application(self) -> None:
        """Quit from the tray menu; settings are saved only on hide."""
        logging.info("MainWindow: exit requested from tray")
        self.tray_icon.hide()
        QApplication.quit()

    def closeEvent(self, event):  # type: ignore[override]
        if not QSystemTrayIcon.isSystemTrayAvailable():
            # Nowhere to hide to: save and let the window close.
            logging.warning("MainWindow: no system tray available, quitting on close")
            self.barcode_ctl.save_config()
            self.tray_icon.hide()
            event.accept()
            QApplication.quit()
            return
        event.ignore()
        self.hide_to_tray()
