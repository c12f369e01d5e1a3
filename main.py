# !/usr/bin/env python
# -*-coding:utf-8 -*-

"""Main entry point for the Barcode Test Assistant.

This module only bootstraps the Qt application:

- configures logging
- installs the global exception hook
- creates the :class:`~barcode_tool.ui.view.main_window.MainWindow` instance

Window layout, tray handling and page logic live in ``barcode_tool/ui``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication
from qfluentwidgets import setTheme, Theme

# Ensure project root is importable when started as a script
sys.path.insert(0, str(Path(__file__).parent))

from barcode_tool.ui.view.main_window import MainWindow, log_exception


def run() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # Route uncaught exceptions through the shared handler in the view layer.
    sys.excepthook = log_exception

    app = QApplication(sys.argv)
    # The window hides to the tray instead of closing.
    app.setQuitOnLastWindowClosed(False)
    setTheme(Theme.DARK)
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
