import json
import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PyQt5.QtWidgets")
pytest.importorskip("qfluentwidgets")
pytest.importorskip("PIL")
pytest.importorskip("barcode")
pytest.importorskip("qrcode")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from PyQt5.QtCore import QRect
from PyQt5.QtGui import QCloseEvent
from PyQt5.QtWidgets import QApplication

from barcode_tool.ui.controller.barcode_ctl import restored_size
from barcode_tool.ui.view import main_window
from barcode_tool.ui.view.main_window import MainWindow, startup_size


class FakeWindow:
    def __init__(self, size, normal, maximized=False, minimized=False):
        self._size = size
        self._normal = normal
        self.maximized = maximized
        self.minimized = minimized

    def isMaximized(self):
        return self.maximized

    def isMinimized(self):
        return self.minimized

    def isFullScreen(self):
        return False

    def width(self):
        return self._size[0]

    def height(self):
        return self._size[1]

    def normalGeometry(self):
        return QRect(10, 10, *self._normal)


@pytest.mark.parametrize(
    "saved, expected",
    [
        ((640.0, 480.0), (640, 480)),
        ((100.0, 480.0), (500, 480)),
        ((640.0, 40.0), (640, 400)),
        ((0.0, 0.0), (500, 400)),
        ((101.0, 101.0), (101, 101)),
    ],
)
def test_startup_size_ignores_extents_of_100_or_less(saved, expected):
    assert startup_size(*saved) == expected


def test_restored_size_uses_normal_geometry_when_maximized():
    window = FakeWindow((1920, 1080), (640, 480), maximized=True)
    assert restored_size(window) == (640.0, 480.0)


def test_restored_size_uses_normal_geometry_when_minimized():
    window = FakeWindow((0, 0), (700, 500), minimized=True)
    assert restored_size(window) == (700.0, 500.0)


def test_restored_size_uses_current_size_otherwise():
    window = FakeWindow((820, 610), (640, 480))
    assert restored_size(window) == (820.0, 610.0)


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def window_env(qapp, tmp_path, monkeypatch):
    quits = []
    monkeypatch.setattr(main_window.QApplication, "quit", staticmethod(lambda: quits.append(True)))
    config_path = tmp_path / "config.json"
    window = MainWindow(config_path=config_path)
    yield window, config_path, quits
    window.tray_icon.hide()
    window.hide()
    window.deleteLater()


def _tray_available(monkeypatch, available):
    monkeypatch.setattr(
        main_window.QSystemTrayIcon,
        "isSystemTrayAvailable",
        staticmethod(lambda: available),
    )


def test_close_with_tray_saves_and_hides(window_env, monkeypatch):
    window, config_path, quits = window_env
    _tray_available(monkeypatch, True)
    window.show()

    event = QCloseEvent()
    window.closeEvent(event)

    assert not event.isAccepted()
    assert not window.isVisible()
    assert quits == []
    data = json.loads(config_path.read_text(encoding="utf-8"))
    assert data["windowWidth"] == float(window.width())
    assert data["windowHeight"] == float(window.height())


def test_close_while_maximized_saves_normal_bounds(window_env, monkeypatch):
    window, config_path, _ = window_env
    _tray_available(monkeypatch, True)
    monkeypatch.setattr(window, "isMaximized", lambda: True)
    monkeypatch.setattr(window, "normalGeometry", lambda: QRect(0, 0, 640, 480))

    window.closeEvent(QCloseEvent())

    data = json.loads(config_path.read_text(encoding="utf-8"))
    assert (data["windowWidth"], data["windowHeight"]) == (640.0, 480.0)


def test_close_without_tray_saves_and_quits(window_env, monkeypatch):
    window, config_path, quits = window_env
    _tray_available(monkeypatch, False)

    event = QCloseEvent()
    event.ignore()
    window.closeEvent(event)

    assert event.isAccepted()
    assert quits == [True]
    assert config_path.exists()


def test_tray_exit_quits_without_saving(window_env):
    window, config_path, quits = window_env
    window.exit_application()
    assert quits == [True]
    assert not config_path.exists()


def test_tray_double_click_restores_hidden_window(window_env, monkeypatch):
    window, _, _ = window_env
    _tray_available(monkeypatch, True)
    window.show()
    window.closeEvent(QCloseEvent())
    assert not window.isVisible()

    window._on_tray_activated(main_window.QSystemTrayIcon.DoubleClick)
    assert window.isVisible()
