import json
import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PyQt5.QtWidgets")
pytest.importorskip("qfluentwidgets")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from barcode_tool.ui.controller import barcode_ctl
from barcode_tool.ui.controller.barcode_ctl import BarcodeController
from barcode_tool.ui.model.config import AppConfig
from barcode_tool.ui.model.encoder import RenderResult
from barcode_tool.ui.model.state import AppState


class FakeSignal:
    def __init__(self):
        self._slots = []

    def connect(self, slot):
        self._slots.append(slot)

    def emit(self, *args):
        for slot in list(self._slots):
            slot(*args)


class FakeRuleCombo:
    def __init__(self):
        self.textChanged = FakeSignal()


class FakeTypeCombo:
    def __init__(self):
        self.currentIndexChanged = FakeSignal()
        self.index = 0

    def setCurrentIndex(self, index):
        self.index = index

    def currentIndex(self):
        return self.index


class FakeSwitch:
    def __init__(self):
        self.checkedChanged = FakeSignal()
        self.checked = False

    def setChecked(self, checked):
        self.checked = checked

    def isChecked(self):
        return self.checked


class FakeButton:
    def __init__(self):
        self.clicked = FakeSignal()


class FakeView:
    """Stand-in for BarcodeView exposing the widgets the controller wires."""

    def __init__(self):
        self.rule_combo = FakeRuleCombo()
        self.type_combo = FakeTypeCombo()
        self.topmost_switch = FakeSwitch()
        self.next_btn = FakeButton()
        self.save_rule_btn = FakeButton()
        self.delete_rule_btn = FakeButton()
        self.text = ""
        self.items = []
        self.image = "unset"

    def rule_text(self):
        return self.text

    def set_rule_text(self, text):
        if text != self.text:
            self.text = text
            self.rule_combo.textChanged.emit(text)

    def set_rules(self, rules):
        self.items = list(rules)

    def set_image(self, image):
        self.image = image

    def type(self, text):
        self.set_rule_text(text)


@pytest.fixture
def rendered(monkeypatch):
    calls = []

    def fake_render(text, fmt):
        calls.append((text, fmt))
        if text == "BAD":
            return RenderResult(error="illegal character")
        return RenderResult(image=f"img:{text}:{fmt.value}" if text else None)

    monkeypatch.setattr(barcode_ctl, "render_barcode", fake_render)
    monkeypatch.setattr(barcode_ctl, "show_info_bar", lambda *args, **kwargs: None)
    return calls


def _controller(tmp_path, config=None, **kwargs):
    view = FakeView()
    state = AppState.from_config(config or AppConfig())
    ctl = BarcodeController(view, state, config_path=tmp_path / "config.json", **kwargs)
    return view, ctl


def test_initial_state_is_pushed_to_view_and_rendered(tmp_path, rendered):
    config = AppConfig(saved_rules=["A-1"], last_used_rule="A-1", last_type_index=1, is_topmost=False)
    view, _ = _controller(tmp_path, config)
    assert view.items == ["A-1"]
    assert view.text == "A-1"
    assert view.type_combo.index == 1
    assert view.topmost_switch.checked is False
    assert view.image == "img:A-1:QRCode"


def test_typing_renders_and_empty_text_clears(tmp_path, rendered):
    view, ctl = _controller(tmp_path)
    view.type("HELLO")
    assert ctl.state.active_text == "HELLO"
    assert view.image == "img:HELLO:Code128"
    view.type("")
    assert view.image is None


def test_encoder_failure_keeps_previous_image(tmp_path, rendered):
    view, _ = _controller(tmp_path)
    view.type("GOOD")
    view.type("BAD")
    assert view.image == "img:GOOD:Code128"


def test_next_increments_and_renders(tmp_path, rendered):
    view, ctl = _controller(tmp_path)
    view.type("EXEM-0009")
    view.next_btn.clicked.emit()
    assert view.text == "EXEM-0010"
    assert ctl.state.active_text == "EXEM-0010"
    assert view.image == "img:EXEM-0010:Code128"


def test_format_change_rerenders(tmp_path, rendered):
    view, ctl = _controller(tmp_path)
    view.type("X")
    view.type_combo.currentIndexChanged.emit(2)
    assert ctl.state.type_index == 2
    assert view.image == "img:X:DataMatrix"


def test_save_rule_persists_immediately(tmp_path, rendered):
    view, _ = _controller(tmp_path)
    view.type(" R-01 ")
    view.save_rule_btn.clicked.emit()
    assert view.items == ["R-01"]
    assert view.text == "R-01"
    data = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert data["savedRules"] == ["R-01"]
    assert data["lastUsedRule"] == "R-01"


def test_save_rule_renders_trimmed_text(tmp_path, rendered):
    view, _ = _controller(tmp_path)
    view.type(" R-01 ")
    assert view.image == "img: R-01 :Code128"
    view.save_rule_btn.clicked.emit()
    assert view.image == "img:R-01:Code128"
    assert rendered[-1][0] == "R-01"


def test_save_duplicate_rule_does_not_write(tmp_path, rendered):
    config = AppConfig(saved_rules=["R-01"], last_used_rule="R-01")
    view, _ = _controller(tmp_path, config)
    view.save_rule_btn.clicked.emit()
    assert not (tmp_path / "config.json").exists()


def test_delete_rule_selects_first_and_persists(tmp_path, rendered):
    config = AppConfig(saved_rules=["A", "B"], last_used_rule="B")
    view, ctl = _controller(tmp_path, config)
    view.delete_rule_btn.clicked.emit()
    assert view.items == ["A"]
    assert view.text == "A"
    assert view.image == "img:A:Code128"
    data = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert data["savedRules"] == ["A"]


def test_topmost_toggle_applies_callback(tmp_path, rendered):
    applied = []
    view, ctl = _controller(tmp_path, apply_topmost=applied.append)
    view.topmost_switch.checkedChanged.emit(False)
    assert ctl.state.is_topmost is False
    assert applied == [False]
