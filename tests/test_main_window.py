import numpy as np
import pytest

from enclosingcircle.controller.app_controller import AppController, Mode
from enclosingcircle.controller.events import Key, KeyCode, Modifier
from enclosingcircle.logging_config import detach_handler
from enclosingcircle.model.state import PointSet, Scene


@pytest.fixture
def window(qapp, tmp_path):
    from enclosingcircle.view.main_window import MainWindow

    controller = AppController(
        Scene.default(), rng=np.random.default_rng(5), scene_path=str(tmp_path / "conf.json")
    )
    win = MainWindow(controller)
    yield win
    detach_handler(win.log_panel.handler)
    win.deleteLater()


def test_window_registers_as_host(window):
    assert window.controller.host is window


def test_key_translation(qapp):
    from PySide6.QtCore import QEvent, Qt
    from PySide6.QtGui import QKeyEvent

    from enclosingcircle.view.main_window import to_key_event

    event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_S, Qt.KeyboardModifier.ControlModifier)
    assert to_key_event(event, pressed=True) == Key(KeyCode.S, Modifier.PRIMARY, True)

    event = QKeyEvent(QEvent.Type.KeyRelease, Qt.Key.Key_Escape, Qt.KeyboardModifier.NoModifier)
    assert to_key_event(event, pressed=False) == Key(KeyCode.ESCAPE, Modifier.NONE, False)

    event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Q, Qt.KeyboardModifier.NoModifier)
    assert to_key_event(event, pressed=True).code is KeyCode.OTHER


def test_info_overlay_follows_mode(window):
    window.controller.set_mode(Mode.INFO)
    assert not window.info_overlay.isHidden()
    window.controller.set_mode(Mode.WORK)
    assert window.info_overlay.isHidden()


def test_control_panel_adds_to_selected_set(window):
    panel = window.control_panel
    panel.spin_count.setValue(4)
    panel.combo_set.setCurrentIndex(1)
    panel.on_add_random_clicked()
    points = window.controller.scene.points
    assert len(points) == 4
    assert all(p.set is PointSet.SECOND_SET for p in points)
    assert "4" in panel.lbl_count.text()


def test_log_panel_receives_records(window):
    import logging

    logging.getLogger("enclosingcircle.test").warning("visible in the panel")
    assert "visible in the panel" in window.log_panel.toPlainText()
