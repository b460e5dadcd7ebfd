"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Control Panel, the
drawing canvas and the log.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It turns keyboard input and menu actions into controller calls,
   and carries out the window operations the controller asks for.
"""
import logging
import os

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QIcon, QKeyEvent
from PySide6.QtWidgets import (
    QApplication, QDialog, QFileDialog, QLabel, QMainWindow, QSplitter,
)

from enclosingcircle import config
from enclosingcircle.controller.app_controller import AppController, Mode
from enclosingcircle.controller.events import Key, KeyCode, Modifier
from enclosingcircle.logging_config import attach_handler, detach_handler
from enclosingcircle.view.panels.control_panel import ControlPanel, TASK_TEXT
from enclosingcircle.view.widgets.canvas import SceneCanvas
from enclosingcircle.view.widgets.log_panel import LogPanel

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Smallest Enclosing Circle"

_KEYS = {
    Qt.Key.Key_W: KeyCode.W,
    Qt.Key.Key_H: KeyCode.H,
    Qt.Key.Key_S: KeyCode.S,
    Qt.Key.Key_O: KeyCode.O,
    Qt.Key.Key_1: KeyCode.DIGIT1,
    Qt.Key.Key_2: KeyCode.DIGIT2,
    Qt.Key.Key_Escape: KeyCode.ESCAPE,
}


def to_key_event(event: QKeyEvent, pressed: bool) -> Key:
    """Translate a Qt key event. ControlModifier is Command on macOS."""
    qt_mods = event.modifiers()
    mods = Modifier.NONE
    if qt_mods & Qt.KeyboardModifier.ControlModifier:
        mods |= Modifier.PRIMARY
    if qt_mods & Qt.KeyboardModifier.ShiftModifier:
        mods |= Modifier.SHIFT
    if qt_mods & Qt.KeyboardModifier.AltModifier:
        mods |= Modifier.ALT
    code = _KEYS.get(Qt.Key(event.key()), KeyCode.OTHER)
    return Key(code, mods, pressed)


class MainWindow(QMainWindow):
    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self.controller = controller
        controller.host = self
        self._closing = False

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 900)
        self.move(100, 100)
        if os.path.exists(config.ICON_PATH):
            self.setWindowIcon(QIcon(config.ICON_PATH))
        else:
            logger.warning(f"Window icon not found at {config.ICON_PATH}")

        # --- MAIN CONTAINER ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Control Panel ---
        self.control_panel = ControlPanel(controller)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: Canvas above Log ---
        right = QSplitter(Qt.Orientation.Vertical)
        self.canvas = SceneCanvas(controller)
        self.log_panel = LogPanel()
        right.addWidget(self.canvas)
        right.addWidget(self.log_panel)
        right.setSizes([700, 200])
        splitter.addWidget(right)
        splitter.setSizes([250, 650])

        attach_handler(self.log_panel.handler)

        # --- INFO OVERLAY (Mode.INFO) ---
        self.info_overlay = QLabel(TASK_TEXT + "\n\nPress Esc to return.", self.canvas)
        self.info_overlay.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.info_overlay.setStyleSheet(
            "QLabel { background-color: rgba(40, 40, 40, 210); color: white; font-size: 14px; }"
        )
        self.info_overlay.hide()

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

    def _create_actions(self) -> None:
        # Ctrl+S / Ctrl+O go through the controller's key handling, not QAction shortcuts
        self.act_open = QAction("Open...", self)
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_solve = QAction("Solve", self)
        self.act_solve.triggered.connect(lambda: self.controller.solve())

        self.act_clear = QAction("Clear", self)
        self.act_clear.triggered.connect(lambda: self.controller.clear())

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_save_as)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        scene_menu = menu_bar.addMenu("&Scene")
        scene_menu.addAction(self.act_solve)
        scene_menu.addAction(self.act_clear)

    # --- FILE SLOTS ---

    def on_file_open(self) -> None:
        self.controller.set_mode(Mode.FILE)
        try:
            fname, _ = QFileDialog.getOpenFileName(
                self, "Open Scene", config.RESOURCES_PATH, "Scene Files (*.json)"
            )
        finally:
            self.controller.set_mode(Mode.WORK)
        if fname:
            self.controller.load_scene(fname)

    def on_file_save_as(self) -> None:
        self.controller.set_mode(Mode.FILE)
        try:
            fname, _ = QFileDialog.getSaveFileName(
                self, "Save Scene", config.RESOURCES_PATH, "Scene Files (*.json)"
            )
        finally:
            self.controller.set_mode(Mode.WORK)
        if fname:
            # Ensure extension
            if not fname.endswith(".json"):
                fname += ".json"
            self.controller.save_scene(fname)

    # --- WindowHost ---

    def close_window(self) -> None:
        self.close()

    def minimize_window(self) -> None:
        self.showMinimized()

    def set_maximized(self, maximized: bool) -> None:
        if maximized:
            self.showMaximized()
        else:
            self.showNormal()

    def window_opacity(self) -> float:
        return self.windowOpacity()

    def set_window_opacity(self, opacity: float) -> None:
        self.setWindowOpacity(opacity)

    def forward_to_dialog(self, event: Key) -> None:
        dialog = QApplication.activeModalWidget()
        if isinstance(dialog, QDialog) and event.code is KeyCode.ESCAPE:
            dialog.reject()

    def on_scene_changed(self) -> None:
        self.canvas.update()
        self.control_panel.refresh()

    def on_mode_changed(self, mode: Mode) -> None:
        if mode is Mode.INFO:
            self.info_overlay.setGeometry(self.canvas.rect())
            self.info_overlay.show()
            self.info_overlay.raise_()
        else:
            self.info_overlay.hide()

    # --- QT EVENTS ---

    def keyPressEvent(self, event: QKeyEvent, /) -> None:
        self.controller.handle(to_key_event(event, pressed=True))

    def keyReleaseEvent(self, event: QKeyEvent, /) -> None:
        self.controller.handle(to_key_event(event, pressed=False))

    def closeEvent(self, event, /) -> None:
        """Detach the GUI log handler and let the window close."""
        if not self._closing:
            self._closing = True
            detach_handler(self.log_panel.handler)
            logger.info("Main window closed.")
        event.accept()
