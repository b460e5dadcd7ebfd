"""
Control Panel
=============
Left-side panel with the task statement, point generation, solver and
scene file buttons.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox, QGridLayout, QGroupBox, QLabel, QPushButton, QSpinBox, QVBoxLayout, QWidget,
)

from enclosingcircle import config
from enclosingcircle.controller.app_controller import AppController, Mode
from enclosingcircle.model.state import PointSet

logger = logging.getLogger(__name__)

TASK_TEXT = (
    "TASK:\n"
    "A set of points is given in the plane.\n"
    "Find the circle of the smallest area\n"
    "that contains every point of the set.\n"
    "If there are several such circles, find any.\n"
    "Draw the found circle as the answer."
)

HELP_TEXT = (
    "Left click: add point to the first set\n"
    "Right click: add point to the second set\n"
    "Wheel: zoom around the cursor\n"
    "Middle drag: pan\n"
    "Ctrl+S / Ctrl+O: save / load scene\n"
    "Ctrl+1: maximize, Ctrl+2: opacity\n"
    "Ctrl+H: minimize, Ctrl+W: close\n"
    "Esc: close (or leave the info view)"
)


class ControlPanel(QWidget):
    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- 1. TASK ---
        task_box = QGroupBox(self.tr("Task"), self)
        task_layout = QVBoxLayout(task_box)
        self.btn_info = QPushButton(self.tr("Show task statement"), task_box)
        self.btn_info.clicked.connect(lambda: self.controller.set_mode(Mode.INFO))
        task_layout.addWidget(self.btn_info)
        layout.addWidget(task_box)

        # --- 2. POINTS ---
        points_box = QGroupBox(self.tr("Points"), self)
        grid = QGridLayout(points_box)
        grid.addWidget(QLabel(self.tr("Count"), points_box), 0, 0)
        self.spin_count = QSpinBox(points_box)
        self.spin_count.setRange(1, config.RANDOM_GRID_SIZE ** 2)
        self.spin_count.setValue(config.DEFAULT_RANDOM_POINTS)
        grid.addWidget(self.spin_count, 0, 1)

        grid.addWidget(QLabel(self.tr("Set"), points_box), 1, 0)
        self.combo_set = QComboBox(points_box)
        for point_set in PointSet:
            self.combo_set.addItem(point_set.display_name, point_set.value)
        grid.addWidget(self.combo_set, 1, 1)

        self.btn_random = QPushButton(self.tr("Add random points"), points_box)
        self.btn_random.clicked.connect(self.on_add_random_clicked)
        grid.addWidget(self.btn_random, 2, 0, 1, 2)

        self.btn_clear = QPushButton(self.tr("Clear"), points_box)
        self.btn_clear.clicked.connect(lambda: self.controller.clear())
        grid.addWidget(self.btn_clear, 3, 0, 1, 2)

        self.lbl_count = QLabel(points_box)
        grid.addWidget(self.lbl_count, 4, 0, 1, 2)
        layout.addWidget(points_box)

        # --- 3. SOLVER ---
        solve_box = QGroupBox(self.tr("Solver"), self)
        solve_layout = QVBoxLayout(solve_box)
        self.btn_solve = QPushButton(self.tr("Solve"), solve_box)
        self.btn_solve.clicked.connect(lambda: self.controller.solve())
        self.btn_cancel = QPushButton(self.tr("Reset solution"), solve_box)
        self.btn_cancel.clicked.connect(lambda: self.controller.cancel())
        self.lbl_result = QLabel(solve_box)
        self.lbl_result.setWordWrap(True)
        solve_layout.addWidget(self.btn_solve)
        solve_layout.addWidget(self.btn_cancel)
        solve_layout.addWidget(self.lbl_result)
        layout.addWidget(solve_box)

        # --- 4. SCENE FILE ---
        file_box = QGroupBox(self.tr("Scene file"), self)
        file_layout = QVBoxLayout(file_box)
        self.btn_save = QPushButton(self.tr("Save"), file_box)
        self.btn_save.clicked.connect(lambda: self.controller.save_scene())
        self.btn_load = QPushButton(self.tr("Load"), file_box)
        self.btn_load.clicked.connect(lambda: self.controller.load_scene())
        file_layout.addWidget(self.btn_save)
        file_layout.addWidget(self.btn_load)
        layout.addWidget(file_box)

        # --- 5. HELP ---
        help_box = QGroupBox(self.tr("Help"), self)
        help_layout = QVBoxLayout(help_box)
        lbl_help = QLabel(self.tr(HELP_TEXT), help_box)
        lbl_help.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)
        help_layout.addWidget(lbl_help)
        layout.addWidget(help_box)

        layout.addStretch()
        self.refresh()

    def on_add_random_clicked(self) -> None:
        point_set = PointSet(self.combo_set.currentData())
        added = self.controller.add_random(self.spin_count.value(), point_set)
        logger.info(f"{added} random points added.")

    def refresh(self) -> None:
        """Re-read the scene held by the controller."""
        scene = self.controller.scene
        self.lbl_count.setText(self.tr("Points in scene: {0}").format(len(scene.points)))
        if scene.solve_result is None:
            self.lbl_result.setText(self.tr("Not solved"))
        else:
            self.lbl_result.setText(str(scene.solve_result))
