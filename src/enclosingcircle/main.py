"""
Application Initialization
==========================
This module constructs the Model, Controller and View and starts the Qt
Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Scene and the random generator.
2. Instantiates the AppController, handing it the Scene.
3. Instantiates the Main Window (View) around the controller.
4. Maps a missing graphics backend to exit code 1.
"""
import logging
import sys

import numpy as np
from PySide6.QtWidgets import QApplication

from enclosingcircle import config
from enclosingcircle.controller.app_controller import AppController
from enclosingcircle.errors import RenderInitError
from enclosingcircle.logging_config import setup_logging
from enclosingcircle.model.state import PointSet, Scene
from enclosingcircle.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def create_app(argv: list[str]) -> QApplication:
    """Create the QApplication, raising RenderInitError when no screen is usable."""
    try:
        app = QApplication.instance() or QApplication(argv)
    except RuntimeError as e:
        raise RenderInitError(f"Could not create the Qt application: {e}") from e
    if app.primaryScreen() is None:
        raise RenderInitError("No screen available for rendering")
    app.setApplicationName(VISIBLE_APP_NAME)
    return app


def main() -> int:
    # 1. Setup Logging (Console + Optional File)
    # Use logging.DEBUG to see everything during development
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    try:
        app = create_app(sys.argv)
    except RenderInitError as e:
        logger.critical(f"Rendering could not be initialized: {e}")
        return 1

    # 3. Initialize the Data Model
    rng = np.random.default_rng()
    scene = Scene.default()
    scene.add_random(config.DEFAULT_RANDOM_POINTS, PointSet.FIRST_SET, rng)

    # 4. Initialize the Controller and the Main Window
    controller = AppController(scene, rng=rng)
    window = MainWindow(controller)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
