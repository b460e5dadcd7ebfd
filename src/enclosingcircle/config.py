"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths (e.g., "src/main/resources/...")
   scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find resources (icons, scene files) when the app is frozen into an .exe.

Exports:
    RESOURCES_PATH (str): Absolute path to the resources directory.
    DEFAULT_SCENE_PATH (str): Absolute path to the scene used by Ctrl+S / Ctrl+O.
    ICON_PATH (str): Absolute path to the window icon.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/enclosingcircle/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
RESOURCES_PATH: str = get_resource_path("resources")
DEFAULT_SCENE_PATH: str = os.path.join(RESOURCES_PATH, "conf.json")
ICON_PATH: str = os.path.join(RESOURCES_PATH, "icon.png")

# Scene defaults
DEFAULT_CS_MIN: tuple[float, float] = (-10.0, -10.0)
DEFAULT_CS_MAX: tuple[float, float] = (10.0, 10.0)
DEFAULT_RANDOM_POINTS: int = 10
# Random points are drawn from a coarse lattice so they never coincide
RANDOM_GRID_SIZE: int = 30

# Geometry
EPS: float = 1e-9

# Interaction
WHEEL_SENSITIVITY: float = 0.001

# Rendering
POINT_SIZE: int = 3
MAX_GRID_STROKE: float = 4.0
DELIMITER_ORDER: int = 10
CIRCLE_SEGMENTS: int = 100
CURSOR_LABEL_OFFSET: tuple[int, int] = (3, -5)

BACKGROUND_COLOR: str = "#FFFFFF"
GRID_COLOR: str = "#5A5A5A"
CIRCLE_COLOR: str = "#2E7D32"
FIRST_SET_COLOR: str = "#1565C0"
SECOND_SET_COLOR: str = "#C62828"

if not os.path.exists(RESOURCES_PATH):
    logger.warning(f"Resources path not found at {RESOURCES_PATH}")
