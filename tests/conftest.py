import os

# Must be set before the first QGuiApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest

from enclosingcircle.model.state import Scene


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def scene():
    return Scene.default()
