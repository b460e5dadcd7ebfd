"""
Scene Canvas
Qt widget that forwards paint and mouse input to the AppController.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QPainter, QWheelEvent
from PySide6.QtWidgets import QWidget

from enclosingcircle.controller.app_controller import AppController
from enclosingcircle.controller.events import (
    FrameRequest, MouseButton, MouseButtonEvent, MouseEnter, MouseLeave, MouseMove, MouseWheel,
)

_BUTTONS = {
    Qt.MouseButton.LeftButton: MouseButton.LEFT,
    Qt.MouseButton.RightButton: MouseButton.RIGHT,
    Qt.MouseButton.MiddleButton: MouseButton.MIDDLE,
}


class SceneCanvas(QWidget):
    """The drawing region. Pixel (0, 0) is the widget's top-left corner."""
    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.setMinimumSize(300, 300)

    def paintEvent(self, event, /) -> None:
        painter = QPainter(self)
        try:
            self.controller.handle(FrameRequest(painter, self.width(), self.height()))
        finally:
            painter.end()

    def enterEvent(self, event, /) -> None:
        self.controller.handle(MouseEnter())

    def leaveEvent(self, event, /) -> None:
        self.controller.handle(MouseLeave())

    def mouseMoveEvent(self, event: QMouseEvent, /) -> None:
        pos = event.position()
        self.controller.handle(MouseMove(int(pos.x()), int(pos.y())))

    def mousePressEvent(self, event: QMouseEvent, /) -> None:
        self._button_event(event, pressed=True)

    def mouseReleaseEvent(self, event: QMouseEvent, /) -> None:
        self._button_event(event, pressed=False)

    def _button_event(self, event: QMouseEvent, pressed: bool) -> None:
        pos = event.position()
        button = _BUTTONS.get(event.button(), MouseButton.OTHER)
        self.controller.handle(MouseButtonEvent(int(pos.x()), int(pos.y()), button, pressed))

    def wheelEvent(self, event: QWheelEvent, /) -> None:
        # Qt reports +120 per notch away from the user; that should zoom in
        self.controller.handle(MouseWheel(-event.angleDelta().y()))
