"""
Scene Renderer
==============
Paints a Scene into a QPainter, one frame at a time.

Layers, in order:
    1. Axis ticks every integer real coordinate (longer every 10th).
    2. Points as filled squares, colored by their set.
    3. The solved circle as a polyline mapped vertex by vertex.
    4. Cursor crosshair with the real-space cursor position.
    5. Frame rate in the top-left corner.

The geometry of each layer is computed by plain functions (`grid_ticks`,
`circle_polyline`, ...) so it can be checked without a display; the
Renderer only turns it into QPainter calls.
"""
from __future__ import annotations

import logging
import math
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen, QPolygonF

from enclosingcircle import config
from enclosingcircle.errors import InvalidViewport
from enclosingcircle.model.coordinate_systems import CSMap, WindowCS
from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i
from enclosingcircle.model.state import Scene, SolveKind, SolveResult

logger = logging.getLogger(__name__)

MAJOR_TICK_HALF_LENGTH = 5
MINOR_TICK_HALF_LENGTH = 2
FPS_WINDOW_SECONDS = 1.0
FPS_LABEL_PADDING = 5


@dataclass(frozen=True)
class Tick:
    """An axis tick centered on `pos`. Vertical ticks mark the X axis."""
    pos: Vec2i
    half_length: int
    vertical: bool


@contextmanager
def painter_state(painter: QPainter) -> Iterator[QPainter]:
    """Save the painter state and restore it on every exit path."""
    painter.save()
    try:
        yield painter
    finally:
        painter.restore()


def grid_stroke_width(cs_map: CSMap) -> float:
    width = 0.03 / cs_map.similarity().y + 0.5
    return min(max(0.5, width), config.MAX_GRID_STROKE)


def _integer_span(lo: float, hi: float) -> tuple[int, int]:
    """First integer >= lo and the count of integers in [lo, hi]."""
    first = math.ceil(lo)
    return first, max(0, math.floor(hi) - first + 1)


def grid_ticks(cs_map: CSMap) -> list[Tick]:
    """
    Ticks for every integer coordinate inside the viewport.

    An axis with more integers than pixels is skipped: its ticks would merge
    into a solid bar and the loop would stall the UI when zoomed far out.
    """
    real = cs_map.real
    win = cs_map.window
    ticks: list[Tick] = []

    first, count = _integer_span(real.min.x, real.max.x)
    if count <= win.size.x:
        for i in range(first, first + count):
            half = MAJOR_TICK_HALF_LENGTH if i % config.DELIMITER_ORDER == 0 else MINOR_TICK_HALF_LENGTH
            ticks.append(Tick(cs_map.to_pixel(Vec2d(float(i), 0.0)), half, vertical=True))
    else:
        logger.debug(f"Skipping {count} X ticks for a {win.size.x} px wide window.")

    first, count = _integer_span(real.min.y, real.max.y)
    if count <= win.size.y:
        for i in range(first, first + count):
            half = MAJOR_TICK_HALF_LENGTH if i % config.DELIMITER_ORDER == 0 else MINOR_TICK_HALF_LENGTH
            ticks.append(Tick(cs_map.to_pixel(Vec2d(0.0, float(i))), half, vertical=False))
    else:
        logger.debug(f"Skipping {count} Y ticks for a {win.size.y} px high window.")

    return ticks


def circle_polyline(
    result: SolveResult,
    cs_map: CSMap,
    segments: int = config.CIRCLE_SEGMENTS
) -> list[Vec2i]:
    """
    Closed polyline (segments + 1 vertices) approximating the circle.

    Vertices are computed in real space and mapped one by one, so a distorted
    viewport draws the circle as the matching ellipse.
    """
    cx, cy = result.center.x, result.center.y
    r = result.radius
    vertices = []
    for i in range(segments + 1):
        angle = 2.0 * math.pi / segments * (i % segments)
        vertices.append(cs_map.to_pixel(Vec2d(cx + r * math.cos(angle), cy + r * math.sin(angle))))
    return vertices


class FrameStats:
    """Frames per second over a sliding window of recent frame timestamps."""
    def __init__(
        self,
        window: float = FPS_WINDOW_SECONDS,
        clock: Callable[[], float] = time.perf_counter
    ) -> None:
        self.window = window
        self.clock = clock
        self._stamps: deque[float] = deque()

    def tick(self) -> None:
        now = self.clock()
        self._stamps.append(now)
        while self._stamps[0] < now - self.window:
            self._stamps.popleft()

    @property
    def fps(self) -> float:
        if len(self._stamps) < 2:
            return 0.0
        span = self._stamps[-1] - self._stamps[0]
        return (len(self._stamps) - 1) / span if span > 0 else 0.0

    def label(self) -> str:
        return f"FPS: {self.fps:.0f}"


def window_cs_near(window_cs: WindowCS, p: Vec2i, margin: int) -> bool:
    """True when `p` lies within `margin` pixels of the window."""
    return (window_cs.origin.x - margin <= p.x <= window_cs.max.x + margin
            and window_cs.origin.y - margin <= p.y <= window_cs.max.y + margin)


def point_rect(center: Vec2i, size: int = config.POINT_SIZE) -> tuple[int, int, int, int]:
    """(x, y, w, h) of the square drawn for a point."""
    return center.x - size, center.y - size, size * 2, size * 2


class Renderer:
    """
    Painter for a Scene. Keeps only the last WindowCS it painted into and
    the frame timing. Input handlers use that window to convert cursor pixels
    to real positions consistently with what is on screen.
    """
    def __init__(self, frame_stats: Optional[FrameStats] = None) -> None:
        self.last_window_cs: Optional[WindowCS] = None
        self.frame_stats = frame_stats if frame_stats is not None else FrameStats()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def to_real(self, pos: Vec2i, scene: Scene) -> Vec2d:
        """
        Raises:
            InvalidViewport: nothing has been painted yet, or the window is empty.
        """
        if self.last_window_cs is None:
            raise InvalidViewport("No frame has been painted yet.")
        return CSMap(self.last_window_cs, scene.cs).to_real(pos)

    def paint(
        self,
        painter: QPainter,
        window_cs: WindowCS,
        scene: Scene,
        cursor: Optional[Vec2i] = None
    ) -> None:
        self.last_window_cs = window_cs
        if window_cs.is_degenerate:
            return
        cs_map = CSMap(window_cs, scene.cs)

        with painter_state(painter):
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self._rect(window_cs), QColor(config.BACKGROUND_COLOR))
            self._paint_grid(painter, cs_map)
            self._paint_points(painter, cs_map, scene)
            if scene.solve_result is not None:
                self._paint_solution(painter, cs_map, scene.solve_result)
            if cursor is not None and window_cs.contains(cursor):
                self._paint_cursor(painter, cs_map, cursor)
            self.frame_stats.tick()
            self._paint_fps(painter, window_cs)

    # ------------------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------------------

    @staticmethod
    def _rect(window_cs: WindowCS) -> QRectF:
        return QRectF(window_cs.origin.x, window_cs.origin.y, window_cs.size.x, window_cs.size.y)

    def _paint_grid(self, painter: QPainter, cs_map: CSMap) -> None:
        with painter_state(painter):
            pen = QPen(QColor(config.GRID_COLOR))
            pen.setWidthF(grid_stroke_width(cs_map))
            painter.setPen(pen)
            for tick in grid_ticks(cs_map):
                x, y, h = tick.pos.x, tick.pos.y, tick.half_length
                if tick.vertical:
                    painter.drawLine(QPointF(x, y - h), QPointF(x, y + h))
                else:
                    painter.drawLine(QPointF(x - h, y), QPointF(x + h, y))

    def _paint_points(self, painter: QPainter, cs_map: CSMap, scene: Scene) -> None:
        with painter_state(painter):
            painter.setPen(Qt.PenStyle.NoPen)
            for p in scene.points:
                try:
                    center = cs_map.to_pixel(p.pos)
                except InvalidViewport:
                    logger.debug(f"{p} is too far outside the viewport to draw.")
                    continue
                if not window_cs_near(cs_map.window, center, config.POINT_SIZE):
                    continue
                x, y, w, h = point_rect(center)
                painter.fillRect(QRectF(x, y, w, h), QColor(p.set.color))

    def _paint_solution(self, painter: QPainter, cs_map: CSMap, result: SolveResult) -> None:
        if result.kind is SolveKind.NONE:
            return
        with painter_state(painter):
            pen = QPen(QColor(config.CIRCLE_COLOR))
            pen.setWidthF(1.5)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            if result.kind is SolveKind.POINT:
                c = cs_map.to_pixel(result.center)
                r = config.POINT_SIZE * 2
                painter.drawEllipse(QPointF(float(c.x), float(c.y)), r, r)
                return
            vertices = circle_polyline(result, cs_map)
            polygon = QPolygonF([QPointF(float(v.x), float(v.y)) for v in vertices])
            painter.drawPolyline(polygon)

    def _paint_cursor(self, painter: QPainter, cs_map: CSMap, cursor: Vec2i) -> None:
        win = cs_map.window
        with painter_state(painter):
            color = QColor(config.GRID_COLOR)
            painter.fillRect(QRectF(win.origin.x, cursor.y - 1, win.size.x, 2), color)
            painter.fillRect(QRectF(cursor.x - 1, win.origin.y, 2, win.size.y), color)

            dx, dy = config.CURSOR_LABEL_OFFSET
            painter.setPen(color)
            font = QFont(painter.font())
            font.setPixelSize(12)
            painter.setFont(font)
            painter.drawText(QPointF(cursor.x + dx, cursor.y + dy), str(cs_map.to_real(cursor)))

    def _paint_fps(self, painter: QPainter, window_cs: WindowCS) -> None:
        with painter_state(painter):
            painter.setPen(QColor(config.GRID_COLOR))
            font = QFont(painter.font())
            font.setPixelSize(12)
            painter.setFont(font)
            x = window_cs.origin.x + FPS_LABEL_PADDING
            y = window_cs.origin.y + FPS_LABEL_PADDING + 12
            painter.drawText(QPointF(x, y), self.frame_stats.label())
