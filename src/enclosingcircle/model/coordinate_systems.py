"""
Coordinate Systems
==================
Window (pixel) and problem (real) coordinate systems and the mapping
between them.

    WindowCS: integer rectangle, origin top-left, y grows downward.
    RealCS:   real rectangle, y grows upward, supports pan and zoom.
    CSMap:    affine pixel <-> real mapping built from one of each.

Every mouse interaction and every rendered primitive passes through CSMap.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass

import numpy as np

from enclosingcircle.errors import InvalidViewport
from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i

# Smallest viewport extent relative to its coordinates (about 2**20 ulps)
MIN_RELATIVE_SIZE = 1e-10


@dataclass(frozen=True)
class WindowCS:
    """
    Pixel rectangle. A zero size is allowed (collapsed widget) but cannot be
    mapped through a CSMap.
    """
    origin: Vec2i
    size: Vec2i

    def __post_init__(self) -> None:
        if self.size.x < 0 or self.size.y < 0:
            raise InvalidViewport(f"Window size must not be negative, got {self.size}")

    @classmethod
    def from_size(cls, width: int, height: int) -> WindowCS:
        return cls(Vec2i(0, 0), Vec2i(int(width), int(height)))

    @property
    def max(self) -> Vec2i:
        return self.origin + self.size

    @property
    def is_degenerate(self) -> bool:
        return self.size.x == 0 or self.size.y == 0

    def relative_pos(self, p: Vec2i) -> Vec2i:
        """Position of `p` relative to the window origin."""
        return p - self.origin

    def contains(self, p: Vec2i) -> bool:
        return (self.origin.x <= p.x < self.origin.x + self.size.x
                and self.origin.y <= p.y < self.origin.y + self.size.y)


@dataclass
class RealCS:
    """
    Real-valued viewport of the problem plane.

    The aspect ratio is not forced; pan and zoom only move the rectangle.
    """
    min: Vec2d
    max: Vec2d

    def __post_init__(self) -> None:
        self._validate(self.min, self.max)

    @staticmethod
    def _validate(lo: Vec2d, hi: Vec2d) -> None:
        values = (lo.x, lo.y, hi.x, hi.y)
        if not all(math.isfinite(v) for v in values):
            raise InvalidViewport(f"Viewport bounds must be finite, got {lo} - {hi}")
        if not (lo.x < hi.x and lo.y < hi.y):
            raise InvalidViewport(f"Viewport requires min < max, got min={lo!r}, max={hi!r}")

    @staticmethod
    def _check_resolution(lo: Vec2d, hi: Vec2d) -> None:
        # width must stay a normal float and well above the spacing of doubles at the bounds
        for a, b in ((lo.x, hi.x), (lo.y, hi.y)):
            if b - a < max(sys.float_info.min, MIN_RELATIVE_SIZE * max(abs(a), abs(b))):
                raise InvalidViewport(f"Viewport too small to resolve, got {lo} - {hi}")

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> RealCS:
        return cls(Vec2d(float(min_x), float(min_y)), Vec2d(float(max_x), float(max_y)))

    @property
    def size(self) -> Vec2d:
        return self.max - self.min

    @property
    def center(self) -> Vec2d:
        return self.min.midpoint(self.max)

    def random_point(self, rng: np.random.Generator) -> Vec2d:
        """Uniformly distributed point inside [min, max)."""
        return Vec2d(
            float(rng.uniform(self.min.x, self.max.x)),
            float(rng.uniform(self.min.y, self.max.y)),
        )

    def scale(self, factor: float, anchor: Vec2d) -> None:
        """
        Zoom around `anchor` (a real-space point, usually under the cursor).

        The anchor keeps its pixel position; factor > 1 shows more of the plane.

        Raises:
            InvalidViewport: if factor is not a positive finite number, or the
                result would collapse the viewport.
        """
        if not math.isfinite(factor) or factor <= 0.0:
            raise InvalidViewport(f"Scale factor must be positive, got {factor}")
        size = self.size * factor
        new_min = anchor - (anchor - self.min) * factor
        new_max = new_min + size
        self._validate(new_min, new_max)
        self._check_resolution(new_min, new_max)
        self.min = new_min
        self.max = new_max

    def pan(self, delta: Vec2d) -> None:
        new_min = self.min + delta
        new_max = self.max + delta
        self._validate(new_min, new_max)
        self._check_resolution(new_min, new_max)
        self.min = new_min
        self.max = new_max

    def similarity(self, window_cs: WindowCS) -> Vec2d:
        return CSMap(window_cs, self).similarity()


@dataclass(frozen=True)
class CSMap:
    """Bidirectional mapping between a WindowCS and a RealCS."""
    window: WindowCS
    real: RealCS

    def _check(self) -> None:
        if self.window.is_degenerate:
            raise InvalidViewport(f"Cannot map through a window of size {self.window.size}")

    def to_real(self, p: Vec2i) -> Vec2d:
        """Pixel -> real. The y axis is flipped."""
        self._check()
        win, real = self.window, self.real
        size = real.size
        rx = real.min.x + (p.x - win.origin.x) / win.size.x * size.x
        ry = real.max.y - (p.y - win.origin.y) / win.size.y * size.y
        return Vec2d(rx, ry)

    def to_pixel(self, p: Vec2d) -> Vec2i:
        """Real -> pixel, rounded to the nearest integer."""
        self._check()
        win, real = self.window, self.real
        size = real.size
        px = win.origin.x + (p.x - real.min.x) / size.x * win.size.x
        py = win.origin.y + (real.max.y - p.y) / size.y * win.size.y
        if not (math.isfinite(px) and math.isfinite(py)):
            raise InvalidViewport(f"{p} has no pixel position in viewport {real.min} - {real.max}")
        return Vec2i(math.floor(px + 0.5), math.floor(py + 0.5))

    def similarity(self) -> Vec2d:
        """Real units per pixel, per axis."""
        self._check()
        return self.real.size / Vec2d.from_vec2i(self.window.size)
