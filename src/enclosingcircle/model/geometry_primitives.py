"""
Geometric Primitives for the window and problem coordinate systems.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Vec2i:
    """An integer vector in window (pixel) space."""
    x: int
    y: int

    def __add__(self, other: Vec2i) -> Vec2i:
        return Vec2i(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2i) -> Vec2i:
        return Vec2i(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2i:
        return Vec2i(-self.x, -self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Vec2d:
    """
    A vector in the real problem space.
    Multiplication by a scalar scales both components, multiplication by
    another Vec2d is component-wise.
    """
    x: float
    y: float

    def __add__(self, other: Vec2d) -> Vec2d:
        return Vec2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2d) -> Vec2d:
        return Vec2d(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[float, Vec2d]) -> Vec2d:
        if isinstance(other, Vec2d):
            return Vec2d(self.x * other.x, self.y * other.y)
        return Vec2d(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, Vec2d]) -> Vec2d:
        if isinstance(other, Vec2d):
            if other.x == 0.0 or other.y == 0.0: raise ZeroDivisionError
            return Vec2d(self.x / other.x, self.y / other.y)
        if other == 0.0: raise ZeroDivisionError
        return Vec2d(self.x / other, self.y / other)

    def __neg__(self) -> Vec2d:
        return Vec2d(-self.x, -self.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: Vec2d) -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: Vec2d) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other: Vec2d) -> Vec2d:
        return Vec2d((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    @classmethod
    def from_vec2i(cls, v: Vec2i) -> Vec2d:
        return cls(float(v.x), float(v.y))

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"
