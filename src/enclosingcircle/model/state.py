"""
Scene State (Data Model)
========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current viewport, the point set and the
   last solver answer in one place.
2. Persistence: This object is what gets serialized when saving a scene.
3. Decoupling: The renderer reads from this object; the controller and the
   solver write to it.

Classes:
    PointSet: Semantic tag of a point.
    Point: Immutable labeled point.
    SolveResult: Output of the enclosing circle solver.
    Scene: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

import numpy as np

from enclosingcircle import config
from enclosingcircle.model.coordinate_systems import CSMap, RealCS, WindowCS
from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i

logger = logging.getLogger(__name__)


class PointSet(StrEnum):
    FIRST_SET = "FIRST_SET"
    SECOND_SET = "SECOND_SET"

    @property
    def display_name(self) -> str:
        return {
            PointSet.FIRST_SET: "first set",
            PointSet.SECOND_SET: "second set",
        }[self]

    @property
    def color(self) -> str:
        return {
            PointSet.FIRST_SET: config.FIRST_SET_COLOR,
            PointSet.SECOND_SET: config.SECOND_SET_COLOR,
        }[self]


@dataclass(frozen=True)
class Point:
    pos: Vec2d
    set: PointSet

    def __str__(self) -> str:
        return f"Point {self.pos}"


class SolveKind(StrEnum):
    NONE = "NONE"
    POINT = "POINT"
    CIRCLE = "CIRCLE"


@dataclass(frozen=True)
class SolveResult:
    kind: SolveKind
    center: Vec2d = Vec2d(0.0, 0.0)
    radius: float = 0.0

    @classmethod
    def none(cls) -> SolveResult:
        return cls(SolveKind.NONE)

    def contains(self, p: Vec2d, eps: float = config.EPS) -> bool:
        """Closed disc test with tolerance on the radius."""
        if self.kind is SolveKind.NONE:
            return False
        return self.center.distance_to(p) <= self.radius + eps

    def __str__(self) -> str:
        if self.kind is SolveKind.NONE:
            return "no circle (empty point set)"
        return f"center {self.center}, radius {self.radius:.4f}"


@dataclass
class Scene:
    """
    The persistent document: viewport plus ordered points.
    Pass this instance to the controller, solver and renderer.
    """
    cs: RealCS
    points: list[Point] = field(default_factory=list)
    solve_result: Optional[SolveResult] = field(default=None, compare=False, repr=False)

    @classmethod
    def default(cls) -> Scene:
        """Empty scene over the default [-10, 10] x [-10, 10] viewport."""
        return cls(cs=RealCS(Vec2d(*config.DEFAULT_CS_MIN), Vec2d(*config.DEFAULT_CS_MAX)))

    @property
    def solved(self) -> bool:
        return self.solve_result is not None

    def cancel(self) -> None:
        """Drop the last solver answer."""
        self.solve_result = None

    def add_point(self, pos: Vec2d, point_set: PointSet) -> Point:
        self.solve_result = None
        new_point = Point(pos, point_set)
        self.points.append(new_point)
        logger.info(f"{new_point} added to {point_set.display_name}")
        return new_point

    def add_random(self, n: int, point_set: PointSet, rng: np.random.Generator) -> int:
        """
        Add up to `n` random points without coincidences.

        Positions are taken from distinct cells of a small integer lattice
        mapped into the scene viewport, so a single call never places two
        points at the same spot. Stops early once every cell has been used.

        Returns:
            Number of points actually added.
        """
        if n <= 0:
            return 0
        grid = config.RANDOM_GRID_SIZE
        n_cells = grid * grid
        count = min(n, n_cells)
        if n > n_cells:
            logger.warning(f"Requested {n} random points, lattice holds only {n_cells}.")

        lattice = CSMap(WindowCS.from_size(grid, grid), self.cs)
        cells = rng.choice(n_cells, size=count, replace=False)
        for cell in cells:
            gx, gy = divmod(int(cell), grid)
            self.add_point(lattice.to_real(Vec2i(gx, gy)), point_set)
        return count

    def clear(self) -> None:
        self.points.clear()
        self.solve_result = None
        logger.info("Scene cleared.")
