"""
Smallest Enclosing Circle Solver
================================
Welzl's randomized algorithm in its iterative move-to-front form.

After a random shuffle every point is checked against the current circle.
A point outside becomes a boundary point and the circle is rebuilt from the
points seen so far with up to three boundary points fixed. The expected
running time is linear and no recursion is involved, so thousands of points
do not hit the interpreter's recursion limit.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from enclosingcircle import config
from enclosingcircle.model.geometry_primitives import Vec2d
from enclosingcircle.model.state import Scene, SolveKind, SolveResult

logger = logging.getLogger(__name__)


def _contains(circle: SolveResult, p: Vec2d) -> bool:
    return circle.center.distance_to(p) <= circle.radius + config.EPS


def circle_from_one(a: Vec2d) -> SolveResult:
    return SolveResult(SolveKind.CIRCLE, a, 0.0)


def circle_from_two(a: Vec2d, b: Vec2d) -> SolveResult:
    """Circle with segment ab as its diameter."""
    center = a.midpoint(b)
    return SolveResult(SolveKind.CIRCLE, center, max(center.distance_to(a), center.distance_to(b)))


def circle_from_three(a: Vec2d, b: Vec2d, c: Vec2d) -> SolveResult:
    """
    Circumscribed circle of triangle abc.

    Collinear input (|det| < EPS) has no circumcircle; the circle on the
    farthest pair is returned instead, grown if needed to cover the third point.
    """
    ab = b - a
    ac = c - a
    d = 2.0 * (ab.x * ac.y - ab.y * ac.x)

    if abs(d) < config.EPS:
        candidates = [(a, b, c), (a, c, b), (b, c, a)]
        p, q, rest = max(candidates, key=lambda t: t[0].distance_to(t[1]))
        circle = circle_from_two(p, q)
        return SolveResult(SolveKind.CIRCLE, circle.center,
                           max(circle.radius, circle.center.distance_to(rest)))

    ab2 = ab.dot(ab)
    ac2 = ac.dot(ac)
    ux = (ac.y * ab2 - ab.y * ac2) / d
    uy = (ab.x * ac2 - ac.x * ab2) / d
    center = a + Vec2d(ux, uy)
    radius = max(center.distance_to(a), center.distance_to(b), center.distance_to(c))
    return SolveResult(SolveKind.CIRCLE, center, radius)


class Solver:
    """
    Computes the minimum radius circle containing every given point.

    Args:
        rng: Generator used to shuffle the input. Inject a seeded one for
            reproducible results; defaults to an OS-seeded generator.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def solve(self, points: Sequence[Vec2d]) -> SolveResult:
        if len(points) == 0:
            return SolveResult.none()
        if len(points) == 1:
            return SolveResult(SolveKind.POINT, points[0], 0.0)

        order = self.rng.permutation(len(points))
        pts = [points[int(i)] for i in order]

        circle = circle_from_one(pts[0])
        for i in range(1, len(pts)):
            p = pts[i]
            if _contains(circle, p):
                continue
            # p lies on the boundary of the circle for pts[:i + 1]
            circle = circle_from_one(p)
            for j in range(i):
                q = pts[j]
                if _contains(circle, q):
                    continue
                # p and q both lie on the boundary
                circle = circle_from_two(p, q)
                for k in range(j):
                    r = pts[k]
                    if not _contains(circle, r):
                        circle = circle_from_three(p, q, r)
        return circle

    def solve_scene(self, scene: Scene) -> SolveResult:
        """Solve for the scene's points and store the answer on the scene."""
        result = self.solve([p.pos for p in scene.points])
        scene.solve_result = result
        logger.info(f"Solved for {len(scene.points)} points: {result}")
        return result
