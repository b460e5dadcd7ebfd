import itertools
import math

import numpy as np
import pytest

from enclosingcircle.model.geometry_primitives import Vec2d
from enclosingcircle.model.state import PointSet, SolveKind
from enclosingcircle.solvers.solver import Solver, circle_from_three, circle_from_two

EPS = 1e-9


def pts(*coords):
    return [Vec2d(float(x), float(y)) for x, y in coords]


def random_points(rng, n, spread=10.0):
    return [Vec2d(float(x), float(y)) for x, y in rng.uniform(-spread, spread, size=(n, 2))]


def brute_force_radius(points):
    """Smallest radius among all 2- and 3-point circles that enclose everything."""
    best = math.inf
    candidates = [circle_from_two(a, b) for a, b in itertools.combinations(points, 2)]
    candidates += [circle_from_three(a, b, c) for a, b, c in itertools.combinations(points, 3)]
    for c in candidates:
        if all(c.center.distance_to(p) <= c.radius + 1e-7 for p in points):
            best = min(best, c.radius)
    return best


@pytest.fixture
def solver():
    return Solver(np.random.default_rng(2024))


# --- Concrete scenarios ---

def test_empty(solver):
    assert solver.solve([]).kind is SolveKind.NONE


def test_single_point(solver):
    result = solver.solve(pts((2, 3)))
    assert result.kind is SolveKind.POINT
    assert result.center == Vec2d(2.0, 3.0)
    assert result.radius == 0.0


def test_two_points(solver):
    result = solver.solve(pts((-1, 0), (1, 0)))
    assert result.kind is SolveKind.CIRCLE
    assert result.center.x == pytest.approx(0.0)
    assert result.center.y == pytest.approx(0.0)
    assert result.radius == pytest.approx(1.0)


def test_three_collinear(solver):
    result = solver.solve(pts((-2, 0), (0, 0), (2, 0)))
    assert result.center.x == pytest.approx(0.0)
    assert result.center.y == pytest.approx(0.0)
    assert result.radius == pytest.approx(2.0)


def test_square(solver):
    result = solver.solve(pts((0, 0), (4, 0), (0, 3), (4, 3)))
    assert result.center.x == pytest.approx(2.0)
    assert result.center.y == pytest.approx(1.5)
    assert result.radius == pytest.approx(2.5)


def test_duplicates(solver):
    result = solver.solve(pts((1, 1), (1, 1), (1, 1)))
    assert result.radius == pytest.approx(0.0)
    assert result.center == Vec2d(1.0, 1.0)


def test_obtuse_triangle_uses_longest_side(solver):
    result = solver.solve(pts((-5, 0), (5, 0), (0, 1)))
    assert result.center.x == pytest.approx(0.0)
    assert result.center.y == pytest.approx(0.0)
    assert result.radius == pytest.approx(5.0)


# --- Helpers ---

def test_circumcircle_of_right_triangle():
    result = circle_from_three(*pts((0, 0), (4, 0), (0, 3)))
    assert result.center.x == pytest.approx(2.0)
    assert result.center.y == pytest.approx(1.5)
    assert result.radius == pytest.approx(2.5)


def test_circumcircle_of_collinear_points_covers_all():
    a, b, c = pts((0, 0), (6, 0), (2, 0))
    result = circle_from_three(a, b, c)
    assert result.center.x == pytest.approx(3.0)
    assert result.radius == pytest.approx(3.0)


# --- Properties ---

@pytest.mark.parametrize("seed", range(10))
def test_encloses_and_is_tight(seed):
    rng = np.random.default_rng(seed)
    points = random_points(rng, 150)
    result = Solver(rng).solve(points)
    distances = [result.center.distance_to(p) for p in points]
    assert max(distances) <= result.radius + EPS
    assert any(abs(d - result.radius) <= 1e-7 for d in distances)


@pytest.mark.parametrize("seed", range(8))
def test_matches_brute_force(seed):
    rng = np.random.default_rng(100 + seed)
    points = random_points(rng, 7)
    result = Solver(rng).solve(points)
    assert result.radius == pytest.approx(brute_force_radius(points), abs=1e-7)


def test_radius_is_monotone(rng):
    solver = Solver(rng)
    points = random_points(rng, 40)
    radii = [solver.solve(points[:n]).radius for n in range(1, len(points) + 1)]
    for smaller, larger in zip(radii, radii[1:]):
        assert larger >= smaller - 1e-7


def test_independent_of_shuffle(rng):
    points = random_points(rng, 60)
    a = Solver(np.random.default_rng(1)).solve(points)
    b = Solver(np.random.default_rng(2)).solve(points)
    assert a.radius == pytest.approx(b.radius, abs=1e-7)
    assert a.center.distance_to(b.center) == pytest.approx(0.0, abs=1e-6)


def test_many_points_do_not_recurse(rng):
    points = random_points(rng, 5000)
    result = Solver(rng).solve(points)
    assert all(result.contains(p) for p in points)


def test_solve_scene_stores_result(scene, rng):
    scene.add_point(Vec2d(-1.0, 0.0), PointSet.FIRST_SET)
    scene.add_point(Vec2d(1.0, 0.0), PointSet.SECOND_SET)
    result = Solver(rng).solve_scene(scene)
    assert scene.solve_result is result
    assert result.radius == pytest.approx(1.0)
