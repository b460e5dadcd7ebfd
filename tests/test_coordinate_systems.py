import math
import sys

import pytest

from enclosingcircle.errors import InvalidViewport
from enclosingcircle.model.coordinate_systems import CSMap, RealCS, WindowCS
from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i


@pytest.fixture
def cs_map():
    return CSMap(WindowCS.from_size(800, 600), RealCS.from_bounds(-10, -10, 10, 10))


# --- WindowCS ---

def test_window_rejects_negative_size():
    with pytest.raises(InvalidViewport):
        WindowCS(Vec2i(0, 0), Vec2i(-1, 10))


def test_window_zero_size_is_degenerate():
    win = WindowCS.from_size(0, 100)
    assert win.is_degenerate
    with pytest.raises(InvalidViewport):
        CSMap(win, RealCS.from_bounds(0, 0, 1, 1)).to_real(Vec2i(0, 0))


def test_window_contains_is_half_open():
    win = WindowCS(Vec2i(10, 20), Vec2i(100, 50))
    assert win.max == Vec2i(110, 70)
    assert win.contains(Vec2i(10, 20))
    assert win.contains(Vec2i(109, 69))
    assert not win.contains(Vec2i(110, 69))
    assert not win.contains(Vec2i(9, 30))
    assert win.relative_pos(Vec2i(15, 25)) == Vec2i(5, 5)


# --- RealCS ---

@pytest.mark.parametrize("bounds", [
    (0, 0, 0, 1),
    (0, 0, 1, 0),
    (1, 0, 0, 1),
    (0, 0, math.nan, 1),
    (0, -math.inf, 1, 1),
])
def test_realcs_rejects_invalid_bounds(bounds):
    with pytest.raises(InvalidViewport):
        RealCS.from_bounds(*bounds)


def test_realcs_size_and_center():
    cs = RealCS.from_bounds(-2, 0, 6, 4)
    assert cs.size == Vec2d(8.0, 4.0)
    assert cs.center == Vec2d(2.0, 2.0)


def test_random_point_stays_inside(rng):
    cs = RealCS.from_bounds(-3, 5, 7, 6)
    for _ in range(200):
        p = cs.random_point(rng)
        assert cs.min.x <= p.x <= cs.max.x
        assert cs.min.y <= p.y <= cs.max.y


def test_scale_around_anchor():
    cs = RealCS.from_bounds(-10, -10, 10, 10)
    cs.scale(0.5, Vec2d(0.0, 0.0))
    assert cs.min == Vec2d(-5.0, -5.0)
    assert cs.max == Vec2d(5.0, 5.0)


@pytest.mark.parametrize("factor", [1.1, 0.9, 2.0, 0.25])
def test_scale_keeps_anchor_pixel(factor):
    win = WindowCS.from_size(800, 800)
    cs = RealCS.from_bounds(-10, -10, 10, 10)
    anchor = CSMap(win, cs).to_real(Vec2i(500, 600))
    before = CSMap(win, cs).to_pixel(anchor)
    cs.scale(factor, anchor)
    assert CSMap(win, cs).to_pixel(anchor) == before == Vec2i(500, 600)


@pytest.mark.parametrize("factor", [0.0, -1.0, math.nan, math.inf])
def test_scale_rejects_bad_factor(factor):
    cs = RealCS.from_bounds(-10, -10, 10, 10)
    with pytest.raises(InvalidViewport):
        cs.scale(factor, Vec2d(0.0, 0.0))
    assert cs == RealCS.from_bounds(-10, -10, 10, 10)


def test_pan_shifts_real_positions():
    win = WindowCS.from_size(400, 300)
    cs = RealCS.from_bounds(-10, -10, 10, 10)
    pixel = Vec2i(123, 45)
    before = CSMap(win, cs).to_real(pixel)
    cs.pan(Vec2d(1.5, -2.0))
    after = CSMap(win, cs).to_real(pixel)
    assert after.x == pytest.approx(before.x + 1.5)
    assert after.y == pytest.approx(before.y - 2.0)


# --- CSMap ---

def test_to_real_flips_y(cs_map):
    assert cs_map.to_real(Vec2i(0, 0)) == Vec2d(-10.0, 10.0)
    assert cs_map.to_real(Vec2i(800, 600)) == Vec2d(10.0, -10.0)
    assert cs_map.to_real(Vec2i(400, 300)) == Vec2d(0.0, 0.0)


def test_to_pixel_inverse(cs_map):
    assert cs_map.to_pixel(Vec2d(-10.0, 10.0)) == Vec2i(0, 0)
    assert cs_map.to_pixel(Vec2d(0.0, 0.0)) == Vec2i(400, 300)
    assert cs_map.to_pixel(Vec2d(10.0, -10.0)) == Vec2i(800, 600)


def test_to_pixel_rounds_half_up():
    cs_map = CSMap(WindowCS.from_size(2, 2), RealCS.from_bounds(0, 0, 2, 2))
    assert cs_map.to_pixel(Vec2d(0.5, 1.5)) == Vec2i(1, 1)


def test_round_trip_within_one_pixel(cs_map, rng):
    sim = cs_map.similarity()
    for _ in range(100):
        p = cs_map.real.random_point(rng)
        back = cs_map.to_real(cs_map.to_pixel(p))
        assert abs(back.x - p.x) <= sim.x
        assert abs(back.y - p.y) <= sim.y


def test_similarity(cs_map):
    sim = cs_map.similarity()
    assert sim.x == pytest.approx(20 / 800)
    assert sim.y == pytest.approx(20 / 600)
    assert cs_map.real.similarity(cs_map.window) == sim


def test_window_origin_offset():
    cs_map = CSMap(WindowCS(Vec2i(100, 50), Vec2i(200, 200)), RealCS.from_bounds(0, 0, 2, 2))
    assert cs_map.to_real(Vec2i(100, 50)) == Vec2d(0.0, 2.0)
    assert cs_map.to_pixel(Vec2d(1.0, 1.0)) == Vec2i(200, 150)


def test_zoom_stops_before_precision_runs_out():
    cs = RealCS.from_bounds(-10, -10, 10, 10)
    with pytest.raises(InvalidViewport):
        for _ in range(6000):
            cs.scale(0.88, Vec2d(0.0, 0.0))
    assert cs.size.x >= sys.float_info.min
    cs_map = CSMap(WindowCS.from_size(800, 800), cs)
    with pytest.raises(InvalidViewport):
        cs_map.to_pixel(Vec2d(5.0, 5.0))
    assert cs_map.to_pixel(Vec2d(0.0, 0.0)) == Vec2i(400, 400)


def test_zoom_rejects_unresolvable_viewport_far_from_origin():
    cs = RealCS.from_bounds(1e6, 1e6, 1e6 + 1, 1e6 + 1)
    with pytest.raises(InvalidViewport):
        cs.scale(1e-6, Vec2d(1e6, 1e6))
    assert cs == RealCS.from_bounds(1e6, 1e6, 1e6 + 1, 1e6 + 1)


def test_pan_rejects_collapsed_viewport():
    cs = RealCS.from_bounds(0, 0, 1, 1)
    with pytest.raises(InvalidViewport):
        cs.pan(Vec2d(1e300, 0.0))
    assert cs == RealCS.from_bounds(0, 0, 1, 1)
