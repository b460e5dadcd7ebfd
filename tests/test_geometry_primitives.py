import math

import pytest

from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i


def test_vec2i_arithmetic():
    a = Vec2i(3, -4)
    b = Vec2i(1, 2)
    assert a + b == Vec2i(4, -2)
    assert a - b == Vec2i(2, -6)
    assert -a == Vec2i(-3, 4)
    assert str(a) == "(3, -4)"


def test_vec2d_scalar_and_componentwise_mul():
    v = Vec2d(1.5, -2.0)
    assert v * 2 == Vec2d(3.0, -4.0)
    assert 2 * v == Vec2d(3.0, -4.0)
    assert v * Vec2d(2.0, 0.5) == Vec2d(3.0, -1.0)


def test_vec2d_division():
    assert Vec2d(3.0, 4.0) / 2.0 == Vec2d(1.5, 2.0)
    assert Vec2d(3.0, 4.0) / Vec2d(3.0, 8.0) == Vec2d(1.0, 0.5)
    with pytest.raises(ZeroDivisionError):
        Vec2d(1.0, 1.0) / 0.0
    with pytest.raises(ZeroDivisionError):
        Vec2d(1.0, 1.0) / Vec2d(1.0, 0.0)


def test_vec2d_metrics():
    v = Vec2d(3.0, 4.0)
    assert v.length == 5.0
    assert v.dot(Vec2d(1.0, 1.0)) == 7.0
    assert Vec2d(1.0, 1.0).distance_to(Vec2d(4.0, 5.0)) == 5.0
    assert Vec2d(-2.0, 0.0).midpoint(Vec2d(2.0, 4.0)) == Vec2d(0.0, 2.0)
    assert math.isclose((-v).length, 5.0)


def test_vec2d_conversions():
    assert Vec2d.from_vec2i(Vec2i(2, -7)) == Vec2d(2.0, -7.0)


def test_vec2d_label_format():
    assert str(Vec2d(1.234, -4.0)) == "(1.23, -4.00)"
