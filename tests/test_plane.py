import math

from yapcsg.geom import Vector, epsilon
from yapcsg.plane import XY, Plane

## unit tests for yapCSG plane.py


def test_from_normal_normalizes():
    p = Plane.from_normal(Vector(0, 0, 2), 1.0)
    assert p.normal == Vector(0, 0, 1)
    assert p.w == 1.0


def test_from_normal_rejects_zero_and_nan():
    assert Plane.from_normal(Vector(0, 0, 0), 1.0) is None
    assert Plane.from_normal(Vector(math.nan, 0, 0), 1.0) is None
    assert Plane.from_point(Vector(0, 0, 0), Vector(1, 1, 1)) is None


def test_from_point():
    p = Plane.from_point(Vector(0, 3, 0), Vector(5, 2, 7))
    assert p.normal == Vector(0, 1, 0)
    assert math.isclose(p.w, 2.0)
    assert p.contains_point(Vector(-4, 2, 1))


def test_from_points_triangle():
    p = Plane.from_points([Vector(0, 0, 1), Vector(1, 0, 1), Vector(0, 1, 1)])
    assert p.normal.is_equal(Vector(0, 0, 1))
    assert math.isclose(p.w, 1.0)


def test_from_points_rejects_short_and_degenerate_rings():
    assert Plane.from_points([Vector(0, 0), Vector(1, 0)]) is None
    assert Plane.from_points([Vector(0, 1), Vector(0, 0), Vector(0, -2)]) is None


def test_from_points_rejects_non_planar_ring():
    pts = [Vector(0, 0, 0), Vector(1, 0, 0), Vector(1, 1, 0.1), Vector(0, 1, 0)]
    assert Plane.from_points(pts) is None


def test_concave_ring_winding():
    anticlockwise = [Vector(-1, 0), Vector(0, 0), Vector(0, -1), Vector(1, -1),
                     Vector(1, 1), Vector(-1, 1)]
    clockwise = [Vector(-1, 0), Vector(0, 0), Vector(0, 1), Vector(1, 1),
                 Vector(1, -1), Vector(-1, -1)]
    assert Plane.from_points(anticlockwise).normal.is_equal(Vector(0, 0, 1))
    assert Plane.from_points(clockwise).normal.is_equal(Vector(0, 0, -1))


def test_normal_is_unit_length():
    pts = [Vector(0, 0, 0), Vector(3, 1, 0), Vector(2, 5, 4), Vector(-1, 4, 4)]
    p = Plane.from_points(pts)
    assert p is not None
    assert abs(p.normal.length - 1.0) < epsilon


def test_inverted_and_distance():
    p = Plane(Vector(0, 0, 1), 2.0)
    q = p.inverted()
    assert q.normal == Vector(0, 0, -1)
    assert q.w == -2.0
    assert p.distance(Vector(0, 0, 5)) == 3.0
    assert q.distance(Vector(0, 0, 5)) == -3.0


def test_is_equal():
    p = Plane(Vector(0, 0, 1), 0.0)
    assert p.is_equal(XY)
    assert p.is_equal(Plane(Vector(0, 0, 1), epsilon / 2))
    assert not p.is_equal(XY.inverted())
    assert not p.is_equal(Plane(Vector(0, 0, 1), 0.1))
