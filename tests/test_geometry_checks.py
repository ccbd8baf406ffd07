import pytest

from yapcsg.geom import Vector
from yapcsg.geometry_checks import (
    CheckResult,
    mesh_is_convex,
    mesh_watertight,
    polygon_is_valid,
)
from yapcsg.mesh import Mesh
from yapcsg.plane import Plane
from yapcsg.poly import Polygon

from csg_shapes import cube, sphere, square


def test_square_is_valid():
    result = polygon_is_valid(square())
    assert result.ok
    assert result.warnings == []


def test_polygon_off_its_plane():
    s = square()
    bad = Polygon(s.vertices, plane=Plane(Vector(0, 0, 1), 1.0))
    result = polygon_is_valid(bad)
    assert not result
    assert 'off the polygon plane' in result.warnings[0]


def test_wrong_convexity_flag():
    s = square()
    result = polygon_is_valid(Polygon(s.vertices, is_convex=False))
    assert not result
    assert 'convexity' in result.warnings[0]


def test_wrong_winding():
    s = square()
    result = polygon_is_valid(Polygon(s.vertices, plane=s.plane.inverted()))
    assert not result
    assert 'winding' in result.warnings[0]


def test_polygon_is_valid_rejects_other_types():
    with pytest.raises(ValueError):
        polygon_is_valid([Vector(0, 0, 0)])


def test_closed_meshes_are_watertight():
    assert mesh_watertight(cube())
    assert mesh_watertight(sphere())


def test_open_cube_is_not_watertight():
    open_cube = Mesh(cube().polygons[1:])
    result = mesh_watertight(open_cube)
    assert not result.ok
    assert 'unmatched' in result.warnings[0]


def test_union_with_t_junctions_is_watertight():
    u = cube().union(cube(center=Vector(0.75, 0.25, 0.25)))
    assert mesh_watertight(u)


def test_convexity():
    assert mesh_is_convex(cube())
    assert mesh_is_convex(sphere())
    assert mesh_is_convex(cube().intersect(cube(center=Vector(0.75, 0, 0))))
    apart = cube().merge(cube(center=Vector(3, 0, 0)))
    result = mesh_is_convex(apart)
    assert not result
    assert result.warnings


def test_check_result_truthiness():
    assert CheckResult(True, [])
    assert not CheckResult(False, ['broken'])
