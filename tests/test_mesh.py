import math

import pytest

from yapcsg.geom import Vector
from yapcsg.mesh import Mesh, mesh_contains_point, surfacearea, volumeof
from yapcsg.poly import Polygon
from yapcsg.xform import Rotation, Transform

from csg_shapes import cube, sphere, square


def test_mesh_tessellates_concave_polygons():
    ell = Polygon.from_points([Vector(-1, 0), Vector(0, 0), Vector(0, -1),
                               Vector(1, -1), Vector(1, 1), Vector(-1, 1)])
    m = Mesh([ell])
    assert len(m.polygons) > 1
    assert all(p.is_convex for p in m.polygons)
    assert sum(p.area for p in m.polygons) == pytest.approx(ell.area)


def test_mesh_rejects_non_polygons():
    with pytest.raises(ValueError):
        Mesh([square(), 'square'])
    with pytest.raises(ValueError):
        Mesh([None])


def test_empty_mesh():
    m = Mesh()
    assert len(m) == 0
    assert m.bounds.is_empty
    assert volumeof(m) == 0.0
    assert surfacearea(m) == 0.0
    assert not mesh_contains_point(m, Vector(0, 0, 0))


def test_bounds():
    c = cube(center=Vector(1, 2, 3), size=2.0)
    assert c.bounds.min.is_equal(Vector(0, 1, 2))
    assert c.bounds.max.is_equal(Vector(2, 3, 4))


def test_equality_and_hash():
    assert cube() == cube()
    assert hash(cube()) == hash(cube())
    assert cube() != cube(material='red')
    assert cube() != sphere()
    assert repr(cube()) == 'Mesh(6 polygons)'


def test_materials():
    m = cube(material='red').merge(cube(center=Vector(3, 0, 0), material='blue'))
    groups = m.polygons_by_material()
    assert list(groups) == ['red', 'blue']
    assert len(groups['red']) == 6
    assert m.materials == ['red', 'blue']
    r = m.replacing('red', 'green')
    assert r.materials == ['green', 'blue']
    assert len(r) == 12


def test_volume_and_area():
    c = cube(size=2.0)
    assert volumeof(c) == pytest.approx(8.0)
    assert c.volume == pytest.approx(8.0)
    assert surfacearea(c) == pytest.approx(24.0)
    assert volumeof(c.inverted()) == pytest.approx(-8.0)


def test_sphere_volume_converges():
    s = sphere(radius=1.0, slices=48, stacks=24)
    assert volumeof(s) == pytest.approx(4.0 / 3.0 * math.pi, rel=0.02)
    assert volumeof(s) < 4.0 / 3.0 * math.pi


def test_contains_point():
    c = cube()
    assert mesh_contains_point(c, Vector(0, 0, 0))
    assert mesh_contains_point(c, Vector(0.4, -0.4, 0.3))
    assert not mesh_contains_point(c, Vector(0.6, 0, 0))
    assert not mesh_contains_point(c, Vector(5, 5, 5))
    s = sphere(radius=1.0)
    assert mesh_contains_point(s, Vector(0.1, 0.2, 0.3))
    assert not mesh_contains_point(s, Vector(0.9, 0.9, 0.0))


def test_translated():
    c = cube().translated(Vector(10, 0, 0))
    assert c.bounds.min.is_equal(Vector(9.5, -0.5, -0.5))
    assert volumeof(c) == pytest.approx(1.0)


def test_rotated():
    c = cube(size=Vector(1, 2, 3)).rotated(Rotation(Vector(0, 0, 1), 90))
    assert volumeof(c) == pytest.approx(6.0)
    assert c.bounds.max.is_equal(Vector(1.0, 0.5, 1.5))


@pytest.mark.parametrize('factor, volume', [
    (Vector(2, 1, 1), 2.0),
    (Vector(-1, 1, 1), 1.0),
    (Vector(-1, -1, 1), 1.0),
    (Vector(-2, -2, -2), 8.0),
    (3.0, 27.0),
    (-1.0, 1.0),
])
def test_scaled(factor, volume):
    c = cube().scaled(factor)
    assert volumeof(c) == pytest.approx(volume)
    assert mesh_contains_point(c, Vector(0.1, 0.1, 0.1))


def test_transformed():
    t = Transform(offset=Vector(5, 0, 0),
                  rotation=Rotation(Vector(1, 1, 0), 30),
                  scale=Vector(2, 2, 2))
    c = cube().transformed(t)
    assert volumeof(c) == pytest.approx(8.0)
    assert mesh_contains_point(c, Vector(5, 0, 0))
