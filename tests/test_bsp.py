import pytest

from yapcsg.bsp import BSPNode, ClipRule
from yapcsg.geom import Vector

from csg_shapes import cube, sphere, square

## unit tests for yapCSG bsp.py


def total_area(polygons):
    return sum(p.area for p in polygons)


def test_keep_front():
    assert ClipRule.GREATER_THAN.keep_front
    assert ClipRule.GREATER_THAN_OR_EQUAL.keep_front
    assert not ClipRule.LESS_THAN.keep_front
    assert not ClipRule.LESS_THAN_OR_EQUAL.keep_front


def test_insert_keeps_every_polygon():
    c = cube()
    tree = BSPNode(c.polygons)
    assert tree.plane == c.polygons[0].plane
    assert len(tree.all_polygons()) == 6
    assert total_area(tree.all_polygons()) == pytest.approx(6.0)


def test_insert_splits_spanning_polygons():
    s = sphere(radius=1.0, slices=8, stacks=4)
    tree = BSPNode(s.polygons)
    assert total_area(tree.all_polygons()) == pytest.approx(
        total_area(s.polygons))


def test_insert_builds_deep_tree_without_recursion():
    # a tall stack of parallel squares makes a degenerate, list-like tree
    polygons = [square(center=Vector(0, 0, z * 0.01)) for z in range(1100)]
    tree = BSPNode(polygons)
    assert len(tree.all_polygons()) == 1100
    inside = tree.clip([square(center=Vector(0, 0, -1.0))],
                       ClipRule.LESS_THAN, False)
    assert len(inside) == 1


def test_empty_tree_is_all_outside():
    tree = BSPNode()
    polygons = [square()]
    assert tree.clip(polygons, ClipRule.GREATER_THAN, False) == polygons
    assert tree.clip(polygons, ClipRule.LESS_THAN, False) == []


def test_clip_polygon_inside_cube():
    tree = BSPNode(cube().polygons)
    inner = [square(size=0.5)]
    assert tree.clip(inner, ClipRule.LESS_THAN, False) == inner
    assert tree.clip(inner, ClipRule.GREATER_THAN, False) == []


def test_clip_polygon_outside_cube():
    tree = BSPNode(cube().polygons)
    outer = [square(center=Vector(3, 0, 0))]
    assert tree.clip(outer, ClipRule.GREATER_THAN, False) == outer
    assert tree.clip(outer, ClipRule.LESS_THAN, False) == []


def test_clip_spanning_polygon():
    tree = BSPNode(cube().polygons)
    big = [square(size=2.0)]
    outside = tree.clip(big, ClipRule.GREATER_THAN, False)
    inside = tree.clip(big, ClipRule.LESS_THAN, False)
    assert total_area(outside) == pytest.approx(3.0)
    assert total_area(inside) == pytest.approx(1.0)
    assert len(inside) == 1
    for p in outside + inside:
        assert p.is_convex
        assert p.plane.normal.is_equal(Vector(0, 0, 1))


def test_clip_rejoins_fragments():
    # a square above the cube is cut by its four side planes, but every
    # piece stays outside and the pieces are stitched back together
    tree = BSPNode(cube().polygons)
    outside = tree.clip([square(size=2.0, center=Vector(0, 0, 2))],
                        ClipRule.GREATER_THAN, False)
    assert len(outside) == 1
    assert len(outside[0].vertices) == 4
    assert outside[0].area == pytest.approx(4.0)


def test_coplanar_surface_rules():
    c = cube()
    tree = BSPNode(c.polygons)
    top = [p for p in c.polygons if p.plane.normal.is_equal(Vector(0, 0, 1))]
    assert len(top) == 1
    gt = tree.clip(top, ClipRule.GREATER_THAN, False)
    gte = tree.clip(top, ClipRule.GREATER_THAN_OR_EQUAL, False)
    lt = tree.clip(top, ClipRule.LESS_THAN, False)
    lte = tree.clip(top, ClipRule.LESS_THAN_OR_EQUAL, False)
    assert gt == [] and lt == []
    assert total_area(gte) == pytest.approx(1.0)
    assert total_area(lte) == pytest.approx(1.0)


def test_backfaces():
    c = cube()
    tree = BSPNode(c.polygons)
    top = [p.inverted() for p in c.polygons
           if p.plane.normal.is_equal(Vector(0, 0, 1))]
    assert tree.clip(top, ClipRule.GREATER_THAN, False) == []
    assert total_area(tree.clip(top, ClipRule.GREATER_THAN, True)) == \
        pytest.approx(1.0)
    assert tree.clip(top, ClipRule.LESS_THAN, True) == []
    assert total_area(tree.clip(top, ClipRule.LESS_THAN, False)) == \
        pytest.approx(1.0)
