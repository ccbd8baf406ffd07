"""Validation helpers for yapCSG geometry."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Tuple

from yapcsg.geom import (Vector, epsilon, points_are_convex,
                         points_are_degenerate)
from yapcsg.mesh import Mesh
from yapcsg.plane import Plane
from yapcsg.poly import Polygon

PointKey = Tuple[float, float, float]


def polygon_is_valid(polygon: Polygon) -> "CheckResult":
    """Check the structural invariants of a polygon.

    The vertices must form a non-degenerate ring lying on the cached
    plane, the cached convexity flag must be right, and the winding
    must agree with the plane normal.
    """
    if not isinstance(polygon, Polygon):
        raise ValueError('polygon_is_valid expects a Polygon')

    points = polygon.positions
    warnings: List[str] = []
    if len(points) < 3:
        return CheckResult(False, [f'only {len(points)} vertices'])
    if points_are_degenerate(points):
        warnings.append('degenerate vertex ring')
    off_plane = [i for i, p in enumerate(points)
                 if not polygon.plane.contains_point(p)]
    if off_plane:
        warnings.append(f'vertices off the polygon plane: {off_plane}')
    if points_are_convex(points) != polygon.is_convex:
        warnings.append('convexity flag does not match vertices')
    if not warnings:
        plane = Plane.from_points(points)
        if plane is None or plane.normal.dot(polygon.plane.normal) <= 0:
            warnings.append('winding disagrees with plane normal')
    return CheckResult(not warnings, warnings)


def mesh_is_convex(mesh: Mesh) -> "CheckResult":
    """Is every vertex of ``mesh`` on or behind every polygon plane?"""
    points = {v.position for p in mesh.polygons for v in p.vertices}
    bad = []
    for idx, polygon in enumerate(mesh.polygons):
        plane = polygon.plane
        if any(plane.distance(q) > epsilon for q in points):
            bad.append(idx)
    if bad:
        return CheckResult(False, [f'vertices in front of polygons: {bad}'])
    return CheckResult(True, [])


def mesh_watertight(mesh: Mesh) -> "CheckResult":
    """Check that every directed edge is matched by an opposite edge.

    Edges are first cut at any mesh vertex lying on them, so that a long
    edge bordering several shorter ones (a T-junction) still counts as
    closed.
    """
    points = list({v.position for p in mesh.polygons for v in p.vertices})
    edges = Counter()

    for polygon in mesh.polygons:
        a = polygon.vertices[-1].position
        for v in polygon.vertices:
            b = v.position
            cuts = _edge_cuts(a, b, points)
            for c, d in zip(cuts, cuts[1:]):
                edges[(_key(c), _key(d))] += 1
            a = b

    unmatched = [edge for edge, count in edges.items()
                 if edges.get((edge[1], edge[0]), 0) != count]

    if unmatched:
        return CheckResult(False, [f'{len(unmatched)} unmatched edges detected'])
    return CheckResult(True, [])


def _edge_cuts(a: Vector, b: Vector, points: List[Vector]) -> List[Vector]:
    ab = b - a
    length_squared = ab.length_squared
    inner = []
    for p in points:
        t = (p - a).dot(ab) / length_squared
        if t <= epsilon or t >= 1.0 - epsilon:
            continue
        if (a + ab * t).is_equal(p):
            inner.append((t, p))
    inner.sort(key=lambda x: x[0])
    return [a] + [p for _, p in inner] + [b]


def _key(p: Vector) -> PointKey:
    return (round(p.x, 6), round(p.y, 6), round(p.z, 6))


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'polygon_is_valid',
    'mesh_is_convex',
    'mesh_watertight',
]
