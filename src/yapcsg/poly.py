## planar polygons: split, clip, join and tessellate for yapCSG
## Copyright (c) 2026 yapCSG contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.


"""planar polygons for yapCSG

====================
OVERVIEW
====================

A ``Polygon`` is an immutable ring of three or more coplanar
``Vertex`` instances, wound anticlockwise about its plane normal.  It
caches its ``plane``, its ``bounds`` and whether it ``is_convex``.

Polygons carry two tags through the boolean machinery:

``material``
    any hashable value.  yapCSG never interprets it; it only compares
    materials when deciding whether two polygons may be merged.

``fragment_id``
    zero for an original polygon.  When ``split()`` cuts a polygon in
    two, both halves receive the same nonzero id, which is what allows
    ``join()`` to stitch them back together later.  Ids come from an
    iterator (normally ``itertools.count(1)``) that the caller passes
    down explicitly.

construction
============

``Polygon.from_vertices()`` and ``Polygon.from_points()`` validate
their input and return ``None`` for anything that cannot form a
polygon (fewer than three points, degenerate or non-planar rings).
Calling ``Polygon(vertices, ...)`` directly is the unchecked path used
internally; it only asserts the invariants.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Hashable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import mapbox_earcut as _earcut
import numpy as np

from yapcsg.bounds import Bounds
from yapcsg.geom import (FlatteningPlane, Vector, epsilon, points_are_convex,
                         points_are_degenerate, scale_is_flipped)
from yapcsg.plane import Plane
from yapcsg.vertex import Vertex

logger = logging.getLogger(__name__)

# vertex and polygon classes with respect to a plane.  A polygon's
# class is the bitwise OR of its vertex classes.
COPLANAR = 0
FRONT = 1
BACK = 2
SPANNING = 3

# smallest magnitude a scale factor may have
_MIN_SCALE = 0.001


def vertices_are_degenerate(vertices: Sequence[Vertex]) -> bool:
    return points_are_degenerate([v.position for v in vertices])


def vertices_are_convex(vertices: Sequence[Vertex]) -> bool:
    return points_are_convex([v.position for v in vertices])


def _flat_contains(points: Sequence[Vector], p: Vector) -> bool:
    """even-odd test of flattened point ``p`` against a flattened ring"""
    inside = False
    j = len(points) - 1
    for i in range(len(points)):
        pi = points[i]
        pj = points[j]
        if (pi.y > p.y) != (pj.y > p.y) and \
           p.x < (pj.x - pi.x) * (p.y - pi.y) / (pj.y - pi.y) + pi.x:
            inside = not inside
        j = i
    return inside


class SplitResult(NamedTuple):
    coplanar: List["Polygon"]
    front: List["Polygon"]
    back: List["Polygon"]


class ClipResult(NamedTuple):
    inside: List["Polygon"]
    outside: List["Polygon"]


@dataclass(frozen=True)
class Polygon:
    """Immutable planar polygon.

    Only ``vertices``, ``material`` and ``fragment_id`` take part in
    equality and hashing; ``plane``, ``is_convex`` and ``bounds`` are
    derived from the vertices when not supplied.
    """

    vertices: Tuple[Vertex, ...]
    plane: Optional[Plane] = field(default=None, compare=False)
    is_convex: Optional[bool] = field(default=None, compare=False)
    bounds: Optional[Bounds] = field(default=None, compare=False, repr=False)
    material: Hashable = None
    fragment_id: int = 0

    def __post_init__(self):
        vertices = tuple(self.vertices)
        object.__setattr__(self, 'vertices', vertices)
        assert len(vertices) > 2, 'polygon needs at least three vertices'
        points = self.positions
        assert not points_are_degenerate(points), 'degenerate polygon'
        if self.is_convex is None:
            object.__setattr__(self, 'is_convex', points_are_convex(points))
        if self.plane is None:
            object.__setattr__(self, 'plane',
                               Plane._from_points_unchecked(points, self.is_convex))
        if self.bounds is None:
            object.__setattr__(self, 'bounds', Bounds.from_points(points))

    ## construction
    ## ------------

    @classmethod
    def from_vertices(cls, vertices: Sequence[Vertex],
                      material: Hashable = None) -> Optional["Polygon"]:
        """Return a validated polygon, or ``None``.

        The vertices may describe a convex or a concave polygon, but
        must be coplanar and non-degenerate.  They are assumed to be in
        anticlockwise order for the purpose of deriving the plane.
        """
        vertices = tuple(vertices)
        if len(vertices) < 3 or vertices_are_degenerate(vertices):
            return None
        plane = Plane.from_points([v.position for v in vertices])
        if plane is None:
            return None
        return cls(vertices, plane=plane, material=material)

    @classmethod
    def from_points(cls, points: Sequence[Vector],
                    material: Hashable = None) -> Optional["Polygon"]:
        """Like ``from_vertices()``, with vertex normals set to the face normal."""
        points = list(points)
        if len(points) < 3 or points_are_degenerate(points):
            return None
        plane = Plane.from_points(points)
        if plane is None:
            return None
        vertices = [Vertex(p, plane.normal) for p in points]
        return cls(vertices, plane=plane, material=material)

    ## queries
    ## -------

    @property
    def positions(self) -> List[Vector]:
        return [v.position for v in self.vertices]

    @property
    def area(self) -> float:
        """area enclosed by the polygon"""
        total = Vector(0.0, 0.0, 0.0)
        a = self.vertices[-1].position
        for v in self.vertices:
            total = total + a.cross(v.position)
            a = v.position
        return abs(total.dot(self.plane.normal)) / 2.0

    @property
    def edge_planes(self) -> List[Plane]:
        """One plane per edge, perpendicular to the polygon.

        Each plane faces away from the polygon interior, so for a convex
        polygon a point is inside exactly when it is behind every edge
        plane.
        """
        planes = []
        p0 = self.vertices[-1].position
        for v1 in self.vertices:
            p1 = v1.position
            tangent = p1 - p0
            plane = Plane.from_point(tangent.cross(self.plane.normal), p0)
            assert plane is not None, 'zero-length polygon edge'
            if plane is None:
                return []
            planes.append(plane)
            p0 = p1
        return planes

    def contains_point(self, p: Vector) -> bool:
        """does ``p`` lie on the polygon (within epsilon of its plane)?"""
        if not self.plane.contains_point(p) or not self.bounds.contains_point(p):
            return False
        flattening = FlatteningPlane.from_normal(self.plane.normal)
        points = [flattening.flatten_point(v.position) for v in self.vertices]
        return _flat_contains(points, flattening.flatten_point(p))

    ## derived polygons
    ## ----------------

    def inverted(self) -> "Polygon":
        """the same polygon facing the other way"""
        return Polygon(tuple(v.inverted() for v in reversed(self.vertices)),
                       plane=self.plane.inverted(),
                       is_convex=self.is_convex,
                       bounds=self.bounds,
                       material=self.material)

    def with_material(self, material: Hashable) -> "Polygon":
        return replace(self, material=material)

    def translated(self, v: Vector) -> "Polygon":
        return Polygon(tuple(vertex.translated(v) for vertex in self.vertices),
                       plane=Plane(self.plane.normal,
                                   self.plane.normal.dot(self.vertices[0].position + v)),
                       is_convex=self.is_convex,
                       bounds=self.bounds.translated(v),
                       material=self.material)

    def rotated(self, m) -> "Polygon":
        """rotate by a ``yapcsg.xform.Matrix`` rotation"""
        vertices = tuple(vertex.rotated(m) for vertex in self.vertices)
        normal = m.rotate(self.plane.normal).normalized()
        return Polygon(vertices,
                       plane=Plane(normal, normal.dot(vertices[0].position)),
                       is_convex=self.is_convex,
                       material=self.material)

    def scaled(self, v) -> "Polygon":
        """Scale by a per-axis ``Vector`` or by a uniform factor.

        Factors are clamped away from zero.  Mirroring along an odd
        number of axes reverses the winding so the polygon keeps facing
        outwards.
        """
        if not isinstance(v, Vector):
            return self._scaled_uniform(v)
        v = Vector(*(min(c, -_MIN_SCALE) if c < 0 else max(c, _MIN_SCALE)
                     for c in v))
        vertices = [vertex.scaled(v) for vertex in self.vertices]
        if scale_is_flipped(v):
            vertices.reverse()
        normal = self.plane.normal.scaled(
            Vector(1.0 / v.x, 1.0 / v.y, 1.0 / v.z)).normalized()
        return Polygon(tuple(vertices),
                       plane=Plane(normal, normal.dot(vertices[0].position)),
                       is_convex=self.is_convex,
                       material=self.material)

    def _scaled_uniform(self, f: float) -> "Polygon":
        f = min(f, -_MIN_SCALE) if f < 0 else max(f, _MIN_SCALE)
        vertices = tuple(vertex.scaled_uniform(f) for vertex in self.vertices)
        polygon = Polygon(vertices,
                          plane=Plane(self.plane.normal,
                                      self.plane.normal.dot(vertices[0].position)),
                          is_convex=self.is_convex,
                          material=self.material)
        return polygon.inverted() if f < 0 else polygon

    def transformed(self, t) -> "Polygon":
        """apply a ``yapcsg.xform.Transform``"""
        return self.scaled(t.scale).rotated(t.rotation).translated(t.offset)

    ## splitting and clipping
    ## ----------------------

    def split(self, plane: Plane,
              ids: Optional[Iterator[int]] = None) -> SplitResult:
        """Split the polygon along ``plane``.

        Returns a ``SplitResult`` of coplanar, front and back lists.  A
        polygon that lies entirely on one side comes back unchanged in
        the matching list.  A spanning polygon is cut in two, and both
        halves share a fragment id drawn from ``ids``.
        """
        if ids is None:
            ids = itertools.count(1)
        result = SplitResult([], [], [])
        self._split(plane, result.coplanar, result.front, result.back, ids)
        return result

    def _split(self, plane: Plane, coplanar: List["Polygon"],
               front: List["Polygon"], back: List["Polygon"],
               ids: Iterator[int]) -> None:
        polygon_type = COPLANAR
        types = []
        if not self.plane.is_equal(plane):
            for v in self.vertices:
                t = plane.normal.dot(v.position) - plane.w
                vtype = BACK if t < -epsilon else FRONT if t > epsilon else COPLANAR
                polygon_type |= vtype
                types.append(vtype)

        if polygon_type == COPLANAR:
            coplanar.append(self)
        elif polygon_type == FRONT:
            front.append(self)
        elif polygon_type == BACK:
            back.append(self)
        else:
            polygon = self
            if polygon.fragment_id == 0:
                polygon = replace(polygon, fragment_id=next(ids))
            if not polygon.is_convex:
                # the single entry/exit crossing walk below only holds
                # for convex polygons
                for piece in polygon.tessellate():
                    piece._split(plane, coplanar, front, back, ids)
                return
            f = []
            b = []
            vertices = polygon.vertices
            count = len(vertices)
            for i in range(count):
                j = (i + 1) % count
                ti = types[i]
                tj = types[j]
                vi = vertices[i]
                vj = vertices[j]
                if ti != BACK:
                    f.append(vi)
                if ti != FRONT:
                    b.append(vi)
                if ti | tj == SPANNING:
                    t = ((plane.w - plane.normal.dot(vi.position)) /
                         plane.normal.dot(vj.position - vi.position))
                    v = vi.lerp(vj, t)
                    f.append(v)
                    b.append(v)
            # the source plane is reused rather than re-derived from what
            # may be a sliver
            if len(f) > 2 and not vertices_are_degenerate(f):
                front.append(Polygon(tuple(f), plane=polygon.plane,
                                     is_convex=True,
                                     material=polygon.material,
                                     fragment_id=polygon.fragment_id))
            if len(b) > 2 and not vertices_are_degenerate(b):
                back.append(Polygon(tuple(b), plane=polygon.plane,
                                    is_convex=True,
                                    material=polygon.material,
                                    fragment_id=polygon.fragment_id))

    def clip_to(self, polygons: Sequence["Polygon"],
                ids: Optional[Iterator[int]] = None) -> ClipResult:
        """Clip this convex polygon against a set of coplanar convex polygons.

        Returns a ``ClipResult``: ``inside`` holds the pieces covered by
        any of ``polygons``, ``outside`` holds whatever is left over.
        """
        assert self.is_convex, 'clip_to requires a convex polygon'
        if ids is None:
            ids = itertools.count(1)
        inside = []
        to_test = [self]
        for polygon in polygons:
            if not to_test:
                break
            assert polygon.is_convex, 'clipping polygons must be convex'
            outside = []
            for p in to_test:
                polygon._clip(p, inside, outside, ids)
            to_test = outside
        return ClipResult(inside, to_test)

    def _clip(self, polygon: "Polygon", inside: List["Polygon"],
              outside: List["Polygon"], ids: Iterator[int]) -> None:
        # walk self's edge planes: whatever falls in front of an edge is
        # outside self, whatever survives every edge is inside
        if not polygon.is_convex:
            for piece in polygon.tessellate():
                self._clip(piece, inside, outside, ids)
            return
        coplanar = []
        for plane in self.edge_planes:
            back = []
            polygon._split(plane, coplanar, outside, back, ids)
            if not back:
                return
            polygon = back[0]
        inside.append(polygon)

    ## merging
    ## -------

    def join(self, other: "Polygon") -> Optional["Polygon"]:
        """Merge with an adjacent polygon, or return ``None``.

        Two halves of one split (same nonzero fragment id) may always be
        joined.  Original polygons (fragment id 0) may be joined when
        their materials match and their planes are equal.  The polygons
        must share exactly two vertices; three or more shared vertices
        are treated as unmergeable.
        """
        if self.fragment_id == 0:
            if other.fragment_id != 0:
                return None
            if self.material != other.material:
                return None
            if not self.plane.is_equal(other.plane):
                return None
        elif self.fragment_id != other.fragment_id:
            return None
        return self._join_unchecked(other)

    def _join_unchecked(self, other: "Polygon") -> Optional["Polygon"]:
        assert self.material == other.material
        assert self.plane.is_equal(other.plane)

        va = list(self.vertices)
        vb = list(other.vertices)

        # find shared vertices
        joins = []
        for i, a in enumerate(va):
            for j, b in enumerate(vb):
                if b.is_equal(a):
                    joins.append((i, j))
                    break
        if len(joins) != 2:
            return None

        (a0, b0), (a1, b1) = joins
        if a1 == a0 + 1:
            result = va[a1 + 1:] + va[:a0]
        elif a0 == 0 and a1 == len(va) - 1:
            result = va[1:-1]
        else:
            return None
        join1 = len(result)
        if b1 == b0 + 1:
            result += vb[b1:] + vb[:b0 + 1]
        elif b0 == b1 + 1:
            result += vb[b0:] + vb[:b1 + 1]
        elif (b0 == 0 and b1 == len(vb) - 1) or (b1 == 0 and b0 == len(vb) - 1):
            result += vb
        else:
            return None
        join2 = len(result) - 1

        # drop seam vertices left collinear with their new neighbours
        def remove_if_redundant(index):
            prev = len(result) - 1 if index == 0 else index - 1
            da = (result[index].position - result[prev].position).normalized()
            db = (result[(index + 1) % len(result)].position -
                  result[index].position).normalized()
            if abs(da.dot(db) - 1.0) < epsilon:
                del result[index]

        remove_if_redundant(join2)
        remove_if_redundant(join1)

        if len(result) < 3 or vertices_are_degenerate(result):
            return None
        return Polygon(tuple(result), plane=self.plane,
                       is_convex=vertices_are_convex(result),
                       material=self.material,
                       fragment_id=self.fragment_id)

    ## tessellation
    ## ------------

    def tessellate(self) -> List["Polygon"]:
        """Break a concave polygon into convex pieces.

        Convex polygons are returned as they are.  Concave polygons are
        ear-clipped into triangles, and neighbouring triangles are then
        merged back together wherever the merge stays convex.
        """
        if self.is_convex:
            return [self]
        polygons = self.triangulate()
        i = len(polygons) - 1
        while i > 0:
            merged = polygons[i]._join_unchecked(polygons[i - 1])
            if merged is not None and merged.is_convex:
                polygons[i - 1] = merged
                del polygons[i]
            i -= 1
        return polygons

    def triangulate(self) -> List["Polygon"]:
        """Break the polygon into triangles.

        Convex polygons are fanned from their first vertex.  Concave
        polygons are flattened onto an axis plane and ear-clipped with
        ``mapbox-earcut``; malformed (for instance self-intersecting)
        input may come back only partly covered.
        """
        vertices = list(self.vertices)
        if len(vertices) < 4:
            return [self]

        triangles = []

        def add_triangle(tri):
            if vertices_are_degenerate(tri):
                return False
            triangles.append(Polygon(tuple(tri), plane=self.plane,
                                     is_convex=True,
                                     material=self.material,
                                     fragment_id=self.fragment_id))
            return True

        if self.is_convex:
            v0 = vertices[0]
            v1 = vertices[1]
            for v2 in vertices[2:]:
                add_triangle([v0, v1, v2])
                v1 = v2
            return triangles

        flattening = FlatteningPlane.from_normal(self.plane.normal)
        flat = []
        for v in vertices:
            p = flattening.flatten_point(v.position)
            flat.append((p.x, p.y))
        indices = _earcut.triangulate_float64(
            np.asarray(flat, dtype=np.float64),
            np.asarray([len(flat)], dtype=np.uint32))
        for i in range(0, len(indices), 3):
            tri = [vertices[indices[i]],
                   vertices[indices[i + 1]],
                   vertices[indices[i + 2]]]
            a, b, c = (v.position for v in tri)
            # earcut winds triangles in the projected plane
            if (b - a).cross(c - a).dot(self.plane.normal) < 0:
                tri.reverse()
            add_triangle(tri)
        if len(indices) // 3 < len(vertices) - 2:
            logger.debug('ear clipping left %d of %d triangles uncovered',
                         len(vertices) - 2 - len(indices) // 3,
                         len(vertices) - 2)
        return triangles


__all__ = [
    'COPLANAR',
    'FRONT',
    'BACK',
    'SPANNING',
    'Polygon',
    'SplitResult',
    'ClipResult',
    'vertices_are_degenerate',
    'vertices_are_convex',
]
