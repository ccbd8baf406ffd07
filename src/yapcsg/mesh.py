## polygon meshes and mesh measurement for yapCSG
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


"""polygon meshes and mesh measurement for yapCSG

A ``Mesh`` is an immutable collection of convex ``Polygon`` instances.
Concave polygons handed to the constructor are tessellated, so every
polygon of a mesh can go straight into a BSP tree.

A mesh is only expected to be closed (watertight, outward facing)
where a boolean operation or one of the measurement functions below
needs it to be.
"""

from __future__ import annotations

import logging
from typing import Dict, Hashable, Iterable, List, Tuple

import numpy as np

from yapcsg.bounds import Bounds
from yapcsg.geom import FlatteningPlane, Vector, epsilon
from yapcsg.poly import Polygon, _flat_contains

logger = logging.getLogger(__name__)


def _csg():
    from yapcsg import csg as _c
    return _c


class Mesh:
    """An immutable collection of convex polygons."""

    def __init__(self, polygons: Iterable[Polygon] = ()):
        result = []
        for p in polygons:
            if not isinstance(p, Polygon):
                raise ValueError(f'bad thing passed to Mesh(): {p!r}')
            if p.is_convex:
                result.append(p)
            else:
                result.extend(p.tessellate())
        self._polygons: Tuple[Polygon, ...] = tuple(result)
        self._bounds = None

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return self._polygons

    @property
    def bounds(self) -> Bounds:
        if self._bounds is None:
            self._bounds = Bounds.from_bounds(p.bounds for p in self._polygons)
        return self._bounds

    @property
    def materials(self) -> List[Hashable]:
        """distinct materials, in order of first use"""
        return list(self.polygons_by_material())

    @property
    def volume(self) -> float:
        return volumeof(self)

    def __len__(self):
        return len(self._polygons)

    def __iter__(self):
        return iter(self._polygons)

    def __eq__(self, other):
        if not isinstance(other, Mesh):
            return NotImplemented
        return self._polygons == other._polygons

    def __hash__(self):
        return hash(self._polygons)

    def __repr__(self):
        return f'Mesh({len(self._polygons)} polygons)'

    def polygons_by_material(self) -> Dict[Hashable, List[Polygon]]:
        groups: Dict[Hashable, List[Polygon]] = {}
        for p in self._polygons:
            groups.setdefault(p.material, []).append(p)
        return groups

    def replacing(self, old: Hashable, new: Hashable) -> "Mesh":
        """return a mesh with every ``old`` material changed to ``new``"""
        return Mesh(p.with_material(new) if p.material == old else p
                    for p in self._polygons)

    def merge(self, other: "Mesh") -> "Mesh":
        """Combine the polygons of two meshes without any clipping.

        Only meaningful for meshes that do not intersect.
        """
        return Mesh(self._polygons + other._polygons)

    def inverted(self) -> "Mesh":
        return Mesh(p.inverted() for p in self._polygons)

    ## transforms

    def translated(self, v: Vector) -> "Mesh":
        return Mesh(p.translated(v) for p in self._polygons)

    def rotated(self, m) -> "Mesh":
        return Mesh(p.rotated(m) for p in self._polygons)

    def scaled(self, v) -> "Mesh":
        return Mesh(p.scaled(v) for p in self._polygons)

    def transformed(self, t) -> "Mesh":
        return Mesh(p.transformed(t) for p in self._polygons)

    ## booleans, see yapcsg.csg

    def union(self, other: "Mesh") -> "Mesh":
        return _csg().union(self, other)

    def subtract(self, other: "Mesh") -> "Mesh":
        return _csg().subtract(self, other)

    def intersect(self, other: "Mesh") -> "Mesh":
        return _csg().intersect(self, other)

    def xor(self, other: "Mesh") -> "Mesh":
        return _csg().xor(self, other)

    def stencil(self, other: "Mesh") -> "Mesh":
        return _csg().stencil(self, other)


def _triangle_arrays(mesh: Mesh):
    # fan every (convex) polygon into triangles, as three (N, 3) arrays
    p0 = []
    p1 = []
    p2 = []
    for polygon in mesh.polygons:
        points = [tuple(p) for p in polygon.positions]
        for i in range(1, len(points) - 1):
            p0.append(points[0])
            p1.append(points[i])
            p2.append(points[i + 1])
    return (np.asarray(p0, dtype=float).reshape(-1, 3),
            np.asarray(p1, dtype=float).reshape(-1, 3),
            np.asarray(p2, dtype=float).reshape(-1, 3))


def volumeof(mesh: Mesh) -> float:
    """
    Calculate the volume enclosed by a mesh.

    Uses the divergence theorem: each triangle (p0, p1, p2) contributes
    the signed volume (1/6) * dot(p0, cross(p1, p2)) of the tetrahedron
    it forms with the origin.  The mesh must be closed; outward-facing
    polygons give a positive volume and cavities count negatively.
    """
    if not mesh.polygons:
        return 0.0
    p0, p1, p2 = _triangle_arrays(mesh)
    return float(np.einsum('ij,ij->i', p0, np.cross(p1, p2)).sum() / 6.0)


def surfacearea(mesh: Mesh) -> float:
    """
    given a mesh, return the total area of its polygons
    """
    if not mesh.polygons:
        return 0.0
    p0, p1, p2 = _triangle_arrays(mesh)
    cross = np.cross(p1 - p0, p2 - p0)
    return float(np.linalg.norm(cross, axis=1).sum() / 2.0)


# skewed so that rays rarely pass exactly through edges or vertices of
# axis-aligned geometry
_RAY_DIRECTIONS = (
    Vector(0.5773, 0.5774, 0.5775).normalized(),
    Vector(-0.6123, 0.3536, 0.7071).normalized(),
    Vector(0.2673, -0.8018, -0.5345).normalized(),
)


def _ray_crossings(mesh: Mesh, p: Vector, direction: Vector) -> int:
    count = 0
    for polygon in mesh.polygons:
        plane = polygon.plane
        denom = plane.normal.dot(direction)
        if abs(denom) < epsilon:
            continue
        t = (plane.w - plane.normal.dot(p)) / denom
        if t <= epsilon:
            continue
        hit = p + direction * t
        flattening = FlatteningPlane.from_normal(plane.normal)
        ring = [flattening.flatten_point(v.position) for v in polygon.vertices]
        if _flat_contains(ring, flattening.flatten_point(hit)):
            count += 1
    return count


def mesh_contains_point(mesh: Mesh, p: Vector) -> bool:
    """
    Is ``p`` inside the closed mesh?

    Casts three skewed rays from ``p`` and takes the majority vote of
    their crossing parities.  Points on the surface may go either way.
    """
    if not mesh.polygons or not mesh.bounds.contains_point(p):
        return False
    votes = sum(_ray_crossings(mesh, p, d) % 2 for d in _RAY_DIRECTIONS)
    return votes >= 2


__all__ = ['Mesh', 'volumeof', 'surfacearea', 'mesh_contains_point']
