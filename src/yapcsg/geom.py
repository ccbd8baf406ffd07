## foundational vector math and tolerance predicates for yapCSG
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

"""foundational vector math and tolerance predicates for **yapCSG**

====================
OVERVIEW
====================

The yapcsg.geom module provides the constants, the ``Vector`` value
type and the point-ring predicates that the rest of **yapCSG** is
built on.

constants
=========

yapcsg.geom provides the "constants" ``epsilon`` and
``quantize_epsilon``.  Redefine these at your peril.

``epsilon`` (1E-6) gates every approximate geometric predicate:
coplanarity, parallelism, degeneracy and "is zero length" tests.

``quantize_epsilon`` (1E-11) is the grid that vertex positions are
snapped to on construction, so that geometrically identical vertices
compare and hash equal despite floating point round-off.  It must never
be used for geometric predicates.

vectors
=======

A ``Vector`` is an immutable ``(x, y, z)`` triple of floats.  It is
used both for points and for directions.  Equality is exact; use
``Vector.is_equal()`` for epsilon comparison.

point rings
===========

Polygons are described by rings of points, where the last point
implicitly connects back to the first.  ``points_are_degenerate()``
and ``points_are_convex()`` classify such rings, and
``face_normal_for_convex_points()`` derives a surface normal for them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence

## constants
epsilon = 1e-6
quantize_epsilon = 1e-11
_quantize_digits = 11

# edges shorter than this, or pairs of edges that double back on each
# other to within this tolerance, make a ring degenerate
degenerate_threshold = 1e-10


## operations on scalars
## -----------------------

def quantize(value: float) -> float:
    """snap ``value`` onto the ``quantize_epsilon`` grid

    This is the same 1e-11 grid as ``round(value / quantize_epsilon) *
    quantize_epsilon``, computed in decimal so the result stays exact:
    values such as 0.5 or 0.3 come back as the nearest float to the
    decimal value.
    """
    # adding 0.0 turns -0.0 and ints into plain floats
    return round(value, _quantize_digits) + 0.0


def close(a: float, b: float) -> bool:
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


## vectors
## -------

@dataclass(frozen=True)
class Vector:
    """Immutable 3D point or direction."""

    x: float
    y: float
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, c: float) -> "Vector":
        return Vector(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> "Vector":
        return Vector(self.x / c, self.y / c, self.z / c)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector") -> "Vector":
        return Vector(self.y * other.z - self.z * other.y,
                      self.z * other.x - self.x * other.z,
                      self.x * other.y - self.y * other.x)

    @property
    def length_squared(self) -> float:
        return self.dot(self)

    @property
    def length(self) -> float:
        return math.sqrt(self.dot(self))

    @property
    def is_normalized(self) -> bool:
        return abs(self.length_squared - 1.0) < epsilon

    def normalized(self) -> "Vector":
        """Return a unit vector in the same direction.

        A zero-length vector is returned unchanged, since it has no
        direction to preserve.
        """
        length = self.length
        if length == 0.0:
            return self
        return self / length

    def lerp(self, other: "Vector", t: float) -> "Vector":
        """linearly interpolate from ``self`` (t=0) to ``other`` (t=1)"""
        return self + (other - self) * t

    def scaled(self, other: "Vector") -> "Vector":
        """component-wise multiplication"""
        return Vector(self.x * other.x, self.y * other.y, self.z * other.z)

    def quantized(self) -> "Vector":
        return Vector(quantize(self.x), quantize(self.y), quantize(self.z))

    def is_equal(self, other: "Vector", precision: float = epsilon) -> bool:
        """approximate equality, per component"""
        return (abs(self.x - other.x) < precision and
                abs(self.y - other.y) < precision and
                abs(self.z - other.z) < precision)


ZERO = Vector(0.0, 0.0, 0.0)
UNIT_Z = Vector(0.0, 0.0, 1.0)


def vmin(a: Vector, b: Vector) -> Vector:
    """component-wise minimum"""
    return Vector(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))


def vmax(a: Vector, b: Vector) -> Vector:
    """component-wise maximum"""
    return Vector(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))


def scale_is_flipped(scale: Vector) -> bool:
    """does scaling by ``scale`` mirror geometry (an odd number of negative axes)?"""
    flipped = scale.x < 0
    if scale.y < 0:
        flipped = not flipped
    if scale.z < 0:
        flipped = not flipped
    return flipped


## point ring predicates
## ---------------------

def points_are_degenerate(points: Sequence[Vector]) -> bool:
    """Return ``True`` if a ring of points is degenerate.

    A ring is degenerate if any edge (including the closing edge from
    the last point back to the first) is shorter than
    ``degenerate_threshold``, or if the path doubles back on itself,
    which is to say two consecutive unit edge directions are
    anti-parallel.
    """
    count = len(points)
    if count < 2:
        return False
    ab = points[0] - points[-1]
    length = ab.length
    if length <= degenerate_threshold:
        return True
    ab = ab / length
    for i in range(count):
        b = points[i]
        c = points[(i + 1) % count]
        bc = c - b
        length = bc.length
        if length <= degenerate_threshold:
            return True
        bc = bc / length
        if abs(ab.dot(bc) + 1.0) <= degenerate_threshold:
            return True
        ab = bc
    return False


def points_are_convex(points: Sequence[Vector]) -> bool:
    """Return ``True`` if a non-degenerate ring of points is convex.

    Cross products of consecutive edges that are too small to be
    reliable (magnitude below ``epsilon``) are ignored, so collinear
    points do not prevent a ring from being convex.
    """
    count = len(points)
    if count < 4:
        return count > 2
    normal: Optional[Vector] = None
    ab = points[0] - points[-1]
    for i in range(count):
        b = points[i]
        c = points[(i + 1) % count]
        bc = c - b
        n = ab.cross(bc)
        length = n.length
        if length > epsilon:
            n = n / length
            if normal is None:
                normal = n
            elif n.dot(normal) < 0:
                return False
        ab = bc
    return True


def face_normal_for_convex_points(points: Sequence[Vector]) -> Vector:
    """Return the surface normal of a ring of points.

    The normal is the largest of the cross products ``(b-a)x(c-b)`` taken
    over every consecutive triple in the ring, normalized.  For a
    concave ring the result may point the wrong way; see
    ``Plane.from_points()``.
    """
    count = len(points)
    if count < 2:
        return UNIT_Z
    if count == 2:
        ab = points[1] - points[0]
        return ab.cross(UNIT_Z).cross(ab)
    b = points[0]
    ab = b - points[-1]
    best_length_squared = 0.0
    best = None
    for c in points:
        bc = c - b
        normal = ab.cross(bc)
        length_squared = normal.length_squared
        if length_squared > best_length_squared:
            best_length_squared = length_squared
            best = normal / math.sqrt(length_squared)
        b = c
        ab = bc
    return best if best is not None else UNIT_Z


def flattened_points_are_clockwise(points: Sequence[Vector]) -> bool:
    """Return ``True`` if a ring of points in the XY plane winds clockwise.

    A closing point coincident with the first point is ignored.
    """
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    if len(points) < 3:
        return False
    total = 0.0
    a = points[-1]
    for b in points:
        total += (b.x - a.x) * (b.y + a.y)
        a = b
    # abs(total / 2) is the area of the ring
    return total > 0


class FlatteningPlane(Enum):
    """Axis-aligned planes used to project 3D rings into 2D."""

    XY = 'xy'
    XZ = 'xz'
    YZ = 'yz'

    @classmethod
    def from_normal(cls, normal: Vector) -> "FlatteningPlane":
        x, y, z = abs(normal.x), abs(normal.y), abs(normal.z)
        if x > y and x > z:
            return cls.YZ
        if y > x and y > z:
            return cls.XZ
        return cls.XY

    @classmethod
    def from_points(cls, points: Sequence[Vector]) -> "FlatteningPlane":
        """pick the plane spanned by the two largest extents of ``points``"""
        lo = points[0]
        hi = points[0]
        for p in points[1:]:
            lo = vmin(lo, p)
            hi = vmax(hi, p)
        size = hi - lo
        if size.x > size.y:
            return cls.XZ if size.z > size.y else cls.XY
        return cls.YZ if size.z > size.x else cls.XY

    def flatten_point(self, p: Vector) -> Vector:
        if self is FlatteningPlane.YZ:
            return Vector(p.y, p.z)
        if self is FlatteningPlane.XZ:
            return Vector(p.x, p.z)
        return Vector(p.x, p.y)


__all__ = [
    'epsilon',
    'quantize_epsilon',
    'degenerate_threshold',
    'quantize',
    'close',
    'Vector',
    'ZERO',
    'UNIT_Z',
    'vmin',
    'vmax',
    'scale_is_flipped',
    'points_are_degenerate',
    'points_are_convex',
    'face_normal_for_convex_points',
    'flattened_points_are_clockwise',
    'FlatteningPlane',
]
