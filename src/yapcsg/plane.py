## oriented planes for yapCSG
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


"""oriented planes for yapCSG

A ``Plane`` is stored in Hessian normal form: a unit ``normal`` and a
distance ``w`` from the origin, so that ``normal.dot(p) == w`` for every
point ``p`` on the plane.  The side the normal points to is the plane's
"front".

Use the ``from_*`` class methods to build planes from untrusted data.
They return ``None`` rather than raising when the input cannot define a
plane.  Calling ``Plane(normal, w)`` directly skips validation, and is
reserved for callers that already hold a unit normal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from yapcsg.geom import (FlatteningPlane, Vector, epsilon,
                         face_normal_for_convex_points,
                         flattened_points_are_clockwise, points_are_convex,
                         points_are_degenerate)


@dataclass(frozen=True)
class Plane:
    """Immutable oriented plane, ``normal . p = w``."""

    normal: Vector
    w: float

    def __post_init__(self):
        assert self.normal.is_normalized, 'plane normal must be unit length'

    @classmethod
    def from_normal(cls, normal: Vector, w: float) -> Optional["Plane"]:
        """plane from a (not necessarily unit) normal and an offset"""
        length = normal.length
        if not math.isfinite(length) or length <= epsilon:
            return None
        return cls(normal / length, w)

    @classmethod
    def from_point(cls, normal: Vector, point: Vector) -> Optional["Plane"]:
        """plane through ``point`` with the given (not necessarily unit) normal"""
        length = normal.length
        if not math.isfinite(length) or length <= epsilon:
            return None
        normal = normal / length
        return cls(normal, normal.dot(point))

    @classmethod
    def from_points(cls, points: Sequence[Vector]) -> Optional["Plane"]:
        """Return the plane of a ring of coplanar points, or ``None``.

        The ring may be convex or concave.  The normal direction assumes
        the points are wound anticlockwise.  ``None`` is returned for
        fewer than three points, for degenerate rings and for rings whose
        points do not all lie on a single plane.
        """
        if len(points) < 3 or points_are_degenerate(points):
            return None
        if len(points) == 3:
            normal = (points[1] - points[0]).cross(points[2] - points[1])
            return cls.from_point(normal, points[0])
        plane = cls._from_points_unchecked(points)
        for p in points:
            if not plane.contains_point(p):
                return None
        return plane

    @classmethod
    def _from_points_unchecked(cls, points: Sequence[Vector],
                               convex: Optional[bool] = None) -> "Plane":
        normal = face_normal_for_convex_points(points)
        if convex is None:
            convex = points_are_convex(points)
        if not convex:
            # the largest cross product of a concave ring may come from a
            # reflex corner, so orient by the winding of the whole ring
            flattening = FlatteningPlane.from_points(points)
            flattened = [flattening.flatten_point(p) for p in points]
            flattened_normal = face_normal_for_convex_points(flattened)
            clockwise = flattened_points_are_clockwise(flattened)
            if (flattened_normal.z > 0) == clockwise:
                normal = -normal
        return cls(normal, normal.dot(points[0]))

    def inverted(self) -> "Plane":
        """the same plane, facing the other way"""
        return Plane(-self.normal, -self.w)

    def distance(self, p: Vector) -> float:
        """signed distance from the plane to ``p``, positive in front"""
        return self.normal.dot(p) - self.w

    def contains_point(self, p: Vector) -> bool:
        return abs(self.normal.dot(p) - self.w) < epsilon

    def is_equal(self, other: "Plane", precision: float = epsilon) -> bool:
        """approximate equality of both orientation and offset"""
        return (abs(self.w - other.w) < precision and
                self.normal.is_equal(other.normal, precision))


XY = Plane(Vector(0.0, 0.0, 1.0), 0.0)
XZ = Plane(Vector(0.0, 1.0, 0.0), 0.0)
YZ = Plane(Vector(1.0, 0.0, 0.0), 0.0)


__all__ = ['Plane', 'XY', 'XZ', 'YZ']
