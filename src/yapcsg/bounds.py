## axis-aligned bounding boxes for yapCSG
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


"""axis-aligned bounding boxes for yapCSG

A ``Bounds`` spans the "lower bottom left" to "upper top right" corners
of a figure.  The ``EMPTY_BOUNDS`` sentinel has ``max < min`` on every
axis, so that it is the identity for ``union()`` and overlaps nothing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List

from yapcsg.geom import Vector, ZERO, vmax, vmin


@dataclass(frozen=True)
class Bounds:
    """Immutable axis-aligned bounding box."""

    min: Vector
    max: Vector

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> "Bounds":
        lo = Vector(math.inf, math.inf, math.inf)
        hi = Vector(-math.inf, -math.inf, -math.inf)
        for p in points:
            lo = vmin(lo, p)
            hi = vmax(hi, p)
        return cls(lo, hi)

    @classmethod
    def from_bounds(cls, bounds: Iterable["Bounds"]) -> "Bounds":
        lo = Vector(math.inf, math.inf, math.inf)
        hi = Vector(-math.inf, -math.inf, -math.inf)
        for b in bounds:
            lo = vmin(lo, b.min)
            hi = vmax(hi, b.max)
        return cls(lo, hi)

    @property
    def is_empty(self) -> bool:
        return (self.max.x < self.min.x or
                self.max.y < self.min.y or
                self.max.z < self.min.z)

    @property
    def size(self) -> Vector:
        return ZERO if self.is_empty else self.max - self.min

    @property
    def center(self) -> Vector:
        return ZERO if self.is_empty else self.min + self.size / 2

    @property
    def corners(self) -> List[Vector]:
        lo, hi = self.min, self.max
        return [
            lo,
            Vector(lo.x, hi.y, lo.z),
            Vector(hi.x, hi.y, lo.z),
            Vector(hi.x, lo.y, lo.z),
            Vector(lo.x, lo.y, hi.z),
            Vector(lo.x, hi.y, hi.z),
            hi,
            Vector(hi.x, lo.y, hi.z),
        ]

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(vmin(self.min, other.min), vmax(self.max, other.max))

    def intersection(self, other: "Bounds") -> "Bounds":
        return Bounds(vmax(self.min, other.min), vmin(self.max, other.max))

    def intersects(self, other: "Bounds") -> bool:
        """do the two boxes overlap?  Touching boxes count as overlapping."""
        return not (other.max.x < self.min.x or other.min.x > self.max.x or
                    other.max.y < self.min.y or other.min.y > self.max.y or
                    other.max.z < self.min.z or other.min.z > self.max.z)

    def contains_point(self, p: Vector) -> bool:
        return (self.min.x <= p.x <= self.max.x and
                self.min.y <= p.y <= self.max.y and
                self.min.z <= p.z <= self.max.z)

    def translated(self, v: Vector) -> "Bounds":
        if self.is_empty:
            return self
        return Bounds(self.min + v, self.max + v)


EMPTY_BOUNDS = Bounds.from_points([])


__all__ = ['Bounds', 'EMPTY_BOUNDS']
