## polygon vertices for yapCSG
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


"""polygon vertices for yapCSG"""

from __future__ import annotations

from dataclasses import dataclass

from yapcsg.geom import Vector, ZERO, epsilon


@dataclass(frozen=True)
class Vertex:
    """A polygon vertex: position, surface normal and texture coordinate.

    The position is quantized on construction so that vertices produced
    by different arithmetic paths still compare equal, and the normal is
    renormalized.
    """

    position: Vector
    normal: Vector = ZERO
    texcoord: Vector = ZERO

    def __post_init__(self):
        object.__setattr__(self, 'position', self.position.quantized())
        object.__setattr__(self, 'normal', self.normal.normalized())

    def inverted(self) -> "Vertex":
        """flip the orientation-dependent data (the normal)"""
        return Vertex(self.position, -self.normal, self.texcoord)

    def lerp(self, other: "Vertex", t: float) -> "Vertex":
        """interpolate position, normal and texture coordinate together"""
        return Vertex(self.position.lerp(other.position, t),
                      self.normal.lerp(other.normal, t),
                      self.texcoord.lerp(other.texcoord, t))

    def is_equal(self, other: "Vertex", precision: float = epsilon) -> bool:
        return (self.position.is_equal(other.position, precision) and
                self.normal.is_equal(other.normal, precision) and
                self.texcoord.is_equal(other.texcoord, precision))

    def translated(self, v: Vector) -> "Vertex":
        return Vertex(self.position + v, self.normal, self.texcoord)

    def rotated(self, m) -> "Vertex":
        """rotate by a ``yapcsg.xform.Matrix`` rotation"""
        return Vertex(m.rotate(self.position), m.rotate(self.normal),
                      self.texcoord)

    def scaled(self, v: Vector) -> "Vertex":
        """per-axis scale; normals are scaled by the inverse factors"""
        vn = Vector(1.0 / v.x, 1.0 / v.y, 1.0 / v.z)
        return Vertex(self.position.scaled(v), self.normal.scaled(vn),
                      self.texcoord)

    def scaled_uniform(self, f: float) -> "Vertex":
        return Vertex(self.position * f, self.normal, self.texcoord)


__all__ = ['Vertex']
