## rotation matrices and rigid transforms for yapCSG
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


"""rotation matrices and scale/rotate/translate transforms for yapCSG"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import cos, radians, sin

from yapcsg.geom import Vector, ZERO, close, epsilon, scale_is_flipped

## a matrix is represented as a list of four row lists.  Vectors are
## treated as column vectors, so ``m.mul(v)`` computes Mv.  A Vector
## is lifted to homogeneous coordinates with w=1 when multiplied by a
## full matrix, and with w=0 (no translation) by ``rotate()``.


class Matrix:
    """4x4 transformation matrix for 3D homogeneous coordinates"""

    def __init__(self, a=None):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]

        if isinstance(a, Matrix):
            for i in range(4):
                self.m[i] = list(a.m[i])
        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(len(r) == 4 for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i * 4 + j])
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(self.m[0], self.m[1],
                                            self.m[2], self.m[3])

    def __eq__(self, other):
        return isinstance(other, Matrix) and self.m == other.m

    def __hash__(self):
        return hash(tuple(tuple(r) for r in self.m))

    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if isinstance(x, bool) or not isinstance(x, (int, float)):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[i][j] = float(x)

    def getrow(self, i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return list(self.m[i])

    def getcol(self, j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]

    def transpose(self):
        return Matrix([self.getcol(j) for j in range(4)])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # Vector, compute Mx with x treated as a point.

    def mul(self, x):
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                row = self.m[i]
                for j in range(4):
                    result.m[i][j] = sum(row[k] * x.m[k][j] for k in range(4))
            return result
        elif isinstance(x, Vector):
            r = [row[0] * x.x + row[1] * x.y + row[2] * x.z + row[3]
                 for row in self.m]
            if close(r[3], 1.0):
                return Vector(r[0], r[1], r[2])
            return Vector(r[0] / r[3], r[1] / r[3], r[2] / r[3])
        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def rotate(self, v):
        """apply only the upper 3x3 block, as for a direction"""
        m = self.m
        return Vector(m[0][0] * v.x + m[0][1] * v.y + m[0][2] * v.z,
                      m[1][0] * v.x + m[1][1] * v.y + m[1][2] * v.z,
                      m[2][0] * v.x + m[2][1] * v.y + m[2][2] * v.z)


IDENTITY = Matrix()


# return the generalized 4x4 arbitrary axis rotation matrix, with the
# angle in degrees
def Rotation(axis, angle, inverse=False):
    m = axis.length
    if m < epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    u = axis / m

    if inverse:
        angle *= -1.0
    rad = radians(angle % 360.0)

    ux, uy, uz = u.x, u.y, u.z

    cang = cos(rad)
    cmin = 1.0 - cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang, 0],
         [uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
         [uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin, 0],
         [0, 0, 0, 1]]

    return Matrix(R)


@dataclass(frozen=True)
class Transform:
    """Scale, then rotate, then translate."""

    offset: Vector = ZERO
    rotation: Matrix = field(default_factory=Matrix)
    scale: Vector = Vector(1.0, 1.0, 1.0)

    @property
    def is_flipped(self):
        """does the scale mirror the geometry (an odd number of negative axes)?"""
        return scale_is_flipped(self.scale)

    def apply(self, p):
        """transform a point"""
        return self.rotation.rotate(p.scaled(self.scale)) + self.offset


__all__ = ['Matrix', 'IDENTITY', 'Rotation', 'Transform']
