"""shape builders shared by the yapCSG tests"""

import math

from yapcsg.geom import Vector
from yapcsg.mesh import Mesh
from yapcsg.poly import Polygon

## corner i of a cube has x, y, z bits (i & 1, i & 2, i & 4)
_CUBE_FACES = [
    [0, 4, 6, 2],  # -x
    [1, 3, 7, 5],  # +x
    [0, 1, 5, 4],  # -y
    [2, 6, 7, 3],  # +y
    [0, 2, 3, 1],  # -z
    [4, 5, 7, 6],  # +z
]


def cube(center=Vector(0, 0, 0), size=1.0, material=None):
    """axis-aligned cube with outward-facing quads"""
    if not isinstance(size, Vector):
        size = Vector(size, size, size)
    corners = []
    for i in range(8):
        corners.append(Vector(center.x + size.x * ((i & 1) - 0.5),
                              center.y + size.y * (((i >> 1) & 1) - 0.5),
                              center.z + size.z * (((i >> 2) & 1) - 0.5)))
    return Mesh(Polygon.from_points([corners[i] for i in face], material)
                for face in _CUBE_FACES)


def sphere(center=Vector(0, 0, 0), radius=1.0, slices=16, stacks=8,
           material=None):
    """UV sphere: triangle fans at the poles, planar quads elsewhere"""
    def pt(i, j):
        if i == 0:
            return center + Vector(0, 0, radius)
        if i == stacks:
            return center + Vector(0, 0, -radius)
        theta = math.pi * i / stacks
        phi = 2.0 * math.pi * j / slices
        return center + Vector(radius * math.sin(theta) * math.cos(phi),
                               radius * math.sin(theta) * math.sin(phi),
                               radius * math.cos(theta))

    polygons = []
    for i in range(stacks):
        for j in range(slices):
            if i == 0:
                points = [pt(0, j), pt(1, j), pt(1, j + 1)]
            elif i == stacks - 1:
                points = [pt(i, j), pt(stacks, j), pt(i, j + 1)]
            else:
                points = [pt(i, j), pt(i + 1, j), pt(i + 1, j + 1), pt(i, j + 1)]
            polygons.append(Polygon.from_points(points, material))
    return Mesh(polygons)


def square(center=Vector(0, 0, 0), size=1.0, material=None):
    """single square polygon in the XY plane facing +z"""
    h = size / 2.0
    return Polygon.from_points([center + Vector(-h, -h),
                                center + Vector(h, -h),
                                center + Vector(h, h),
                                center + Vector(-h, h)], material)
