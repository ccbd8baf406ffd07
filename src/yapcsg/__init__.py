# -*- coding: utf-8 -*-
import logging

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yapCSG")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from yapcsg.geom import Vector, epsilon  # noqa: E402
from yapcsg.bounds import Bounds  # noqa: E402
from yapcsg.plane import Plane  # noqa: E402
from yapcsg.vertex import Vertex  # noqa: E402
from yapcsg.poly import Polygon  # noqa: E402
from yapcsg.bsp import BSPNode, ClipRule  # noqa: E402
from yapcsg.mesh import Mesh, mesh_contains_point, surfacearea, volumeof  # noqa: E402
from yapcsg.csg import (difference, intersect, intersection, mesh_boolean,  # noqa: E402
                        stencil, stencil_all, subtract, union, union_all, xor,
                        xor_all)

__all__ = [
    'Vector',
    'epsilon',
    'Bounds',
    'Plane',
    'Vertex',
    'Polygon',
    'BSPNode',
    'ClipRule',
    'Mesh',
    'volumeof',
    'surfacearea',
    'mesh_contains_point',
    'union',
    'subtract',
    'intersect',
    'xor',
    'stencil',
    'union_all',
    'difference',
    'intersection',
    'xor_all',
    'stencil_all',
    'mesh_boolean',
]
