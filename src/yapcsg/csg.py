## boolean operations on meshes for yapCSG
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


"""boolean operations on meshes for yapCSG

====================
OVERVIEW
====================

Five binary operators combine two closed meshes ``a`` and ``b``:

``union(a, b)``
    everything inside either mesh
``subtract(a, b)``
    what is inside ``a`` but not inside ``b``
``intersect(a, b)``
    what is inside both
``xor(a, b)``
    what is inside exactly one of them
``stencil(a, b)``
    the shape of ``a``, with the parts of its surface that lie inside
    ``b`` taking on ``b``'s material

Each operator first sets aside the polygons whose bounding boxes miss
the other mesh entirely; those cannot be affected by the operation.  A
BSP tree is only built for a side when there is something to clip
against it, and always from that side's complete polygon list.

``union_all``, ``difference``, ``intersection``, ``xor_all`` and
``stencil_all`` reduce any number of meshes, and ``mesh_boolean``
dispatches on an operation name.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from yapcsg.bounds import Bounds
from yapcsg.bsp import BSPNode, ClipRule
from yapcsg.mesh import Mesh
from yapcsg.poly import Polygon

logger = logging.getLogger(__name__)

GT = ClipRule.GREATER_THAN
GTE = ClipRule.GREATER_THAN_OR_EQUAL
LT = ClipRule.LESS_THAN
LTE = ClipRule.LESS_THAN_OR_EQUAL


def _bounds_test(bounds: Bounds,
                 polygons: Sequence[Polygon]) -> Tuple[List[Polygon], List[Polygon]]:
    """partition ``polygons`` into those that touch ``bounds`` and the rest"""
    touching = []
    aside = []
    for p in polygons:
        if p.bounds.intersects(bounds):
            touching.append(p)
        else:
            aside.append(p)
    return touching, aside


def _inverted(polygons: Iterable[Polygon]) -> List[Polygon]:
    return [p.inverted() for p in polygons]


def _log(name: str, a: Mesh, b: Mesh, result: Mesh) -> Mesh:
    logger.debug('%s: %d and %d polygons in, %d out', name,
                 len(a.polygons), len(b.polygons), len(result.polygons))
    return result


## binary operators
## ----------------

def union(a: Mesh, b: Mesh) -> Mesh:
    """Return a mesh enclosing the volume of both ``a`` and ``b``.

    Faces the two meshes share, facing the same way, are kept once.
    """
    if not a.bounds.intersects(b.bounds):
        return a.merge(b)
    ap, aout = _bounds_test(b.bounds, a.polygons)
    bp, bout = _bounds_test(a.bounds, b.polygons)
    if ap:
        ap = BSPNode(b.polygons).clip(ap, GT, True)
    if bp:
        bp = BSPNode(a.polygons).clip(bp, GTE, True)
    return _log('union', a, b, Mesh(aout + bout + ap + bp))


def subtract(a: Mesh, b: Mesh) -> Mesh:
    """Return a mesh enclosing the volume of ``a`` that is not inside ``b``."""
    if not a.bounds.intersects(b.bounds):
        return a
    ap, aout = _bounds_test(b.bounds, a.polygons)
    bp, _ = _bounds_test(a.bounds, b.polygons)
    if ap:
        ap = BSPNode(b.polygons).clip(ap, GT, False)
    if bp:
        bp = BSPNode(a.polygons).clip(bp, LT, True)
    return _log('subtract', a, b, Mesh(aout + ap + _inverted(bp)))


def intersect(a: Mesh, b: Mesh) -> Mesh:
    """Return a mesh enclosing the volume common to ``a`` and ``b``."""
    if not a.bounds.intersects(b.bounds):
        return Mesh([])
    ap, _ = _bounds_test(b.bounds, a.polygons)
    bp, _ = _bounds_test(a.bounds, b.polygons)
    if ap:
        ap = BSPNode(b.polygons).clip(ap, LT, False)
    if bp:
        bp = BSPNode(a.polygons).clip(bp, LTE, False)
    return _log('intersect', a, b, Mesh(ap + bp))


def xor(a: Mesh, b: Mesh) -> Mesh:
    """Return a mesh enclosing the volume inside exactly one of ``a`` and ``b``.

    The shared volume becomes a cavity, so the result is the union of
    ``a - b`` and ``b - a``.
    """
    if not a.bounds.intersects(b.bounds):
        return a.merge(b)
    ap, aout = _bounds_test(b.bounds, a.polygons)
    bp, bout = _bounds_test(a.bounds, b.polygons)
    ap1 = ap2 = bp1 = bp2 = []
    if ap:
        bsp = BSPNode(b.polygons)
        ap1 = bsp.clip(ap, GT, False)
        ap2 = bsp.clip(ap, LT, True)
    if bp:
        bsp = BSPNode(a.polygons)
        bp1 = bsp.clip(bp, LT, True)
        bp2 = bsp.clip(bp, GT, False)
    return _log('xor', a, b,
                Mesh(aout + ap1 + _inverted(bp1) +
                     bout + bp2 + _inverted(ap2)))


def stencil(a: Mesh, b: Mesh) -> Mesh:
    """Return ``a`` with its surface inside ``b`` recoloured.

    The shape of ``a`` is unchanged.  The parts of its surface that lie
    inside (or on the surface of) ``b`` take the material of ``b``'s
    first polygon near ``a``.
    """
    if not a.bounds.intersects(b.bounds):
        return a
    ap, aout = _bounds_test(b.bounds, a.polygons)
    if not ap:
        return a
    bp, _ = _bounds_test(a.bounds, b.polygons)
    bsp = BSPNode(b.polygons)
    outside = bsp.clip(ap, GT, False)
    inside = bsp.clip(ap, LTE, False)
    if bp:
        material = bp[0].material
        inside = [p.with_material(material) for p in inside]
    return _log('stencil', a, b, Mesh(aout + outside + inside))


## reducers
## --------

def _clusters(meshes: Sequence[Mesh]) -> List[List[Mesh]]:
    # group meshes whose bounds overlap, transitively
    groups = [[m] for m in meshes]
    bounds = [m.bounds for m in meshes]
    i = 0
    while i < len(groups):
        j = i + 1
        while j < len(groups):
            if bounds[i].intersects(bounds[j]):
                groups[i].extend(groups.pop(j))
                bounds[i] = bounds[i].union(bounds.pop(j))
                j = i + 1
            else:
                j += 1
        i += 1
    return groups


def _merge_all(meshes: Iterable[Mesh]) -> Mesh:
    polygons = []
    for m in meshes:
        polygons.extend(m.polygons)
    return Mesh(polygons)


def _reduce_clusters(meshes: Iterable[Mesh], op) -> Mesh:
    results = []
    for group in _clusters(list(meshes)):
        acc = group[0]
        for m in group[1:]:
            acc = op(acc, m)
        results.append(acc)
    return _merge_all(results)


def union_all(meshes: Iterable[Mesh]) -> Mesh:
    """union of any number of meshes; disjoint groups are simply merged"""
    return _reduce_clusters(meshes, union)


def xor_all(meshes: Iterable[Mesh]) -> Mesh:
    """xor of any number of meshes; disjoint groups are simply merged"""
    return _reduce_clusters(meshes, xor)


def _fold(meshes: Iterable[Mesh], op) -> Mesh:
    meshes = list(meshes)
    if not meshes:
        return Mesh([])
    acc = meshes[0]
    for m in meshes[1:]:
        acc = op(acc, m)
    return acc


def difference(meshes: Iterable[Mesh]) -> Mesh:
    """subtract every following mesh from the first"""
    return _fold(meshes, subtract)


def intersection(meshes: Iterable[Mesh]) -> Mesh:
    """the volume common to every mesh"""
    return _fold(meshes, intersect)


def stencil_all(meshes: Iterable[Mesh]) -> Mesh:
    """stencil every following mesh onto the first"""
    return _fold(meshes, stencil)


## dispatch
## --------

_OPERATIONS = {
    'union': union,
    'subtract': subtract,
    'difference': subtract,
    'intersect': intersect,
    'intersection': intersect,
    'xor': xor,
    'stencil': stencil,
}


def mesh_boolean(a: Mesh, b: Mesh, operation: str) -> Mesh:
    """Combine two meshes using the named boolean ``operation``.

    ``operation`` is one of ``'union'``, ``'subtract'`` (or
    ``'difference'``), ``'intersect'`` (or ``'intersection'``),
    ``'xor'`` and ``'stencil'``.
    """
    try:
        op = _OPERATIONS[operation]
    except (KeyError, TypeError):
        raise ValueError(f'unsupported boolean operation {operation!r}') from None
    return op(a, b)


__all__ = [
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
