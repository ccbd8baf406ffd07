## binary space partitioning trees for yapCSG
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


"""binary space partitioning trees for yapCSG

A ``BSPNode`` partitions space by a plane.  Polygons lying on that
plane and facing the same way are stored on the node; everything in
front of the plane goes to the ``front`` subtree, everything behind to
the ``back`` subtree.  A closed, outward-facing mesh inserted into a
tree therefore leaves its interior at the "back" leaves.

``BSPNode.clip()`` pushes a list of polygons down such a tree and
keeps the pieces that end up on the side selected by a ``ClipRule``.
The four rules differ only in what they do with pieces that lie on a
node's own surface.  This is what the boolean operators in
``yapcsg.csg`` are built from.

Both ``insert()`` and ``clip()`` walk the tree with an explicit stack,
so deep trees cannot run into the interpreter's recursion limit.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from enum import Enum
from typing import Iterable, List, Optional

from yapcsg.plane import Plane
from yapcsg.poly import Polygon

logger = logging.getLogger(__name__)


class ClipRule(Enum):
    """Which side of a BSP tree ``clip()`` keeps.

    ``GREATER_THAN`` keeps what is strictly outside the tree's solid,
    ``LESS_THAN`` what is strictly inside.  The ``_OR_EQUAL`` variants
    also keep surface pieces that coincide with the tree's own faces.
    """

    GREATER_THAN = 'gt'
    GREATER_THAN_OR_EQUAL = 'gte'
    LESS_THAN = 'lt'
    LESS_THAN_OR_EQUAL = 'lte'

    @property
    def keep_front(self) -> bool:
        return self in (ClipRule.GREATER_THAN, ClipRule.GREATER_THAN_OR_EQUAL)


def _add_polygon(total: List[Polygon], polygon: Polygon) -> None:
    # reassemble fragments of the same source polygon where possible
    if polygon.fragment_id != 0:
        for i in range(len(total) - 1, -1, -1):
            other = total[i]
            if other.fragment_id != polygon.fragment_id:
                continue
            merged = polygon._join_unchecked(other)
            if merged is not None:
                polygon = merged
                del total[i]
    total.append(polygon)


class BSPNode:
    """A node of a BSP tree.  Build one with ``BSPNode(polygons)``."""

    def __init__(self, polygons: Optional[Iterable[Polygon]] = None,
                 plane: Optional[Plane] = None):
        self.plane = plane
        self.polygons: List[Polygon] = []
        self.front: Optional[BSPNode] = None
        self.back: Optional[BSPNode] = None
        if polygons is not None:
            self.insert(polygons)

    def __repr__(self):
        return 'BSPNode(plane={!r}, polygons={})'.format(self.plane,
                                                          len(self.polygons))

    def all_polygons(self) -> List[Polygon]:
        """every polygon stored in the tree"""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            result.extend(node.polygons)
            if node.back is not None:
                stack.append(node.back)
            if node.front is not None:
                stack.append(node.front)
        return result

    def insert(self, polygons: Iterable[Polygon]) -> None:
        """Add polygons to the tree, splitting them as needed."""
        ids = itertools.count(1)
        stack = [(self, list(polygons))]
        while stack:
            node, polygons = stack.pop()
            if not polygons:
                continue
            if node.plane is None:
                node.plane = polygons[0].plane
            coplanar = []
            front = []
            back = []
            for polygon in polygons:
                polygon._split(node.plane, coplanar, front, back, ids)
            for polygon in coplanar:
                if node.plane.normal.dot(polygon.plane.normal) > 0:
                    node.polygons.extend(polygon.tessellate())
                else:
                    back.append(polygon)
            if front and node.front is None:
                node.front = BSPNode(plane=front[0].plane)
            if back and node.back is None:
                node.back = BSPNode(plane=back[0].plane)
            # the larger side is popped first
            if len(front) > len(back):
                stack.append((node.back, back))
                stack.append((node.front, front))
            else:
                stack.append((node.front, front))
                stack.append((node.back, back))

    def clip(self, polygons: Iterable[Polygon], keeping: ClipRule,
             clip_backfaces: bool) -> List[Polygon]:
        """Return the pieces of ``polygons`` on the side ``keeping`` selects.

        With ``clip_backfaces`` set, polygons lying on a node's plane but
        facing the opposite way are always treated as outside.
        Otherwise they are cut against the node's own polygons and their
        pieces are sorted according to ``keeping``.

        Fragment ids of the input are discarded, and fragments produced
        here are rejoined on the way out wherever possible.
        """
        ids = itertools.count(1)
        keep_front = keeping.keep_front
        total: List[Polygon] = []
        polygons = [replace(p, fragment_id=0) if p.fragment_id else p
                    for p in polygons]
        if self.plane is None:
            # an empty tree encloses nothing
            return polygons if keep_front else []

        stack = [(self, polygons)]
        while stack:
            node, polygons = stack.pop()
            if not polygons:
                continue
            coplanar = []
            front = []
            back = []
            for polygon in polygons:
                polygon._split(node.plane, coplanar, front, back, ids)
            for polygon in coplanar:
                self._route_coplanar(node, polygon, keeping, clip_backfaces,
                                     front, back, ids)
            if node.front is not None:
                stack.append((node.front, front))
            elif keep_front:
                for polygon in front:
                    _add_polygon(total, polygon)
            if node.back is not None:
                stack.append((node.back, back))
            elif not keep_front:
                for polygon in back:
                    _add_polygon(total, polygon)
        return total

    @staticmethod
    def _route_coplanar(node: "BSPNode", polygon: Polygon, keeping: ClipRule,
                        clip_backfaces: bool, front: List[Polygon],
                        back: List[Polygon], ids) -> None:
        same_facing = node.plane.normal.dot(polygon.plane.normal) > 0
        if not same_facing and clip_backfaces:
            front.append(polygon)
            return
        if same_facing and keeping in (ClipRule.GREATER_THAN_OR_EQUAL,
                                       ClipRule.LESS_THAN):
            front.append(polygon)
            return
        if not same_facing and keeping is ClipRule.GREATER_THAN:
            back.append(polygon)
            return

        inside = []
        outside = []
        for piece in polygon.tessellate():
            result = piece.clip_to(node.polygons, ids)
            inside.extend(result.inside)
            outside.extend(result.outside)
        if not same_facing and keeping is ClipRule.GREATER_THAN_OR_EQUAL:
            front.extend(inside)
            back.extend(outside)
        else:
            front.extend(outside)
            back.extend(inside)


__all__ = ['ClipRule', 'BSPNode']
