"""Polygon triangulation by ear clipping, with support for holes.

A polygon is a sequence of rings. The first ring is the outline and any
further rings are holes. Each ring is a sequence of ``(x, y)`` points.
Triangles come back as a flat list of vertex indices, three per triangle.
Vertices are numbered across all rings in order, as if the rings were
concatenated.
"""

from __future__ import annotations

import math
from typing import Iterator, Sequence

from virt.earcut_nodes import (
    Node,
    equals,
    get_leftmost,
    insert_node,
    intersects,
    intersects_polygon,
    locally_inside,
    middle_inside,
    point_in_triangle,
    remove_node,
    signed_area,
    sort_linked,
    split_polygon,
    z_order,
)

Ring = Sequence[Sequence[float]]
Polygon = Sequence[Ring]

_HASH_THRESHOLD = 80


def _ring(start: Node) -> Iterator[Node]:
    p = start
    while True:
        yield p
        p = p.next
        if p is start:
            return


class Earcut:
    """Triangulates polygons; an instance can be reused for several polygons."""

    def __init__(self) -> None:
        self.indices: list[int] = []
        self.vertices = 0
        self._hashing = False
        self._min_x = 0.0
        self._min_y = 0.0
        self._inv_size = 0.0

    def triangulate(self, polygon: Polygon) -> list[int]:
        """Return the triangle vertex indices for ``polygon``."""
        self.indices = []
        self.vertices = 0
        self._inv_size = 0.0

        if not polygon:
            return []

        threshold = _HASH_THRESHOLD
        for ring in polygon:
            if threshold < 0:
                break
            threshold -= len(ring)

        outer = self._linked_list(polygon[0], True)
        if outer is None or outer.prev is outer.next:
            return list(self.indices)

        if len(polygon) > 1:
            outer = self._eliminate_holes(polygon, outer)

        self._hashing = threshold < 0
        if self._hashing:
            xs = [p.x for p in _ring(outer)]
            ys = [p.y for p in _ring(outer)]
            self._min_x, self._min_y = min(xs), min(ys)
            size = max(max(xs) - self._min_x, max(ys) - self._min_y)
            self._inv_size = 1.0 / size if size != 0.0 else 0.0

        self._earcut_linked(outer)
        return list(self.indices)

    def _linked_list(self, points: Ring, clockwise: bool) -> Node | None:
        """Build a ring from ``points`` in the requested winding order."""
        total = 0.0
        count = len(points)
        for i in range(count):
            p1 = points[i]
            p2 = points[i - 1]
            total += (p2[0] - p1[0]) * (p1[1] + p2[1])

        last: Node | None = None
        if clockwise == (total > 0):
            order = range(count)
        else:
            order = range(count - 1, -1, -1)
        for i in order:
            last = insert_node(self.vertices + i, points[i][0], points[i][1], last)

        if last is not None and equals(last, last.next):
            remove_node(last)
            last = last.next

        self.vertices += count
        return last

    def _filter_points(self, start: Node, end: Node | None = None) -> Node:
        """Drop duplicate and collinear points between ``start`` and ``end``."""
        if end is None:
            end = start
        p = start
        while True:
            again = False
            if not p.steiner and (equals(p, p.next) or signed_area(p.prev, p, p.next) == 0):
                remove_node(p)
                p = end = p.prev
                if p is p.next:
                    break
                again = True
            else:
                p = p.next
            if not (again or p is not end):
                break
        return end

    def _earcut_linked(self, ear: Node | None, pass_: int = 0) -> None:
        if ear is None:
            return

        if pass_ == 0 and self._hashing:
            self._index_curve(ear)

        stop = ear
        while ear.prev is not ear.next:
            prev = ear.prev
            nxt = ear.next

            is_ear = self._is_ear_hashed(ear) if self._hashing else self._is_ear(ear)
            if is_ear:
                self.indices.extend((prev.i, ear.i, nxt.i))
                remove_node(ear)
                ear = nxt.next
                stop = nxt.next
                continue

            ear = nxt

            if ear is stop:
                if pass_ == 0:
                    self._earcut_linked(self._filter_points(ear), 1)
                elif pass_ == 1:
                    ear = self._cure_local_intersections(self._filter_points(ear))
                    self._earcut_linked(ear, 2)
                elif pass_ == 2:
                    self._split_earcut(ear)
                break

    def _is_ear(self, ear: Node) -> bool:
        a, b, c = ear.prev, ear, ear.next
        if signed_area(a, b, c) >= 0:
            return False

        p = ear.next.next
        while p is not ear.prev:
            if (
                point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, p.x, p.y)
                and signed_area(p.prev, p, p.next) >= 0
            ):
                return False
            p = p.next
        return True

    def _is_ear_hashed(self, ear: Node) -> bool:
        a, b, c = ear.prev, ear, ear.next
        if signed_area(a, b, c) >= 0:
            return False

        min_tx = min(a.x, b.x, c.x)
        min_ty = min(a.y, b.y, c.y)
        max_tx = max(a.x, b.x, c.x)
        max_ty = max(a.y, b.y, c.y)

        min_z = z_order(min_tx, min_ty, self._min_x, self._min_y, self._inv_size)
        max_z = z_order(max_tx, max_ty, self._min_x, self._min_y, self._inv_size)

        def blocks(p: Node) -> bool:
            return (
                p is not ear.prev
                and p is not ear.next
                and point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, p.x, p.y)
                and signed_area(p.prev, p, p.next) >= 0
            )

        p = ear.next_z
        while p is not None and p.z <= max_z:
            if blocks(p):
                return False
            p = p.next_z

        p = ear.prev_z
        while p is not None and p.z >= min_z:
            if blocks(p):
                return False
            p = p.prev_z

        return True

    def _cure_local_intersections(self, start: Node) -> Node:
        p = start
        while True:
            a = p.prev
            b = p.next.next
            if (
                not equals(a, b)
                and intersects(a, p, p.next, b)
                and locally_inside(a, b)
                and locally_inside(b, a)
            ):
                self.indices.extend((a.i, p.i, b.i))
                remove_node(p)
                remove_node(p.next)
                p = start = b
            p = p.next
            if p is start:
                break
        return self._filter_points(p)

    def _split_earcut(self, start: Node) -> None:
        a = start
        while True:
            b = a.next.next
            while b is not a.prev:
                if a.i != b.i and self._is_valid_diagonal(a, b):
                    c = split_polygon(a, b)
                    a = self._filter_points(a, a.next)
                    c = self._filter_points(c, c.next)
                    self._earcut_linked(a)
                    self._earcut_linked(c)
                    return
                b = b.next
            a = a.next
            if a is start:
                break

    def _eliminate_holes(self, polygon: Polygon, outer: Node) -> Node:
        queue: list[Node] = []
        for ring in polygon[1:]:
            head = self._linked_list(ring, False)
            if head is not None:
                if head is head.next:
                    head.steiner = True
                queue.append(get_leftmost(head))
        queue.sort(key=lambda node: node.x)

        for hole in queue:
            outer = self._eliminate_hole(hole, outer)
            outer = self._filter_points(outer, outer.next)
        return outer

    def _eliminate_hole(self, hole: Node, outer: Node) -> Node:
        bridge = self._find_hole_bridge(hole, outer)
        if bridge is None:
            return outer

        bridge_reverse = split_polygon(bridge, hole)
        filtered = self._filter_points(bridge, bridge.next)
        self._filter_points(bridge_reverse, bridge_reverse.next)
        return filtered if outer is bridge else outer

    def _find_hole_bridge(self, hole: Node, outer: Node) -> Node | None:
        hx, hy = hole.x, hole.y
        qx = -math.inf
        m: Node | None = None

        for p in _ring(outer):
            n = p.next
            if p.y >= hy >= n.y and n.y != p.y:
                x = p.x + (hy - p.y) * (n.x - p.x) / (n.y - p.y)
                if hx >= x > qx:
                    qx = x
                    if x == hx:
                        if hy == p.y:
                            return p
                        if hy == n.y:
                            return n
                    m = p if p.x < n.x else n

        if m is None:
            return None
        if hx == qx:
            return m

        stop = m
        tan_min = math.inf
        mx, my = m.x, m.y

        for p in _ring(stop):
            if (
                hx >= p.x >= mx
                and hx != p.x
                and point_in_triangle(
                    hx if hy < my else qx, hy, mx, my, qx if hy < my else hx, hy, p.x, p.y
                )
            ):
                tan_cur = abs(hy - p.y) / (hx - p.x)
                if locally_inside(p, hole) and (
                    tan_cur < tan_min
                    or (
                        tan_cur == tan_min
                        and (p.x > m.x or self._sector_contains_sector(m, p))
                    )
                ):
                    m = p
                    tan_min = tan_cur
        return m

    @staticmethod
    def _sector_contains_sector(m: Node, p: Node) -> bool:
        return signed_area(m.prev, m, p.prev) < 0 and signed_area(p.next, m, m.next) < 0

    def _index_curve(self, start: Node) -> None:
        for p in _ring(start):
            if not p.z:
                p.z = z_order(p.x, p.y, self._min_x, self._min_y, self._inv_size)
            p.prev_z = p.prev
            p.next_z = p.next

        start.prev_z.next_z = None
        start.prev_z = None
        sort_linked(start)

    @staticmethod
    def _is_valid_diagonal(a: Node, b: Node) -> bool:
        return (
            a.next.i != b.i
            and a.prev.i != b.i
            and not intersects_polygon(a, b)
            and (
                (
                    locally_inside(a, b)
                    and locally_inside(b, a)
                    and middle_inside(a, b)
                    and (
                        signed_area(a.prev, a, b.prev) != 0.0
                        or signed_area(a, b.prev, b) != 0.0
                    )
                )
                or (
                    equals(a, b)
                    and signed_area(a.prev, a, a.next) > 0
                    and signed_area(b.prev, b, b.next) > 0
                )
            )
        )


def earcut(polygon: Polygon) -> list[int]:
    """Triangulate ``polygon`` (outline first, then holes) into vertex indices."""
    return Earcut().triangulate(polygon)