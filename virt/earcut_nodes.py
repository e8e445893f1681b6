"""Circular doubly linked polygon rings and the geometric predicates ear clipping needs.

Each vertex of a ring is a :class:`Node`. The ``prev``/``next`` links form the
ring itself, and the ``prev_z``/``next_z`` links chain the same nodes in z-order
so that nearby points can be looked up quickly.
"""

from __future__ import annotations


class Node:
    """One vertex of a polygon ring."""

    __slots__ = ("i", "x", "y", "prev", "next", "z", "prev_z", "next_z", "steiner")

    def __init__(self, i: int, x: float, y: float) -> None:
        self.i = i
        self.x = float(x)
        self.y = float(y)
        self.prev: Node | None = None
        self.next: Node | None = None
        self.z = 0
        self.prev_z: Node | None = None
        self.next_z: Node | None = None
        self.steiner = False

    def __repr__(self) -> str:
        return f"Node(i={self.i}, x={self.x}, y={self.y})"


def signed_area(p: Node, q: Node, r: Node) -> float:
    """Signed area of the triangle p, q, r; negative for a convex turn in ring order."""
    return (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)


def point_in_triangle(
    ax: float, ay: float, bx: float, by: float, cx: float, cy: float, px: float, py: float
) -> bool:
    """Whether (px, py) lies within the convex triangle a, b, c (edges included)."""
    return (
        (cx - px) * (ay - py) - (ax - px) * (cy - py) >= 0
        and (ax - px) * (by - py) - (bx - px) * (ay - py) >= 0
        and (bx - px) * (cy - py) - (cx - px) * (by - py) >= 0
    )


def equals(p1: Node, p2: Node) -> bool:
    """Whether two nodes share the same coordinates."""
    return p1.x == p2.x and p1.y == p2.y


def on_segment(p: Node, q: Node, r: Node) -> bool:
    """For collinear p, q, r: whether q lies on the segment pr."""
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def _sign(value: float) -> int:
    return (value > 0.0) - (value < 0.0)


def intersects(p1: Node, q1: Node, p2: Node, q2: Node) -> bool:
    """Whether segment p1q1 meets segment p2q2, touching included."""
    o1 = _sign(signed_area(p1, q1, p2))
    o2 = _sign(signed_area(p1, q1, q2))
    o3 = _sign(signed_area(p2, q2, p1))
    o4 = _sign(signed_area(p2, q2, q1))

    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and on_segment(p1, p2, q1):
        return True
    if o2 == 0 and on_segment(p1, q2, q1):
        return True
    if o3 == 0 and on_segment(p2, p1, q2):
        return True
    if o4 == 0 and on_segment(p2, q1, q2):
        return True
    return False


def _ring(start: Node):
    """Yield every node of the ring beginning at ``start``."""
    p = start
    while True:
        yield p
        p = p.next
        if p is start:
            return


def intersects_polygon(a: Node, b: Node) -> bool:
    """Whether the diagonal ab crosses any edge of the ring not ending at a or b."""
    return any(
        p.i != a.i
        and p.next.i != a.i
        and p.i != b.i
        and p.next.i != b.i
        and intersects(p, p.next, a, b)
        for p in _ring(a)
    )


def locally_inside(a: Node, b: Node) -> bool:
    """Whether the diagonal ab starts off into the polygon's interior at a."""
    if signed_area(a.prev, a, a.next) < 0:
        return signed_area(a, b, a.next) >= 0 and signed_area(a, a.prev, b) >= 0
    return signed_area(a, b, a.prev) < 0 or signed_area(a, a.next, b) < 0


def middle_inside(a: Node, b: Node) -> bool:
    """Whether the midpoint of the diagonal ab lies inside the polygon."""
    inside = False
    px = (a.x + b.x) / 2
    py = (a.y + b.y) / 2
    for p in _ring(a):
        n = p.next
        if (
            (p.y > py) != (n.y > py)
            and n.y != p.y
            and px < (n.x - p.x) * (py - p.y) / (n.y - p.y) + p.x
        ):
            inside = not inside
    return inside


def insert_node(i: int, x: float, y: float, last: Node | None) -> Node:
    """Create a node and link it into the ring right after ``last``, if given."""
    p = Node(i, x, y)
    if last is None:
        p.prev = p
        p.next = p
    else:
        p.next = last.next
        p.prev = last
        last.next.prev = p
        last.next = p
    return p


def remove_node(p: Node) -> None:
    """Unlink ``p`` from its ring and from the z-order chain."""
    p.next.prev = p.prev
    p.prev.next = p.next
    if p.prev_z is not None:
        p.prev_z.next_z = p.next_z
    if p.next_z is not None:
        p.next_z.prev_z = p.prev_z


def split_polygon(a: Node, b: Node) -> Node:
    """Join a and b with a two-way bridge.

    If both belong to the same ring it is split in two; if they belong to
    different rings these are merged. Returns the copy of ``b``.
    """
    a2 = Node(a.i, a.x, a.y)
    b2 = Node(b.i, b.x, b.y)
    an = a.next
    bp = b.prev

    a.next = b
    b.prev = a

    a2.next = an
    an.prev = a2

    b2.next = a2
    a2.prev = b2

    bp.next = b2
    b2.prev = bp

    return b2


def get_leftmost(start: Node) -> Node:
    """Leftmost node of the ring, the lowest one among ties."""
    leftmost = start
    for p in _ring(start):
        if p.x < leftmost.x or (p.x == leftmost.x and p.y < leftmost.y):
            leftmost = p
    return leftmost


def _spread_bits(v: int) -> int:
    v = (v | (v << 8)) & 0x00FF00FF
    v = (v | (v << 4)) & 0x0F0F0F0F
    v = (v | (v << 2)) & 0x33333333
    v = (v | (v << 1)) & 0x55555555
    return v


def z_order(x: float, y: float, min_x: float, min_y: float, inv_size: float) -> int:
    """Morton code of (x, y) within the bounding box starting at (min_x, min_y)."""
    ix = int(32767.0 * (x - min_x) * inv_size)
    iy = int(32767.0 * (y - min_y) * inv_size)
    return _spread_bits(ix) | (_spread_bits(iy) << 1)


def sort_linked(head: Node) -> Node:
    """Merge-sort the ``next_z`` chain starting at ``head`` by ``z``; return the new head."""
    in_size = 1
    lst: Node | None = head
    while True:
        p = lst
        lst = None
        tail: Node | None = None
        num_merges = 0

        while p is not None:
            num_merges += 1
            q = p
            p_size = 0
            for _ in range(in_size):
                p_size += 1
                q = q.next_z
                if q is None:
                    break

            q_size = in_size

            while p_size > 0 or (q_size > 0 and q is not None):
                if p_size == 0:
                    e = q
                    q = q.next_z
                    q_size -= 1
                elif q_size == 0 or q is None:
                    e = p
                    p = p.next_z
                    p_size -= 1
                elif p.z <= q.z:
                    e = p
                    p = p.next_z
                    p_size -= 1
                else:
                    e = q
                    q = q.next_z
                    q_size -= 1

                if tail is not None:
                    tail.next_z = e
                else:
                    lst = e
                e.prev_z = tail
                tail = e

            p = q

        tail.next_z = None

        if num_merges <= 1:
            return lst

        in_size *= 2