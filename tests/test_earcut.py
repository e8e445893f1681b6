import math

import pytest

from virt.earcut import Earcut, earcut


def _flatten(polygon):
    return [pt for ring in polygon for pt in ring]


def _triangles_area(polygon, indices):
    pts = _flatten(polygon)
    total = 0.0
    for k in range(0, len(indices), 3):
        (ax, ay), (bx, by), (cx, cy) = (pts[i] for i in indices[k : k + 3])
        total += abs((bx - ax) * (cy - ay) - (cx - ax) * (by - ay)) / 2.0
    return total


def _ring_area(ring):
    s = 0.0
    for (x1, y1), (x2, y2) in zip(ring, ring[1:] + ring[:1]):
        s += x1 * y2 - x2 * y1
    return abs(s) / 2.0


def _polygon_area(polygon):
    return _ring_area(polygon[0]) - sum(_ring_area(h) for h in polygon[1:])


SQUARE = [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]]
L_SHAPE = [[(0, 0), (4, 0), (4, 1), (1, 1), (1, 4), (0, 4)]]
SQUARE_WITH_HOLE = [
    [(0, 0), (10, 0), (10, 10), (0, 10)],
    [(3, 3), (7, 3), (7, 7), (3, 7)],
]


def test_empty_polygon():
    assert earcut([]) == []


def test_too_few_points():
    assert earcut([[(0, 0), (1, 1)]]) == []


def test_single_triangle():
    result = earcut([[(0, 0), (1, 0), (0, 1)]])
    assert len(result) == 3
    assert sorted(result) == [0, 1, 2]


def test_square_two_triangles():
    result = earcut(SQUARE)
    assert len(result) == 6
    assert set(result) == {0, 1, 2, 3}
    assert _triangles_area(SQUARE, result) == pytest.approx(100.0)


def test_winding_order_does_not_matter():
    reversed_square = [list(reversed(SQUARE[0]))]
    result = earcut(reversed_square)
    assert len(result) == 6
    assert _triangles_area(reversed_square, result) == pytest.approx(100.0)


def test_concave_polygon_area():
    result = earcut(L_SHAPE)
    assert len(result) == 3 * (len(L_SHAPE[0]) - 2)
    assert _triangles_area(L_SHAPE, result) == pytest.approx(_polygon_area(L_SHAPE))


def test_polygon_with_hole():
    result = earcut(SQUARE_WITH_HOLE)
    assert all(0 <= i < 8 for i in result)
    assert set(result) == set(range(8))
    assert _triangles_area(SQUARE_WITH_HOLE, result) == pytest.approx(84.0)


def test_large_polygon_uses_hashing_and_covers_area():
    n = 120
    ring = [(math.cos(2 * math.pi * k / n) * 50, math.sin(2 * math.pi * k / n) * 50) for k in range(n)]
    polygon = [ring]
    result = earcut(polygon)
    assert len(result) == 3 * (n - 2)
    assert _triangles_area(polygon, result) == pytest.approx(_ring_area(ring), rel=1e-9)


def test_large_star_polygon():
    n = 100
    ring = []
    for k in range(n):
        r = 10 if k % 2 == 0 else 4
        a = 2 * math.pi * k / n
        ring.append((r * math.cos(a), r * math.sin(a)))
    polygon = [ring]
    result = earcut(polygon)
    assert len(result) % 3 == 0
    assert _triangles_area(polygon, result) == pytest.approx(_ring_area(ring), rel=1e-9)


def test_instance_reuse_resets_state():
    cutter = Earcut()
    first = cutter.triangulate(SQUARE_WITH_HOLE)
    second = cutter.triangulate(SQUARE)
    assert max(second) == 3
    assert cutter.vertices == 4
    assert cutter.triangulate(SQUARE_WITH_HOLE) == first


def test_triangle_indices_are_distinct_per_triangle():
    result = earcut(L_SHAPE)
    for k in range(0, len(result), 3):
        assert len(set(result[k : k + 3])) == 3