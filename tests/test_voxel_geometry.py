import itertools
import math

import pytest

from virt.vector import Vector
from virt.voxel_geometry import (
    AABB,
    map_to_voxel,
    plane_box_overlap,
    triangle_aabb,
    triangle_area,
    triangle_box_overlap,
)

UNIT_HALF = Vector(1.0, 1.0, 1.0)
ORIGIN = Vector(0.0, 0.0, 0.0)


def test_default_aabb_is_empty_and_merge_identity():
    box = AABB(Vector(-1.0, 2.0, 3.0), Vector(4.0, 5.0, 6.0))
    empty = AABB()
    assert empty.min.x == math.inf
    assert empty.max.z == -math.inf
    assert empty.merge(box) == box
    assert box.merge(empty) == box


def test_aabb_center_and_half_size():
    box = AABB(Vector(-2.0, 0.0, 4.0), Vector(2.0, 6.0, 4.0))
    assert box.center() == Vector(0.0, 3.0, 4.0)
    assert box.half_size() == Vector(2.0, 3.0, 0.0)


def test_aabb_merge_contains_both():
    a = AABB(Vector(0.0, 0.0, 0.0), Vector(1.0, 1.0, 1.0))
    b = AABB(Vector(-3.0, 0.5, 2.0), Vector(0.5, 4.0, 5.0))
    m = a.merge(b)
    assert m.min == Vector(-3.0, 0.0, 0.0)
    assert m.max == Vector(1.0, 4.0, 5.0)
    assert m == b.merge(a)


@pytest.mark.parametrize("position", [-3.7, -0.2, 0.0, 0.3, 1.5, 12.25])
@pytest.mark.parametrize("size", [0.5, 1.0, 2.0])
def test_map_to_voxel_bounds_are_grid_aligned(position, size):
    low = map_to_voxel(position, size, True)
    high = map_to_voxel(position, size, False)
    assert low <= high
    assert high - low <= size + 1e-9
    assert math.isclose(low / size, round(low / size), abs_tol=1e-9)
    assert math.isclose(high / size, round(high / size), abs_tol=1e-9)


def test_map_to_voxel_known_values():
    assert map_to_voxel(0.3, 1.0, True) == 0.0
    assert map_to_voxel(0.3, 1.0, False) == 1.0


def test_triangle_area_scales_quadratically():
    p1, p2, p3 = Vector(0.0, 0.0, 0.0), Vector(1.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0)
    area = triangle_area(p1, p2, p3)
    assert area == pytest.approx(0.5)
    assert triangle_area(p1 * 2, p2 * 2, p3 * 2) == pytest.approx(4 * area)


def test_degenerate_triangle_has_no_area():
    assert triangle_area(Vector(0, 0, 0), Vector(1, 1, 1), Vector(2, 2, 2)) == 0.0


def test_triangle_aabb_bounds_vertices():
    p1, p2, p3 = Vector(1.0, -2.0, 3.0), Vector(-4.0, 5.0, 0.0), Vector(2.0, 1.0, -6.0)
    box = triangle_aabb(p1, p2, p3)
    assert box.min == Vector(-4.0, -2.0, -6.0)
    assert box.max == Vector(2.0, 5.0, 3.0)
    for p in (p1, p2, p3):
        assert box.min.x <= p.x <= box.max.x
        assert box.min.y <= p.y <= box.max.y
        assert box.min.z <= p.z <= box.max.z


def test_plane_box_overlap():
    up = Vector(0.0, 0.0, 1.0)
    assert plane_box_overlap(up, 0.0, UNIT_HALF) is True
    assert plane_box_overlap(up, -1.0, UNIT_HALF) is True
    assert plane_box_overlap(up, -2.0, UNIT_HALF) is False
    assert plane_box_overlap(up, 2.0, UNIT_HALF) is False


def test_triangle_through_box_overlaps():
    tri = (Vector(-5.0, -5.0, 0.0), Vector(5.0, -5.0, 0.0), Vector(0.0, 5.0, 0.0))
    assert triangle_box_overlap(ORIGIN, UNIT_HALF, tri) is True


def test_far_triangle_does_not_overlap():
    tri = (Vector(10.0, 10.0, 10.0), Vector(11.0, 10.0, 10.0), Vector(10.0, 11.0, 10.0))
    assert triangle_box_overlap(ORIGIN, UNIT_HALF, tri) is False


def test_corner_plane_cases():
    near = (Vector(2.9, 0.0, 0.0), Vector(0.0, 2.9, 0.0), Vector(0.0, 0.0, 2.9))
    far = (Vector(3.1, 0.0, 0.0), Vector(0.0, 3.1, 0.0), Vector(0.0, 0.0, 3.1))
    assert triangle_box_overlap(ORIGIN, UNIT_HALF, near) is True
    assert triangle_box_overlap(ORIGIN, UNIT_HALF, far) is False


@pytest.mark.parametrize(
    "tri",
    [
        (Vector(2.9, 0.0, 0.0), Vector(0.0, 2.9, 0.0), Vector(0.0, 0.0, 2.9)),
        (Vector(3.1, 0.0, 0.0), Vector(0.0, 3.1, 0.0), Vector(0.0, 0.0, 3.1)),
        (Vector(-5.0, -5.0, 0.5), Vector(5.0, -5.0, 0.5), Vector(0.0, 5.0, 0.5)),
    ],
)
def test_overlap_invariant_under_vertex_order_and_translation(tri):
    expected = triangle_box_overlap(ORIGIN, UNIT_HALF, tri)
    for perm in itertools.permutations(tri):
        assert triangle_box_overlap(ORIGIN, UNIT_HALF, perm) is expected
    shift = Vector(4.0, -8.0, 16.0)
    moved = tuple(p + shift for p in tri)
    assert triangle_box_overlap(ORIGIN + shift, UNIT_HALF, moved) is expected


def test_triangle_needs_three_vertices():
    with pytest.raises(ValueError):
        triangle_box_overlap(ORIGIN, UNIT_HALF, (Vector(), Vector()))