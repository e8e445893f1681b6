"""Geometry helpers for voxelization: bounding boxes, grid snapping and
triangle/box overlap tests (separating axis theorem)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from virt.vector import Vector

Triangle = Sequence[Vector]


def _empty_min() -> Vector:
    return Vector(math.inf, math.inf, math.inf)


def _empty_max() -> Vector:
    return Vector(-math.inf, -math.inf, -math.inf)


@dataclass
class AABB:
    """An axis-aligned bounding box; empty (inverted) by default."""

    min: Vector = field(default_factory=_empty_min)
    max: Vector = field(default_factory=_empty_max)

    def center(self) -> Vector:
        """Midpoint of the box."""
        return (self.min + self.max) * 0.5

    def half_size(self) -> Vector:
        """Half the extent of the box along each axis."""
        return Vector(
            abs(self.max.x - self.min.x) * 0.5,
            abs(self.max.y - self.min.y) * 0.5,
            abs(self.max.z - self.min.z) * 0.5,
        )

    def merge(self, other: AABB) -> AABB:
        """Smallest box holding both this box and ``other``."""
        return AABB(
            Vector(
                min(self.min.x, other.min.x),
                min(self.min.y, other.min.y),
                min(self.min.z, other.min.z),
            ),
            Vector(
                max(self.max.x, other.max.x),
                max(self.max.y, other.max.y),
                max(self.max.z, other.max.z),
            ),
        )


def map_to_voxel(position: float, voxel_size: float, minimum: bool) -> float:
    """Snap ``position`` to the voxel grid, downwards if ``minimum`` else upwards."""
    sign = -1.0 if position < 0.0 else 1.0
    vox = (position + sign * voxel_size * 0.5) / voxel_size
    return (math.floor(vox) if minimum else math.ceil(vox)) * voxel_size


def triangle_area(p1: Vector, p2: Vector, p3: Vector) -> float:
    """Area of the triangle p1, p2, p3."""
    return (p2 - p1).cross(p3 - p1).norm() * 0.5


def triangle_aabb(p1: Vector, p2: Vector, p3: Vector) -> AABB:
    """Bounding box of the triangle p1, p2, p3."""
    points = (p1, p2, p3)
    return AABB(
        Vector(min(p.x for p in points), min(p.y for p in points), min(p.z for p in points)),
        Vector(max(p.x for p in points), max(p.y for p in points), max(p.z for p in points)),
    )


def plane_box_overlap(normal: Vector, d: float, half_size: Vector) -> bool:
    """Whether the plane ``normal . p + d = 0`` meets the origin-centred box."""
    vmin = []
    vmax = []
    for n, h in zip(normal, half_size):
        if n > 0.0:
            vmin.append(-h)
            vmax.append(h)
        else:
            vmin.append(h)
            vmax.append(-h)

    if normal.dot(Vector(*vmin)) + d > 0.0:
        return False
    return normal.dot(Vector(*vmax)) + d >= 0.0


def _separated(pa: float, pb: float, rad: float) -> bool:
    return min(pa, pb) > rad or max(pa, pb) < -rad


def _axis_x(a: float, b: float, fa: float, fb: float, u: Vector, w: Vector, h: Vector) -> bool:
    return _separated(a * u.y - b * u.z, a * w.y - b * w.z, fa * h.y + fb * h.z)


def _axis_y(a: float, b: float, fa: float, fb: float, u: Vector, w: Vector, h: Vector) -> bool:
    return _separated(-a * u.x + b * u.z, -a * w.x + b * w.z, fa * h.x + fb * h.z)


def _axis_z(a: float, b: float, fa: float, fb: float, u: Vector, w: Vector, h: Vector) -> bool:
    return _separated(a * u.x - b * u.y, a * w.x - b * w.y, fa * h.x + fb * h.y)


def triangle_box_overlap(box_center: Vector, half_size: Vector, triangle: Triangle) -> bool:
    """Whether ``triangle`` (three vertices) overlaps the box around ``box_center``."""
    if len(triangle) != 3:
        raise ValueError("a triangle needs exactly three vertices")
    v1, v2, v3 = (p - box_center for p in triangle)
    e1 = v2 - v1
    e2 = v3 - v2
    e3 = v1 - v3
    h = half_size

    f = e1.abs()
    if (
        _axis_x(e1.z, e1.y, f.z, f.y, v1, v3, h)
        or _axis_y(e1.z, e1.x, f.z, f.x, v1, v3, h)
        or _axis_z(e1.y, e1.x, f.y, f.x, v2, v3, h)
    ):
        return False

    f = e2.abs()
    if (
        _axis_x(e2.z, e2.y, f.z, f.y, v1, v3, h)
        or _axis_y(e2.z, e2.x, f.z, f.x, v1, v3, h)
        or _axis_z(e2.y, e2.x, f.y, f.x, v1, v2, h)
    ):
        return False

    f = e3.abs()
    if (
        _axis_x(e3.z, e3.y, f.z, f.y, v1, v2, h)
        or _axis_y(e3.z, e3.x, f.z, f.x, v1, v2, h)
        or _axis_z(e3.y, e3.x, f.y, f.x, v2, v3, h)
    ):
        return False

    for coords, extent in (
        ((v1.x, v2.x, v3.x), h.x),
        ((v1.y, v2.y, v3.y), h.y),
        ((v1.z, v2.z, v3.z), h.z),
    ):
        if min(coords) > extent or max(coords) < -extent:
            return False

    normal = e1.cross(e2)
    d = -normal.dot(v1)
    return plane_box_overlap(normal, d, h)