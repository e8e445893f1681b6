"""Turn a triangle mesh into a mesh of axis-aligned voxel cubes.

Every triangle is tested against the voxel grid cells covering its bounding
box. Each distinct cell it overlaps becomes one cube of 8 vertices and 12
triangles (36 indices) in the output mesh.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from virt.vector import Vector
from virt.voxel_geometry import (
    AABB,
    map_to_voxel,
    triangle_aabb,
    triangle_area,
    triangle_box_overlap,
)

EPSILON = 0.0000001
HASH_TABLE_SIZE = 4096
NORMAL_INDICES_SIZE = 6
INDICES_SIZE = 36

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF

VOXEL_INDICES: tuple[int, ...] = (
    0, 1, 2,
    0, 2, 3,
    3, 2, 6,
    3, 6, 7,
    0, 7, 4,
    0, 3, 7,
    4, 7, 5,
    7, 6, 5,
    0, 4, 5,
    0, 5, 1,
    1, 5, 6,
    1, 6, 2,
)

VOXEL_NORMALS: tuple[tuple[float, float, float], ...] = (
    (0.0, -1.0, 0.0),
    (0.0, 1.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0),
    (-1.0, 0.0, 0.0),
    (0.0, 0.0, -1.0),
)

NORMAL_INDICES: tuple[int, ...] = (3, 2, 1, 5, 4, 0)


@dataclass
class Mesh:
    """An indexed triangle mesh, optionally with per-index normals."""

    vertices: list[Vector] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)
    normal_indices: list[int] = field(default_factory=list)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_indices(self) -> int:
        return len(self.indices)

    @property
    def n_normals(self) -> int:
        return len(self.normals)


def vertex_hash(position: Vector, n: int) -> int:
    """Spatial hash of ``position`` into ``n`` buckets."""
    if n <= 0:
        raise ValueError("number of buckets must be positive")
    a = int(position.x * 73856093) & _UINT64_MASK
    b = int(position.y * 19349663) & _UINT64_MASK
    c = int(position.z * 83492791) & _UINT64_MASK
    return (a ^ b ^ c) % n


def _vertex_equals(v1: Vector, v2: Vector) -> bool:
    return (
        abs(v1.x - v2.x) < EPSILON
        and abs(v1.y - v2.y) < EPSILON
        and abs(v1.z - v2.z) < EPSILON
    )


def _insert(table: list[list[Vector]], bucket: int, center: Vector) -> bool:
    """Add ``center`` to its bucket unless an equal one is already there."""
    entries = table[bucket]
    if any(_vertex_equals(existing, center) for existing in entries):
        return False
    entries.append(center)
    return True


def _grid(start: float, stop: float, step: float):
    value = start
    while value < stop:
        yield value
        value += step


def _add_voxel(mesh: Mesh, center: Vector, corners: list[Vector]) -> None:
    base = len(mesh.vertices)
    mesh.vertices.extend(corner + center for corner in corners)
    mesh.normal_indices.extend(NORMAL_INDICES[i // 6] for i in range(INDICES_SIZE))
    mesh.indices.extend(index + base for index in VOXEL_INDICES)


def voxelize(
    mesh: Mesh,
    voxel_size_x: float,
    voxel_size_y: float,
    voxel_size_z: float,
    precision: float,
) -> Mesh:
    """Voxelize ``mesh`` into cubes of the given size.

    ``precision`` widens each cell slightly when testing overlap, which
    closes small holes; about a tenth of the voxel size usually works well.
    """
    if min(voxel_size_x, voxel_size_y, voxel_size_z) <= 0.0:
        raise ValueError("voxel sizes must be positive")
    if len(mesh.indices) % 3 != 0:
        raise ValueError("mesh indices must come in groups of three")

    half_x = voxel_size_x * 0.5
    half_y = voxel_size_y * 0.5
    half_z = voxel_size_z * 0.5

    table: list[list[Vector]] = [[] for _ in range(HASH_TABLE_SIZE)]

    for t in range(0, len(mesh.indices), 3):
        ids = mesh.indices[t:t + 3]
        for index in ids:
            if not 0 <= index < len(mesh.vertices):
                raise IndexError(f"vertex index {index} out of range")
        triangle = tuple(mesh.vertices[index] for index in ids)

        if triangle_area(*triangle) < EPSILON:
            continue

        box = triangle_aabb(*triangle)
        lo = Vector(
            map_to_voxel(box.min.x, voxel_size_x, True),
            map_to_voxel(box.min.y, voxel_size_y, True),
            map_to_voxel(box.min.z, voxel_size_z, True),
        )
        hi = Vector(
            map_to_voxel(box.max.x, voxel_size_x, False),
            map_to_voxel(box.max.y, voxel_size_y, False),
            map_to_voxel(box.max.z, voxel_size_z, False),
        )

        for x in _grid(lo.x, hi.x, voxel_size_x):
            for y in _grid(lo.y, hi.y, voxel_size_y):
                for z in _grid(lo.z, hi.z, voxel_size_z):
                    cell = AABB(
                        Vector(x - half_x, y - half_y, z - half_z),
                        Vector(x + half_x, y + half_y, z + half_z),
                    )
                    center = cell.center()
                    half = cell.half_size() + Vector(precision, precision, precision)

                    if triangle_box_overlap(center, half, triangle):
                        _insert(table, vertex_hash(center, HASH_TABLE_SIZE), center)

    corners = [
        Vector(-half_x, half_y, half_z),
        Vector(-half_x, -half_y, half_z),
        Vector(half_x, -half_y, half_z),
        Vector(half_x, half_y, half_z),
        Vector(-half_x, half_y, -half_z),
        Vector(-half_x, -half_y, -half_z),
        Vector(half_x, -half_y, -half_z),
        Vector(half_x, half_y, -half_z),
    ]

    out = Mesh(normals=[Vector(*n) for n in VOXEL_NORMALS])
    for bucket in table:
        for center in bucket:
            _add_voxel(out, center, corners)
    return out


def _is_finite(v: Vector) -> bool:
    return all(math.isfinite(c) for c in v)