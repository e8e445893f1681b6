"""A virtual trackball that turns mouse drags into rotation quaternions.

Quaternions are 4-tuples ``(x, y, z, w)`` whose vector part comes first.
Mouse positions are expected to be scaled to the range ``-1.0 .. 1.0``.
"""

from __future__ import annotations

import math
from typing import Sequence

Quaternion = tuple[float, float, float, float]
Matrix4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

TRACKBALL_SIZE = 0.8
RENORM_COUNT = 97

IDENTITY: Quaternion = (0.0, 0.0, 0.0, 1.0)


def _cross(a: Sequence[float], b: Sequence[float]) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot3(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _project_to_sphere(r: float, x: float, y: float) -> float:
    """Project (x, y) onto a sphere of radius r, or a hyperbolic sheet away from its centre."""
    d = math.hypot(x, y)
    if d < r * math.sqrt(0.5):
        return math.sqrt(r * r - d * d)
    t = r / math.sqrt(2.0)
    return t * t / d


def trackball(p1x: float, p1y: float, p2x: float, p2y: float) -> Quaternion:
    """Rotation for a drag from (p1x, p1y) to (p2x, p2y) on the virtual trackball."""
    if p1x == p2x and p1y == p2y:
        return IDENTITY

    p1 = (p1x, p1y, _project_to_sphere(TRACKBALL_SIZE, p1x, p1y))
    p2 = (p2x, p2y, _project_to_sphere(TRACKBALL_SIZE, p2x, p2y))

    axis = _cross(p2, p1)

    d = tuple(a - b for a, b in zip(p1, p2))
    t = math.sqrt(_dot3(d, d)) / (2.0 * TRACKBALL_SIZE)
    t = max(-1.0, min(1.0, t))
    phi = 2.0 * math.asin(t)

    return axis_to_quat(axis, phi)


def axis_to_quat(axis: Sequence[float], phi: float) -> Quaternion:
    """Quaternion for a rotation of ``phi`` radians about ``axis``."""
    if len(axis) != 3:
        raise ValueError("axis must have three components")
    length = math.sqrt(_dot3(axis, axis))
    if length == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    s = math.sin(phi / 2.0) / length
    return (axis[0] * s, axis[1] * s, axis[2] * s, math.cos(phi / 2.0))


def add_quats(q1: Sequence[float], q2: Sequence[float]) -> Quaternion:
    """Compose two rotations: ``q1`` applied after ``q2``."""
    w1, w2 = q1[3], q2[3]
    c = _cross(q2, q1)
    return (
        q1[0] * w2 + q2[0] * w1 + c[0],
        q1[1] * w2 + q2[1] * w1 + c[1],
        q1[2] * w2 + q2[2] * w1 + c[2],
        w1 * w2 - _dot3(q1, q2),
    )


def _normalize_quat(q: Sequence[float]) -> Quaternion:
    mag = sum(c * c for c in q)
    return (q[0] / mag, q[1] / mag, q[2] / mag, q[3] / mag)


def build_rotmatrix(q: Sequence[float]) -> Matrix4:
    """4x4 rotation matrix for the quaternion ``q``."""
    x, y, z, w = q
    return (
        (
            1.0 - 2.0 * (y * y + z * z),
            2.0 * (x * y - z * w),
            2.0 * (z * x + y * w),
            0.0,
        ),
        (
            2.0 * (x * y + z * w),
            1.0 - 2.0 * (z * z + x * x),
            2.0 * (y * z - x * w),
            0.0,
        ),
        (
            2.0 * (z * x - y * w),
            2.0 * (y * z + x * w),
            1.0 - 2.0 * (y * y + x * x),
            0.0,
        ),
        (0.0, 0.0, 0.0, 1.0),
    )


class RotationAccumulator:
    """Composes rotations and renormalises the result every so often to curb drift."""

    def __init__(self, renorm_count: int = RENORM_COUNT) -> None:
        self.renorm_count = renorm_count
        self.count = 0

    def add(self, q1: Sequence[float], q2: Sequence[float]) -> Quaternion:
        """Compose ``q1`` after ``q2``, renormalising once more than ``renorm_count`` calls."""
        result = add_quats(q1, q2)
        self.count += 1
        if self.count > self.renorm_count:
            self.count = 0
            result = _normalize_quat(result)
        return result