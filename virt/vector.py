"""Three-component vectors and points used throughout the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

_SCALAR = (int, float)


@dataclass
class Vector:
    """A direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, factor: float) -> Vector:
        if isinstance(factor, _SCALAR):
            return Vector(factor * self.x, factor * self.y, factor * self.z)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector:
        if isinstance(divisor, _SCALAR):
            return Vector(self.x / divisor, self.y / divisor, self.z / divisor)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> None:
        """Scale this vector to unit length in place; zero vectors are left alone."""
        length = self.norm()
        if length > 0.0:
            self.x /= length
            self.y /= length
            self.z /= length

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def abs(self) -> Vector:
        """Component-wise absolute value."""
        return Vector(abs(self.x), abs(self.y), abs(self.z))

    def max_dimension(self) -> int:
        """Index (0, 1 or 2) of the largest component."""
        if self.x > self.y:
            return 0 if self.x > self.z else 2
        return 1 if self.y > self.z else 2

    def permute(self, x: int, y: int, z: int) -> Vector:
        """Rearrange components by index."""
        xyz = (self.x, self.y, self.z)
        return Vector(xyz[x], xyz[y], xyz[z])

    def faceforward(self, v: Vector) -> Vector:
        """Flip this vector, if needed, so that it lies on the same side as ``v``."""
        if self.dot(v) < 0.0:
            return -self
        return Vector(self.x, self.y, self.z)

    def coordinate_system(self) -> tuple[Vector, Vector]:
        """Two axes forming an orthonormal basis with this (unit) vector."""
        if abs(self.x) > abs(self.y):
            v2 = Vector(-self.z, 0.0, self.x) / math.sqrt(self.x * self.x + self.z * self.z)
        else:
            v2 = Vector(0.0, self.z, -self.y) / math.sqrt(self.y * self.y + self.z * self.z)
        return v2, self.cross(v2)

    def rotate(self, rx: Vector, ry: Vector, rz: Vector) -> Vector:
        """Express this vector in the frame given by the axes ``rx``, ``ry``, ``rz``."""
        return Vector(
            self.x * rx.x + self.y * ry.x + self.z * rz.x,
            self.x * rx.y + self.y * ry.y + self.z * rz.y,
            self.x * rx.z + self.y * ry.z + self.z * rz.z,
        )


@dataclass
class Point:
    """A position in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __sub__(self, other: Point) -> Vector:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __add__(self, other: Point | Vector) -> Point:
        if isinstance(other, (Point, Vector)):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __mul__(self, factor: float) -> Point:
        if isinstance(factor, _SCALAR):
            return Point(factor * self.x, factor * self.y, factor * self.z)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Point:
        if isinstance(divisor, _SCALAR):
            return Point(self.x / divisor, self.y / divisor, self.z / divisor)
        return NotImplemented

    def vec2point(self, other: Point) -> Vector:
        """Vector from this point to ``other``."""
        return Vector(other.x - self.x, other.y - self.y, other.z - self.z)

    def permute(self, x: int, y: int, z: int) -> Point:
        xyz = (self.x, self.y, self.z)
        return Point(xyz[x], xyz[y], xyz[z])

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z