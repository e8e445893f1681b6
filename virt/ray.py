"""Rays and ray/surface intersection records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from virt.color import RGB
from virt.vector import Point, Vector

EPSILON = 1e-3


@dataclass
class Ray:
    """A ray with an origin and a direction."""

    origin: Point = field(default_factory=Point)
    direction: Vector = field(default_factory=Vector)
    face_id: int | None = None
    inv_dir: Vector = field(default_factory=Vector)
    pix_x: int = 0
    pix_y: int = 0

    def adjust_origin(self, normal: Vector) -> None:
        """Nudge the origin off the surface along ``normal``, to the side the ray travels."""
        offset = EPSILON * normal
        if self.direction.dot(normal) < 0:
            offset = -offset
        self.origin = self.origin + offset


@dataclass
class Intersection:
    """Where a ray hit a surface, and what it found there."""

    p: Point = field(default_factory=Point)
    gn: Vector = field(default_factory=Vector)
    wo: Vector = field(default_factory=Vector)
    depth: float = 0.0
    sn: Vector | None = None
    f: Any = None
    pix_x: int = 0
    pix_y: int = 0
    face_id: int | None = None
    is_light: bool = False
    le: RGB = field(default_factory=RGB)

    def __post_init__(self) -> None:
        if self.sn is None:
            self.sn = Vector(self.gn.x, self.gn.y, self.gn.z)