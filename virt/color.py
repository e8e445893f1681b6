"""RGB radiance values."""

from __future__ import annotations

from dataclasses import dataclass

_SCALAR = (int, float)


@dataclass
class RGB:
    """A linear RGB triple."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __iadd__(self, other: RGB) -> RGB:
        if not isinstance(other, RGB):
            return NotImplemented
        self.r += other.r
        self.g += other.g
        self.b += other.b
        return self

    def __add__(self, other: RGB) -> RGB:
        if isinstance(other, RGB):
            return RGB(self.r + other.r, self.g + other.g, self.b + other.b)
        return NotImplemented

    def __sub__(self, other: RGB) -> RGB:
        if isinstance(other, RGB):
            return RGB(self.r - other.r, self.g - other.g, self.b - other.b)
        return NotImplemented

    def __mul__(self, other: RGB | float) -> RGB:
        if isinstance(other, RGB):
            return RGB(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, _SCALAR):
            return RGB(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __rmul__(self, other: float) -> RGB:
        if isinstance(other, _SCALAR):
            return RGB(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __truediv__(self, other: RGB | float) -> RGB:
        if isinstance(other, RGB):
            return RGB(self.r / other.r, self.g / other.g, self.b / other.b)
        if isinstance(other, _SCALAR):
            return RGB(self.r / other, self.g / other, self.b / other)
        return NotImplemented

    def luminance(self) -> float:
        """Relative luminance Y (Rec. 709 weights)."""
        return self.r * 0.2126 + self.g * 0.7152 + self.b * 0.0722

    def is_zero(self) -> bool:
        return self.r == 0.0 and self.g == 0.0 and self.b == 0.0