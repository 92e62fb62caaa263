"""Linear RGB color type."""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.core.geometry import EPSILON, are_close


@dataclass(frozen=True, slots=True)
class Color:
    """A linear RGB triple. Components are not clamped."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        return Color(self.r / scalar, self.g / scalar, self.b / scalar)

    def max_component(self) -> float:
        return max(self.r, self.g, self.b)

    def luminosity(self) -> float:
        """Mean of the brightest and darkest channel (Shirley & Morley)."""
        return (max(self.r, self.g, self.b) + min(self.r, self.g, self.b)) / 2.0

    def is_black(self) -> bool:
        return self.r == 0.0 and self.g == 0.0 and self.b == 0.0

    def is_close(self, other: Color, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.r, other.r, epsilon)
            and are_close(self.g, other.g, epsilon)
            and are_close(self.b, other.b, epsilon)
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
