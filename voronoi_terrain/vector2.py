"""Two-dimensional vectors with the usual arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True, slots=True)
class Vector2:
    """An immutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, t: float) -> Vector2:
        if not isinstance(t, Real):
            return NotImplemented
        return Vector2(self.x * t, self.y * t)

    def __rmul__(self, t: float) -> Vector2:
        return self.__mul__(t)

    def orthogonal(self) -> Vector2:
        """Return the vector rotated a quarter turn counter-clockwise."""
        return Vector2(-self.y, self.x)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance(self, other: Vector2) -> float:
        return (self - other).norm()

    def det(self, other: Vector2) -> float:
        """Return the determinant of the 2x2 matrix [self, other]."""
        return self.x * other.y - self.y * other.x

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"