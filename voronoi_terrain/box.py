"""Axis-aligned boxes and their intersections with rays and segments."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from enum import IntEnum

from .vector2 import Vector2

EPSILON = sys.float_info.epsilon


class Side(IntEnum):
    """Sides of a box, counter-clockwise; the y-axis points up."""

    LEFT = 0
    BOTTOM = 1
    RIGHT = 2
    TOP = 3


@dataclass
class Intersection:
    """A point where a line meets a side of a box."""

    side: Side = Side.LEFT
    point: Vector2 = field(default_factory=Vector2)


@dataclass
class Box:
    """An axis-aligned rectangle."""

    left: float
    bottom: float
    right: float
    top: float

    def contains(self, point: Vector2) -> bool:
        """Tell whether ``point`` lies in the box, allowing a tiny tolerance."""
        return (
            self.left - EPSILON <= point.x <= self.right + EPSILON
            and self.bottom - EPSILON <= point.y <= self.top + EPSILON
        )

    def first_intersection(self, origin: Vector2, direction: Vector2) -> Intersection:
        """Return where the ray from ``origin`` (inside the box) leaves the box."""
        intersection = Intersection()
        t = math.inf
        if direction.x > 0.0:
            t = (self.right - origin.x) / direction.x
            intersection = Intersection(Side.RIGHT, origin + t * direction)
        elif direction.x < 0.0:
            t = (self.left - origin.x) / direction.x
            intersection = Intersection(Side.LEFT, origin + t * direction)
        if direction.y > 0.0:
            new_t = (self.top - origin.y) / direction.y
            if new_t < t:
                intersection = Intersection(Side.TOP, origin + new_t * direction)
        elif direction.y < 0.0:
            new_t = (self.bottom - origin.y) / direction.y
            if new_t < t:
                intersection = Intersection(Side.BOTTOM, origin + new_t * direction)
        return intersection

    def intersections(self, origin: Vector2, destination: Vector2) -> list[Intersection]:
        """Return the crossings of a segment with the box border, nearest first.

        At most two are returned; at a corner both may be equal.
        """
        direction = destination - origin
        found: list[tuple[float, Intersection]] = []

        def _try(numerator: float, denominator: float, side: Side, on_x_side: bool) -> None:
            if len(found) >= 2 or denominator == 0.0:
                return
            t = numerator / denominator
            if not EPSILON < t < 1.0 - EPSILON:
                return
            point = origin + t * direction
            if on_x_side:
                inside = self.bottom - EPSILON <= point.y <= self.top + EPSILON
            else:
                inside = self.left - EPSILON <= point.x <= self.right + EPSILON
            if inside:
                found.append((t, Intersection(side, point)))

        if origin.x < self.left - EPSILON or destination.x < self.left - EPSILON:
            _try(self.left - origin.x, direction.x, Side.LEFT, True)
        if origin.x > self.right + EPSILON or destination.x > self.right + EPSILON:
            _try(self.right - origin.x, direction.x, Side.RIGHT, True)
        if origin.y < self.bottom - EPSILON or destination.y < self.bottom - EPSILON:
            _try(self.bottom - origin.y, direction.y, Side.BOTTOM, False)
        if origin.y > self.top + EPSILON or destination.y > self.top + EPSILON:
            _try(self.top - origin.y, direction.y, Side.TOP, False)

        if len(found) == 2 and found[0][0] > found[1][0]:
            found.reverse()
        return [intersection for _, intersection in found]