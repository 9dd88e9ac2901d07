"""A flat platform that follows a target position and scale."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

PLATFORM_THICKNESS = 0.3
"""Vertical scale of every platform, which keeps it a flat disc."""


def _vec3(values: Iterable[float]) -> Vec3:
    x, y, z = (float(v) for v in values)
    return (x, y, z)


def _flat_scale(scale: float) -> Vec3:
    return (float(scale), float(scale), PLATFORM_THICKNESS)


@dataclass
class MovingPlatform:
    """A platform whose location and scale catch up with their targets on each tick."""

    index: int = -1
    target_position: Vec3 = (0.0, 0.0, 0.0)
    target_scale: float = 1.0
    location: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    def initialize(self, index: int, position: Iterable[float], scale: float = 1.0) -> None:
        """Place the platform at once and make that its target."""
        self.index = index
        self.target_position = _vec3(position)
        self.target_scale = float(scale)
        self.location = self.target_position
        self.scale = _flat_scale(scale)
        x, y, z = self.location
        logger.info(
            "Platform %d initialized at (%f, %f, %f) with scale %f",
            index, x, y, z, self.target_scale,
        )

    def update_data(self, position: Iterable[float], scale: float) -> None:
        """Set a new target; the platform moves there on its next tick."""
        self.target_position = _vec3(position)
        self.target_scale = float(scale)

    def tick(self, dt: float) -> None:
        """Move to the target position and take the target scale."""
        self.location = self.target_position
        self.scale = _flat_scale(self.target_scale)