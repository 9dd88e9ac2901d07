"""Platforms that ride on the cells of a Voronoi diagram of moving sites."""

from __future__ import annotations

import contextlib
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, Sequence

from .box import Box
from .fortune import FortuneAlgorithm
from .platform import MovingPlatform, Vec3
from .vector2 import Vector2
from .voronoi_diagram import Face

logger = logging.getLogger(__name__)

MAX_FLT = 3.4028234663852886e38
"""Largest single-precision float: the radius of a cell without edges."""

BOUNDS_MARGIN = 0.05
"""How much larger than the bounds the box used to close open cells is."""

Edge = tuple[Vec3, Vec3]


@dataclass
class VoronoiBounds:
    """The rectangle the sites move in and the cells are clipped to."""

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 1.0
    max_y: float = 1.0

    def center(self) -> Vec3:
        return ((self.max_x + self.min_x) / 2.0, (self.max_y + self.min_y) / 2.0, 0.0)

    def extent(self) -> Vec3:
        return ((self.max_x - self.min_x) / 2.0, (self.max_y - self.min_y) / 2.0, 0.0)


def point_distance_to_segment(
    point: Sequence[float], start: Sequence[float], end: Sequence[float]
) -> float:
    """Return the distance from ``point`` to the segment from ``start`` to ``end``."""
    segment = [e - s for s, e in zip(start, end)]
    length_sq = sum(c * c for c in segment)
    if length_sq == 0.0:
        closest = list(start)
    else:
        t = sum((p - s) * c for p, s, c in zip(point, start, segment)) / length_sq
        t = min(max(t, 0.0), 1.0)
        closest = [s + t * c for s, c in zip(start, segment)]
    return math.dist(point, closest)


def _face_edges(face: Face) -> Iterator[Edge]:
    """Yield the bounded edges around a face, starting from the first one."""
    outer = face.outer_component
    if outer is None:
        return
    half_edge = outer
    while half_edge.prev is not None:
        half_edge = half_edge.prev
        if half_edge is outer:
            break
    start = half_edge
    while half_edge is not None:
        if half_edge.origin is not None and half_edge.destination is not None:
            origin = half_edge.origin.point
            destination = half_edge.destination.point
            yield ((origin.x, origin.y, 0.0), (destination.x, destination.y, 0.0))
        half_edge = half_edge.next
        if half_edge is start:
            break


class PlatformManager:
    """Moves random sites around and keeps a platform on each of their cells.

    Each platform sits at the centroid of its site's cell, raised to a
    random height, and is as wide as the largest circle around that
    centroid which stays inside the cell.
    """

    def __init__(
        self,
        platform_count: int = 5,
        min_height: float = 0.0,
        max_height: float = 100.0,
        min_speed: float = 5.0,
        max_speed: float = 10.0,
        bounds: VoronoiBounds | None = None,
        seed: int = 10,
        mesh_size: float = 1.0,
    ) -> None:
        if platform_count < 0:
            raise ValueError("platform_count must not be negative")
        if mesh_size <= 0.0:
            raise ValueError("mesh_size must be positive")
        self.platform_count = platform_count
        self.min_height = min_height
        self.max_height = max_height
        self.min_speed = min_speed
        self.max_speed = max_speed
        self.bounds = bounds if bounds is not None else VoronoiBounds(-500.0, -500.0, 500.0, 500.0)
        self.seed = seed
        self.mesh_size = mesh_size
        self.location: Vec3 = (0.0, 0.0, 0.0)

        self.sites: list[Vector2] = []
        self.velocities: list[Vector2] = []
        self.heights: list[float] = []
        self.edges: list[list[Edge]] = []
        self.positions: list[Vec3] = []
        self.radii: list[float] = []
        self.platforms: list[MovingPlatform] = []

    # Sites

    def _random_speed(self, rng: random.Random) -> float:
        if rng.random() < 0.5:
            return rng.uniform(-self.max_speed, -self.min_speed)
        return rng.uniform(self.min_speed, self.max_speed)

    def generate_random_points(self) -> None:
        """Draw sites, heights and velocities from the seeded generator."""
        rng = random.Random(self.seed)
        cx, cy, _ = self.bounds.center()
        ex, ey, _ = self.bounds.extent()
        self.sites = []
        self.velocities = []
        self.heights = []
        for _ in range(self.platform_count):
            x = cx + ex * rng.uniform(-1.0, 1.0)
            y = cy + ey * rng.uniform(-1.0, 1.0)
            self.sites.append(Vector2(x, y))
            self.heights.append(rng.uniform(self.min_height, self.max_height))
            vx = self._random_speed(rng)
            vy = self._random_speed(rng)
            self.velocities.append(Vector2(vx, vy))

    def update_random_points(self, dt: float) -> None:
        """Move every site, reversing it when it reaches the bounds."""
        b = self.bounds
        for i, (point, velocity) in enumerate(zip(self.sites, self.velocities)):
            point = point + velocity * dt
            x, y = point.x, point.y
            if x <= b.min_x or x >= b.max_x:
                velocity = -velocity
                x = min(max(x, b.min_x), b.max_x)
            if y <= b.min_y or y >= b.max_y:
                velocity = -velocity
                y = min(max(y, b.min_y), b.max_y)
            self.sites[i] = Vector2(x, y)
            self.velocities[i] = velocity

    # Cells

    def generate_voronoi_edges(self) -> None:
        """Build the diagram of the sites, clipped to the bounds."""
        b = self.bounds
        algorithm = FortuneAlgorithm(self.sites)
        algorithm.construct()
        algorithm.bound(
            Box(
                b.min_x - BOUNDS_MARGIN,
                b.min_y - BOUNDS_MARGIN,
                b.max_x + BOUNDS_MARGIN,
                b.max_y + BOUNDS_MARGIN,
            )
        )
        diagram = algorithm.diagram()
        # A clipping failure still leaves every cell processed; keep what was built.
        with contextlib.suppress(ValueError):
            diagram.intersect(Box(b.min_x, b.min_y, b.max_x, b.max_y))
        self.edges = [
            list(_face_edges(diagram.site(i).face)) for i in range(self.platform_count)
        ]

    def generate_platform_positions(self) -> None:
        """Put each platform at the centroid of its cell, at its height."""
        self.positions = []
        for edges, height in zip(self.edges, self.heights, strict=True):
            area = center_x = center_y = 0.0
            for (x0, y0, _), (x1, y1, _) in edges:
                cross = x0 * y1 - x1 * y0
                center_x += (x0 + x1) * cross
                center_y += (y0 + y1) * cross
                area += cross
            if area == 0.0:
                center_x = center_y = math.nan
            else:
                center_x /= 3.0 * area
                center_y /= 3.0 * area
            self.positions.append((center_x, center_y, height))

    def generate_platform_radii(self) -> None:
        """Give each platform the distance from its centre to the nearest cell edge."""
        self.radii = []
        for edges, (x, y, _) in zip(self.edges, self.positions, strict=True):
            center = (x, y, 0.0)
            self.radii.append(
                min(
                    (point_distance_to_segment(center, a, b) for a, b in edges),
                    default=MAX_FLT,
                )
            )

    def initialize_transform_data(self) -> None:
        self.generate_random_points()
        self.generate_voronoi_edges()
        self.generate_platform_positions()
        self.generate_platform_radii()

    def update_transform_data(self, dt: float) -> None:
        self.update_random_points(dt)
        self.generate_voronoi_edges()
        self.generate_platform_positions()
        self.generate_platform_radii()

    # Platforms

    def _world_position(self, position: Vec3) -> Vec3:
        lx, ly, lz = self.location
        x, y, z = position
        return (lx + x, ly + y, lz + z)

    def _platform_scale(self, radius: float) -> float:
        return radius / self.mesh_size * 2.0

    def create_platforms(self) -> None:
        """Replace the platforms with fresh ones placed on the current cells."""
        self.destroy_platforms()
        for i in range(self.platform_count):
            platform = MovingPlatform()
            if i < len(self.positions) and i < len(self.radii):
                platform.initialize(
                    i,
                    self._world_position(self.positions[i]),
                    self._platform_scale(self.radii[i]),
                )
            else:
                logger.warning(
                    "Platform %d's position or radius is not generated correctly", i
                )
            self.platforms.append(platform)
        logger.info("Created %d platforms", len(self.platforms))

    def update_platforms(self) -> None:
        """Point every platform at its cell's current position and size."""
        for platform, position, radius in zip(self.platforms, self.positions, self.radii):
            platform.update_data(self._world_position(position), self._platform_scale(radius))

    def destroy_platforms(self) -> None:
        self.platforms.clear()

    def tick(self, dt: float) -> None:
        """Advance the sites by ``dt`` and move the platforms along."""
        self.update_transform_data(dt)
        self.update_platforms()
        for platform in self.platforms:
            platform.tick(dt)