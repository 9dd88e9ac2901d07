"""Events processed by the sweep line of Fortune's algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from .vector2 import Vector2
from .voronoi_diagram import Site


class EventType(Enum):
    SITE = auto()
    CIRCLE = auto()


@dataclass(eq=False)
class Event:
    """A site or circle event, ordered by its ``y`` coordinate."""

    kind: EventType
    y: float
    site: Site | None = None
    point: Vector2 = field(default_factory=Vector2)
    arc: Any = field(default=None, repr=False)
    index: int = -1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.y < other.y

    def __str__(self) -> str:
        if self.kind is EventType.SITE:
            return f"S({self.site.index}, {self.y:g})"
        return f"C({id(self.arc):#x}, {self.y:g}, {self.point})"


def site_event(site: Site) -> Event:
    """Create the event that occurs when the sweep line reaches ``site``."""
    return Event(EventType.SITE, site.point.y, site=site)


def circle_event(y: float, point: Vector2, arc: Any) -> Event:
    """Create the event where ``arc`` disappears, with circle centre ``point``."""
    return Event(EventType.CIRCLE, y, point=point, arc=arc)