"""Fortune's algorithm for Voronoi diagrams and moving platforms placed on their cells."""

__version__ = "0.1.0"

__all__ = [
    "beachline",
    "box",
    "event",
    "fortune",
    "manager",
    "platform",
    "priority_queue",
    "vector2",
    "voronoi_diagram",
]