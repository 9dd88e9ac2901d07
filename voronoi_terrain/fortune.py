"""Fortune's sweep-line algorithm for building Voronoi diagrams."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable

from .beachline import Arc, Beachline
from .box import Box, Side
from .event import Event, EventType, circle_event, site_event
from .priority_queue import PriorityQueue
from .vector2 import Vector2
from .voronoi_diagram import HalfEdge, Site, Vertex, VoronoiDiagram


def compute_convergence_point(
    point1: Vector2, point2: Vector2, point3: Vector2
) -> tuple[Vector2, float]:
    """Return the centre of the circle through three points and its lowest y.

    Raises ValueError when the points are collinear.
    """
    v1 = (point1 - point2).orthogonal()
    v2 = (point2 - point3).orthogonal()
    denominator = v1.det(v2)
    if denominator == 0.0:
        raise ValueError("the points are collinear")
    delta = 0.5 * (point3 - point1)
    t = delta.det(v2) / denominator
    center = 0.5 * (point1 + point2) + t * v1
    r = center.distance(point1)
    return center, center.y - r


@dataclass(eq=False)
class _LinkedVertex:
    prev_half_edge: HalfEdge | None
    vertex: Vertex
    next_half_edge: HalfEdge | None


class FortuneAlgorithm:
    """Builds the Voronoi diagram of a set of points."""

    def __init__(self, points: Iterable[Vector2 | tuple[float, float]]) -> None:
        self._diagram = VoronoiDiagram(points)
        self._beachline = Beachline()
        self._events: PriorityQueue[Event] = PriorityQueue()
        self._beachline_y = 0.0

    def construct(self) -> None:
        """Sweep over all sites, filling in the diagram's vertices and edges."""
        for i in range(len(self._diagram)):
            self._events.push(site_event(self._diagram.site(i)))
        while self._events:
            event = self._events.pop()
            self._beachline_y = event.y
            if event.kind is EventType.SITE:
                self._handle_site_event(event)
            else:
                self._handle_circle_event(event)

    def diagram(self) -> VoronoiDiagram:
        return self._diagram

    # Algorithm

    def _handle_site_event(self, event: Event) -> None:
        site = event.site
        beachline = self._beachline
        if beachline.is_empty():
            beachline.set_root(beachline.create_arc(site))
            return
        arc_to_break = beachline.locate_arc_above(site.point, self._beachline_y)
        self._delete_event(arc_to_break)
        middle = self._break_arc(arc_to_break, site)
        left, right = middle.prev, middle.next
        self._add_edge(left, middle)
        middle.right_half_edge = middle.left_half_edge
        right.left_half_edge = left.right_half_edge
        if not beachline.is_nil(left.prev):
            self._add_event(left.prev, left, middle)
        if not beachline.is_nil(right.next):
            self._add_event(middle, right, right.next)

    def _handle_circle_event(self, event: Event) -> None:
        arc = event.arc
        vertex = self._diagram.create_vertex(event.point)
        left, right = arc.prev, arc.next
        self._delete_event(left)
        self._delete_event(right)
        self._remove_arc(arc, vertex)
        if not self._beachline.is_nil(left.prev):
            self._add_event(left.prev, left, right)
        if not self._beachline.is_nil(right.next):
            self._add_event(left, right, right.next)

    # Arcs

    def _break_arc(self, arc: Arc, site: Site) -> Arc:
        beachline = self._beachline
        middle = beachline.create_arc(site)
        left = beachline.create_arc(arc.site)
        left.left_half_edge = arc.left_half_edge
        right = beachline.create_arc(arc.site)
        right.right_half_edge = arc.right_half_edge
        beachline.replace(arc, middle)
        beachline.insert_before(middle, left)
        beachline.insert_after(middle, right)
        return middle

    def _remove_arc(self, arc: Arc, vertex: Vertex) -> None:
        self._set_destination(arc.prev, arc, vertex)
        self._set_destination(arc, arc.next, vertex)
        arc.left_half_edge.next = arc.right_half_edge
        arc.right_half_edge.prev = arc.left_half_edge
        self._beachline.remove(arc)
        prev_half_edge = arc.prev.right_half_edge
        next_half_edge = arc.next.left_half_edge
        self._add_edge(arc.prev, arc.next)
        self._set_origin(arc.prev, arc.next, vertex)
        _join(arc.prev.right_half_edge, prev_half_edge)
        _join(next_half_edge, arc.next.left_half_edge)

    # Edges

    def _add_edge(self, left: Arc, right: Arc) -> None:
        left.right_half_edge = self._diagram.create_half_edge(left.site.face)
        right.left_half_edge = self._diagram.create_half_edge(right.site.face)
        left.right_half_edge.twin = right.left_half_edge
        right.left_half_edge.twin = left.right_half_edge

    @staticmethod
    def _set_origin(left: Arc, right: Arc, vertex: Vertex) -> None:
        left.right_half_edge.destination = vertex
        right.left_half_edge.origin = vertex

    @staticmethod
    def _set_destination(left: Arc, right: Arc, vertex: Vertex) -> None:
        left.right_half_edge.origin = vertex
        right.left_half_edge.destination = vertex

    # Events

    def _add_event(self, left: Arc, middle: Arc, right: Arc) -> None:
        try:
            convergence, y = compute_convergence_point(
                left.site.point, middle.site.point, right.site.point
            )
        except ValueError:
            return
        is_below = y <= self._beachline_y
        if is_below and _breakpoint_converges(left, middle, convergence.x) and (
            _breakpoint_converges(middle, right, convergence.x)
        ):
            event = circle_event(y, convergence, middle)
            middle.event = event
            self._events.push(event)

    def _delete_event(self, arc: Arc) -> None:
        if arc.event is not None:
            self._events.remove(arc.event.index)
            arc.event = None

    # Bounding

    def bound(self, box: Box) -> None:
        """Close every unbounded cell with the border of ``box``.

        The box is enlarged as needed so that it holds every vertex.
        """
        box = dataclasses.replace(box)
        for vertex in self._diagram.vertices():
            box.left = min(vertex.point.x, box.left)
            box.bottom = min(vertex.point.y, box.bottom)
            box.right = max(vertex.point.x, box.right)
            box.top = max(vertex.point.y, box.top)

        cells: dict[int, list[_LinkedVertex | None]] = {}
        for left, right in pairwise(self._beachline):
            direction = (left.site.point - right.site.point).orthogonal()
            origin = (left.site.point + right.site.point) * 0.5
            intersection = box.first_intersection(origin, direction)
            vertex = self._diagram.create_vertex(intersection.point)
            self._set_destination(left, right, vertex)
            side = int(intersection.side)
            left_cell = cells.setdefault(left.site.index, [None] * 8)
            right_cell = cells.setdefault(right.site.index, [None] * 8)
            left_cell[2 * side + 1] = _LinkedVertex(None, vertex, left.right_half_edge)
            right_cell[2 * side] = _LinkedVertex(right.left_half_edge, vertex, None)

        for cell in cells.values():
            # The first side is checked twice so that every needed corner is added.
            for i in range(5):
                side = i % 4
                next_side = (side + 1) % 4
                if cell[2 * side] is None and cell[2 * side + 1] is not None:
                    prev_side = (side + 3) % 4
                    corner = self._diagram.create_corner(box, Side(side))
                    linked = _LinkedVertex(None, corner, None)
                    cell[2 * prev_side + 1] = linked
                    cell[2 * side] = linked
                elif cell[2 * side] is not None and cell[2 * side + 1] is None:
                    corner = self._diagram.create_corner(box, Side(next_side))
                    linked = _LinkedVertex(None, corner, None)
                    cell[2 * side + 1] = linked
                    cell[2 * next_side] = linked

        for index, cell in cells.items():
            for side in range(4):
                start, end = cell[2 * side], cell[2 * side + 1]
                if start is None:
                    continue
                half_edge = self._diagram.create_half_edge(self._diagram.face(index))
                half_edge.origin = start.vertex
                half_edge.destination = end.vertex
                start.next_half_edge = half_edge
                half_edge.prev = start.prev_half_edge
                if start.prev_half_edge is not None:
                    start.prev_half_edge.next = half_edge
                end.prev_half_edge = half_edge
                half_edge.next = end.next_half_edge
                if end.next_half_edge is not None:
                    end.next_half_edge.prev = half_edge


def _join(prev: HalfEdge, following: HalfEdge) -> None:
    prev.next = following
    following.prev = prev


def _breakpoint_converges(left: Arc, right: Arc, x: float) -> bool:
    """Tell whether the breakpoint between two arcs moves towards ``x``."""
    moving_right = left.site.point.y < right.site.point.y
    initial_x = left.site.point.x if moving_right else right.site.point.x
    return initial_x < x if moving_right else initial_x > x