"""A Voronoi diagram held as a doubly connected edge list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .box import Box, Side
from .vector2 import Vector2


@dataclass(eq=False)
class Site:
    """A generating point of the diagram and the face around it."""

    index: int
    point: Vector2
    face: Face | None = field(default=None, repr=False)


@dataclass(eq=False)
class Vertex:
    """A vertex of the diagram."""

    point: Vector2


@dataclass(eq=False)
class HalfEdge:
    """One side of an edge, bordering a single face."""

    incident_face: Face | None = field(default=None, repr=False)
    origin: Vertex | None = None
    destination: Vertex | None = None
    twin: HalfEdge | None = field(default=None, repr=False)
    prev: HalfEdge | None = field(default=None, repr=False)
    next: HalfEdge | None = field(default=None, repr=False)


@dataclass(eq=False)
class Face:
    """The cell of a site; ``outer_component`` is one half-edge on its border."""

    site: Site
    outer_component: HalfEdge | None = field(default=None, repr=False)


class VoronoiDiagram:
    """Sites, faces, vertices and half-edges of a Voronoi diagram."""

    def __init__(self, points: Iterable[Vector2 | tuple[float, float]]) -> None:
        self._sites: list[Site] = []
        self._faces: list[Face] = []
        for i, point in enumerate(points):
            if not isinstance(point, Vector2):
                point = Vector2(*point)
            site = Site(i, point)
            face = Face(site)
            site.face = face
            self._sites.append(site)
            self._faces.append(face)
        # Dicts keep insertion order and allow removal by identity.
        self._vertices: dict[Vertex, None] = {}
        self._half_edges: dict[HalfEdge, None] = {}

    def site(self, i: int) -> Site:
        return self._sites[i]

    def face(self, i: int) -> Face:
        return self._faces[i]

    def __len__(self) -> int:
        return len(self._sites)

    def vertices(self) -> list[Vertex]:
        return list(self._vertices)

    def half_edges(self) -> list[HalfEdge]:
        return list(self._half_edges)

    def create_vertex(self, point: Vector2) -> Vertex:
        vertex = Vertex(point)
        self._vertices[vertex] = None
        return vertex

    def create_corner(self, box: Box, side: Side) -> Vertex:
        """Create the corner that starts ``side`` when walking counter-clockwise."""
        corners = {
            Side.LEFT: Vector2(box.left, box.top),
            Side.BOTTOM: Vector2(box.left, box.bottom),
            Side.RIGHT: Vector2(box.right, box.bottom),
            Side.TOP: Vector2(box.right, box.top),
        }
        return self.create_vertex(corners[Side(side)])

    def create_half_edge(self, face: Face) -> HalfEdge:
        half_edge = HalfEdge(incident_face=face)
        self._half_edges[half_edge] = None
        if face.outer_component is None:
            face.outer_component = half_edge
        return half_edge

    def intersect(self, box: Box) -> None:
        """Clip every face of a bounded diagram to ``box``.

        The whole diagram is processed; if some edge could not be clipped
        consistently, ValueError is raised afterwards.
        """
        error = False
        processed: set[HalfEdge] = set()
        to_remove: set[Vertex] = set()
        for site in self._sites:
            face = site.face
            start = face.outer_component
            if start is None:
                continue
            half_edge: HalfEdge | None = start
            inside = box.contains(half_edge.origin.point)
            dirty = not inside
            incoming: HalfEdge | None = None
            outgoing: HalfEdge | None = None
            incoming_side = outgoing_side = Side.LEFT
            while True:
                crossings = box.intersections(
                    half_edge.origin.point, half_edge.destination.point
                )
                next_inside = box.contains(half_edge.destination.point)
                next_half_edge = half_edge.next
                if not inside and not next_inside:
                    if not crossings:
                        to_remove.add(half_edge.origin)
                        self._remove_half_edge(half_edge)
                    elif len(crossings) == 2:
                        to_remove.add(half_edge.origin)
                        if half_edge.twin in processed:
                            half_edge.origin = half_edge.twin.destination
                            half_edge.destination = half_edge.twin.origin
                        else:
                            half_edge.origin = self.create_vertex(crossings[0].point)
                            half_edge.destination = self.create_vertex(crossings[1].point)
                        if outgoing is not None:
                            self._link(box, outgoing, outgoing_side, half_edge, crossings[0].side)
                        if incoming is None:
                            incoming = half_edge
                            incoming_side = crossings[0].side
                        outgoing = half_edge
                        outgoing_side = crossings[1].side
                        processed.add(half_edge)
                    else:
                        error = True
                elif inside and not next_inside:
                    if len(crossings) == 1:
                        if half_edge.twin in processed:
                            half_edge.destination = half_edge.twin.origin
                        else:
                            half_edge.destination = self.create_vertex(crossings[0].point)
                        outgoing = half_edge
                        outgoing_side = crossings[0].side
                        processed.add(half_edge)
                    else:
                        error = True
                elif not inside and next_inside:
                    if len(crossings) == 1:
                        to_remove.add(half_edge.origin)
                        if half_edge.twin in processed:
                            half_edge.origin = half_edge.twin.destination
                        else:
                            half_edge.origin = self.create_vertex(crossings[0].point)
                        if outgoing is not None:
                            self._link(box, outgoing, outgoing_side, half_edge, crossings[0].side)
                        if incoming is None:
                            incoming = half_edge
                            incoming_side = crossings[0].side
                        processed.add(half_edge)
                    else:
                        error = True
                half_edge = next_half_edge
                inside = next_inside
                if half_edge is None:
                    error = True
                    break
                if half_edge is start:
                    break
            if dirty and incoming is not None:
                self._link(box, outgoing, outgoing_side, incoming, incoming_side)
            if dirty:
                face.outer_component = incoming
        for vertex in to_remove:
            self._remove_vertex(vertex)
        if error:
            raise ValueError("the diagram could not be intersected with the box")

    def _link(
        self,
        box: Box,
        start: HalfEdge,
        start_side: Side,
        end: HalfEdge,
        end_side: Side,
    ) -> None:
        """Join ``start`` to ``end`` along the box border, adding corners."""
        half_edge = start
        side = Side(start_side)
        while side != end_side:
            side = Side((side + 1) % 4)
            following = self.create_half_edge(start.incident_face)
            half_edge.next = following
            following.prev = half_edge
            following.origin = half_edge.destination
            following.destination = self.create_corner(box, side)
            half_edge = following
        closing = self.create_half_edge(start.incident_face)
        half_edge.next = closing
        closing.prev = half_edge
        end.prev = closing
        closing.next = end
        closing.origin = half_edge.destination
        closing.destination = end.origin

    def _remove_vertex(self, vertex: Vertex) -> None:
        self._vertices.pop(vertex, None)

    def _remove_half_edge(self, half_edge: HalfEdge) -> None:
        self._half_edges.pop(half_edge, None)