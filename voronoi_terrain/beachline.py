"""The beach line of Fortune's algorithm: a red-black tree of parabolic arcs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterator

from .vector2 import Vector2

if TYPE_CHECKING:
    from .event import Event
    from .voronoi_diagram import HalfEdge, Site


class Color(Enum):
    RED = auto()
    BLACK = auto()


@dataclass(eq=False)
class Arc:
    """A parabolic arc of the beach line, stored as a red-black tree node.

    ``prev`` and ``next`` link the arcs in left-to-right order.
    """

    site: Site | None
    parent: Arc | None = field(default=None, repr=False)
    left: Arc | None = field(default=None, repr=False)
    right: Arc | None = field(default=None, repr=False)
    prev: Arc | None = field(default=None, repr=False)
    next: Arc | None = field(default=None, repr=False)
    left_half_edge: HalfEdge | None = field(default=None, repr=False)
    right_half_edge: HalfEdge | None = field(default=None, repr=False)
    event: Event | None = field(default=None, repr=False)
    color: Color = Color.RED


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero denominator."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def compute_breakpoint(point1: Vector2, point2: Vector2, l: float) -> float:
    """Return the x of the breakpoint between the arcs of ``point1`` and ``point2``.

    ``point1`` owns the arc on the left of the breakpoint; ``l`` is the
    ordinate of the sweep line.
    """
    x1, y1, x2, y2 = point1.x, point1.y, point2.x, point2.y
    d1 = _div(1.0, 2.0 * (y1 - l))
    d2 = _div(1.0, 2.0 * (y2 - l))
    a = d1 - d2
    b = 2.0 * (x2 * d2 - x1 * d1)
    c = (y1 * y1 + x1 * x1 - l * l) * d1 - (y2 * y2 + x2 * x2 - l * l) * d2
    delta = b * b - 4.0 * a * c
    root = math.sqrt(delta) if delta >= 0.0 else math.nan
    return _div(-b + root, 2.0 * a)


class Beachline:
    """Arcs of the beach line, balanced as a red-black tree."""

    def __init__(self) -> None:
        nil = Arc(site=None, color=Color.BLACK)
        nil.parent = nil.left = nil.right = nil.prev = nil.next = nil
        self._nil = nil
        self._root = nil

    def create_arc(self, site: Site) -> Arc:
        """Create a red arc for ``site`` whose links all point at the sentinel."""
        nil = self._nil
        return Arc(
            site=site,
            parent=nil,
            left=nil,
            right=nil,
            prev=nil,
            next=nil,
            color=Color.RED,
        )

    def is_empty(self) -> bool:
        return self.is_nil(self._root)

    def is_nil(self, x: Arc) -> bool:
        return x is self._nil

    def set_root(self, x: Arc) -> None:
        self._root = x
        x.color = Color.BLACK

    def leftmost_arc(self) -> Arc:
        if self.is_empty():
            raise ValueError("the beach line is empty")
        x = self._root
        while not self.is_nil(x.prev):
            x = x.prev
        return x

    def locate_arc_above(self, point: Vector2, l: float) -> Arc:
        """Return the arc lying above ``point`` when the sweep line is at ``l``."""
        if self.is_empty():
            raise ValueError("the beach line is empty")
        node = self._root
        while True:
            breakpoint_left = -math.inf
            breakpoint_right = math.inf
            if not self.is_nil(node.prev):
                breakpoint_left = compute_breakpoint(node.prev.site.point, node.site.point, l)
            if not self.is_nil(node.next):
                breakpoint_right = compute_breakpoint(node.site.point, node.next.site.point, l)
            if point.x < breakpoint_left:
                node = node.left
            elif point.x > breakpoint_right:
                node = node.right
            else:
                return node

    def insert_before(self, x: Arc, y: Arc) -> None:
        """Insert ``y`` immediately to the left of ``x``."""
        if self.is_nil(x.left):
            x.left = y
            y.parent = x
        else:
            x.prev.right = y
            y.parent = x.prev
        y.prev = x.prev
        if not self.is_nil(y.prev):
            y.prev.next = y
        y.next = x
        x.prev = y
        self._insert_fixup(y)

    def insert_after(self, x: Arc, y: Arc) -> None:
        """Insert ``y`` immediately to the right of ``x``."""
        if self.is_nil(x.right):
            x.right = y
            y.parent = x
        else:
            x.next.left = y
            y.parent = x.next
        y.next = x.next
        if not self.is_nil(y.next):
            y.next.prev = y
        y.prev = x
        x.next = y
        self._insert_fixup(y)

    def replace(self, x: Arc, y: Arc) -> None:
        """Put ``y`` in the place of ``x`` in both the tree and the order."""
        self._transplant(x, y)
        y.left = x.left
        y.right = x.right
        if not self.is_nil(y.left):
            y.left.parent = y
        if not self.is_nil(y.right):
            y.right.parent = y
        y.prev = x.prev
        y.next = x.next
        if not self.is_nil(y.prev):
            y.prev.next = y
        if not self.is_nil(y.next):
            y.next.prev = y
        y.color = x.color

    def remove(self, z: Arc) -> None:
        """Remove ``z``; its ``prev`` and ``next`` links are left untouched."""
        y = z
        y_original_color = y.color
        if self.is_nil(z.left):
            x = z.right
            self._transplant(z, z.right)
        elif self.is_nil(z.right):
            x = z.left
            self._transplant(z, z.left)
        else:
            y = self._minimum(z.right)
            y_original_color = y.color
            x = y.right
            if y.parent is z:
                x.parent = y  # x may be the sentinel
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color
        if y_original_color is Color.BLACK:
            self._remove_fixup(x)
        if not self.is_nil(z.prev):
            z.prev.next = z.next
        if not self.is_nil(z.next):
            z.next.prev = z.prev

    def __iter__(self) -> Iterator[Arc]:
        if self.is_empty():
            return
        arc = self.leftmost_arc()
        while not self.is_nil(arc):
            yield arc
            arc = arc.next

    def __str__(self) -> str:
        return " ".join(str(arc.site.index) for arc in self)

    def _minimum(self, x: Arc) -> Arc:
        while not self.is_nil(x.left):
            x = x.left
        return x

    def _transplant(self, u: Arc, v: Arc) -> None:
        if self.is_nil(u.parent):
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def _insert_fixup(self, z: Arc) -> None:
        while z.parent.color is Color.RED:
            grandparent = z.parent.parent
            if z.parent is grandparent.left:
                uncle = grandparent.right
                if uncle.color is Color.RED:
                    z.parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    z = grandparent
                else:
                    if z is z.parent.right:
                        z = z.parent
                        self._left_rotate(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._right_rotate(z.parent.parent)
            else:
                uncle = grandparent.left
                if uncle.color is Color.RED:
                    z.parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    z = grandparent
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._right_rotate(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._left_rotate(z.parent.parent)
        self._root.color = Color.BLACK

    def _remove_fixup(self, x: Arc) -> None:
        while x is not self._root and x.color is Color.BLACK:
            if x is x.parent.left:
                w = x.parent.right
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    x.parent.color = Color.RED
                    self._left_rotate(x.parent)
                    w = x.parent.right
                if w.left.color is Color.BLACK and w.right.color is Color.BLACK:
                    w.color = Color.RED
                    x = x.parent
                else:
                    if w.right.color is Color.BLACK:
                        w.left.color = Color.BLACK
                        w.color = Color.RED
                        self._right_rotate(w)
                        w = x.parent.right
                    w.color = x.parent.color
                    x.parent.color = Color.BLACK
                    w.right.color = Color.BLACK
                    self._left_rotate(x.parent)
                    x = self._root
            else:
                w = x.parent.left
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    x.parent.color = Color.RED
                    self._right_rotate(x.parent)
                    w = x.parent.left
                if w.left.color is Color.BLACK and w.right.color is Color.BLACK:
                    w.color = Color.RED
                    x = x.parent
                else:
                    if w.left.color is Color.BLACK:
                        w.right.color = Color.BLACK
                        w.color = Color.RED
                        self._left_rotate(w)
                        w = x.parent.left
                    w.color = x.parent.color
                    x.parent.color = Color.BLACK
                    w.left.color = Color.BLACK
                    self._right_rotate(x.parent)
                    x = self._root
        x.color = Color.BLACK

    def _left_rotate(self, x: Arc) -> None:
        y = x.right
        x.right = y.left
        if not self.is_nil(y.left):
            y.left.parent = x
        y.parent = x.parent
        if self.is_nil(x.parent):
            self._root = y
        elif x.parent.left is x:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _right_rotate(self, y: Arc) -> None:
        x = y.left
        y.left = x.right
        if not self.is_nil(x.right):
            x.right.parent = y
        x.parent = y.parent
        if self.is_nil(y.parent):
            self._root = x
        elif y.parent.left is y:
            y.parent.left = x
        else:
            y.parent.right = x
        x.right = y
        y.parent = x