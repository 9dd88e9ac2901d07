"""A binary max-heap whose elements track their own position."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar


class _Indexed(Protocol):
    index: int

    def __lt__(self, other: object) -> bool: ...


T = TypeVar("T", bound=_Indexed)


def _parent(i: int) -> int:
    return (i + 1) // 2 - 1


class PriorityQueue(Generic[T]):
    """A max-heap ordered by ``<``.

    Every element gets an ``index`` attribute holding its current position,
    so it can later be removed or updated in place.
    """

    def __init__(self) -> None:
        self._elements: list[T] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    def push(self, elem: T) -> None:
        elem.index = len(self._elements)
        self._elements.append(elem)
        self._sift_up(len(self._elements) - 1)

    def pop(self) -> T:
        """Remove and return the greatest element."""
        if not self._elements:
            raise IndexError("pop from an empty priority queue")
        self._swap(0, len(self._elements) - 1)
        top = self._elements.pop()
        if self._elements:
            self._sift_down(0)
        return top

    def update(self, i: int) -> None:
        """Restore the heap order after the element at ``i`` changed."""
        self._check_index(i)
        parent = _parent(i)
        if parent >= 0 and self._elements[parent] < self._elements[i]:
            self._sift_up(i)
        else:
            self._sift_down(i)

    def remove(self, i: int) -> None:
        """Remove the element at position ``i``."""
        self._check_index(i)
        self._swap(i, len(self._elements) - 1)
        self._elements.pop()
        if i < len(self._elements):
            self.update(i)

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self._elements):
            raise IndexError(f"priority queue index out of range: {i}")

    def _sift_down(self, i: int) -> None:
        size = len(self._elements)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            j = i
            if left < size and self._elements[j] < self._elements[left]:
                j = left
            if right < size and self._elements[j] < self._elements[right]:
                j = right
            if j == i:
                return
            self._swap(i, j)
            i = j

    def _sift_up(self, i: int) -> None:
        parent = _parent(i)
        while parent >= 0 and self._elements[parent] < self._elements[i]:
            self._swap(i, parent)
            i = parent
            parent = _parent(i)

    def _swap(self, i: int, j: int) -> None:
        elements = self._elements
        elements[i], elements[j] = elements[j], elements[i]
        elements[i].index = i
        elements[j].index = j