"""
List.

An ordered, index-addressable and mutable collection backed by a Python
list. List has access to every Sequence and Iterable operation.

Example:
    List(1, 2, 3).add(4) -> List(1, 2, 3, 4)
    range(1, 4) -> List(1, 2, 3, 4)
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Self

from functional_collections.sequence import Sequence
from functional_collections.utils.errors import IndexOutOfRangeError
from functional_collections.utils.sentinels import ABSENT, Absent

if TYPE_CHECKING:
    from functional_collections.set import Set

Comparator = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    """Compare two items with < and >."""
    return -1 if a < b else 1 if a > b else 0


class List(Sequence):
    """Ordered mutable sequence."""

    type_name = "List"

    def __init__(self, *items: Any) -> None:
        self.items = list(items)

    @classmethod
    def from_array(cls, array: list) -> Self:
        """Create a List holding a copy of the array items."""
        return cls(*array)

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def add(self, item: Any) -> Self:
        """Append an item."""
        self.items.append(item)
        self._changed()
        return self

    def add_at(self, item: Any, index: int) -> Self:
        """Insert an item at an index between 0 and size inclusive."""
        if index < 0 or index > self.size():
            raise IndexOutOfRangeError("add_at", index, self.size())
        self.items.insert(index, item)
        self._changed()
        return self

    def update(self, index: int, item: Any) -> Self:
        """Replace the item at an existing index."""
        if index < 0 or index >= self.size():
            raise IndexOutOfRangeError("update", index, self.size())
        self.items[index] = item
        self._changed()
        return self

    def insert(self, item: Any, sort_fn: Comparator | None = None) -> Self:
        """
        Insert an item into this sorted list using binary search.

        ``sort_fn`` must be the comparator the list is ordered by; items
        comparing equal keep their order and the new item goes after them.

        Example:
            List(1, 2, 4).insert(3) -> List(1, 2, 3, 4)
        """
        key = cmp_to_key(sort_fn or natural_order)
        return self.add_at(item, bisect_right(self.items, key(item), key=key))

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def remove(self, item: Any) -> Any | Absent:
        """Remove the first occurrence of an item and return it, or ABSENT."""
        index = self.index_of(item)
        if index < 0:
            return ABSENT
        return self.remove_at(index)

    def remove_at(self, index: int) -> Any:
        """Remove and return the item at an index."""
        if index < 0 or index >= self.size():
            raise IndexOutOfRangeError("remove_at", index, self.size())
        item = self.items.pop(index)
        self._changed()
        return item

    def remove_first(self) -> Any:
        """Remove and return the first item; the mutating drop(1)."""
        self._assert_not_empty("remove_first")
        return self.remove_at(0)

    def remove_last(self) -> Any:
        """Remove and return the last item; the mutating drop_right(1)."""
        self._assert_not_empty("remove_last")
        return self.remove_at(self.size() - 1)

    def remove_all(self) -> Self:
        """Remove every item."""
        self.items.clear()
        self._changed()
        return self

    def remove_if(self, predicate: Callable[[Any], bool]) -> List:
        """
        Remove every item satisfying a predicate.

        Returns the List of removed items; the mutating, reversed filter().
        """
        removed: list = []
        kept: list = []
        for item in self.items:
            (removed if predicate(item) else kept).append(item)
        self.items[:] = kept
        self._changed()
        return List.from_array(removed)

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def sort(self, sort_fn: Comparator | None = None) -> Self:
        """Sort in place, naturally or with a ``cmp(a, b) -> int`` comparator."""
        if sort_fn is None:
            self.items.sort()
        else:
            self.items.sort(key=cmp_to_key(sort_fn))
        self._changed()
        return self

    def sort_by(self, extractor: Callable[[Any], Any]) -> Self:
        """Sort in place, stably and ascending, by an extracted key."""
        self.items.sort(key=extractor)
        self._changed()
        return self

    def to_set(self) -> Set:
        """Convert this list to a Set."""
        from functional_collections.set import Set

        return Set.from_array(self.items)

    def _changed(self) -> None:
        """Called after every mutation."""
        pass


class _IntRange(List):
    """A List of consecutive integers answering contains() in O(1) until mutated."""

    def __init__(self, *items: Any) -> None:
        super().__init__(*items)
        self._bounds: tuple[int, int] | None = None

    def contains(self, item: Any) -> bool:
        if self._bounds is None:
            return super().contains(item)
        low, high = self._bounds
        return type(item) is int and low <= item <= high

    def _changed(self) -> None:
        self._bounds = None

    def _create_new(self, array: list) -> List:
        return List.from_array(array)


def range(start: int | None = None, stop: int | None = None, step: int = 1) -> List:
    """
    Return a List of integers from start to stop inclusive, moving by step.

    ``range(n)`` is a shortcut for the n first integers, starting from 0.

    Example:
        range(5) -> List(0, 1, 2, 3, 4)
        range(1, 4) -> List(1, 2, 3, 4)
        range(2, -4, -1) -> List(2, 1, 0, -1, -2, -3, -4)
    """
    if start is None:
        return List()
    if stop is None:
        start, stop = 0, start - 1
    if step == 0:
        raise ValueError("range() step must not be zero")

    items = []
    current = start
    while (step > 0 and current <= stop) or (step < 0 and current >= stop):
        items.append(current)
        current += step

    result = _IntRange(*items)
    if step == 1:
        result._bounds = (start, stop)
    return result
