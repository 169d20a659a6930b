"""
Set.

An unordered collection without duplicates, backed by a Map whose values
are a marker. Uniqueness is whatever the Map's key function says: object
identity by default, any user-defined policy with ``Set.with_key``.

Example:
    Set(1, 2, 3).union(Set(3, 4)) -> Set(1, 2, 3, 4)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Self

from functional_collections.hash_map import Map
from functional_collections.identity import KeyFunction

if TYPE_CHECKING:
    from functional_collections.list import List

_PRESENT = object()


class Set:
    """Unordered collection of unique items."""

    def __init__(self, *items: Any, key_fn: KeyFunction | None = None) -> None:
        self.map = Map(key_fn=key_fn)
        for item in items:
            self.add(item)

    @classmethod
    def from_array(cls, array: list, key_fn: KeyFunction | None = None) -> Self:
        """Create a Set holding the array items."""
        return cls(*array, key_fn=key_fn)

    @classmethod
    def with_key(cls, key_fn: KeyFunction, *items: Any) -> Self:
        """Create a Set deciding item equality with ``key_fn`` instead of identity."""
        return cls(*items, key_fn=key_fn)

    @property
    def key_fn(self) -> KeyFunction:
        return self.map.key_fn

    def add(self, item: Any) -> bool:
        """Add an item; return False if it was already present."""
        if self.contains(item):
            return False
        self.map.put(item, _PRESENT)
        return True

    def contains(self, item: Any) -> bool:
        """Check whether this set contains an item."""
        return self.map.contains_key(item)

    def remove(self, item: Any) -> bool:
        """Remove an item; return False if it was not present."""
        return self.map.remove(item) is _PRESENT

    def remove_if(self, predicate: Callable[[Any], bool]) -> Self:
        """Remove every item satisfying a predicate."""
        self.map.remove_if(lambda item, _marker: predicate(item))
        return self

    def remove_all(self) -> Self:
        """Remove every item."""
        self.map.remove_all()
        return self

    def each(self, callback: Callable[[Any], Any]) -> None:
        """Call ``callback(item)`` for every item."""
        self.map.each(lambda item, _marker: callback(item))

    def size(self) -> int:
        """Return the number of items."""
        return self.map.size()

    def is_empty(self) -> bool:
        return self.map.is_empty()

    # -------------------------------------------------------------------------
    # Set Algebra
    # -------------------------------------------------------------------------

    def union(self, other: Set) -> Set:
        """Return a new set of the items in this set or in the other."""
        result = self._empty()
        self.each(result.add)
        other.each(result.add)
        return result

    def intersect(self, other: Set) -> Set:
        """Return a new set of the items in both this set and the other."""
        return self._filter(other.contains)

    def diff(self, other: Set) -> Set:
        """Return a new set of the items of this set missing from the other."""
        return self._filter(lambda item: not other.contains(item))

    def _filter(self, predicate: Callable[[Any], bool]) -> Set:
        result = self._empty()
        for item in self.map.keys().items:
            if predicate(item):
                result.add(item)
        return result

    def _empty(self) -> Set:
        return Set(key_fn=self.key_fn)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_list(self) -> List:
        """Convert this set to a List."""
        return self.map.keys()

    def to_array(self) -> list:
        """Convert this set to a Python list."""
        return self.to_list().items

    def clone(self) -> Self:
        """Create a copy of this set with the same key function."""
        return type(self).from_array(self.to_array(), key_fn=self.key_fn)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_array())

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def __str__(self) -> str:
        return "Set(" + ", ".join(str(item) for item in self.to_array()) + ")"

    __repr__ = __str__
