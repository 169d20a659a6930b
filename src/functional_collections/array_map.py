"""
Order-Preserving Map.

ArrayMap is a Map that remembers insertion order. It composes a Map,
for O(1) lookups, with a Python list of the very same Entry objects, so
an ordered list of pairs is always ready without being rebuilt. Putting
an existing key again replaces the value in place and keeps its position.

Removing a key has to find its entry in the list. Every entry carries an
insertion index hint: its position when it was appended. Later removals
only shift entries to the left, so an entry's real position is never past
its hint. The search ceiling is therefore ``min(hint, len(items) - 1)``:

- below LINEAR_SEARCH_THRESHOLD, the list is scanned backwards from there
- otherwise a binary search over hints narrows the position down

Hints only grow along the list until entries are removed and new keys are
appended with smaller hints, so the binary search result is checked and a
backward scan from the ceiling takes over when it missed. Removal is
O(log n) on average.

Example:
    m = ArrayMap(1, "a", 2, "b")
    m.put(0, "z")
    m.remove(1)
    m.keys() -> List(2, 0)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Self

from functional_collections.hash_map import Entry, Map, init_pairs
from functional_collections.identity import KeyFunction
from functional_collections.iterable import Iterable, Pair, is_array_of_pairs
from functional_collections.utils.errors import ConstructionError
from functional_collections.utils.sentinels import ABSENT, Absent

if TYPE_CHECKING:
    from functional_collections.list import List

logger = logging.getLogger(__name__)

LINEAR_SEARCH_THRESHOLD = 10


def add_all(target: ArrayMap, array: list) -> None:
    """Put pairs, Pair named tuples or entries into an ArrayMap, in order."""
    for item in array:
        if isinstance(item, Entry):
            target.put(item.key, item.value)
        elif isinstance(item, tuple) and len(item) == 2:
            target.put(item[0], item[1])
        else:
            raise ConstructionError(
                f"an ArrayMap can only be built from pairs or entries, got {item!r}"
            )


class ArrayMap(Iterable):
    """Key-value collection ordered by insertion."""

    type_name = "ArrayMap"

    def __init__(self, *pairs: Any, key_fn: KeyFunction | None = None) -> None:
        self._map = Map(key_fn=key_fn)
        self.items: list[Entry] = []
        init_pairs(self, pairs)

    @classmethod
    def from_array(cls, array: list, key_fn: KeyFunction | None = None) -> Self:
        """Create an ArrayMap from a list of (key, value) pairs or entries."""
        result = cls(key_fn=key_fn)
        add_all(result, array)
        return result

    @classmethod
    def with_key(cls, key_fn: KeyFunction, *pairs: Any) -> Self:
        """Create an ArrayMap deciding key equality with ``key_fn`` instead of identity."""
        return cls(*pairs, key_fn=key_fn)

    @property
    def key_fn(self) -> KeyFunction:
        return self._map.key_fn

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def put(self, key: Any, value: Any) -> Any | Absent:
        """
        Associate a value with a key.

        Returns the previous value, or ABSENT if the key is new. A replaced
        value keeps the insertion position of the key.
        """
        previous = self._map.put(key, value)
        entry = self._map._added_entry
        if entry.hint < 0:
            self._add_entry_item(entry)
        return previous

    def remove(self, key: Any) -> Any | Absent:
        """Remove a key and return its value, or ABSENT if it was not there."""
        self._map._removed_entry = None
        value = self._map.remove(key)
        if self._map._removed_entry is not None:
            self._remove_entry_item(self._map._removed_entry)
        return value

    def remove_if(self, predicate: Callable[[Any, Any], bool]) -> Self:
        """Remove every key-value pair satisfying ``predicate(key, value)``."""
        for entry in list(self.items):
            if predicate(entry.key, entry.value):
                self.remove(entry.key)
        return self

    def remove_all(self) -> Self:
        """Remove every key-value pair."""
        self._map.remove_all()
        self.items = []
        return self

    def get_or_put(self, key: Any, default: Any) -> Any:
        """
        Return the value of a key, storing a default first if the key is missing.

        A callable default is treated as a supplier and only called on a miss.
        A stored default is appended to the insertion order.
        """
        value = self._map.get_or_put(key, default)
        entry = self._map._added_entry
        if entry is not None and entry.hint < 0:
            self._add_entry_item(entry)
        return value

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, key: Any, default: Any = ABSENT) -> Any:
        """Return the value of a key, or ``default`` (ABSENT) if missing."""
        return self._map.get(key, default)

    def contains_key(self, key: Any) -> bool:
        """Check whether a key is bound, even to None."""
        return self._map.contains_key(key)

    def contains_value(self, value: Any) -> bool:
        """Check whether a value is bound at least once."""
        return self._map.contains_value(value)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def keys(self) -> List:
        """Return a List of the keys, in insertion order."""
        from functional_collections.list import List

        return List.from_array([entry.key for entry in self.items])

    def values(self) -> List:
        """Return a List of the values, in the insertion order of their keys."""
        from functional_collections.list import List

        return List.from_array([entry.value for entry in self.items])

    def key_sorted(self, key: Callable[[Any], Any] | None = None, reverse: bool = False) -> Self:
        """Return a new ArrayMap ordered by key, or by ``key`` applied to each key."""
        return self._sorted_by(lambda pair: pair.key, key, reverse)

    def value_sorted(
        self, key: Callable[[Any], Any] | None = None, reverse: bool = False
    ) -> Self:
        """Return a new ArrayMap ordered by value, or by ``key`` applied to each value."""
        return self._sorted_by(lambda pair: pair.value, key, reverse)

    def _sorted_by(
        self,
        field: Callable[[Pair], Any],
        key: Callable[[Any], Any] | None,
        reverse: bool,
    ) -> Self:
        extract = field if key is None else (lambda pair: key(field(pair)))
        return self._create_new(sorted(self.to_array(), key=extract, reverse=reverse))

    # -------------------------------------------------------------------------
    # Ordered storage
    # -------------------------------------------------------------------------

    def _add_entry_item(self, entry: Entry) -> None:
        self.items.append(entry)
        entry.hint = len(self.items) - 1

    def _remove_entry_item(self, entry: Entry) -> None:
        max_index = min(entry.hint, len(self.items) - 1)

        if max_index < LINEAR_SEARCH_THRESHOLD:
            index = self._entry_index_linear_search(entry, max_index)
        else:
            index = self._entry_index_binary_search(entry, max_index)
            if self.items[index] is not entry:
                logger.debug(
                    "Stale insertion hint %d for key %r, scanning back from %d",
                    entry.hint,
                    entry.key,
                    max_index,
                )
                index = self._entry_index_linear_search(entry, max_index)

        del self.items[index]

    def _entry_index_linear_search(self, entry: Entry, max_index: int) -> int:
        for index in range(max_index, -1, -1):
            if self.items[index] is entry:
                return index
        raise AssertionError(f"entry for key {entry.key!r} is missing from the insertion order")

    def _entry_index_binary_search(self, entry: Entry, max_index: int) -> int:
        low, high = 0, max_index
        target = entry.hint
        while low < high:
            mid = (low + high) // 2
            if target > self.items[mid].hint:
                low = mid + 1
            else:
                high = mid
        return low

    # -------------------------------------------------------------------------
    # Iterable hooks
    # -------------------------------------------------------------------------

    def element_at(self, index: int) -> Pair:
        return self.items[index].as_pair()

    def _arguments(self, index: int) -> tuple:
        entry = self.items[index]
        return (entry.key, entry.value)

    def _create_new(self, array: list) -> Self:
        return type(self).from_array(array, key_fn=self.key_fn)

    def _create_new_from_mapping(self, array: list) -> Any:
        if array and not is_array_of_pairs(array):
            from functional_collections.list import List

            return List.from_array(array)
        return self._create_new(array)

    def map_to_pairs(self, callback: Callable[..., tuple[Any, Any]]) -> Self:
        """Map every pair to a (key, value) tuple, keeping this map's key function."""
        return self._create_new(self._mapped(callback))
