"""
Sequence Extension.

Sequence adds order-aware operations to iterables that are genuine flat
sequences, i.e. every iterable but maps. Items are compared with
reference equality (see ``identity.same``).

None of the Sequence operations mutates the collection.

ArraySeq wraps a plain Python list so it can use every Sequence
operation as a one-off; derived results are plain lists again:

    seq([1, 2, 2, 3]).distinct() -> [1, 2, 3]
"""

from __future__ import annotations

from typing import Any

from functional_collections.identity import IdentityRegistry, same
from functional_collections.iterable import Iterable, is_array_of_pairs


class Sequence(Iterable):
    """Base class for flat, ordered iterables."""

    type_name = "Sequence"

    def contains(self, item: Any) -> bool:
        """Check whether this sequence contains an item."""
        return any(same(element, item) for element in self.items)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def distinct(self) -> Any:
        """
        Build a new sequence without duplicates, keeping first occurrences.

        Example:
            List(1, 2, 2, 3, 1).distinct() -> List(1, 2, 3)
        """
        from functional_collections.set import Set

        # Scoped registry: tokens of unweakrefable items die with the throwaway set
        seen = Set(key_fn=IdentityRegistry().get_id)
        return self._create_new([item for item in self.items if seen.add(item)])

    def flatten(self) -> Any:
        """
        Flatten one level of nesting.

        Elements that are sequences or plain Python lists are expanded;
        anything else is kept as is.

        Example:
            List(1, [2, 3], List(4, 5), 6).flatten() -> List(1, 2, 3, 4, 5, 6)
        """
        result = []
        for item in self.items:
            nested = as_sequence(item)
            if nested is not None:
                result.extend(nested.items)
            else:
                result.append(item)
        return self._create_new(result)

    def index_of(self, item: Any, start: int = 0) -> int:
        """Return the index of the first occurrence of an item from ``start``, or -1."""
        for i in range(max(start, 0), len(self.items)):
            if same(self.items[i], item):
                return i
        return -1

    def last_index_of(self, item: Any) -> int:
        """Return the index of the last occurrence of an item, or -1."""
        for i in range(len(self.items) - 1, -1, -1):
            if same(self.items[i], item):
                return i
        return -1

    def remove_items(self, *items: Any) -> Any:
        """Build a new sequence where every occurrence of the given items is left out."""
        from functional_collections.set import Set

        blacklist = Set.from_array(list(items), key_fn=IdentityRegistry().get_id)
        return self._create_new([item for item in self.items if not blacklist.contains(item)])

    def same_items(self, other: Any) -> bool:
        """
        Check whether another sequence holds the same items in the same order.

        ``other`` may be a Sequence or a plain Python list.
        """
        other_seq = as_sequence(other)
        if other_seq is None or self.size() != other_seq.size():
            return False
        return all(same(a, b) for a, b in zip(self.items, other_seq.items, strict=True))

    def _create_new_from_mapping(self, array: list) -> Any:
        if is_array_of_pairs(array):
            from functional_collections.array_map import ArrayMap

            return ArrayMap.from_array(array)
        return self._create_new(array)


class ArraySeq(Sequence):
    """Temporary Sequence view over a plain Python list."""

    type_name = "ArraySeq"

    def __init__(self, items: list) -> None:
        self.items = items

    @classmethod
    def from_array(cls, array: list) -> list:
        return array


def seq(array: list) -> ArraySeq:
    """Wrap a Python list so it gains every Sequence operation."""
    return ArraySeq(array)


def as_sequence(value: Any) -> Sequence | None:
    """Return value as a Sequence if it is one or a Python list, else None."""
    if isinstance(value, Sequence):
        return value
    if isinstance(value, list):
        return ArraySeq(value)
    return None
