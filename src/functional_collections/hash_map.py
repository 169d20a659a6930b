"""
Hash Map.

An unordered collection of key-value pairs. Any value can be used as a
key: keys are looked up through a key function, which defaults to the
identity service (reference equality). ``Map.with_key`` installs another
equality policy, e.g. one key per e-mail address.

Example:
    Map(1, "a", 2, "b") -> Map(1 -> a, 2 -> b)
    Map.with_key(lambda person: person.email, sarah, 1)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

from functional_collections.identity import KeyFunction, default_registry, same
from functional_collections.iterable import Pair
from functional_collections.utils.errors import ConstructionError
from functional_collections.utils.sentinels import ABSENT, Absent

if TYPE_CHECKING:
    from functional_collections.list import List


@dataclass(slots=True, eq=False)
class Entry:
    """
    A key-value pair owned by a Map.

    Attributes:
        key: Immutable once the entry exists
        value: Overwritten in place when the key is put again
        hint: Insertion index hint maintained by ArrayMap; may be stale
    """

    key: Any
    value: Any
    hint: int = field(default=-1, repr=False)

    def as_pair(self) -> Pair:
        return Pair(self.key, self.value)

    def __str__(self) -> str:
        return f"{self.key} -> {self.value}"


def init_pairs(target: Any, pairs: tuple) -> None:
    """Put flat ``key, value, key, value, ...`` arguments into a map."""
    if len(pairs) % 2 != 0:
        raise ConstructionError(
            f"a {type(target).__name__} requires an even number of arguments, got {len(pairs)}"
        )
    for i in range(0, len(pairs), 2):
        target.put(pairs[i], pairs[i + 1])


class Map:
    """Unordered key-value collection with a pluggable key function."""

    def __init__(self, *pairs: Any, key_fn: KeyFunction | None = None) -> None:
        self.key_fn: KeyFunction = key_fn or default_registry.get_id
        self._entries: dict[Any, Entry] = {}

        # Last entry touched by put()/remove(); read by ArrayMap to avoid a second lookup
        self._added_entry: Entry | None = None
        self._removed_entry: Entry | None = None

        init_pairs(self, pairs)

    @classmethod
    def with_key(cls, key_fn: KeyFunction, *pairs: Any) -> Self:
        """Create a Map deciding key equality with ``key_fn`` instead of identity."""
        return cls(*pairs, key_fn=key_fn)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def put(self, key: Any, value: Any) -> Any | Absent:
        """
        Associate a value with a key.

        Returns the previous value for this key, or ABSENT if the key is new.
        """
        key_id = self.key_fn(key)
        entry = self._entries.get(key_id)

        if entry is None:
            entry = Entry(key, value)
            self._entries[key_id] = entry
            previous = ABSENT
        else:
            previous = entry.value
            entry.value = value

        self._added_entry = entry
        return previous

    def remove(self, key: Any) -> Any | Absent:
        """Remove a key and return its value, or ABSENT if it was not there."""
        entry = self._entries.pop(self.key_fn(key), None)
        if entry is None:
            return ABSENT
        self._removed_entry = entry
        return entry.value

    def remove_if(self, predicate: Callable[[Any, Any], bool]) -> Self:
        """Remove every key-value pair satisfying ``predicate(key, value)``."""
        doomed = [
            key_id for key_id, entry in self._entries.items() if predicate(entry.key, entry.value)
        ]
        for key_id in doomed:
            del self._entries[key_id]
        return self

    def remove_all(self) -> Self:
        """Remove every key-value pair."""
        self._entries = {}
        return self

    def get_or_put(self, key: Any, default: Any) -> Any:
        """
        Return the value of a key, storing a default first if the key is missing.

        A callable default is treated as a supplier and only called on a miss.
        """
        entry = self._entries.get(self.key_fn(key))
        if entry is not None:
            return entry.value

        value = default() if callable(default) else default
        self.put(key, value)
        return value

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, key: Any, default: Any = ABSENT) -> Any:
        """Return the value of a key, or ``default`` (ABSENT) if missing."""
        entry = self._entries.get(self.key_fn(key))
        return default if entry is None else entry.value

    def contains_key(self, key: Any) -> bool:
        """Check whether a key is bound, even to None."""
        return self.key_fn(key) in self._entries

    def contains_value(self, value: Any) -> bool:
        """Check whether a value is bound at least once."""
        return any(same(entry.value, value) for entry in self._entries.values())

    def size(self) -> int:
        """Return the number of key-value pairs."""
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def keys(self) -> List:
        """Return a List of the keys, in no particular order."""
        from functional_collections.list import List

        return List.from_array([entry.key for entry in self._entries.values()])

    def values(self) -> List:
        """Return a List of the values, in no particular order."""
        from functional_collections.list import List

        return List.from_array([entry.value for entry in self._entries.values()])

    def each(self, callback: Callable[[Any, Any], Any]) -> None:
        """Call ``callback(key, value)`` for every pair."""
        for entry in list(self._entries.values()):
            callback(entry.key, entry.value)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_array(self) -> list[Pair]:
        """Return a Python list of (key, value) pairs."""
        return [entry.as_pair() for entry in self._entries.values()]

    def to_list(self) -> List:
        """Return a List of (key, value) pairs."""
        from functional_collections.list import List

        return List.from_array(self.to_array())

    def clone(self) -> Self:
        """Create a copy of this map with the same key function."""
        clone = type(self)(key_fn=self.key_fn)
        self.each(clone.put)
        return clone

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys().items)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __str__(self) -> str:
        return "Map(" + ", ".join(str(pair) for pair in self.to_array()) + ")"

    __repr__ = __str__
