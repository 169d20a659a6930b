"""
Iteration Protocol.

Iterable provides functional style operations to indexed collections.
A concrete collection inherits all of them by exposing:

- ``items``: its Python list representation (read-only for callers)
- ``element_at(index)``: the element seen by callers at an index
- ``from_array(array)``: a factory building a new collection of its kind

None of the Iterable operations mutates the collection.

Callbacks are shaped by ``_arguments()``: flat collections call
``f(element)``, keyed collections call ``f(key, value)``. This one
indirection lets the same operation set serve both shapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, NamedTuple, Self

from functional_collections.identity import same
from functional_collections.utils.errors import EmptyCollectionError
from functional_collections.utils.sentinels import ABSENT, NOT_MAPPED, Absent

if TYPE_CHECKING:
    from functional_collections.array_map import ArrayMap
    from functional_collections.hash_map import Map
    from functional_collections.list import List


class Pair(NamedTuple):
    """A key-value pair as handed out by keyed collections."""

    key: Any
    value: Any

    def __str__(self) -> str:
        return f"{self.key} -> {self.value}"


def is_pair(value: Any) -> bool:
    """Check whether a value is a 2-tuple."""
    return isinstance(value, tuple) and len(value) == 2


def is_array_of_pairs(array: list) -> bool:
    """Check whether a non-empty list only holds 2-tuples."""
    return bool(array) and all(is_pair(item) for item in array)


# =============================================================================
# Property Paths
# =============================================================================


def _resolve(target: Any, name: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(name)
    return getattr(target, name, None)


def pluck_path(item: Any, path: list[str]) -> Any:
    """
    Walk a split dotted path from an item.

    Returns None as soon as an intermediate step is missing.

    Example:
        pluck_path({"address": {"code": "SW4"}}, ["address", "code"]) -> "SW4"
    """
    current = item
    for name in path:
        if current is None:
            return None
        current = _resolve(current, name)
    return current


# =============================================================================
# Iterable
# =============================================================================


class Iterable(ABC):
    """
    Base class for indexed collections.

    Subclasses must set ``items`` and implement ``from_array``. Keyed
    collections override ``element_at``, ``_arguments`` and ``_create_new``.
    """

    items: list
    type_name: str = "Iterable"

    @classmethod
    @abstractmethod
    def from_array(cls, array: list) -> Any:
        """Build a new collection of this kind holding the array items."""
        pass

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def size(self) -> int:
        """Return the number of elements."""
        return len(self.items)

    def is_empty(self) -> bool:
        """Check if this collection has no element."""
        return self.size() == 0

    def element_at(self, index: int) -> Any:
        """Return the element at an index."""
        return self.items[index]

    def first(self) -> Any:
        """Return the first element, raising EmptyCollectionError if empty."""
        self._assert_not_empty("first")
        return self.element_at(0)

    def last(self) -> Any:
        """Return the last element, raising EmptyCollectionError if empty."""
        self._assert_not_empty("last")
        return self.element_at(self.size() - 1)

    def each(self, callback: Callable[..., Any]) -> None:
        """
        Apply a function to every element.

        The index is passed after the element arguments:
        ``callback(element, index)`` or ``callback(key, value, index)``.
        """
        for i in range(self.size()):
            callback(*self._arguments(i), i)

    # -------------------------------------------------------------------------
    # Transformation
    # -------------------------------------------------------------------------

    def map(self, callback: Callable[..., Any]) -> Any:
        """
        Build a new collection by applying a function to every element.

        Results equal to NOT_MAPPED are left out. The kind of the result
        follows the shape of what the callback returned:

        - a Sequence mapped to 2-tuples becomes an ArrayMap
        - an ArrayMap mapped to anything but 2-tuples becomes a List
        - otherwise the result has the same kind as this collection

        Example:
            List(1, 2).map(lambda x: x * 2) -> List(2, 4)
            List(1, 2).map(lambda x: (x, x * 10)) -> ArrayMap(1 -> 10, 2 -> 20)
        """
        return self._create_new_from_mapping(self._mapped(callback))

    def map_to_pairs(self, callback: Callable[..., tuple[Any, Any]]) -> ArrayMap:
        """Map every element to a (key, value) tuple and collect an ArrayMap."""
        from functional_collections.array_map import ArrayMap

        return ArrayMap.from_array(self._mapped(callback))

    def map_to_list(self, callback: Callable[..., Any]) -> List:
        """Map every element and collect the results in a List."""
        from functional_collections.list import List

        return List.from_array(self._mapped(callback))

    def pluck(self, path: str) -> List:
        """
        Build a List of a property extracted from every element.

        The property can be arbitrarily nested using dots; attributes and
        mapping keys are both followed.

        Example:
            people.pluck("address.code") -> List("SW4", None, "NW7")
        """
        from functional_collections.list import List

        chain = path.split(".")
        return List.from_array(
            [pluck_path(self.element_at(i), chain) for i in range(self.size())]
        )

    def filter(self, predicate: Callable[..., bool]) -> Self:
        """Select every element satisfying a predicate."""
        return self._create_new(
            [self.element_at(i) for i in range(self.size()) if self._invoke(predicate, i)]
        )

    def fold(self, initial: Any, operator: Callable[..., Any]) -> Any:
        """
        Accumulate from left to right.

        Example:
            List(1, 2, 3).fold(100, lambda acc, x: acc + x) -> 106
        """
        result = initial
        for i in range(self.size()):
            result = operator(result, *self._arguments(i))
        return result

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def count(self, predicate: Callable[..., bool]) -> int:
        """Count the elements satisfying a predicate."""
        return sum(1 for i in range(self.size()) if self._invoke(predicate, i))

    def find(self, predicate: Callable[..., bool]) -> Any | Absent:
        """Return the first element satisfying a predicate, or ABSENT."""
        for i in range(self.size()):
            if self._invoke(predicate, i):
                return self.element_at(i)
        return ABSENT

    def find_by(self, path: str, value: Any) -> Any | Absent:
        """Return the first element whose property at ``path`` is ``value``, or ABSENT."""
        chain = path.split(".")
        for i in range(self.size()):
            element = self.element_at(i)
            if same(pluck_path(element, chain), value):
                return element
        return ABSENT

    def some(self, predicate: Callable[..., bool]) -> bool:
        """Check if at least one element satisfies a predicate."""
        return any(self._invoke(predicate, i) for i in range(self.size()))

    def every(self, predicate: Callable[..., bool]) -> bool:
        """Check if every element satisfies a predicate."""
        return all(self._invoke(predicate, i) for i in range(self.size()))

    # -------------------------------------------------------------------------
    # Grouping
    # -------------------------------------------------------------------------

    def grouped(self, size: int) -> List:
        """
        Split into collections of a fixed size; the last one may be shorter.

        Example:
            List(1, 2, 3, 4, 5).grouped(2) -> List(List(1, 2), List(3, 4), List(5))
        """
        from functional_collections.list import List

        if size < 1:
            raise ValueError(f"grouped() needs a positive size, got {size}")
        elements = self.to_array()
        return List.from_array(
            [self._create_new(elements[i : i + size]) for i in range(0, len(elements), size)]
        )

    def group_by(self, discriminator: Callable[..., Any]) -> Map:
        """
        Partition into a Map of Lists according to a discriminator.

        Encounter order is preserved inside every group.
        """
        from functional_collections.hash_map import Map
        from functional_collections.list import List

        groups = Map()
        for i in range(self.size()):
            group = groups.get_or_put(self._invoke(discriminator, i), List)
            group.add(self.element_at(i))
        return groups

    def partition(self, predicate: Callable[..., bool]) -> tuple[Self, Self]:
        """
        Split in two collections: elements satisfying a predicate, then the others.

        Example:
            List(1, 2, 3, 4).partition(lambda x: x % 2 == 0) -> (List(2, 4), List(1, 3))
        """
        yes: list = []
        no: list = []
        for i in range(self.size()):
            (yes if self._invoke(predicate, i) else no).append(self.element_at(i))
        return self._create_new(yes), self._create_new(no)

    # -------------------------------------------------------------------------
    # Slicing
    # -------------------------------------------------------------------------

    def drop(self, n: int) -> Self:
        """Select every element except the first n."""
        return self._create_new(self.to_array()[self._clamp(n) :])

    def drop_right(self, n: int) -> Self:
        """Select every element except the last n."""
        return self._create_new(self.to_array()[: self.size() - self._clamp(n)])

    def drop_while(self, predicate: Callable[..., bool]) -> Self:
        """Drop the leading elements satisfying a predicate."""
        index = 0
        while index < self.size() and self._invoke(predicate, index):
            index += 1
        return self._create_new(self.to_array()[index:])

    def take(self, n: int) -> Self:
        """Select the first n elements."""
        return self._create_new(self.to_array()[: self._clamp(n)])

    def take_right(self, n: int) -> Self:
        """Select the last n elements."""
        return self._create_new(self.to_array()[self.size() - self._clamp(n) :])

    def take_while(self, predicate: Callable[..., bool]) -> Self:
        """Select the leading elements satisfying a predicate."""
        index = 0
        while index < self.size() and self._invoke(predicate, index):
            index += 1
        return self._create_new(self.to_array()[:index])

    def reverse(self) -> Self:
        """Return a new collection with the elements in reversed order."""
        return self._create_new(self.to_array()[::-1])

    def slice(self, start: int, end: int | None = None) -> Self:
        """Select an interval of elements, with Python slice semantics."""
        return self._create_new(self.to_array()[start:end])

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def mk_string(self, start: str = "", sep: str = "", end: str = "") -> str:
        """
        Render every element as a string.

        Example:
            List(1, 2, 3).mk_string("[", ", ", "]") -> "[1, 2, 3]"
        """
        return start + sep.join(str(element) for element in self) + end

    def to_array(self) -> list:
        """Return a new Python list of the elements."""
        return [self.element_at(i) for i in range(self.size())]

    def to_list(self) -> List:
        """Convert this collection to a List."""
        from functional_collections.list import List

        return List.from_array(self.to_array())

    def clone(self) -> Self:
        """Create a shallow copy of this collection."""
        return self._create_new(self.to_array())

    # -------------------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.size()):
            yield self.element_at(i)

    def __str__(self) -> str:
        return self.mk_string(f"{self.type_name}(", ", ", ")")

    __repr__ = __str__

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def _arguments(self, index: int) -> tuple:
        """Arguments passed to callbacks for the element at an index."""
        return (self.items[index],)

    def _invoke(self, func: Callable[..., Any], index: int) -> Any:
        return func(*self._arguments(index))

    def _mapped(self, callback: Callable[..., Any]) -> list:
        result = []
        for i in range(self.size()):
            mapped = self._invoke(callback, i)
            if mapped is not NOT_MAPPED:
                result.append(mapped)
        return result

    def _create_new(self, array: list) -> Any:
        """Create a collection of the same kind holding the array elements."""
        return type(self).from_array(array)

    def _create_new_from_mapping(self, array: list) -> Any:
        """Create a collection from map() results."""
        return self._create_new(array)

    def _clamp(self, n: int) -> int:
        return max(0, min(n, self.size()))

    def _assert_not_empty(self, operation: str) -> None:
        if self.size() == 0:
            raise EmptyCollectionError(operation)
