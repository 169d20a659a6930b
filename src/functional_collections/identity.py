"""
Identity Service.

Assigns a stable, unique token to any value so that reference-equality
Maps and Sets can use it as a hash key. Primitive values are identified
by their type and literal value; every other value receives a lazily
assigned integer the first time it is seen.

Tokens are kept in a side table keyed by ``id()``, so caller-owned
objects are never mutated. Objects that support weak references are
tracked weakly and forgotten when collected; other reference values
(lists, dicts, tuples, ...) are held strongly so that their ``id()``
can never be recycled while a token for it is still in use.

Example:
    get_id(1) -> "int-1"
    get_id("1") -> "str-1"
    get_id(None) -> "object-null"
    get_id(some_list) -> "object-3"
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES: frozenset[type] = frozenset({bool, int, float, complex, str, bytes})
NULL_TOKEN = "object-null"

KeyFunction = Callable[[Any], Any]


def is_primitive(value: Any) -> bool:
    """Check whether a value is identified by its literal value."""
    return type(value) in PRIMITIVE_TYPES


def same(a: Any, b: Any) -> bool:
    """
    Reference equality.

    Two values are the same if they are the same object, or equal
    primitives of the same type. ``1`` and ``1.0`` or ``1`` and ``True``
    are therefore different, as are two equal but distinct lists.
    """
    if a is b:
        return True
    return type(a) is type(b) and type(a) in PRIMITIVE_TYPES and a == b


class IdentityRegistry:
    """
    Hands out identity tokens for values.

    A registry owns its counter and side table. The module-level
    ``default_registry`` is what containers use unless another key
    function is supplied; tests may build private registries instead.

    Not safe for concurrent use: ``reset()`` in particular must not run
    while other callers are looking up tokens.
    """

    def __init__(self) -> None:
        self._counter = 0
        # id(value) -> (weakref or value, assigned integer)
        self._table: dict[int, tuple[Any, int]] = {}

    def __len__(self) -> int:
        return len(self._table)

    def get_id(self, value: Any) -> str:
        """Return the identity token of a value."""
        if value is None:
            return NULL_TOKEN
        if is_primitive(value):
            return f"{type(value).__name__}-{value}"
        kind = "function" if callable(value) else "object"
        return f"{kind}-{self._instance_id(value)}"

    __call__ = get_id

    def reset(self) -> None:
        """Forget every assigned token and restart the counter at zero."""
        logger.debug("Resetting identity registry (%d tracked values)", len(self._table))
        self._counter = 0
        self._table.clear()

    def _instance_id(self, value: Any) -> int:
        key = id(value)
        record = self._table.get(key)
        if record is not None:
            holder, number = record
            tracked = holder() if isinstance(holder, weakref.ref) else holder
            if tracked is value:
                return number

        self._counter += 1
        self._table[key] = (self._hold(value, key), self._counter)
        return self._counter

    def _hold(self, value: Any, key: int) -> Any:
        table = self._table

        def forget(_ref: weakref.ref) -> None:
            record = table.get(key)
            if record is not None and record[0] is _ref:
                del table[key]

        try:
            return weakref.ref(value, forget)
        except TypeError:
            return value


default_registry = IdentityRegistry()


def get_id(value: Any) -> str:
    """Return the identity token of a value using the default registry."""
    return default_registry.get_id(value)


def reset() -> None:
    """Reset the default registry. Intended for test isolation only."""
    default_registry.reset()
