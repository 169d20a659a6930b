"""
Functional Collections - generic, functional-style collections for Python.

Provides ordered Lists, unordered Maps and Sets, an insertion-ordered
ArrayMap, and one shared set of iterable operations (map, filter, fold,
group_by, slicing, ...) applied uniformly to every container kind.

Maps and Sets compare keys by identity unless a key function is
supplied through ``with_key``.
"""

from functional_collections.array_map import ArrayMap
from functional_collections.hash_map import Entry, Map
from functional_collections.identity import (
    IdentityRegistry,
    default_registry,
    get_id,
    same,
)
from functional_collections.iterable import Iterable, Pair
from functional_collections.list import List, range
from functional_collections.sequence import ArraySeq, Sequence, seq
from functional_collections.set import Set
from functional_collections.utils.errors import (
    CollectionError,
    ConstructionError,
    EmptyCollectionError,
    IndexOutOfRangeError,
)
from functional_collections.utils.sentinels import ABSENT, NOT_MAPPED

__version__ = "0.1.0"
__all__ = [
    # Containers
    "List",
    "Map",
    "Set",
    "ArrayMap",
    "range",
    # Protocol
    "Iterable",
    "Sequence",
    "ArraySeq",
    "seq",
    "Pair",
    "Entry",
    # Identity
    "IdentityRegistry",
    "default_registry",
    "get_id",
    "same",
    # Markers
    "ABSENT",
    "NOT_MAPPED",
    # Errors
    "CollectionError",
    "EmptyCollectionError",
    "IndexOutOfRangeError",
    "ConstructionError",
]
