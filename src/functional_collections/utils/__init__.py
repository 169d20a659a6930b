"""
Functional Collections Utilities Package.

Error types and marker values shared by all containers.
"""

from functional_collections.utils.errors import (
    CollectionError,
    ConstructionError,
    EmptyCollectionError,
    IndexOutOfRangeError,
)
from functional_collections.utils.sentinels import ABSENT, NOT_MAPPED, Absent

__all__ = [
    # Errors
    "CollectionError",
    "EmptyCollectionError",
    "IndexOutOfRangeError",
    "ConstructionError",
    # Markers
    "ABSENT",
    "NOT_MAPPED",
    "Absent",
]
