"""
Error types for functional collections.
"""

from typing import Optional


class CollectionError(Exception):
    """Base exception for all collection errors."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        self.message = message
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.operation:
            return f"{self.operation}(): {self.message}"
        return self.message


class EmptyCollectionError(CollectionError, LookupError):
    """Raised when an operation needs at least one element."""

    def __init__(self, operation: str) -> None:
        super().__init__("cannot be called on an empty collection", operation)


class IndexOutOfRangeError(CollectionError, IndexError):
    """
    Raised when an index falls outside the valid range of a List.

    Attributes:
        index: The offending index
        size: Size of the list at the time of the call
    """

    def __init__(self, operation: str, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"illegal index {index} in List with size {size}", operation)


class ConstructionError(CollectionError, ValueError):
    """
    Raised when a container cannot be built from its arguments.

    This error is raised when:
    - A Map or ArrayMap receives an odd number of flat key/value arguments
    - ArrayMap.from_array receives something that is neither a pair nor an entry
    """

    pass
