"""
Marker values shared by every container.

ABSENT is returned where a lookup finds nothing. It is falsy, so
``if not lst.remove(item)`` reads naturally, but it is never equal to
a stored value: presence is always decided by entry existence.

NOT_MAPPED may be returned from a map() callback to drop the element
from the result, fusing map and filter in one pass.
"""

from enum import Enum
from typing import Final, Literal


class _Marker(Enum):
    ABSENT = "ABSENT"
    NOT_MAPPED = "NOT_MAPPED"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self.value

    __str__ = __repr__


ABSENT: Final = _Marker.ABSENT
NOT_MAPPED: Final = _Marker.NOT_MAPPED

Absent = Literal[_Marker.ABSENT]
