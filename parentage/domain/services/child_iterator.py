"""
Domain Service: Child Iterator

Forward-only walk over a parent's child slots.
"""

from typing import Any, List, Optional

from ..entities import TOMBSTONE


class ChildIterator:
    """
    Iterator over the live children of one parent.

    Captures the slot list itself and its length at creation, not a copy.
    Slots tombstoned after creation are skipped, children appended after
    creation are not visited. Do not compact or sort the parent's children
    while iterating.
    """

    __slots__ = ("_slots", "_count", "_position")

    def __init__(self, slots: Optional[List[Any]]):
        self._slots = slots
        self._count = len(slots) if slots is not None else 0
        self._position = 0

    def __iter__(self) -> "ChildIterator":
        return self

    def __next__(self) -> Any:
        slots = self._slots
        if slots is not None:
            # Bounded by the current length too, should the list have shrunk
            limit = min(self._count, len(slots))
            while self._position < limit:
                slot = slots[self._position]
                self._position += 1
                if slot is not TOMBSTONE:
                    return slot
            self._slots = None
        raise StopIteration
