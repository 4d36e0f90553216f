"""
Domain Entity: Child Slots

A parent's children are held in a plain list of slots. A slot is either a live
child object or TOMBSTONE, which marks a position whose child was detached but
not yet compacted away. Leaving the tombstone in place keeps the positions of
later siblings stable for any iterator walking the list.
"""

from typing import Any, List


class _Tombstone:
    """Sentinel for a detached child slot."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "TOMBSTONE"

    def __reduce__(self):
        return "TOMBSTONE"


TOMBSTONE = _Tombstone()


def is_tombstone(slot: Any) -> bool:
    return slot is TOMBSTONE


def live_slots(slots: List[Any]) -> List[Any]:
    """Return a new list holding only the live children, in slot order."""
    return [slot for slot in slots if slot is not TOMBSTONE]


def compact_slots(slots: List[Any]) -> int:
    """
    Remove tombstones from slots in place.

    Survivors keep their relative order and shift down to close the gaps.

    Args:
        slots: The child slot list to compact

    Returns:
        Number of tombstones removed
    """
    write = 0
    for slot in slots:
        if slot is not TOMBSTONE:
            slots[write] = slot
            write += 1
    removed = len(slots) - write
    del slots[write:]
    return removed
