"""
Domain Entities for the Relationship Index
"""

from .child_slots import (
    TOMBSTONE,
    is_tombstone,
    live_slots,
    compact_slots,
)

__all__ = [
    "TOMBSTONE",
    "is_tombstone",
    "live_slots",
    "compact_slots",
]
