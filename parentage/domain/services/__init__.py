"""
Domain Services for the Relationship Index
"""

from .child_iterator import ChildIterator
from .reclamation_guard import ReclamationGuard
from .relationship_index import RelationshipIndex

__all__ = [
    "ChildIterator",
    "ReclamationGuard",
    "RelationshipIndex",
]
