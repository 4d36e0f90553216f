"""
Parentage Core Package

External parent/child relationships for arbitrary objects.

Architecture: Weak Side Index
- No hierarchy fields are stored on the participating objects
- Identity-keyed weak stores never keep a parent or child alive as a key
- Detached children leave tombstones so iteration stays position-stable
- Compaction is explicit (cleanup, cleanup_all, sort_children)
"""

__version__ = "0.1.0"

from .models import ComponentType, EventType, IndexStats
from .domain.entities import TOMBSTONE
from .domain.services import RelationshipIndex, ChildIterator
from .infrastructure import RelationshipIndexFactory
from .hierarchy import (
    get_parent, set_parent, get_children, get_children_read_only,
    child_iterator, cleanup, cleanup_all, sort_children,
    get_default_index, reset_default_index,
)
