"""
Domain Service: Relationship Index

Keeps parent/child relationships for arbitrary objects outside of the objects
themselves. Three identity-keyed weak stores back it:

- parent_of: child -> weak handle to its parent
- children_of: parent -> list of child slots (live child or TOMBSTONE)
- pending: parents whose slot list holds tombstones not yet compacted

Detaching a child never shifts its siblings. The child's slot is overwritten
with TOMBSTONE and the parent is queued for compaction, so an iterator already
walking that parent keeps seeing stable positions. Compaction happens only in
cleanup(), cleanup_all() and sort_children().
"""

import logging
import time
import uuid
import weakref
from functools import cmp_to_key
from typing import Any, Callable, List, Optional

from parentage.application.interfaces import IReclaimer
from parentage.logging_utils import StructuredLogger, ComponentType, EventType
from parentage.models import IndexStats
from ..entities import TOMBSTONE, live_slots, compact_slots
from ..storage import IdentityWeakKeyMap, IdentityWeakSet
from .child_iterator import ChildIterator
from .reclamation_guard import ReclamationGuard


def _less_than_to_key(less_than: Callable[[Any, Any], bool]):
    def compare(a, b):
        if less_than(a, b):
            return -1
        if less_than(b, a):
            return 1
        return 0
    return cmp_to_key(compare)


class RelationshipIndex:
    """
    External parent/child index over weakly held objects.

    Not thread-safe. Every operation runs to completion synchronously.
    """

    def __init__(
        self,
        reclaimer: Optional[IReclaimer] = None,
        logger: Optional[StructuredLogger] = None,
        log_compaction_events: bool = True,
    ):
        """
        Initialize index.

        Args:
            reclaimer: Collaborator paused around compaction (None: no pausing)
            logger: Optional structured logger (creates default if None)
            log_compaction_events: Emit Compaction_Completed events
        """
        self.index_id = uuid.uuid4().hex[:12]
        self._logger = logger or StructuredLogger(ComponentType.RELATIONSHIP_INDEX)
        self._log_compaction_events = log_compaction_events

        self._parent_of = IdentityWeakKeyMap()
        self._children_of = IdentityWeakKeyMap(on_expire=self._forget_orphans)
        self._pending = IdentityWeakSet()
        self._guard = ReclamationGuard(
            stores=(self._parent_of, self._children_of, self._pending),
            reclaimer=reclaimer,
            trace_id=self.index_id,
        )

        self._logger.log_event(
            trace_id=self.index_id,
            event_type=EventType.INDEX_CREATED,
            payload={"reclaimer": type(reclaimer).__name__ if reclaimer else None},
            level=logging.DEBUG,
        )

    # ========================================================================
    # Lookups
    # ========================================================================

    def get_parent(self, obj: Any) -> Optional[Any]:
        parent_ref = self._parent_of.get(obj)
        if parent_ref is None:
            return None
        return parent_ref()

    def get_children(self, obj: Any) -> Optional[List[Any]]:
        """
        Independent copy of obj's live children, in order.

        Returns None (not an empty list) when obj has no children entry. An
        entry whose children were all detached but not yet cleaned up yields [].
        """
        slots = self._children_of.get(obj)
        if slots is None:
            return None
        return live_slots(slots)

    def get_children_read_only(self, obj: Any) -> Optional[List[Any]]:
        """
        The internal slot list of obj, or None.

        May contain TOMBSTONE slots. Callers must not mutate it.
        """
        return self._children_of.get(obj)

    def child_iterator(self, obj: Any) -> ChildIterator:
        """Iterate obj's live children. Do not add or remove children while iterating."""
        return ChildIterator(self._children_of.get(obj))

    # ========================================================================
    # Mutation
    # ========================================================================

    def set_parent(self, obj: Any, new_parent: Optional[Any]) -> None:
        """
        Make new_parent the parent of obj, or detach obj when new_parent is None.

        Args:
            obj: Object to (re)parent
            new_parent: New parent, or None to detach

        Raises:
            TypeError: If obj or new_parent cannot be weakly referenced
        """
        old_parent = self.get_parent(obj)
        if old_parent is new_parent:
            return

        # Store parent_of first so an unreferenceable object fails before any slot changes
        if new_parent is not None:
            self._parent_of[obj] = weakref.ref(new_parent)
        else:
            self._parent_of.pop(obj, None)

        if old_parent is not None:
            old_slots = self._children_of.get(old_parent)
            if old_slots is not None:
                for position, slot in enumerate(old_slots):
                    if slot is obj:
                        old_slots[position] = TOMBSTONE
                        self._pending.add(old_parent)
                        break

        if new_parent is not None:
            slots = self._children_of.get(new_parent)
            if slots is None:
                slots = []
                self._children_of[new_parent] = slots
            slots.append(obj)

    def _forget_orphans(self, slots: List[Any]) -> None:
        # children_of entry expired: its parent is gone
        for child in slots:
            if child is TOMBSTONE:
                continue
            parent_ref = self._parent_of.get(child)
            if parent_ref is not None and parent_ref() is None:
                self._parent_of.pop(child, None)

    # ========================================================================
    # Compaction
    # ========================================================================

    def _compact(self, obj: Any) -> int:
        removed = 0
        slots = self._children_of.get(obj)
        if slots is not None:
            removed = compact_slots(slots)
            if not slots:
                del self._children_of[obj]
        self._pending.discard(obj)
        return removed

    def cleanup(self, obj: Any) -> int:
        """
        Compact obj's slot list, dropping the entry if no children remain.

        Must not be called while iterating obj's children.

        Returns:
            Number of tombstones removed
        """
        with self._guard:
            removed = self._compact(obj)
        self._logger.log_event(
            trace_id=self.index_id,
            event_type=EventType.PARENT_CLEANED,
            payload={"tombstones_removed": removed},
            level=logging.DEBUG,
        )
        return removed

    def cleanup_all(self) -> int:
        """
        Compact every parent queued for cleanup, as one critical section.

        Returns:
            Total number of tombstones removed
        """
        started = time.perf_counter()
        with self._guard:
            parents = list(self._pending)
            removed = 0
            for parent in parents:
                removed += self._compact(parent)
        duration_ms = (time.perf_counter() - started) * 1000

        if self._log_compaction_events:
            self._logger.log_event(
                trace_id=self.index_id,
                event_type=EventType.COMPACTION_COMPLETED,
                payload={"parents_compacted": len(parents)},
                metrics={
                    "parents_compacted": len(parents),
                    "tombstones_removed": removed,
                    "duration_ms": round(duration_ms, 3),
                },
                level=logging.INFO if removed else logging.DEBUG,
            )
        return removed

    def sort_children(
        self,
        obj: Any,
        comparator: Optional[Callable[[Any, Any], bool]] = None,
        *,
        key: Optional[Callable[[Any], Any]] = None,
        reverse: bool = False,
    ) -> None:
        """
        Compact obj's children, then reorder them in place.

        Must not be called while iterating obj's children. The sort is stable.

        Args:
            obj: Parent whose children are sorted; no-op without a children entry
            comparator: Less-than predicate comparator(a, b) -> bool
            key: Key function, as for list.sort (alternative to comparator)
            reverse: Reverse the resulting order

        Raises:
            TypeError: If both comparator and key are given
        """
        if comparator is not None and key is not None:
            raise TypeError("sort_children() takes a comparator or a key, not both")
        if obj not in self._children_of:
            return
        if comparator is not None:
            key = _less_than_to_key(comparator)

        with self._guard:
            self._compact(obj)
            slots = self._children_of.get(obj)
            if slots is not None:
                slots.sort(key=key, reverse=reverse)

        self._logger.log_event(
            trace_id=self.index_id,
            event_type=EventType.CHILDREN_SORTED,
            payload={"children": len(slots) if slots is not None else 0},
            level=logging.DEBUG,
        )

    # ========================================================================
    # Introspection
    # ========================================================================

    def stats(self) -> IndexStats:
        live_children = 0
        tombstones = 0
        for slots in self._children_of.values():
            for slot in slots:
                if slot is TOMBSTONE:
                    tombstones += 1
                else:
                    live_children += 1
        return IndexStats(
            index_id=self.index_id,
            parented_objects=len(self._parent_of),
            parents=len(self._children_of),
            pending_cleanup=len(self._pending),
            live_children=live_children,
            tombstones=tombstones,
        )

    def clear(self) -> None:
        """Forget every relationship."""
        with self._guard:
            self._parent_of.clear()
            self._children_of.clear()
            self._pending.clear()

    def __repr__(self) -> str:
        return (
            f"<RelationshipIndex {self.index_id} parents={len(self._children_of)} "
            f"pending={len(self._pending)}>"
        )
