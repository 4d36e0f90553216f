"""
Domain Storage: Identity-Keyed Weak Map

Maps objects to values by reference identity while holding the keys only
weakly. An entry disappears once its key is reclaimed, so the map never keeps
a participant alive through the key role.

Unlike weakref.WeakKeyDictionary, keys are compared with `is`, never with
__eq__/__hash__. Two equal but distinct objects get separate entries, and
objects that define __eq__ without __hash__ are still accepted.

Expirations that fire while the map is guarded are queued and applied when the
outermost guard exits, the same way WeakKeyDictionary defers removals while it
is being iterated.
"""

import weakref
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

_MISSING = object()


class IdentityWeakKeyMap:
    """
    Identity-keyed mapping with weakly held keys.

    Args:
        on_expire: Optional callable invoked with the value of an entry whose
            key was reclaimed
    """

    def __init__(self, on_expire: Optional[Callable[[Any], None]] = None):
        # id(key) -> (weakref to key, value)
        self._data: Dict[int, Tuple[weakref.ref, Any]] = {}
        self._on_expire = on_expire
        self._guard_depth = 0
        self._pending_removals: List[Tuple[int, weakref.ref]] = []
        self._pending_values: List[Any] = []

    def _make_ref(self, key: Any) -> weakref.ref:
        key_id = id(key)
        selfref = weakref.ref(self)

        def _expired(wr):
            mapping = selfref()
            if mapping is not None:
                mapping._expire(key_id, wr)

        return weakref.ref(key, _expired)

    def _expire(self, key_id: int, wr: weakref.ref) -> None:
        if self._guard_depth:
            self._pending_removals.append((key_id, wr))
            return
        entry = self._data.get(key_id)
        # The id may already belong to a newer entry
        if entry is None or entry[0] is not wr:
            return
        del self._data[key_id]
        self._expired_value(entry[1])

    def _expired_value(self, value: Any) -> None:
        if self._on_expire is None:
            return
        if self._guard_depth:
            self._pending_values.append(value)
            return
        self._on_expire(value)

    def _entry(self, key: Any) -> Optional[Tuple[weakref.ref, Any]]:
        entry = self._data.get(id(key))
        if entry is None or entry[0]() is not key:
            return None
        return entry

    @contextmanager
    def guard(self) -> Iterator["IdentityWeakKeyMap"]:
        """Defer expirations until the outermost guard exits."""
        self._guard_depth += 1
        try:
            yield self
        finally:
            self._guard_depth -= 1
            if not self._guard_depth:
                self._flush_pending()

    @property
    def guarded(self) -> bool:
        return self._guard_depth > 0

    def _flush_pending(self) -> None:
        while self._pending_removals:
            key_id, wr = self._pending_removals.pop()
            self._expire(key_id, wr)
        while self._pending_values:
            self._expired_value(self._pending_values.pop())

    def get(self, key: Any, default: Any = None) -> Any:
        entry = self._entry(key)
        return default if entry is None else entry[1]

    def __getitem__(self, key: Any) -> Any:
        entry = self._entry(key)
        if entry is None:
            raise KeyError(key)
        return entry[1]

    def __setitem__(self, key: Any, value: Any) -> None:
        entry = self._entry(key)
        if entry is not None:
            self._data[id(key)] = (entry[0], value)
            return
        # Raises TypeError for objects that cannot be weakly referenced
        ref = self._make_ref(key)
        # A dead key whose expiry is still queued may hold this id
        stale = self._data.get(id(key))
        self._data[id(key)] = (ref, value)
        if stale is not None:
            self._expired_value(stale[1])

    def __delitem__(self, key: Any) -> None:
        if self._entry(key) is None:
            raise KeyError(key)
        del self._data[id(key)]

    def pop(self, key: Any, default: Any = _MISSING) -> Any:
        entry = self._entry(key)
        if entry is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        del self._data[id(key)]
        return entry[1]

    def __contains__(self, key: Any) -> bool:
        return self._entry(key) is not None

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> List[Any]:
        """Snapshot of the keys that are still alive."""
        return [k for k, _ in self.items()]

    def values(self) -> List[Any]:
        return [v for _, v in self.items()]

    def items(self) -> List[Tuple[Any, Any]]:
        """Snapshot of (key, value) pairs whose keys are still alive."""
        result = []
        for wr, value in list(self._data.values()):
            key = wr()
            if key is not None:
                result.append((key, value))
        return result

    def clear(self) -> None:
        self._data.clear()
        self._pending_removals.clear()
        self._pending_values.clear()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} with {len(self)} entries>"


class IdentityWeakSet:
    """Identity-based set of weakly held objects."""

    def __init__(self):
        self._map = IdentityWeakKeyMap()

    def add(self, item: Any) -> None:
        self._map[item] = True

    def discard(self, item: Any) -> None:
        self._map.pop(item, None)

    def guard(self):
        return self._map.guard()

    def __contains__(self, item: Any) -> bool:
        return item in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._map.keys())

    def clear(self) -> None:
        self._map.clear()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} with {len(self)} items>"
