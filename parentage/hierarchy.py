"""
Module-level hierarchy functions.

Each function delegates to one process-wide RelationshipIndex, created from
parentage_config.yaml on first use.

Usage:
    from parentage import set_parent, child_iterator

    set_parent(button, panel)
    for child in child_iterator(panel):
        ...
"""

from typing import Any, Callable, List, Optional

from parentage.domain.services import ChildIterator, RelationshipIndex
from parentage.infrastructure import RelationshipIndexFactory

_default_index: Optional[RelationshipIndex] = None


def get_default_index() -> RelationshipIndex:
    global _default_index
    if _default_index is None:
        _default_index = RelationshipIndexFactory.create_from_config()
    return _default_index


def reset_default_index() -> None:
    """Forget every relationship and drop the default index (useful for testing)."""
    global _default_index
    if _default_index is not None:
        _default_index.clear()
    _default_index = None


def get_parent(obj: Any) -> Optional[Any]:
    return get_default_index().get_parent(obj)


def set_parent(obj: Any, new_parent: Optional[Any]) -> None:
    get_default_index().set_parent(obj, new_parent)


def get_children(obj: Any) -> Optional[List[Any]]:
    return get_default_index().get_children(obj)


def get_children_read_only(obj: Any) -> Optional[List[Any]]:
    return get_default_index().get_children_read_only(obj)


def child_iterator(obj: Any) -> ChildIterator:
    """Do not add or remove children while iterating."""
    return get_default_index().child_iterator(obj)


def cleanup(obj: Any) -> int:
    return get_default_index().cleanup(obj)


def cleanup_all() -> int:
    return get_default_index().cleanup_all()


def sort_children(
    obj: Any,
    comparator: Optional[Callable[[Any, Any], bool]] = None,
    *,
    key: Optional[Callable[[Any], Any]] = None,
    reverse: bool = False,
) -> None:
    """Warning: this should not be called during iteration."""
    get_default_index().sort_children(obj, comparator, key=key, reverse=reverse)
