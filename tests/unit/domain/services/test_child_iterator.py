"""
Unit tests for ChildIterator and RelationshipIndex.child_iterator().
"""

from parentage.domain.entities import TOMBSTONE
from parentage.domain.services import ChildIterator


class TestChildIterator:
    """Tests for iteration over child slots."""

    def test_yields_live_children_in_order(self, index, family):
        p, a, b, c = family

        assert list(index.child_iterator(p)) == [a, b, c]

    def test_no_children_yields_nothing(self, index, make_node):
        assert list(index.child_iterator(make_node("lonely"))) == []

    def test_skips_existing_tombstones(self, index, family):
        p, a, b, c = family
        index.set_parent(a, None)
        index.set_parent(c, None)

        assert list(index.child_iterator(p)) == [b]

    def test_detach_during_iteration_skips_removed_slot(self, index, family):
        p, a, b, c = family
        iterator = index.child_iterator(p)

        assert next(iterator) is a
        index.set_parent(b, None)

        assert list(iterator) == [c]

    def test_children_added_after_creation_are_not_visited(self, index, family, make_node):
        p, a, b, c = family
        iterator = index.child_iterator(p)

        index.set_parent(make_node("late"), p)

        assert list(iterator) == [a, b, c]

    def test_reparent_to_same_parent_during_iteration(self, index, family):
        p, a, b, c = family
        iterator = index.child_iterator(p)

        visited = []
        for child in iterator:
            visited.append(child)
            if child is a:
                index.set_parent(a, None)
                index.set_parent(a, p)

        assert visited == [a, b, c]
        assert index.get_children(p) == [b, c, a]

    def test_each_call_returns_independent_cursor(self, index, family):
        p, a, b, c = family
        first = index.child_iterator(p)
        second = index.child_iterator(p)

        next(first)

        assert list(second) == [a, b, c]
        assert list(first) == [b, c]

    def test_exhausted_iterator_stays_exhausted(self, index, family):
        p, _, _, _ = family
        iterator = index.child_iterator(p)
        list(iterator)

        assert list(iterator) == []
        assert next(iterator, None) is None

    def test_terminates_if_list_shrinks_under_it(self, index, family):
        p, a, b, c = family
        iterator = index.child_iterator(p)
        index.set_parent(a, None)
        index.set_parent(b, None)
        index.cleanup(p)

        assert list(iterator) == [c]

    def test_iterator_over_raw_slots(self):
        iterator = ChildIterator(["x", TOMBSTONE, "y"])

        assert iter(iterator) is iterator
        assert list(iterator) == ["x", "y"]

    def test_iterator_over_none(self):
        assert list(ChildIterator(None)) == []
