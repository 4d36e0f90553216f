"""
Unit tests for GCReclaimer and NullReclaimer.
"""

import gc

import pytest

from parentage.application.interfaces import IReclaimer
from parentage.domain.services import RelationshipIndex
from parentage.infrastructure.reclaimers import GCReclaimer, NullReclaimer


@pytest.fixture
def restore_gc():
    was_enabled = gc.isenabled()
    yield
    if was_enabled:
        gc.enable()
    else:
        gc.disable()


class TestGCReclaimer:
    """Tests for pausing the cyclic collector."""

    def test_implements_interface(self):
        assert isinstance(GCReclaimer(), IReclaimer)
        assert isinstance(NullReclaimer(), IReclaimer)

    def test_pause_disables_and_resume_reenables(self, restore_gc):
        gc.enable()
        reclaimer = GCReclaimer()

        reclaimer.pause()
        assert not gc.isenabled()

        reclaimer.resume()
        assert gc.isenabled()

    def test_resume_keeps_collector_off_if_it_was_off(self, restore_gc):
        gc.disable()
        reclaimer = GCReclaimer()

        reclaimer.pause()
        reclaimer.resume()

        assert not gc.isenabled()

    def test_null_reclaimer_leaves_collector_alone(self, restore_gc):
        gc.enable()
        reclaimer = NullReclaimer()

        reclaimer.pause()
        assert gc.isenabled()
        reclaimer.resume()
        assert gc.isenabled()

    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            IReclaimer()


class TestIndexPausesCollector:
    """The index keeps the collector off only for the duration of compaction."""

    def test_collector_off_during_sort_and_restored_after(self, index, family, restore_gc):
        gc.enable()
        p, _, _, _ = family
        observed = []

        def by_name(x, y):
            observed.append(gc.isenabled())
            return x.name < y.name

        index.sort_children(p, by_name)

        assert observed
        assert not any(observed)
        assert gc.isenabled()


class TestSharedGCReclaimer:
    """Nested pauses from indexes sharing one reclaimer."""

    def test_nested_pause_restores_collector_at_outermost_resume(self, restore_gc):
        gc.enable()
        reclaimer = GCReclaimer()

        reclaimer.pause()
        reclaimer.pause()
        assert reclaimer.paused

        reclaimer.resume()
        assert not gc.isenabled()
        assert reclaimer.paused

        reclaimer.resume()
        assert gc.isenabled()
        assert not reclaimer.paused

    def test_unmatched_resume_is_ignored(self, restore_gc):
        gc.disable()
        reclaimer = GCReclaimer()

        reclaimer.resume()

        assert not gc.isenabled()
        assert not reclaimer.paused

    def test_index_compacting_inside_another_index_sort(self, make_node, restore_gc):
        gc.enable()
        shared = GCReclaimer()
        first = RelationshipIndex(reclaimer=shared)
        second = RelationshipIndex(reclaimer=shared)
        parent = make_node("p")
        for name in ("c", "a", "b"):
            first.set_parent(make_node(name), parent)
        other_parent, other_child = make_node("q"), make_node("x")
        second.set_parent(other_child, other_parent)
        second.set_parent(other_child, None)

        def by_name(x, y):
            second.cleanup(other_parent)
            assert not gc.isenabled()
            return x.name < y.name

        first.sort_children(parent, by_name)

        assert [n.name for n in first.get_children(parent)] == ["a", "b", "c"]
        assert second.get_children_read_only(other_parent) is None
        assert not shared.paused
        assert gc.isenabled()
