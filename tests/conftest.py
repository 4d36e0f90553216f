"""
Shared test fixtures for parentage tests
"""

import pytest

from parentage.config import clear_config_cache
from parentage.domain.services import RelationshipIndex
from parentage.hierarchy import reset_default_index
from parentage.infrastructure.reclaimers import GCReclaimer


class Node:
    """Plain weak-referenceable participant."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Node({self.name!r})"


class AlwaysEqual:
    """Participant that compares equal to everything and is unhashable."""

    __hash__ = None

    def __eq__(self, other):
        return True


@pytest.fixture
def index():
    return RelationshipIndex(reclaimer=GCReclaimer())


@pytest.fixture
def family(index):
    """Parent p with children a, b, c attached in that order."""
    p, a, b, c = Node("p"), Node("a"), Node("b"), Node("c")
    for child in (a, b, c):
        index.set_parent(child, p)
    return p, a, b, c


@pytest.fixture(autouse=True)
def fresh_defaults():
    reset_default_index()
    clear_config_cache()
    yield
    reset_default_index()
    clear_config_cache()


@pytest.fixture
def make_node():
    return Node


@pytest.fixture
def make_always_equal():
    return AlwaysEqual
