"""
Domain Storage for the Relationship Index
"""

from .identity_map import IdentityWeakKeyMap, IdentityWeakSet

__all__ = [
    "IdentityWeakKeyMap",
    "IdentityWeakSet",
]
