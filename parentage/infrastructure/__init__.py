"""
Infrastructure layer: reclaimer implementations and wiring.
"""

from .factory import RelationshipIndexFactory

__all__ = ["RelationshipIndexFactory"]
