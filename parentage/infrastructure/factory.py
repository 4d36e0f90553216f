"""
Infrastructure: Relationship Index Factory

Dependency injection factory for assembling a RelationshipIndex from config.
"""

from typing import Any, Dict, Optional

from parentage.config import get_parentage_config
from parentage.domain.services import RelationshipIndex
from parentage.infrastructure.reclaimers import GCReclaimer
from parentage.logging_utils import StructuredLogger, ComponentType


class RelationshipIndexFactory:
    """
    Factory for creating relationship indexes.

    Implements dependency injection pattern.
    """

    @staticmethod
    def create_relationship_index(
        pause_reclamation: bool = True,
        log_level: Optional[str] = None,
        log_compaction_events: bool = True,
    ) -> RelationshipIndex:
        """
        Create a fully wired RelationshipIndex.

        Args:
            pause_reclamation: Pause the gc collector around compaction
            log_level: Logger level name (e.g. "INFO", "DEBUG")
            log_compaction_events: Emit Compaction_Completed events

        Returns:
            Configured RelationshipIndex instance
        """
        reclaimer = GCReclaimer() if pause_reclamation else None
        logger = StructuredLogger(ComponentType.RELATIONSHIP_INDEX, level=log_level)

        return RelationshipIndex(
            reclaimer=reclaimer,
            logger=logger,
            log_compaction_events=log_compaction_events,
        )

    @staticmethod
    def create_from_config(config: Optional[Dict[str, Any]] = None) -> RelationshipIndex:
        """
        Create an index from parentage_config.yaml (or the given config dict).

        Returns:
            Configured RelationshipIndex
        """
        config = config if config is not None else get_parentage_config()
        reclamation = config.get('reclamation', {})
        logging_config = config.get('logging', {})

        return RelationshipIndexFactory.create_relationship_index(
            pause_reclamation=reclamation.get('pause_during_compaction', True),
            log_level=logging_config.get('level'),
            log_compaction_events=logging_config.get('log_compaction_events', True),
        )
