from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from enum import Enum
import time

class ComponentType(str, Enum):
    RELATIONSHIP_INDEX = "RelationshipIndex"
    RECLAMATION_GUARD = "ReclamationGuard"

class EventType(str, Enum):
    INDEX_CREATED = "Index_Created"
    PARENT_CLEANED = "Parent_Cleaned"
    COMPACTION_COMPLETED = "Compaction_Completed"
    CHILDREN_SORTED = "Children_Sorted"
    RECLAMATION_PAUSED = "Reclamation_Paused"
    RECLAMATION_RESUMED = "Reclamation_Resumed"

class LogEntry(BaseModel):
    trace_id: str
    timestamp: float = Field(default_factory=time.time)
    component: ComponentType
    event_type: EventType
    payload_hash: Optional[str] = None
    metrics: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None


class IndexStats(BaseModel):
    """Point-in-time counts for a relationship index"""
    index_id: str
    parented_objects: int  # live entries in ParentOf
    parents: int  # objects with a children entry
    pending_cleanup: int  # parents holding uncompacted tombstones
    live_children: int
    tombstones: int
