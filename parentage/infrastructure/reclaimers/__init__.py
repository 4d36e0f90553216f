from .gc_reclaimer import GCReclaimer, NullReclaimer

__all__ = ["GCReclaimer", "NullReclaimer"]
