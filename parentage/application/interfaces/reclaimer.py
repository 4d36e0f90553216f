"""
IReclaimer Interface

Interface for the host's automatic memory reclamation facility.
The relationship index only ever asks it to pause and resume.
"""

from abc import ABC, abstractmethod


class IReclaimer(ABC):
    """
    Interface for pausing and resuming automatic reclamation.

    The relationship index brackets tombstone compaction and sorting with
    pause()/resume() so that no collection pass runs while slot lists are
    being reshuffled. Calls are always paired and never nested: the guard
    that drives them pauses once for the outermost critical section.
    """

    @abstractmethod
    def pause(self) -> None:
        """Stop automatic collection passes until resume() is called."""
        pass

    @abstractmethod
    def resume(self) -> None:
        """
        Undo the matching pause().

        Note:
            Implementations should restore the state that was in effect
            before pause(), not unconditionally re-enable collection.
        """
        pass
