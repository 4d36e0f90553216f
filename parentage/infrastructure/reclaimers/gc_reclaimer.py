"""
Infrastructure: GC Reclaimer

Pauses CPython's cyclic garbage collector through the gc module.
"""

import gc

from parentage.application.interfaces import IReclaimer


class GCReclaimer(IReclaimer):
    """
    Reclaimer backed by the gc module.

    Only the cyclic collector can be paused; reference-count deallocation
    still happens immediately, which is why the index also guards its weak
    stores (see ReclamationGuard).

    One instance may be shared by several indexes, so pauses nest: the
    collector state is recorded by the first pause() and restored by the
    matching last resume().
    """

    def __init__(self):
        self._depth = 0
        self._was_enabled = False

    @property
    def paused(self) -> bool:
        return self._depth > 0

    def pause(self) -> None:
        if self._depth == 0:
            self._was_enabled = gc.isenabled()
            gc.disable()
        self._depth += 1

    def resume(self) -> None:
        if self._depth == 0:
            return
        self._depth -= 1
        # Leave the collector off if it was off before the outermost pause()
        if self._depth == 0 and self._was_enabled:
            gc.enable()


class NullReclaimer(IReclaimer):
    """Reclaimer that never pauses anything."""

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass
