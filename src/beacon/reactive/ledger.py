"""Live-listener ledger: process-wide count of registered listeners.

Every listener registration on any signal increments the count, every
removal and every disposal decrements it.  The number exists for leak
diagnostics only: forgotten listeners show up as a count that never returns
to its baseline.  It never influences signal behavior.

Thread Safety:
    The count is protected by a ``threading.Lock``.  Safe for concurrent
    registration from multiple threads.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from beacon.observability.collector import SignalCollector


class ListenerLedger:
    """Counts live listeners across all signals.

    Optionally forwards every change to a ``SignalCollector`` so the history
    of the count can be inspected in an ``EventLog``.

    """

    __slots__ = ("_collector", "_lock", "_total")

    def __init__(self) -> None:
        self._total = 0
        self._lock = threading.Lock()
        self._collector: SignalCollector | None = None

    @property
    def total(self) -> int:
        """Number of listeners currently registered on all signals."""
        with self._lock:
            return self._total

    @property
    def collector(self) -> SignalCollector | None:
        """The attached collector, if any."""
        return self._collector

    def attach(self, collector: SignalCollector | None) -> None:
        """Forward count changes to *collector* (``None`` detaches)."""
        self._collector = collector

    def adjust(self, source: object, delta: int) -> int:
        """Apply *delta* on behalf of *source* and return the new total."""
        if delta == 0:
            return self.total
        with self._lock:
            self._total += delta
            total = self._total
        collector = self._collector
        if collector is not None:
            collector.record_listener_count(source, delta=delta, total=total)
        return total


# Module-level ledger shared by every Signal class.  Starts at zero on import.
ledger = ListenerLedger()
