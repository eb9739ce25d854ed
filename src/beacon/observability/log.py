"""Event log: what signals did, kept for inspection.

``SignalCollector`` appends one ``ListenerNotified`` per listener call and
one ``ListenerCountChanged`` per registration change.  The log keeps the
newest ``max_events`` of them and answers which signal notified which
listener, and how often.

Signals and listeners are stored as ``describe()`` labels, so filters match
by substring: ``"Signal@0x7f"`` for one instance, ``"on_change"`` for a
callback wherever it is registered.

Thread Safety:
    Every method takes the log's ``threading.Lock``.  Tracing signals that
    are written from several threads is safe.

"""

import threading
from collections import Counter, deque
from itertools import islice
from typing import Any

from beacon.observability.events import ListenerNotified, SignalEvent


class EventLog:
    """Ring buffer of signal events.  When full, the oldest event is dropped.

    Args:
        max_events: Number of events to keep.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[SignalEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        """Capacity of the log."""
        return self._events.maxlen or 0

    def append(self, event: SignalEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        signal: str | None = None,
        listener: str | None = None,
        limit: int = 100,
    ) -> list[SignalEvent]:
        """Return matching events, most recent first.

        Args:
            event_type: Only events of this class.
            since_ns: Only events stamped at or after this time.
            signal: Only events whose signal label contains this text.
            listener: Only deliveries to a listener whose label contains this
                text.  Listener-count events never match.
            limit: Maximum number of events to return.

        """
        with self._lock:
            newest_first = list(reversed(self._events))
        matches = (
            event
            for event in newest_first
            if _matches(event, event_type, since_ns, signal, listener)
        )
        return list(islice(matches, limit))

    def recent(self, n: int = 20) -> list[SignalEvent]:
        """Return the *n* most recent events, oldest first."""
        with self._lock:
            return list(self._events)[-n:]

    def clear(self) -> int:
        """Drop every event and return how many there were."""
        with self._lock:
            dropped = len(self._events)
            self._events.clear()
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return event counts by type and the number of distinct signals and listeners."""
        with self._lock:
            events = list(self._events)

        listeners = {event.listener for event in events if isinstance(event, ListenerNotified)}
        return {
            "total": len(events),
            "max_events": self.max_events,
            "by_type": dict(Counter(type(event).__name__ for event in events)),
            "signals": len({event.signal for event in events}),
            "listeners": len(listeners),
        }


def _matches(
    event: SignalEvent,
    event_type: type | None,
    since_ns: int,
    signal: str | None,
    listener: str | None,
) -> bool:
    if event_type is not None and not isinstance(event, event_type):
        return False
    if event.timestamp_ns < since_ns:
        return False
    if signal is not None and signal not in event.signal:
        return False
    if listener is None:
        return True
    return isinstance(event, ListenerNotified) and listener in event.listener
