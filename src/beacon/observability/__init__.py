"""Signal observability: listener deliveries and listener-count history.

All events are frozen dataclasses with nanosecond timestamps, stored in a
bounded, thread-safe ``EventLog``.

Quick Start:
    >>> from beacon import Signal
    >>> from beacon.observability import SignalCollector
    >>> from beacon.plugins import tracing
    >>> collector = SignalCollector()
    >>> Signal.use(tracing, collector)  # doctest: +SKIP
    >>> collector.log.stats()["total"]
    0

"""

from beacon.observability.collector import SignalCollector, compute_delivery_stats
from beacon.observability.events import (
    ListenerCountChanged,
    ListenerNotified,
    SignalEvent,
    describe,
    now_ns,
)
from beacon.observability.log import EventLog

__all__ = [
    "EventLog",
    "ListenerCountChanged",
    "ListenerNotified",
    "SignalCollector",
    "SignalEvent",
    "compute_delivery_stats",
    "describe",
    "now_ns",
]
