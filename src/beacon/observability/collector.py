"""Signal collector: records signal activity into an event log.

The ``tracing`` plugin reports each listener delivery here, and the
listener ledger reports every change of the live-listener count once the
collector is attached to it.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from multiple threads.

"""

from __future__ import annotations

import sys

from beacon.observability.events import (
    ListenerCountChanged,
    ListenerNotified,
    describe,
    now_ns,
)
from beacon.observability.log import EventLog


class SignalCollector:
    """Event collector for signal diagnostics.

    Args:
        log: The EventLog to store events in.
        verbose: Print a one-line summary of each event to stderr.

    """

    __slots__ = ("_log", "_verbose")

    def __init__(self, log: EventLog | None = None, *, verbose: bool = False) -> None:
        self._log = log if log is not None else EventLog()
        self._verbose = verbose

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_notification(
        self,
        signal: object,
        listener: object,
        *,
        duration_ms: float = 0.0,
    ) -> ListenerNotified:
        """Record one listener call."""
        event = ListenerNotified(
            signal=describe(signal),
            listener=describe(listener),
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        )
        self._log.append(event)
        if self._verbose:
            print(
                f"  [{event.duration_ms:.2f}ms] {event.signal} -> {event.listener}",
                file=sys.stderr,
            )
        return event

    def record_listener_count(
        self,
        signal: object,
        *,
        delta: int,
        total: int,
    ) -> ListenerCountChanged:
        """Record a change of the live-listener count."""
        event = ListenerCountChanged(
            signal=describe(signal),
            delta=delta,
            total=total,
            timestamp_ns=now_ns(),
        )
        self._log.append(event)
        if self._verbose:
            change = f"+{delta}" if delta > 0 else str(delta)
            noun = "listener" if total == 1 else "listeners"
            print(
                f"  {event.signal}: {change} ({total} {noun} live)",
                file=sys.stderr,
            )
        return event


def compute_delivery_stats(
    log: EventLog,
    *,
    limit: int = 100,
) -> dict:
    """Compute latency statistics from recent ``ListenerNotified`` events.

    Returns a dict with count, p50, p95, p99, min and max in milliseconds,
    plus the slowest listeners by average time.

    """
    events = log.query(event_type=ListenerNotified, limit=limit)
    if not events:
        return {"count": 0}

    durations = sorted(e.duration_ms for e in events)
    count = len(durations)

    def percentile(data: list[float], pct: float) -> float:
        idx = int(len(data) * pct / 100)
        return data[min(idx, len(data) - 1)]

    per_listener: dict[str, list[float]] = {}
    for e in events:
        per_listener.setdefault(e.listener, []).append(e.duration_ms)
    averages = {name: sum(times) / len(times) for name, times in per_listener.items()}
    slowest = sorted(averages.items(), key=lambda item: item[1], reverse=True)[:5]

    return {
        "count": count,
        "duration_ms": {
            "p50": round(percentile(durations, 50), 3),
            "p95": round(percentile(durations, 95), 3),
            "p99": round(percentile(durations, 99), 3),
            "min": round(durations[0], 3),
            "max": round(durations[-1], 3),
        },
        "slowest_listeners": [(name, round(avg, 3)) for name, avg in slowest],
    }
