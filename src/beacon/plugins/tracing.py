"""Tracing: time every listener call and record it.

``Signal.use(tracing, collector)`` wraps the class delivery so each listener
call produces a ``ListenerNotified`` event in ``collector.log``.  The event
is recorded even when the listener raises; the exception still propagates.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from beacon._errors import PluginError
from beacon.observability.collector import SignalCollector

if TYPE_CHECKING:
    from beacon.reactive.signal import Signal


def tracing(target: type[Signal[Any]], collector: SignalCollector | None) -> None:
    """Wrap ``target``'s delivery with timing.

    Raises:
        PluginError: If *collector* is not a ``SignalCollector``.

    """
    if not isinstance(collector, SignalCollector):
        msg = f"tracing requires a SignalCollector, got {type(collector).__name__!r}"
        raise PluginError(msg)

    deliver = target.operations.deliver

    def traced_deliver(listener: Any, new_value: Any, old_value: Any, source: Any) -> None:
        start = time.perf_counter()
        try:
            deliver(listener, new_value, old_value, source)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            collector.record_notification(source, listener, duration_ms=duration_ms)

    target.operations.deliver = traced_deliver
