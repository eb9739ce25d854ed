"""Event model for signal diagnostics.

All events are frozen dataclasses with:
- ``signal``: Short identifier of the signal involved (see ``describe()``)
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ListenerNotified:
    """A listener was called during a notification pass.

    Attributes:
        signal: Identifier of the notifying signal.
        listener: Identifier of the listener (function qualname or signal).
        duration_ms: Time spent in the listener in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    signal: str
    listener: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ListenerCountChanged:
    """Listeners were registered, removed, or dropped by disposal.

    Attributes:
        signal: Identifier of the signal whose listeners changed.
        delta: Change in listener count (negative for removals).
        total: Live listeners across all signals after the change.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    signal: str
    delta: int
    total: int
    timestamp_ns: int


SignalEvent = ListenerNotified | ListenerCountChanged


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()


def describe(obj: object) -> str:
    """Return a short, stable label for a signal or listener."""
    qualname = getattr(obj, "__qualname__", None)
    if qualname is not None:
        module = getattr(obj, "__module__", None)
        return f"{module}.{qualname}" if module else qualname
    func = getattr(obj, "__func__", None)
    if func is not None:
        return describe(func)
    return f"{type(obj).__name__}@{id(obj):#x}"
