"""Deferred delivery: run listeners on the next event-loop iteration.

After ``Signal.use(deferred_delivery)``, writes still store synchronously
and still return the previous value, but each listener call is scheduled
with ``loop.call_soon`` instead of running before ``write`` returns::

    Signal.use(deferred_delivery)          # uses the running loop
    Signal.use(deferred_delivery, loop)    # or an explicit loop

Listeners then observe the value passed at write time, not whatever the
signal holds when they run.  Listener exceptions go to the loop's
exception handler instead of the writer.

Apply it to a subclass to keep the synchronous default elsewhere::

    class LoopSignal(Signal): ...
    LoopSignal.use(deferred_delivery)

"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from beacon.reactive.signal import Signal


def deferred_delivery(target: type[Signal[Any]], loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Replace ``target``'s delivery with ``call_soon`` scheduling.

    Without *loop*, ``asyncio.get_running_loop()`` is resolved at write
    time, so writes from outside a running loop raise ``RuntimeError``.
    """
    deliver = target.operations.deliver

    def deliver_soon(listener: Any, new_value: Any, old_value: Any, source: Any) -> None:
        event_loop = loop if loop is not None else asyncio.get_running_loop()
        event_loop.call_soon(deliver, listener, new_value, old_value, source)

    target.operations.deliver = deliver_soon
