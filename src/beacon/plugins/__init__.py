"""Plugins for ``Signal.use()``.

Each plugin is a callable ``plugin(target_class, config)`` that replaces
entries of ``target_class.operations``.
"""

from beacon.plugins.deferred import deferred_delivery
from beacon.plugins.tracing import tracing

__all__ = [
    "deferred_delivery",
    "tracing",
]
