"""Reactive layer: signals and the structures built on them.

Signals hold a value and push changes to listeners; the store groups named
values and lazily upgrades them to signals.
"""

from beacon.reactive.ledger import ListenerLedger, ledger
from beacon.reactive.operations import (
    CHANGE_DETECTORS,
    SignalOperations,
    always,
    is_primitive,
    primitive_equality,
)
from beacon.reactive.sentinel import EMPTY, Empty
from beacon.reactive.signal import Signal, deliver
from beacon.reactive.store import SignalStore

__all__ = [
    "CHANGE_DETECTORS",
    "EMPTY",
    "Empty",
    "ListenerLedger",
    "Signal",
    "SignalOperations",
    "SignalStore",
    "always",
    "deliver",
    "is_primitive",
    "ledger",
    "primitive_equality",
]
