"""Shared test fixtures for beacon."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from beacon.reactive.ledger import ledger
from beacon.reactive.signal import Signal


class Recorder:
    """Listener that remembers every ``(new, old, source)`` call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, Any, Any]] = []

    def __call__(self, new_value: Any, old_value: Any, source: Any) -> None:
        self.calls.append((new_value, old_value, source))

    @property
    def values(self) -> list[Any]:
        return [call[0] for call in self.calls]

    def __len__(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder() -> Recorder:
    """A fresh recording listener."""
    return Recorder()


@pytest.fixture
def signal_class() -> type[Signal[Any]]:
    """A throwaway Signal subclass so plugins never touch ``Signal`` itself."""

    class ScratchSignal(Signal):
        pass

    return ScratchSignal


@pytest.fixture
def detached_ledger() -> Iterator[None]:
    """Detach any collector from the global ledger after the test."""
    previous = ledger.collector
    yield
    ledger.attach(previous)
