"""Beacon configuration.

BeaconConfig is the central configuration object, frozen after creation.
``configure()`` installs it on a signal class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from beacon._errors import ConfigError
from beacon.observability.collector import SignalCollector
from beacon.observability.log import EventLog
from beacon.plugins.tracing import tracing
from beacon.reactive.ledger import ledger
from beacon.reactive.operations import CHANGE_DETECTORS, resolve_detector
from beacon.reactive.signal import Signal

if TYPE_CHECKING:
    from beacon._types import ChangeDetection


@dataclass(frozen=True, slots=True)
class BeaconConfig:
    """Configuration for signals.

    Attributes:
        change_detection: ``"primitive-equality"`` skips writes of an equal
            primitive; ``"always"`` notifies on every write.
        trace: Record listener deliveries and listener-count changes in an
            event log.
        max_events: Capacity of the trace event log.
        verbose: Print a one-line stderr summary of each traced event.

    """

    change_detection: ChangeDetection = "primitive-equality"
    trace: bool = False
    max_events: int = 10_000
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.change_detection not in CHANGE_DETECTORS:
            known = ", ".join(sorted(CHANGE_DETECTORS))
            msg = f"Unknown change_detection {self.change_detection!r} (expected one of: {known})"
            raise ConfigError(msg)
        if isinstance(self.max_events, bool) or not isinstance(self.max_events, int):
            msg = f"max_events must be an integer, got {type(self.max_events).__name__!r}"
            raise ConfigError(msg)
        if self.max_events <= 0:
            msg = f"max_events must be positive, got {self.max_events}"
            raise ConfigError(msg)


def configure(
    config: BeaconConfig,
    target: type[Signal[Any]] | None = None,
    *,
    collector: SignalCollector | None = None,
) -> SignalCollector | None:
    """Apply *config* to *target* (``Signal`` by default).

    Sets the class change detector.  With ``trace`` enabled, applies the
    ``tracing`` plugin and attaches the collector to the listener ledger.
    When *target* already traces, its active collector is reused so that
    delivery and listener-count events land in the same log.

    Returns:
        The collector receiving trace events, or None when tracing is off.

    Raises:
        ConfigError: If *collector* differs from the one *target* already
            traces into.

    """
    if target is None:
        target = Signal

    target.operations.has_changed = resolve_detector(config.change_detection)

    if not config.trace:
        return None

    if tracing in target.applied_plugins():
        active = target.plugin_config(tracing)
        if collector is not None and collector is not active:
            msg = f"{target.__name__} already traces into another collector"
            raise ConfigError(msg)
        collector = active
    elif collector is None:
        collector = SignalCollector(EventLog(max_events=config.max_events), verbose=config.verbose)

    target.use(tracing, collector)
    ledger.attach(collector)
    return collector
