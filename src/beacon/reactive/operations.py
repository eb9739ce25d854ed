"""Signal operation table and change detectors.

Every ``Signal`` class owns a ``SignalOperations`` table.  Plugins applied
via ``Signal.use()`` replace entries in that table to change how writes are
compared and how listeners are called, without touching other classes.

Change detection:
    ``primitive_equality`` (default) suppresses a write when the previous and
    new values are primitives of the same kind that compare equal.  ``int``
    and ``float`` are one numeric kind, so ``1.0`` over ``1`` is no change;
    ``bool`` is its own kind, so ``True`` over ``1`` is.  Any other
    value (list, dict, object, function) always counts as a change, because
    in-place mutation leaves identity unchanged.

    ``always`` treats every write as a change.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from beacon._errors import ConfigError
from beacon.reactive.sentinel import Empty

if TYPE_CHECKING:
    from beacon._types import ChangeDetection, ChangeFunc, DeliverFunc


PRIMITIVE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Empty,
)


# Compared as one kind: writing 1.0 over 1 is not a change
NUMERIC_TYPES: frozenset[type] = frozenset({int, float})


def is_primitive(value: Any) -> bool:
    """Return True for values compared by equality rather than identity.

    Subclasses of the primitive types (e.g. ``IntEnum`` members) are not
    primitives: they may carry mutable state.
    """
    return type(value) in PRIMITIVE_TYPES


def primitive_equality(old: Any, new: Any) -> bool:
    """Return True if writing *new* over *old* must notify listeners."""
    if not (is_primitive(old) and is_primitive(new)):
        return True
    if _kind(old) is not _kind(new):
        return True
    return not old == new


def _kind(value: Any) -> type:
    kind = type(value)
    return float if kind in NUMERIC_TYPES else kind


def always(old: Any, new: Any) -> bool:  # noqa: ARG001
    """Every write is a change."""
    return True


CHANGE_DETECTORS: dict[str, ChangeFunc] = {
    "primitive-equality": primitive_equality,
    "always": always,
}


def resolve_detector(mode: ChangeDetection) -> ChangeFunc:
    """Look up a change detector by its configuration name.

    Raises:
        ConfigError: If *mode* is not a known change-detection mode.

    """
    try:
        return CHANGE_DETECTORS[mode]
    except KeyError:
        known = ", ".join(sorted(CHANGE_DETECTORS))
        msg = f"Unknown change detection {mode!r} (expected one of: {known})"
        raise ConfigError(msg) from None


@dataclass(slots=True)
class SignalOperations:
    """Replaceable operations used by ``Signal`` writes.

    Attributes:
        has_changed: ``(old, new) -> bool``; False skips storage and
            notification.
        deliver: ``(listener, new, old, source) -> None``; calls one listener
            during a notification pass.

    """

    has_changed: ChangeFunc
    deliver: DeliverFunc

    def copy(self) -> SignalOperations:
        """Return an independent table with the same entries."""
        return replace(self)
