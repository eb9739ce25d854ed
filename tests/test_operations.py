"""Tests for beacon.reactive.operations: change detectors and operation table."""

from __future__ import annotations

import enum
import math
from typing import Any

import pytest

from beacon._errors import ConfigError
from beacon.reactive.operations import (
    CHANGE_DETECTORS,
    SignalOperations,
    always,
    is_primitive,
    primitive_equality,
    resolve_detector,
)
from beacon.reactive.sentinel import EMPTY
from beacon.reactive.signal import Signal, deliver


class _Color(enum.IntEnum):
    RED = 1


class TestIsPrimitive:
    """Which values are compared by equality."""

    @pytest.mark.parametrize("value", [None, True, 0, 1.5, 2j, "s", b"b", EMPTY])
    def test_primitives(self, value: Any) -> None:
        assert is_primitive(value)

    @pytest.mark.parametrize(
        "value",
        [[], {}, (), set(), frozenset(), object(), len, _Color.RED],
        ids=["list", "dict", "tuple", "set", "frozenset", "object", "builtin", "intenum"],
    )
    def test_non_primitives(self, value: Any) -> None:
        assert not is_primitive(value)


class TestPrimitiveEquality:
    """primitive_equality returns True when listeners must run."""

    def test_equal_strings_unchanged(self) -> None:
        assert primitive_equality("a", "a") is False

    def test_different_strings_changed(self) -> None:
        assert primitive_equality("a", "b") is True

    def test_none_to_none_unchanged(self) -> None:
        assert primitive_equality(None, None) is False

    def test_empty_to_none_changed(self) -> None:
        assert primitive_equality(EMPTY, None) is True

    def test_type_mismatch_changed(self) -> None:
        assert primitive_equality(1, True) is True
        assert primitive_equality(1.0, True) is True
        assert primitive_equality(0, 0j) is True

    def test_int_and_float_are_one_kind(self) -> None:
        assert primitive_equality(0, 0.0) is False
        assert primitive_equality(2.0, 2) is False
        assert primitive_equality(1, 1.5) is True

    def test_nan_changed(self) -> None:
        assert primitive_equality(math.nan, math.nan) is True

    def test_same_list_changed(self) -> None:
        items: list[int] = []
        assert primitive_equality(items, items) is True

    def test_primitive_to_object_changed(self) -> None:
        assert primitive_equality("a", ["a"]) is True


class TestAlways:
    def test_always_true(self) -> None:
        assert always("a", "a") is True
        assert always(EMPTY, EMPTY) is True


class TestResolveDetector:
    """Lookup by configuration name."""

    def test_known_modes(self) -> None:
        assert resolve_detector("primitive-equality") is primitive_equality
        assert resolve_detector("always") is always
        assert set(CHANGE_DETECTORS) == {"primitive-equality", "always"}

    def test_unknown_mode(self) -> None:
        with pytest.raises(ConfigError, match="expected one of: always, primitive-equality"):
            resolve_detector("never")  # type: ignore[arg-type]


class TestSignalOperations:
    """The per-class operation table."""

    def test_default_table(self) -> None:
        assert Signal.operations.has_changed is primitive_equality
        assert Signal.operations.deliver is deliver

    def test_copy_is_independent(self) -> None:
        table = SignalOperations(has_changed=always, deliver=deliver)
        clone = table.copy()
        clone.has_changed = primitive_equality
        assert table.has_changed is always
        assert clone.deliver is deliver

    def test_subclass_gets_own_table(self, signal_class) -> None:
        assert signal_class.operations is not Signal.operations
        signal_class.operations.has_changed = always
        assert Signal.operations.has_changed is primitive_equality

    def test_subclass_table_used_by_instances(self, signal_class, recorder) -> None:
        signal_class.operations.has_changed = always
        signal = signal_class("x")
        signal.notify(recorder)
        signal.write("x")
        assert len(recorder) == 1

    def test_default_deliver_calls_callable(self, recorder) -> None:
        source = Signal()
        deliver(recorder, "new", "old", source)
        assert recorder.calls == [("new", "old", source)]

    def test_default_deliver_writes_into_signal(self) -> None:
        target = Signal(read_only=True)
        deliver(target, "new", "old", Signal())
        assert target.read() == "new"
