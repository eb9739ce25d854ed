"""Tests for Signal.use() and the bundled plugins."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from beacon._errors import PluginError
from beacon.observability.collector import SignalCollector
from beacon.observability.events import ListenerNotified
from beacon.plugins import deferred_delivery, tracing
from beacon.reactive.operations import always
from beacon.reactive.sentinel import EMPTY
from beacon.reactive.signal import Signal, deliver


def _always_notify(target: type[Signal[Any]], config: Any) -> None:
    target.operations.has_changed = always


# ---------------------------------------------------------------------------
# Signal.use
# ---------------------------------------------------------------------------


class TestUse:
    """Plugin registration on a signal class."""

    def test_plugin_called_with_target_and_config(self, signal_class) -> None:
        calls: list[tuple[Any, Any]] = []

        def plugin(target: Any, config: Any) -> None:
            calls.append((target, config))

        config = {"option": True}
        assert signal_class.use(plugin, config) is signal_class
        assert calls == [(signal_class, config)]

    def test_config_defaults_to_none(self, signal_class) -> None:
        calls: list[Any] = []
        signal_class.use(lambda target, config: calls.append(config))
        assert calls == [None]

    def test_same_plugin_applied_once(self, signal_class) -> None:
        calls: list[Any] = []

        def plugin(target: Any, config: Any) -> None:
            calls.append(config)

        signal_class.use(plugin, 1)
        signal_class.use(plugin, 2)
        assert calls == [1]
        assert signal_class.applied_plugins() == (plugin,)

    def test_distinct_plugins_each_applied(self, signal_class) -> None:
        calls: list[str] = []

        def first(target: Any, config: Any) -> None:
            calls.append("first")

        def second(target: Any, config: Any) -> None:
            calls.append("second")

        signal_class.use(first).use(second)
        assert calls == ["first", "second"]
        assert signal_class.applied_plugins() == (first, second)

    def test_plugin_changes_subclass_only(self, signal_class, recorder) -> None:
        signal_class.use(_always_notify)

        scratch = signal_class("x")
        scratch.notify(recorder)
        scratch.write("x")
        assert len(recorder) == 1

        plain = Signal("x")
        plain.notify(recorder)
        plain.write("x")
        assert len(recorder) == 1
        assert _always_notify not in Signal.applied_plugins()

    def test_plugin_affects_existing_instances(self, signal_class, recorder) -> None:
        signal = signal_class("x")
        signal.notify(recorder)
        signal_class.use(_always_notify)
        signal.write("x")
        assert len(recorder) == 1

    def test_subclass_inherits_applied_plugins(self, signal_class) -> None:
        calls: list[Any] = []

        def plugin(target: Any, config: Any) -> None:
            calls.append(target)
            target.operations.has_changed = always

        signal_class.use(plugin)

        class Child(signal_class):  # type: ignore[misc, valid-type]
            pass

        Child.use(plugin)
        assert calls == [signal_class]
        assert Child.operations.has_changed is always
        assert Child.applied_plugins() == (plugin,)

    def test_plugin_applied_to_parent_later_not_inherited(self, signal_class) -> None:
        class Child(signal_class):  # type: ignore[misc, valid-type]
            pass

        signal_class.use(_always_notify)
        assert Child.applied_plugins() == ()
        assert Child.operations.has_changed is not always

        Child.use(_always_notify)
        assert Child.operations.has_changed is always

    def test_child_plugin_does_not_reach_parent(self, signal_class) -> None:
        class Child(signal_class):  # type: ignore[misc, valid-type]
            pass

        Child.use(_always_notify)
        assert signal_class.applied_plugins() == ()
        assert signal_class.operations.has_changed is not always

    def test_plugin_config(self, signal_class) -> None:
        config = {"option": True}
        signal_class.use(_always_notify, config)
        assert signal_class.plugin_config(_always_notify) is config

    def test_plugin_config_keeps_first_application(self, signal_class) -> None:
        signal_class.use(_always_notify, "first")
        signal_class.use(_always_notify, "second")
        assert signal_class.plugin_config(_always_notify) == "first"

    def test_plugin_config_unknown_plugin(self, signal_class) -> None:
        with pytest.raises(LookupError, match="_always_notify"):
            signal_class.plugin_config(_always_notify)

    def test_non_callable_plugin(self, signal_class) -> None:
        with pytest.raises(PluginError, match="must be callable"):
            signal_class.use("plugin")  # type: ignore[arg-type]

    def test_failing_plugin_not_recorded(self, signal_class) -> None:
        def broken(target: Any, config: Any) -> None:
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            signal_class.use(broken)
        assert signal_class.applied_plugins() == ()


# ---------------------------------------------------------------------------
# deferred_delivery
# ---------------------------------------------------------------------------


class TestDeferredDelivery:
    """Listener calls scheduled on the event loop."""

    @pytest.mark.asyncio
    async def test_listeners_run_after_write_returns(self, signal_class, recorder) -> None:
        signal_class.use(deferred_delivery)
        signal = signal_class()
        signal.notify(recorder)

        signal.write("x")
        assert signal.read() == "x"
        assert len(recorder) == 0

        await asyncio.sleep(0)
        assert recorder.calls == [("x", EMPTY, signal)]

    @pytest.mark.asyncio
    async def test_listeners_keep_write_order(self, signal_class, recorder) -> None:
        signal_class.use(deferred_delivery)
        signal = signal_class(0)
        signal.notify(recorder)

        signal.write(1)
        signal.write(2)
        await asyncio.sleep(0)

        assert [call[:2] for call in recorder.calls] == [(1, 0), (2, 1)]

    @pytest.mark.asyncio
    async def test_piped_signal_updates_on_next_iteration(self, signal_class) -> None:
        signal_class.use(deferred_delivery)
        a = signal_class()
        b = Signal()
        a.pipe(b)

        a.write("x")
        assert b.read() is EMPTY
        await asyncio.sleep(0)
        assert b.read() == "x"

    def test_explicit_loop(self, signal_class, recorder) -> None:
        loop = asyncio.new_event_loop()
        try:
            signal_class.use(deferred_delivery, loop)
            signal = signal_class()
            signal.notify(recorder)
            signal.write("x")
            assert len(recorder) == 0
            loop.run_until_complete(asyncio.sleep(0))
            assert recorder.values == ["x"]
        finally:
            loop.close()

    def test_no_running_loop_raises(self, signal_class, recorder) -> None:
        signal_class.use(deferred_delivery)
        signal = signal_class()
        signal.notify(recorder)
        with pytest.raises(RuntimeError):
            signal.write("x")


# ---------------------------------------------------------------------------
# tracing
# ---------------------------------------------------------------------------


class TestTracing:
    """Delivery timing recorded in the collector."""

    def test_records_each_delivery(self, signal_class, recorder) -> None:
        collector = SignalCollector()
        signal_class.use(tracing, collector)
        signal = signal_class()
        signal.notify(recorder, recorder)

        signal.write("x")

        events = collector.log.query(event_type=ListenerNotified)
        assert len(events) == 2
        assert all(e.duration_ms >= 0 for e in events)
        assert all("ScratchSignal" in e.signal for e in events)
        assert recorder.values == ["x", "x"]

    def test_records_failed_delivery(self, signal_class) -> None:
        collector = SignalCollector()
        signal_class.use(tracing, collector)
        signal = signal_class()

        def boom(*args: Any) -> None:
            raise ValueError("bad")

        signal.notify(boom)
        with pytest.raises(ValueError, match="bad"):
            signal.write("x")
        assert len(collector.log) == 1
        assert collector.log.recent(1)[0].listener.endswith("boom")

    def test_wraps_existing_delivery(self, signal_class, recorder) -> None:
        collector = SignalCollector()
        signal_class.use(tracing, collector)
        assert signal_class.operations.deliver is not deliver
        assert Signal.operations.deliver is deliver

    def test_requires_collector(self, signal_class) -> None:
        with pytest.raises(PluginError, match="requires a SignalCollector"):
            signal_class.use(tracing)
        assert signal_class.applied_plugins() == ()

    def test_inherited_tracing_records_once(self, signal_class, recorder) -> None:
        collector = SignalCollector()
        signal_class.use(tracing, collector)

        class Child(signal_class):  # type: ignore[misc, valid-type]
            pass

        Child.use(tracing, collector)
        signal = Child()
        signal.notify(recorder)
        signal.write("x")

        assert len(collector.log.query(event_type=ListenerNotified)) == 1
        assert recorder.values == ["x"]
