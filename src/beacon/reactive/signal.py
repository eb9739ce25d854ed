"""Signal: a single-value observable cell.

A signal holds one value, hands it out synchronously, and notifies its
listeners whenever a write changes it::

    greeting = Signal()
    greeting.notify(lambda new, old, source: print(old, "->", new))
    greeting.write("Ahoy!")     # prints: <empty> -> Ahoy!
    greeting()                  # "Ahoy!"
    greeting("Arrr!")           # call with one argument writes

Write pipeline:
    1. Read-only signals ignore direct writes (piped values still apply)
    2. ``transform(value, previous)`` rewrites the incoming value
    3. The class change detector decides whether the write is a change
    4. The value is stored
    5. Listeners run in registration order, on the caller's stack

Listeners are plain callables ``(new_value, old_value, source)`` or other
signals.  A signal used as a listener receives the value through its own
write pipeline, so its transform and change detection apply while its
read-only flag does not.  ``a.pipe(b).pipe(c)`` builds chains this way.

Reentrancy:
    Each notification pass iterates a snapshot of the listener list.
    Listeners may register, remove, or write to the same signal; nested
    writes run their own full pass before the outer pass continues.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from beacon._errors import InvalidListenerError, PluginError
from beacon.reactive.ledger import ledger
from beacon.reactive.operations import (
    SignalOperations,
    primitive_equality,
    resolve_detector,
)
from beacon.reactive.sentinel import EMPTY, Empty

if TYPE_CHECKING:
    from beacon._types import ChangeDetection, ChangeFunc, PluginFunc, TransformFunc


class SignalMeta(type):
    """Metaclass exposing class-level diagnostics as read-only properties."""

    @property
    def total_listeners(cls) -> int:
        """Listeners currently registered across every signal instance."""
        return ledger.total


T = TypeVar("T")
L = TypeVar("L", bound=Callable[..., Any])


class Signal(Generic[T], metaclass=SignalMeta):
    """Observable single-value container.

    Args:
        value: Initial value.  Defaults to ``EMPTY``.
        transform: Optional ``(new_value, previous) -> stored`` function run
            before change detection on every accepted write.
        read_only: Reject direct writes.  Values arriving through ``pipe``
            still apply.
        change_detection: Per-instance override of the class change detector
            (``"primitive-equality"`` or ``"always"``).

    Raises:
        ConfigError: If *change_detection* is not a known mode.

    """

    __slots__ = (
        "__weakref__",
        "_disposed",
        "_has_changed",
        "_listeners",
        "_value",
        "read_only",
        "transform",
    )

    operations: ClassVar[SignalOperations]
    _plugins: ClassVar[list[tuple[Callable[..., Any], Any]]] = []

    def __init__(
        self,
        value: T | Empty = EMPTY,
        *,
        transform: TransformFunc | None = None,
        read_only: bool = False,
        change_detection: ChangeDetection | None = None,
    ) -> None:
        self._value: T | Empty = value
        self._listeners: list[Callable[..., Any]] = []
        self._disposed = False
        self._has_changed: ChangeFunc | None = (
            resolve_detector(change_detection) if change_detection is not None else None
        )
        self.transform = transform
        self.read_only = read_only

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Copies, not shared: the registry must describe what the table holds
        cls.operations = cls.operations.copy()
        cls._plugins = list(cls._plugins)

    # ----- read / write -----

    def read(self) -> T | Empty:
        """Return the current value (``EMPTY`` if unset or disposed)."""
        return self._value

    @property
    def value(self) -> T | Empty:
        """The current value."""
        return self._value

    def write(self, value: T) -> T | Empty:
        """Store *value* and notify listeners if it is a change.

        Returns the value held before the call, also when the write was
        suppressed.  Read-only signals return their current value unchanged.
        Exceptions raised by listeners propagate and end the pass.

        """
        if self.read_only:
            return self._value
        return self._receive(value)

    def __call__(self, *args: Any) -> Any:
        """``signal()`` reads, ``signal(value)`` writes."""
        if not args:
            return self._value
        if len(args) > 1:
            msg = f"{type(self).__name__}() takes at most 1 argument ({len(args)} given)"
            raise TypeError(msg)
        return self.write(args[0])

    def _receive(self, value: Any) -> T | Empty:
        """Write pipeline shared by direct writes and piped delivery."""
        if self._disposed:
            return EMPTY

        previous = self._value
        if self.transform is not None:
            value = self.transform(value, previous)

        has_changed = self._has_changed or type(self).operations.has_changed
        if not has_changed(previous, value):
            return previous

        self._value = value
        self._notify_all(value, previous)
        return previous

    def _notify_all(self, new_value: Any, old_value: Any) -> None:
        if not self._listeners:
            return
        deliver = type(self).operations.deliver
        for listener in tuple(self._listeners):
            if self._disposed:
                break
            deliver(listener, new_value, old_value, self)

    def trigger(self) -> Signal[T]:
        """Notify listeners with the current value, skipping change detection.

        Use after mutating a held list/dict/object in place.
        """
        if not self._disposed:
            self._notify_all(self._value, self._value)
        return self

    # ----- listeners -----

    def notify(self, *listeners: Callable[..., Any]) -> Signal[T]:
        """Register listeners to be called on every change.

        The same listener may be registered more than once; it then runs once
        per registration.

        Raises:
            InvalidListenerError: If any argument is not callable.  Nothing
                is registered in that case.

        """
        if self._disposed:
            return self
        for listener in listeners:
            if not callable(listener):
                msg = (
                    f"{type(self).__name__} listener must be callable, "
                    f"got {type(listener).__name__!r}"
                )
                raise InvalidListenerError(msg)
        self._listeners.extend(listeners)
        ledger.adjust(self, len(listeners))
        return self

    def unnotify(self, *listeners: Callable[..., Any]) -> Signal[T]:
        """Remove every registration of the given listeners.

        Listeners that were never registered are ignored.
        """
        if self._disposed or not listeners or not self._listeners:
            return self
        remaining = [existing for existing in self._listeners if existing not in listeners]
        removed = len(self._listeners) - len(remaining)
        self._listeners = remaining
        ledger.adjust(self, -removed)
        return self

    def pipe(self, listener: L) -> L:
        """Register *listener* and return it, for ``a.pipe(b).pipe(c)`` chains."""
        self.notify(listener)
        return listener

    def unpipe(self, listener: Callable[..., Any]) -> Signal[T]:
        """Remove a piped listener (same as ``unnotify``)."""
        return self.unnotify(listener)

    @property
    def listeners(self) -> tuple[Callable[..., Any], ...]:
        """Snapshot of the registered listeners in notification order."""
        return tuple(self._listeners)

    @property
    def listener_count(self) -> int:
        """Number of registrations on this signal."""
        return len(self._listeners)

    # ----- lifecycle -----

    @property
    def disposed(self) -> bool:
        """True once ``dispose()`` has been called."""
        return self._disposed

    def dispose(self) -> None:
        """Drop the value and every listener.  Safe to call repeatedly.

        A disposed signal reads as ``EMPTY`` and ignores writes,
        registrations and triggers.
        """
        if self._disposed:
            return
        count = len(self._listeners)
        self._disposed = True
        self._value = EMPTY
        self._listeners = []
        self.transform = None
        ledger.adjust(self, -count)

    # ----- extension -----

    @classmethod
    def use(cls, plugin: PluginFunc, config: Any = None) -> type[Signal[Any]]:
        """Apply *plugin* to this class once.

        The plugin is called as ``plugin(cls, config)`` and may replace
        entries of ``cls.operations``.  Applying a plugin that this class has
        already applied, itself or through a parent it was created from,
        does nothing.

        Raises:
            PluginError: If *plugin* is not callable.

        """
        if not callable(plugin):
            msg = f"Plugin must be callable, got {type(plugin).__name__!r}"
            raise PluginError(msg)
        if any(applied is plugin for applied, _ in cls._plugins):
            return cls
        plugin(cls, config)
        cls._plugins.append((plugin, config))
        return cls

    @classmethod
    def applied_plugins(cls) -> tuple[Callable[..., Any], ...]:
        """Plugins in effect on this class, in application order.

        A subclass starts with the plugins its parent had applied when the
        subclass was created.
        """
        return tuple(plugin for plugin, _ in cls._plugins)

    @classmethod
    def plugin_config(cls, plugin: PluginFunc) -> Any:
        """Return the config *plugin* was applied with.

        Raises:
            LookupError: If *plugin* is not applied to this class.

        """
        for applied, config in cls._plugins:
            if applied is plugin:
                return config
        msg = f"{getattr(plugin, '__name__', plugin)!r} is not applied to {cls.__name__}"
        raise LookupError(msg)

    def __repr__(self) -> str:
        if self._disposed:
            return f"{type(self).__name__}(<disposed>)"
        return f"{type(self).__name__}({self._value!r})"


def deliver(listener: Any, new_value: Any, old_value: Any, source: Signal[Any]) -> None:
    """Default delivery: signals receive a write, callables a call."""
    if isinstance(listener, Signal):
        listener._receive(new_value)
    else:
        listener(new_value, old_value, source)


Signal.operations = SignalOperations(has_changed=primitive_equality, deliver=deliver)
