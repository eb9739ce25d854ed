"""Signal store: many named values, some of them backed by signals.

A store maps string keys to raw values until someone asks for a key's
signal via ``provide()``.  From then on, ``set()`` writes through that
signal so its listeners fire, and ``get()`` reads from it.

Example::

    store = SignalStore()
    store.set({"greeting": "Ahoy!", "age": 34})
    greeting = store.provide("greeting")
    greeting.notify(on_greeting)
    store.set("greeting", "Arrr!")      # on_greeting("Arrr!", "Ahoy!", greeting)

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, overload

from beacon.reactive.sentinel import EMPTY
from beacon.reactive.signal import Signal

# Marks an omitted argument; EMPTY and None are both valid values
_MISSING: Any = object()


class SignalStore:
    """Keyed collection of raw values and signals.

    Args:
        signal_class: Class used by ``provide()`` to create signals.  Only
            entries that are instances of this class are written through.

    """

    __slots__ = ("_entries", "_signal_class")

    def __init__(self, signal_class: type[Signal[Any]] = Signal) -> None:
        self._signal_class = signal_class
        self._entries: dict[str, Any] = {}

    @property
    def signal_class(self) -> type[Signal[Any]]:
        """Class used for signals created by ``provide()``."""
        return self._signal_class

    @overload
    def set(self, key: str, value: Any) -> SignalStore: ...

    @overload
    def set(self, key: Mapping[str, Any]) -> SignalStore: ...

    def set(self, key: str | Mapping[str, Any], value: Any = _MISSING) -> SignalStore:
        """Set one value, or every item of a mapping.

        Raises:
            TypeError: If a key comes without a value, or a mapping with one.

        """
        if not isinstance(key, Mapping):
            if value is _MISSING:
                msg = f"set() missing a value for key {key!r}"
                raise TypeError(msg)
            self._set(key, value)
        elif value is not _MISSING:
            msg = "set() takes a mapping or a key and a value, not both"
            raise TypeError(msg)
        else:
            for name, item in key.items():
                self._set(name, item)
        return self

    def _set(self, key: str, value: Any) -> None:
        entry = self._entries.get(key)
        if isinstance(entry, self._signal_class):
            entry.write(value)
        else:
            self._entries[key] = value

    @overload
    def get(self) -> dict[str, Any]: ...

    @overload
    def get(self, key: str, default: Any = ...) -> Any: ...

    def get(self, key: str = _MISSING, default: Any = EMPTY) -> Any:
        """Return one value, or a dict of every value when *key* is omitted.

        Unknown keys return *default* (``EMPTY`` unless given).
        """
        if key is _MISSING:
            return {name: self._get(name, default) for name in self._entries}
        return self._get(key, default)

    def _get(self, key: str, default: Any) -> Any:
        if key not in self._entries:
            return default
        entry = self._entries[key]
        return entry.read() if isinstance(entry, self._signal_class) else entry

    def provide(self, key: str) -> Signal[Any]:
        """Return the signal for *key*, creating it from the current value."""
        entry = self._entries.get(key)
        if isinstance(entry, self._signal_class):
            return entry
        signal = self._signal_class(self._get(key, EMPTY))
        self._entries[key] = signal
        return signal

    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return list(self._entries)

    def dispose(self) -> None:
        """Dispose every signal held by the store and forget all keys."""
        for entry in self._entries.values():
            if isinstance(entry, self._signal_class):
                entry.dispose()
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SignalStore({self.get()!r})"
