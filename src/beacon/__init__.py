"""Beacon: single-value observable signals for Python.

A signal is a mutable cell holding one value.  Reading is synchronous,
writing goes through one entry point, and every change is pushed to the
registered listeners before the write returns.

Quick start::

    from beacon import Signal

    greeting = Signal()
    greeting.notify(lambda new, old, source: print(new))
    greeting.write("Ahoy!")             # prints: Ahoy!

Chains::

    raw = Signal()
    clean = Signal(transform=lambda value, previous: value.strip(), read_only=True)
    raw.pipe(clean).pipe(render)
    raw.write("  Arrr!  ")              # clean holds "Arrr!", render is called

Building blocks:

    Signal          Observable value cell        (beacon.reactive)
    SignalStore     Keyed values and signals     (beacon.reactive)
    plugins         deferred_delivery, tracing   (beacon.plugins)
    observability   Event log and collector      (beacon.observability)

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "EMPTY",
    "BeaconConfig",
    "BeaconError",
    "ConfigError",
    "Empty",
    "InvalidListenerError",
    "PluginError",
    "Signal",
    "SignalStore",
    "__version__",
    "configure",
    "load_config",
]

_LAZY_IMPORTS: dict[str, str] = {
    "EMPTY": "beacon.reactive.sentinel",
    "Empty": "beacon.reactive.sentinel",
    "Signal": "beacon.reactive.signal",
    "SignalStore": "beacon.reactive.store",
    "BeaconConfig": "beacon.config",
    "configure": "beacon.config",
    "load_config": "beacon.config_loader",
    "BeaconError": "beacon._errors",
    "ConfigError": "beacon._errors",
    "InvalidListenerError": "beacon._errors",
    "PluginError": "beacon._errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import beacon`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
