"""Shared type definitions for beacon."""

from collections.abc import Callable
from typing import Any, Literal

# How a signal decides whether a write is a change
ChangeDetection = Literal["primitive-equality", "always"]

# Rewrites an incoming value before storage: (new_value, previous) -> stored
TransformFunc = Callable[[Any, Any], Any]

# Change detector: (old_value, new_value) -> True if listeners must run
ChangeFunc = Callable[[Any, Any], bool]

# Delivers one notification to one listener: (listener, new, old, source)
DeliverFunc = Callable[[Any, Any, Any, Any], None]

# Extension hook applied via Signal.use(): (target_class, config)
PluginFunc = Callable[[type, Any], Any]
