"""Beacon error hierarchy.

All beacon-specific errors inherit from BeaconError for easy catching.
"""


class BeaconError(Exception):
    """Base error for all beacon operations."""


class InvalidListenerError(BeaconError, TypeError):
    """A listener passed to a signal is not callable."""


class PluginError(BeaconError, TypeError):
    """A plugin is not callable or was applied without required config."""


class ConfigError(BeaconError, ValueError):
    """Invalid or malformed configuration."""
