from __future__ import annotations


class ReframeError(Exception):
    """Base class for export failures raised by this package."""


class ConfigError(ReframeError, ValueError):
    """A configuration value could not be parsed or is out of range."""


class NoBatchesError(ReframeError, FileNotFoundError):
    """The assets root holds no batch directories."""
