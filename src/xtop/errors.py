"""Exception types raised by xtop.

Request failures are never raised to callers; workers turn them into failed
``Result`` values. Only configuration and display problems surface as
exceptions, and a ``DisplayError`` is fatal for the process.
"""

from __future__ import annotations


class XtopError(Exception):
    """Base class for all xtop errors."""


class ConfigError(XtopError, ValueError):
    """Invalid target or render configuration."""


class DisplayError(XtopError, RuntimeError):
    """The terminal backend could not be started or configured."""
