"""Exceptions raised by the bus."""

from __future__ import annotations


class ReplayBusError(Exception):
    """Base class for errors raised by replaybus."""


class ConfigurationError(ReplayBusError, ValueError):
    """Raised when the bus is configured with an invalid history size."""
