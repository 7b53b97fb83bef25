"""Dispatcher exceptions."""

from __future__ import annotations

__all__ = [
    "DispatchError",
    "DispatchConfigError",
    "DispatcherNotReady",
    "ParameterError",
]


class DispatchError(RuntimeError):
    """Base class for dispatcher failures."""

    pass


class DispatchConfigError(DispatchError):
    """Raised at startup when a handler registration is malformed."""

    pass


class DispatcherNotReady(DispatchError):
    """Raised when an event is dispatched before registration completed."""

    pass


class ParameterError(DispatchError):
    """Raised when a declared parameter cannot be read from an event."""

    pass
