"""
Event dispatcher.

Maps inbound Discord events to handler coroutines by event kind and string
identifier, and extracts declared parameters from the event payload.
"""

from .errors import DispatchConfigError, DispatcherNotReady, DispatchError, ParameterError
from .events import EventKind, InboundEvent, MessageRef, UserRef
from .params import Param, ParamType
from .registry import Dispatcher, DispatcherState, HandlerRegistration

__all__ = [
    "Dispatcher",
    "DispatcherState",
    "DispatchConfigError",
    "DispatcherNotReady",
    "DispatchError",
    "EventKind",
    "HandlerRegistration",
    "InboundEvent",
    "MessageRef",
    "Param",
    "ParamType",
    "ParameterError",
    "UserRef",
]
