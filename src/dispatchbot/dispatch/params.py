"""Typed parameter extraction from event option payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import DispatchConfigError, ParameterError
from .events import InboundEvent, UserRef

__all__ = ["Param", "ParamType"]


class ParamType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    USER = "user"


def _as_string(event: InboundEvent, name: str, raw: Any) -> str:
    if not isinstance(raw, str):
        raise ParameterError(f"Option '{name}' is not a string: {raw!r}")
    return raw


def _as_integer(event: InboundEvent, name: str, raw: Any) -> int:
    # bool is an int subclass and int() truncates fractional floats
    if isinstance(raw, bool) or isinstance(raw, float) and not raw.is_integer():
        raise ParameterError(f"Option '{name}' is not an integer: {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"Option '{name}' is not an integer: {raw!r}") from exc


def _as_boolean(event: InboundEvent, name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    raise ParameterError(f"Option '{name}' is not a boolean: {raw!r}")


def _as_user(event: InboundEvent, name: str, raw: Any) -> UserRef:
    if isinstance(raw, UserRef):
        return raw
    user = event.users.get(str(raw))
    if user is None:
        raise ParameterError(f"Option '{name}' references unresolved user {raw!r}")
    return user


_CONVERTERS = {
    ParamType.STRING: _as_string,
    ParamType.INTEGER: _as_integer,
    ParamType.BOOLEAN: _as_boolean,
    ParamType.USER: _as_user,
}


@dataclass(frozen=True, slots=True)
class Param:
    """
    Declares one handler argument read from the event's options by name.

    ``required=None`` defers to the command schema when the dispatcher is
    frozen.
    """

    name: str
    type: ParamType = ParamType.STRING
    required: bool | None = None

    def __post_init__(self) -> None:
        try:
            param_type = ParamType(self.type)
        except ValueError:
            raise DispatchConfigError(f"Unsupported parameter type: {self.type!r}") from None
        object.__setattr__(self, "type", param_type)

    def extract(self, event: InboundEvent) -> Any:
        """Return the typed value, ``None`` for an absent optional option."""

        raw = event.options.get(self.name)
        if raw is None:
            if self.required is False:
                return None
            raise ParameterError(
                f"Required option '{self.name}' missing from {event.kind.value} "
                f"'{event.identifier}'"
            )
        return _CONVERTERS[self.type](event, self.name, raw)
