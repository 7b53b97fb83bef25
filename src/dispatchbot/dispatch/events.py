"""
Inbound event model.

Every gateway event the bot cares about is normalised into an
:class:`InboundEvent` before it reaches the dispatcher. The original library
object is kept on ``source`` so handlers can reply through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

__all__ = [
    "EventKind",
    "InboundEvent",
    "MessageRef",
    "UserRef",
]


class EventKind(str, Enum):
    """Kinds of events a handler can be mapped to."""

    READY = "ready"
    MESSAGE = "message"
    SLASH_COMMAND = "slash_command"
    USER_CONTEXT = "user_context"
    MESSAGE_CONTEXT = "message_context"
    AUTOCOMPLETE = "autocomplete"
    MODAL_SUBMIT = "modal_submit"

    @property
    def requires_identifier(self) -> bool:
        return self not in (EventKind.READY, EventKind.MESSAGE)


@dataclass(frozen=True, slots=True)
class UserRef:
    """Lightweight reference to a Discord user resolved from a payload."""

    id: int
    name: str
    global_name: str | None = None
    nick: str | None = None

    @property
    def display_name(self) -> str:
        """Guild nickname, then global name, then account name."""

        return self.nick or self.global_name or self.name

    @classmethod
    def from_payload(
        cls, user: Mapping[str, Any], member: Mapping[str, Any] | None = None
    ) -> "UserRef":
        return cls(
            id=int(user["id"]),
            name=str(user.get("username", "")),
            global_name=user.get("global_name"),
            nick=(member or {}).get("nick"),
        )


@dataclass(frozen=True, slots=True)
class MessageRef:
    """Target of a message context-menu command."""

    id: int
    content: str
    author: UserRef | None = None


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class InboundEvent:
    """
    One normalised event.

    :param kind: Event kind used for routing.
    :param identifier: Command name or modal id; ``None`` for ready/message.
    :param focused_option: Option currently being typed (autocomplete only).
    :param focused_value: Partial text of the focused option.
    :param options: Raw option or modal field values keyed by name.
    :param users: User references resolved by the platform, keyed by id.
    :param target: Context-menu target (:class:`UserRef` or :class:`MessageRef`).
    :param content: Raw message text (message events only).
    :param source: The originating ``discord.py`` object.
    """

    kind: EventKind
    identifier: str | None = None
    focused_option: str | None = None
    focused_value: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)
    users: Mapping[str, UserRef] = field(default_factory=dict)
    target: UserRef | MessageRef | None = None
    content: str | None = None
    source: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _frozen(self.options))
        object.__setattr__(self, "users", _frozen(self.users))

    @property
    def route_key(self) -> tuple[EventKind, str | None, str | None]:
        """Registry key this event is looked up under."""

        if not self.kind.requires_identifier:
            return (self.kind, None, None)
        focused = self.focused_option if self.kind is EventKind.AUTOCOMPLETE else None
        return (self.kind, self.identifier, focused)
