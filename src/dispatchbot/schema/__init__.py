"""
Declarative command and modal schema.

Controllers describe the application commands and modal forms they own with
the dataclasses below. The bot aggregates every controller's schema into one
:class:`CommandSchema`, which is

* serialised with :meth:`CommandSchema.to_payload` and published to Discord
  in a single bulk upsert, and
* handed to :meth:`Dispatcher.freeze` so handler registrations can be
  checked against the options that actually exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

import discord

from ..dispatch.errors import DispatchConfigError
from ..dispatch.events import EventKind
from ..dispatch.params import ParamType

__all__ = [
    "CommandSchema",
    "CommandSpec",
    "FieldSpec",
    "ModalSpec",
    "OptionSpec",
    "TextInputSpec",
    "message_command",
    "slash_command",
    "user_command",
]

_OPTION_TYPES = {
    ParamType.STRING: discord.AppCommandOptionType.string,
    ParamType.INTEGER: discord.AppCommandOptionType.integer,
    ParamType.BOOLEAN: discord.AppCommandOptionType.boolean,
    ParamType.USER: discord.AppCommandOptionType.user,
}

_COMMAND_KINDS = {
    discord.AppCommandType.chat_input: EventKind.SLASH_COMMAND,
    discord.AppCommandType.user: EventKind.USER_CONTEXT,
    discord.AppCommandType.message: EventKind.MESSAGE_CONTEXT,
}


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One slash-command option."""

    name: str
    description: str
    type: ParamType = ParamType.STRING
    required: bool = False
    autocomplete: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": _OPTION_TYPES[self.type].value,
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }
        if self.autocomplete:
            payload["autocomplete"] = True
        return payload


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A slash command or a user/message context-menu command."""

    name: str
    type: discord.AppCommandType = discord.AppCommandType.chat_input
    description: str = ""
    options: Tuple[OptionSpec, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        """Return this command formatted for the Discord application-command API."""

        payload: Dict[str, Any] = {"name": self.name, "type": self.type.value}
        if self.type is discord.AppCommandType.chat_input:
            payload["description"] = self.description
            payload["options"] = [opt.to_payload() for opt in self.options]
        return payload


def slash_command(name: str, description: str, *options: OptionSpec) -> CommandSpec:
    return CommandSpec(name, discord.AppCommandType.chat_input, description, tuple(options))


def user_command(name: str) -> CommandSpec:
    return CommandSpec(name, discord.AppCommandType.user)


def message_command(name: str) -> CommandSpec:
    return CommandSpec(name, discord.AppCommandType.message)


@dataclass(frozen=True, slots=True)
class TextInputSpec:
    """One text input row of a modal."""

    custom_id: str
    label: str
    style: discord.TextStyle = discord.TextStyle.short
    placeholder: str | None = None
    required: bool = True


@dataclass(frozen=True, slots=True)
class ModalSpec:
    """A modal form; its submission is routed by ``custom_id``."""

    custom_id: str
    title: str
    inputs: Tuple[TextInputSpec, ...] = ()
    timeout: float | None = 600

    def build(self) -> discord.ui.Modal:
        """Instantiate the ``discord.ui.Modal`` to send in an interaction response."""

        modal = discord.ui.Modal(title=self.title, custom_id=self.custom_id, timeout=self.timeout)
        for spec in self.inputs:
            modal.add_item(
                discord.ui.TextInput(
                    label=spec.label,
                    custom_id=spec.custom_id,
                    style=spec.style,
                    placeholder=spec.placeholder,
                    required=spec.required,
                )
            )
        return modal


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Schema view of one option or modal input, as seen by the dispatcher."""

    name: str
    type: ParamType
    required: bool
    autocomplete: bool = False


@dataclass(slots=True)
class CommandSchema:
    """Every command and modal the bot exposes."""

    commands: List[CommandSpec] = field(default_factory=list)
    modals: List[ModalSpec] = field(default_factory=list)

    @classmethod
    def aggregate(cls, items: Iterable[CommandSpec | ModalSpec]) -> "CommandSchema":
        """
        Build one schema from the definitions of every controller.

        :raises DispatchConfigError: Two commands of the same type (or two
            modals) share a name.
        """

        schema = cls()
        seen: set[tuple[Any, str]] = set()
        for item in items:
            if isinstance(item, ModalSpec):
                key = ("modal", item.custom_id)
                target = schema.modals
            elif isinstance(item, CommandSpec):
                key = (item.type, item.name)
                target = schema.commands
            else:
                raise DispatchConfigError(f"Unsupported schema item: {item!r}")
            if key in seen:
                raise DispatchConfigError(f"Duplicate definition for '{key[1]}'")
            seen.add(key)
            target.append(item)
        return schema

    def to_payload(self) -> List[Dict[str, Any]]:
        return [cmd.to_payload() for cmd in self.commands]

    def fields_for(self, kind: EventKind, identifier: str) -> Dict[str, FieldSpec] | None:
        """
        Return the fields available to handlers of ``kind``/``identifier``.

        ``None`` means nothing with that identifier is declared for the kind.
        """

        if kind is EventKind.MODAL_SUBMIT:
            for modal in self.modals:
                if modal.custom_id == identifier:
                    return {
                        spec.custom_id: FieldSpec(spec.custom_id, ParamType.STRING, spec.required)
                        for spec in modal.inputs
                    }
            return None

        wanted = EventKind.SLASH_COMMAND if kind is EventKind.AUTOCOMPLETE else kind
        for cmd in self.commands:
            if cmd.name == identifier and _COMMAND_KINDS.get(cmd.type) is wanted:
                return {
                    opt.name: FieldSpec(opt.name, opt.type, opt.required, opt.autocomplete)
                    for opt in cmd.options
                }
        return None
