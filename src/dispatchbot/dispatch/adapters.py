"""
Translate ``discord.py`` objects into :class:`InboundEvent` values.

Interactions are read from their raw ``interaction.data`` payload so the
dispatcher, rather than ``discord.app_commands.CommandTree``, decides which
handler runs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Tuple

import discord

from .events import EventKind, InboundEvent, MessageRef, UserRef

logger = logging.getLogger(__name__)

__all__ = ["from_interaction", "from_message", "from_ready"]

_COMMAND_KINDS = {
    discord.AppCommandType.chat_input.value: EventKind.SLASH_COMMAND,
    discord.AppCommandType.user.value: EventKind.USER_CONTEXT,
    discord.AppCommandType.message.value: EventKind.MESSAGE_CONTEXT,
}

# Sub-command and sub-command-group options nest further options.
_NESTED_OPTION_TYPES = (
    discord.AppCommandOptionType.subcommand.value,
    discord.AppCommandOptionType.subcommand_group.value,
)


def from_ready(client: discord.Client) -> InboundEvent:
    return InboundEvent(kind=EventKind.READY, source=client)


def from_message(message: discord.Message) -> InboundEvent:
    return InboundEvent(kind=EventKind.MESSAGE, content=message.content, source=message)


def _flatten_options(options: Iterable[Mapping[str, Any]]) -> Iterable[Mapping[str, Any]]:
    for option in options:
        if option.get("type") in _NESTED_OPTION_TYPES:
            yield from _flatten_options(option.get("options", []))
        else:
            yield option


def _resolve_users(resolved: Mapping[str, Any]) -> Dict[str, UserRef]:
    members = resolved.get("members", {})
    return {
        user_id: UserRef.from_payload(user, members.get(user_id))
        for user_id, user in resolved.get("users", {}).items()
    }


def _command_options(data: Mapping[str, Any]) -> Tuple[Dict[str, Any], str | None, str | None]:
    """Return ``(values, focused_name, focused_value)`` for a command payload."""

    values: Dict[str, Any] = {}
    focused_name = focused_value = None
    for option in _flatten_options(data.get("options", [])):
        values[option["name"]] = option.get("value")
        if option.get("focused"):
            focused_name = option["name"]
            focused_value = option.get("value")
    return values, focused_name, focused_value


def _modal_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for row in data.get("components", []):
        # Action rows carry a list; label components wrap a single child.
        children = row.get("components") or [row.get("component") or {}]
        for child in children:
            custom_id = child.get("custom_id")
            if custom_id is not None:
                values[custom_id] = child.get("value")
    return values


def _context_target(
    kind: EventKind, data: Mapping[str, Any], users: Mapping[str, UserRef]
) -> UserRef | MessageRef | None:
    target_id = data.get("target_id")
    if target_id is None:
        return None

    if kind is EventKind.USER_CONTEXT:
        return users.get(str(target_id))

    message = data.get("resolved", {}).get("messages", {}).get(str(target_id))
    if message is None:
        return None
    author = message.get("author")
    return MessageRef(
        id=int(message["id"]),
        content=message.get("content", ""),
        author=UserRef.from_payload(author) if author else None,
    )


def from_interaction(interaction: discord.Interaction) -> InboundEvent | None:
    """
    Build an event from ``interaction``.

    :returns: ``None`` for interaction types the dispatcher does not route
        (pings, component clicks).
    """

    data: Mapping[str, Any] = interaction.data or {}

    if interaction.type is discord.InteractionType.modal_submit:
        return InboundEvent(
            kind=EventKind.MODAL_SUBMIT,
            identifier=data.get("custom_id"),
            options=_modal_fields(data),
            source=interaction,
        )

    if interaction.type is discord.InteractionType.autocomplete:
        values, focused_name, focused_value = _command_options(data)
        return InboundEvent(
            kind=EventKind.AUTOCOMPLETE,
            identifier=data.get("name"),
            focused_option=focused_name,
            focused_value=focused_value,
            options=values,
            users=_resolve_users(data.get("resolved", {})),
            source=interaction,
        )

    if interaction.type is discord.InteractionType.application_command:
        kind = _COMMAND_KINDS.get(data.get("type", discord.AppCommandType.chat_input.value))
        if kind is None:
            logger.debug("Ignoring application command of type %s", data.get("type"))
            return None
        users = _resolve_users(data.get("resolved", {}))
        values, _, _ = _command_options(data)
        return InboundEvent(
            kind=kind,
            identifier=data.get("name"),
            options=values,
            users=users,
            target=_context_target(kind, data, users),
            source=interaction,
        )

    return None
