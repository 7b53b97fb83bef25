from __future__ import annotations

import logging
from typing import List, Sequence

from discord import app_commands

from .. import Controller, register_controller
from ...dispatch import Dispatcher, EventKind, InboundEvent, MessageRef, Param, ParamType, UserRef
from ...schema import OptionSpec, message_command, slash_command, user_command

logger = logging.getLogger(__name__)

FRUITS: Sequence[str] = ("Apple", "Banana", "Pear")


def filter_choices(candidates: Sequence[str], typed: str) -> List[app_commands.Choice[str]]:
    """Candidates containing ``typed`` (case-sensitive), shown and submitted as-is."""

    return [app_commands.Choice(name=c, value=c) for c in candidates if typed in c]


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens in ``text``."""

    return len(text.split())


@register_controller
class General(Controller):
    """Ping/pong, context-menu and autocomplete demos."""

    def commands(self):
        return [
            slash_command("ping", "Sends a ping to the bot"),
            user_command("Name user"),
            message_command("Count words"),
            slash_command(
                "options",
                "A command with some options",
                OptionSpec("fruit", "Pick a fruit", ParamType.STRING, required=True, autocomplete=True),
                OptionSpec("user", "Pick a user", ParamType.USER, required=True),
            ),
        ]

    def register(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(EventKind.READY, self.on_ready)
        dispatcher.register(EventKind.MESSAGE, self.ping_pong)
        dispatcher.register(EventKind.SLASH_COMMAND, self.ping_slash, identifier="ping")
        dispatcher.register(EventKind.USER_CONTEXT, self.name_user, identifier="Name user")
        dispatcher.register(EventKind.MESSAGE_CONTEXT, self.word_count, identifier="Count words")
        dispatcher.register(
            EventKind.AUTOCOMPLETE,
            self.fruit_autocomplete,
            identifier="options",
            focused_option="fruit",
        )
        dispatcher.register(
            EventKind.SLASH_COMMAND,
            self.options,
            identifier="options",
            params=[Param("fruit"), Param("user", ParamType.USER)],
        )

    async def on_ready(self, event: InboundEvent) -> None:
        user = getattr(event.source, "user", None)
        logger.info("Bot %s has finished loading", getattr(user, "name", "unknown"))

    async def ping_pong(self, event: InboundEvent) -> None:
        if event.content == "ping":
            await event.source.channel.send("pong")

    async def ping_slash(self, event: InboundEvent) -> None:
        await event.source.response.send_message("pong")

    async def name_user(self, event: InboundEvent) -> None:
        target = event.target
        if not isinstance(target, UserRef):
            logger.error("Name user invoked without a resolved target user")
            return
        await event.source.response.send_message(target.display_name)

    async def word_count(self, event: InboundEvent) -> None:
        target = event.target
        if not isinstance(target, MessageRef):
            logger.error("Count words invoked without a resolved target message")
            return
        await event.source.response.send_message(str(count_words(target.content)))

    async def fruit_autocomplete(self, event: InboundEvent) -> None:
        choices = filter_choices(FRUITS, event.focused_value or "")
        await event.source.response.autocomplete(choices)

    async def options(self, event: InboundEvent, fruit: str, user: UserRef) -> None:
        logger.info("Fruit: %s was selected", fruit)
        logger.info("User: %s was selected", user.display_name)
        await event.source.response.send_message(f"{user.display_name} wants {fruit}")
