"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging

import discord
from aiohttp import web

from dispatchbot import controllers, web as rest
from dispatchbot.config import core, http
from dispatchbot.dispatch import Dispatcher, adapters
from dispatchbot.schema import CommandSchema

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
intents = discord.Intents.default()
intents.message_content = True

_published = False


async def publish_commands(client: discord.Client, schema: CommandSchema) -> bool:
    """
    Overwrite the global application commands with ``schema``.

    Runs at most once per process; publishing from several places would
    overwrite earlier registrations.
    """

    global _published
    if _published:
        logger.warning("Application commands already published; skipping")
        return False

    payload = schema.to_payload()
    await client.http.bulk_upsert_global_commands(client.application_id, payload)
    _published = True
    logger.info("Published %d application command(s)", len(payload))
    return True


class DispatchBot(discord.Client):
    """Discord client that hands every gateway event to a :class:`Dispatcher`."""

    def __init__(self, dispatcher: Dispatcher | None = None) -> None:
        super().__init__(intents=intents)
        self.dispatcher = dispatcher or Dispatcher()
        self._runner: web.AppRunner | None = None

    async def setup_hook(self) -> None:
        """Register handlers, publish commands and start the REST server."""

        schema = controllers.setup(self, self.dispatcher)
        self.dispatcher.freeze(schema)

        try:
            await publish_commands(self, schema)
        except discord.HTTPException:
            logger.exception("Failed to publish application commands")

        if http.ENABLE_HTTP:
            self._runner = await rest.start(self, http.HTTP_HOST, http.HTTP_PORT)

    async def on_ready(self) -> None:
        await self.dispatcher.dispatch(adapters.from_ready(self))

    async def on_message(self, message: discord.Message) -> None:
        await self.dispatcher.dispatch(adapters.from_message(message))

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        event = adapters.from_interaction(interaction)
        if event is None:
            return
        await self.dispatcher.dispatch(event)

    async def close(self) -> None:
        await rest.stop(self._runner)
        self._runner = None
        await super().close()


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    bot = DispatchBot()
    try:
        bot.run(core.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
