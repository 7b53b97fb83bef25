"""aiohttp app factory and lifecycle helpers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import discord
from aiohttp import web

logger = logging.getLogger(__name__)

CLIENT_KEY = web.AppKey("client", object)
TASKS_KEY = web.AppKey("tasks", set)


def default_channel(guild: discord.Guild) -> discord.TextChannel | None:
    """The guild's system channel, else the first text channel the bot may post in."""

    me = guild.me
    candidates = [guild.system_channel] if guild.system_channel else []
    candidates.extend(guild.text_channels)
    for channel in candidates:
        if me is None or channel.permissions_for(me).send_messages:
            return channel
    return None


def _log_send_task(task: asyncio.Task[Any]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Broadcast send failed", exc_info=exc)


async def ping(request: web.Request) -> web.Response:
    """Post "pong" to every guild's default channel without waiting for delivery."""

    client = request.app[CLIENT_KEY]
    tasks = request.app[TASKS_KEY]

    scheduled = 0
    for guild in client.guilds:
        channel = default_channel(guild)
        if channel is None:
            logger.warning("Guild %s has no channel the bot can post in", guild.id)
            continue
        task = asyncio.create_task(channel.send("pong"))
        tasks.add(task)
        task.add_done_callback(tasks.discard)
        task.add_done_callback(_log_send_task)
        scheduled += 1

    logger.info("REST ping broadcast to %d guild(s)", scheduled)
    return web.json_response({"guilds": scheduled})


def create_app(client: discord.Client) -> web.Application:
    app = web.Application()
    app[CLIENT_KEY] = client
    app[TASKS_KEY] = set()
    app.router.add_get("/ping", ping)
    return app


async def start(client: discord.Client, host: str, port: int) -> web.AppRunner:
    """Serve :func:`create_app` on ``host:port`` inside the running loop."""

    runner = web.AppRunner(create_app(client))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("REST server listening on http://%s:%d", host, port)
    return runner


async def stop(runner: web.AppRunner | None) -> None:
    if runner is not None:
        await runner.cleanup()
