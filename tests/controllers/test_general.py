import asyncio
import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from discord import app_commands

from dispatchbot import controllers
from dispatchbot.controllers.handlers import general
from dispatchbot.dispatch import Dispatcher, EventKind, InboundEvent, MessageRef, UserRef


@pytest.fixture()
def dispatcher():
    dispatcher = Dispatcher()
    dispatcher.freeze(controllers.setup(SimpleNamespace(), dispatcher, [general.General]))
    return dispatcher


def _interaction():
    return SimpleNamespace(
        response=SimpleNamespace(send_message=AsyncMock(), autocomplete=AsyncMock())
    )


@pytest.mark.parametrize("content, replies", [("ping", ["pong"]), ("pingx", []), ("Ping", [])])
def test_raw_message_ping(dispatcher, content, replies):
    message = SimpleNamespace(content=content, channel=SimpleNamespace(send=AsyncMock()))

    asyncio.run(dispatcher.dispatch(InboundEvent(EventKind.MESSAGE, content=content, source=message)))

    assert [c.args[0] for c in message.channel.send.await_args_list] == replies


def test_ready_logs_bot_name(dispatcher, caplog):
    client = SimpleNamespace(user=SimpleNamespace(name="demo-bot"))

    with caplog.at_level(logging.INFO):
        asyncio.run(dispatcher.dispatch(InboundEvent(EventKind.READY, source=client)))

    assert "Bot demo-bot has finished loading" in caplog.text


def test_ping_slash_replies_pong(dispatcher):
    interaction = _interaction()

    asyncio.run(
        dispatcher.dispatch(InboundEvent(EventKind.SLASH_COMMAND, identifier="ping", source=interaction))
    )

    interaction.response.send_message.assert_awaited_once_with("pong")


def test_name_user_replies_with_display_name(dispatcher):
    interaction = _interaction()
    target = UserRef(1, "acct", "Global", "Nick")

    asyncio.run(
        dispatcher.dispatch(
            InboundEvent(EventKind.USER_CONTEXT, identifier="Name user", target=target, source=interaction)
        )
    )

    interaction.response.send_message.assert_awaited_once_with("Nick")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Too Like the Lightning", 4),
        ("Too Like the Lightning\n", 4),
        ("  spaced\tout \n words ", 3),
        ("", 0),
    ],
)
def test_count_words(text, expected):
    assert general.count_words(text) == expected


def test_count_words_context_command(dispatcher):
    interaction = _interaction()
    target = MessageRef(id=9, content="Too Like the Lightning")

    asyncio.run(
        dispatcher.dispatch(
            InboundEvent(EventKind.MESSAGE_CONTEXT, identifier="Count words", target=target, source=interaction)
        )
    )

    interaction.response.send_message.assert_awaited_once_with("4")


def test_filter_choices_is_case_sensitive_substring():
    assert general.filter_choices(general.FRUITS, "an") == [
        app_commands.Choice(name="Banana", value="Banana")
    ]
    assert general.filter_choices(general.FRUITS, "a") == [
        app_commands.Choice(name="Banana", value="Banana"),
        app_commands.Choice(name="Pear", value="Pear"),
    ]
    assert general.filter_choices(general.FRUITS, "A") == [
        app_commands.Choice(name="Apple", value="Apple")
    ]
    assert len(general.filter_choices(general.FRUITS, "")) == 3


def test_fruit_autocomplete_replies_with_choices(dispatcher):
    interaction = _interaction()

    asyncio.run(
        dispatcher.dispatch(
            InboundEvent(
                EventKind.AUTOCOMPLETE,
                identifier="options",
                focused_option="fruit",
                focused_value="an",
                source=interaction,
            )
        )
    )

    interaction.response.autocomplete.assert_awaited_once_with(
        [app_commands.Choice(name="Banana", value="Banana")]
    )


def test_options_slash_uses_extracted_params(dispatcher):
    interaction = _interaction()

    asyncio.run(
        dispatcher.dispatch(
            InboundEvent(
                EventKind.SLASH_COMMAND,
                identifier="options",
                options={"fruit": "Pear", "user": "42"},
                users={"42": UserRef(42, "ada", "Ada")},
                source=interaction,
            )
        )
    )

    interaction.response.send_message.assert_awaited_once_with("Ada wants Pear")


def test_options_slash_without_user_is_skipped(dispatcher):
    interaction = _interaction()

    invoked = asyncio.run(
        dispatcher.dispatch(
            InboundEvent(
                EventKind.SLASH_COMMAND,
                identifier="options",
                options={"fruit": "Pear"},
                source=interaction,
            )
        )
    )

    assert invoked == 0
    interaction.response.send_message.assert_not_awaited()


def test_count_words_without_target_logs_and_does_not_reply(dispatcher, caplog):
    interaction = _interaction()

    with caplog.at_level(logging.ERROR):
        asyncio.run(
            dispatcher.dispatch(
                InboundEvent(EventKind.MESSAGE_CONTEXT, identifier="Count words", source=interaction)
            )
        )

    interaction.response.send_message.assert_not_awaited()
    assert "without a resolved target message" in caplog.text
