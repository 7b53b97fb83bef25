from __future__ import annotations

import logging

import discord

from .. import Controller, register_controller
from ...dispatch import Dispatcher, EventKind, InboundEvent, Param
from ...schema import ModalSpec, TextInputSpec, slash_command

logger = logging.getLogger(__name__)

BOOK_MODAL = ModalSpec(
    custom_id="form_modal",
    title="Create Book",
    inputs=(
        TextInputSpec("title", "Book Title", placeholder="Too Like the Lightning"),
        TextInputSpec("author", "Book Author", placeholder="Ada Palmer"),
        TextInputSpec(
            "description",
            "Book Description",
            style=discord.TextStyle.paragraph,
            required=False,
        ),
    ),
)


@register_controller
class Form(Controller):
    """Collect a book through a modal form."""

    def commands(self):
        return [slash_command("form", "Fill out this form please."), BOOK_MODAL]

    def register(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(EventKind.SLASH_COMMAND, self.open_form, identifier="form")
        dispatcher.register(
            EventKind.MODAL_SUBMIT,
            self.submit_form,
            identifier=BOOK_MODAL.custom_id,
            params=[Param("title"), Param("author"), Param("description")],
        )

    async def open_form(self, event: InboundEvent) -> None:
        await event.source.response.send_modal(BOOK_MODAL.build())

    async def submit_form(
        self, event: InboundEvent, title: str, author: str, description: str | None
    ) -> None:
        """Acknowledge the submission, then log the book."""

        await event.source.response.send_message("Thank you for your submission!")
        logger.info("Book title: %s", title)
        logger.info("Book author: %s", author)
        logger.info("Book description: %s", description or "(none)")
