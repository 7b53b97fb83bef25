"""REST surface that forwards into the bot client."""

from .app import create_app, start, stop

__all__ = ["create_app", "start", "stop"]
