"""aiohttp transport for the dispatcher."""

from .app import build_dispatcher, create_app, main
from .middleware import CommandAccessLogger
from .routes import SlashCommandRoutes

__all__ = [
    "CommandAccessLogger",
    "SlashCommandRoutes",
    "build_dispatcher",
    "create_app",
    "main",
]
