"""Slash-command HTTP endpoint and health check."""

from __future__ import annotations

import logging

from aiohttp import web

from ..commands import Dispatcher
from .middleware import COMMAND_KEY

logger = logging.getLogger(__name__)


class SlashCommandRoutes:
    """Exposes a :class:`Dispatcher` as ``POST <path>`` plus ``GET /health``."""

    def __init__(self, dispatcher: Dispatcher, path: str = "/") -> None:
        self._dispatcher = dispatcher
        self._path = path

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post(self._path, self._command)
        router.add_get("/health", self._health)

    async def _command(self, req: web.Request) -> web.Response:
        body = await req.read()
        result = await self._dispatcher.handle_request(body)
        if result.command:
            req[COMMAND_KEY] = result.command
        return web.Response(
            status=result.status,
            body=result.body,
            content_type=result.content_type,
        )

    async def _health(self, _req: web.Request) -> web.Response:
        return web.json_response({
            "status": "ok",
            "commands": self._dispatcher.commands(),
            "webhook_configured": bool(self._dispatcher.webhook_url),
        })
