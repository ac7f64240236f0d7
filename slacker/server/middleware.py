"""HTTP access logging."""

from __future__ import annotations

import logging

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

# Request key under which the command route records the dispatched command.
COMMAND_KEY = "slash_command"

_QUIET_PATHS = frozenset({"/health"})


class CommandAccessLogger(AbstractAccessLogger):
    """One line per request, naming the slash command when there was one.

    Health polling is logged at DEBUG and server-side failures at WARNING.
    """

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        status = response.status
        if request.path in _QUIET_PATHS:
            level = logging.DEBUG
        elif status >= 500:
            level = logging.WARNING
        else:
            level = logging.INFO

        command = request.get(COMMAND_KEY)
        if command:
            self.logger.log(
                level, "/%s from %s -> %d (%.3fs)", command, request.remote, status, time,
            )
        else:
            self.logger.log(
                level, "%s %s %s -> %d (%.3fs)",
                request.remote, request.method, request.path, status, time,
            )
