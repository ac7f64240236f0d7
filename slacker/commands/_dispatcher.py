"""Slash-command dispatcher.

Owns the command registry, authenticates each request against the
credential registered for its command, runs the handler and delivers its
output either in the HTTP response or, for public commands, through the
configured webhook.
"""

from __future__ import annotations

import hmac
import inspect
import logging
import threading
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Union
from urllib.parse import parse_qsl

from ..errors import (
    HandlerError,
    HandlerFailure,
    MalformedRequest,
    SlashCommandError,
    UnknownCommand,
    Unauthorized,
    WebhookNotConfigured,
)
from ..services.webhook import WebhookClient
from .command import Command

logger = logging.getLogger(__name__)

HandlerFn = Callable[[Command], Union[Awaitable[None], None]]
RawForm = Union[bytes, str, Mapping[str, str]]


@dataclass(frozen=True)
class CommandResponse:
    status: int
    body: bytes = b""
    content_type: str = "text/plain"
    command: str = field(default="", compare=False)

    @classmethod
    def from_error(cls, err: SlashCommandError) -> CommandResponse:
        return cls(status=err.status, body=err.message.encode())


def parse_form(raw: RawForm) -> dict[str, str]:
    """Decode an ``application/x-www-form-urlencoded`` body leniently.

    Mappings pass through (first value wins for multi-value mappings such as
    aiohttp's ``MultiDict``).  Empty pairs are skipped and a bare ``name``
    reads as an empty value.  Bodies that are not valid UTF-8, raw or
    percent-escaped, raise :class:`MalformedRequest`.
    """
    if isinstance(raw, Mapping):
        form: dict[str, str] = {}
        for key in raw:
            form.setdefault(key, raw[key])
        return form
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        pairs = parse_qsl(raw, keep_blank_values=True, errors="strict")
    except ValueError as exc:
        raise MalformedRequest(str(exc)) from exc
    form = {}
    for key, value in pairs:
        form.setdefault(key, value)
    return form


class Dispatcher:
    """Routes slash commands to registered handlers.

    The two registry maps are only touched while holding ``_lock``; the lock
    is never held while a handler runs or while the webhook is called.
    """

    def __init__(self, webhook_url: str = "", *, webhook_timeout: float = 10.0) -> None:
        self._handlers: dict[str, HandlerFn] = {}
        self._tokens: dict[str, str] = {}
        self._lock = threading.Lock()
        self.webhook_url = webhook_url
        self.webhook_timeout = webhook_timeout

    # -- registry -----------------------------------------------------------

    def register(self, name: str, token: str, handler: HandlerFn) -> None:
        """Register *handler* for command *name*, replacing any previous entry."""
        with self._lock:
            replaced = name in self._handlers
            self._handlers[name] = handler
            self._tokens[name] = token
        logger.debug("%s command %r", "Replaced" if replaced else "Registered", name)

    def command(self, name: str, token: str) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator form of :meth:`register`."""

        def decorator(fn: HandlerFn) -> HandlerFn:
            self.register(name, token, fn)
            return fn

        return decorator

    def valid_token(self, name: str, token: str) -> bool:
        """Return ``True`` only if *name* is registered with exactly *token*."""
        with self._lock:
            expected = self._tokens.get(name)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode(), token.encode())

    def has_command(self, name: str) -> bool:
        with self._lock:
            return name in self._handlers

    def commands(self) -> list[str]:
        with self._lock:
            return sorted(self._handlers)

    def _lookup(self, name: str) -> HandlerFn | None:
        with self._lock:
            return self._handlers.get(name)

    # -- request handling ---------------------------------------------------

    async def handle_request(self, raw_form: RawForm) -> CommandResponse:
        """Process one slash-command request and return the response to send."""
        cmd: Command | None = None
        try:
            cmd = Command.from_form(parse_form(raw_form))
            return replace(await self._dispatch(cmd), command=cmd.name)
        except SlashCommandError as err:
            self._log_failure(err, cmd)
            result = CommandResponse.from_error(err)
            return replace(result, command=cmd.name) if cmd else result

    async def _dispatch(self, cmd: Command) -> CommandResponse:
        handler = self._lookup(cmd.name)
        if handler is None:
            raise UnknownCommand(cmd.name)

        if not self.valid_token(cmd.name, cmd.token):
            raise Unauthorized(cmd.name, cmd.token)

        logger.info(
            "Received %s %r from %s in %s",
            cmd.name, cmd.text, cmd.user_name, cmd.channel_name,
        )

        await self._invoke(handler, cmd)
        output = cmd.snapshot()

        if not cmd.public:
            return CommandResponse(status=200, body=output)

        if not self.webhook_url:
            raise WebhookNotConfigured()

        client = WebhookClient(self.webhook_url, timeout=self.webhook_timeout)
        await client.post_message(
            output.decode(errors="replace"), "#" + cmd.channel_name,
        )
        logger.info("Posted %s response publicly to #%s", cmd.name, cmd.channel_name)
        return CommandResponse(status=200)

    @staticmethod
    async def _invoke(handler: HandlerFn, cmd: Command) -> None:
        try:
            result = handler(cmd)
            if inspect.isawaitable(result):
                await result
        except HandlerError as exc:
            raise HandlerFailure(str(exc)) from exc
        except Exception as exc:
            logger.exception("Handler for %r raised", cmd.name)
            raise HandlerFailure(str(exc) or type(exc).__name__) from exc

    @staticmethod
    def _log_failure(err: SlashCommandError, cmd: Command | None) -> None:
        if cmd is None:
            logger.warning("Rejected request: %s", getattr(err, "detail", "") or err.message)
            return
        if isinstance(err, Unauthorized):
            logger.warning(
                "Invalid token %r for command %r (user=%s, channel=%s)",
                cmd.token, cmd.name, cmd.user_name, cmd.channel_name,
            )
            return
        logger.log(
            logging.WARNING if err.status < 500 else logging.ERROR,
            "Command %r failed with %s: %s (user=%s, channel=%s)",
            cmd.name, type(err).__name__, err.message, cmd.user_name, cmd.channel_name,
        )
