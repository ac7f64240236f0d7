"""HTTP server -- app factory and entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping, Sequence

from aiohttp import web

from .. import __version__
from ..commands import Dispatcher
from ..commands.builtin import BUILTIN_COMMANDS
from ..config import settings
from ..config.settings import Settings, parse_bind
from .middleware import CommandAccessLogger
from .routes import SlashCommandRoutes

logger = logging.getLogger(__name__)


def create_app(dispatcher: Dispatcher, path: str = "/") -> web.Application:
    app = web.Application()
    SlashCommandRoutes(dispatcher, path).register(app.router)
    return app


def build_dispatcher(
    webhook_url: str,
    tokens: Mapping[str, str],
    *,
    webhook_timeout: float = 10.0,
) -> Dispatcher:
    """Create a dispatcher with the bundled commands that have a token."""
    dispatcher = Dispatcher(webhook_url, webhook_timeout=webhook_timeout)
    for name, token in tokens.items():
        handler = BUILTIN_COMMANDS.get(name)
        if handler is None:
            logger.warning("Ignoring token for unknown command %r", name)
            continue
        dispatcher.register(name, token, handler)
    skipped = sorted(set(BUILTIN_COMMANDS) - set(tokens))
    if skipped:
        logger.info("Commands without a token are disabled: %s", ", ".join(skipped))
    return dispatcher


def _token_arg(value: str) -> tuple[str, str]:
    name, sep, token = value.partition("=")
    name = name.removeprefix("/")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=TOKEN, got {value!r}")
    return name, token


def _bind_arg(value: str) -> str:
    try:
        parse_bind(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slacker",
        description="Serve slash commands for a chat platform.",
    )
    parser.add_argument(
        "--bind",
        type=_bind_arg,
        default=None,
        help="Bind address as host:port (default: SLACKER_BIND or :3000).",
    )
    parser.add_argument(
        "-t", "--token",
        type=_token_arg,
        action="append",
        default=[],
        metavar="NAME=TOKEN",
        help="Enable command NAME with credential TOKEN (repeatable).",
    )
    parser.add_argument(
        "--webhook",
        default=None,
        help="Incoming-webhook URL used for public responses.",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )

    cfg: Settings = settings.cfg
    try:
        host, port = parse_bind(args.bind or cfg.bind)
        webhook_timeout = cfg.webhook_timeout
        tokens = dict(cfg.command_tokens)
    except ValueError as exc:
        raise SystemExit(f"slacker: configuration error: {exc}") from None
    webhook = cfg.webhook_url if args.webhook is None else args.webhook
    tokens.update(dict(args.token))

    logger.info("Starting slacker %s on %s:%d", __version__, host, port)
    if not webhook:
        logger.info("No webhook configured -- public responses are disabled")

    dispatcher = build_dispatcher(webhook, tokens, webhook_timeout=webhook_timeout)
    web.run_app(
        create_app(dispatcher, cfg.path),
        host=host,
        port=port,
        access_log_class=CommandAccessLogger,
    )


if __name__ == "__main__":
    main()
