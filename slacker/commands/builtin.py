"""Demo commands registered by the ``slacker`` entry point."""

from __future__ import annotations

from .command import Command
from ..errors import HandlerError


def hello(cmd: Command) -> None:
    cmd.write(f"Hello {cmd.text or 'World'}")


def boom(cmd: Command) -> None:
    raise HandlerError("something exploded")


async def deploy(cmd: Command) -> None:
    cmd.write("Deploying!")
    cmd.mark_public()


BUILTIN_COMMANDS = {
    "hello": hello,
    "boom": boom,
    "deploy": deploy,
}
