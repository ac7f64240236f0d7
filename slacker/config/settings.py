"""Application settings -- reads from environment and ``.env`` file."""

from __future__ import annotations

import os

from ..util.env_file import EnvFile
from ..util.singletons import register_singleton

DEFAULT_BIND = ":3000"
DEFAULT_WEBHOOK_TIMEOUT = 10.0


class ConfigError(ValueError):
    """A setting has a value that cannot be used."""


def parse_bind(value: str) -> tuple[str, int]:
    """Split a ``host:port`` bind address; an empty host means all interfaces."""
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid bind address {value!r} (expected host:port)")
    return host or "0.0.0.0", int(port)


def parse_command_tokens(raw: str) -> dict[str, str]:
    """Parse ``name:token,name:token`` into a mapping.

    A leading ``/`` on the command name is dropped so both ``hello`` and
    ``/hello`` are accepted.
    """
    tokens: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, token = item.partition(":")
        name = name.strip().removeprefix("/")
        if not sep or not name:
            raise ValueError(f"invalid command token {item!r} (expected name:token)")
        tokens[name] = token.strip()
    return tokens


class Settings:

    def __init__(self) -> None:
        self.env = EnvFile(os.getenv("DOTENV_PATH") or ".env")
        self.reload()

    def reload(self) -> None:
        self._values = self.env.load()
        e = self._read

        self.bind: str = e("SLACKER_BIND") or DEFAULT_BIND
        self.path: str = e("SLACKER_PATH") or "/"

        self.webhook_url: str = e("SLACKER_WEBHOOK_URL")
        self._raw_webhook_timeout = e("SLACKER_WEBHOOK_TIMEOUT")
        self._raw_command_tokens = e("SLACKER_COMMAND_TOKENS")

    @property
    def webhook_timeout(self) -> float:
        raw = self._raw_webhook_timeout
        if not raw:
            return DEFAULT_WEBHOOK_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            timeout = 0.0
        if not timeout > 0:
            raise ConfigError(
                f"SLACKER_WEBHOOK_TIMEOUT must be a positive number of seconds, got {raw!r}"
            )
        return timeout

    @property
    def command_tokens(self) -> dict[str, str]:
        raw = self._raw_command_tokens
        if not raw:
            return {}
        try:
            return parse_command_tokens(raw)
        except ValueError as exc:
            raise ConfigError(f"SLACKER_COMMAND_TOKENS: {exc}") from None

    @property
    def host(self) -> str:
        return parse_bind(self.bind)[0]

    @property
    def port(self) -> int:
        return parse_bind(self.bind)[1]

    def _read(self, key: str) -> str:
        return self._values.get(key) or os.getenv(key, "")


cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg)
