"""``.env`` file loader."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


class EnvFile:
    """A ``KEY=VALUE`` file, parsed as a whole on every :meth:`load`.

    Accepts the shell-style ``export KEY=value`` form and strips one pair of
    matching quotes.  A missing file loads as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, str]:
        try:
            text = self.path.read_text()
        except FileNotFoundError:
            return {}
        values: dict[str, str] = {}
        for lineno, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            key, sep, value = line.partition("=")
            key = key.strip()
            if not sep or not key:
                logger.warning("Ignoring %s:%d (expected KEY=VALUE)", self.path, lineno)
                continue
            values[key] = _unquote(value.strip())
        return values
