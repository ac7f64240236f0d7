"""One inbound slash-command invocation and its output buffer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..errors import MissingCommand

TRIGGER = "/"


@dataclass
class Command:
    """A parsed invocation.

    Handlers read the request fields and write their reply with
    :meth:`write`.  Calling :meth:`mark_public` redirects the reply to the
    configured webhook instead of the HTTP response.
    """

    name: str
    text: str = ""
    token: str = ""
    user_id: str = ""
    user_name: str = ""
    channel_id: str = ""
    channel_name: str = ""
    _buf: bytearray = field(default_factory=bytearray, init=False, repr=False)
    _public: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> Command:
        raw = form.get("command") or ""
        name = raw[len(TRIGGER):] if raw.startswith(TRIGGER) else raw
        if not name:
            raise MissingCommand()
        return cls(
            name=name,
            text=form.get("text") or "",
            token=form.get("token") or "",
            user_id=form.get("user_id") or "",
            user_name=form.get("user_name") or "",
            channel_id=form.get("channel_id") or "",
            channel_name=form.get("channel_name") or "",
        )

    def write(self, data: bytes | str) -> int:
        if isinstance(data, str):
            data = data.encode()
        self._buf.extend(data)
        return len(data)

    def mark_public(self) -> None:
        self._public = True

    @property
    def public(self) -> bool:
        return self._public

    def snapshot(self) -> bytes:
        return bytes(self._buf)

    def __bytes__(self) -> bytes:
        return self.snapshot()

    def __str__(self) -> str:
        return self._buf.decode(errors="replace")
