"""Shared pytest fixtures for slacker tests."""

from __future__ import annotations

from pathlib import Path

import pytest

_SETTINGS_ENV = (
    "SLACKER_BIND",
    "SLACKER_PATH",
    "SLACKER_WEBHOOK_URL",
    "SLACKER_WEBHOOK_TIMEOUT",
    "SLACKER_COMMAND_TOKENS",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in _SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    return dotenv


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from slacker.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def dotenv(_isolate_env: Path) -> Path:
    return _isolate_env
