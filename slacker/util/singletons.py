"""Registry of module-level singletons that tests need to reset."""

from __future__ import annotations

import threading
from collections.abc import Callable

_resetters: list[Callable[[], None]] = []
_lock = threading.Lock()


def register_singleton(reset: Callable[[], None]) -> None:
    """Record *reset* so :func:`reset_all_singletons` can call it later."""
    with _lock:
        if reset not in _resetters:
            _resetters.append(reset)


def reset_all_singletons() -> None:
    with _lock:
        resetters = list(_resetters)
    for reset in resetters:
        reset()
