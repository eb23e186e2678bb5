"""
PollWatch Test Helpers.

Requires Python 3.11+.
"""

import threading
import time
from collections.abc import Callable

# Short cycles keep the polling tests fast
POLL_INTERVAL = 0.05


class EventRecorder:
    """Thread-safe listener collecting (path, is_new_file) notifications."""

    def __init__(self) -> None:
        self._events: list[tuple[str, bool]] = []
        self._lock = threading.Lock()

    def __call__(self, path: str, is_new_file: bool) -> None:
        with self._lock:
            self._events.append((path, is_new_file))

    @property
    def events(self) -> list[tuple[str, bool]]:
        with self._lock:
            return list(self._events)

    @property
    def paths(self) -> set[str]:
        return {path for path, _ in self.events}

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def settle(cycles: int = 6) -> None:
    """Give a polling watcher time to complete a few cycles."""
    time.sleep(POLL_INTERVAL * cycles)
