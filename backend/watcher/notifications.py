"""
PollWatch Notification Sink.

Delivers file change notifications to registered listeners.
Requires Python 3.11+.
"""

import asyncio
import inspect
import threading
from collections.abc import Callable, Iterable
from typing import Any

from utils.logger import LoggerMixin

# listener(path, is_new_file); may be a coroutine function
FileChangeListener = Callable[[str, bool], Any]


class NotificationSink(LoggerMixin):
    """
    Observer-facing event surface of a watcher.

    Listeners are invoked synchronously on the notifying thread. Coroutine
    listeners are scheduled on the configured event loop, or run to
    completion with ``asyncio.run`` when no loop has been set.
    """

    def __init__(self) -> None:
        """Initialize an empty sink."""
        self._listeners: list[FileChangeListener] = []
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    def subscribe(self, listener: FileChangeListener) -> None:
        """Register a listener; registering the same listener twice is a no-op."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: FileChangeListener) -> None:
        """Remove a listener if it is registered."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def set_event_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop for async listeners."""
        self._loop = loop

    @property
    def listener_count(self) -> int:
        """Get number of registered listeners."""
        return len(self._listeners)

    def notify(self, path: str, is_new_file: bool = False) -> None:
        """
        Deliver one notification to every listener.

        A failing listener is logged and skipped.

        Args:
            path: Absolute path that changed
            is_new_file: Whether the path is known to be newly created
        """
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                if inspect.iscoroutinefunction(listener):
                    if self._loop is not None:
                        asyncio.run_coroutine_threadsafe(
                            listener(path, is_new_file),
                            self._loop,
                        )
                    else:
                        asyncio.run(listener(path, is_new_file))
                else:
                    listener(path, is_new_file)
            except Exception as e:
                self.log.error(
                    "file_change_listener_failed",
                    path=path,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                )

    def notify_all(
        self,
        paths: Iterable[str],
        should_continue: Callable[[], bool] = lambda: True,
        is_new_file: bool = False,
    ) -> int:
        """
        Deliver one notification per path.

        Args:
            paths: Changed paths, in delivery order
            should_continue: Checked before each path; a False result ends the burst
            is_new_file: Flag reported with every path

        Returns:
            Number of paths delivered
        """
        delivered = 0
        for path in paths:
            if not should_continue():
                break
            self.notify(path, is_new_file)
            delivered += 1
        return delivered
